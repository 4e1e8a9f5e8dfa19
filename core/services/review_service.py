import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from core.engine.progress import validate_rating
from core.engine.ratings import RatingAggregator
from core.errors import NotFound, Conflict, Forbidden, InvalidArgument
from core.sa.models import Review
from core.sa.repositories.book import BookRepository
from core.sa.repositories.review import ReviewRepository
from core.sa.repositories.user import UserRepository
from .base import BaseService, transactional

logger = logging.getLogger(__name__)

MIN_CONTENT_LENGTH = 10
MAX_CONTENT_LENGTH = 5000


def validate_review(content: Optional[str], rating) -> str:
    """Check review input before anything is written.

    Returns:
        The content with surrounding whitespace removed

    Raises:
        InvalidArgument: If the rating is outside 1..5 or the content is
                         blank or not 10 to 5000 characters long
    """
    validate_rating(rating)
    if content is None or not content.strip():
        raise InvalidArgument("Review content cannot be empty")
    content = content.strip()
    if len(content) < MIN_CONTENT_LENGTH or len(content) > MAX_CONTENT_LENGTH:
        raise InvalidArgument("Review must be between 10 and 5000 characters")
    return content


class ReviewService(BaseService):
    """Review lifecycle. Every change recomputes the book's rating aggregate
    before the transaction commits."""

    def __init__(self, session: Session):
        super().__init__(session)
        self.reviews = ReviewRepository(session)
        self.books = BookRepository(session)
        self.users = UserRepository(session)
        self.aggregator = RatingAggregator(session)

    def _require_owned_review(self, review_id: int, user_id: int, action: str) -> Review:
        review = self.reviews.get_by_id(review_id)
        if review is None:
            raise NotFound("Review not found")
        if review.user_id != user_id:
            raise Forbidden(f"You can only {action} your own reviews")
        return review

    @transactional
    def create_review(self, user_id: int, book_id: int, content: str, rating: int) -> Review:
        """Create a review and refresh the book's aggregate.

        Raises:
            InvalidArgument: If the content or rating is invalid
            NotFound: If the user or book does not exist
            Conflict: If the user already reviewed this book
        """
        content = validate_review(content, rating)

        if self.users.get_by_id(user_id) is None:
            raise NotFound("User not found")
        # Lock the book first so concurrent reviews of it serialize
        if self.books.get_for_update(book_id) is None:
            raise NotFound("Book not found")
        if self.reviews.exists(user_id, book_id):
            raise Conflict("You have already reviewed this book")

        review = self.reviews.add_review(
            Review(user_id=user_id, book_id=book_id, content=content, rating=rating)
        )
        self.aggregator.recompute(book_id)
        logger.info("User %s reviewed book %s with rating %s", user_id, book_id, rating)
        return review

    @transactional
    def update_review(self, review_id: int, user_id: int, content: str, rating: int) -> Review:
        """Replace a review's content and rating.

        Raises:
            InvalidArgument: If the content or rating is invalid
            NotFound: If the review does not exist
            Forbidden: If the caller does not own the review
        """
        content = validate_review(content, rating)
        review = self._require_owned_review(review_id, user_id, "edit")
        self.books.get_for_update(review.book_id)

        review.content = content
        review.rating = rating
        self.reviews.save(review)
        self.aggregator.recompute(review.book_id)
        return review

    @transactional
    def delete_review(self, review_id: int, user_id: int) -> None:
        """Delete a review and recompute the book's aggregate without it.

        Raises:
            NotFound: If the review does not exist
            Forbidden: If the caller does not own the review
        """
        review = self._require_owned_review(review_id, user_id, "delete")
        book_id = review.book_id
        self.books.get_for_update(book_id)
        self.reviews.delete_review(review)
        self.aggregator.recompute(book_id)
        logger.info("User %s deleted review %s of book %s", user_id, review_id, book_id)

    def get_review(self, review_id: int) -> Review:
        review = self.reviews.get_by_id(review_id)
        if review is None:
            raise NotFound("Review not found")
        return review

    def get_reviews_for_book(self, book_id: int, limit: int = 20, offset: int = 0) -> List[Review]:
        return self.reviews.get_for_book(book_id, limit=limit, offset=offset)

    def count_reviews_for_book(self, book_id: int) -> int:
        return self.reviews.count_for_book(book_id)

    def get_reviews_by_user(self, user_id: int, limit: int = 20, offset: int = 0) -> List[Review]:
        return self.reviews.get_by_user(user_id, limit=limit, offset=offset)

    def count_reviews_by_user(self, user_id: int) -> int:
        return self.reviews.count_by_user(user_id)

    def get_user_review_for_book(self, user_id: int, book_id: int) -> Review:
        review = self.reviews.get_by_user_and_book(user_id, book_id)
        if review is None:
            raise NotFound("Review not found")
        return review
