from typing import List, Optional, Tuple
from sqlalchemy import func, desc
from sqlalchemy.orm import Session
from core.sa.models import Review

class ReviewRepository:
    """Repository for managing Review entities."""

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, review_id: int) -> Optional[Review]:
        """Get a review by its ID"""
        return self.session.get(Review, review_id)

    def get_by_user_and_book(self, user_id: int, book_id: int) -> Optional[Review]:
        return (
            self.session.query(Review)
            .filter(Review.user_id == user_id, Review.book_id == book_id)
            .first()
        )

    def exists(self, user_id: int, book_id: int) -> bool:
        return (
            self.session.query(Review.id)
            .filter(Review.user_id == user_id, Review.book_id == book_id)
            .first()
        ) is not None

    def add_review(self, review: Review) -> Review:
        self.session.add(review)
        self.session.flush()
        return review

    def save(self, review: Review) -> Review:
        self.session.flush()
        return review

    def delete_review(self, review: Review) -> None:
        self.session.delete(review)
        self.session.flush()

    def get_for_book(self, book_id: int, limit: int = 20, offset: int = 0) -> List[Review]:
        """Get reviews for a book, newest first"""
        return (
            self.session.query(Review)
            .filter(Review.book_id == book_id)
            .order_by(desc(Review.created_at), desc(Review.id))
            .offset(offset)
            .limit(limit)
            .all()
        )

    def count_for_book(self, book_id: int) -> int:
        return self.session.query(Review).filter(Review.book_id == book_id).count()

    def get_by_user(self, user_id: int, limit: int = 20, offset: int = 0) -> List[Review]:
        """Get reviews written by a user, newest first"""
        return (
            self.session.query(Review)
            .filter(Review.user_id == user_id)
            .order_by(desc(Review.created_at), desc(Review.id))
            .offset(offset)
            .limit(limit)
            .all()
        )

    def count_by_user(self, user_id: int) -> int:
        return self.session.query(Review).filter(Review.user_id == user_id).count()

    def rating_stats(self, book_id: int) -> Tuple[float, int]:
        """Compute the mean rating and review count for a book.

        Args:
            book_id: The ID of the book

        Returns:
            Tuple of (average_rating, ratings_count); (0.0, 0) when the book
            has no reviews
        """
        average, count = (
            self.session.query(func.avg(Review.rating), func.count(Review.id))
            .filter(Review.book_id == book_id)
            .one()
        )
        if not count:
            return 0.0, 0
        return float(average), int(count)
