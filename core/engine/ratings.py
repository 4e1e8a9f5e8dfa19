"""Book rating aggregate maintenance.

A book's average_rating and ratings_count always equal the mean and count
of its reviews. They are recomputed inside the transaction of every review
change, after taking a row lock on the book, so concurrent reviewers of the
same book serialize here and the last committed transaction wins.
"""
import logging
from typing import Tuple

from sqlalchemy.orm import Session

from core.errors import NotFound
from core.sa.models import Book
from core.sa.repositories.book import BookRepository
from core.sa.repositories.review import ReviewRepository

logger = logging.getLogger(__name__)


class RatingAggregator:
    def __init__(self, session: Session):
        self.session = session
        self.books = BookRepository(session)
        self.reviews = ReviewRepository(session)

    def recompute(self, book_id: int) -> Tuple[float, int]:
        """Recompute and store a book's rating aggregate.

        Must be called in the same transaction as the review change that
        triggered it; the caller commits or rolls back both together.

        Args:
            book_id: The ID of the book whose reviews changed

        Returns:
            Tuple of (average_rating, ratings_count)

        Raises:
            NotFound: If the book does not exist
        """
        book = self.books.get_for_update(book_id)
        if book is None:
            raise NotFound(f"Book not found with id: {book_id}")

        average, count = self.reviews.rating_stats(book_id)
        self.books.set_rating_aggregate(book, average, count)
        logger.info("Book %s rating aggregate is now %.2f over %d reviews", book_id, average, count)
        return average, count

    def recompute_all(self) -> int:
        """Recompute the aggregate of every book.

        Returns:
            Number of books updated
        """
        book_ids = [book_id for (book_id,) in self.session.query(Book.id).order_by(Book.id).all()]
        for book_id in book_ids:
            self.recompute(book_id)
        return len(book_ids)
