import logging
from datetime import datetime, UTC
from typing import List, Optional

from sqlalchemy.orm import Session

from core.engine.progress import apply_progress, validate_progress, validate_rating, validate_notes
from core.engine.shelves import apply_transition, parse_shelf, place_new_entry
from core.errors import NotFound, Conflict
from core.sa.models import LibraryEntry, Shelf
from core.sa.repositories.book import BookRepository
from core.sa.repositories.library import LibraryRepository
from core.sa.repositories.user import UserRepository
from .base import BaseService, transactional

logger = logging.getLogger(__name__)


class LibraryService(BaseService):
    """Shelf placement, reading progress and personal ratings for a user's books."""

    def __init__(self, session: Session):
        super().__init__(session)
        self.entries = LibraryRepository(session)
        self.books = BookRepository(session)
        self.users = UserRepository(session)

    def _require_entry(self, user_id: int, book_id: int) -> LibraryEntry:
        entry = self.entries.get_entry(user_id, book_id)
        if entry is None:
            raise NotFound("Book not found in your library")
        return entry

    @transactional
    def add_to_library(
        self,
        user_id: int,
        book_id: int,
        shelf: Shelf,
        notes: Optional[str] = None
    ) -> LibraryEntry:
        """Add a book to a user's library on the given shelf.

        Raises:
            NotFound: If the user or book does not exist
            Conflict: If the book is already in the user's library
            InvalidArgument: If notes exceed 1000 characters
        """
        validate_notes(notes)
        shelf = parse_shelf(shelf)

        if self.users.get_by_id(user_id) is None:
            raise NotFound("User not found")
        book = self.books.get_by_id(book_id)
        if book is None:
            raise NotFound("Book not found")

        if self.entries.exists(user_id, book_id):
            raise Conflict("Book already exists in your library")

        entry = LibraryEntry(user_id=user_id, book_id=book_id, notes=notes)
        entry.book = book
        place_new_entry(entry, shelf, datetime.now(UTC))
        self.entries.add_entry(entry)
        logger.info("User %s added book %s to %s", user_id, book_id, shelf.value)
        return entry

    @transactional
    def move_shelf(self, user_id: int, book_id: int, new_shelf: Shelf) -> LibraryEntry:
        """Move a book to another shelf, applying the transition's side effects.

        Raises:
            NotFound: If the book is not in the user's library
        """
        new_shelf = parse_shelf(new_shelf)
        entry = self._require_entry(user_id, book_id)
        old_shelf = apply_transition(entry, new_shelf, datetime.now(UTC))
        self.entries.save(entry)
        logger.info("User %s moved book %s from %s to %s", user_id, book_id, old_shelf.value, new_shelf.value)
        return entry

    @transactional
    def remove_from_library(self, user_id: int, book_id: int) -> None:
        entry = self._require_entry(user_id, book_id)
        self.entries.delete_entry(entry)
        logger.info("User %s removed book %s from their library", user_id, book_id)

    @transactional
    def update_progress(
        self,
        user_id: int,
        book_id: int,
        current_page: Optional[int] = None,
        progress_percentage: Optional[float] = None
    ) -> LibraryEntry:
        """Record reading progress; reaching 100% moves the book to READ.

        Raises:
            InvalidArgument: If the page is negative or the percentage is outside [0, 100]
            NotFound: If the book is not in the user's library
        """
        validate_progress(current_page, progress_percentage)
        entry = self._require_entry(user_id, book_id)
        completed = apply_progress(entry, current_page, progress_percentage, datetime.now(UTC))
        self.entries.save(entry)
        if completed:
            logger.info("User %s finished book %s", user_id, book_id)
        return entry

    @transactional
    def rate_book(self, user_id: int, book_id: int, rating: int) -> LibraryEntry:
        """Set the personal rating on a library entry.

        This never touches the book's review aggregate.
        """
        validate_rating(rating)
        entry = self._require_entry(user_id, book_id)
        entry.rating = rating
        self.entries.save(entry)
        return entry

    @transactional
    def update_notes(self, user_id: int, book_id: int, notes: Optional[str]) -> LibraryEntry:
        validate_notes(notes)
        entry = self._require_entry(user_id, book_id)
        entry.notes = notes
        self.entries.save(entry)
        return entry

    def get_entry(self, user_id: int, book_id: int) -> LibraryEntry:
        return self._require_entry(user_id, book_id)

    def get_books_by_shelf(
        self,
        user_id: int,
        shelf: Shelf,
        limit: Optional[int] = None,
        offset: int = 0
    ) -> List[LibraryEntry]:
        return self.entries.get_by_shelf(user_id, parse_shelf(shelf), limit=limit, offset=offset)

    def count_by_shelf(self, user_id: int, shelf: Shelf) -> int:
        return self.entries.count_by_shelf(user_id, parse_shelf(shelf))

    def get_reading_timeline(self, user_id: int, limit: int = 20, offset: int = 0) -> List[LibraryEntry]:
        """All of a user's entries, most recently updated first"""
        return self.entries.get_recently_updated(user_id, limit=limit, offset=offset)

    def count_entries(self, user_id: int) -> int:
        return self.entries.count_for_user(user_id)

    def get_currently_reading(self, user_id: int) -> List[LibraryEntry]:
        return self.entries.get_by_shelf(user_id, Shelf.CURRENTLY_READING)
