from typing import List, Optional
from sqlalchemy import desc
from sqlalchemy.orm import Session, joinedload
from core.sa.models import LibraryEntry, Shelf

class LibraryRepository:
    """Repository for managing LibraryEntry entities."""

    def __init__(self, session: Session):
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def get_entry(self, user_id: int, book_id: int) -> Optional[LibraryEntry]:
        """Get the entry for a (user, book) pair with its book loaded.

        Args:
            user_id: The ID of the owning user
            book_id: The ID of the book

        Returns:
            The LibraryEntry object if found, None otherwise
        """
        return (
            self.session.query(LibraryEntry)
            .options(joinedload(LibraryEntry.book))
            .filter(
                LibraryEntry.user_id == user_id,
                LibraryEntry.book_id == book_id
            )
            .first()
        )

    def exists(self, user_id: int, book_id: int) -> bool:
        return (
            self.session.query(LibraryEntry.id)
            .filter(LibraryEntry.user_id == user_id, LibraryEntry.book_id == book_id)
            .first()
        ) is not None

    def add_entry(self, entry: LibraryEntry) -> LibraryEntry:
        """Persist a new library entry.

        Args:
            entry: A transient LibraryEntry with its shelf side effects applied

        Returns:
            The same entry, flushed so it has an ID
        """
        self.session.add(entry)
        self.session.flush()
        return entry

    def save(self, entry: LibraryEntry) -> LibraryEntry:
        """Flush pending changes on an existing entry"""
        self.session.flush()
        return entry

    def delete_entry(self, entry: LibraryEntry) -> None:
        self.session.delete(entry)
        self.session.flush()

    def get_by_shelf(
        self,
        user_id: int,
        shelf: Shelf,
        limit: Optional[int] = None,
        offset: int = 0
    ) -> List[LibraryEntry]:
        """Get a user's entries on one shelf, most recently updated first.

        Args:
            user_id: The ID of the user
            shelf: The shelf to list
            limit: Maximum number of entries to return (None for all)
            offset: Number of entries to skip

        Returns:
            List of LibraryEntry objects with their books loaded
        """
        query = (
            self.session.query(LibraryEntry)
            .options(joinedload(LibraryEntry.book))
            .filter(LibraryEntry.user_id == user_id, LibraryEntry.shelf == shelf)
            .order_by(desc(LibraryEntry.updated_at), desc(LibraryEntry.id))
            .offset(offset)
        )
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def count_by_shelf(self, user_id: int, shelf: Shelf) -> int:
        return (
            self.session.query(LibraryEntry)
            .filter(LibraryEntry.user_id == user_id, LibraryEntry.shelf == shelf)
            .count()
        )

    def get_recently_updated(self, user_id: int, limit: int = 20, offset: int = 0) -> List[LibraryEntry]:
        """Get a user's entries across all shelves ordered by last update"""
        return (
            self.session.query(LibraryEntry)
            .options(joinedload(LibraryEntry.book))
            .filter(LibraryEntry.user_id == user_id)
            .order_by(desc(LibraryEntry.updated_at), desc(LibraryEntry.id))
            .offset(offset)
            .limit(limit)
            .all()
        )

    def count_for_user(self, user_id: int) -> int:
        return self.session.query(LibraryEntry).filter(LibraryEntry.user_id == user_id).count()
