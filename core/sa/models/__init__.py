# core/sa/models/__init__.py
from .base import Base, TimestampMixin, SafeDateTime
from .user import User
from .book import Book
from .library import LibraryEntry, Shelf
from .review import Review
from .favourite import Favourite

__all__ = [
    'Base',
    'TimestampMixin',
    'SafeDateTime',
    'User',
    'Book',
    'LibraryEntry',
    'Shelf',
    'Review',
    'Favourite'
]
