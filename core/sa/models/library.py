# core/sa/models/library.py
from datetime import datetime
from enum import Enum
from sqlalchemy import Integer, String, Float, ForeignKey, Index, UniqueConstraint, CheckConstraint
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, TimestampMixin, SafeDateTime

class Shelf(str, Enum):
    WANT_TO_READ = "WANT_TO_READ"
    CURRENTLY_READING = "CURRENTLY_READING"
    READ = "READ"

class LibraryEntry(Base, TimestampMixin):
    """A user's copy of a book: shelf placement, progress and personal rating."""
    __tablename__ = 'library_entry'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey('user.id'), nullable=False)
    book_id: Mapped[int] = mapped_column(ForeignKey('book.id'), nullable=False)
    shelf: Mapped[Shelf] = mapped_column(SAEnum(Shelf, name='shelf', native_enum=False, length=32), nullable=False)

    # Reading progress
    current_page: Mapped[int | None] = mapped_column(Integer, nullable=True)
    progress_percentage: Mapped[float | None] = mapped_column(Float, nullable=True)
    started_at: Mapped[datetime | None] = mapped_column(SafeDateTime, nullable=True)
    finished_at: Mapped[datetime | None] = mapped_column(SafeDateTime, nullable=True)

    # Personal rating, independent of the book's review aggregate
    rating: Mapped[int | None] = mapped_column(Integer, nullable=True)
    notes: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    # Relationships
    user = relationship('User', back_populates='library_entries')
    book = relationship('Book', back_populates='library_entries')

    __table_args__ = (
        UniqueConstraint('user_id', 'book_id', name='uix_library_entry_user_book'),
        CheckConstraint('rating IS NULL OR (rating >= 1 AND rating <= 5)', name='ck_library_entry_rating'),
        Index('idx_library_entry_user_shelf', 'user_id', 'shelf'),
        Index('idx_library_entry_updated_at', 'updated_at'),
    )
