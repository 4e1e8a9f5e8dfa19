# core/sa/models/book.py
from sqlalchemy import Integer, String, Text, Float, JSON, Index
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, TimestampMixin

class Book(Base, TimestampMixin):
    __tablename__ = 'book'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    author: Mapped[str] = mapped_column(String(500), nullable=False)
    isbn: Mapped[str | None] = mapped_column(String(20), unique=True, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    publisher: Mapped[str | None] = mapped_column(String(255), nullable=True)
    published_date: Mapped[str | None] = mapped_column(String(50), nullable=True)
    page_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    cover_image_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    categories: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    language: Mapped[str | None] = mapped_column(String(20), nullable=True)

    # External catalog identifiers
    google_books_id: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    open_library_id: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Maintained by the rating aggregator only
    average_rating: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    ratings_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Relationships
    library_entries = relationship('LibraryEntry', back_populates='book')
    reviews = relationship('Review', back_populates='book')
    favourites = relationship('Favourite', back_populates='book')

    __table_args__ = (
        # Search indexes
        Index('idx_book_title', 'title'),
        Index('idx_book_author', 'author'),
    )

    def __repr__(self):
        return f"<Book(id={self.id}, title='{self.title}')>"
