# core/sa/repositories/book.py
from typing import Optional, List
from sqlalchemy import or_
from sqlalchemy.orm import Session
from ..models import Book

class BookRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, book_id: int) -> Optional[Book]:
        """Get a book by its ID"""
        return self.session.get(Book, book_id)

    def get_for_update(self, book_id: int) -> Optional[Book]:
        """Get a book by its ID, holding a row lock until the transaction ends.

        Used to serialize concurrent writers of the rating aggregate.
        On SQLite the FOR UPDATE clause is not rendered; the database-level
        write lock gives the same serialization.

        Args:
            book_id: The ID of the book

        Returns:
            The locked Book object if found, None otherwise
        """
        return (
            self.session.query(Book)
            .filter(Book.id == book_id)
            .populate_existing()
            .with_for_update()
            .first()
        )

    def get_by_google_books_id(self, google_books_id: str) -> Optional[Book]:
        """Get a book by its Google Books volume ID"""
        return self.session.query(Book).filter(Book.google_books_id == google_books_id).first()

    def get_by_isbn(self, isbn: str) -> Optional[Book]:
        """Get a book by ISBN"""
        return self.session.query(Book).filter(Book.isbn == isbn).first()

    def search_books(self, query: Optional[str] = None, limit: int = 20, offset: int = 0) -> List[Book]:
        """Search books by title or author.

        Args:
            query: Case-insensitive substring matched against title and author.
                   An empty query returns all books.
            limit: Maximum number of results to return
            offset: Number of records to skip

        Returns:
            List of matching Book objects ordered by title
        """
        base_query = self.session.query(Book)
        if query and query.strip():
            pattern = f"%{query.strip()}%"
            base_query = base_query.filter(or_(Book.title.ilike(pattern), Book.author.ilike(pattern)))
        return base_query.order_by(Book.title, Book.id).offset(offset).limit(limit).all()

    def count_books(self, query: Optional[str] = None) -> int:
        """Count books matching the same filter as search_books"""
        base_query = self.session.query(Book)
        if query and query.strip():
            pattern = f"%{query.strip()}%"
            base_query = base_query.filter(or_(Book.title.ilike(pattern), Book.author.ilike(pattern)))
        return base_query.count()

    def get_by_author(self, author: str, limit: int = 20, offset: int = 0) -> List[Book]:
        """Get books whose author contains the given string (case-insensitive)"""
        return (
            self.session.query(Book)
            .filter(Book.author.ilike(f"%{author}%"))
            .order_by(Book.title, Book.id)
            .offset(offset)
            .limit(limit)
            .all()
        )

    def get_by_category(self, category: str, limit: int = 20, offset: int = 0) -> List[Book]:
        """Get books tagged with a category (case-insensitive exact match).

        Categories are stored as a JSON list, so matching happens in Python
        to stay portable across SQLite and PostgreSQL.
        """
        wanted = category.strip().lower()
        matches = [
            book for book in self.session.query(Book).order_by(Book.title, Book.id).all()
            if any(c.lower() == wanted for c in (book.categories or []))
        ]
        return matches[offset:offset + limit]

    def create_book(self, **fields) -> Book:
        """Create a new book from catalog metadata.

        Rating aggregate fields always start at (0.0, 0); they are owned by
        the rating aggregator.

        Returns:
            The created Book object, flushed so it has an ID
        """
        fields.pop('average_rating', None)
        fields.pop('ratings_count', None)
        book = Book(average_rating=0.0, ratings_count=0, **fields)
        self.session.add(book)
        self.session.flush()
        return book

    def set_rating_aggregate(self, book: Book, average_rating: float, ratings_count: int) -> Book:
        """Write both aggregate fields in one flush"""
        book.average_rating = average_rating
        book.ratings_count = ratings_count
        self.session.flush()
        return book

    def delete_book(self, book: Book) -> None:
        """Delete a book together with everything it owns.

        Library entries, reviews and favourites belong to the book and are
        swept explicitly before the book row itself is removed.
        """
        for entry in list(book.library_entries):
            self.session.delete(entry)
        for review in list(book.reviews):
            self.session.delete(review)
        for favourite in list(book.favourites):
            self.session.delete(favourite)
        self.session.flush()
        self.session.expire(book, ['library_entries', 'reviews', 'favourites'])
        self.session.delete(book)
        self.session.flush()
