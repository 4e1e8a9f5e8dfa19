# core/services/book_service.py
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from core.catalog.google_books import BookRecord, GoogleBooksClient
from core.errors import NotFound, InvalidArgument
from core.sa.models import Book
from core.sa.repositories.book import BookRepository
from .base import BaseService, transactional

logger = logging.getLogger(__name__)


class BookService(BaseService):
    def __init__(self, session: Session, catalog: Optional[GoogleBooksClient] = None):
        super().__init__(session)
        self.books = BookRepository(session)
        self.catalog = catalog or GoogleBooksClient()

    def get_book(self, book_id: int) -> Book:
        book = self.books.get_by_id(book_id)
        if book is None:
            raise NotFound("Book not found")
        return book

    def search_books(self, query: Optional[str] = None, limit: int = 20, offset: int = 0) -> List[Book]:
        return self.books.search_books(query, limit=limit, offset=offset)

    def count_books(self, query: Optional[str] = None) -> int:
        return self.books.count_books(query)

    def get_books_by_category(self, category: str, limit: int = 20, offset: int = 0) -> List[Book]:
        return self.books.get_by_category(category, limit=limit, offset=offset)

    def get_books_by_author(self, author: str, limit: int = 20, offset: int = 0) -> List[Book]:
        return self.books.get_by_author(author, limit=limit, offset=offset)

    def search_catalog(self, query: str, max_results: int = 20) -> List[BookRecord]:
        """Search the external catalog without storing anything"""
        return self.catalog.search(query, max_results=max_results)

    def _store_record(self, record: BookRecord) -> Book:
        """Persist a catalog record unless a matching book already exists.

        Books are matched first by Google Books ID, then by ISBN.
        """
        existing = None
        if record.google_books_id:
            existing = self.books.get_by_google_books_id(record.google_books_id)
        if existing is None and record.isbn:
            existing = self.books.get_by_isbn(record.isbn)
        if existing is not None:
            return existing

        book = self.books.create_book(**record.to_dict())
        logger.info("Imported '%s' (%s) as book %s", book.title, record.google_books_id, book.id)
        return book

    @transactional
    def import_from_catalog(self, external_id: str) -> Book:
        """Import a single volume by its Google Books ID.

        Raises:
            InvalidArgument: If the ID is blank
            NotFound: If the catalog has no such volume
        """
        if not external_id or not external_id.strip():
            raise InvalidArgument("Google Books ID is required")

        external_id = external_id.strip()
        existing = self.books.get_by_google_books_id(external_id)
        if existing is not None:
            return existing

        record = self.catalog.fetch_by_id(external_id)
        if record is None:
            raise NotFound("Book not found in Google Books")
        return self._store_record(record)

    @transactional
    def import_top_from_catalog(self, query: str, max_results: int = 10) -> List[Book]:
        """Import every hit of a catalog search, reusing books already stored.

        Returns:
            The stored books in catalog order, without duplicates
        """
        books = []
        seen = set()
        for record in self.catalog.search(query, max_results=max_results):
            if not record.google_books_id:
                continue
            book = self._store_record(record)
            if book.id not in seen:
                seen.add(book.id)
                books.append(book)
        return books

    @transactional
    def delete_book(self, book_id: int) -> None:
        """Delete a book along with its library entries, reviews and favourites"""
        book = self.get_book(book_id)
        self.books.delete_book(book)
        logger.info("Deleted book %s", book_id)
