# api/routes/books.py

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status

from api.dependencies import Pagination, get_book_service
from api.schemas.book import Book, BookList, CatalogBook, CatalogImport
from core.services import BookService

router = APIRouter(prefix="/books", tags=["books"])

@router.get("", response_model=BookList)
def get_books(
    query: Optional[str] = Query(None, description="Search books by title or author"),
    pagination: Pagination = Depends(),
    service: BookService = Depends(get_book_service)
):
    """
    Get a paginated list of stored books, optionally filtered by a
    case-insensitive match on title or author.
    """
    books = service.search_books(query, limit=pagination.size, offset=pagination.offset)
    return BookList(
        items=books,
        total=service.count_books(query),
        page=pagination.page,
        size=pagination.size
    )

@router.get("/external/search", response_model=List[CatalogBook])
def search_external(
    query: str = Query(..., min_length=1, description="Free-text catalog query"),
    max_results: int = Query(20, ge=1, le=40),
    service: BookService = Depends(get_book_service)
):
    """Search Google Books without storing anything"""
    return [CatalogBook(**record.to_dict()) for record in service.search_catalog(query, max_results)]

@router.post("/import", response_model=List[Book], status_code=status.HTTP_201_CREATED)
def import_top(data: CatalogImport, service: BookService = Depends(get_book_service)):
    """Import every hit of a catalog search, reusing books already stored"""
    return service.import_top_from_catalog(data.query, data.max_results)

@router.post("/import/{google_books_id}", response_model=Book, status_code=status.HTTP_201_CREATED)
def import_book(google_books_id: str, service: BookService = Depends(get_book_service)):
    return service.import_from_catalog(google_books_id)

@router.get("/category/{category}", response_model=List[Book])
def get_books_by_category(
    category: str,
    pagination: Pagination = Depends(),
    service: BookService = Depends(get_book_service)
):
    return service.get_books_by_category(category, limit=pagination.size, offset=pagination.offset)

@router.get("/author/{author}", response_model=List[Book])
def get_books_by_author(
    author: str,
    pagination: Pagination = Depends(),
    service: BookService = Depends(get_book_service)
):
    return service.get_books_by_author(author, limit=pagination.size, offset=pagination.offset)

@router.get("/{book_id}", response_model=Book)
def get_book(book_id: int, service: BookService = Depends(get_book_service)):
    return service.get_book(book_id)

@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_book(book_id: int, service: BookService = Depends(get_book_service)):
    """Delete a book with its library entries, reviews and favourites"""
    service.delete_book(book_id)
