# api/dependencies.py
from fastapi import Depends, Query
from sqlalchemy.orm import Session

from core.catalog.google_books import GoogleBooksClient
from core.config import settings
from core.sa.database import get_db
from core.services import BookService, FavouriteService, LibraryService, ReviewService, UserService

_catalog = None

def get_catalog() -> GoogleBooksClient:
    """Shared catalog client; one requests session for the whole process"""
    global _catalog
    if _catalog is None:
        _catalog = GoogleBooksClient()
    return _catalog

class Pagination:
    def __init__(
        self,
        page: int = Query(1, ge=1, description="Page number"),
        size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size, description="Items per page")
    ):
        self.page = page
        self.size = size

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.size

def get_book_service(db: Session = Depends(get_db), catalog: GoogleBooksClient = Depends(get_catalog)) -> BookService:
    return BookService(db, catalog=catalog)

def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)

def get_library_service(db: Session = Depends(get_db)) -> LibraryService:
    return LibraryService(db)

def get_review_service(db: Session = Depends(get_db)) -> ReviewService:
    return ReviewService(db)

def get_favourite_service(db: Session = Depends(get_db)) -> FavouriteService:
    return FavouriteService(db)
