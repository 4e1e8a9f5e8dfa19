# api/schemas/book.py
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field

class BookBase(BaseModel):
    title: str
    author: str
    isbn: Optional[str] = None
    description: Optional[str] = None
    publisher: Optional[str] = None
    published_date: Optional[str] = None
    page_count: Optional[int] = None
    cover_image_url: Optional[str] = None
    categories: List[str] = []
    language: Optional[str] = None
    google_books_id: Optional[str] = None

class Book(BookBase):
    id: int
    average_rating: float
    ratings_count: int

    model_config = ConfigDict(from_attributes=True)

class BookList(BaseModel):
    items: List[Book]
    total: int
    page: int
    size: int

    model_config = ConfigDict(from_attributes=True)

class CatalogBook(BookBase):
    """A catalog search hit that has not been stored"""
    google_books_id: str

    model_config = ConfigDict(from_attributes=True)

class CatalogImport(BaseModel):
    query: str = Field(..., min_length=1)
    max_results: int = Field(10, ge=1, le=40)
