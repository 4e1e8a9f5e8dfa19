# api/schemas/library.py
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field, model_validator

from core.sa.models import Shelf
from .book import Book

class LibraryEntry(BaseModel):
    id: int
    user_id: int
    book_id: int
    shelf: Shelf
    current_page: Optional[int] = None
    progress_percentage: Optional[float] = None
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    rating: Optional[int] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    book: Book

    model_config = ConfigDict(from_attributes=True)

class LibraryEntryList(BaseModel):
    items: List[LibraryEntry]
    total: int
    page: int
    size: int

class LibraryEntryCreate(BaseModel):
    book_id: int
    shelf: Shelf
    notes: Optional[str] = Field(None, max_length=1000)

class ShelfMove(BaseModel):
    shelf: Shelf

class ProgressUpdate(BaseModel):
    current_page: Optional[int] = Field(None, ge=0)
    progress_percentage: Optional[float] = Field(None, ge=0, le=100)

    @model_validator(mode='after')
    def check_any_progress(self):
        if self.current_page is None and self.progress_percentage is None:
            raise ValueError("Either current_page or progress_percentage is required")
        return self

class RatingUpdate(BaseModel):
    rating: int = Field(..., ge=1, le=5)

class NotesUpdate(BaseModel):
    notes: Optional[str] = Field(None, max_length=1000)
