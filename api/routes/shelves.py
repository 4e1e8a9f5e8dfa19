# api/routes/shelves.py

from typing import List
from fastapi import APIRouter, Depends, status

from api.dependencies import Pagination, get_library_service
from api.schemas.library import (
    LibraryEntry, LibraryEntryList, LibraryEntryCreate, ShelfMove,
    ProgressUpdate, RatingUpdate, NotesUpdate
)
from core.sa.models import Shelf
from core.services import LibraryService

router = APIRouter(prefix="/users/{user_id}/shelves", tags=["shelves"])

@router.post("", response_model=LibraryEntry, status_code=status.HTTP_201_CREATED)
def add_to_library(
    user_id: int,
    data: LibraryEntryCreate,
    service: LibraryService = Depends(get_library_service)
):
    return service.add_to_library(user_id, data.book_id, data.shelf, notes=data.notes)

@router.get("/timeline", response_model=LibraryEntryList)
def get_reading_timeline(
    user_id: int,
    pagination: Pagination = Depends(),
    service: LibraryService = Depends(get_library_service)
):
    """All of the user's entries, most recently updated first"""
    return LibraryEntryList(
        items=service.get_reading_timeline(user_id, limit=pagination.size, offset=pagination.offset),
        total=service.count_entries(user_id),
        page=pagination.page,
        size=pagination.size
    )

@router.get("/currently-reading", response_model=List[LibraryEntry])
def get_currently_reading(user_id: int, service: LibraryService = Depends(get_library_service)):
    return service.get_currently_reading(user_id)

@router.get("/{shelf}", response_model=LibraryEntryList)
def get_books_by_shelf(
    user_id: int,
    shelf: Shelf,
    pagination: Pagination = Depends(),
    service: LibraryService = Depends(get_library_service)
):
    return LibraryEntryList(
        items=service.get_books_by_shelf(user_id, shelf, limit=pagination.size, offset=pagination.offset),
        total=service.count_by_shelf(user_id, shelf),
        page=pagination.page,
        size=pagination.size
    )

@router.get("/books/{book_id}", response_model=LibraryEntry)
def get_entry(user_id: int, book_id: int, service: LibraryService = Depends(get_library_service)):
    return service.get_entry(user_id, book_id)

@router.put("/books/{book_id}/shelf", response_model=LibraryEntry)
def move_shelf(
    user_id: int,
    book_id: int,
    data: ShelfMove,
    service: LibraryService = Depends(get_library_service)
):
    return service.move_shelf(user_id, book_id, data.shelf)

@router.put("/books/{book_id}/progress", response_model=LibraryEntry)
def update_progress(
    user_id: int,
    book_id: int,
    data: ProgressUpdate,
    service: LibraryService = Depends(get_library_service)
):
    """Record reading progress. Reaching 100% moves the book to READ."""
    return service.update_progress(
        user_id,
        book_id,
        current_page=data.current_page,
        progress_percentage=data.progress_percentage
    )

@router.put("/books/{book_id}/rating", response_model=LibraryEntry)
def rate_book(
    user_id: int,
    book_id: int,
    data: RatingUpdate,
    service: LibraryService = Depends(get_library_service)
):
    return service.rate_book(user_id, book_id, data.rating)

@router.put("/books/{book_id}/notes", response_model=LibraryEntry)
def update_notes(
    user_id: int,
    book_id: int,
    data: NotesUpdate,
    service: LibraryService = Depends(get_library_service)
):
    return service.update_notes(user_id, book_id, data.notes)

@router.delete("/books/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_from_library(user_id: int, book_id: int, service: LibraryService = Depends(get_library_service)):
    service.remove_from_library(user_id, book_id)
