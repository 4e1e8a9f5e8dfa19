# api/routes/favourites.py

from fastapi import APIRouter, Depends, status

from api.dependencies import Pagination, get_favourite_service
from api.schemas.book import BookList
from api.schemas.favourite import FavouriteCreate, FavouriteStatus
from core.services import FavouriteService

router = APIRouter(prefix="/users/{user_id}/favourites", tags=["favourites"])

@router.post("", response_model=FavouriteStatus, status_code=status.HTTP_201_CREATED)
def add_to_favourites(
    user_id: int,
    data: FavouriteCreate,
    service: FavouriteService = Depends(get_favourite_service)
):
    service.add_to_favourites(user_id, data.book_id)
    return FavouriteStatus(book_id=data.book_id, is_favourite=True)

@router.get("", response_model=BookList)
def get_favourite_books(
    user_id: int,
    pagination: Pagination = Depends(),
    service: FavouriteService = Depends(get_favourite_service)
):
    return BookList(
        items=service.get_favourite_books(user_id, limit=pagination.size, offset=pagination.offset),
        total=service.count_favourites(user_id),
        page=pagination.page,
        size=pagination.size
    )

@router.get("/{book_id}", response_model=FavouriteStatus)
def check_favourite(user_id: int, book_id: int, service: FavouriteService = Depends(get_favourite_service)):
    return FavouriteStatus(book_id=book_id, is_favourite=service.is_favourite(user_id, book_id))

@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_from_favourites(user_id: int, book_id: int, service: FavouriteService = Depends(get_favourite_service)):
    service.remove_from_favourites(user_id, book_id)
