# api/routes/users.py

from typing import List
from fastapi import APIRouter, Depends, Query, status

from api.dependencies import Pagination, get_user_service
from api.schemas.user import User, UserCreate
from core.services import UserService

router = APIRouter(prefix="/users", tags=["users"])

@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
def create_user(user: UserCreate, service: UserService = Depends(get_user_service)):
    return service.create_user(
        user.username,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name
    )

@router.get("", response_model=List[User])
def search_users(
    query: str = Query("", description="Search users by username"),
    pagination: Pagination = Depends(),
    service: UserService = Depends(get_user_service)
):
    return service.search_users(query, limit=pagination.size, offset=pagination.offset)

@router.get("/{user_id}", response_model=User)
def get_user(user_id: int, service: UserService = Depends(get_user_service)):
    return service.get_user(user_id)

@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: int, service: UserService = Depends(get_user_service)):
    """Delete a user along with their shelves, reviews and favourites"""
    service.delete_user(user_id)
