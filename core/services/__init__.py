from .base import BaseService, transactional
from .book_service import BookService
from .favourite_service import FavouriteService
from .library_service import LibraryService
from .review_service import ReviewService
from .user_service import UserService

__all__ = [
    'BaseService',
    'transactional',
    'BookService',
    'FavouriteService',
    'LibraryService',
    'ReviewService',
    'UserService'
]
