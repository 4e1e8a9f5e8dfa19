from .book import BookRepository
from .user import UserRepository
from .library import LibraryRepository
from .review import ReviewRepository
from .favourite import FavouriteRepository

__all__ = ['BookRepository', 'UserRepository', 'LibraryRepository', 'ReviewRepository', 'FavouriteRepository']
