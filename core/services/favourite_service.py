import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from core.errors import NotFound, Conflict
from core.sa.models import Book, Favourite
from core.sa.repositories.book import BookRepository
from core.sa.repositories.favourite import FavouriteRepository
from core.sa.repositories.user import UserRepository
from .base import BaseService, transactional

logger = logging.getLogger(__name__)


class FavouriteService(BaseService):
    def __init__(self, session: Session):
        super().__init__(session)
        self.favourites = FavouriteRepository(session)
        self.books = BookRepository(session)
        self.users = UserRepository(session)

    @transactional
    def add_to_favourites(self, user_id: int, book_id: int) -> Favourite:
        if self.users.get_by_id(user_id) is None:
            raise NotFound("User not found")
        if self.books.get_by_id(book_id) is None:
            raise NotFound("Book not found")
        if self.favourites.exists(user_id, book_id):
            raise Conflict("Book is already in your favourites")
        favourite = self.favourites.add_favourite(user_id, book_id)
        logger.info("User %s favourited book %s", user_id, book_id)
        return favourite

    @transactional
    def remove_from_favourites(self, user_id: int, book_id: int) -> None:
        favourite = self.favourites.get(user_id, book_id)
        if favourite is None:
            raise NotFound("Book not found in your favourites")
        self.favourites.delete_favourite(favourite)

    def get_favourite_books(self, user_id: int, limit: Optional[int] = None, offset: int = 0) -> List[Book]:
        return [f.book for f in self.favourites.get_by_user(user_id, limit=limit, offset=offset)]

    def count_favourites(self, user_id: int) -> int:
        return self.favourites.count_by_user(user_id)

    def is_favourite(self, user_id: int, book_id: int) -> bool:
        return self.favourites.exists(user_id, book_id)
