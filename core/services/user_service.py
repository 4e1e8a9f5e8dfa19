import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from core.engine.ratings import RatingAggregator
from core.errors import NotFound, Conflict, InvalidArgument
from core.sa.models import User
from core.sa.repositories.book import BookRepository
from core.sa.repositories.user import UserRepository
from .base import BaseService, transactional

logger = logging.getLogger(__name__)


class UserService(BaseService):
    def __init__(self, session: Session):
        super().__init__(session)
        self.users = UserRepository(session)
        self.books = BookRepository(session)
        self.aggregator = RatingAggregator(session)

    @transactional
    def create_user(
        self,
        username: str,
        email: Optional[str] = None,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None
    ) -> User:
        """Register a new user.

        Raises:
            InvalidArgument: If the username is blank
            Conflict: If the username or email is already taken
        """
        if not username or not username.strip():
            raise InvalidArgument("Username is required")
        username = username.strip()

        if self.users.get_by_username(username) is not None:
            raise Conflict("Username already exists")
        if email and self.users.get_by_email(email) is not None:
            raise Conflict("Email already exists")

        user = self.users.create_user(username, email=email, first_name=first_name, last_name=last_name)
        logger.info("Created user %s (%s)", user.id, username)
        return user

    def get_user(self, user_id: int) -> User:
        user = self.users.get_by_id(user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    def get_user_by_username(self, username: str) -> User:
        user = self.users.get_by_username(username)
        if user is None:
            raise NotFound("User not found")
        return user

    def search_users(self, query: str = "", limit: int = 20, offset: int = 0) -> List[User]:
        return self.users.search_users(query, limit=limit, offset=offset)

    @transactional
    def delete_user(self, user_id: int) -> None:
        """Delete a user and everything they own.

        Books the user reviewed get their rating aggregates recomputed in
        the same transaction.
        """
        user = self.get_user(user_id)
        # Lock in id order so concurrent sweeps cannot deadlock
        for book_id in sorted({review.book_id for review in user.reviews}):
            self.books.get_for_update(book_id)

        for book_id in self.users.delete_user(user):
            self.aggregator.recompute(book_id)
        logger.info("Deleted user %s", user_id)
