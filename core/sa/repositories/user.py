from typing import List, Optional
from sqlalchemy.orm import Session
from core.sa.models import User

class UserRepository:
    """Repository for managing User entities."""

    def __init__(self, session: Session):
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def create_user(
        self,
        username: str,
        email: Optional[str] = None,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None
    ) -> User:
        """Create a new user.

        Uniqueness of username and email is checked by the caller; the
        database constraints are the final guard.

        Returns:
            The created User object, flushed so it has an ID
        """
        user = User(
            username=username,
            email=email,
            first_name=first_name,
            last_name=last_name
        )
        self.session.add(user)
        self.session.flush()
        return user

    def get_by_id(self, user_id: int) -> Optional[User]:
        """Get a user by their ID.

        Args:
            user_id: The ID of the user to retrieve

        Returns:
            The User object if found, None otherwise
        """
        return self.session.get(User, user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return self.session.query(User).filter(User.username == username).first()

    def get_by_email(self, email: str) -> Optional[User]:
        return self.session.query(User).filter(User.email == email).first()

    def search_users(self, query: str = "", limit: int = 20, offset: int = 0) -> List[User]:
        """Search for users by username.

        Args:
            query: The search query string
            limit: Maximum number of results to return (default: 20)
            offset: Number of users to skip

        Returns:
            List of matching User objects
        """
        return (
            self.session.query(User)
            .filter(User.username.ilike(f"%{query}%"))
            .order_by(User.username)
            .offset(offset)
            .limit(limit)
            .all()
        )

    def delete_user(self, user: User) -> List[int]:
        """Delete a user together with everything they own.

        Returns:
            IDs of the books the user had reviewed, so the caller can
            recompute their rating aggregates
        """
        reviewed_book_ids = sorted({review.book_id for review in user.reviews})
        for entry in list(user.library_entries):
            self.session.delete(entry)
        for review in list(user.reviews):
            self.session.delete(review)
        for favourite in list(user.favourites):
            self.session.delete(favourite)
        self.session.flush()
        self.session.expire(user, ['library_entries', 'reviews', 'favourites'])
        self.session.delete(user)
        self.session.flush()
        return reviewed_book_ids
