from typing import List, Optional
from sqlalchemy import desc
from sqlalchemy.orm import Session, joinedload
from core.sa.models import Favourite

class FavouriteRepository:
    """Repository for managing Favourite entities."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, user_id: int, book_id: int) -> Optional[Favourite]:
        return (
            self.session.query(Favourite)
            .filter(Favourite.user_id == user_id, Favourite.book_id == book_id)
            .first()
        )

    def exists(self, user_id: int, book_id: int) -> bool:
        return self.get(user_id, book_id) is not None

    def add_favourite(self, user_id: int, book_id: int) -> Favourite:
        favourite = Favourite(user_id=user_id, book_id=book_id)
        self.session.add(favourite)
        self.session.flush()
        return favourite

    def delete_favourite(self, favourite: Favourite) -> None:
        self.session.delete(favourite)
        self.session.flush()

    def get_by_user(self, user_id: int, limit: Optional[int] = None, offset: int = 0) -> List[Favourite]:
        """Get a user's favourites with their books loaded, newest first"""
        query = (
            self.session.query(Favourite)
            .options(joinedload(Favourite.book))
            .filter(Favourite.user_id == user_id)
            .order_by(desc(Favourite.created_at), desc(Favourite.id))
            .offset(offset)
        )
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def count_by_user(self, user_id: int) -> int:
        return self.session.query(Favourite).filter(Favourite.user_id == user_id).count()
