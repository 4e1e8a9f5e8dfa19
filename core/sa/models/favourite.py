# core/sa/models/favourite.py
from datetime import datetime, UTC
from sqlalchemy import Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, SafeDateTime

class Favourite(Base):
    __tablename__ = 'favourite'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey('user.id'), nullable=False)
    book_id: Mapped[int] = mapped_column(ForeignKey('book.id'), nullable=False)
    created_at: Mapped[datetime] = mapped_column(SafeDateTime, nullable=False, default=lambda: datetime.now(UTC))

    # Relationships
    user = relationship('User', back_populates='favourites')
    book = relationship('Book', back_populates='favourites')

    __table_args__ = (
        UniqueConstraint('user_id', 'book_id', name='uix_favourite_user_book'),
    )
