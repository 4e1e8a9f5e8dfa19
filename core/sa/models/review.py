# core/sa/models/review.py
from sqlalchemy import Integer, Text, ForeignKey, Index, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, TimestampMixin

class Review(Base, TimestampMixin):
    __tablename__ = 'review'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey('user.id'), nullable=False)
    book_id: Mapped[int] = mapped_column(ForeignKey('book.id'), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)

    # Relationships
    user = relationship('User', back_populates='reviews')
    book = relationship('Book', back_populates='reviews')

    __table_args__ = (
        UniqueConstraint('user_id', 'book_id', name='uix_review_user_book'),
        CheckConstraint('rating >= 1 AND rating <= 5', name='ck_review_rating'),
        Index('idx_review_book_id', 'book_id'),
    )
