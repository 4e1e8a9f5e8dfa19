# api/schemas/review.py
from datetime import datetime
from typing import List
from pydantic import BaseModel, ConfigDict, Field

class ReviewBase(BaseModel):
    content: str = Field(..., min_length=10, max_length=5000)
    rating: int = Field(..., ge=1, le=5)

class ReviewCreate(ReviewBase):
    book_id: int

class ReviewUpdate(ReviewBase):
    pass

class Review(BaseModel):
    id: int
    user_id: int
    book_id: int
    content: str
    rating: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

class ReviewList(BaseModel):
    items: List[Review]
    total: int
    page: int
    size: int
