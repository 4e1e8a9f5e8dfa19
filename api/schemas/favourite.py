# api/schemas/favourite.py
from pydantic import BaseModel

class FavouriteCreate(BaseModel):
    book_id: int

class FavouriteStatus(BaseModel):
    book_id: int
    is_favourite: bool
