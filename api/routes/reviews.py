# api/routes/reviews.py

from fastapi import APIRouter, Depends, Query, status

from api.dependencies import Pagination, get_review_service
from api.schemas.review import Review, ReviewList, ReviewCreate, ReviewUpdate
from core.services import ReviewService

router = APIRouter(prefix="/reviews", tags=["reviews"])

@router.post("", response_model=Review, status_code=status.HTTP_201_CREATED)
def create_review(
    data: ReviewCreate,
    user_id: int = Query(..., description="ID of the reviewing user"),
    service: ReviewService = Depends(get_review_service)
):
    """Create a review; the book's rating aggregate is updated in the same transaction"""
    return service.create_review(user_id, data.book_id, data.content, data.rating)

@router.get("/book/{book_id}", response_model=ReviewList)
def get_reviews_for_book(
    book_id: int,
    pagination: Pagination = Depends(),
    service: ReviewService = Depends(get_review_service)
):
    return ReviewList(
        items=service.get_reviews_for_book(book_id, limit=pagination.size, offset=pagination.offset),
        total=service.count_reviews_for_book(book_id),
        page=pagination.page,
        size=pagination.size
    )

@router.get("/user/{user_id}", response_model=ReviewList)
def get_reviews_by_user(
    user_id: int,
    pagination: Pagination = Depends(),
    service: ReviewService = Depends(get_review_service)
):
    return ReviewList(
        items=service.get_reviews_by_user(user_id, limit=pagination.size, offset=pagination.offset),
        total=service.count_reviews_by_user(user_id),
        page=pagination.page,
        size=pagination.size
    )

@router.get("/user/{user_id}/book/{book_id}", response_model=Review)
def get_user_review_for_book(user_id: int, book_id: int, service: ReviewService = Depends(get_review_service)):
    return service.get_user_review_for_book(user_id, book_id)

@router.get("/{review_id}", response_model=Review)
def get_review(review_id: int, service: ReviewService = Depends(get_review_service)):
    return service.get_review(review_id)

@router.put("/{review_id}", response_model=Review)
def update_review(
    review_id: int,
    data: ReviewUpdate,
    user_id: int = Query(..., description="ID of the review's author"),
    service: ReviewService = Depends(get_review_service)
):
    return service.update_review(review_id, user_id, data.content, data.rating)

@router.delete("/{review_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_review(
    review_id: int,
    user_id: int = Query(..., description="ID of the review's author"),
    service: ReviewService = Depends(get_review_service)
):
    service.delete_review(review_id, user_id)
