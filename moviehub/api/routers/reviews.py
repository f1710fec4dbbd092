"""Review endpoints.

Every mutation recomputes the movie's average rating before responding.
"""

from fastapi import APIRouter, Response, status

from moviehub.api.dependencies import Reviews
from moviehub.schemas import Review, ReviewRequest

router = APIRouter(prefix="/reviews", tags=["Reviews"])


@router.get("", response_model=list[Review], summary="List reviews")
async def list_reviews(reviews: Reviews) -> list[Review]:
    return await reviews.list_reviews()


@router.post("", response_model=Review, status_code=status.HTTP_201_CREATED, summary="Create review")
async def create_review(request: ReviewRequest, reviews: Reviews) -> Review:
    return await reviews.create_review(request)


@router.get("/{review_id}", response_model=Review, summary="Get review")
async def get_review(review_id: str, reviews: Reviews) -> Review:
    return await reviews.get_review(review_id)


@router.put("/{review_id}", response_model=Review, summary="Update review")
async def update_review(review_id: str, request: ReviewRequest, reviews: Reviews) -> Review:
    return await reviews.update_review(review_id, request)


@router.delete("/{review_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete review")
async def delete_review(review_id: str, reviews: Reviews) -> Response:
    await reviews.delete_review(review_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
