"""Review domain models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Review(BaseModel):
    """Persisted review.

    ``movie_id`` is always a resolved movie id, never a title.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str | None = None
    movie_id: str
    user_id: str
    rating: int = Field(ge=1, le=5)
    comment: str = ""
    created_at: datetime | None = None


class ReviewRequest(BaseModel):
    """Payload to create or update a review.

    Attributes:
        movie: Movie id, or its title (matched case-insensitively).
        rating: Checked against the 1-5 range by the review service.
    """

    movie: str = Field(min_length=1)
    user_id: str = Field(min_length=1)
    rating: int
    comment: str = Field(default="", max_length=5000)
