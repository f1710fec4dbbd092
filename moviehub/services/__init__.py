"""Business services for movies, reviews and rating aggregation."""

from moviehub.services.exceptions import (
    AggregateUpdateError,
    InvalidRatingError,
    MovieNotFoundError,
    ReviewNotAllowedError,
    ReviewNotFoundError,
    ServiceError,
)
from moviehub.services.movies import MovieService
from moviehub.services.ratings import RatingAggregator, mean_rating
from moviehub.services.reviews import ReviewService

__all__ = [
    "AggregateUpdateError",
    "InvalidRatingError",
    "MovieNotFoundError",
    "MovieService",
    "RatingAggregator",
    "ReviewNotAllowedError",
    "ReviewNotFoundError",
    "ReviewService",
    "ServiceError",
    "mean_rating",
]
