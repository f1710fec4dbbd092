"""Review service.

Every create, update and delete ends by recomputing the movie's average
rating. A failed recompute fails the whole operation even though the
review write itself already happened.
"""

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from moviehub.database.repositories.base import MovieStore, ReviewStore
from moviehub.schemas import Review, ReviewRequest
from moviehub.services.exceptions import (
    InvalidRatingError,
    MovieNotFoundError,
    ReviewNotAllowedError,
    ReviewNotFoundError,
)
from moviehub.services.ratings import RatingAggregator

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ReviewService:
    """Business operations on reviews."""

    def __init__(
        self,
        movies: MovieStore,
        reviews: ReviewStore,
        aggregator: RatingAggregator | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._movies = movies
        self._reviews = reviews
        self.aggregator = aggregator or RatingAggregator(movies, reviews)
        self._clock = clock

    @staticmethod
    def validate_rating(rating: int) -> None:
        if not MIN_RATING <= rating <= MAX_RATING:
            raise InvalidRatingError(f"Rating must be between {MIN_RATING} and {MAX_RATING}")

    async def resolve_movie_id(self, reference: str) -> str:
        """Resolve a movie reference: id first, then case-insensitive title.

        Raises:
            MovieNotFoundError: Blank reference or no match.
        """
        candidate = (reference or "").strip()
        if not candidate:
            raise MovieNotFoundError("Movie is required")

        movie = await self._movies.find_by_id(candidate)
        if movie is None:
            movie = await self._movies.find_by_title_ignore_case(candidate)
        if movie is None or movie.id is None:
            raise MovieNotFoundError(f"Movie not found with id or title: {candidate}")
        return movie.id

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    async def create_review(self, request: ReviewRequest) -> Review:
        """Create a review and recompute the movie aggregate.

        Raises:
            InvalidRatingError: Rating outside 1-5 (nothing is written).
            MovieNotFoundError: Movie reference does not resolve.
            ReviewNotAllowedError: The movie is not released.
            AggregateUpdateError: The review was saved but the aggregate was not.
        """
        self.validate_rating(request.rating)
        movie_id = await self.resolve_movie_id(request.movie)

        movie = await self._movies.find_by_id(movie_id)
        if movie is None:
            raise MovieNotFoundError(f"Movie not found with id: {movie_id}")
        if not movie.released:
            logger.warning(f"Attempt to review unreleased movie '{movie.title}'")
            raise ReviewNotAllowedError("Reviews not allowed before release")

        saved = await self._reviews.save(
            Review(
                movie_id=movie_id,
                user_id=request.user_id,
                rating=request.rating,
                comment=request.comment,
                created_at=self._clock(),
            )
        )
        await self.aggregator.recompute(movie_id)

        logger.info(f"Created review {saved.id} for movie {movie_id}")
        return saved

    async def update_review(self, review_id: str, request: ReviewRequest) -> Review:
        """Update a review; ``created_at`` is reset to now.

        When the review moves to another movie, both movies are recomputed.
        """
        self.validate_rating(request.rating)
        movie_id = await self.resolve_movie_id(request.movie)
        existing = await self.get_review(review_id)

        saved = await self._reviews.save(
            existing.model_copy(
                update={
                    "movie_id": movie_id,
                    "rating": request.rating,
                    "comment": request.comment,
                    "created_at": self._clock(),
                }
            )
        )

        await self.aggregator.recompute(movie_id)
        if existing.movie_id != movie_id:
            try:
                await self.aggregator.recompute(existing.movie_id)
            except MovieNotFoundError:
                logger.warning(f"Previous movie {existing.movie_id} of review {review_id} no longer exists")

        logger.info(f"Updated review {review_id}")
        return saved

    async def delete_review(self, review_id: str) -> None:
        review = await self.get_review(review_id)
        await self._reviews.delete_by_id(review_id)
        try:
            await self.aggregator.recompute(review.movie_id)
        except MovieNotFoundError:
            logger.warning(f"Movie {review.movie_id} of deleted review {review_id} no longer exists")
        logger.info(f"Deleted review {review_id}")

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    async def get_review(self, review_id: str) -> Review:
        review = await self._reviews.find_by_id(review_id)
        if review is None:
            raise ReviewNotFoundError(f"Review not found with id: {review_id}")
        return review

    async def list_reviews(self) -> list[Review]:
        return await self._reviews.find_all()

    async def list_reviews_for_movie(self, movie_id: str) -> list[Review]:
        return await self._reviews.find_by_movie_id(movie_id)

    async def average_rating(self, movie_id: str) -> float:
        """Live mean of the movie's reviews (not the stored aggregate)."""
        return await self.aggregator.calculate_average(movie_id)
