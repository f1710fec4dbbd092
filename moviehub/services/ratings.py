"""Rating aggregation.

``Movie.average_rating`` is a denormalized aggregate: the mean rating of
the movie's reviews, or exactly 0.0 without reviews. It is recomputed
from the full review set as the last step of every review mutation.
Concurrent recomputes are not serialized; the last write wins and each
write reflects a complete snapshot of the reviews it read.
"""

import logging
from collections.abc import Iterable

from moviehub.database.repositories.base import MovieStore, ReviewStore
from moviehub.services.exceptions import AggregateUpdateError, MovieNotFoundError

logger = logging.getLogger(__name__)


def mean_rating(ratings: Iterable[int]) -> float:
    """Arithmetic mean of ``ratings``, 0.0 when empty."""
    values = list(ratings)
    if not values:
        return 0.0
    return sum(values) / len(values)


class RatingAggregator:
    """Recomputes and persists movie average ratings."""

    def __init__(self, movies: MovieStore, reviews: ReviewStore) -> None:
        self._movies = movies
        self._reviews = reviews

    async def calculate_average(self, movie_id: str) -> float:
        """Mean rating of the movie's current reviews, without writing it."""
        reviews = await self._reviews.find_by_movie_id(movie_id)
        average = mean_rating(r.rating for r in reviews)
        logger.debug(f"Movie {movie_id}: average {average} from {len(reviews)} reviews")
        return average

    async def recompute(self, movie_id: str) -> float:
        """Read the review set, then write the new average to the movie.

        Args:
            movie_id: Resolved movie id.

        Returns:
            The average that was written.

        Raises:
            MovieNotFoundError: The movie no longer exists.
            AggregateUpdateError: The store failed while reading or writing.
        """
        try:
            average = await self.calculate_average(movie_id)
            movie = await self._movies.find_by_id(movie_id)
            if movie is None:
                raise MovieNotFoundError(f"Movie not found with id: {movie_id}")

            await self._movies.save(movie.model_copy(update={"average_rating": average}))
        except MovieNotFoundError:
            raise
        except Exception as e:
            logger.error(f"Aggregate update failed for movie {movie_id}: {e}")
            raise AggregateUpdateError(movie_id, e) from e

        logger.info(f"Movie {movie_id}: average rating now {average:.2f}")
        return average
