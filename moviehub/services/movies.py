"""Movie service: CRUD, search and rating updates."""

import logging
from collections.abc import Callable
from datetime import date

from moviehub.database.repositories.base import MovieStore
from moviehub.schemas import Movie, MovieRequest, is_released
from moviehub.services.exceptions import MovieNotFoundError

logger = logging.getLogger(__name__)


class MovieService:
    """Business operations on movies.

    Movies are always returned as ``Movie`` models, whose validators turn
    missing cast/crew/platforms into empty collections.
    """

    def __init__(self, movies: MovieStore, today: Callable[[], date] = date.today) -> None:
        self._movies = movies
        self._today = today

    async def create_movie(self, request: MovieRequest) -> Movie:
        """Create a movie; ``released`` is evaluated once, now.

        The release date defaults to January 1st of ``release_year``.
        """
        release_date = request.resolved_release_date()
        movie = Movie(
            **request.model_dump(exclude={"release_date", "release_year"}),
            release_date=release_date,
            release_year=request.release_year or release_date.year,
            released=is_released(release_date, self._today()),
            average_rating=0.0,
        )

        saved = await self._movies.save(movie)
        logger.info(f"Created movie '{saved.title}' ({saved.id}), released={saved.released}")
        return saved

    async def get_movie(self, movie_id: str) -> Movie:
        movie = await self._movies.find_by_id(movie_id)
        if movie is None:
            raise MovieNotFoundError(f"Movie not found with id: {movie_id}")
        return movie

    async def list_movies(self) -> list[Movie]:
        return await self._movies.find_all()

    async def update_movie(self, movie_id: str, request: MovieRequest) -> Movie:
        """Replace the editable fields and re-evaluate ``released``.

        Identity, external id and the average rating are kept.
        """
        existing = await self.get_movie(movie_id)
        release_date = request.resolved_release_date()

        updated = existing.model_copy(
            update={
                **request.model_dump(exclude={"release_date", "release_year", "cast", "crew", "platforms"}),
                "cast": request.cast,
                "crew": request.crew,
                "platforms": request.platforms,
                "release_date": release_date,
                "release_year": request.release_year or release_date.year,
                "released": is_released(release_date, self._today()),
            }
        )

        saved = await self._movies.save(updated)
        logger.info(f"Updated movie '{saved.title}' ({movie_id})")
        return saved

    async def delete_movie(self, movie_id: str) -> None:
        await self.get_movie(movie_id)
        await self._movies.delete_by_id(movie_id)
        logger.info(f"Deleted movie {movie_id}")

    async def update_movie_rating(self, movie_id: str, rating: float) -> Movie:
        """Overwrite the stored average rating."""
        movie = await self.get_movie(movie_id)
        logger.debug(f"Movie {movie_id}: rating {movie.average_rating} -> {rating}")
        return await self._movies.save(movie.model_copy(update={"average_rating": rating}))

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    async def find_by_genre(self, genre: str) -> list[Movie]:
        """Movies with a genre containing ``genre``, case-insensitively."""
        needle = genre.strip().lower()
        movies = await self._movies.find_all()
        return [m for m in movies if any(needle in g.lower() for g in m.genres)]

    async def search(self, title: str | None = None, year: int | None = None) -> list[Movie]:
        """Filter by title substring (case-insensitive) and/or release year."""
        movies = await self._movies.find_all()
        if title:
            needle = title.strip().lower()
            movies = [m for m in movies if needle in m.title.lower()]
        if year is not None:
            movies = [m for m in movies if m.release_year == year]
        return movies
