"""Service container and FastAPI dependencies.

The container is built once per process in the application lifespan
(or handed to ``create_app`` by tests) and stored on ``app.state``.
"""

import logging
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request

from moviehub.database import DatabaseConnection, SqlMovieStore, SqlReviewStore
from moviehub.etl.extractors.catalog import CatalogClient
from moviehub.etl.sync import CatalogSync
from moviehub.services import MovieService, RatingAggregator, ReviewService
from moviehub.settings import Settings

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Long-lived components shared by all requests."""

    movies: MovieService
    reviews: ReviewService
    sync: CatalogSync | None = None
    db: DatabaseConnection | None = None
    client: CatalogClient | None = None

    @classmethod
    def from_settings(cls, config: Settings) -> "ServiceContainer":
        db = DatabaseConnection.from_settings(config.database)
        movie_store = SqlMovieStore(db)
        review_store = SqlReviewStore(db)
        client = CatalogClient.from_settings(config.catalog)

        return cls(
            movies=MovieService(movie_store),
            reviews=ReviewService(
                movie_store,
                review_store,
                RatingAggregator(movie_store, review_store),
            ),
            sync=CatalogSync.create(config.catalog, client, movie_store),
            db=db,
            client=client,
        )

    async def aclose(self) -> None:
        if self.sync is not None:
            await self.sync.stop()
        if self.client is not None:
            await self.client.aclose()
        if self.db is not None:
            await self.db.dispose()


def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container


def get_movie_service(container: Annotated[ServiceContainer, Depends(get_container)]) -> MovieService:
    return container.movies


def get_review_service(container: Annotated[ServiceContainer, Depends(get_container)]) -> ReviewService:
    return container.reviews


Container = Annotated[ServiceContainer, Depends(get_container)]
Movies = Annotated[MovieService, Depends(get_movie_service)]
Reviews = Annotated[ReviewService, Depends(get_review_service)]
