"""Shared fixtures for integration tests.

Stores run on a throwaway SQLite file through aiosqlite; the API is
driven in-process through ``httpx.ASGITransport`` with a prebuilt
service container, so the lifespan (and the daily sync) never starts.
"""

from collections.abc import AsyncGenerator
from datetime import date
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from moviehub.api.dependencies import ServiceContainer
from moviehub.api.main import create_app
from moviehub.database import DatabaseConnection, SqlMovieStore, SqlReviewStore
from moviehub.services import MovieService, ReviewService

TODAY = date(2024, 6, 1)


# ---------------------------------------------------------------------------
# Auto-mark all tests in this directory as "integration"
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Auto-apply ``@pytest.mark.integration`` to every test collected here."""
    integration_marker = pytest.mark.integration
    for item in items:
        if "integration" in str(item.fspath):
            item.add_marker(integration_marker)


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest.fixture
async def db(tmp_path: Path) -> AsyncGenerator[DatabaseConnection, None]:
    connection = DatabaseConnection(f"sqlite+aiosqlite:///{tmp_path}/test.db")
    await connection.create_all()
    yield connection
    await connection.dispose()


@pytest.fixture
def sql_movie_store(db: DatabaseConnection) -> SqlMovieStore:
    return SqlMovieStore(db)


@pytest.fixture
def sql_review_store(db: DatabaseConnection) -> SqlReviewStore:
    return SqlReviewStore(db)


# ---------------------------------------------------------------------------
# API client
# ---------------------------------------------------------------------------


@pytest.fixture
def container(movie_store, review_store) -> ServiceContainer:
    return ServiceContainer(
        movies=MovieService(movie_store, today=lambda: TODAY),
        reviews=ReviewService(movie_store, review_store),
    )


@pytest.fixture
async def api_client(container: ServiceContainer) -> AsyncGenerator[AsyncClient, None]:
    app = create_app(container)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
