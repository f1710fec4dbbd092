"""Shared pytest fixtures: isolated environment and in-memory stores."""

import uuid
from typing import Any

import pytest

from moviehub.schemas import Movie, Review, normalize_title


@pytest.fixture(autouse=True, scope="function")
def mock_env_for_tests(monkeypatch: pytest.MonkeyPatch) -> None:
    """Mock env variables for reproducible tests."""
    # TMDB settings
    monkeypatch.setenv("TMDB_API_KEY", "test_api_key_12345678901234567890")
    monkeypatch.setenv("TMDB_BASE_URL", "https://api.themoviedb.org/3")
    monkeypatch.setenv("TMDB_ORIGINAL_LANGUAGE", "te")
    monkeypatch.setenv("TMDB_REGION", "IN")
    monkeypatch.setenv("CATALOG_SYNC_ENABLED", "false")

    # Database settings
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

    # Environment
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("DEBUG", "false")
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    monkeypatch.setenv("LOG_TO_FILE", "false")


# =============================================================================
# IN-MEMORY STORES
# =============================================================================


class InMemoryMovieStore:
    """MovieStore kept in a dict, same contract as the SQL store."""

    def __init__(self) -> None:
        self.movies: dict[str, Movie] = {}

    async def find_by_id(self, movie_id: str) -> Movie | None:
        return self.movies.get(movie_id)

    async def find_all(self) -> list[Movie]:
        return sorted(self.movies.values(), key=lambda m: m.title)

    async def find_by_external_id(self, external_id: int) -> Movie | None:
        return next((m for m in self.movies.values() if m.external_id == external_id), None)

    async def find_by_title_ignore_case(self, title: str) -> Movie | None:
        wanted = normalize_title(title)
        return next((m for m in self.movies.values() if m.normalized_title == wanted), None)

    async def save(self, movie: Movie) -> Movie:
        if movie.id is None:
            movie = movie.model_copy(update={"id": str(uuid.uuid4())})
        self.movies[movie.id] = movie
        return movie

    async def delete_by_id(self, movie_id: str) -> bool:
        return self.movies.pop(movie_id, None) is not None


class InMemoryReviewStore:
    """ReviewStore kept in a dict, insertion ordered."""

    def __init__(self) -> None:
        self.reviews: dict[str, Review] = {}

    async def find_by_id(self, review_id: str) -> Review | None:
        return self.reviews.get(review_id)

    async def find_by_movie_id(self, movie_id: str) -> list[Review]:
        return [r for r in self.reviews.values() if r.movie_id == movie_id]

    async def find_all(self) -> list[Review]:
        return list(self.reviews.values())

    async def save(self, review: Review) -> Review:
        if review.id is None:
            review = review.model_copy(update={"id": str(uuid.uuid4())})
        self.reviews[review.id] = review
        return review

    async def delete_by_id(self, review_id: str) -> bool:
        return self.reviews.pop(review_id, None) is not None


@pytest.fixture
def movie_store() -> InMemoryMovieStore:
    return InMemoryMovieStore()


@pytest.fixture
def review_store() -> InMemoryReviewStore:
    return InMemoryReviewStore()


# =============================================================================
# CATALOG PAYLOADS
# =============================================================================


@pytest.fixture
def detail_payload() -> dict[str, Any]:
    """TMDB detail record with credits and watch providers appended."""
    return {
        "id": 579974,
        "title": "RRR",
        "original_title": "రౌద్రం రణం రుధిరం",
        "overview": "A fictional story about two legendary revolutionaries.",
        "release_date": "2022-03-24",
        "runtime": 187,
        "imdb_id": "tt8178634",
        "original_language": "te",
        "poster_path": "/rrr.jpg",
        "backdrop_path": "/rrr_bg.jpg",
        "genres": [{"id": 28, "name": "Action"}, {"id": 18, "name": "Drama"}],
        "credits": {
            "cast": [
                {"id": 1, "name": "N. T. Rama Rao Jr.", "character": "Bheem", "order": 0, "gender": 2},
                {"id": 2, "name": "Ram Charan", "character": "Raju", "order": 1, "gender": 2},
                {"id": 3, "name": "Alia Bhatt", "character": "Sita", "order": 2, "gender": 1},
            ],
            "crew": [
                {"id": 10, "name": "S. S. Rajamouli", "department": "Directing", "job": "Director"},
                {"id": 11, "name": "M. M. Keeravani", "department": "Sound", "job": "Original Music Composer"},
            ],
        },
        "watch/providers": {
            "results": {
                "IN": {
                    "link": "https://www.themoviedb.org/movie/579974/watch?locale=IN",
                    "flatrate": [{"provider_name": "ZEE5", "logo_path": "/zee5.png"}],
                },
            },
        },
    }
