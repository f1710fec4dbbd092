"""Unit tests for the review service."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest

from moviehub.schemas import Movie, ReviewRequest
from moviehub.services import (
    AggregateUpdateError,
    InvalidRatingError,
    MovieNotFoundError,
    ReviewNotAllowedError,
    ReviewNotFoundError,
    ReviewService,
)

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)


class _Clock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock() -> _Clock:
    return _Clock(NOW)


@pytest.fixture
def service(movie_store, review_store, clock: _Clock) -> ReviewService:
    return ReviewService(movie_store, review_store, clock=clock)


def _request(movie: str, rating: int = 4, user_id: str = "user1", comment: str = "") -> ReviewRequest:
    return ReviewRequest(movie=movie, user_id=user_id, rating=rating, comment=comment)


async def _released(movie_store, title: str = "Arjun Reddy") -> Movie:
    return await movie_store.save(Movie(title=title, released=True))


async def _average(movie_store, movie_id: str) -> float:
    return (await movie_store.find_by_id(movie_id)).average_rating


# -------------------------------------------------------------------------
# Create
# -------------------------------------------------------------------------


class TestCreateReview:
    @staticmethod
    async def test_creates_and_aggregates(service: ReviewService, movie_store) -> None:
        movie = await _released(movie_store)

        review = await service.create_review(_request(movie.id, rating=5, comment="Classic"))

        assert review.id is not None
        assert review.movie_id == movie.id
        assert review.created_at == NOW
        assert await _average(movie_store, movie.id) == pytest.approx(5.0)

    @staticmethod
    async def test_resolves_title_ignoring_case(service: ReviewService, movie_store) -> None:
        movie = await _released(movie_store)
        review = await service.create_review(_request("  ARJUN reddy "))
        assert review.movie_id == movie.id

    @staticmethod
    @pytest.mark.parametrize("rating", [0, 6, -1])
    async def test_invalid_rating_writes_nothing(
        service: ReviewService, movie_store, review_store, rating: int
    ) -> None:
        movie = await _released(movie_store)

        with pytest.raises(InvalidRatingError):
            await service.create_review(_request(movie.id, rating=rating))

        assert review_store.reviews == {}

    @staticmethod
    async def test_rating_checked_before_movie(service: ReviewService) -> None:
        with pytest.raises(InvalidRatingError):
            await service.create_review(_request("no such movie", rating=9))

    @staticmethod
    async def test_unknown_movie(service: ReviewService) -> None:
        with pytest.raises(MovieNotFoundError):
            await service.create_review(_request("no such movie"))

    @staticmethod
    async def test_blank_movie(service: ReviewService) -> None:
        with pytest.raises(MovieNotFoundError, match="Movie is required"):
            await service.create_review(_request("   "))

    @staticmethod
    async def test_unreleased_movie(service: ReviewService, movie_store, review_store) -> None:
        movie = await movie_store.save(Movie(title="Devara Part 2", released=False))

        with pytest.raises(ReviewNotAllowedError, match="Reviews not allowed before release"):
            await service.create_review(_request(movie.id))

        assert review_store.reviews == {}

    @staticmethod
    async def test_aggregate_failure_surfaces(service: ReviewService, movie_store, review_store) -> None:
        movie = await _released(movie_store)
        movie_store.save = AsyncMock(side_effect=RuntimeError("connection lost"))

        with pytest.raises(AggregateUpdateError):
            await service.create_review(_request(movie.id))

        # the review itself was written
        assert len(review_store.reviews) == 1


# -------------------------------------------------------------------------
# Aggregate consistency
# -------------------------------------------------------------------------


class TestAverageAfterMutations:
    @staticmethod
    async def test_three_reviews_then_delete(service: ReviewService, movie_store) -> None:
        movie = await _released(movie_store)
        reviews = [await service.create_review(_request(movie.id, rating=r)) for r in (3, 4, 5)]
        assert await _average(movie_store, movie.id) == pytest.approx(4.0)

        await service.delete_review(reviews[0].id)

        assert await _average(movie_store, movie.id) == pytest.approx(4.5)

    @staticmethod
    async def test_create_then_delete_restores_average(service: ReviewService, movie_store) -> None:
        movie = await _released(movie_store)
        await service.create_review(_request(movie.id, rating=4))
        before = await _average(movie_store, movie.id)

        extra = await service.create_review(_request(movie.id, rating=1, user_id="user2"))
        assert await _average(movie_store, movie.id) == pytest.approx(2.5)
        await service.delete_review(extra.id)

        assert await _average(movie_store, movie.id) == pytest.approx(before)

    @staticmethod
    async def test_deleting_last_review_resets_to_zero(service: ReviewService, movie_store) -> None:
        movie = await _released(movie_store)
        review = await service.create_review(_request(movie.id, rating=3))

        await service.delete_review(review.id)

        assert await _average(movie_store, movie.id) == 0.0

    @staticmethod
    async def test_live_average(service: ReviewService, movie_store) -> None:
        movie = await _released(movie_store)
        await service.create_review(_request(movie.id, rating=2))
        await service.create_review(_request(movie.id, rating=3))
        assert await service.average_rating(movie.id) == pytest.approx(2.5)


# -------------------------------------------------------------------------
# Update & delete
# -------------------------------------------------------------------------


class TestUpdateReview:
    @staticmethod
    async def test_update_resets_created_at(service: ReviewService, movie_store, clock: _Clock) -> None:
        movie = await _released(movie_store)
        review = await service.create_review(_request(movie.id, rating=2))
        clock.now = datetime(2024, 7, 1, tzinfo=UTC)

        updated = await service.update_review(review.id, _request(movie.id, rating=5, comment="Grew on me"))

        assert updated.id == review.id
        assert updated.rating == 5
        assert updated.comment == "Grew on me"
        assert updated.created_at == clock.now
        assert await _average(movie_store, movie.id) == pytest.approx(5.0)

    @staticmethod
    async def test_move_to_other_movie_recomputes_both(service: ReviewService, movie_store) -> None:
        first = await _released(movie_store, "Jersey")
        second = await _released(movie_store, "Mahanati")
        await service.create_review(_request(first.id, rating=5))
        moved = await service.create_review(_request(first.id, rating=3, user_id="user2"))

        await service.update_review(moved.id, _request(second.id, rating=3, user_id="user2"))

        assert await _average(movie_store, first.id) == pytest.approx(5.0)
        assert await _average(movie_store, second.id) == pytest.approx(3.0)

    @staticmethod
    async def test_invalid_rating(service: ReviewService, movie_store) -> None:
        movie = await _released(movie_store)
        review = await service.create_review(_request(movie.id))

        with pytest.raises(InvalidRatingError):
            await service.update_review(review.id, _request(movie.id, rating=7))

        assert (await service.get_review(review.id)).rating == 4

    @staticmethod
    async def test_unknown_review(service: ReviewService, movie_store) -> None:
        movie = await _released(movie_store)
        with pytest.raises(ReviewNotFoundError):
            await service.update_review("missing", _request(movie.id))


class TestDeleteReview:
    @staticmethod
    async def test_unknown_review(service: ReviewService) -> None:
        with pytest.raises(ReviewNotFoundError):
            await service.delete_review("missing")

    @staticmethod
    async def test_movie_already_deleted(service: ReviewService, movie_store, review_store) -> None:
        movie = await _released(movie_store)
        review = await service.create_review(_request(movie.id))
        await movie_store.delete_by_id(movie.id)

        await service.delete_review(review.id)

        assert review_store.reviews == {}


class TestQueries:
    @staticmethod
    async def test_list_for_movie(service: ReviewService, movie_store) -> None:
        first = await _released(movie_store, "Jersey")
        second = await _released(movie_store, "Mahanati")
        await service.create_review(_request(first.id))
        await service.create_review(_request(second.id))

        assert len(await service.list_reviews()) == 2
        assert [r.movie_id for r in await service.list_reviews_for_movie(first.id)] == [first.id]

    @staticmethod
    async def test_get_unknown(service: ReviewService) -> None:
        with pytest.raises(ReviewNotFoundError):
            await service.get_review("missing")
