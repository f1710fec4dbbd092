"""Integration tests for the SQLAlchemy stores on SQLite."""

from datetime import date

import pytest

from moviehub.database import DatabaseConnection, SqlMovieStore, SqlReviewStore
from moviehub.database.models import MovieRecord
from moviehub.schemas import (
    CastMember,
    CastRole,
    CrewInfo,
    CrewMember,
    Movie,
    OfferType,
    Review,
    ReviewRequest,
    StreamingPlatform,
)
from moviehub.services import ReviewService


def _make_movie(**overrides) -> Movie:
    base = {
        "external_id": 579974,
        "title": "RRR",
        "release_date": date(2022, 3, 24),
        "release_year": 2022,
        "released": True,
        "genres": ["Action", "Drama"],
        "cast": [CastMember(name="Ram Charan", role=CastRole.HERO, order=1)],
        "crew": CrewInfo(directors=[CrewMember(name="S. S. Rajamouli", job="Director")]),
        "platforms": [
            StreamingPlatform(name="ZEE5", region="IN", offer_type=OfferType.SUBSCRIPTION, available_from=date(2024, 6, 1))
        ],
    }
    base.update(overrides)
    return Movie(**base)


# -------------------------------------------------------------------------
# Movies
# -------------------------------------------------------------------------


class TestSqlMovieStore:
    @staticmethod
    async def test_save_and_read_back(sql_movie_store: SqlMovieStore) -> None:
        saved = await sql_movie_store.save(_make_movie())

        loaded = await sql_movie_store.find_by_id(saved.id)

        assert saved.id is not None
        assert loaded == saved
        assert loaded.cast[0].role is CastRole.HERO
        assert loaded.platforms[0].available_from == date(2024, 6, 1)
        assert loaded.crew.directors[0].name == "S. S. Rajamouli"

    @staticmethod
    async def test_lookups(sql_movie_store: SqlMovieStore) -> None:
        saved = await sql_movie_store.save(_make_movie())

        assert (await sql_movie_store.find_by_external_id(579974)).id == saved.id
        assert (await sql_movie_store.find_by_title_ignore_case("  rrr ")).id == saved.id
        assert await sql_movie_store.find_by_external_id(1) is None
        assert await sql_movie_store.find_by_title_ignore_case("RR") is None
        assert await sql_movie_store.find_by_id("missing") is None

    @staticmethod
    async def test_save_existing_updates(sql_movie_store: SqlMovieStore) -> None:
        saved = await sql_movie_store.save(_make_movie())

        await sql_movie_store.save(saved.model_copy(update={"average_rating": 4.5}))

        movies = await sql_movie_store.find_all()
        assert len(movies) == 1
        assert movies[0].average_rating == pytest.approx(4.5)

    @staticmethod
    async def test_delete(sql_movie_store: SqlMovieStore) -> None:
        saved = await sql_movie_store.save(_make_movie())
        assert await sql_movie_store.delete_by_id(saved.id) is True
        assert await sql_movie_store.delete_by_id(saved.id) is False

    @staticmethod
    async def test_null_documents_read_as_empty(db: DatabaseConnection, sql_movie_store: SqlMovieStore) -> None:
        async with db.session() as session:
            session.add(MovieRecord(id="legacy", title="Shiva", normalized_title="shiva"))

        movie = await sql_movie_store.find_by_id("legacy")

        assert movie.cast == []
        assert movie.crew == CrewInfo()
        assert movie.platforms == []
        assert movie.genres == []
        assert movie.average_rating == 0.0
        assert movie.released is False


# -------------------------------------------------------------------------
# Reviews
# -------------------------------------------------------------------------


class TestSqlReviewStore:
    @staticmethod
    async def test_save_assigns_id_and_timestamp(sql_review_store: SqlReviewStore) -> None:
        saved = await sql_review_store.save(Review(movie_id="m1", user_id="u1", rating=4))
        assert saved.id is not None
        assert saved.created_at is not None
        assert (await sql_review_store.find_by_id(saved.id)).rating == 4

    @staticmethod
    async def test_find_by_movie(sql_review_store: SqlReviewStore) -> None:
        await sql_review_store.save(Review(movie_id="m1", user_id="u1", rating=4))
        await sql_review_store.save(Review(movie_id="m1", user_id="u2", rating=2))
        await sql_review_store.save(Review(movie_id="m2", user_id="u1", rating=5))

        assert sorted(r.rating for r in await sql_review_store.find_by_movie_id("m1")) == [2, 4]
        assert len(await sql_review_store.find_all()) == 3

    @staticmethod
    async def test_delete(sql_review_store: SqlReviewStore) -> None:
        saved = await sql_review_store.save(Review(movie_id="m1", user_id="u1", rating=4))
        assert await sql_review_store.delete_by_id(saved.id) is True
        assert await sql_review_store.find_by_id(saved.id) is None


class TestAggregateOnSql:
    @staticmethod
    async def test_average_persisted(sql_movie_store: SqlMovieStore, sql_review_store: SqlReviewStore) -> None:
        movie = await sql_movie_store.save(_make_movie())
        service = ReviewService(sql_movie_store, sql_review_store)

        created = [
            await service.create_review(ReviewRequest(movie=movie.id, user_id=f"u{r}", rating=r)) for r in (3, 4, 5)
        ]
        assert (await sql_movie_store.find_by_id(movie.id)).average_rating == pytest.approx(4.0)

        await service.delete_review(created[0].id)
        assert (await sql_movie_store.find_by_id(movie.id)).average_rating == pytest.approx(4.5)
