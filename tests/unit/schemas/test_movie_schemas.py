"""Unit tests for the movie and review domain models."""

from datetime import date

import pytest
from pydantic import ValidationError

from moviehub.schemas import (
    CastMember,
    CrewInfo,
    Movie,
    MovieRequest,
    Review,
    ReviewRequest,
    is_released,
    normalize_title,
)


class TestMovieNormalization:
    @staticmethod
    def test_none_collections_become_empty() -> None:
        movie = Movie(title="Okkadu", genres=None, cast=None, crew=None, platforms=None, average_rating=None)
        assert movie.genres == []
        assert movie.cast == []
        assert movie.crew == CrewInfo()
        assert movie.platforms == []
        assert movie.average_rating == 0.0

    @staticmethod
    def test_none_crew_groups_become_empty() -> None:
        crew = CrewInfo(directors=None, producers=None)
        assert crew.directors == []
        assert crew.producers == []

    @staticmethod
    def test_from_stored_document() -> None:
        movie = Movie.model_validate(
            {
                "id": "m1",
                "title": "Athadu",
                "cast": [{"name": "Mahesh Babu", "role": "Hero", "order": 0}],
                "crew": {"directors": [{"name": "Trivikram Srinivas"}], "editors": None},
            }
        )
        assert movie.cast == [CastMember(name="Mahesh Babu", role="Hero", order=0)]
        assert movie.crew.editors == []

    @staticmethod
    def test_normalized_title() -> None:
        movie = Movie(title="  Magadheera ")
        assert movie.normalized_title == "magadheera"
        assert movie.model_dump()["normalized_title"] == "magadheera"

    @staticmethod
    def test_released_is_stored_not_derived() -> None:
        movie = Movie(title="Future", release_date=date(2000, 1, 1), released=False)
        assert movie.released is False


class TestHelpers:
    @staticmethod
    def test_normalize_title() -> None:
        assert normalize_title(" RRR ") == "rrr"
        assert normalize_title(None) == ""

    @staticmethod
    def test_is_released() -> None:
        today = date(2024, 6, 1)
        assert is_released(None, today) is False
        assert is_released(today, today) is True
        assert is_released(date(2024, 6, 2), today) is False


class TestRequests:
    @staticmethod
    def test_movie_request_resolves_year() -> None:
        request = MovieRequest(title="Kalki", release_year=2024)
        assert request.resolved_release_date() == date(2024, 1, 1)

    @staticmethod
    @pytest.mark.parametrize("overrides", [{"title": ""}, {"release_year": 1700}, {"runtime": -1}])
    def test_movie_request_validation(overrides: dict) -> None:
        with pytest.raises(ValidationError):
            MovieRequest(**({"title": "Kalki", "release_year": 2024} | overrides))

    @staticmethod
    def test_review_request_leaves_rating_to_service() -> None:
        assert ReviewRequest(movie="m1", user_id="u1", rating=9).rating == 9

    @staticmethod
    def test_review_rating_bounds() -> None:
        with pytest.raises(ValidationError):
            Review(movie_id="m1", user_id="u1", rating=6)
