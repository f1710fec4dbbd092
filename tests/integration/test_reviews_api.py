"""Integration tests for the review endpoints and rating aggregates."""

import pytest
from httpx import AsyncClient


async def _create_movie(client: AsyncClient, title: str = "Mahanati", release_date: str = "2018-05-09") -> str:
    response = await client.post("/api/movies", json={"title": title, "release_date": release_date})
    assert response.status_code == 201
    return response.json()["id"]


async def _create_review(client: AsyncClient, movie: str, rating: int, user_id: str = "user1"):
    return await client.post(
        "/api/reviews",
        json={"movie": movie, "user_id": user_id, "rating": rating, "comment": "Savitri lives on"},
    )


class TestReviewsEndpoints:
    @staticmethod
    async def test_average_follows_reviews(api_client: AsyncClient) -> None:
        movie_id = await _create_movie(api_client)
        ids = []
        for rating in (3, 4, 5):
            response = await _create_review(api_client, movie_id, rating)
            assert response.status_code == 201
            ids.append(response.json()["id"])

        movie = (await api_client.get(f"/api/movies/{movie_id}")).json()
        assert movie["average_rating"] == pytest.approx(4.0)

        assert (await api_client.delete(f"/api/reviews/{ids[0]}")).status_code == 204

        movie = (await api_client.get(f"/api/movies/{movie_id}")).json()
        assert movie["average_rating"] == pytest.approx(4.5)

        response = await api_client.get(f"/api/movies/{movie_id}/average-rating")
        assert response.json() == {"movie_id": movie_id, "average_rating": 4.5, "review_count": 2}

    @staticmethod
    async def test_review_by_title(api_client: AsyncClient) -> None:
        movie_id = await _create_movie(api_client)

        response = await _create_review(api_client, "MAHANATI", 5)

        assert response.status_code == 201
        assert response.json()["movie_id"] == movie_id
        reviews = (await api_client.get(f"/api/movies/{movie_id}/reviews")).json()
        assert len(reviews) == 1

    @staticmethod
    async def test_invalid_rating(api_client: AsyncClient) -> None:
        movie_id = await _create_movie(api_client)

        response = await _create_review(api_client, movie_id, 6)

        assert response.status_code == 400
        assert response.json()["status"] == 400

    @staticmethod
    async def test_unreleased_movie(api_client: AsyncClient) -> None:
        movie_id = await _create_movie(api_client, title="Peddi", release_date="2026-03-27")

        response = await _create_review(api_client, movie_id, 4)

        assert response.status_code == 409
        assert response.json()["message"] == "Reviews not allowed before release"

    @staticmethod
    async def test_unknown_movie(api_client: AsyncClient) -> None:
        response = await _create_review(api_client, "No Such Movie", 4)
        assert response.status_code == 404

    @staticmethod
    async def test_update_review(api_client: AsyncClient) -> None:
        movie_id = await _create_movie(api_client)
        review_id = (await _create_review(api_client, movie_id, 2)).json()["id"]

        response = await api_client.put(
            f"/api/reviews/{review_id}",
            json={"movie": movie_id, "user_id": "user1", "rating": 5},
        )

        assert response.status_code == 200
        assert response.json()["rating"] == 5
        movie = (await api_client.get(f"/api/movies/{movie_id}")).json()
        assert movie["average_rating"] == pytest.approx(5.0)

    @staticmethod
    async def test_unknown_review(api_client: AsyncClient) -> None:
        assert (await api_client.get("/api/reviews/missing")).status_code == 404
        assert (await api_client.delete("/api/reviews/missing")).status_code == 404

    @staticmethod
    async def test_reviews_of_unknown_movie(api_client: AsyncClient) -> None:
        assert (await api_client.get("/api/movies/missing/reviews")).status_code == 404
