"""Movie endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query, Response, status

from moviehub.api.dependencies import Movies, Reviews
from moviehub.api.schemas import AverageRatingResponse
from moviehub.schemas import Movie, MovieRequest, Review

router = APIRouter(prefix="/movies", tags=["Movies"])


@router.get("", response_model=list[Movie], summary="List movies")
async def list_movies(movies: Movies) -> list[Movie]:
    return await movies.list_movies()


@router.get(
    "/search",
    response_model=list[Movie],
    summary="Search movies",
    description="Filter by title substring and/or release year.",
)
async def search_movies(
    movies: Movies,
    title: Annotated[str | None, Query(max_length=200)] = None,
    year: Annotated[int | None, Query(ge=1888, le=2200)] = None,
) -> list[Movie]:
    return await movies.search(title=title, year=year)


@router.get("/genre/{genre}", response_model=list[Movie], summary="Movies by genre")
async def movies_by_genre(genre: str, movies: Movies) -> list[Movie]:
    return await movies.find_by_genre(genre)


@router.post("", response_model=Movie, status_code=status.HTTP_201_CREATED, summary="Create movie")
async def create_movie(request: MovieRequest, movies: Movies) -> Movie:
    return await movies.create_movie(request)


@router.get("/{movie_id}", response_model=Movie, summary="Get movie")
async def get_movie(movie_id: str, movies: Movies) -> Movie:
    return await movies.get_movie(movie_id)


@router.put("/{movie_id}", response_model=Movie, summary="Update movie")
async def update_movie(movie_id: str, request: MovieRequest, movies: Movies) -> Movie:
    return await movies.update_movie(movie_id, request)


@router.delete("/{movie_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete movie")
async def delete_movie(movie_id: str, movies: Movies) -> Response:
    await movies.delete_movie(movie_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{movie_id}/reviews", response_model=list[Review], summary="Reviews of a movie")
async def movie_reviews(movie_id: str, movies: Movies, reviews: Reviews) -> list[Review]:
    await movies.get_movie(movie_id)
    return await reviews.list_reviews_for_movie(movie_id)


@router.get(
    "/{movie_id}/average-rating",
    response_model=AverageRatingResponse,
    summary="Average rating",
    description="Mean rating computed from the current reviews.",
)
async def average_rating(movie_id: str, movies: Movies, reviews: Reviews) -> AverageRatingResponse:
    await movies.get_movie(movie_id)
    movie_reviews = await reviews.list_reviews_for_movie(movie_id)
    return AverageRatingResponse(
        movie_id=movie_id,
        average_rating=await reviews.average_rating(movie_id),
        review_count=len(movie_reviews),
    )
