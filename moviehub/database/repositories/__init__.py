"""Store protocols and their SQLAlchemy implementations."""

from moviehub.database.repositories.base import MovieStore, ReviewStore
from moviehub.database.repositories.movie import SqlMovieStore
from moviehub.database.repositories.review import SqlReviewStore

__all__ = ["MovieStore", "ReviewStore", "SqlMovieStore", "SqlReviewStore"]
