"""Persistence layer.

Usage:
    from moviehub.database import DatabaseConnection, SqlMovieStore

    db = DatabaseConnection.from_settings(settings.database)
    movies = SqlMovieStore(db)
"""

from moviehub.database.connection import DatabaseConnection
from moviehub.database.repositories import MovieStore, ReviewStore, SqlMovieStore, SqlReviewStore

__all__ = ["DatabaseConnection", "MovieStore", "ReviewStore", "SqlMovieStore", "SqlReviewStore"]
