"""SQLAlchemy ORM models."""

from moviehub.database.models.base import Base, TimestampMixin
from moviehub.database.models.movie import MovieRecord
from moviehub.database.models.review import ReviewRecord

__all__ = ["Base", "TimestampMixin", "MovieRecord", "ReviewRecord"]
