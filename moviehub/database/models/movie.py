"""Movie table.

Cast, crew, platforms and genres are stored as JSON documents and may
be NULL on rows written before those fields existed; the ``Movie``
schema normalizes them on read.
"""

import uuid
from datetime import date
from typing import Any

from sqlalchemy import JSON, Boolean, CheckConstraint, Date, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from moviehub.database.models.base import Base, TimestampMixin


def new_id() -> str:
    return str(uuid.uuid4())


class MovieRecord(Base, TimestampMixin):
    """Persisted movie.

    Attributes:
        id: UUID string primary key.
        external_id: TMDB identifier, unique when present.
        normalized_title: Lower-cased trimmed title for duplicate lookups.
        released: Frozen at write time.
        average_rating: Denormalized mean of the movie's review ratings.
    """

    __tablename__ = "movies"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    external_id: Mapped[int | None] = mapped_column(Integer, unique=True, index=True)

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    normalized_title: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    original_title: Mapped[str | None] = mapped_column(String(500))
    overview: Mapped[str | None] = mapped_column(Text)
    imdb_id: Mapped[str | None] = mapped_column(String(20))
    runtime: Mapped[int | None] = mapped_column(Integer)
    original_language: Mapped[str | None] = mapped_column(String(10))

    poster_url: Mapped[str | None] = mapped_column(String(500))
    backdrop_url: Mapped[str | None] = mapped_column(String(500))

    release_date: Mapped[date | None] = mapped_column(Date)
    release_year: Mapped[int | None] = mapped_column(Integer, index=True)
    released: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    average_rating: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)

    genres: Mapped[list[str] | None] = mapped_column(JSON)
    cast: Mapped[list[dict[str, Any]] | None] = mapped_column(JSON)
    crew: Mapped[dict[str, Any] | None] = mapped_column(JSON)
    platforms: Mapped[list[dict[str, Any]] | None] = mapped_column(JSON)

    __table_args__ = (
        CheckConstraint(
            "average_rating >= 0 AND average_rating <= 5",
            name="chk_average_rating",
        ),
    )

    def __repr__(self) -> str:
        return f"<MovieRecord(id={self.id}, external_id={self.external_id}, title='{self.title}')>"
