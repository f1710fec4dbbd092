"""SQLAlchemy-backed movie store."""

from typing import Any

from sqlalchemy import delete, select

from moviehub.database.connection import DatabaseConnection
from moviehub.database.models import MovieRecord
from moviehub.database.models.movie import new_id
from moviehub.schemas import Movie, normalize_title

_JSON_FIELDS = {"cast", "crew", "platforms"}
_COLUMNS = [c.key for c in MovieRecord.__table__.columns if c.key not in {"created_at", "updated_at"}]


def record_to_movie(record: MovieRecord) -> Movie:
    """Build a Movie from a row; NULL documents become empty collections."""
    return Movie.model_validate({key: getattr(record, key) for key in _COLUMNS})


def movie_to_values(movie: Movie) -> dict[str, Any]:
    """Column values for a Movie, with nested models dumped as JSON."""
    values = movie.model_dump(exclude=_JSON_FIELDS | {"normalized_title"})
    values.update(movie.model_dump(mode="json", include=_JSON_FIELDS))
    values["normalized_title"] = movie.normalized_title
    return values


class SqlMovieStore:
    """``MovieStore`` implementation on the async SQLAlchemy engine."""

    def __init__(self, db: DatabaseConnection) -> None:
        self._db = db

    async def find_by_id(self, movie_id: str) -> Movie | None:
        async with self._db.session() as session:
            record = await session.get(MovieRecord, movie_id)
            return record_to_movie(record) if record else None

    async def find_all(self) -> list[Movie]:
        async with self._db.session() as session:
            stmt = select(MovieRecord).order_by(MovieRecord.title)
            records = (await session.scalars(stmt)).all()
            return [record_to_movie(r) for r in records]

    async def find_by_external_id(self, external_id: int) -> Movie | None:
        async with self._db.session() as session:
            stmt = select(MovieRecord).where(MovieRecord.external_id == external_id)
            record = (await session.scalars(stmt)).first()
            return record_to_movie(record) if record else None

    async def find_by_title_ignore_case(self, title: str) -> Movie | None:
        """Match on the stored normalized title (lower-cased, trimmed)."""
        async with self._db.session() as session:
            stmt = select(MovieRecord).where(MovieRecord.normalized_title == normalize_title(title)).limit(1)
            record = (await session.scalars(stmt)).first()
            return record_to_movie(record) if record else None

    async def save(self, movie: Movie) -> Movie:
        if movie.id is None:
            movie = movie.model_copy(update={"id": new_id()})

        async with self._db.session() as session:
            record = await session.merge(MovieRecord(**movie_to_values(movie)))
            await session.flush()
            return record_to_movie(record)

    async def delete_by_id(self, movie_id: str) -> bool:
        async with self._db.session() as session:
            result = await session.execute(delete(MovieRecord).where(MovieRecord.id == movie_id))
            return result.rowcount > 0
