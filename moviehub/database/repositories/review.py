"""SQLAlchemy-backed review store."""

from datetime import UTC, datetime

from sqlalchemy import delete, select

from moviehub.database.connection import DatabaseConnection
from moviehub.database.models import ReviewRecord
from moviehub.database.models.movie import new_id
from moviehub.schemas import Review


def record_to_review(record: ReviewRecord) -> Review:
    return Review.model_validate(record)


class SqlReviewStore:
    """``ReviewStore`` implementation on the async SQLAlchemy engine."""

    def __init__(self, db: DatabaseConnection) -> None:
        self._db = db

    async def find_by_id(self, review_id: str) -> Review | None:
        async with self._db.session() as session:
            record = await session.get(ReviewRecord, review_id)
            return record_to_review(record) if record else None

    async def find_by_movie_id(self, movie_id: str) -> list[Review]:
        async with self._db.session() as session:
            stmt = (
                select(ReviewRecord)
                .where(ReviewRecord.movie_id == movie_id)
                .order_by(ReviewRecord.created_at)
            )
            return [record_to_review(r) for r in (await session.scalars(stmt)).all()]

    async def find_all(self) -> list[Review]:
        async with self._db.session() as session:
            stmt = select(ReviewRecord).order_by(ReviewRecord.created_at)
            return [record_to_review(r) for r in (await session.scalars(stmt)).all()]

    async def save(self, review: Review) -> Review:
        values = review.model_dump()
        values["id"] = values["id"] or new_id()
        values["created_at"] = values["created_at"] or datetime.now(UTC)

        async with self._db.session() as session:
            record = await session.merge(ReviewRecord(**values))
            await session.flush()
            return record_to_review(record)

    async def delete_by_id(self, review_id: str) -> bool:
        async with self._db.session() as session:
            result = await session.execute(delete(ReviewRecord).where(ReviewRecord.id == review_id))
            return result.rowcount > 0
