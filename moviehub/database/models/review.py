"""Review table."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from moviehub.database.models.base import Base
from moviehub.database.models.movie import new_id


class ReviewRecord(Base):
    """Persisted review.

    ``movie_id`` holds a resolved movie id. There is no foreign key: the
    store keeps document semantics and a movie delete leaves its reviews.
    """

    __tablename__ = "reviews"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    movie_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    user_id: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[str] = mapped_column(Text, default="", nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    __table_args__ = (CheckConstraint("rating >= 1 AND rating <= 5", name="chk_rating"),)

    def __repr__(self) -> str:
        return f"<ReviewRecord(id={self.id}, movie_id={self.movie_id}, rating={self.rating})>"
