"""Domain models shared by the sync engine, services and API."""

from moviehub.schemas.movie import (
    CastMember,
    CastRole,
    CrewInfo,
    CrewMember,
    Movie,
    MovieRequest,
    OfferType,
    StreamingPlatform,
    is_released,
    normalize_title,
)
from moviehub.schemas.review import Review, ReviewRequest

__all__ = [
    "CastMember",
    "CastRole",
    "CrewInfo",
    "CrewMember",
    "Movie",
    "MovieRequest",
    "OfferType",
    "Review",
    "ReviewRequest",
    "StreamingPlatform",
    "is_released",
    "normalize_title",
]
