"""Movie domain models.

The validators normalize every optional nested structure (cast, crew,
platforms, genres) to an empty collection. They run on every
construction, so records loaded from storage that predate a field never
expose ``None`` to consumers.
"""

from datetime import date
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator


def normalize_title(title: str | None) -> str:
    """Normalize a title for duplicate lookups (case-fold and trim only)."""
    return (title or "").strip().lower()


def is_released(release_date: date | None, today: date | None = None) -> bool:
    """Whether a movie with this release date is out as of ``today``."""
    if release_date is None:
        return False
    return release_date <= (today or date.today())


# =============================================================================
# ENUMS
# =============================================================================


class CastRole(StrEnum):
    """Role tier assigned to a cast entry."""

    HERO = "Hero"
    HEROINE = "Heroine"
    LEAD = "Lead"
    SUPPORTING = "Supporting"
    OTHER = "Other"


class OfferType(StrEnum):
    """How a platform offers the movie."""

    SUBSCRIPTION = "subscription"
    RENT = "rent"
    BUY = "buy"


# =============================================================================
# NESTED STRUCTURES
# =============================================================================


class CastMember(BaseModel):
    """Actor credited on a movie."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    character: str | None = None
    role: CastRole = CastRole.OTHER
    order: int | None = None
    external_id: int | None = None
    profile_url: str | None = None


class CrewMember(BaseModel):
    """Crew member credited on a movie."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    job: str | None = None
    department: str | None = None
    external_id: int | None = None
    profile_url: str | None = None


class CrewInfo(BaseModel):
    """Crew grouped by department."""

    model_config = ConfigDict(from_attributes=True)

    directors: list[CrewMember] = Field(default_factory=list)
    producers: list[CrewMember] = Field(default_factory=list)
    writers: list[CrewMember] = Field(default_factory=list)
    music_directors: list[CrewMember] = Field(default_factory=list)
    cinematographers: list[CrewMember] = Field(default_factory=list)
    editors: list[CrewMember] = Field(default_factory=list)

    @field_validator("*", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return [] if v is None else v


class StreamingPlatform(BaseModel):
    """Where the movie can be watched, for one region and offer type."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    region: str
    offer_type: OfferType
    link: str | None = None
    logo_url: str | None = None
    available_from: date | None = None


# =============================================================================
# MOVIE
# =============================================================================


class Movie(BaseModel):
    """Persisted movie entity.

    Attributes:
        id: Store-assigned identifier (None until saved).
        external_id: Catalog provider id, unique when present.
        released: Whether the movie was out when it was last written.
            Evaluated at write time only and never refreshed on read.
        average_rating: Mean of the movie's review ratings, 0.0 without reviews.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str | None = None
    external_id: int | None = None
    title: str
    original_title: str | None = None
    overview: str | None = None
    imdb_id: str | None = None
    runtime: int | None = None
    original_language: str | None = None
    poster_url: str | None = None
    backdrop_url: str | None = None
    genres: list[str] = Field(default_factory=list)
    release_date: date | None = None
    release_year: int | None = None
    released: bool = False
    average_rating: float = 0.0
    cast: list[CastMember] = Field(default_factory=list)
    crew: CrewInfo = Field(default_factory=CrewInfo)
    platforms: list[StreamingPlatform] = Field(default_factory=list)

    @field_validator("genres", "cast", "platforms", mode="before")
    @classmethod
    def none_to_empty_list(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("crew", mode="before")
    @classmethod
    def none_to_empty_crew(cls, v: Any) -> Any:
        return CrewInfo() if v is None else v

    @field_validator("average_rating", mode="before")
    @classmethod
    def none_to_zero(cls, v: Any) -> Any:
        return 0.0 if v is None else v

    @computed_field  # type: ignore[prop-decorator]
    @property
    def normalized_title(self) -> str:
        """Title used for duplicate detection."""
        return normalize_title(self.title)


# =============================================================================
# REQUESTS
# =============================================================================


class MovieRequest(BaseModel):
    """Payload to create or update a movie by hand."""

    title: str = Field(min_length=1, max_length=300)
    original_title: str | None = None
    overview: str | None = None
    release_date: date | None = None
    release_year: int | None = Field(default=None, ge=1888, le=2200)
    genres: list[str] = Field(default_factory=list)
    original_language: str | None = None
    runtime: int | None = Field(default=None, ge=0)
    poster_url: str | None = None
    backdrop_url: str | None = None
    cast: list[CastMember] = Field(default_factory=list)
    crew: CrewInfo = Field(default_factory=CrewInfo)
    platforms: list[StreamingPlatform] = Field(default_factory=list)

    @model_validator(mode="after")
    def require_release_info(self) -> "MovieRequest":
        if self.release_date is None and self.release_year is None:
            raise ValueError("release_date or release_year is required")
        return self

    def resolved_release_date(self) -> date:
        """Release date, defaulting to January 1st of ``release_year``."""
        if self.release_date is not None:
            return self.release_date
        return date(self.release_year or date.today().year, 1, 1)
