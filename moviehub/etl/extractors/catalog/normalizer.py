"""Catalog record normalizer.

Transforms a raw TMDB detail record into a ``Movie``. Provider payloads
are loosely typed: any field may be missing, null or of the wrong type,
and the normalizer degrades to empty values instead of failing.
"""

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from datetime import date
from typing import Any

from moviehub.etl.extractors.catalog.cast_roles import GenderCodedRoleTierPolicy, RoleTierPolicy
from moviehub.schemas import (
    CastMember,
    CrewInfo,
    CrewMember,
    Movie,
    OfferType,
    StreamingPlatform,
    is_released,
)

logger = logging.getLogger(__name__)


class InvalidRecordError(Exception):
    """Raised when a record cannot become a Movie (e.g. blank title)."""

    pass


def _as_list(value: Any) -> list[Mapping[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, Mapping)]


def _as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _as_str(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


class CatalogNormalizer:
    """Maps TMDB detail records to ``Movie`` models.

    Attributes:
        role_policy: Assigns role tiers to ranked cast entries.
        watch_regions: Regions kept from the watch providers block.
        catalog_genres: Genre tags added to every movie before provider genres.
        cast_limit: Maximum number of cast entries kept.
    """

    POSTER_SIZE = "w500"
    BACKDROP_SIZE = "w1280"
    PROFILE_SIZE = "w185"

    # (field, department, job substring or None for any job)
    CREW_DEPARTMENTS: tuple[tuple[str, str, str | None], ...] = (
        ("directors", "Directing", "Director"),
        ("producers", "Production", "Producer"),
        ("writers", "Writing", None),
        ("music_directors", "Sound", "Music"),
        ("cinematographers", "Camera", "Director of Photography"),
        ("editors", "Editing", "Editor"),
    )

    OFFER_TYPES: tuple[tuple[str, OfferType], ...] = (
        ("flatrate", OfferType.SUBSCRIPTION),
        ("rent", OfferType.RENT),
        ("buy", OfferType.BUY),
    )

    def __init__(
        self,
        role_policy: RoleTierPolicy | None = None,
        image_base_url: str = "https://image.tmdb.org/t/p",
        watch_regions: Sequence[str] = ("IN", "US"),
        cast_limit: int = 20,
        catalog_genres: Sequence[str] = ("Telugu", "Indian Cinema"),
        today: Callable[[], date] = date.today,
    ) -> None:
        self.role_policy = role_policy or GenderCodedRoleTierPolicy()
        self._image_base_url = image_base_url.rstrip("/")
        self.watch_regions = list(watch_regions)
        self.cast_limit = cast_limit
        self.catalog_genres = list(catalog_genres)
        self._today = today

    # -------------------------------------------------------------------------
    # Movie
    # -------------------------------------------------------------------------

    def normalize_movie(self, raw: Mapping[str, Any], external_id: int | None = None) -> Movie:
        """Normalize a detail record.

        Args:
            raw: Raw detail record.
            external_id: Provider id to use when the record lacks one.

        Returns:
            Unsaved Movie with ``average_rating`` 0.0.

        Raises:
            InvalidRecordError: The record has no usable title.
        """
        title = _as_str(raw.get("original_title")) or _as_str(raw.get("title"))
        if title is None:
            raise InvalidRecordError(f"Record {raw.get('id', external_id)} has no title")

        raw_id = raw.get("id")
        if isinstance(raw_id, int) and not isinstance(raw_id, bool):
            external_id = raw_id

        today = self._today()
        release_date = self._parse_date(raw.get("release_date"), external_id)
        credits = _as_mapping(raw.get("credits"))

        return Movie(
            external_id=external_id,
            title=title,
            original_title=_as_str(raw.get("original_title")),
            overview=_as_str(raw.get("overview")),
            imdb_id=_as_str(raw.get("imdb_id")),
            runtime=self._validate_runtime(raw.get("runtime")),
            original_language=_as_str(raw.get("original_language")),
            poster_url=self._image_url(raw.get("poster_path"), self.POSTER_SIZE),
            backdrop_url=self._image_url(raw.get("backdrop_path"), self.BACKDROP_SIZE),
            genres=self.normalize_genres(raw.get("genres")),
            release_date=release_date,
            release_year=release_date.year if release_date else None,
            released=is_released(release_date, today),
            average_rating=0.0,
            cast=self.normalize_cast(credits.get("cast")),
            crew=self.normalize_crew(credits.get("crew")),
            platforms=self.normalize_platforms(raw.get("watch/providers"), today),
        )

    def normalize_genres(self, raw: Any) -> list[str]:
        """Catalog tags first, then provider genre names not already present."""
        genres: list[str] = []
        seen: set[str] = set()
        names = [*self.catalog_genres, *(_as_str(g.get("name")) for g in _as_list(raw))]
        for name in names:
            if name and name.lower() not in seen:
                seen.add(name.lower())
                genres.append(name)
        return genres

    # -------------------------------------------------------------------------
    # Cast & Crew
    # -------------------------------------------------------------------------

    def normalize_cast(self, raw: Any) -> list[CastMember]:
        """Rank cast by billing order and assign role tiers.

        Entries without a billing order sort after the others, in their
        original order. Entries without a name are dropped.
        """
        entries = [e for e in _as_list(raw) if _as_str(e.get("name"))]
        ranked = sorted(
            enumerate(entries),
            key=lambda pair: (self._order_key(pair[1].get("order")), pair[0]),
        )

        cast: list[CastMember] = []
        for rank, (_, entry) in enumerate(ranked[: self.cast_limit]):
            order = entry.get("order")
            cast.append(
                CastMember(
                    name=_as_str(entry.get("name")) or "",
                    character=_as_str(entry.get("character")),
                    role=self.role_policy.assign(rank, entry),
                    order=order if isinstance(order, int) and not isinstance(order, bool) else None,
                    external_id=self._as_id(entry.get("id")),
                    profile_url=self._image_url(entry.get("profile_path"), self.PROFILE_SIZE),
                )
            )
        return cast

    def normalize_crew(self, raw: Any) -> CrewInfo:
        """Group crew entries by department into named lists."""
        by_department: dict[str, list[Mapping[str, Any]]] = {}
        for entry in _as_list(raw):
            department = _as_str(entry.get("department"))
            if department:
                by_department.setdefault(department, []).append(entry)

        groups = {
            field: self._crew_by_job(by_department.get(department, []), job)
            for field, department, job in self.CREW_DEPARTMENTS
        }
        return CrewInfo(**groups)

    def _crew_by_job(
        self,
        entries: Iterable[Mapping[str, Any]],
        job_filter: str | None,
    ) -> list[CrewMember]:
        members: list[CrewMember] = []
        for entry in entries:
            name = _as_str(entry.get("name"))
            job = _as_str(entry.get("job"))
            if not name:
                continue
            if job_filter is not None and (job is None or job_filter not in job):
                continue
            members.append(
                CrewMember(
                    name=name,
                    job=job,
                    department=_as_str(entry.get("department")),
                    external_id=self._as_id(entry.get("id")),
                    profile_url=self._image_url(entry.get("profile_path"), self.PROFILE_SIZE),
                )
            )
        return members

    # -------------------------------------------------------------------------
    # Platforms
    # -------------------------------------------------------------------------

    def normalize_platforms(self, raw: Any, today: date | None = None) -> list[StreamingPlatform]:
        """Flatten watch providers per configured region and offer type."""
        results = _as_mapping(_as_mapping(raw).get("results"))
        available_from = today or self._today()

        platforms: list[StreamingPlatform] = []
        for region in self.watch_regions:
            region_data = _as_mapping(results.get(region))
            link = _as_str(region_data.get("link"))
            for key, offer_type in self.OFFER_TYPES:
                for provider in _as_list(region_data.get(key)):
                    name = _as_str(provider.get("provider_name"))
                    if not name:
                        continue
                    platforms.append(
                        StreamingPlatform(
                            name=name,
                            region=region,
                            offer_type=offer_type,
                            link=link,
                            logo_url=self._image_url(provider.get("logo_path"), "original"),
                            available_from=available_from,
                        )
                    )
        return platforms

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _image_url(self, path: Any, size: str) -> str | None:
        path = _as_str(path)
        if path is None:
            return None
        return f"{self._image_base_url}/{size}{path}"

    @staticmethod
    def _parse_date(value: Any, external_id: int | None) -> date | None:
        """Parse a ``YYYY-MM-DD`` release date; warn and return None on failure."""
        if not value:
            return None
        try:
            return date.fromisoformat(str(value)[:10])
        except ValueError:
            logger.warning(f"Record {external_id}: unparseable release date {value!r}")
            return None

    @staticmethod
    def _validate_runtime(runtime: Any) -> int | None:
        if isinstance(runtime, int) and not isinstance(runtime, bool) and runtime > 0:
            return runtime
        return None

    @staticmethod
    def _order_key(order: Any) -> float:
        if isinstance(order, int) and not isinstance(order, bool):
            return order
        return float("inf")

    @staticmethod
    def _as_id(value: Any) -> int | None:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        return None
