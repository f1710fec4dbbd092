"""Catalog provider (TMDB) data types.

TypedDict definitions for the payloads returned by the discover and
movie detail endpoints. Provider payloads are loosely typed: every key
may be missing or null, so consumers read them with ``.get``.
"""

from typing import NotRequired, TypedDict


class CatalogGenreData(TypedDict):
    """Genre entry from the detail endpoint."""

    id: int
    name: str


class CatalogCastData(TypedDict):
    """Cast entry from the appended credits."""

    id: int
    name: str
    character: NotRequired[str | None]
    order: NotRequired[int | None]
    gender: NotRequired[int | None]
    profile_path: NotRequired[str | None]


class CatalogCrewData(TypedDict):
    """Crew entry from the appended credits."""

    id: int
    name: str
    department: NotRequired[str | None]
    job: NotRequired[str | None]
    profile_path: NotRequired[str | None]


class CatalogCreditsData(TypedDict):
    """Combined credits data."""

    cast: NotRequired[list[CatalogCastData] | None]
    crew: NotRequired[list[CatalogCrewData] | None]


class CatalogProviderData(TypedDict):
    """One watch provider entry."""

    provider_id: int
    provider_name: str
    logo_path: NotRequired[str | None]


class CatalogRegionProvidersData(TypedDict):
    """Watch providers of one region, grouped by offer type."""

    link: NotRequired[str | None]
    flatrate: NotRequired[list[CatalogProviderData] | None]
    rent: NotRequired[list[CatalogProviderData] | None]
    buy: NotRequired[list[CatalogProviderData] | None]


class CatalogRecord(TypedDict):
    """Movie payload from the discover (candidate) or detail endpoint.

    Discover results carry the flat fields only; the detail endpoint
    adds ``genres``, ``credits`` and ``watch/providers`` when requested
    through ``append_to_response``.
    """

    id: int
    title: NotRequired[str | None]
    original_title: NotRequired[str | None]
    overview: NotRequired[str | None]
    release_date: NotRequired[str | None]
    original_language: NotRequired[str | None]
    genre_ids: NotRequired[list[int] | None]
    poster_path: NotRequired[str | None]
    backdrop_path: NotRequired[str | None]
    imdb_id: NotRequired[str | None]
    runtime: NotRequired[int | None]
    genres: NotRequired[list[CatalogGenreData] | None]
    credits: NotRequired[CatalogCreditsData | None]


class CatalogDiscoverResponse(TypedDict):
    """Response from the discover/movie endpoint."""

    page: NotRequired[int | None]
    total_pages: NotRequired[int | None]
    total_results: NotRequired[int | None]
    results: NotRequired[list[CatalogRecord] | None]
