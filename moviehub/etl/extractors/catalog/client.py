"""TMDB catalog API client.

Handles HTTP communication with The Movie Database API: authentication,
per-request timeouts and classification of failures into retryable and
fatal errors. Retrying itself is the job of ``RetryPolicy``.
"""

import logging
from dataclasses import dataclass, field
from types import TracebackType
from typing import Any, Self

import httpx

from moviehub.etl.types import CatalogRecord
from moviehub.settings import CatalogSettings

logger = logging.getLogger(__name__)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class CatalogClientError(Exception):
    """Base exception for catalog client errors."""

    pass


class RetryableCatalogError(CatalogClientError):
    """Transient failure: timeout, connection reset, 429 or 5xx."""

    pass


class FatalCatalogError(CatalogClientError):
    """Well-formed error response or unusable payload. Never retried."""

    pass


class CatalogNotFoundError(FatalCatalogError):
    """Raised when resource is not found."""

    pass


class CatalogCredentialsError(FatalCatalogError):
    """Raised when the API key is missing or rejected."""

    pass


# =============================================================================
# PAGE RESULT
# =============================================================================


def _as_int(value: Any, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class DiscoverPage:
    """One page of discover results.

    Attributes:
        results: Candidate records of this page (possibly empty).
        page: Page number.
        total_pages: Number of pages reported by the provider (>= 1).
        total_results: Number of results reported by the provider.
    """

    results: list[CatalogRecord] = field(default_factory=list)
    page: int = 1
    total_pages: int = 1
    total_results: int = 0

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "DiscoverPage":
        """Build a page from a raw discover response, defaulting missing fields."""
        raw_results = payload.get("results")
        results = [r for r in raw_results if isinstance(r, dict)] if isinstance(raw_results, list) else []

        return cls(
            results=results,
            page=_as_int(payload.get("page"), 1),
            total_pages=max(_as_int(payload.get("total_pages"), 1), 1),
            total_results=max(_as_int(payload.get("total_results"), 0), 0),
        )


# =============================================================================
# CLIENT
# =============================================================================


class CatalogClient:
    """Async HTTP client for the TMDB API.

    Built once and reused across sync runs; the underlying
    ``httpx.AsyncClient`` is created lazily and released by ``aclose()``
    or by leaving the ``async with`` block.

    Attributes:
        base_url: TMDB API base URL.
    """

    DISCOVER_ENDPOINT = "/discover/movie"
    DETAIL_APPEND = "credits,watch/providers,keywords"

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.themoviedb.org/3",
        original_language: str = "te",
        region: str = "IN",
        sort_by: str = "popularity.desc",
        page_timeout: float = 10.0,
        detail_timeout: float = 15.0,
        user_agent: str = "MovieHub-Sync/1.0",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._original_language = original_language
        self._region = region
        self._sort_by = sort_by
        self._page_timeout = page_timeout
        self._detail_timeout = detail_timeout
        self._user_agent = user_agent
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(
        cls,
        config: CatalogSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "CatalogClient":
        """Create a client from ``CatalogSettings``."""
        return cls(
            api_key=config.api_key,
            base_url=config.base_url,
            original_language=config.original_language,
            region=config.region,
            sort_by=config.sort_by,
            page_timeout=config.page_timeout,
            detail_timeout=config.detail_timeout,
            user_agent=config.user_agent,
            transport=transport,
        )

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> Self:
        self._get_client()
        return self

    async def __aexit__(
        self,
        _exc_type: type[BaseException] | None,
        _exc_val: BaseException | None,
        _exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers={"User-Agent": self._user_agent, "Accept": "application/json"},
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        """Close the underlying HTTP client. Safe to call twice."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    # -------------------------------------------------------------------------
    # HTTP Methods
    # -------------------------------------------------------------------------

    async def _get(
        self,
        endpoint: str,
        params: dict[str, Any],
        timeout: float,
    ) -> dict[str, Any]:
        """Execute one GET request, without retrying.

        Raises:
            CatalogCredentialsError: API key missing (no request is sent) or rejected.
            RetryableCatalogError: Transport failure, 429 or 5xx.
            CatalogNotFoundError: Resource not found (404).
            FatalCatalogError: Any other error response or a malformed payload.
        """
        if not self._api_key:
            raise CatalogCredentialsError("TMDB API key is not configured")

        request_params = {"api_key": self._api_key, **params}
        url = f"{self.base_url}{endpoint}"

        try:
            response = await self._get_client().get(url, params=request_params, timeout=timeout)
        except httpx.TransportError as e:
            logger.warning(f"Transport error on {endpoint}: {type(e).__name__}")
            raise RetryableCatalogError(f"{type(e).__name__} on {endpoint}") from e

        return self._handle_response(response, endpoint)

    @staticmethod
    def _handle_response(
        response: httpx.Response,
        endpoint: str,
    ) -> dict[str, Any]:
        """Handle HTTP response and extract the JSON object."""
        status = response.status_code

        if status == 401:
            raise CatalogCredentialsError(f"Invalid API key: {endpoint}")

        if status == 404:
            raise CatalogNotFoundError(f"Not found: {endpoint}")

        if status == 429:
            retry_after = response.headers.get("Retry-After", "?")
            logger.warning(f"Rate limited. Retry after {retry_after}s")
            raise RetryableCatalogError(f"Rate limited: {endpoint}")

        if status >= 500:
            raise RetryableCatalogError(f"TMDB server error {status}: {endpoint}")

        if status != 200:
            raise FatalCatalogError(f"TMDB API error {status}: {endpoint}")

        try:
            payload = response.json()
        except ValueError as e:
            raise FatalCatalogError(f"Malformed JSON from {endpoint}") from e

        if not isinstance(payload, dict):
            raise FatalCatalogError(f"Unexpected payload type from {endpoint}")

        return payload

    # -------------------------------------------------------------------------
    # API Endpoints
    # -------------------------------------------------------------------------

    async def fetch_page(self, year: int, page: int = 1) -> DiscoverPage:
        """Fetch one discover page for a release year.

        Args:
            year: Primary release year filter.
            page: Page number (1-based).

        Returns:
            Parsed page, with defaults for missing counters.
        """
        params: dict[str, Any] = {
            "with_original_language": self._original_language,
            "region": self._region,
            "primary_release_year": year,
            "sort_by": self._sort_by,
            "page": page,
        }
        payload = await self._get(self.DISCOVER_ENDPOINT, params, self._page_timeout)
        return DiscoverPage.from_payload(payload)

    async def fetch_detail(self, external_id: int) -> dict[str, Any]:
        """Fetch a movie with credits, watch providers and keywords appended.

        Args:
            external_id: TMDB movie ID.

        Returns:
            Raw detail record.
        """
        params = {"append_to_response": self.DETAIL_APPEND}
        return await self._get(f"/movie/{external_id}", params, self._detail_timeout)
