"""Catalog provider (TMDB) configuration settings.

Covers credentials, request timeouts, retry/backoff, and the pacing
of the daily catalog synchronization job.
"""

from datetime import date

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CatalogSettings(BaseSettings):
    """TMDB catalog provider and sync job configuration.

    Attributes:
        api_key: TMDB API key. Empty disables the sync.
        base_url: TMDB API base URL.
        image_base_url: TMDB image CDN base URL (size segment appended).
        original_language: ISO 639-1 code used as discover filter.
        region: Release region used as discover filter.
        watch_regions_raw: Comma-separated regions kept from watch providers.
        catalog_genres_raw: Comma-separated genres tagged on every synced movie.
        page_timeout: Timeout for discover page requests (seconds).
        detail_timeout: Timeout for movie detail requests (seconds).
        retry_attempts: Total attempts per request, first one included.
        retry_base_delay: First backoff delay, doubled on each retry.
        retry_max_delay: Upper bound for a single backoff delay.
        page_delay: Pause before each discover page after the first.
        year_delay: Pause between two consecutive years.
        years_per_batch: Number of years per sync batch.
        start_year: First year of the default sync range.
        years_ahead: Years after the current one included by default.
        max_pages: Provider-side page cap for discover.
        cast_limit: Maximum cast entries kept per movie.
        sync_enabled: Whether the API process schedules the daily sync.
        sync_hour: Hour of day (0-23) at which the daily sync starts.
    """

    api_key: str = Field(default="", alias="TMDB_API_KEY")
    base_url: str = Field(
        default="https://api.themoviedb.org/3",
        alias="TMDB_BASE_URL",
    )
    image_base_url: str = Field(
        default="https://image.tmdb.org/t/p",
        alias="TMDB_IMAGE_BASE_URL",
    )
    user_agent: str = Field(default="MovieHub-Sync/1.0", alias="USER_AGENT")

    # Discover filters
    original_language: str = Field(default="te", alias="TMDB_ORIGINAL_LANGUAGE")
    region: str = Field(default="IN", alias="TMDB_REGION")
    sort_by: str = Field(default="popularity.desc", alias="TMDB_SORT_BY")
    watch_regions_raw: str = Field(default="IN,US", alias="TMDB_WATCH_REGIONS")
    catalog_genres_raw: str = Field(default="Telugu,Indian Cinema", alias="CATALOG_GENRES")

    # Timeouts and retries
    page_timeout: float = Field(default=10.0, gt=0, alias="TMDB_PAGE_TIMEOUT")
    detail_timeout: float = Field(default=15.0, gt=0, alias="TMDB_DETAIL_TIMEOUT")
    retry_attempts: int = Field(default=3, ge=1, alias="CATALOG_RETRY_ATTEMPTS")
    retry_base_delay: float = Field(default=2.0, ge=0, alias="CATALOG_RETRY_BASE_DELAY")
    retry_max_delay: float = Field(default=30.0, ge=0, alias="CATALOG_RETRY_MAX_DELAY")

    # Pacing
    page_delay: float = Field(default=0.1, ge=0, alias="CATALOG_PAGE_DELAY")
    year_delay: float = Field(default=0.25, ge=0, alias="CATALOG_YEAR_DELAY")
    years_per_batch: int = Field(default=5, ge=1, alias="CATALOG_YEARS_PER_BATCH")

    # Range and limits
    start_year: int = Field(default=1990, alias="CATALOG_START_YEAR")
    years_ahead: int = Field(default=15, ge=0, alias="CATALOG_YEARS_AHEAD")
    max_pages: int = Field(default=500, ge=1, alias="TMDB_MAX_PAGES")
    cast_limit: int = Field(default=20, ge=0, alias="CATALOG_CAST_LIMIT")

    # Scheduling
    sync_enabled: bool = Field(default=True, alias="CATALOG_SYNC_ENABLED")
    sync_hour: int = Field(default=0, ge=0, le=23, alias="CATALOG_SYNC_HOUR")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def is_configured(self) -> bool:
        """Check if TMDB API key is configured."""
        return bool(self.api_key.strip() and self.api_key != "your_api_key_here")

    @property
    def watch_regions(self) -> list[str]:
        """Parse watch regions from comma-separated string."""
        return [r.strip().upper() for r in self.watch_regions_raw.split(",") if r.strip()]

    @property
    def catalog_genres(self) -> list[str]:
        """Parse catalog genre tags from comma-separated string."""
        return [g.strip() for g in self.catalog_genres_raw.split(",") if g.strip()]

    def default_year_range(self, today: date | None = None) -> tuple[int, int]:
        """Return the (start, end) years synced when no range is given.

        Args:
            today: Reference date, defaults to the current date.

        Returns:
            Inclusive year range.
        """
        current_year = (today or date.today()).year
        return self.start_year, current_year + self.years_ahead

    @field_validator("start_year")
    @classmethod
    def validate_start_year(cls, v: int) -> int:
        """Validate first sync year is plausible."""
        if v < 1888:
            raise ValueError("CATALOG_START_YEAR must be >= 1888")
        return v

    @field_validator("base_url", "image_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize URLs so paths can be appended directly."""
        return v.rstrip("/")
