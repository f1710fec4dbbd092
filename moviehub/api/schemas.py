"""Pydantic schemas for API responses that are not domain models."""

from datetime import UTC, datetime

from pydantic import BaseModel, Field, model_validator

from moviehub.etl.sync import SyncReport

# =============================================================================
# HEALTH & ERRORS
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(examples=["healthy"])
    version: str = Field(examples=["1.0.0"])
    database: bool = False
    sync_enabled: bool = False
    sync_running: bool = False
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


class ErrorResponse(BaseModel):
    """Body returned for every handled error."""

    timestamp: datetime
    message: str
    status: int


# =============================================================================
# RATINGS
# =============================================================================


class AverageRatingResponse(BaseModel):
    movie_id: str
    average_rating: float
    review_count: int


# =============================================================================
# SYNC
# =============================================================================


class SyncRequest(BaseModel):
    """Optional year range for a manual sync run."""

    start_year: int | None = Field(default=None, ge=1888, le=2200)
    end_year: int | None = Field(default=None, ge=1888, le=2200)

    @model_validator(mode="after")
    def check_range(self) -> "SyncRequest":
        if self.start_year is not None and self.end_year is not None and self.start_year > self.end_year:
            raise ValueError("start_year must not be after end_year")
        return self


class SyncStatsResponse(BaseModel):
    years_processed: int
    failed_years: list[int]
    skipped_pages: int
    candidates: int
    persisted: int
    skipped: int
    rejected: int
    failed: int


class SyncReportResponse(BaseModel):
    """Result of a sync run."""

    status: str
    start_year: int | None = None
    end_year: int | None = None
    error: str | None = None
    duration_seconds: float = 0.0
    stats: SyncStatsResponse

    @classmethod
    def from_report(cls, report: SyncReport) -> "SyncReportResponse":
        stats = report.stats
        return cls(
            status=report.status.value,
            start_year=report.start_year,
            end_year=report.end_year,
            error=report.error,
            duration_seconds=report.duration_seconds,
            stats=SyncStatsResponse(
                years_processed=stats.years_processed,
                failed_years=list(stats.failed_years),
                skipped_pages=stats.skipped_pages,
                candidates=stats.candidates,
                persisted=stats.persisted,
                skipped=stats.skipped,
                rejected=stats.rejected,
                failed=stats.failed,
            ),
        )


class SyncStateResponse(BaseModel):
    """Whether a sync is running, and the latest finished run."""

    running: bool
    last_report: SyncReportResponse | None = None
