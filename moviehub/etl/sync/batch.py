"""Batch scheduler for the catalog sync.

Splits a year range into fixed-size batches and walks them strictly in
order, one year at a time with a pause between years. Failures are
contained at record and year scope; only a credentials problem (or an
unexpected error) ends the run early.
"""

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum

from moviehub.database.repositories.base import MovieStore
from moviehub.etl.extractors.catalog import (
    CatalogClient,
    CatalogCredentialsError,
    CatalogNormalizer,
    PageWalker,
    RecordEnricher,
    RetryPolicy,
    RoleTierPolicy,
    YearFetchError,
)
from moviehub.etl.sync.dedup import DedupGate
from moviehub.etl.sync.record import RecordOutcome, RecordPipeline, RecordState
from moviehub.settings import CatalogSettings

logger = logging.getLogger(__name__)

def split_into_batches(start_year: int, end_year: int, batch_size: int) -> list[list[int]]:
    """Split ``[start_year, end_year]`` into consecutive batches.

    Example:
        >>> split_into_batches(1990, 2001, 5)
        [[1990, ..., 1994], [1995, ..., 1999], [2000, 2001]]
    """
    if batch_size < 1:
        raise ValueError("batch_size must be >= 1")
    if start_year > end_year:
        raise ValueError(f"start_year {start_year} is after end_year {end_year}")
    years = list(range(start_year, end_year + 1))
    return [years[i : i + batch_size] for i in range(0, len(years), batch_size)]


# =============================================================================
# REPORTING
# =============================================================================


class SyncStatus(StrEnum):
    """Status of a sync run."""

    COMPLETED = "completed"
    DISABLED = "disabled"
    FAILED = "failed"
    ALREADY_RUNNING = "already_running"
    STARTED = "started"


@dataclass
class SyncStats:
    """Counters for one sync run."""

    years_processed: int = 0
    failed_years: list[int] = field(default_factory=list)
    skipped_pages: int = 0
    candidates: int = 0
    persisted: int = 0
    skipped: int = 0
    rejected: int = 0
    failed: int = 0

    def record(self, outcome: RecordOutcome) -> None:
        self.candidates += 1
        if outcome.state is RecordState.PERSISTED:
            self.persisted += 1
        elif outcome.state is RecordState.SKIPPED:
            self.skipped += 1
        elif outcome.state is RecordState.REJECTED:
            self.rejected += 1
        elif outcome.state is RecordState.FAILED:
            self.failed += 1

    def log_summary(self) -> None:
        logger.info(
            "Sync: %d years (%d failed, %d pages skipped), %d candidates -> "
            "%d saved, %d duplicates, %d rejected, %d failed",
            self.years_processed,
            len(self.failed_years),
            self.skipped_pages,
            self.candidates,
            self.persisted,
            self.skipped,
            self.rejected,
            self.failed,
        )


@dataclass
class SyncReport:
    """Result of ``CatalogSync.run_sync``."""

    status: SyncStatus
    start_year: int | None = None
    end_year: int | None = None
    stats: SyncStats = field(default_factory=SyncStats)
    error: str | None = None
    started_at: datetime | None = None
    finished_at: datetime | None = None

    @property
    def duration_seconds(self) -> float:
        if self.started_at is None or self.finished_at is None:
            return 0.0
        return (self.finished_at - self.started_at).total_seconds()


# =============================================================================
# SCHEDULER
# =============================================================================


class CatalogSync:
    """Drives a full catalog import over a year range.

    Build it once (``CatalogSync.create``) and call ``run_sync`` for each
    run, or ``start_in_background`` to run it as a task. A run started
    while another is in flight returns ``ALREADY_RUNNING`` without doing
    anything. ``last_report`` holds the report of the latest finished run.
    """

    def __init__(
        self,
        walker: PageWalker,
        pipeline: RecordPipeline,
        enabled: bool = True,
        years_per_batch: int = 5,
        inter_year_delay: float = 0.25,
        default_range: Callable[[], tuple[int, int]] | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._walker = walker
        self._pipeline = pipeline
        self.enabled = enabled
        self.years_per_batch = years_per_batch
        self.inter_year_delay = inter_year_delay
        self._default_range = default_range or CatalogSettings().default_year_range
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self._background: asyncio.Task[SyncReport] | None = None
        self.last_report: SyncReport | None = None

    @classmethod
    def create(
        cls,
        config: CatalogSettings,
        client: CatalogClient,
        movies: MovieStore,
        role_policy: RoleTierPolicy | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> "CatalogSync":
        """Wire the full pipeline from settings around an existing client."""
        retry_policy = RetryPolicy.from_settings(config, sleep=sleep)
        walker = PageWalker(
            client,
            retry_policy,
            inter_page_delay=config.page_delay,
            max_pages=config.max_pages,
            sleep=sleep,
        )
        normalizer = CatalogNormalizer(
            role_policy=role_policy,
            image_base_url=config.image_base_url,
            watch_regions=config.watch_regions,
            cast_limit=config.cast_limit,
            catalog_genres=config.catalog_genres,
        )
        pipeline = RecordPipeline(
            DedupGate(movies),
            RecordEnricher(client, retry_policy, normalizer),
            movies,
        )
        return cls(
            walker,
            pipeline,
            enabled=config.is_configured,
            years_per_batch=config.years_per_batch,
            inter_year_delay=config.year_delay,
            default_range=config.default_year_range,
            sleep=sleep,
        )

    @property
    def is_running(self) -> bool:
        if self._lock.locked():
            return True
        return self._background is not None and not self._background.done()

    def start_in_background(self, start_year: int | None = None, end_year: int | None = None) -> bool:
        """Schedule ``run_sync`` as a task and return immediately.

        Returns:
            False when the sync is disabled or a run is already in flight.
        """
        if not self.enabled or self.is_running:
            return False
        self._background = asyncio.create_task(self.run_sync(start_year, end_year))
        return True

    async def stop(self) -> None:
        """Cancel the background run, if any."""
        if self._background is None:
            return
        self._background.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._background
        self._background = None

    async def run_sync(self, start_year: int | None = None, end_year: int | None = None) -> SyncReport:
        """Import every year of ``[start_year, end_year]``.

        Args:
            start_year: First year, default from settings (1990).
            end_year: Last year, default current year + 15.

        Returns:
            Report with the final status and counters. Never raises for
            provider or store failures.
        """
        if not self.enabled:
            logger.warning("TMDB API key not configured, skipping catalog sync")
            return SyncReport(status=SyncStatus.DISABLED)

        if self._lock.locked():
            logger.warning("Catalog sync already running, skipping")
            return SyncReport(status=SyncStatus.ALREADY_RUNNING)

        default_start, default_end = self._default_range()
        start = default_start if start_year is None else start_year
        end = default_end if end_year is None else end_year

        async with self._lock:
            self.last_report = await self._run(start, end)
            return self.last_report

    async def _run(self, start_year: int, end_year: int) -> SyncReport:
        report = SyncReport(
            status=SyncStatus.COMPLETED,
            start_year=start_year,
            end_year=end_year,
            started_at=datetime.now(UTC),
        )
        self._pipeline.gate.reset_stats()

        try:
            batches = split_into_batches(start_year, end_year, self.years_per_batch)
            logger.info(
                f"Starting catalog sync {start_year}-{end_year} "
                f"({end_year - start_year + 1} years, {len(batches)} batches)"
            )
            first = True
            for index, batch in enumerate(batches, start=1):
                logger.debug(f"Batch {index}/{len(batches)}: {batch[0]}-{batch[-1]}")
                for year in batch:
                    if not first:
                        await self._sleep(self.inter_year_delay)
                    first = False
                    await self._sync_year(year, report.stats)

        except CatalogCredentialsError as e:
            report.status = SyncStatus.FAILED
            report.error = str(e)
            logger.error(f"Catalog sync aborted, credentials rejected: {e}")
        except Exception as e:
            report.status = SyncStatus.FAILED
            report.error = f"{type(e).__name__}: {e}"
            logger.exception(f"Catalog sync aborted: {e}")
        else:
            logger.info(f"Catalog sync finished ({start_year}-{end_year})")
        finally:
            report.finished_at = datetime.now(UTC)
            report.stats.log_summary()
            self._pipeline.gate.stats.log_summary()

        return report

    async def _sync_year(self, year: int, stats: SyncStats) -> None:
        try:
            async for candidate in self._walker.walk_year(year):
                stats.record(await self._pipeline.process(candidate))
        except YearFetchError as e:
            logger.error(str(e))
            stats.failed_years.append(year)
        finally:
            walk = self._walker.last_walk
            if walk is not None and walk.year == year:
                stats.skipped_pages += len(walk.skipped_pages)

        stats.years_processed += 1
