"""Daily trigger for the catalog sync."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timedelta

from moviehub.etl.sync.batch import CatalogSync, SyncReport

logger = logging.getLogger(__name__)


def next_run_delay(now: datetime, hour: int) -> float:
    """Seconds from ``now`` until the next ``hour``:00, always > 0."""
    target = now.replace(hour=hour, minute=0, second=0, microsecond=0)
    if target <= now:
        target += timedelta(days=1)
    return (target - now).total_seconds()


class PeriodicSyncTrigger:
    """Runs ``CatalogSync.run_sync`` once a day at a fixed hour.

    Meant to run as a background task; cancel the task to stop it.
    """

    def __init__(
        self,
        sync: CatalogSync,
        hour: int = 0,
        clock: Callable[[], datetime] = datetime.now,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if not 0 <= hour <= 23:
            raise ValueError("hour must be in 0-23")
        self._sync = sync
        self.hour = hour
        self._clock = clock
        self._sleep = sleep
        self.last_report: SyncReport | None = None

    async def run_forever(self, max_runs: int | None = None) -> None:
        """Sleep until the configured hour, sync, repeat.

        Args:
            max_runs: Stop after this many runs (None for no limit).
        """
        runs = 0
        while max_runs is None or runs < max_runs:
            delay = next_run_delay(self._clock(), self.hour)
            logger.info(f"Next catalog sync in {delay / 3600:.1f}h")
            await self._sleep(delay)

            try:
                self.last_report = await self._sync.run_sync()
                logger.info(f"Scheduled catalog sync: {self.last_report.status}")
            except Exception:
                logger.exception("Scheduled catalog sync crashed")
            runs += 1
