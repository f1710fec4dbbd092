"""Unit tests for the daily sync trigger."""

from datetime import datetime
from unittest.mock import AsyncMock, MagicMock, call

import pytest

from moviehub.etl.sync import PeriodicSyncTrigger, SyncReport, SyncStatus, next_run_delay


class TestNextRunDelay:
    @staticmethod
    def test_later_today() -> None:
        assert next_run_delay(datetime(2024, 1, 1, 10, 30), 12) == pytest.approx(1.5 * 3600)

    @staticmethod
    def test_tomorrow() -> None:
        assert next_run_delay(datetime(2024, 1, 1, 10, 30), 0) == pytest.approx(13.5 * 3600)

    @staticmethod
    def test_exactly_on_the_hour_waits_a_day() -> None:
        assert next_run_delay(datetime(2024, 1, 1, 0, 0), 0) == pytest.approx(24 * 3600)


class TestPeriodicSyncTrigger:
    @staticmethod
    async def test_runs_after_sleeping() -> None:
        report = SyncReport(status=SyncStatus.COMPLETED)
        sync = MagicMock()
        sync.run_sync = AsyncMock(return_value=report)
        sleep = AsyncMock()
        trigger = PeriodicSyncTrigger(sync, hour=0, clock=lambda: datetime(2024, 1, 1, 23, 0), sleep=sleep)

        await trigger.run_forever(max_runs=2)

        assert sync.run_sync.await_count == 2
        assert sleep.await_args_list == [call(3600.0), call(3600.0)]
        assert trigger.last_report is report

    @staticmethod
    async def test_crash_does_not_stop_schedule() -> None:
        report = SyncReport(status=SyncStatus.COMPLETED)
        sync = MagicMock()
        sync.run_sync = AsyncMock(side_effect=[RuntimeError("boom"), report])
        trigger = PeriodicSyncTrigger(sync, clock=lambda: datetime(2024, 1, 1, 12, 0), sleep=AsyncMock())

        await trigger.run_forever(max_runs=2)

        assert sync.run_sync.await_count == 2
        assert trigger.last_report is report

    @staticmethod
    @pytest.mark.parametrize("hour", [-1, 24])
    def test_invalid_hour(hour: int) -> None:
        with pytest.raises(ValueError):
            PeriodicSyncTrigger(MagicMock(), hour=hour)
