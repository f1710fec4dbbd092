"""Unit tests for the command line entry point."""

from unittest.mock import AsyncMock, MagicMock

import pytest

import moviehub.__main__ as cli
from moviehub.etl.sync import SyncReport, SyncStatus


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "configure_from_settings", MagicMock())


class TestParser:
    @staticmethod
    def test_sync_range() -> None:
        args = cli.build_parser().parse_args(["sync", "--start-year", "2020", "--end-year", "2021"])
        assert (args.command, args.start_year, args.end_year) == ("sync", 2020, 2021)

    @staticmethod
    def test_command_required() -> None:
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args([])


class TestMain:
    @staticmethod
    def test_inverted_range(monkeypatch: pytest.MonkeyPatch) -> None:
        run = AsyncMock()
        monkeypatch.setattr(cli, "run_sync_once", run)

        assert cli.main(["sync", "--start-year", "2022", "--end-year", "2020"]) == 2
        run.assert_not_called()

    @staticmethod
    @pytest.mark.parametrize(
        ("status", "exit_code"),
        [(SyncStatus.COMPLETED, 0), (SyncStatus.DISABLED, 0), (SyncStatus.FAILED, 1)],
    )
    def test_sync_exit_code(monkeypatch: pytest.MonkeyPatch, status: SyncStatus, exit_code: int) -> None:
        run = AsyncMock(return_value=SyncReport(status=status))
        monkeypatch.setattr(cli, "run_sync_once", run)

        assert cli.main(["sync", "--start-year", "2020"]) == exit_code
        run.assert_awaited_once_with(2020, None)
