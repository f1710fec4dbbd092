"""MovieHub command line.

Commands:
    sync       Run one catalog sync over a year range and exit.
    schedule   Run the daily catalog sync until interrupted.
    init-db    Create the database tables.
    api        Serve the REST API with uvicorn.
"""

import argparse
import asyncio
import logging
import sys

from moviehub.database import DatabaseConnection, SqlMovieStore
from moviehub.etl.extractors.catalog import CatalogClient
from moviehub.etl.sync import CatalogSync, PeriodicSyncTrigger, SyncReport, SyncStatus
from moviehub.etl.utils import configure_from_settings
from moviehub.settings import get_masked_settings, settings

logger = logging.getLogger("moviehub.cli")


# === Commands ===


async def run_sync_once(start_year: int | None, end_year: int | None) -> SyncReport:
    """Build the pipeline, run one sync, release resources."""
    db = DatabaseConnection.from_settings(settings.database)
    try:
        await db.create_all()
        async with CatalogClient.from_settings(settings.catalog) as client:
            sync = CatalogSync.create(settings.catalog, client, SqlMovieStore(db))
            return await sync.run_sync(start_year, end_year)
    finally:
        await db.dispose()


async def run_schedule() -> None:
    db = DatabaseConnection.from_settings(settings.database)
    try:
        await db.create_all()
        async with CatalogClient.from_settings(settings.catalog) as client:
            sync = CatalogSync.create(settings.catalog, client, SqlMovieStore(db))
            if not sync.enabled:
                logger.warning("TMDB API key not configured, nothing to schedule")
                return
            trigger = PeriodicSyncTrigger(sync, hour=settings.catalog.sync_hour)
            await trigger.run_forever()
    finally:
        await db.dispose()


async def init_db() -> None:
    db = DatabaseConnection.from_settings(settings.database)
    try:
        await db.create_all()
        logger.info("Database tables created")
    finally:
        await db.dispose()


def serve_api() -> None:
    import uvicorn

    uvicorn.run(
        "moviehub.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.reload,
    )


# === CLI ===


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="moviehub",
        description="MovieHub - movie review catalog with TMDB synchronization",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    sync_parser = commands.add_parser("sync", help="Run one catalog sync and exit")
    sync_parser.add_argument(
        "--start-year",
        type=int,
        default=None,
        help=f"First year (default: {settings.catalog.start_year})",
    )
    sync_parser.add_argument(
        "--end-year",
        type=int,
        default=None,
        help=f"Last year (default: current year + {settings.catalog.years_ahead})",
    )

    commands.add_parser("schedule", help="Run the daily sync until interrupted")
    commands.add_parser("init-db", help="Create database tables")
    commands.add_parser("api", help="Serve the REST API")
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    configure_from_settings("moviehub")
    logger.debug(f"Configuration: {get_masked_settings()}")

    try:
        if args.command == "sync":
            start, end = args.start_year, args.end_year
            if start is not None and end is not None and start > end:
                logger.error("--start-year must not be after --end-year")
                return 2
            report = asyncio.run(run_sync_once(start, end))
            logger.info(f"Sync {report.status} in {report.duration_seconds:.1f}s")
            return 1 if report.status is SyncStatus.FAILED else 0

        if args.command == "schedule":
            asyncio.run(run_schedule())
            return 0

        if args.command == "init-db":
            asyncio.run(init_db())
            return 0

        serve_api()
        return 0

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
