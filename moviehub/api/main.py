"""FastAPI application entry point.

Creates the MovieHub REST API: movie and review CRUD, rating
aggregates, a manual sync endpoint, and the optional daily sync task.
"""

import asyncio
import contextlib
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from moviehub.api.dependencies import Container, ServiceContainer
from moviehub.api.routers import movies, reviews, sync
from moviehub.api.schemas import ErrorResponse, HealthResponse
from moviehub.etl.sync import PeriodicSyncTrigger
from moviehub.etl.utils import configure_from_settings
from moviehub.services import (
    AggregateUpdateError,
    InvalidRatingError,
    MovieNotFoundError,
    ReviewNotAllowedError,
    ReviewNotFoundError,
    ServiceError,
)
from moviehub.settings import settings

logger = logging.getLogger(__name__)

_ERROR_STATUS: dict[type[ServiceError], int] = {
    MovieNotFoundError: status.HTTP_404_NOT_FOUND,
    ReviewNotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidRatingError: status.HTTP_400_BAD_REQUEST,
    ReviewNotAllowedError: status.HTTP_409_CONFLICT,
    AggregateUpdateError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# =============================================================================
# LIFESPAN
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Builds the service container unless one was injected, creates the
    tables, and starts the daily sync task when enabled.
    """
    owned = app.state.container is None
    if owned:
        configure_from_settings("moviehub")
        app.state.container = ServiceContainer.from_settings(settings)

    container: ServiceContainer = app.state.container
    if container.db is not None:
        await container.db.create_all()

    trigger_task = _start_sync_trigger(container)
    try:
        yield
    finally:
        if trigger_task is not None:
            trigger_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await trigger_task
        if owned:
            await container.aclose()


def _start_sync_trigger(container: ServiceContainer) -> asyncio.Task[None] | None:
    if container.sync is None or not container.sync.enabled:
        logger.warning("Catalog sync disabled (TMDB API key not configured)")
        return None
    if not settings.catalog.sync_enabled:
        logger.info("Daily catalog sync turned off by CATALOG_SYNC_ENABLED")
        return None

    trigger = PeriodicSyncTrigger(container.sync, hour=settings.catalog.sync_hour)
    return asyncio.create_task(trigger.run_forever(), name="catalog-sync-trigger")


# =============================================================================
# APPLICATION FACTORY
# =============================================================================


def create_app(container: ServiceContainer | None = None) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        container: Prebuilt services (tests); built from settings when None.
    """
    app = FastAPI(
        title=settings.api.title,
        version=settings.api.version,
        description="REST API for the MovieHub review catalog",
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )
    app.state.container = container
    _configure_cors(app)
    _register_exception_handlers(app)
    _register_routers(app)
    return app


def _configure_cors(app: FastAPI) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Authorization", "Content-Type"],
    )


def _error_body(message: str, status_code: int) -> dict:
    return ErrorResponse(
        timestamp=datetime.now(UTC),
        message=message,
        status=status_code,
    ).model_dump(mode="json")


def _register_exception_handlers(app: FastAPI) -> None:
    """Map service exceptions to JSON error bodies."""

    @app.exception_handler(ServiceError)
    async def service_error_handler(_request: Request, exc: ServiceError) -> JSONResponse:
        status_code = next(
            (code for error_type, code in _ERROR_STATUS.items() if isinstance(exc, error_type)),
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
        if status_code >= 500:
            logger.error(f"{type(exc).__name__}: {exc}")
        return JSONResponse(status_code=status_code, content=_error_body(str(exc), status_code))


def _register_routers(app: FastAPI) -> None:
    app.include_router(movies.router, prefix="/api")
    app.include_router(reviews.router, prefix="/api")
    app.include_router(sync.router, prefix="/api")
    app.add_api_route(
        "/api/health",
        health_check,
        methods=["GET"],
        response_model=HealthResponse,
        tags=["Health"],
        summary="Health check",
    )


# =============================================================================
# ROOT ENDPOINTS
# =============================================================================


async def health_check(container: Container) -> HealthResponse:
    """Health check endpoint.

    Returns:
        API status with database reachability and sync state.
    """
    database = await container.db.check_connection() if container.db is not None else False
    return HealthResponse(
        status="healthy",
        version=settings.api.version,
        database=database,
        sync_enabled=bool(container.sync and container.sync.enabled),
        sync_running=bool(container.sync and container.sync.is_running),
    )


app = create_app()
