"""Manual catalog sync trigger."""

from fastapi import APIRouter, Response, status

from moviehub.api.dependencies import Container
from moviehub.api.schemas import SyncReportResponse, SyncRequest, SyncStateResponse
from moviehub.etl.sync import SyncReport, SyncStatus

router = APIRouter(prefix="/sync", tags=["Sync"])


@router.get("", response_model=SyncStateResponse, summary="Catalog sync state")
async def get_sync_state(container: Container) -> SyncStateResponse:
    sync = container.sync
    if sync is None:
        return SyncStateResponse(running=False)

    last = sync.last_report
    return SyncStateResponse(
        running=sync.is_running,
        last_report=SyncReportResponse.from_report(last) if last is not None else None,
    )


@router.post(
    "",
    response_model=SyncReportResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Run catalog sync",
    description=(
        "Start a sync over the given years as a background task and return at once. "
        "Follow it with GET /api/sync. With wait=true the request blocks until the "
        "report is ready, which only suits narrow year ranges."
    ),
)
async def run_sync(
    container: Container,
    response: Response,
    request: SyncRequest | None = None,
    wait: bool = False,
) -> SyncReportResponse:
    request = request or SyncRequest()
    sync = container.sync

    if sync is None or not sync.enabled:
        response.status_code = status.HTTP_200_OK
        return SyncReportResponse.from_report(SyncReport(status=SyncStatus.DISABLED))

    if wait:
        response.status_code = status.HTTP_200_OK
        report = await sync.run_sync(request.start_year, request.end_year)
        return SyncReportResponse.from_report(report)

    if not sync.start_in_background(request.start_year, request.end_year):
        response.status_code = status.HTTP_200_OK
        return SyncReportResponse.from_report(SyncReport(status=SyncStatus.ALREADY_RUNNING))

    return SyncReportResponse.from_report(
        SyncReport(status=SyncStatus.STARTED, start_year=request.start_year, end_year=request.end_year)
    )
