"""Catalog sync orchestration: dedup gate, record pipeline, batches, trigger.

Usage:
    from moviehub.etl.sync import CatalogSync

    sync = CatalogSync.create(settings.catalog, client, movie_store)
    report = await sync.run_sync(2020, 2024)
"""

from moviehub.etl.sync.batch import (
    CatalogSync,
    SyncReport,
    SyncStats,
    SyncStatus,
    split_into_batches,
)
from moviehub.etl.sync.dedup import (
    DedupGate,
    DedupStats,
    DedupVerdict,
    candidate_external_id,
    candidate_title,
)
from moviehub.etl.sync.record import (
    InvalidTransitionError,
    RecordOutcome,
    RecordPipeline,
    RecordState,
)
from moviehub.etl.sync.trigger import PeriodicSyncTrigger, next_run_delay

__all__ = [
    "CatalogSync",
    "DedupGate",
    "DedupStats",
    "DedupVerdict",
    "InvalidTransitionError",
    "PeriodicSyncTrigger",
    "RecordOutcome",
    "RecordPipeline",
    "RecordState",
    "SyncReport",
    "SyncStats",
    "SyncStatus",
    "candidate_external_id",
    "candidate_title",
    "next_run_delay",
    "split_into_batches",
]
