"""Dedup gate in front of the detail fetch.

A candidate is a duplicate when a stored movie has the same external id
OR the same normalized title; either match alone is enough. Candidates
without a usable title or id are rejected without touching the store.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from moviehub.database.repositories.base import MovieStore

logger = logging.getLogger(__name__)


class DedupVerdict(StrEnum):
    """Outcome of the dedup check."""

    NEW = "new"
    DUPLICATE_EXTERNAL_ID = "duplicate_external_id"
    DUPLICATE_TITLE = "duplicate_title"
    REJECTED_BLANK_TITLE = "rejected_blank_title"
    REJECTED_MISSING_ID = "rejected_missing_id"

    @property
    def is_duplicate(self) -> bool:
        return self in (DedupVerdict.DUPLICATE_EXTERNAL_ID, DedupVerdict.DUPLICATE_TITLE)

    @property
    def is_rejected(self) -> bool:
        return self in (DedupVerdict.REJECTED_BLANK_TITLE, DedupVerdict.REJECTED_MISSING_ID)


def candidate_title(candidate: Mapping[str, Any]) -> str | None:
    """Title used for dedup: ``original_title``, else ``title``."""
    for key in ("original_title", "title"):
        value = candidate.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def candidate_external_id(candidate: Mapping[str, Any]) -> int | None:
    """Provider id as int, accepting numeric strings."""
    value = candidate.get("id")
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


@dataclass
class DedupStats:
    """Counters per verdict for one sync run."""

    checked: int = 0
    new: int = 0
    duplicates_external_id: int = 0
    duplicates_title: int = 0
    rejected: int = 0

    def record(self, verdict: DedupVerdict) -> None:
        self.checked += 1
        if verdict is DedupVerdict.NEW:
            self.new += 1
        elif verdict is DedupVerdict.DUPLICATE_EXTERNAL_ID:
            self.duplicates_external_id += 1
        elif verdict is DedupVerdict.DUPLICATE_TITLE:
            self.duplicates_title += 1
        else:
            self.rejected += 1

    def log_summary(self) -> None:
        logger.info(
            "Dedup: %d checked, %d new (duplicates: external_id=%d, title=%d; rejected=%d)",
            self.checked,
            self.new,
            self.duplicates_external_id,
            self.duplicates_title,
            self.rejected,
        )


class DedupGate:
    """Checks candidates against the movie store before any detail fetch."""

    def __init__(self, movies: MovieStore) -> None:
        self._movies = movies
        self.stats = DedupStats()

    def reset_stats(self) -> None:
        self.stats = DedupStats()

    async def check(self, candidate: Mapping[str, Any]) -> DedupVerdict:
        verdict = await self._check(candidate)
        self.stats.record(verdict)
        return verdict

    async def _check(self, candidate: Mapping[str, Any]) -> DedupVerdict:
        title = candidate_title(candidate)
        if title is None:
            logger.debug(f"Rejecting candidate {candidate.get('id')}: blank title")
            return DedupVerdict.REJECTED_BLANK_TITLE

        external_id = candidate_external_id(candidate)
        if external_id is None:
            logger.debug(f"Rejecting candidate '{title}': missing id")
            return DedupVerdict.REJECTED_MISSING_ID

        if await self._movies.find_by_external_id(external_id) is not None:
            logger.debug(f"Already stored: external id {external_id}")
            return DedupVerdict.DUPLICATE_EXTERNAL_ID

        if await self._movies.find_by_title_ignore_case(title) is not None:
            logger.debug(f"Already stored: title '{title}'")
            return DedupVerdict.DUPLICATE_TITLE

        return DedupVerdict.NEW

    async def is_new(self, candidate: Mapping[str, Any]) -> bool:
        return await self.check(candidate) is DedupVerdict.NEW
