"""Per-record state machine of the sync pipeline.

Happy path: CANDIDATE -> CHECKED -> FETCHED -> MAPPED -> PERSISTED.
A rejected candidate (blank title, missing id) goes CANDIDATE -> REJECTED,
a duplicate goes CHECKED -> SKIPPED, and an error in any non-terminal
state goes to FAILED.

Dedup always runs before the detail fetch. Every failure is contained
in the returned outcome, except a credentials error which ends the run.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from moviehub.database.repositories.base import MovieStore
from moviehub.etl.extractors.catalog import CatalogCredentialsError, RecordEnricher
from moviehub.etl.sync.dedup import DedupGate, DedupVerdict, candidate_external_id, candidate_title
from moviehub.schemas import Movie

logger = logging.getLogger(__name__)


class RecordState(StrEnum):
    CANDIDATE = "candidate"
    CHECKED = "checked"
    FETCHED = "fetched"
    MAPPED = "mapped"
    PERSISTED = "persisted"
    SKIPPED = "skipped"
    REJECTED = "rejected"
    FAILED = "failed"


_TRANSITIONS: dict[RecordState, set[RecordState]] = {
    RecordState.CANDIDATE: {RecordState.CHECKED, RecordState.REJECTED, RecordState.FAILED},
    RecordState.CHECKED: {RecordState.FETCHED, RecordState.SKIPPED, RecordState.FAILED},
    RecordState.FETCHED: {RecordState.MAPPED, RecordState.FAILED},
    RecordState.MAPPED: {RecordState.PERSISTED, RecordState.FAILED},
}

TERMINAL_STATES = frozenset(
    {RecordState.PERSISTED, RecordState.SKIPPED, RecordState.REJECTED, RecordState.FAILED}
)


class InvalidTransitionError(Exception):
    """Raised on a state change the machine does not allow."""

    pass


@dataclass
class RecordOutcome:
    """Where one candidate ended up.

    Attributes:
        history: Every state visited, starting with CANDIDATE.
        failed_from: State the record was in when it failed.
        error: Error text for FAILED records.
    """

    external_id: int | None
    title: str | None
    state: RecordState = RecordState.CANDIDATE
    verdict: DedupVerdict | None = None
    movie: Movie | None = None
    error: str | None = None
    failed_from: RecordState | None = None
    history: list[RecordState] = field(default_factory=lambda: [RecordState.CANDIDATE])

    def advance(self, state: RecordState) -> None:
        if state not in _TRANSITIONS.get(self.state, set()):
            raise InvalidTransitionError(f"{self.state} -> {state}")
        if state is RecordState.FAILED:
            self.failed_from = self.state
        self.state = state
        self.history.append(state)

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES


class RecordPipeline:
    """Runs one candidate through dedup, detail fetch, mapping and save."""

    def __init__(self, gate: DedupGate, enricher: RecordEnricher, movies: MovieStore) -> None:
        self.gate = gate
        self._enricher = enricher
        self._movies = movies

    async def process(self, candidate: Mapping[str, Any]) -> RecordOutcome:
        """Process a candidate to a terminal state.

        Raises:
            CatalogCredentialsError: The API key was rejected.
        """
        outcome = RecordOutcome(
            external_id=candidate_external_id(candidate),
            title=candidate_title(candidate),
        )

        try:
            await self._run(candidate, outcome)
        except CatalogCredentialsError:
            raise
        except Exception as e:
            outcome.error = f"{type(e).__name__}: {e}"
            outcome.advance(RecordState.FAILED)
            logger.error(f"Record {outcome.external_id} failed at {outcome.failed_from}: {outcome.error}")

        return outcome

    async def _run(self, candidate: Mapping[str, Any], outcome: RecordOutcome) -> None:
        verdict = await self.gate.check(candidate)
        outcome.verdict = verdict

        if verdict.is_rejected:
            outcome.advance(RecordState.REJECTED)
            return

        outcome.advance(RecordState.CHECKED)
        if verdict.is_duplicate:
            outcome.advance(RecordState.SKIPPED)
            return

        assert outcome.external_id is not None
        detail = await self._enricher.fetch(outcome.external_id)
        outcome.advance(RecordState.FETCHED)

        movie = self._enricher.map(detail, outcome.external_id)
        outcome.advance(RecordState.MAPPED)

        outcome.movie = await self._movies.save(movie)
        outcome.advance(RecordState.PERSISTED)
        logger.debug(f"Saved '{outcome.movie.title}' ({outcome.external_id})")
