"""Record enricher: detail fetch plus mapping to a Movie."""

import logging
from typing import Any

from moviehub.etl.extractors.catalog.client import CatalogClient
from moviehub.etl.extractors.catalog.normalizer import CatalogNormalizer
from moviehub.etl.extractors.catalog.retry import RetryPolicy
from moviehub.schemas import Movie

logger = logging.getLogger(__name__)


class RecordEnricher:
    """Turns a confirmed-new external id into an unsaved Movie.

    ``fetch`` and ``map`` are exposed separately so the record pipeline
    can track each step; ``enrich`` chains them.
    """

    def __init__(
        self,
        client: CatalogClient,
        retry_policy: RetryPolicy,
        normalizer: CatalogNormalizer | None = None,
    ) -> None:
        self._client = client
        self._retry = retry_policy
        self.normalizer = normalizer or CatalogNormalizer()

    async def fetch(self, external_id: int) -> dict[str, Any]:
        """Fetch the full detail record under the retry policy.

        Raises:
            RetriesExhaustedError: Transient failures on every attempt.
            FatalCatalogError: Not found, rejected key or malformed payload.
        """
        return await self._retry.call(self._client.fetch_detail, external_id)

    def map(self, detail: dict[str, Any], external_id: int) -> Movie:
        """Map a detail record. Raises ``InvalidRecordError`` on a blank title."""
        movie = self.normalizer.normalize_movie(detail, external_id)
        logger.debug(
            f"Mapped {external_id} '{movie.title}': {len(movie.cast)} cast, "
            f"{len(movie.platforms)} platforms"
        )
        return movie

    async def enrich(self, external_id: int) -> Movie:
        detail = await self.fetch(external_id)
        return self.map(detail, external_id)
