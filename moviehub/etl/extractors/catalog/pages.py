"""Page walker over one release year of discover results.

Pages are fetched strictly in increasing order, one at a time, with a
fixed pause before every page after the first to respect the
provider's rate limits.
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass, field

from moviehub.etl.extractors.catalog.client import (
    CatalogClient,
    CatalogCredentialsError,
    DiscoverPage,
    FatalCatalogError,
)
from moviehub.etl.extractors.catalog.retry import RetriesExhaustedError, RetryPolicy
from moviehub.etl.types import CatalogRecord

logger = logging.getLogger(__name__)


class YearFetchError(Exception):
    """Raised when the first page of a year cannot be fetched.

    Attributes:
        year: Release year that was aborted.
    """

    def __init__(self, year: int, cause: BaseException) -> None:
        self.year = year
        super().__init__(f"Year {year}: first page failed: {cause}")


@dataclass
class YearWalk:
    """Counters of the most recent ``walk_year`` call."""

    year: int
    total_pages: int = 0
    total_results: int = 0
    pages_fetched: int = 0
    skipped_pages: list[int] = field(default_factory=list)


class PageWalker:
    """Lazily yields every candidate of a release year.

    Attributes:
        inter_page_delay: Seconds slept before each page after the first.
        max_pages: Provider page cap; pages beyond it are never requested.
        last_walk: Counters for the latest walk, for reporting.
    """

    def __init__(
        self,
        client: CatalogClient,
        retry_policy: RetryPolicy,
        inter_page_delay: float = 0.1,
        max_pages: int = 500,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._client = client
        self._retry = retry_policy
        self.inter_page_delay = inter_page_delay
        self.max_pages = max_pages
        self._sleep = sleep
        self.last_walk: YearWalk | None = None

    async def _fetch(self, year: int, page: int) -> DiscoverPage:
        return await self._retry.call(self._client.fetch_page, year, page)

    async def walk_year(self, year: int) -> AsyncIterator[CatalogRecord]:
        """Yield all candidates for ``year``, page by page.

        Args:
            year: Primary release year.

        Yields:
            Raw candidate records, in provider order.

        Raises:
            YearFetchError: Page 1 failed after retries or with a fatal response.
            CatalogCredentialsError: The API key is missing or rejected.
        """
        walk = YearWalk(year=year)
        self.last_walk = walk

        try:
            first = await self._fetch(year, 1)
        except CatalogCredentialsError:
            raise
        except (RetriesExhaustedError, FatalCatalogError) as e:
            raise YearFetchError(year, e) from e

        walk.pages_fetched = 1
        walk.total_results = first.total_results
        walk.total_pages = min(first.total_pages, self.max_pages)

        if first.total_results == 0:
            logger.debug(f"Year {year}: no results")
            return

        logger.info(f"Year {year}: {first.total_results} results over {walk.total_pages} pages")

        for record in first.results:
            yield record

        for page in range(2, walk.total_pages + 1):
            await self._sleep(self.inter_page_delay)

            try:
                result = await self._fetch(year, page)
            except CatalogCredentialsError:
                raise
            except (RetriesExhaustedError, FatalCatalogError) as e:
                logger.error(f"Year {year}: skipping page {page}: {e}")
                walk.skipped_pages.append(page)
                continue

            walk.pages_fetched += 1
            logger.debug(f"Year {year} page {page}: {len(result.results)} results")

            for record in result.results:
                yield record
