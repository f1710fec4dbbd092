"""TMDB catalog extractor package.

Classes:
    CatalogClient: Async HTTP client with timeouts and error classification.
    RetryPolicy: Exponential-backoff retry shared by page and detail fetches.
    PageWalker: Sequential page traversal of one release year.
    CatalogNormalizer: Detail record to Movie mapping.
    RecordEnricher: Detail fetch plus mapping.

Usage:
    from moviehub.etl.extractors.catalog import CatalogClient, PageWalker, RetryPolicy

    async with CatalogClient.from_settings(settings.catalog) as client:
        walker = PageWalker(client, RetryPolicy())
        async for record in walker.walk_year(2021):
            ...
"""

from moviehub.etl.extractors.catalog.cast_roles import (
    BillingOrderRoleTierPolicy,
    GenderCodedRoleTierPolicy,
    RoleTierPolicy,
)
from moviehub.etl.extractors.catalog.client import (
    CatalogClient,
    CatalogClientError,
    CatalogCredentialsError,
    CatalogNotFoundError,
    DiscoverPage,
    FatalCatalogError,
    RetryableCatalogError,
)
from moviehub.etl.extractors.catalog.enricher import RecordEnricher
from moviehub.etl.extractors.catalog.normalizer import CatalogNormalizer, InvalidRecordError
from moviehub.etl.extractors.catalog.pages import PageWalker, YearFetchError, YearWalk
from moviehub.etl.extractors.catalog.retry import RetriesExhaustedError, RetryPolicy, is_retryable

__all__ = [
    "BillingOrderRoleTierPolicy",
    "CatalogClient",
    "CatalogClientError",
    "CatalogCredentialsError",
    "CatalogNormalizer",
    "CatalogNotFoundError",
    "DiscoverPage",
    "FatalCatalogError",
    "GenderCodedRoleTierPolicy",
    "InvalidRecordError",
    "PageWalker",
    "RecordEnricher",
    "RetriesExhaustedError",
    "RetryPolicy",
    "RetryableCatalogError",
    "RoleTierPolicy",
    "YearFetchError",
    "YearWalk",
    "is_retryable",
]
