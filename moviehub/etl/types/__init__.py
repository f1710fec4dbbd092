"""ETL data types package.

Usage:
    from moviehub.etl.types import CatalogRecord
"""

from moviehub.etl.types.catalog import (
    CatalogCastData,
    CatalogCreditsData,
    CatalogCrewData,
    CatalogDiscoverResponse,
    CatalogGenreData,
    CatalogProviderData,
    CatalogRecord,
    CatalogRegionProvidersData,
)

__all__ = [
    "CatalogRecord",
    "CatalogGenreData",
    "CatalogCastData",
    "CatalogCrewData",
    "CatalogCreditsData",
    "CatalogProviderData",
    "CatalogRegionProvidersData",
    "CatalogDiscoverResponse",
]
