"""STAC catalog search and SAS asset signing clients."""

from nclimgrid_api.stac.schemas import SignedHref, StacAsset, StacItem, StacSearchRequest, StacSearchResponse
from nclimgrid_api.stac.search import CatalogSearchClient, month_timestamp
from nclimgrid_api.stac.signing import AssetSigner

__all__ = [
    "AssetSigner",
    "CatalogSearchClient",
    "SignedHref",
    "StacAsset",
    "StacItem",
    "StacSearchRequest",
    "StacSearchResponse",
    "month_timestamp",
]
