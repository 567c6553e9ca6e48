"""STAC item search for the monthly temperature collection."""

import logging

import httpx
from pydantic import ValidationError

from nclimgrid_api.errors import ContractViolationError, NotFoundError, UpstreamUnavailableError
from nclimgrid_api.raster.grid import BoundingBox
from nclimgrid_api.stac.schemas import StacItem, StacSearchRequest, StacSearchResponse

logger = logging.getLogger(__name__)


def month_timestamp(year: int, month: int) -> str:
    """Return the mid-month instant used to select a monthly item.

    The 15th keeps the instant well inside the item's validity interval.
    """
    return f"{year:04d}-{month:02d}-15T00:00:00Z"


class CatalogSearchClient:
    """Run single-page item searches against a STAC API."""

    def __init__(self, client: httpx.AsyncClient, *, search_url: str, collection: str) -> None:
        self._client = client
        self._search_url = search_url
        self._collection = collection

    def build_request(self, bbox: BoundingBox, year: int, month: int) -> StacSearchRequest:
        return StacSearchRequest(
            collections=[self._collection],
            bbox=bbox.as_list(),
            datetime=month_timestamp(year, month),
        )

    async def search(self, bbox: BoundingBox, year: int, month: int) -> list[StacItem]:
        """Return matching items in catalog order; raise NotFoundError when there are none."""
        payload = self.build_request(bbox, year, month)
        logger.info(f"Searching {self._collection} for {payload.datetime}")

        try:
            response = await self._client.post(self._search_url, json=payload.model_dump())
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise UpstreamUnavailableError(f"Catalog search failed: {exc}") from exc

        try:
            result = StacSearchResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise ContractViolationError(f"Unexpected catalog search response: {exc}") from exc

        if not result.features:
            raise NotFoundError("No data")

        logger.info(f"Catalog returned {len(result.features)} item(s)")
        return result.features
