"""Monthly temperature sampling pipeline.

A request runs one sequential chain of awaits: catalog search, asset signing,
raster download and decode, then a synchronous walk over the pixel window
covering the configured bounding box.
"""

import logging
import re
from dataclasses import dataclass

import httpx
import numpy as np

from nclimgrid_api.config import Settings
from nclimgrid_api.errors import ContractViolationError, InvalidInputError
from nclimgrid_api.raster.decoder import RasterDecoder
from nclimgrid_api.raster.grid import PixelWindow, RasterGrid, compute_window
from nclimgrid_api.raster.units import DISPLAY_UNITS, SOURCE_UNITS, convert_units
from nclimgrid_api.schemas import TemperaturePoint
from nclimgrid_api.stac.schemas import StacAsset, StacItem
from nclimgrid_api.stac.search import CatalogSearchClient
from nclimgrid_api.stac.signing import AssetSigner

logger = logging.getLogger(__name__)

DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)
# Position of the tavg band in noaa-nclimgrid-monthly items.
DEFAULT_ASSET_INDEX = 1


@dataclass(frozen=True)
class RequestMonth:
    year: int
    month: int


def parse_request_date(value: str) -> RequestMonth:
    """Validate a ``YYYY-MM-DD`` string; only year and month are kept."""
    if not DATE_PATTERN.fullmatch(value):
        raise InvalidInputError("Invalid date format")

    year, month, _day = (int(part) for part in value.split("-"))
    if not 1 <= month <= 12:
        raise InvalidInputError("Invalid date format")
    return RequestMonth(year=year, month=month)


def select_measurement_asset(item: StacItem, asset_key: str | None = None) -> tuple[str, StacAsset]:
    """Pick the temperature asset of a catalog item.

    Without an explicit key the second declared asset is used, which is where
    the collection currently publishes tavg.
    """
    if asset_key is not None:
        asset = item.assets.get(asset_key)
        if asset is None:
            raise ContractViolationError(f"Catalog item has no '{asset_key}' asset")
        return asset_key, asset

    keys = list(item.assets)
    if len(keys) <= DEFAULT_ASSET_INDEX:
        raise ContractViolationError(f"Catalog item has {len(keys)} asset(s); expected at least 2")
    key = keys[DEFAULT_ASSET_INDEX]
    return key, item.assets[key]


def sample_window(grid: RasterGrid, window: PixelWindow, max_points: int) -> list[TemperaturePoint]:
    """Collect converted cell values of the first band, column by column.

    NaN cells are skipped and never count toward ``max_points``.
    """
    if window.is_empty or max_points <= 0:
        return []

    band = grid.band(0)
    raw = band[window.iy_start : window.iy_end + 1, window.ix_start : window.ix_end + 1]
    converted = convert_units(raw, SOURCE_UNITS, DISPLAY_UNITS)

    points: list[TemperaturePoint] = []
    for ix in window.columns:
        for iy in window.rows:
            row, col = iy - window.iy_start, ix - window.ix_start
            if np.isnan(raw[row, col]):
                continue

            points.append(
                TemperaturePoint(
                    lat=grid.origin_y + iy * grid.pixel_height,
                    lon=grid.origin_x + ix * grid.pixel_width,
                    tavg=float(converted[row, col]),
                )
            )
            if len(points) >= max_points:
                return points
    return points


class TemperatureSampler:
    """Compose catalog search, signing, decoding and window sampling."""

    def __init__(
        self,
        settings: Settings,
        *,
        catalog: CatalogSearchClient,
        signer: AssetSigner,
        decoder: RasterDecoder,
    ) -> None:
        self.settings = settings
        self._catalog = catalog
        self._signer = signer
        self._decoder = decoder

    async def sample(self, date: str) -> list[TemperaturePoint]:
        request_month = parse_request_date(date)
        bbox = self.settings.bbox

        items = await self._catalog.search(bbox, request_month.year, request_month.month)
        item = items[0]
        asset_key, asset = select_measurement_asset(item, self.settings.asset_key)
        logger.info(f"Using asset '{asset_key}' of item {item.id}")

        signed_url = await self._signer.sign(asset.href)
        grid = await self._decoder.decode(signed_url)

        window = compute_window(grid, bbox)
        if window.is_empty:
            logger.warning(f"Bounding box {bbox.as_list()} lies outside the raster extent")
            return []

        points = sample_window(grid, window, self.settings.max_points)
        logger.info(
            f"Sampled {len(points)} point(s) from window "
            f"x={window.ix_start}..{window.ix_end} y={window.iy_start}..{window.iy_end}"
        )
        return points


def build_sampler(settings: Settings, client: httpx.AsyncClient) -> TemperatureSampler:
    """Wire the pipeline components around one shared HTTP client."""
    return TemperatureSampler(
        settings,
        catalog=CatalogSearchClient(client, search_url=settings.stac_search_url, collection=settings.collection),
        signer=AssetSigner(client, sign_url=settings.sign_url),
        decoder=RasterDecoder(client),
    )
