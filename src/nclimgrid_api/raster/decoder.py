"""Download and decode GeoTIFF payloads into RasterGrid values."""

import asyncio
import logging

import httpx
import numpy as np
from rasterio.errors import RasterioError
from rasterio.io import MemoryFile

from nclimgrid_api.errors import RasterDecodeError, UpstreamUnavailableError
from nclimgrid_api.raster.grid import RasterGrid

logger = logging.getLogger(__name__)


def decode_raster_bytes(payload: bytes) -> RasterGrid:
    """Parse raster bytes into a RasterGrid with NaN for nodata cells."""
    if not payload:
        raise RasterDecodeError("Raster payload is empty")

    try:
        with MemoryFile(payload) as memfile:
            with memfile.open() as src:
                width, height = src.width, src.height
                if width <= 0 or height <= 0:
                    raise RasterDecodeError(f"Invalid raster dimensions: {width}x{height}")

                transform = src.transform
                masked = src.read(masked=True)
                values = np.ma.filled(masked.astype("float64"), np.nan)
    except RasterioError as exc:
        raise RasterDecodeError(f"Failed to decode raster: {exc}") from exc

    if values.ndim != 3 or values.shape[1:] != (height, width):
        raise RasterDecodeError(f"Decoded band shape {values.shape} does not match {width}x{height}")

    return RasterGrid(
        origin_x=float(transform.c),
        origin_y=float(transform.f),
        pixel_width=float(transform.a),
        pixel_height=float(transform.e),
        width=int(width),
        height=int(height),
        values=values,
    )


class RasterDecoder:
    """Fetch a signed raster URL and decode it in a worker thread."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def fetch(self, url: str) -> bytes:
        try:
            response = await self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise UpstreamUnavailableError(f"Raster download failed: {exc}") from exc
        return response.content

    async def decode(self, url: str) -> RasterGrid:
        payload = await self.fetch(url)
        logger.info(f"Downloaded raster payload ({len(payload) / 1024:.0f} KB)")

        grid = await asyncio.to_thread(decode_raster_bytes, payload)
        logger.info(
            f"Decoded raster {grid.width}x{grid.height} with {grid.band_count} band(s), "
            f"origin=({grid.origin_x}, {grid.origin_y}) pixel=({grid.pixel_width}, {grid.pixel_height})"
        )
        return grid
