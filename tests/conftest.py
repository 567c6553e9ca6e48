from collections.abc import Callable

import numpy as np
import pytest
from fastapi.testclient import TestClient
from rasterio.io import MemoryFile
from rasterio.transform import from_origin

from nclimgrid_api.main import app


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def geotiff_bytes() -> Callable[..., bytes]:
    def _build(
        data: np.ndarray,
        *,
        west: float,
        north: float,
        xsize: float,
        ysize: float,
        nodata: float = -9999.0,
    ) -> bytes:
        height, width = data.shape
        with MemoryFile() as memfile:
            with memfile.open(
                driver="GTiff",
                height=height,
                width=width,
                count=1,
                dtype="float32",
                crs="EPSG:4326",
                transform=from_origin(west, north, xsize, ysize),
                nodata=nodata,
            ) as dst:
                dst.write(data.astype(np.float32), 1)
            return bytes(memfile.getbuffer())

    return _build
