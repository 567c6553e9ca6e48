"""In-memory raster grid and bounding-box pixel windowing."""

import math
from dataclasses import dataclass

import numpy as np

BBox = tuple[float, float, float, float]


@dataclass(frozen=True)
class BoundingBox:
    west: float
    south: float
    east: float
    north: float

    def __post_init__(self) -> None:
        if not self.west < self.east:
            raise ValueError(f"bbox west ({self.west}) must be less than east ({self.east})")
        if not self.south < self.north:
            raise ValueError(f"bbox south ({self.south}) must be less than north ({self.north})")

    @classmethod
    def from_sequence(cls, values: BBox | list[float]) -> "BoundingBox":
        if len(values) != 4:
            raise ValueError("bbox must contain 4 numbers: west, south, east, north")
        west, south, east, north = (float(value) for value in values)
        return cls(west=west, south=south, east=east, north=north)

    def as_list(self) -> list[float]:
        return [self.west, self.south, self.east, self.north]


@dataclass(frozen=True)
class RasterGrid:
    """Decoded raster: georeferencing plus a (bands, rows, cols) value array.

    ``pixel_height`` keeps the sign of the affine transform, so it is negative
    for north-up rasters where the row index grows southward. No-data cells
    are NaN.
    """

    origin_x: float
    origin_y: float
    pixel_width: float
    pixel_height: float
    width: int
    height: int
    values: np.ndarray

    @property
    def band_count(self) -> int:
        return int(self.values.shape[0])

    def band(self, index: int = 0) -> np.ndarray:
        return self.values[index]


@dataclass(frozen=True)
class PixelWindow:
    """Inclusive pixel index ranges; empty when a start exceeds its end."""

    ix_start: int
    ix_end: int
    iy_start: int
    iy_end: int

    @property
    def is_empty(self) -> bool:
        return self.ix_start > self.ix_end or self.iy_start > self.iy_end

    @property
    def columns(self) -> range:
        return range(self.ix_start, self.ix_end + 1)

    @property
    def rows(self) -> range:
        return range(self.iy_start, self.iy_end + 1)


def compute_window(grid: RasterGrid, bbox: BoundingBox) -> PixelWindow:
    """Return the pixel window of ``grid`` covering ``bbox``.

    Rows are counted southward from the grid origin, so the row step is the
    magnitude of the pixel height regardless of its sign.
    """
    row_step = abs(grid.pixel_height)

    ix_start = max(0, math.floor((bbox.west - grid.origin_x) / grid.pixel_width))
    ix_end = min(grid.width - 1, math.ceil((bbox.east - grid.origin_x) / grid.pixel_width))
    iy_start = max(0, math.floor((grid.origin_y - bbox.north) / row_step))
    iy_end = min(grid.height - 1, math.ceil((grid.origin_y - bbox.south) / row_step))

    return PixelWindow(ix_start=ix_start, ix_end=ix_end, iy_start=iy_start, iy_end=iy_end)
