"""Raster grid model, pixel windowing, decoding and unit conversion."""

from nclimgrid_api.raster.grid import BoundingBox, PixelWindow, RasterGrid, compute_window

__all__ = [
    "BoundingBox",
    "PixelWindow",
    "RasterGrid",
    "compute_window",
]
