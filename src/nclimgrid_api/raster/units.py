"""Unit conversion helpers for raster cell values."""

from typing import Any

import numpy as np
from metpy.units import units

SOURCE_UNITS = "degC"
DISPLAY_UNITS = "degF"


def convert_units(values: Any, from_units: str, to_units: str) -> np.ndarray:
    """Convert an array of values from source to target units."""
    values = np.asarray(values, dtype="float64")
    if from_units == to_units:
        return values

    converted = units.Quantity(values, from_units).to(to_units).magnitude
    return np.asarray(converted, dtype="float64")


def celsius_to_fahrenheit(value: float) -> float:
    """Convert a single Celsius reading to Fahrenheit."""
    return float(convert_units(value, SOURCE_UNITS, DISPLAY_UNITS))
