#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Helpers for building synthetic Boolean rasters in tests.
"""
import os
from typing import Optional, Tuple
import numpy as np
import rasterio
from rasterio.transform import from_origin


def create_synthetic_boolean(
    shape: Tuple[int, int] = (40, 30),
    nodata_value: float = -9999.0,
    true_fraction: float = 0.4,
    missing_percentage: float = 0.1,
    seed: Optional[int] = None
) -> np.ndarray:
    """
    Create a random 0/1 raster with some nodata cells.

    Parameters
    ----------
    shape : tuple, optional
        Shape of the raster, by default (40, 30).
    nodata_value : float, optional
        Value to use for missing data, by default -9999.0.
    true_fraction : float, optional
        Fraction of valid cells set to a non-zero value, by default 0.4.
    missing_percentage : float, optional
        Fraction of cells set to nodata, by default 0.1.
    seed : int, optional
        Random seed for reproducibility.
    """
    rng = np.random.default_rng(seed)
    values = (rng.random(shape) < true_fraction).astype(np.float64)
    # Some non-zero values other than 1 are still "true"
    values[values == 1.0] *= rng.integers(1, 5, size=int(values.sum()))
    values[rng.random(shape) < missing_percentage] = nodata_value
    return values


def save_synthetic_raster(
    output_path: str,
    values: np.ndarray,
    nodata_value: Optional[float] = -9999.0
) -> str:
    """Write a single-band GeoTIFF."""
    output_dir = os.path.dirname(output_path)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)

    profile = {
        "driver": "GTiff",
        "height": values.shape[0],
        "width": values.shape[1],
        "count": 1,
        "dtype": "float32",
        "transform": from_origin(0.0, float(values.shape[0]), 10.0, 10.0),
    }
    if nodata_value is not None:
        profile["nodata"] = nodata_value

    with rasterio.open(output_path, "w", **profile) as dst:
        dst.write(values.astype(np.float32), 1)
    return output_path


def expected_or(a: np.ndarray, b: np.ndarray, nodata1: float, nodata2: float) -> np.ndarray:
    """Cell-by-cell reference result, computed without the engine."""
    out = np.empty_like(a, dtype=np.float64)
    for row in range(a.shape[0]):
        for col in range(a.shape[1]):
            z1, z2 = a[row, col], b[row, col]
            if z1 == nodata1 or z2 == nodata2:
                out[row, col] = nodata1
            elif z1 != 0.0 or z2 != 0.0:
                out[row, col] = 1.0
            else:
                out[row, col] = 0.0
    return out
