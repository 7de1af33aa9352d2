#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Input/output handling for the raster logic tools.

This module handles loading rasters into read-only grids, allocating output
grids shaped like an input, and writing completed outputs with their metadata.
"""
import os
from typing import Dict, List, Optional, Tuple, Any
import numpy as np
import rasterio
from rasterio._err import CPLE_BaseError
from rasterio.errors import RasterioError

from raster_logic.core.config import DEFAULT_NODATA_VALUE, OUTPUT_CONFIG
from raster_logic.core.errors import InvalidInputError, RasterIOError
from raster_logic.core.logging_config import get_module_logger

# Initialize logger
logger = get_module_logger(__name__)


class Grid:
    """
    Immutable 2D raster grid with a nodata sentinel.

    Parameters
    ----------
    data : array_like
        2D array of samples. Stored as a read-only float64 array.
    nodata : float, optional
        Value marking missing cells, by default DEFAULT_NODATA_VALUE.
    profile : dict, optional
        rasterio profile of the source file, used to create outputs like it.
    path : str, optional
        Source path, for logging.
    """

    def __init__(self, data, nodata: float = DEFAULT_NODATA_VALUE,
                 profile: Optional[Dict[str, Any]] = None, path: Optional[str] = None):
        arr = np.array(data, dtype=np.float64)
        if arr.ndim != 2:
            raise InvalidInputError(f"Grid data must be 2D, got {arr.ndim} dimension(s)")
        arr.flags.writeable = False
        self._data = arr
        self.nodata = float(nodata)
        self.profile = dict(profile) if profile else {}
        self.path = path

    @property
    def data(self) -> np.ndarray:
        return self._data

    @property
    def rows(self) -> int:
        return self._data.shape[0]

    @property
    def columns(self) -> int:
        return self._data.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self._data.shape

    def __getitem__(self, index):
        return self._data[index]

    def row(self, row_index: int) -> np.ndarray:
        return self._data[row_index]

    def __repr__(self) -> str:
        return f"Grid(rows={self.rows}, columns={self.columns}, nodata={self.nodata})"


class OutputGrid:
    """
    Mutable output grid filled one row at a time.

    Rows may be set in any order. Every row starts out as nodata and the
    number of writes per row is recorded so completeness can be verified
    before the grid is persisted.
    """

    def __init__(self, rows: int, columns: int, nodata: float = DEFAULT_NODATA_VALUE,
                 path: Optional[str] = None, profile: Optional[Dict[str, Any]] = None):
        if rows < 0 or columns < 0:
            raise InvalidInputError(f"Invalid output shape: ({rows}, {columns})")
        self.nodata = float(nodata)
        self.data = np.full((rows, columns), self.nodata, dtype=np.float64)
        self.write_counts = np.zeros(rows, dtype=np.int64)
        self.path = path
        self.profile = dict(profile) if profile else {}
        self.dtype = OUTPUT_CONFIG.get("dtype", "float32")
        self.palette = OUTPUT_CONFIG.get("palette")
        self.photometric = OUTPUT_CONFIG.get("photometric")
        self.metadata: List[str] = []

    @property
    def rows(self) -> int:
        return self.data.shape[0]

    @property
    def columns(self) -> int:
        return self.data.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self.data.shape

    def __getitem__(self, index):
        return self.data[index]

    def set_row(self, row_index: int, values) -> None:
        """Store the values of one row."""
        if not 0 <= row_index < self.rows:
            raise InvalidInputError(f"Row index {row_index} outside [0, {self.rows})")
        values = np.asarray(values, dtype=np.float64)
        if values.shape != (self.columns,):
            raise InvalidInputError(
                f"Row {row_index} has {values.size} values, expected {self.columns}"
            )
        self.data[row_index, :] = values
        self.write_counts[row_index] += 1

    def is_complete(self) -> bool:
        """True when every row has been written exactly once."""
        return bool(np.all(self.write_counts == 1))

    def add_metadata_entry(self, entry: str) -> None:
        self.metadata.append(entry)

    def tags(self) -> Dict[str, str]:
        """Raster tags written alongside the data."""
        tags = {}
        if self.palette:
            tags["palette"] = self.palette
        if self.photometric:
            tags["photometric_interpretation"] = self.photometric
        for i, entry in enumerate(self.metadata, start=1):
            tags[f"metadata_{i}"] = entry
        return tags

    def write(self, path: Optional[str] = None) -> str:
        """
        Write the grid to disk with rasterio.

        Parameters
        ----------
        path : str, optional
            Output path. Defaults to the path given at creation.

        Returns
        -------
        str
            Path written.
        """
        path = path or self.path
        if not path:
            raise InvalidInputError("No output path given")
        if not self.is_complete():
            missing = int(np.sum(self.write_counts == 0))
            raise InvalidInputError(
                f"Refusing to write incomplete output: {missing} of {self.rows} rows not set"
            )
        if self.rows == 0 or self.columns == 0:
            raise InvalidInputError("Cannot write an empty raster")

        output_dir = os.path.dirname(path)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)

        profile = dict(self.profile)
        profile.update({
            "driver": profile.get("driver") or OUTPUT_CONFIG.get("driver", "GTiff"),
            "height": self.rows,
            "width": self.columns,
            "count": 1,
            "dtype": self.dtype,
            "nodata": self.nodata,
        })

        logger.info(f"Writing {self.rows}x{self.columns} raster to {path}")
        try:
            with rasterio.open(path, "w", **profile) as dst:
                dst.write(self.data.astype(self.dtype), 1)
                dst.update_tags(**self.tags())
        except (RasterioError, CPLE_BaseError, OSError) as e:
            raise RasterIOError(f"Failed to write raster: {path}: {e}", path) from e

        return path


def load_raster(path: str) -> Grid:
    """
    Load band 1 of a raster file into a Grid.

    Parameters
    ----------
    path : str
        Path to the raster file.

    Returns
    -------
    Grid
        Read-only grid of float64 samples.

    Notes
    -----
    Uses rasterio first and falls back to GDAL if rasterio cannot read the file.
    """
    logger.info(f"Loading raster from {path}")

    if not os.path.exists(path):
        raise RasterIOError(f"Raster file not found: {path}", path)

    try:
        with rasterio.open(path) as src:
            arr = src.read(1).astype(np.float64)
            nodata = src.nodata
            profile = dict(src.profile)
    except RasterioError as e:
        logger.warning(f"Rasterio loading failed: {str(e)}. Trying GDAL...")
        return _load_raster_gdal(path)

    if nodata is None:
        nodata = DEFAULT_NODATA_VALUE
        logger.warning(f"No nodata value found, using default: {nodata}")

    logger.info(f"Loaded raster with shape {arr.shape}, "
                f"{int(np.sum(arr != nodata))} valid cells")
    return Grid(arr, nodata=nodata, profile=profile, path=path)


def _load_raster_gdal(path: str) -> Grid:
    try:
        from osgeo import gdal
    except ImportError as e:
        raise RasterIOError(f"Failed to load raster: {path} (GDAL not available)", path) from e

    try:
        ds = gdal.Open(path)
    except RuntimeError as e:
        raise RasterIOError(f"Failed to load raster: {path}: {e}", path) from e
    if ds is None:
        raise RasterIOError(f"Failed to load raster: {path}", path)

    band = ds.GetRasterBand(1)
    arr = band.ReadAsArray().astype(np.float64)
    nodata = band.GetNoDataValue()
    if nodata is None:
        nodata = DEFAULT_NODATA_VALUE
        logger.warning(f"No nodata value found, using default: {nodata}")

    profile = {
        "driver": OUTPUT_CONFIG.get("driver", "GTiff"),
        "transform": rasterio.Affine.from_gdal(*ds.GetGeoTransform()),
        "crs": ds.GetProjection() or None,
    }
    ds = None

    logger.info(f"Loaded raster with shape {arr.shape}, "
                f"{int(np.sum(arr != nodata))} valid cells")
    return Grid(arr, nodata=nodata, profile=profile, path=path)


def create_like(template: Grid, path: Optional[str] = None) -> OutputGrid:
    """
    Allocate an output grid with the shape, nodata and georeferencing of a template.

    Parameters
    ----------
    template : Grid
        Grid to copy shape, nodata and profile from.
    path : str, optional
        Where the output will be written.

    Returns
    -------
    OutputGrid
        Output grid with every cell set to the template's nodata.
    """
    profile = {
        key: template.profile[key]
        for key in ("crs", "transform")
        if template.profile.get(key) is not None
    }
    profile["driver"] = OUTPUT_CONFIG.get("driver", "GTiff")
    return OutputGrid(template.rows, template.columns, nodata=template.nodata,
                      path=path, profile=profile)
