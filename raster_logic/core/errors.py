#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Error types for the raster logic tools.

InvalidInputError is raised for anything the caller got wrong (mismatched
grids, missing inputs, bad worker counts); RasterIOError wraps failures of
the raster reader and writer.
"""
from typing import Optional, Tuple


class RasterLogicError(Exception):
    """Base class for all raster logic errors."""


class InvalidInputError(RasterLogicError, ValueError):
    """Raised when the inputs to a tool are missing or inconsistent."""


class GridShapeMismatch(InvalidInputError):
    """
    Raised when the two input grids do not have the same rows and columns.

    Attributes
    ----------
    expected_shape : tuple
        Shape of the first input grid.
    actual_shape : tuple
        Shape of the second input grid.
    """

    def __init__(self, expected_shape: Tuple[int, int], actual_shape: Tuple[int, int]):
        message = (
            "The input files must have the same number of rows and columns "
            f"and spatial extent (got {expected_shape} and {actual_shape})."
        )
        super().__init__(message)
        self.expected_shape = expected_shape
        self.actual_shape = actual_shape


class RasterIOError(RasterLogicError, IOError):
    """
    Raised when a raster cannot be read or written.

    Attributes
    ----------
    path : str, optional
        Path of the raster involved.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path
