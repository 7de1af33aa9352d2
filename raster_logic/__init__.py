#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Raster Logic Package.

Parallel cell-wise logical operators (OR, AND, XOR, NOT) for Boolean
raster grids, with nodata propagation.
"""

__version__ = "0.1.0"
__author__ = "Elena Project Team"
__email__ = "user@example.com"
