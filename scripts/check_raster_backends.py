#!/usr/bin/env python3
"""
Report which raster backends are importable.

rasterio is required; GDAL is only used as a fallback reader.
Exits with 1 if rasterio is missing.
"""
import sys

try:
    import rasterio
    print(f"rasterio: {rasterio.__version__} (GDAL {rasterio.__gdal_version__})")
except ImportError as e:
    print(f"rasterio import error: {e}")
    sys.exit(1)

try:
    from osgeo import gdal
    print(f"GDAL fallback: {gdal.VersionInfo()}")
except ImportError as e:
    print(f"GDAL fallback not available: {e}")

sys.exit(0)
