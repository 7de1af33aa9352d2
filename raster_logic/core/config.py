#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Configuration settings for the raster logic tools.

This module centralizes all configuration parameters used across the engine,
I/O and command-line modules, making it easier to modify settings in one place.
"""
from typing import Dict, Any, Optional
import logging
import os
from pathlib import Path

# General configuration
DEFAULT_NODATA_VALUE: float = -9999.0


def parse_worker_count(value: Optional[str]) -> Optional[int]:
    """
    Parse a worker count override such as RASTER_LOGIC_WORKERS.

    Empty, non-integer or non-positive values are ignored (with a warning)
    and give None, meaning all cores.
    """
    if value is None or not value.strip():
        return None
    try:
        workers = int(value)
    except ValueError:
        logging.getLogger(__name__).warning(
            f"Ignoring invalid worker count {value!r}; using all cores"
        )
        return None
    if workers < 1:
        logging.getLogger(__name__).warning(
            f"Ignoring worker count {workers} (must be at least 1); using all cores"
        )
        return None
    return workers


# Number of worker threads (None = all cores)
N_WORKERS: Optional[int] = parse_worker_count(os.environ.get("RASTER_LOGIC_WORKERS"))

# Path configuration
DEFAULT_OUTPUT_DIR: Path = Path.cwd() / "output"

# Output raster configuration
OUTPUT_CONFIG: Dict[str, Any] = {
    "driver": "GTiff",
    "dtype": "float32",
    "palette": "qual.plt",
    "photometric": "categorical",
}

# Progress reporting
PROGRESS_CONFIG: Dict[str, Any] = {
    "use_tqdm": True,      # Progress bar in verbose mode
    "log_percent": True,   # "Progress: N%" debug lines
}

# Logging configuration
LOGGING_CONFIG: Dict[str, Any] = {
    "level": "INFO",  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    "log_to_file": False,
    "log_file": DEFAULT_OUTPUT_DIR / "raster_logic.log",
    "log_format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}
