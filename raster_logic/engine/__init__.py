#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Elementwise raster combination engine.

This package partitions grid rows across worker threads, applies a per-cell
logical rule, and reassembles the rows into an output grid in row order.
"""
from raster_logic.engine.combinator import (
    RowResult, combine, logical_and, logical_not, logical_or, logical_xor
)
from raster_logic.engine.rules import CellRule, get_rule, RULES
from raster_logic.engine.scheduler import RowBlock, schedule_row_blocks, default_num_workers

__all__ = [
    "RowResult", "combine", "logical_and", "logical_not", "logical_or", "logical_xor",
    "CellRule", "get_rule", "RULES",
    "RowBlock", "schedule_row_blocks", "default_num_workers",
]
