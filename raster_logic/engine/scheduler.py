#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Row scheduling for the parallel combination engine.

Rows are split into contiguous half-open blocks of ``rows // num_workers``
rows each; the block that reaches ``rows`` is clamped and is the last one.
"""
import os
from dataclasses import dataclass
from typing import List, Optional

from raster_logic.core.config import N_WORKERS
from raster_logic.core.errors import InvalidInputError


@dataclass(frozen=True)
class RowBlock:
    """Half-open row range ``[start_row, end_row)`` handled by one worker."""
    worker_id: int
    start_row: int
    end_row: int

    @property
    def size(self) -> int:
        return self.end_row - self.start_row

    def __len__(self) -> int:
        return self.size

    def rows(self) -> range:
        return range(self.start_row, self.end_row)


def default_num_workers() -> int:
    """Configured worker count, or the host's available parallelism."""
    if N_WORKERS is not None and N_WORKERS >= 1:
        return N_WORKERS
    return max(1, os.cpu_count() or 1)


def schedule_row_blocks(rows: int, num_workers: Optional[int] = None) -> List[RowBlock]:
    """
    Partition ``[0, rows)`` into contiguous row blocks.

    Parameters
    ----------
    rows : int
        Number of rows in the grid.
    num_workers : int, optional
        Target number of workers. Defaults to default_num_workers().

    Returns
    -------
    List[RowBlock]
        Non-empty blocks covering ``[0, rows)`` with no gaps or overlaps.
        May contain one more block than ``num_workers`` when the division
        leaves a remainder; empty when ``rows == 0``.
    """
    if num_workers is None:
        num_workers = default_num_workers()
    if num_workers < 1:
        raise InvalidInputError(f"num_workers must be at least 1, got {num_workers}")
    if rows < 0:
        raise InvalidInputError(f"rows must be non-negative, got {rows}")

    block_size = rows // num_workers
    if block_size == 0:
        # More workers than rows: one worker takes everything
        return [RowBlock(0, 0, rows)] if rows > 0 else []

    blocks = []
    ending_row = 0
    worker_id = 0
    while ending_row < rows:
        starting_row = worker_id * block_size
        ending_row = min(starting_row + block_size, rows)
        blocks.append(RowBlock(worker_id, starting_row, ending_row))
        worker_id += 1
    return blocks
