#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Parallel row-partitioned elementwise combination of two grids.

Each row block is handled by its own thread, which reads both input grids
(never writes them) and puts one RowResult per finished row on a shared queue.
The calling thread collects exactly ``rows`` results, in whatever order they
arrive, and places each one at its row index in the output grid. The output
grid has a single writer, so no locks are needed.
"""
import queue
from concurrent.futures import ThreadPoolExecutor
from typing import NamedTuple, Optional, Union
import numpy as np
from tqdm import tqdm

from raster_logic.core.config import PROGRESS_CONFIG
from raster_logic.core.errors import GridShapeMismatch, InvalidInputError, RasterLogicError
from raster_logic.core.io import Grid, OutputGrid
from raster_logic.core.logging_config import get_module_logger
from raster_logic.engine.rules import CellRule, get_rule
from raster_logic.engine.scheduler import RowBlock, schedule_row_blocks
from raster_logic.utils.utils import timer

# Initialize logger
logger = get_module_logger(__name__)


class RowResult(NamedTuple):
    """One computed output row."""
    row_index: int
    values: np.ndarray


class _WorkerFailure(NamedTuple):
    worker_id: int
    error: BaseException


def compute_row(z1: np.ndarray, z2: np.ndarray, nodata1: float, nodata2: float,
                rule: CellRule) -> np.ndarray:
    """
    Apply a rule to one row, propagating nodata.

    Cells where either input is nodata get ``nodata1``; all others get the
    rule's 0.0/1.0 result.
    """
    data = np.array(rule(z1, z2), dtype=np.float64)
    data[(z1 == nodata1) | (z2 == nodata2)] = nodata1
    return data


def _compute_block(block: RowBlock, grid_a: Grid, grid_b: Grid, rule: CellRule,
                   results: queue.Queue) -> None:
    nodata1 = grid_a.nodata
    nodata2 = grid_b.nodata
    try:
        for row in block.rows():
            data = compute_row(grid_a.row(row), grid_b.row(row), nodata1, nodata2, rule)
            results.put(RowResult(row, data))
    except Exception as e:
        # The collector is blocked on the queue; hand it the error instead
        results.put(_WorkerFailure(block.worker_id, e))


def _collect_rows(results: queue.Queue, output: OutputGrid, rows: int,
                  verbose: bool = False) -> None:
    show_bar = verbose and PROGRESS_CONFIG.get("use_tqdm", True)
    log_percent = PROGRESS_CONFIG.get("log_percent", True)
    old_progress = -1

    with tqdm(total=rows, desc="Combining rows", unit="row", disable=not show_bar) as pbar:
        for received in range(1, rows + 1):
            item = results.get()
            if isinstance(item, _WorkerFailure):
                logger.error(f"Worker {item.worker_id} failed: {item.error}")
                raise item.error
            output.set_row(item.row_index, item.values)
            pbar.update(1)

            if log_percent:
                progress = int(100.0 * received / rows)
                if progress != old_progress:
                    logger.debug(f"Progress: {progress}%")
                    old_progress = progress


@timer
def combine(
    grid_a: Grid,
    grid_b: Optional[Grid] = None,
    rule: Union[str, CellRule] = "or",
    num_workers: Optional[int] = None,
    output: Optional[OutputGrid] = None,
    verbose: bool = False
) -> OutputGrid:
    """
    Combine two same-shaped grids cell by cell in parallel.

    Parameters
    ----------
    grid_a : Grid
        First input. Its nodata value is used for the output.
    grid_b : Grid, optional
        Second input. May be omitted for unary rules, which then read
        ``grid_a`` on both sides.
    rule : str or CellRule, optional
        Rule name ('or', 'and', 'xor', 'not') or a CellRule, by default 'or'.
    num_workers : int, optional
        Number of row blocks to aim for. Defaults to the host's parallelism.
    output : OutputGrid, optional
        Pre-allocated output (e.g. from create_like). A new in-memory grid
        shaped like ``grid_a`` is used if None.
    verbose : bool, optional
        Show a progress bar while collecting rows, by default False.

    Returns
    -------
    OutputGrid
        Output with every row written exactly once.

    Raises
    ------
    InvalidInputError
        If an input is missing, the shapes differ, or the rule is unknown.
        Raised before any worker starts.
    """
    rule = get_rule(rule)

    if grid_b is None:
        if not rule.unary:
            raise InvalidInputError(f"Rule '{rule.name}' requires two input grids")
        grid_b = grid_a
    if not isinstance(grid_a, Grid) or not isinstance(grid_b, Grid):
        raise InvalidInputError("Inputs must be Grid instances")
    if grid_a.shape != grid_b.shape:
        raise GridShapeMismatch(grid_a.shape, grid_b.shape)

    rows, columns = grid_a.shape
    if output is None:
        output = OutputGrid(rows, columns, nodata=grid_a.nodata)
    elif output.shape != grid_a.shape:
        raise GridShapeMismatch(grid_a.shape, output.shape)

    blocks = schedule_row_blocks(rows, num_workers)
    if not blocks:
        logger.info("Input grids have no rows; nothing to combine")
        return output

    logger.info(f"Combining {rows}x{columns} grids with rule '{rule.name}' "
                f"using {len(blocks)} worker(s)")

    results = queue.Queue()
    with ThreadPoolExecutor(max_workers=len(blocks),
                            thread_name_prefix="raster-logic") as executor:
        for block in blocks:
            executor.submit(_compute_block, block, grid_a, grid_b, rule, results)
        _collect_rows(results, output, rows, verbose=verbose)

    if not output.is_complete():
        raise RasterLogicError("Output rows were not each written exactly once")

    logger.info(f"Combined {rows} rows with rule '{rule.name}'")

    return output


def logical_or(grid_a: Grid, grid_b: Grid, **kwargs) -> OutputGrid:
    """Cell-wise OR: 1 where either input is non-zero."""
    return combine(grid_a, grid_b, rule="or", **kwargs)


def logical_and(grid_a: Grid, grid_b: Grid, **kwargs) -> OutputGrid:
    """Cell-wise AND: 1 where both inputs are non-zero."""
    return combine(grid_a, grid_b, rule="and", **kwargs)


def logical_xor(grid_a: Grid, grid_b: Grid, **kwargs) -> OutputGrid:
    """Cell-wise XOR: 1 where exactly one input is non-zero."""
    return combine(grid_a, grid_b, rule="xor", **kwargs)


def logical_not(grid: Grid, **kwargs) -> OutputGrid:
    """Cell-wise NOT: 1 where the input is zero."""
    return combine(grid, None, rule="not", **kwargs)
