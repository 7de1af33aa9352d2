#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Main entry point for the raster logic tools.

This script reads one or two Boolean rasters, combines them cell by cell
with the selected logical operator, and writes the result.
"""
import os
import sys
import time
import argparse
from dataclasses import dataclass
from typing import List, Optional

from raster_logic import __version__
from raster_logic.core.errors import InvalidInputError, RasterLogicError
from raster_logic.core.io import create_like, load_raster
from raster_logic.core.logging_config import setup_logging, get_module_logger
from raster_logic.engine.combinator import combine
from raster_logic.tools import TOOLS, get_tool
from raster_logic.utils.utils import format_elapsed

# Initialize logger
logger = get_module_logger(__name__)


@dataclass(frozen=True)
class ToolPaths:
    """Absolute paths of the tool's inputs and output."""
    input1: str
    input2: Optional[str]
    output: str


def resolve_path(path: str, working_directory: Optional[str] = None) -> str:
    """
    Resolve a user-supplied path.

    A bare file name (no directory separator) is taken relative to the
    working directory; the result is always absolute.
    """
    path = path.strip().strip("\"'")
    if os.sep not in path and (os.altsep is None or os.altsep not in path):
        path = os.path.join(working_directory or os.getcwd(), path)
    return os.path.abspath(path)


def resolve_paths(input1: Optional[str], input2: Optional[str], output: Optional[str],
                  working_directory: Optional[str] = None,
                  unary: bool = False) -> ToolPaths:
    """
    Resolve all tool paths, checking that the required ones were supplied.

    Raises
    ------
    InvalidInputError
        If an input or the output is missing.
    """
    if not input1:
        raise InvalidInputError("No input file specified (--input1)")
    if not unary and not input2:
        raise InvalidInputError("No second input file specified (--input2)")
    if not output:
        raise InvalidInputError("No output file specified (--output)")

    return ToolPaths(
        input1=resolve_path(input1, working_directory),
        input2=resolve_path(input2, working_directory) if input2 and not unary else None,
        output=resolve_path(output, working_directory),
    )


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Returns
    -------
    argparse.Namespace
        Parsed command line arguments.
    """
    parser = argparse.ArgumentParser(
        description="Cell-wise logical operators (OR, AND, XOR, NOT) on Boolean rasters."
    )

    parser.add_argument(
        "-r", "--run", "--operation",
        dest="operation",
        type=str.lower,
        choices=sorted(TOOLS),
        default="or",
        help="Logical operator to apply (default: or)"
    )

    parser.add_argument(
        "--input1", "-i1",
        help="Path to the first input raster"
    )

    parser.add_argument(
        "--input2", "-i2",
        help="Path to the second input raster (not used by 'not')"
    )

    parser.add_argument(
        "--output", "-o",
        help="Path to the output raster"
    )

    parser.add_argument(
        "--wd",
        dest="working_directory",
        help="Working directory for input and output file names without a directory"
    )

    parser.add_argument(
        "--workers", "-w",
        type=int,
        default=None,
        help="Number of worker threads (default: all cores)"
    )

    parser.add_argument(
        "--log-level", "-l",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="INFO",
        help="Logging level (default: INFO)"
    )

    parser.add_argument(
        "--log-file",
        help="Also write log messages to this file"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output with a progress bar"
    )

    parser.add_argument(
        "--toolhelp",
        action="store_true",
        help="Print the selected tool's description, parameters and example usage"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Raster Logic Tools v{__version__}"
    )

    return parser.parse_args(argv)


def run_tool(args: argparse.Namespace) -> int:
    """
    Run the selected logical operator.

    Parameters
    ----------
    args : argparse.Namespace
        Command line arguments.

    Returns
    -------
    int
        Exit code.
    """
    tool = get_tool(args.operation)

    if args.verbose:
        banner = "*" * (15 + len(tool.name))
        logger.info(banner)
        logger.info(f"* Welcome to {tool.name} *")
        logger.info(banner)

    try:
        paths = resolve_paths(args.input1, args.input2, args.output,
                              working_directory=args.working_directory,
                              unary=tool.unary)

        logger.info("Reading data...")
        in1 = load_raster(paths.input1)
        in2 = load_raster(paths.input2) if paths.input2 else None

        start_time = time.perf_counter()
        output = create_like(in1, paths.output)
        combine(in1, in2, rule=tool.rule, num_workers=args.workers,
                output=output, verbose=args.verbose)
        elapsed = format_elapsed(time.perf_counter() - start_time)

        output.add_metadata_entry(f"Created by raster_logic's {tool.name} tool")
        output.add_metadata_entry(f"Elapsed Time (excluding I/O): {elapsed}")

        logger.info("Saving data...")
        output.write()
        logger.info(f"Output file written to {paths.output}")
        logger.info(f"Elapsed Time (excluding I/O): {elapsed}")

        return 0

    except RasterLogicError as e:
        logger.error(str(e))
        return 1
    except Exception as e:
        logger.exception(f"Error running {tool.name}: {str(e)}")
        return 1


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function to run a raster logic tool.
    """
    args = parse_arguments(argv)

    setup_logging(log_level=args.log_level, log_file=args.log_file)

    if args.toolhelp:
        print(get_tool(args.operation).help_text())
        return 0

    return run_tool(args)


if __name__ == "__main__":
    sys.exit(main())
