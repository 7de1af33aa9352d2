#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Tool descriptors for the raster logic operators.

Each tool pairs a user-facing name, description and parameter help with the
per-cell rule it runs.
"""
import os
from dataclasses import dataclass
from typing import Dict

from raster_logic.core.errors import InvalidInputError

_BINARY_PARAMETERS = (
    "--input1, -i1   Input raster file.\n"
    "--input2, -i2   Input raster file.\n"
    "-o, --output    Output raster file.\n"
)

_UNARY_PARAMETERS = (
    "--input1, -i1   Input raster file.\n"
    "-o, --output    Output raster file.\n"
)


@dataclass(frozen=True)
class ToolInfo:
    name: str
    description: str
    rule: str
    unary: bool = False

    @property
    def parameters(self) -> str:
        return _UNARY_PARAMETERS if self.unary else _BINARY_PARAMETERS

    def example_usage(self, exe: str = "raster-logic") -> str:
        """Example command line, with path separators for the host platform."""
        sep = os.sep
        wd = f"{sep}path{sep}to{sep}data{sep}"
        usage = f">>{exe} -r={self.name} --wd=\"{wd}\" --input1='in1.tif'"
        if not self.unary:
            usage += " --input2='in2.tif'"
        return usage + " -o=output.tif"

    def help_text(self, exe: str = "raster-logic") -> str:
        return (
            f"{self.name}\n\n{self.description}\n\n"
            f"Parameters:\n{self.parameters}\n"
            f"Example usage:\n{self.example_usage(exe)}\n"
        )


TOOLS: Dict[str, ToolInfo] = {
    tool.name.lower(): tool for tool in (
        ToolInfo("Or", "Performs a logical OR operator on two Boolean raster images.", "or"),
        ToolInfo("And", "Performs a logical AND operator on two Boolean raster images.", "and"),
        ToolInfo("Xor", "Performs a logical XOR operator on two Boolean raster images.", "xor"),
        ToolInfo("Not", "Performs a logical NOT operator on a Boolean raster image.", "not",
                 unary=True),
    )
}


def get_tool(name: str) -> ToolInfo:
    """Look up a tool by case-insensitive name."""
    try:
        return TOOLS[name.lower()]
    except KeyError:
        raise InvalidInputError(
            f"Unknown tool '{name}'. Options are: {', '.join(t.name for t in TOOLS.values())}"
        ) from None
