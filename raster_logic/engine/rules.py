#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Per-cell logical rules.

A rule maps two rows of valid (non-nodata) samples to a row of 0.0/1.0
values, treating any non-zero sample as true. Nodata handling is done by the
engine, so rules never see missing cells.
"""
from typing import Callable, Dict, NamedTuple, Union
import numpy as np

from raster_logic.core.errors import InvalidInputError


class CellRule(NamedTuple):
    """A named per-cell rule. ``unary`` rules ignore their second operand."""
    name: str
    func: Callable[[np.ndarray, np.ndarray], np.ndarray]
    unary: bool = False

    def __call__(self, z1: np.ndarray, z2: np.ndarray) -> np.ndarray:
        return self.func(z1, z2)


def _or(z1: np.ndarray, z2: np.ndarray) -> np.ndarray:
    return np.where((z1 != 0.0) | (z2 != 0.0), 1.0, 0.0)


def _and(z1: np.ndarray, z2: np.ndarray) -> np.ndarray:
    return np.where((z1 != 0.0) & (z2 != 0.0), 1.0, 0.0)


def _xor(z1: np.ndarray, z2: np.ndarray) -> np.ndarray:
    return np.where((z1 != 0.0) != (z2 != 0.0), 1.0, 0.0)


def _not(z1: np.ndarray, z2: np.ndarray) -> np.ndarray:
    return np.where(z1 == 0.0, 1.0, 0.0)


OR = CellRule("or", _or)
AND = CellRule("and", _and)
XOR = CellRule("xor", _xor)
NOT = CellRule("not", _not, unary=True)

RULES: Dict[str, CellRule] = {rule.name: rule for rule in (OR, AND, XOR, NOT)}


def get_rule(rule: Union[str, CellRule]) -> CellRule:
    """Look up a rule by (case-insensitive) name; CellRule instances pass through."""
    if isinstance(rule, CellRule):
        return rule
    try:
        return RULES[str(rule).lower()]
    except KeyError:
        raise InvalidInputError(
            f"Unknown rule '{rule}'. Options are: {', '.join(sorted(RULES))}"
        ) from None
