"""
Converter sizing.

Closed-form design equations over toleranced ranges, and the solution
record that carries chosen component values to an architecture.
"""

from .buck import (
    OUTPUT_RIPPLE_DIVISOR,
    TRIANGLE_RMS_DIVISOR,
    BuckConstraints,
    BuckSolution,
    ConductionMode,
)
from .eseries import SERIES, round_nearest, round_up

__all__ = [
    "BuckConstraints",
    "BuckSolution",
    "ConductionMode",
    "OUTPUT_RIPPLE_DIVISOR",
    "TRIANGLE_RMS_DIVISOR",
    "SERIES",
    "round_nearest",
    "round_up",
]
