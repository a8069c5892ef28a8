"""Reusable type definitions for dcdc-tools.

This package provides foundational types used across the dcdc-tools
codebase, starting with toleranced range arithmetic for worst-case
converter calculations.
"""

from __future__ import annotations

from .interval import ToleranceRange, UnitError, as_range, lower, nominal, upper

__all__ = ["ToleranceRange", "UnitError", "as_range", "lower", "nominal", "upper"]
