"""
Design file support.

Load converter requirements from YAML design files written in
engineering notation ("12V ± 0.5V", "500kHz", "30%").

Example::

    from dcdc_tools.spec import load_spec

    spec = load_spec("rail_5v.yaml")
    design = spec.to_constraints()
    solution = design.solve(series=spec.series)
"""

from .parser import load_spec, validate_spec
from .schema import ArchitectureOptions, BuckDesignSpec
from .units import (
    UnitValue,
    format_unit_value,
    parse_quantity,
    parse_range,
    parse_ratio,
    parse_unit_value,
)

__all__ = [
    "ArchitectureOptions",
    "BuckDesignSpec",
    "UnitValue",
    "format_unit_value",
    "load_spec",
    "parse_quantity",
    "parse_range",
    "parse_ratio",
    "parse_unit_value",
    "validate_spec",
]
