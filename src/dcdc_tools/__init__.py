"""
dcdc-tools: Sizing and topology assembly for DC-DC converters.

This package computes the design quantities of a buck converter over
toleranced ranges and assembles its power stage around a controller
interface.

Modules:
    types: Toleranced range arithmetic
    design: Buck sizing equations and solution record
    circuit: Circuit construction context, elements and interface bundles
    converters: Converter architectures
    spec: YAML design files and unit parsing
    cli: Command line interface

Quick Start::

    from dcdc_tools import BuckArchitecture, BuckConstraints, Circuit
    from dcdc_tools import ToleranceRange, buck_converter_bundle

    design = BuckConstraints(
        input_voltage=ToleranceRange.from_center_abs(12.0, 0.5),
        output_voltage=5.0,
        input_ripple_max=0.1,
        output_ripple_max=0.05,
        output_current=ToleranceRange.between(0.5, 2.0, typ=1.0),
        frequency=500e3,
        ripple_ratio=0.3,
    )
    solution = design.solve()

    circuit = Circuit("psu")
    bundle = buck_converter_bundle(circuit)
    outputs = BuckArchitecture.from_solution(solution).assemble(circuit, bundle)
"""

__version__ = "0.1.0"

from dcdc_tools.circuit import Bundle, Circuit, Net, Network, PartSpec, buck_converter_bundle
from dcdc_tools.converters import BuckArchitecture, ConverterArchitecture
from dcdc_tools.design import BuckConstraints, BuckSolution, ConductionMode
from dcdc_tools.exceptions import (
    ConfigurationMismatchError,
    DesignValidationError,
    InterfaceShapeError,
)
from dcdc_tools.types import ToleranceRange

__all__ = [
    "__version__",
    "BuckArchitecture",
    "BuckConstraints",
    "BuckSolution",
    "Bundle",
    "Circuit",
    "ConductionMode",
    "ConfigurationMismatchError",
    "ConverterArchitecture",
    "DesignValidationError",
    "InterfaceShapeError",
    "Net",
    "Network",
    "PartSpec",
    "ToleranceRange",
    "buck_converter_bundle",
]
