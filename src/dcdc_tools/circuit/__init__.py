"""
Circuit construction primitives.

Provides the context that converter architectures build into:

- ``Circuit``, ``Part``, ``Pin``, ``Net``: parts and electrical nodes
- ``PartSpec``, ``Network``: declarative two-terminal elements
- ``place_series``, ``place_bypass``: polarity-aware placement
- ``Bundle``: named port sets exposed by controllers
"""

from .bundle import (
    BOOT_PORT,
    BUCK_CONVERTER,
    BUCK_REQUIRED_PORTS,
    Bundle,
    buck_converter_bundle,
    has_port,
    require_shape,
)
from .elements import (
    Element,
    Network,
    PartSpec,
    Topology,
    TwoTerminal,
    capacitor,
    diode,
    inductor,
    instantiate,
    mosfet,
    resistor,
    two_terminal,
)
from .netlist import Circuit, Net, Part, Pin
from .placement import place_bypass, place_series

__all__ = [
    # Netlist
    "Circuit",
    "Net",
    "Part",
    "Pin",
    # Elements
    "Element",
    "Network",
    "PartSpec",
    "Topology",
    "TwoTerminal",
    "capacitor",
    "diode",
    "inductor",
    "instantiate",
    "mosfet",
    "resistor",
    "two_terminal",
    # Placement
    "place_bypass",
    "place_series",
    # Bundles
    "BOOT_PORT",
    "BUCK_CONVERTER",
    "BUCK_REQUIRED_PORTS",
    "Bundle",
    "buck_converter_bundle",
    "has_port",
    "require_shape",
]
