"""
Two-terminal placement helpers.

Both helpers instantiate an element and bind its terminals following the
polarity rule: the first terminal goes to the upstream side, the second
downstream. An element's ``flip`` reverses this. Existing upstream and
downstream nets keep their names when joined to an element's terminals.
"""

from __future__ import annotations

from .elements import Element, TwoTerminal, instantiate, two_terminal
from .netlist import Circuit, Connectable


def place_series(
    circuit: Circuit,
    element: Element,
    upstream: Connectable,
    downstream: Connectable,
) -> TwoTerminal:
    """Place *element* between *upstream* and *downstream*."""
    inst = instantiate(circuit, element)
    first, second = two_terminal(inst)
    circuit.connect(upstream, first)
    circuit.connect(downstream, second)
    return inst


def place_bypass(
    circuit: Circuit,
    element: Element,
    rail: Connectable,
    ground: Connectable,
) -> TwoTerminal:
    """Place *element* across a rail pair, first terminal on the rail."""
    return place_series(circuit, element, rail, ground)
