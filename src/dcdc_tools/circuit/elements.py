"""
Declarative two-terminal elements.

An element describes something that can be instantiated into a
``Circuit`` and then used as a two-terminal device:

- ``PartSpec``: a single part (capacitor, inductor, resistor, diode,
  transistor) with a designated first and second terminal.
- ``Network``: a series or parallel chain of elements, itself usable as a
  two-terminal element.

Polarity: the first terminal (anode, positive plate, source) is the one
placed toward the upstream side. Setting ``flip`` swaps the terminals.

Example::

    bulk = Network.parallel(capacitor("22uF"), capacitor("22uF"), capacitor("100nF"))
    boot = Network.series(resistor("2.2R"), capacitor("100nF"))

    inst = instantiate(circuit, bulk)
    first, second = two_terminal(inst)
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Union

from .netlist import Circuit, Connectable, Part


@dataclass(frozen=True)
class PartSpec:
    """A single instantiable two-terminal part.

    Attributes:
        kind: Part kind ("C", "L", "R", "D", "Q").
        value: Value label, e.g. "10uF".
        terminals: Pin names as (first, second).
        flip: Swap first and second terminal on placement.
        extra_pins: Additional pins that are created but left unconnected
            (e.g. a transistor gate).
    """

    kind: str
    value: str = ""
    terminals: tuple[str, str] = ("1", "2")
    flip: bool = False
    extra_pins: tuple[str, ...] = ()

    def flipped(self) -> PartSpec:
        """Return a copy with the opposite orientation."""
        return replace(self, flip=not self.flip)


class Topology(str, Enum):
    """How the elements of a network are chained."""

    SERIES = "series"
    PARALLEL = "parallel"


@dataclass(frozen=True)
class Network:
    """A chain of two-terminal elements.

    In a series network the second terminal of each element joins the
    first terminal of the next; the network's terminals are the first
    terminal of the first element and the second terminal of the last.
    In a parallel network all first terminals are joined, as are all
    second terminals.
    """

    elements: tuple[Element, ...]
    topology: Topology = Topology.SERIES
    flip: bool = False

    def __post_init__(self) -> None:
        if not self.elements:
            raise ValueError("A network needs at least one element")

    @classmethod
    def series(cls, *elements: Element) -> Network:
        return cls(tuple(elements), Topology.SERIES)

    @classmethod
    def parallel(cls, *elements: Element) -> Network:
        return cls(tuple(elements), Topology.PARALLEL)

    def then(self, element: Element) -> Network:
        """Chain another element after this one, in series."""
        if self.topology is Topology.SERIES and not self.flip:
            return Network(self.elements + (element,), Topology.SERIES)
        return Network((self, element), Topology.SERIES)

    def flipped(self) -> Network:
        return replace(self, flip=not self.flip)


Element = Union[PartSpec, Network]


@dataclass(frozen=True)
class TwoTerminal:
    """An instantiated element, reduced to its two terminals.

    Attributes:
        first: Connection point of the designated first terminal.
        second: Connection point of the designated second terminal.
        parts: Every part instantiated for the element.
    """

    first: Connectable
    second: Connectable
    parts: tuple[Part, ...]


def instantiate(circuit: Circuit, element: Element) -> TwoTerminal:
    """Instantiate an element into *circuit*.

    The element's own ``flip`` is applied, so ``first``/``second`` of the
    result are already in placement order.
    """
    if isinstance(element, PartSpec):
        part = circuit.add_part(
            element.kind,
            element.value,
            pins=element.terminals + element.extra_pins,
        )
        first, second = (part[name] for name in element.terminals)
        inst = TwoTerminal(first, second, (part,))
    elif isinstance(element, Network):
        inst = _instantiate_network(circuit, element)
    else:
        raise TypeError(
            f"Cannot instantiate {type(element).__name__}; expected PartSpec or Network"
        )

    if element.flip:
        return TwoTerminal(inst.second, inst.first, inst.parts)
    return inst


def _instantiate_network(circuit: Circuit, network: Network) -> TwoTerminal:
    children = [instantiate(circuit, child) for child in network.elements]
    parts = tuple(part for child in children for part in child.parts)

    if len(children) == 1:
        return TwoTerminal(children[0].first, children[0].second, parts)

    if network.topology is Topology.PARALLEL:
        first = circuit.connect(*(child.first for child in children))
        second = circuit.connect(*(child.second for child in children))
        return TwoTerminal(first, second, parts)

    for upstream, downstream in zip(children, children[1:]):
        circuit.connect(upstream.second, downstream.first)
    return TwoTerminal(children[0].first, children[-1].second, parts)


def two_terminal(inst: TwoTerminal) -> tuple[Connectable, Connectable]:
    """Return the (first, second) terminals in placement order."""
    return inst.first, inst.second


# ----------------------------------------------------------------------
# Element factories
# ----------------------------------------------------------------------


def capacitor(value: str, polarized: bool = False, flip: bool = False) -> PartSpec:
    """Capacitor; polarized parts use "+" as the first terminal."""
    terminals = ("+", "-") if polarized else ("1", "2")
    return PartSpec("C", value, terminals, flip)


def inductor(value: str, flip: bool = False) -> PartSpec:
    return PartSpec("L", value, ("1", "2"), flip)


def resistor(value: str, flip: bool = False) -> PartSpec:
    return PartSpec("R", value, ("1", "2"), flip)


def diode(value: str = "", flip: bool = False) -> PartSpec:
    """Diode with the anode as first terminal."""
    return PartSpec("D", value, ("A", "K"), flip)


def mosfet(value: str = "", flip: bool = False) -> PartSpec:
    """N-channel switch with the source as first terminal; the gate is left open."""
    return PartSpec("Q", value, ("S", "D"), flip, extra_pins=("G",))
