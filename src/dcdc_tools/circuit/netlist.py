"""
Circuit construction context.

A ``Circuit`` owns the parts and nets created while a converter topology
is assembled. Parts expose named pins; ``Circuit.connect`` joins pins
and nets into one electrical node. Joining is idempotent and
commutative: nets that get merged forward to the surviving net, so any
``Net`` reference held by the caller stays valid.

Example::

    circuit = Circuit("psu")
    c1 = circuit.add_part("C", "10uF")
    vin = circuit.net("VIN")
    gnd = circuit.net("GND")
    circuit.connect(c1["1"], vin)
    circuit.connect(c1["2"], gnd)

    circuit.netlist()
    # {'GND': ['C1.2'], 'VIN': ['C1.1']}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from ..logging import _log_debug

# Reference designator prefix per part kind
REF_PREFIXES = {
    "C": "C",
    "L": "L",
    "R": "R",
    "D": "D",
    "Q": "Q",
    "U": "U",
}


@dataclass(eq=False)
class Pin:
    """A named terminal of a part."""

    part: Part
    name: str
    net: Net | None = None

    @property
    def label(self) -> str:
        """Pin label as ``REF.PIN`` (e.g. ``"C1.1"``)."""
        return f"{self.part.ref}.{self.name}"

    def __repr__(self) -> str:
        return f"Pin({self.label!r})"


@dataclass(eq=False)
class Part:
    """An instantiated part with named pins."""

    ref: str
    kind: str
    value: str
    pins: dict[str, Pin] = field(default_factory=dict)

    def __getitem__(self, name: str) -> Pin:
        if name not in self.pins:
            available = list(self.pins.keys())
            raise KeyError(f"Pin '{name}' not found on {self.ref}. Available: {available}")
        return self.pins[name]

    def __repr__(self) -> str:
        return f"Part({self.ref!r}, {self.value!r})"


class Net:
    """An electrical node.

    A net that has been merged into another forwards to it; use
    ``resolve()`` (or any of the public accessors, which resolve
    internally) to reach the surviving net.
    """

    def __init__(self, circuit: Circuit, name: str):
        self.circuit = circuit
        self._name = name
        self._pins: list[Pin] = []
        self._merged_into: Net | None = None

    def resolve(self) -> Net:
        """Return the surviving net after any merges."""
        net = self
        while net._merged_into is not None:
            net = net._merged_into
        return net

    @property
    def name(self) -> str:
        return self.resolve()._name

    @property
    def pins(self) -> list[Pin]:
        return list(self.resolve()._pins)

    @property
    def pin_labels(self) -> list[str]:
        """Sorted ``REF.PIN`` labels of every pin on this net."""
        return sorted(pin.label for pin in self.pins)

    def is_connected(self, other: Net | Pin) -> bool:
        """Return True if *other* is on the same electrical node."""
        if isinstance(other, Pin):
            return other.net is not None and other.net.resolve() is self.resolve()
        return other.resolve() is self.resolve()

    def __repr__(self) -> str:
        return f"Net({self.name!r}, {len(self.pins)} pins)"


Connectable = Union[Pin, Net]


class Circuit:
    """
    Container for parts and nets built up during assembly.

    The circuit is the only mutable object in a design: architectures
    instantiate parts into it and join their pins. It is not safe for
    concurrent writers.
    """

    def __init__(self, name: str = "circuit"):
        self.name = name
        self.parts: list[Part] = []
        self._nets: list[Net] = []
        self._ref_counters: dict[str, int] = {}
        self._net_names: set[str] = set()

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def add_part(
        self,
        kind: str,
        value: str = "",
        pins: tuple[str, ...] = ("1", "2"),
        ref: str = None,
    ) -> Part:
        """
        Instantiate a part.

        Args:
            kind: Part kind ("C", "L", "R", "D", "Q", "U")
            value: Value label (e.g. "10uF")
            pins: Pin names, in terminal order
            ref: Explicit reference designator; auto-numbered if omitted

        Returns:
            The new Part
        """
        if ref is None:
            prefix = REF_PREFIXES.get(kind, kind)
            count = self._ref_counters.get(prefix, 0) + 1
            self._ref_counters[prefix] = count
            ref = f"{prefix}{count}"
        elif any(part.ref == ref for part in self.parts):
            raise ValueError(f"Reference '{ref}' already used in circuit '{self.name}'")

        part = Part(ref=ref, kind=kind, value=value)
        part.pins = {name: Pin(part=part, name=name) for name in pins}
        self.parts.append(part)
        _log_debug(f"Added part {ref} ({kind} {value})".rstrip())
        return part

    def net(self, name: str = None) -> Net:
        """
        Create a new net.

        Names are made unique within the circuit by appending ``_<n>``;
        an omitted name becomes ``N<n>``.
        """
        base = name or f"N{len(self._nets) + 1}"
        unique = base
        suffix = 1
        while unique in self._net_names:
            unique = f"{base}_{suffix}"
            suffix += 1
        self._net_names.add(unique)

        net = Net(self, unique)
        self._nets.append(net)
        return net

    # ------------------------------------------------------------------
    # Connection
    # ------------------------------------------------------------------

    def connect(self, *items: Connectable) -> Net:
        """
        Join pins and nets into a single electrical node.

        The first net among *items* (after resolving merges) survives;
        other nets are merged into it. If no item is on a net yet, a new
        anonymous net is created.

        Returns:
            The surviving net
        """
        if not items:
            raise ValueError("connect() needs at least one pin or net")

        nets: list[Net] = []
        for item in items:
            net = self._net_of(item)
            if net is not None and net not in nets:
                nets.append(net)

        target = nets[0] if nets else self.net()
        for other in nets[1:]:
            self._merge(other, target)

        for item in items:
            if isinstance(item, Pin) and item.net is None:
                item.net = target
                target._pins.append(item)

        _log_debug(f"Connected {', '.join(_describe(i) for i in items)} -> {target.name}")
        return target

    def _net_of(self, item: Connectable) -> Net | None:
        if isinstance(item, Net):
            if item.circuit is not self:
                raise ValueError(f"Net '{item.name}' belongs to circuit '{item.circuit.name}'")
            return item.resolve()
        if isinstance(item, Pin):
            return item.net.resolve() if item.net is not None else None
        raise TypeError(f"Cannot connect {type(item).__name__}; expected Pin or Net")

    def _merge(self, source: Net, target: Net) -> None:
        for pin in source._pins:
            pin.net = target
            target._pins.append(pin)
        source._pins = []
        source._merged_into = target

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def nets(self) -> list[Net]:
        """Surviving nets, in creation order."""
        return [net for net in self._nets if net._merged_into is None]

    def part(self, ref: str) -> Part:
        """Get a part by reference designator."""
        for part in self.parts:
            if part.ref == ref:
                return part
        available = [p.ref for p in self.parts]
        raise KeyError(f"Part '{ref}' not found. Available: {available}")

    def netlist(self) -> dict[str, list[str]]:
        """Map net name to sorted pin labels, for every net with pins."""
        return {net.name: net.pin_labels for net in self.nets if net.pins}

    def __repr__(self) -> str:
        return f"Circuit({self.name!r}, {len(self.parts)} parts, {len(self.nets)} nets)"


def _describe(item: Connectable) -> str:
    if isinstance(item, Pin):
        return item.label
    return item.name
