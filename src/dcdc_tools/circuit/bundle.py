"""
Electrical interface bundles.

A bundle is a named set of ports (nets) that a controller exposes to the
surrounding circuit. The ``buck-converter`` bundle carries the input,
ground, switch and feedback nodes plus an optional bootstrap node.

Bundles are usually derived rather than declared directly: taken from a
controller part's pins, narrowed with ``select`` or adapted with
``renamed``. The resulting bundle does not remember how it was
declared, so code that needs an optional port must check for it with
``has_port`` on the actual instance.

Example::

    circuit = Circuit("psu")
    ctrl = circuit.add_part("U", "TPS54331", pins=("VIN", "GND", "PH", "FB", "BOOT"))
    bundle = Bundle.from_part(
        circuit, ctrl, BUCK_CONVERTER,
        {"VIN": "VIN", "GND": "GND", "SW": "PH", "FB": "FB", "BOOT": "BOOT"},
    )
    has_port(bundle, "BOOT")  # True
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from ..exceptions import InterfaceShapeError
from .netlist import Circuit, Net, Part

BUCK_CONVERTER = "buck-converter"
BUCK_REQUIRED_PORTS = ("VIN", "GND", "SW", "FB")
BOOT_PORT = "BOOT"


class Bundle:
    """An immutable named set of nets.

    Attributes:
        kind: Interface kind name (e.g. "buck-converter").
        ports: Read-only mapping of port name to net.
    """

    def __init__(self, kind: str, ports: Mapping[str, Net]):
        self.kind = kind
        self._ports = dict(ports)

    @property
    def ports(self) -> Mapping[str, Net]:
        return MappingProxyType(self._ports)

    def port(self, name: str) -> Net:
        """Get a port by name."""
        if name not in self._ports:
            available = list(self._ports.keys())
            raise KeyError(f"Port '{name}' not found. Available: {available}")
        return self._ports[name]

    def has_port(self, name: str) -> bool:
        return name in self._ports

    def select(self, *names: str, kind: str = None) -> Bundle:
        """Return a bundle with only the named ports."""
        return Bundle(kind or self.kind, {name: self.port(name) for name in names})

    def renamed(self, mapping: Mapping[str, str], kind: str = None) -> Bundle:
        """Return a bundle with ports renamed per *mapping* (old -> new).

        Ports not in *mapping* keep their names.
        """
        return Bundle(
            kind or self.kind,
            {mapping.get(name, name): net for name, net in self._ports.items()},
        )

    @classmethod
    def from_part(
        cls,
        circuit: Circuit,
        part: Part,
        kind: str,
        pin_map: Mapping[str, str],
    ) -> Bundle:
        """Build a bundle from a part's pins.

        Args:
            circuit: Circuit the part belongs to
            part: Part providing the pins
            kind: Interface kind name
            pin_map: Port name -> pin name
        """
        return cls(kind, {port: circuit.connect(part[pin]) for port, pin in pin_map.items()})

    def __repr__(self) -> str:
        return f"Bundle({self.kind!r}, ports={list(self._ports)})"


def buck_converter_bundle(circuit: Circuit, bootstrap: bool = False, prefix: str = "") -> Bundle:
    """Declare a ``buck-converter`` bundle with fresh nets.

    Args:
        circuit: Circuit to create the nets in
        bootstrap: If True, include the BOOT port
        prefix: Net name prefix (e.g. "U1_")
    """
    names = BUCK_REQUIRED_PORTS + ((BOOT_PORT,) if bootstrap else ())
    return Bundle(BUCK_CONVERTER, {name: circuit.net(f"{prefix}{name}") for name in names})


def _ports_of(interface: object) -> Mapping[str, object] | None:
    ports = getattr(interface, "ports", None)
    if isinstance(ports, Mapping):
        return ports
    return None


def has_port(interface: object, name: str) -> bool:
    """Return True if *interface* actually exposes a port called *name*.

    Inspects the port set of the instance, not how it was declared.
    """
    ports = _ports_of(interface)
    return ports is not None and isinstance(ports.get(name), Net)


def require_shape(
    interface: object,
    required: tuple[str, ...] = BUCK_REQUIRED_PORTS,
    kind: str = BUCK_CONVERTER,
) -> Mapping[str, Net]:
    """Check that *interface* exposes every required port as a net.

    Returns:
        The interface's port mapping

    Raises:
        InterfaceShapeError: If the object has no port mapping or lacks ports
    """
    ports = _ports_of(interface)
    if ports is None:
        raise InterfaceShapeError(kind, list(required), interface)
    missing = [name for name in required if not isinstance(ports.get(name), Net)]
    if missing:
        raise InterfaceShapeError(kind, missing, interface)
    return ports
