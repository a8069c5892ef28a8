"""Buck (step-down) converter architecture."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..circuit.bundle import BOOT_PORT, BUCK_CONVERTER, BUCK_REQUIRED_PORTS, has_port, require_shape
from ..circuit.elements import Element, Network, capacitor, diode, inductor, mosfet
from ..circuit.netlist import Circuit, Net
from ..circuit.placement import place_bypass, place_series
from ..design.buck import BuckSolution
from ..exceptions import ConfigurationMismatchError
from ..logging import _log_info
from ..spec.units import format_unit_value


@dataclass(frozen=True)
class BuckArchitecture:
    """
    Step-down power stage around a buck controller.

    Schematic:
        VIN ──┬──────────── CTRL ── SW ──┬── [L] ──┬──── VOUT
              │              │           │         │
            [C_in]         BOOT ─[C_bst]─┤       [C_out]
              │                          │         │
              │                        [D_ls]      │
        GND ──┴──────────────────────────┴─────────┴────

    The controller interface must provide VIN, GND, SW and FB. BOOT is
    required only when a bootstrap element is given. The low-side
    element is omitted for synchronous controllers, whose low-side
    switch is internal.

    Attributes:
        input_capacitance: Bulk capacitance across VIN and GND.
        output_capacitance: Bulk capacitance across VOUT and GND.
        inductor: Inductor from the switch node to VOUT.
        bootstrap: Element between BOOT and the switch node, if any.
        low_side: Free-wheeling element from GND to the switch node, if any.
    """

    input_capacitance: Element
    output_capacitance: Element
    inductor: Element
    bootstrap: Optional[Element] = None
    low_side: Optional[Element] = None

    @classmethod
    def from_solution(
        cls,
        solution: BuckSolution,
        input_caps: int = 1,
        output_caps: int = 1,
        bootstrap: Optional[Element] = None,
        low_side: Optional[Element] = None,
    ) -> BuckArchitecture:
        """
        Build an architecture from chosen component values.

        Bulk capacitance is split evenly across *input_caps* and
        *output_caps* parallel capacitors.

        Args:
            solution: Chosen inductance and capacitances
            input_caps: Number of parallel input capacitors
            output_caps: Number of parallel output capacitors
            bootstrap: Optional bootstrap element
            low_side: Optional low-side element
        """
        if input_caps < 1 or output_caps < 1:
            raise ValueError("Need at least one input and one output capacitor")
        return cls(
            input_capacitance=_bank(solution.input_capacitance, input_caps),
            output_capacitance=_bank(solution.output_capacitance, output_caps),
            inductor=inductor(format_unit_value(solution.inductance, "H")),
            bootstrap=bootstrap,
            low_side=low_side,
        )

    def assemble(self, circuit: Circuit, interface: object) -> dict[str, Net]:
        """
        Build the power stage around *interface*.

        Steps run in a fixed order; a failure in a later step leaves the
        parts of earlier steps in *circuit*.

        Args:
            circuit: Circuit to build into
            interface: ``buck-converter`` bundle of the controller

        Returns:
            ``{"VOUT": output net}``

        Raises:
            InterfaceShapeError: If *interface* lacks VIN, GND, SW or FB
            ConfigurationMismatchError: If a bootstrap element is given but
                the interface has no BOOT port
        """
        ports = require_shape(interface, BUCK_REQUIRED_PORTS, BUCK_CONVERTER)
        vin, gnd = ports["VIN"], ports["GND"]

        _log_info(f"Assembling buck converter in {circuit.name}")

        place_bypass(circuit, self.input_capacitance, vin, gnd)

        sw = circuit.connect(ports["SW"])
        vout = circuit.net("VOUT")
        place_series(circuit, self.inductor, sw, vout)

        place_bypass(circuit, self.output_capacitance, vout, gnd)

        if self.bootstrap is not None:
            if not has_port(interface, BOOT_PORT):
                raise ConfigurationMismatchError("bootstrap", BOOT_PORT, list(ports))
            place_series(circuit, self.bootstrap, ports[BOOT_PORT], sw)
            _log_info("Added bootstrap network")

        if self.low_side is not None:
            place_series(circuit, self.low_side, gnd, sw)
            _log_info("Added low-side conduction path")

        return {"VOUT": vout}


def _bank(total: float, count: int) -> Element:
    value = format_unit_value(total / count, "F")
    if count == 1:
        return capacitor(value)
    return Network.parallel(*(capacitor(value) for _ in range(count)))


def bootstrap_capacitor(value: str = "100nF") -> Element:
    """Bootstrap capacitor between BOOT and the switch node."""
    return capacitor(value)


def low_side_element(kind: str, value: str = "") -> Element:
    """Low-side element by kind: "diode" (Schottky catch diode) or "mosfet"."""
    if kind == "diode":
        return diode(value)
    if kind == "mosfet":
        return mosfet(value)
    raise ValueError(f"Unknown low-side element {kind!r}; expected 'diode' or 'mosfet'")
