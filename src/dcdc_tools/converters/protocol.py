"""
Converter architecture protocol.

This module defines the Protocol that every converter topology
implements. An architecture takes the electrical interface of a
controller and builds the power stage around it inside a caller-owned
circuit, returning the outputs it creates.

Example::

    from dcdc_tools.circuit import Bundle, Circuit, Net
    from dcdc_tools.converters.protocol import ConverterArchitecture

    class ChargePumpArchitecture:
        '''Inverting charge pump: one flying and one output capacitor.'''

        def assemble(self, circuit: Circuit, interface: Bundle) -> dict[str, Net]:
            ...
            return {"VNEG": vneg}

    isinstance(ChargePumpArchitecture(), ConverterArchitecture)  # True
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..circuit.netlist import Circuit, Net


@runtime_checkable
class ConverterArchitecture(Protocol):
    """Protocol for converter topologies.

    Implementations are independent of each other; a new topology (boost,
    flyback, ...) only has to provide ``assemble``.
    """

    def assemble(self, circuit: Circuit, interface: object) -> dict[str, Net]:
        """Build the power stage around a controller interface.

        Instantiates parts into *circuit* and connects them to the
        interface's ports. The circuit must not be modified by anyone else
        during the call.

        Args:
            circuit: Circuit to build into.
            interface: Controller interface bundle.

        Returns:
            Mapping of output name to net; at least one entry. Isolated or
            multi-rail topologies return one entry per output.
        """
        ...
