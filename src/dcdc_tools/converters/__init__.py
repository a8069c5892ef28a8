"""
Converter architectures.

Each architecture implements the ``ConverterArchitecture`` protocol:
given a controller interface, it builds the power stage into a circuit
and returns its named outputs.
"""

from .buck import BuckArchitecture, bootstrap_capacitor, low_side_element
from .protocol import ConverterArchitecture

__all__ = [
    "BuckArchitecture",
    "ConverterArchitecture",
    "bootstrap_capacitor",
    "low_side_element",
]
