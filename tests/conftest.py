"""Pytest fixtures for dcdc-tools tests."""

import pytest

from dcdc_tools.circuit import Circuit, buck_converter_bundle
from dcdc_tools.design import BuckConstraints
from dcdc_tools.types import ToleranceRange

# Design file for the 12V -> 5V reference converter
REFERENCE_DESIGN_YAML = """\
name: 5V rail
input_voltage: 12V ± 0.5V
output_voltage: 5V
output_current: 0.5A..2A typ 1A
input_ripple: 100mV
output_ripple: 50mV
frequency: 500kHz
ripple_ratio: 30%
architecture:
  output_caps: 2
  bootstrap: 100nF
  low_side: diode
"""


@pytest.fixture
def reference_design() -> BuckConstraints:
    """12V +/- 0.5V to 5V, 0..2A (typ 1A), 500kHz, 30% ripple."""
    return BuckConstraints(
        input_voltage=ToleranceRange.from_center_abs(12.0, 0.5),
        output_voltage=5.0,
        input_ripple_max=0.1,
        output_ripple_max=0.05,
        output_current=ToleranceRange.between(0.0, 2.0, typ=1.0),
        frequency=500e3,
        ripple_ratio=0.3,
    )


@pytest.fixture
def loaded_design() -> BuckConstraints:
    """Reference design with a non-zero minimum load."""
    return BuckConstraints(
        input_voltage=ToleranceRange.from_center_abs(12.0, 0.5),
        output_voltage=5.0,
        input_ripple_max=0.1,
        output_ripple_max=0.05,
        output_current=ToleranceRange.between(0.5, 2.0, typ=1.0),
        frequency=500e3,
        ripple_ratio=0.3,
    )


@pytest.fixture
def circuit() -> Circuit:
    return Circuit("test")


@pytest.fixture
def controller(circuit):
    """Buck controller bundle without a bootstrap port."""
    return buck_converter_bundle(circuit)


@pytest.fixture
def boot_controller(circuit):
    """Buck controller bundle with a bootstrap port."""
    return buck_converter_bundle(circuit, bootstrap=True)


@pytest.fixture
def design_file(tmp_path):
    path = tmp_path / "rail_5v.yaml"
    path.write_text(REFERENCE_DESIGN_YAML, encoding="utf-8")
    return path
