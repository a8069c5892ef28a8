"""
Buck converter sizing.

``BuckConstraints`` holds the requirements of a step-down converter and
derives the electrical design quantities from them. Every quantity is a
``ToleranceRange``, so input tolerances propagate through the equations
as worst-case bounds rather than a single operating point.

Calculation order::

    duty_cycle -> target_ripple_current -> compute_l
      -> compute_ripple_current / compute_peak_current / compute_rms_current
      -> compute_min_cout / compute_min_cin -> is_ccm

Minimum inductance and capacitance results are lower bounds: round them
up to an available part value (see ``solve`` and ``eseries.round_up``).

Example::

    from dcdc_tools.design import BuckConstraints
    from dcdc_tools.types import ToleranceRange

    design = BuckConstraints(
        input_voltage=ToleranceRange.from_center_abs(12.0, 0.5, "V"),
        output_voltage=5.0,
        input_ripple_max=0.1,
        output_ripple_max=0.05,
        output_current=ToleranceRange.between(0.0, 2.0, typ=1.0, unit="A"),
        frequency=500e3,
        ripple_ratio=0.3,
    )
    inductance = design.compute_l()
    design.compute_min_cout(inductance)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from ..exceptions import DesignValidationError
from ..logging import _log_debug, _log_warning
from ..types.interval import ToleranceRange, as_range
from .eseries import round_up

# Variance divisor of a triangular ripple waveform: RMS^2 = I^2 + dI^2 / 12
TRIANGLE_RMS_DIVISOR = 12.0

# Output ripple of an LC filter driven by a triangular current: dV = dI / (8 f C)
OUTPUT_RIPPLE_DIVISOR = 8.0


class ConductionMode(str, Enum):
    """Inductor conduction mode at a given load."""

    CCM = "ccm"  # Inductor current stays above zero
    DCM = "dcm"  # Inductor current reaches zero each cycle


def _positive_range(
    field: str, value: ToleranceRange | float, allow_zero_min: bool = False
) -> ToleranceRange:
    try:
        value = as_range(value)
    except TypeError:
        raise DesignValidationError(field, value, "must be a number or ToleranceRange") from None
    if allow_zero_min:
        if value.min < 0 or value.max <= 0:
            raise DesignValidationError(field, value, "must be >= 0 with a positive maximum")
    elif value.min <= 0:
        raise DesignValidationError(field, value, "must be positive")
    # Equations work on plain SI magnitudes
    return ToleranceRange(value.min, value.max, value.typ)


def _positive_scalar(field: str, value: float) -> float:
    if not isinstance(value, (int, float)) or not math.isfinite(value) or value <= 0:
        raise DesignValidationError(field, value, "must be a positive number")
    return float(value)


@dataclass(frozen=True)
class BuckSolution:
    """Chosen component values for a buck converter.

    Hands the result of a sizing calculation to an architecture, so any
    calculation strategy can feed the same assembly step.

    Attributes:
        inductance: Inductance in henries.
        input_capacitance: Input bulk capacitance in farads.
        output_capacitance: Output bulk capacitance in farads.
    """

    inductance: float
    input_capacitance: float
    output_capacitance: float

    def __post_init__(self) -> None:
        _positive_scalar("inductance", self.inductance)
        _positive_scalar("input_capacitance", self.input_capacitance)
        _positive_scalar("output_capacitance", self.output_capacitance)


@dataclass(frozen=True)
class BuckConstraints:
    """Requirements of a buck converter and the equations derived from them.

    Scalars are accepted for any range field and lifted to exact ranges.
    Range units are dropped: every value is taken in base SI units (V, A,
    Hz, H), so ranges built with and without units can be mixed.
    Derived quantities are recomputed on every call.

    Attributes:
        input_voltage: Input voltage range (V).
        output_voltage: Output voltage range (V).
        input_ripple_max: Maximum input ripple voltage, peak-to-peak (V).
        output_ripple_max: Maximum output ripple voltage, peak-to-peak (V).
        output_current: Load current range (A). The minimum may be zero.
        frequency: Switching frequency (Hz).
        ripple_ratio: Target inductor ripple as a fraction of the output
            current (K, e.g. 0.3 for 30 %).
    """

    input_voltage: ToleranceRange
    output_voltage: ToleranceRange
    input_ripple_max: float
    output_ripple_max: float
    output_current: ToleranceRange
    frequency: ToleranceRange
    ripple_ratio: float

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "input_voltage", _positive_range("input_voltage", self.input_voltage)
        )
        object.__setattr__(
            self, "output_voltage", _positive_range("output_voltage", self.output_voltage)
        )
        object.__setattr__(
            self, "input_ripple_max", _positive_scalar("input_ripple_max", self.input_ripple_max)
        )
        object.__setattr__(
            self,
            "output_ripple_max",
            _positive_scalar("output_ripple_max", self.output_ripple_max),
        )
        object.__setattr__(
            self,
            "output_current",
            _positive_range("output_current", self.output_current, allow_zero_min=True),
        )
        object.__setattr__(self, "frequency", _positive_range("frequency", self.frequency))
        object.__setattr__(
            self, "ripple_ratio", _positive_scalar("ripple_ratio", self.ripple_ratio)
        )

        if self.output_voltage.max >= self.input_voltage.min:
            _log_warning(
                f"Output voltage {self.output_voltage} can reach input voltage "
                f"{self.input_voltage}; duty cycle may reach 100%"
            )

    # ------------------------------------------------------------------
    # Equation chain
    # ------------------------------------------------------------------

    def duty_cycle(self) -> ToleranceRange:
        """Ideal duty cycle, ``Vout / Vin``."""
        return self.output_voltage / self.input_voltage

    def target_ripple_current(self) -> ToleranceRange:
        """Target peak-to-peak inductor ripple, ``K * Iout``."""
        return self.ripple_ratio * self.output_current

    def _volt_seconds(self) -> ToleranceRange:
        # D * (Vin - Vout): inductor voltage-time product per unit frequency
        return self.duty_cycle() * (self.input_voltage - self.output_voltage)

    def compute_l(self) -> ToleranceRange:
        """Minimum inductance meeting the ripple target.

        ``D * (Vin - Vout) / (f * K * Iout)``. With a minimum output
        current of zero the ripple target reaches zero, so the upper
        bound is infinite.
        """
        inductance = self._volt_seconds() / (self.frequency * self.target_ripple_current())
        if not inductance.is_bounded:
            _log_debug(
                "Inductance upper bound is unbounded: ripple target reaches zero at minimum load"
            )
        return inductance

    def compute_ripple_current(
        self,
        inductance: ToleranceRange | float,
        frequency: ToleranceRange | float | None = None,
    ) -> ToleranceRange:
        """Inductor ripple current for a chosen inductance.

        ``D * (Vin - Vout) / (f * L)``.

        Args:
            inductance: Chosen inductance (H)
            frequency: Switching frequency override (Hz); defaults to the
                design frequency

        Raises:
            DesignValidationError: If the inductance or frequency is not positive
        """
        inductance = _positive_range("inductance", inductance)
        if frequency is None:
            frequency = self.frequency
        else:
            frequency = _positive_range("frequency", frequency)
        return self._volt_seconds() / (frequency * inductance)

    def compute_peak_current(self, inductance: ToleranceRange | float) -> float:
        """Worst-case peak inductor current, ``max(Iout) + max(dI) / 2``."""
        ripple = self.compute_ripple_current(inductance)
        return self.output_current.max + ripple.max / 2

    def compute_rms_current(self, inductance: ToleranceRange | float) -> ToleranceRange:
        """Inductor RMS current, ``sqrt(Iout^2 + dI^2 / 12)``."""
        ripple = self.compute_ripple_current(inductance)
        return (self.output_current**2 + ripple**2 / TRIANGLE_RMS_DIVISOR).sqrt()

    def compute_min_cout(self, inductance: ToleranceRange | float) -> float:
        """Minimum output capacitance, ``max(dI / (8 * dVout * f))``."""
        ripple = self.compute_ripple_current(inductance)
        cout = ripple / (OUTPUT_RIPPLE_DIVISOR * self.output_ripple_max * self.frequency)
        return cout.max

    def compute_min_cin(self) -> float:
        """Minimum input capacitance, ``max(D * (1 - D) * Iout / (dVin * f))``."""
        duty = self.duty_cycle()
        cin = duty * (1 - duty) * self.output_current / (self.input_ripple_max * self.frequency)
        return cin.max

    def is_ccm(
        self, inductance: ToleranceRange | float, load_current: float | None = None
    ) -> bool:
        """Check whether the inductor current valley crosses zero.

        Returns True when ``load_current - max(dI) / 2 < 0``: at that load
        the ripple swing would take the inductor current below zero, so
        the converter leaves continuous conduction. The comparison is
        strict; a valley of exactly zero returns False.
        ``conduction_mode()`` gives the same check as an explicit
        CCM/DCM answer.

        Args:
            inductance: Chosen inductance (H)
            load_current: Load current (A); defaults to the nominal output
                current
        """
        if load_current is None:
            load_current = self.output_current.typ
        ripple = self.compute_ripple_current(inductance)
        return load_current - ripple.max / 2 < 0

    # ------------------------------------------------------------------
    # Additional design quantities
    # ------------------------------------------------------------------

    def conduction_mode(
        self, inductance: ToleranceRange | float, load_current: float | None = None
    ) -> ConductionMode:
        """Conduction mode at *load_current* (nominal output current by default)."""
        if self.is_ccm(inductance, load_current):
            return ConductionMode.DCM
        return ConductionMode.CCM

    def compute_critical_inductance(self, load_current: float | None = None) -> float:
        """Smallest inductance keeping *load_current* in continuous conduction.

        ``max(D * (Vin - Vout) / (2 * f * I))``.
        """
        if load_current is None:
            load_current = self.output_current.typ
        load_current = _positive_scalar("load_current", load_current)
        return (self._volt_seconds() / (2 * self.frequency * load_current)).max

    def compute_max_esr(self, inductance: ToleranceRange | float) -> float:
        """Largest output capacitor ESR that keeps ripple in budget, ``dVout / max(dI)``."""
        ripple = self.compute_ripple_current(inductance)
        return self.output_ripple_max / ripple.max

    def compute_input_rms_current(self) -> ToleranceRange:
        """Input capacitor RMS current, ``Iout * sqrt(D * (1 - D))``."""
        duty = self.duty_cycle()
        return self.output_current * (duty * (1 - duty)).sqrt()

    def output_power(self) -> ToleranceRange:
        """Output power, ``Vout * Iout``."""
        return self.output_voltage * self.output_current

    def solve(self, inductance: float | None = None, series: str = "E12") -> BuckSolution:
        """Pick preferred component values meeting every minimum.

        Args:
            inductance: Chosen inductance (H); if omitted, the upper bound of
                ``compute_l()`` rounded up to *series*
            series: Preferred number series for rounding ("E6", "E12", "E24")

        Raises:
            DesignValidationError: If no inductance is given and the
                minimum inductance is unbounded
        """
        if inductance is None:
            minimum = self.compute_l()
            if not minimum.is_bounded:
                raise DesignValidationError(
                    "inductance",
                    minimum,
                    "is unbounded because the minimum output current is zero; "
                    "pass an inductance explicitly",
                )
            inductance = round_up(minimum.max, series)
        inductance = _positive_scalar("inductance", inductance)

        solution = BuckSolution(
            inductance=inductance,
            input_capacitance=round_up(self.compute_min_cin(), series),
            output_capacitance=round_up(self.compute_min_cout(inductance), series),
        )
        _log_debug(f"Solved buck design: {solution}")
        return solution
