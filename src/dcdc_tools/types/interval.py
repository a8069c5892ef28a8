"""Toleranced range type for worst-case design calculations.

Provides a ``ToleranceRange`` dataclass representing a bounded numeric
range ``[min, max]`` with a typical value and an optional unit string.
Arithmetic follows interval rules: the bounds of a result are the true
extremes of the operation over every combination of operand bounds, so
a chain of calculations keeps conservative (worst-case) limits, while
the typical value follows the plain scalar calculation.

Example::

    from dcdc_tools.types import ToleranceRange

    vin = ToleranceRange.from_center_abs(12.0, 0.5, "V")   # 12 V +/- 0.5 V
    vout = ToleranceRange.exact(5.0, "V")                   # 5 V exactly

    duty = vout / vin           # dimensionless range
    (1 - duty).min              # subtracts through the full range

    i = ToleranceRange.between(0.0, 2.0, typ=1.0, unit="A")
    (i ** 2).sqrt()             # back to [0, 2] A
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace


class UnitError(TypeError):
    """Raised when an arithmetic operation mixes incompatible units."""


def _unit_product(a: str, b: str) -> str:
    """Combine two unit strings via multiplication.

    Empty units are treated as dimensionless.
    """
    if not a:
        return b
    if not b:
        return a
    return f"{a}*{b}"


def _unit_quotient(a: str, b: str) -> str:
    """Combine two unit strings via division.

    Empty units are treated as dimensionless.
    """
    if not b:
        return a
    if not a:
        return f"1/{b}"
    if a == b:
        return ""
    return f"{a}/{b}"


def _unit_root(unit: str) -> str:
    if not unit:
        return ""
    factors = unit.split("*")
    if len(factors) == 2 and factors[0] == factors[1]:
        return factors[0]
    return f"sqrt({unit})"


def _mul(a: float, b: float) -> float:
    # 0 * inf is 0 for bound products
    if a == 0 or b == 0:
        return 0.0
    return a * b


@dataclass(frozen=True)
class ToleranceRange:
    """A numeric range ``[min, max]`` with a typical value and optional unit.

    Attributes:
        min: Lower bound (inclusive).
        max: Upper bound (inclusive).
        typ: Typical (nominal) value. Defaults to the midpoint.
        unit: Physical unit string (e.g. ``"V"``, ``"A"``).
              An empty string means dimensionless.
    """

    min: float
    max: float
    typ: float | None = None
    unit: str = ""

    def __post_init__(self) -> None:
        if math.isnan(self.min) or math.isnan(self.max):
            msg = "Range bounds must not be NaN"
            raise ValueError(msg)
        if self.min > self.max:
            msg = f"min ({self.min}) must be <= max ({self.max})"
            raise ValueError(msg)
        if self.typ is None:
            if math.isinf(self.min) or math.isinf(self.max):
                typ = self.min if math.isfinite(self.min) else self.max
            else:
                typ = (self.min + self.max) / 2.0
            object.__setattr__(self, "typ", typ)
        elif math.isnan(self.typ):
            msg = "Typical value must not be NaN"
            raise ValueError(msg)
        elif not self.min <= self.typ <= self.max:
            msg = f"typ ({self.typ}) must lie within [{self.min}, {self.max}]"
            raise ValueError(msg)

    # ------------------------------------------------------------------
    # Factory methods
    # ------------------------------------------------------------------

    @classmethod
    def from_center_rel(cls, center: float, tolerance: float, unit: str = "") -> ToleranceRange:
        """Create from a center value and relative tolerance.

        Args:
            center: Nominal value.
            tolerance: Fractional tolerance (e.g. 0.05 for +/- 5 %).
            unit: Physical unit string.

        Returns:
            Range spanning ``center * (1 - tolerance)`` to
            ``center * (1 + tolerance)`` with ``center`` as typical value.

        Example::

            ToleranceRange.from_center_rel(12.0, 0.05, "V")
            # ToleranceRange(11.4, 12.6, typ=12.0, unit='V')
        """
        delta = abs(center * tolerance)
        return cls(center - delta, center + delta, center, unit)

    @classmethod
    def from_center_abs(cls, center: float, delta: float, unit: str = "") -> ToleranceRange:
        """Create from a center value and absolute delta.

        Args:
            center: Nominal value.
            delta: Absolute half-width (always treated as positive).
            unit: Physical unit string.
        """
        delta = abs(delta)
        return cls(center - delta, center + delta, center, unit)

    @classmethod
    def between(
        cls, lower: float, upper: float, typ: float | None = None, unit: str = ""
    ) -> ToleranceRange:
        """Create from explicit bounds and an optional typical value."""
        return cls(lower, upper, typ, unit)

    @classmethod
    def exact(cls, value: float, unit: str = "") -> ToleranceRange:
        """Create a single-point (degenerate) range.

        Args:
            value: The exact value.
            unit: Physical unit string.
        """
        return cls(value, value, value, unit)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def nominal(self) -> float:
        """Typical value of the range."""
        return self.typ

    @property
    def center(self) -> float:
        """Midpoint of the range."""
        return (self.min + self.max) / 2.0

    @property
    def width(self) -> float:
        """Width of the range (``max - min``)."""
        return self.max - self.min

    @property
    def is_exact(self) -> bool:
        """True if this is a single-point range."""
        return self.min == self.max

    @property
    def is_bounded(self) -> bool:
        """True if both bounds are finite."""
        return math.isfinite(self.min) and math.isfinite(self.max)

    # ------------------------------------------------------------------
    # Set operations
    # ------------------------------------------------------------------

    def contains(self, value: float) -> bool:
        """Return True if *value* lies within ``[min, max]``."""
        return self.min <= value <= self.max

    def contains_interval(self, other: ToleranceRange) -> bool:
        """Return True if *other* is entirely within this range."""
        self._check_same_unit(other, "contains_interval")
        return self.min <= other.min and other.max <= self.max

    def overlaps(self, other: ToleranceRange) -> bool:
        """Return True if this range and *other* share any points."""
        self._check_same_unit(other, "overlaps")
        return self.min <= other.max and other.min <= self.max

    def hull(self, other: ToleranceRange) -> ToleranceRange:
        """Return the smallest range containing both.

        The typical value of the result is the typical value of ``self``.
        """
        self._check_same_unit(other, "hull")
        return ToleranceRange(
            min(self.min, other.min), max(self.max, other.max), self.typ, self.unit
        )

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def __add__(self, other: object) -> ToleranceRange:
        if isinstance(other, ToleranceRange):
            self._check_same_unit(other, "+")
            return ToleranceRange(
                self.min + other.min, self.max + other.max, self.typ + other.typ, self.unit
            )
        if isinstance(other, (int, float)):
            return ToleranceRange(self.min + other, self.max + other, self.typ + other, self.unit)
        return NotImplemented

    def __radd__(self, other: object) -> ToleranceRange:
        if isinstance(other, (int, float)):
            return ToleranceRange(other + self.min, other + self.max, other + self.typ, self.unit)
        return NotImplemented

    def __sub__(self, other: object) -> ToleranceRange:
        if isinstance(other, ToleranceRange):
            self._check_same_unit(other, "-")
            return ToleranceRange(
                self.min - other.max, self.max - other.min, self.typ - other.typ, self.unit
            )
        if isinstance(other, (int, float)):
            return ToleranceRange(self.min - other, self.max - other, self.typ - other, self.unit)
        return NotImplemented

    def __rsub__(self, other: object) -> ToleranceRange:
        if isinstance(other, (int, float)):
            return ToleranceRange(other - self.max, other - self.min, other - self.typ, self.unit)
        return NotImplemented

    def __mul__(self, other: object) -> ToleranceRange:
        if isinstance(other, ToleranceRange):
            products = (
                _mul(self.min, other.min),
                _mul(self.min, other.max),
                _mul(self.max, other.min),
                _mul(self.max, other.max),
            )
            return ToleranceRange(
                min(products),
                max(products),
                _mul(self.typ, other.typ),
                _unit_product(self.unit, other.unit),
            )
        if isinstance(other, (int, float)):
            a, b = _mul(self.min, other), _mul(self.max, other)
            return ToleranceRange(min(a, b), max(a, b), _mul(self.typ, other), self.unit)
        return NotImplemented

    def __rmul__(self, other: object) -> ToleranceRange:
        if isinstance(other, (int, float)):
            return self * other
        return NotImplemented

    def __truediv__(self, other: object) -> ToleranceRange:
        if isinstance(other, ToleranceRange):
            quotient = self * other.reciprocal()
            return replace(quotient, unit=_unit_quotient(self.unit, other.unit))
        if isinstance(other, (int, float)):
            if other == 0:
                msg = "Cannot divide by zero"
                raise ZeroDivisionError(msg)
            a, b = self.min / other, self.max / other
            return ToleranceRange(min(a, b), max(a, b), self.typ / other, self.unit)
        return NotImplemented

    def __rtruediv__(self, other: object) -> ToleranceRange:
        if isinstance(other, (int, float)):
            return self.reciprocal() * other
        return NotImplemented

    def reciprocal(self) -> ToleranceRange:
        """Return ``1 / self``.

        A range with zero as one endpoint yields an unbounded side; a
        typical value of zero maps to that infinite bound. A range with zero
        strictly inside it, or the degenerate zero range, cannot be inverted.

        Raises:
            ZeroDivisionError: If zero lies inside the range.
        """
        if self.min < 0 < self.max or (self.min == 0 and self.max == 0):
            msg = f"Cannot divide by a range containing zero: [{self.min}, {self.max}]"
            raise ZeroDivisionError(msg)
        lo = 1.0 / self.max if self.max != 0 else -math.inf
        hi = 1.0 / self.min if self.min != 0 else math.inf
        if self.typ != 0:
            typ = 1.0 / self.typ
        else:
            # typ sits on the zero endpoint
            typ = hi if self.min == 0 else lo
        return ToleranceRange(lo, hi, typ, _unit_quotient("", self.unit))

    def __neg__(self) -> ToleranceRange:
        return ToleranceRange(-self.max, -self.min, -self.typ, self.unit)

    def __abs__(self) -> ToleranceRange:
        if self.min >= 0:
            return self
        if self.max <= 0:
            return -self
        return ToleranceRange(0.0, max(-self.min, self.max), abs(self.typ), self.unit)

    def __pow__(self, exponent: object) -> ToleranceRange:
        if not isinstance(exponent, (int, float)):
            return NotImplemented
        unit = self.unit
        if exponent == 0:
            return ToleranceRange.exact(1.0)
        if isinstance(exponent, int) and exponent > 0:
            if self.unit:
                unit = "*".join([self.unit] * exponent)
            lo, hi = self.min**exponent, self.max**exponent
            if exponent % 2 == 1:
                return ToleranceRange(lo, hi, self.typ**exponent, unit)
            if self.min >= 0:
                return ToleranceRange(lo, hi, self.typ**exponent, unit)
            if self.max <= 0:
                return ToleranceRange(hi, lo, self.typ**exponent, unit)
            return ToleranceRange(0.0, max(lo, hi), self.typ**exponent, unit)
        if self.min < 0:
            msg = f"Cannot raise a range with negative values to the power {exponent}"
            raise ValueError(msg)
        if self.unit:
            unit = f"({self.unit})^{exponent}"
        if exponent < 0:
            return self.reciprocal() ** -exponent
        return ToleranceRange(self.min**exponent, self.max**exponent, self.typ**exponent, unit)

    def sqrt(self) -> ToleranceRange:
        """Return the square root of the range.

        Raises:
            ValueError: If the lower bound is negative.
        """
        if self.min < 0:
            msg = f"Cannot take the square root of a range below zero: [{self.min}, {self.max}]"
            raise ValueError(msg)
        return ToleranceRange(
            math.sqrt(self.min), math.sqrt(self.max), math.sqrt(self.typ), _unit_root(self.unit)
        )

    # ------------------------------------------------------------------
    # Comparison helpers
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ToleranceRange):
            return NotImplemented
        return (
            self.min == other.min
            and self.max == other.max
            and self.typ == other.typ
            and self.unit == other.unit
        )

    def __hash__(self) -> int:
        return hash((self.min, self.max, self.typ, self.unit))

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __repr__(self) -> str:
        if self.unit:
            return f"ToleranceRange({self.min}, {self.max}, typ={self.typ}, unit={self.unit!r})"
        return f"ToleranceRange({self.min}, {self.max}, typ={self.typ})"

    def __str__(self) -> str:
        if self.is_exact:
            return f"{self.min} {self.unit}".strip()
        suffix = f" {self.unit}" if self.unit else ""
        return f"[{self.min}, {self.typ}, {self.max}]{suffix}"

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _check_same_unit(self, other: ToleranceRange, op: str) -> None:
        if self.unit != other.unit:
            msg = (
                f"Cannot apply '{op}' to ranges with different units: "
                f"{self.unit!r} vs {other.unit!r}"
            )
            raise UnitError(msg)


def as_range(value: ToleranceRange | float, unit: str = "") -> ToleranceRange:
    """Lift a scalar to a degenerate range; pass ranges through unchanged."""
    if isinstance(value, ToleranceRange):
        return value
    if isinstance(value, (int, float)):
        return ToleranceRange.exact(float(value), unit)
    raise TypeError(f"Expected a number or ToleranceRange, got {type(value).__name__}")


def nominal(value: ToleranceRange | float) -> float:
    """Typical value of a range, or the scalar itself."""
    return as_range(value).typ


def lower(value: ToleranceRange | float) -> float:
    """Lower bound of a range, or the scalar itself."""
    return as_range(value).min


def upper(value: ToleranceRange | float) -> float:
    """Upper bound of a range, or the scalar itself."""
    return as_range(value).max
