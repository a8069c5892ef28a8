"""
Preferred number series (IEC 60063).

Minimum-value results from the design equations are lower bounds; a
real part has to be the next preferred value at or above them.

Example::

    round_up(19.4e-6, "E12")    # 22e-6
    round_nearest(4.6e-6, "E6")  # 4.7e-6
"""

from __future__ import annotations

import math

E6 = (1.0, 1.5, 2.2, 3.3, 4.7, 6.8)
E12 = (1.0, 1.2, 1.5, 1.8, 2.2, 2.7, 3.3, 3.9, 4.7, 5.6, 6.8, 8.2)
E24 = (
    1.0, 1.1, 1.2, 1.3, 1.5, 1.6, 1.8, 2.0, 2.2, 2.4, 2.7, 3.0,
    3.3, 3.6, 3.9, 4.3, 4.7, 5.1, 5.6, 6.2, 6.8, 7.5, 8.2, 9.1,
)  # fmt: skip

SERIES = {"E6": E6, "E12": E12, "E24": E24}

# Relative slack so values already on the series are not bumped up
_EPSILON = 1e-9


def _series(name: str) -> tuple[float, ...]:
    try:
        return SERIES[name.upper()]
    except KeyError:
        raise ValueError(f"Unknown series {name!r}. Available: {', '.join(SERIES)}") from None


def _check(value: float) -> None:
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"Preferred values need a positive finite value, got {value!r}")


def _clean(value: float) -> float:
    return float(f"{value:.12g}")


def round_up(value: float, series: str = "E12") -> float:
    """Return the smallest preferred value >= *value*."""
    _check(value)
    steps = _series(series)
    decade = math.floor(math.log10(value))
    mantissa = value / 10**decade
    for step in steps:
        if step >= mantissa * (1 - _EPSILON):
            return _clean(step * 10**decade)
    return _clean(steps[0] * 10 ** (decade + 1))


def round_nearest(value: float, series: str = "E12") -> float:
    """Return the preferred value closest to *value* on a log scale."""
    _check(value)
    steps = _series(series)
    decade = math.floor(math.log10(value))
    candidates = [step * 10**decade for step in steps] + [steps[0] * 10 ** (decade + 1)]
    best = min(candidates, key=lambda c: abs(math.log10(c) - math.log10(value)))
    return _clean(best)
