"""Escape-time evaluation for the Multibrot family ``z -> z**p + c``."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

ESCAPE_RADIUS = 2.0


@dataclass(frozen=True)
class Diverged:
    """The orbit left the escape radius at the 0-based ``iteration``."""

    iteration: int


@dataclass(frozen=True)
class Bounded:
    """The orbit stayed inside the escape radius for the whole cap."""


BOUNDED = Bounded()

EscapeResult = Union[Diverged, Bounded]


def in_main_cardioid(sample: complex) -> bool:
    """Closed-form membership test for the main cardioid of the classical set."""

    shifted = sample - 0.25
    r = abs(shifted)
    if r == 0:
        return True
    # hypot rounding can push the ratio a hair past +-1
    theta = math.acos(max(-1.0, min(1.0, shifted.real / r)))
    return r < 0.5 * (1 - math.cos(theta))


def _power(z: complex, exponent: float) -> complex:
    if z == 0:
        if exponent == 0:
            return complex(1.0, 0.0)
        if exponent < 0:
            return complex(math.inf, 0.0)
        return complex(0.0, 0.0)
    try:
        return z ** exponent
    except OverflowError:
        return complex(math.inf, 0.0)


def escape_iteration(sample: complex, max_iterations: int, exponent: float = 2.0) -> EscapeResult:
    """Iterate from ``z = 0`` without any shortcut and report the escape step."""

    z = complex(0.0, 0.0)
    squaring = exponent == 2.0
    for n in range(max_iterations):
        if squaring:
            z = z * z + sample
        else:
            z = _power(z, exponent) + sample
        if abs(z) >= ESCAPE_RADIUS:
            return Diverged(n)
    return BOUNDED


def diverges_within(sample: complex, max_iterations: int, exponent: float = 2.0) -> EscapeResult:
    """Return :class:`Diverged` with the first escape step, or :data:`BOUNDED`.

    For the classical exponent the main cardioid is answered without
    iterating; other exponents always run the full loop.
    """

    if exponent == 2.0 and in_main_cardioid(sample):
        return BOUNDED
    return escape_iteration(sample, max_iterations, exponent)
