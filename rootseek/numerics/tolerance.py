"""Tolerance and sign helpers shared by the bracket search and Brent's method."""

from __future__ import annotations

import math
import sys

MACHINE_EPSILON = sys.float_info.epsilon


def effective_tolerance(
    x: float, tolerance: float, relative_tolerance: float = MACHINE_EPSILON
) -> float:
    """Blend of relative and absolute tolerance at ``x``.

    Returns ``2 * relative_tolerance * |x| + tolerance / 2``. The relative
    term keeps large roots from stalling on float spacing; the absolute term
    keeps roots near zero from converging too early.
    """
    return 2.0 * relative_tolerance * abs(x) + 0.5 * tolerance


def within_tolerance(fx: float, tolerance: float) -> bool:
    """True if a function value counts as zero."""
    return abs(fx) <= tolerance


def sign_change(fa: float, fb: float) -> bool:
    """True if ``fa`` and ``fb`` bracket a root (opposite signs, or a zero).

    Compares signs rather than the product so tiny values cannot underflow.
    """
    if fa == 0.0 or fb == 0.0:
        return True
    return math.copysign(1.0, fa) != math.copysign(1.0, fb)
