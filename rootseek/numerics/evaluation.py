"""Safe evaluation of user-supplied functions.

Wraps a callable so every call is counted and every failure (a raised
exception, a non-numeric return, NaN or infinity) surfaces as an
``EvaluationError`` carrying the offending input.
"""

from __future__ import annotations

import math
from collections.abc import Callable

from rootseek.errors import EvaluationError


class Evaluator:
    """Counting, checking wrapper around ``f``.

    One instance is created per solve call; it holds no state beyond the
    call counter.

    Args:
        f: Function of one real variable.
    """

    def __init__(self, f: Callable[[float], float]) -> None:
        self._f = f
        self.calls = 0

    def __call__(self, x: float) -> float:
        """Evaluate ``f(x)``.

        Raises:
            EvaluationError: If ``f`` raises or returns a non-finite value.
        """
        self.calls += 1
        try:
            value = float(self._f(x))
        except Exception as exc:
            raise EvaluationError(x, reason=f"raised {type(exc).__name__}: {exc}") from exc
        if not math.isfinite(value):
            raise EvaluationError(x, value)
        return value
