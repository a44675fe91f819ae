"""Exception classes for root finding.

Every failure the solver can produce is one of the classes below. They share
``RootFindingError`` as a base so callers can catch all of them at once, but
each outcome stays distinguishable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rootseek.numerics.root_finding import RootResult


class RootFindingError(Exception):
    """Base exception for root finding errors."""


class InvalidConfiguration(RootFindingError, ValueError):
    """Raised when solver parameters are out of range."""


class BracketNotFound(RootFindingError):
    """Raised when the bracket search runs out of steps without a sign change.

    Attributes:
        seed: Point the search started from, if it started from a seed.
        lower: Leftmost point explored.
        upper: Rightmost point explored.
        steps: Number of expansion steps taken.
    """

    def __init__(
        self,
        message: str,
        *,
        lower: float,
        upper: float,
        steps: int,
        seed: float | None = None,
    ) -> None:
        super().__init__(message)
        self.seed = seed
        self.lower = lower
        self.upper = upper
        self.steps = steps


class EvaluationError(RootFindingError):
    """Raised when the supplied function faults or returns a non-finite value.

    Attributes:
        x: Input at which the evaluation failed.
        value: The non-finite value returned, or None if the function raised.
    """

    def __init__(self, x: float, value: float | None = None, reason: str | None = None) -> None:
        if reason is None:
            reason = f"returned non-finite value {value!r}" if value is not None else "raised"
        super().__init__(f"Function evaluation failed at x={x!r}: {reason}")
        self.x = x
        self.value = value


class MaxIterationsExceeded(RootFindingError):
    """Raised when the solver exhausts its iteration budget.

    The best estimate found so far is attached so callers may accept an
    approximate answer.

    Attributes:
        result: RootResult with ``converged=False``.
    """

    def __init__(self, result: RootResult) -> None:
        super().__init__(
            f"Did not converge within {result.iterations} iterations; "
            f"best estimate x={result.root!r}, f(x)={result.f_root!r}"
        )
        self.result = result

    @property
    def best_estimate(self) -> float:
        return self.result.root

    @property
    def iterations(self) -> int:
        return self.result.iterations
