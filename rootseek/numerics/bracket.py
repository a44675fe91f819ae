"""Bracket search.

Turns a seed point (or a rough interval) into a validated bracket: two
points whose function values have opposite signs, or a zero at an endpoint.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass

from rootseek.errors import BracketNotFound, EvaluationError, InvalidConfiguration
from rootseek.numerics.evaluation import Evaluator
from rootseek.numerics.tolerance import sign_change, within_tolerance

logger = logging.getLogger(__name__)

DEFAULT_INITIAL_STEP = 0.1
DEFAULT_GROWTH_FACTOR = 1.6
DEFAULT_MAX_STEPS = 100


@dataclass(frozen=True)
class Bracket:
    """Interval [a, b] with cached function values.

    Attributes:
        a: Lower endpoint.
        b: Upper endpoint.
        fa: f(a).
        fb: f(b).
    """

    a: float
    b: float
    fa: float
    fb: float

    def __post_init__(self) -> None:
        if self.a > self.b:
            raise InvalidConfiguration(f"Bracket endpoints out of order: a={self.a}, b={self.b}")
        if not self.is_degenerate and not sign_change(self.fa, self.fb):
            raise InvalidConfiguration(
                f"f(a) and f(b) must have opposite signs, got f({self.a})={self.fa}, f({self.b})={self.fb}"
            )

    @property
    def width(self) -> float:
        return self.b - self.a

    @property
    def midpoint(self) -> float:
        return self.a + 0.5 * (self.b - self.a)

    @property
    def is_degenerate(self) -> bool:
        """True for the single-point bracket [x, x] returned on an exact hit."""
        return self.a == self.b

    @classmethod
    def from_points(cls, x0: float, f0: float, x1: float, f1: float) -> Bracket:
        """Build a bracket from two evaluated points in either order."""
        if x0 <= x1:
            return cls(x0, x1, f0, f1)
        return cls(x1, x0, f1, f0)

    def contains(self, x: float) -> bool:
        return self.a <= x <= self.b


class _Side:
    """Expansion state for one direction of the seed search."""

    def __init__(self, direction: float, x: float, fx: float) -> None:
        self.direction = direction
        self.last_x = x
        self.last_f = fx
        # First point known to fail evaluation; bisected toward once set.
        self.frontier: float | None = None
        self.stuck = False

    def candidate(self, seed: float, offset: float) -> float | None:
        if self.frontier is None:
            x = seed + self.direction * offset
        else:
            x = self.last_x + 0.5 * (self.frontier - self.last_x)
        if not math.isfinite(x) or x == self.last_x or x == self.frontier:
            self.stuck = True
            return None
        return x


def find_bracket(
    f: Callable[[float], float],
    seed: float,
    tolerance: float,
    *,
    initial_step: float = DEFAULT_INITIAL_STEP,
    growth_factor: float = DEFAULT_GROWTH_FACTOR,
    max_steps: int = DEFAULT_MAX_STEPS,
) -> Bracket:
    """Search outward from ``seed`` for a sign change.

    Step ``k`` probes ``seed ± initial_step * max(1, |seed|) * growth_factor**k``,
    right side first. Each candidate is compared with the last good point on
    its own side and the first sign change wins. A candidate whose
    evaluation fails marks the edge of the function's domain; later
    candidates on that side bisect toward it instead of growing.

    Args:
        f: Function to bracket. An ``Evaluator`` is used as-is so the caller
            keeps the call count.
        seed: Starting point.
        tolerance: ``|f(seed)|`` at or below this is an immediate hit.
        initial_step: First offset, relative to ``max(1, |seed|)``.
        growth_factor: Offset multiplier per step.
        max_steps: Number of expansion steps before giving up.

    Returns:
        A bracket. On an immediate hit it is degenerate: ``[seed, seed]``.

    Raises:
        EvaluationError: If ``f(seed)`` faults or is non-finite.
        BracketNotFound: If ``max_steps`` pass without a sign change.
    """
    evaluate = f if isinstance(f, Evaluator) else Evaluator(f)
    seed = float(seed)

    f_seed = evaluate(seed)
    if within_tolerance(f_seed, tolerance):
        logger.debug("Seed x=%r is already a root (f=%r)", seed, f_seed)
        return Bracket(seed, seed, f_seed, f_seed)

    scale = initial_step * max(1.0, abs(seed))
    sides = (_Side(1.0, seed, f_seed), _Side(-1.0, seed, f_seed))
    last_fault: EvaluationError | None = None
    steps = 0

    for steps in range(1, max_steps + 1):
        offset = scale * growth_factor ** (steps - 1)
        for side in sides:
            if side.stuck:
                continue
            x = side.candidate(seed, offset)
            if x is None:
                logger.debug("Bracket search stalled at x=%r", side.last_x)
                continue
            try:
                fx = evaluate(x)
            except EvaluationError as exc:
                logger.debug("Step %d: %s; narrowing toward it", steps, exc)
                side.frontier = x
                last_fault = exc
                continue

            if sign_change(side.last_f, fx):
                bracket = Bracket.from_points(side.last_x, side.last_f, x, fx)
                logger.debug(
                    "Bracket [%r, %r] found after %d steps", bracket.a, bracket.b, steps
                )
                return bracket
            side.last_x, side.last_f = x, fx

        if all(side.stuck for side in sides):
            break

    right, left = sides
    logger.warning(
        "No sign change found from seed %r within [%r, %r] after %d steps",
        seed,
        left.last_x,
        right.last_x,
        steps,
    )
    raise BracketNotFound(
        f"No sign change found from seed {seed!r} in [{left.last_x!r}, {right.last_x!r}] "
        f"after {steps} steps",
        seed=seed,
        lower=left.last_x,
        upper=right.last_x,
        steps=steps,
    ) from last_fault


def expand_interval(
    f: Callable[[float], float],
    lower: float,
    upper: float,
    *,
    growth_factor: float = DEFAULT_GROWTH_FACTOR,
    max_steps: int = DEFAULT_MAX_STEPS,
) -> Bracket:
    """Grow ``[lower, upper]`` until it brackets a root.

    Each step moves the endpoint with the smaller ``|f|`` outward by
    ``growth_factor`` times the current width, on the assumption that the
    root lies beyond it.

    Raises:
        InvalidConfiguration: If the interval has no positive width.
        EvaluationError: If an endpoint evaluation faults.
        BracketNotFound: If ``max_steps`` pass without a sign change.
    """
    if not upper - lower > 0.0:
        raise InvalidConfiguration("Initial interval must have finite width.")

    evaluate = f if isinstance(f, Evaluator) else Evaluator(f)
    f_lower = evaluate(lower)
    f_upper = evaluate(upper)

    for _ in range(max_steps):
        if sign_change(f_lower, f_upper):
            return Bracket(lower, upper, f_lower, f_upper)
        if abs(f_lower) < abs(f_upper):
            lower -= growth_factor * (upper - lower)
            f_lower = evaluate(lower)
        else:
            upper += growth_factor * (upper - lower)
            f_upper = evaluate(upper)

    if sign_change(f_lower, f_upper):
        return Bracket(lower, upper, f_lower, f_upper)
    raise BracketNotFound(
        f"No root in interval [{lower!r}, {upper!r}].",
        lower=lower,
        upper=upper,
        steps=max_steps,
    )
