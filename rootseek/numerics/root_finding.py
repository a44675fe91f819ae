"""Root finding by Brent's method.

Combines bisection, secant, and inverse quadratic interpolation. Given a
valid bracket it always terminates: interpolation is used only while it
shrinks the bracket at least as fast as bisection would.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from rootseek.errors import InvalidConfiguration, MaxIterationsExceeded
from rootseek.numerics.bracket import Bracket
from rootseek.numerics.evaluation import Evaluator
from rootseek.numerics.tolerance import (
    MACHINE_EPSILON,
    effective_tolerance,
    sign_change,
    within_tolerance,
)

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = 1e-6
DEFAULT_MAX_ITERATIONS = 1000


class StepKind(Enum):
    """How the current best estimate was produced."""

    INITIAL = "initial"
    INVERSE_QUADRATIC = "inverse_quadratic"
    SECANT = "secant"
    BISECTION = "bisection"


@dataclass(frozen=True)
class RootResult:
    """Result of root finding.

    Attributes:
        root: The found root value (best estimate if not converged).
        f_root: Function value at ``root``.
        converged: Whether the algorithm converged.
        iterations: Number of iterations used.
        function_calls: Number of function evaluations, including any made
            while searching for the bracket.
        bracket: Final bracket around the root.
    """

    root: float
    f_root: float
    converged: bool
    iterations: int
    function_calls: int
    bracket: Bracket


@dataclass(frozen=True)
class IterationSnapshot:
    """Solver state at the top of one iteration.

    ``best`` and ``counterpoint`` always bracket the root.
    """

    iteration: int
    best: float
    f_best: float
    counterpoint: float
    f_counterpoint: float
    step: StepKind

    @property
    def bracket(self) -> Bracket:
        return Bracket.from_points(self.best, self.f_best, self.counterpoint, self.f_counterpoint)


Observer = Callable[[IterationSnapshot], None]


def brent_refine(
    f: Callable[[float], float],
    bracket: Bracket,
    tolerance: float = DEFAULT_TOLERANCE,
    *,
    relative_tolerance: float = MACHINE_EPSILON,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    observer: Observer | None = None,
) -> RootResult:
    """Refine a bracket to a root using Brent's method.

    Args:
        f: Continuous function to find root of. An ``Evaluator`` is used
            as-is so its call count carries over.
        bracket: Bracket whose endpoint values are already known.
        tolerance: Absolute tolerance on ``|f(root)|``. Once the bracket
            half-width falls inside the effective tolerance, the solver
            bisects until ``|f(b)|`` meets it or the bracket spans two
            adjacent floats.
        relative_tolerance: Relative tolerance on the root.
        max_iterations: Maximum number of iterations.
        observer: Called with an ``IterationSnapshot`` once per iteration.

    Returns:
        RootResult with ``converged=True``.

    Raises:
        MaxIterationsExceeded: If not converged after ``max_iterations``;
            carries the best estimate.
        EvaluationError: If ``f`` faults at an interior point.
    """
    evaluate = f if isinstance(f, Evaluator) else Evaluator(f)

    if bracket.is_degenerate:
        return RootResult(
            root=bracket.a,
            f_root=bracket.fa,
            converged=True,
            iterations=0,
            function_calls=evaluate.calls,
            bracket=bracket,
        )

    a, fa = bracket.a, bracket.fa
    b, fb = bracket.b, bracket.fb
    c, fc = a, fa
    d = e = b - a
    step = StepKind.INITIAL
    iteration = 0

    while True:
        # Keep the root between b and c
        if not sign_change(fb, fc):
            c, fc = a, fa
            d = e = b - a

        # Ensure |f(b)| <= |f(c)| so b is the best estimate
        if abs(fc) < abs(fb):
            a, b, c = b, c, b
            fa, fb, fc = fb, fc, fb

        tol = effective_tolerance(b, tolerance, relative_tolerance)
        m = 0.5 * (c - b)

        if observer is not None:
            observer(IterationSnapshot(iteration, b, fb, c, fc, step))

        # b and c adjacent floats: the bracket cannot shrink any further
        resolved = b + m == b or b + m == c
        if within_tolerance(fb, tolerance) or resolved:
            logger.debug("Converged to x=%r after %d iterations", b, iteration)
            return RootResult(
                root=b,
                f_root=fb,
                converged=True,
                iterations=iteration,
                function_calls=evaluate.calls,
                bracket=Bracket.from_points(b, fb, c, fc),
            )

        if iteration >= max_iterations:
            result = RootResult(
                root=b,
                f_root=fb,
                converged=False,
                iterations=iteration,
                function_calls=evaluate.calls,
                bracket=Bracket.from_points(b, fb, c, fc),
            )
            logger.warning(
                "No convergence after %d iterations; best x=%r, f(x)=%r", iteration, b, fb
            )
            raise MaxIterationsExceeded(result)

        iteration += 1

        # Decide between interpolation and bisection
        polishing = abs(m) <= tol
        if polishing:
            # Bracket is within tolerance but |f(b)| is not; halve it
            d = e = m
            step = StepKind.BISECTION
        elif abs(e) >= tol and abs(fa) > abs(fb):
            s = fb / fa
            if a == c:
                # Linear interpolation (secant method)
                p = 2.0 * m * s
                q = 1.0 - s
                step = StepKind.SECANT
            else:
                # Inverse quadratic interpolation
                q = fa / fc
                r = fb / fc
                p = s * (2.0 * m * q * (q - r) - (b - a) * (r - 1.0))
                q = (q - 1.0) * (r - 1.0) * (s - 1.0)
                step = StepKind.INVERSE_QUADRATIC

            if p > 0:
                q = -q
            else:
                p = -p

            # Accept only if inside the bracket, clear of its edge, and
            # shrinking faster than half of the step before last
            if 2.0 * p < min(3.0 * m * q - abs(tol * q), abs(0.5 * e * q)):
                e = d
                d = p / q
            else:
                d = e = m
                step = StepKind.BISECTION
        else:
            d = e = m
            step = StepKind.BISECTION

        a, fa = b, fb

        # Never step by less than tol outside of polishing
        if polishing or abs(d) > tol:
            b += d
        elif m > 0:
            b += tol
        else:
            b -= tol

        fb = evaluate(b)
        logger.debug(
            "Iteration %d: %s step to x=%r, f(x)=%r, width=%r",
            iteration,
            step.value,
            b,
            fb,
            abs(c - b),
        )


def brentq(
    f: Callable[[float], float],
    a: float,
    b: float,
    tolerance: float = DEFAULT_TOLERANCE,
    *,
    relative_tolerance: float = MACHINE_EPSILON,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    observer: Observer | None = None,
) -> RootResult:
    """Find root of f in bracket [a, b] using Brent's method.

    Raises:
        InvalidConfiguration: If f(a) and f(b) have the same sign.
        EvaluationError: If ``f`` faults or returns a non-finite value.
        MaxIterationsExceeded: If not converged after ``max_iterations``.
    """
    evaluate = Evaluator(f)
    fa = evaluate(a)
    fb = evaluate(b)

    if not sign_change(fa, fb):
        raise InvalidConfiguration(
            f"f(a) and f(b) must have opposite signs, got f({a})={fa}, f({b})={fb}"
        )

    return brent_refine(
        evaluate,
        Bracket.from_points(a, fa, b, fb),
        tolerance,
        relative_tolerance=relative_tolerance,
        max_iterations=max_iterations,
        observer=observer,
    )
