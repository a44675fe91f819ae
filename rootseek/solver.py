"""Seed-point root solver.

Chains the bracket search and Brent's method:

    seed -> find_bracket -> Bracket -> brent_refine -> root

Example:
    >>> import math
    >>> from rootseek import Solver
    >>> Solver(1e-9).solve(lambda x: math.exp(x) - 10.0, 0.0)
    2.302585092994...
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from rootseek.config import SolverConfig
from rootseek.errors import BracketNotFound, InvalidConfiguration
from rootseek.numerics.bracket import (
    DEFAULT_GROWTH_FACTOR,
    DEFAULT_INITIAL_STEP,
    DEFAULT_MAX_STEPS,
    Bracket,
    find_bracket,
)
from rootseek.numerics.evaluation import Evaluator
from rootseek.numerics.root_finding import (
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_TOLERANCE,
    Observer,
    RootResult,
    brent_refine,
)
from rootseek.numerics.tolerance import MACHINE_EPSILON, sign_change, within_tolerance

logger = logging.getLogger(__name__)


class Solver:
    """Finds a root of a scalar function from a single starting point.

    The solver keeps only its configuration; every call builds and discards
    its own working state, so one instance may be shared freely.

    Args:
        tolerance: Absolute tolerance, must be positive.
        relative_tolerance: Relative tolerance on the root.
        max_iterations: Brent iteration cap.
        max_bracket_steps: Bracket expansion cap.
        initial_step: First bracket offset, relative to ``max(1, |seed|)``.
        growth_factor: Bracket offset multiplier per step.

    Raises:
        InvalidConfiguration: If any parameter is out of range.
    """

    def __init__(
        self,
        tolerance: float = DEFAULT_TOLERANCE,
        *,
        relative_tolerance: float = MACHINE_EPSILON,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        max_bracket_steps: int = DEFAULT_MAX_STEPS,
        initial_step: float = DEFAULT_INITIAL_STEP,
        growth_factor: float = DEFAULT_GROWTH_FACTOR,
    ) -> None:
        self._config = SolverConfig(
            tolerance=tolerance,
            relative_tolerance=relative_tolerance,
            max_iterations=max_iterations,
            max_bracket_steps=max_bracket_steps,
            initial_step=initial_step,
            growth_factor=growth_factor,
        )

    @classmethod
    def from_config(cls, config: SolverConfig) -> Solver:
        return cls(
            config.tolerance,
            relative_tolerance=config.relative_tolerance,
            max_iterations=config.max_iterations,
            max_bracket_steps=config.max_bracket_steps,
            initial_step=config.initial_step,
            growth_factor=config.growth_factor,
        )

    @property
    def config(self) -> SolverConfig:
        return self._config

    @property
    def tolerance(self) -> float:
        return self._config.tolerance

    def __repr__(self) -> str:
        return f"Solver(tolerance={self.tolerance!r})"

    def solve(self, f: Callable[[float], float], seed: float) -> float:
        """Find x near ``seed`` with ``f(x) ≈ 0``.

        Returns:
            The root estimate.

        Raises:
            BracketNotFound: If no sign change is reachable from ``seed``.
            EvaluationError: If ``f`` faults at the seed or inside the bracket.
            MaxIterationsExceeded: If Brent's method runs out of iterations.
        """
        return self.solve_detailed(f, seed).root

    def solve_detailed(
        self,
        f: Callable[[float], float],
        seed: float,
        observer: Observer | None = None,
    ) -> RootResult:
        """Like ``solve`` but returns the full ``RootResult``.

        Args:
            f: Function of one real variable.
            seed: Starting point.
            observer: Called once per Brent iteration, e.g. a ``SolveTrace``.
        """
        config = self._config
        evaluate = Evaluator(f)
        bracket = find_bracket(
            evaluate,
            seed,
            config.tolerance,
            initial_step=config.initial_step,
            growth_factor=config.growth_factor,
            max_steps=config.max_bracket_steps,
        )
        return self._refine(evaluate, bracket, observer)

    def solve_interval(
        self,
        f: Callable[[float], float],
        lower: float,
        upper: float,
        initial: float | None = None,
    ) -> float:
        """Find a root inside ``[lower, upper]``.

        ``initial`` (default: the midpoint) is evaluated first and splits the
        interval; the half that changes sign is refined.

        Raises:
            InvalidConfiguration: If the interval is empty or ``initial``
                lies outside it.
            BracketNotFound: If neither half changes sign.
            EvaluationError: If ``f`` faults at an evaluated point.
            MaxIterationsExceeded: If Brent's method runs out of iterations.
        """
        if not upper > lower:
            raise InvalidConfiguration(f"Empty interval [{lower}, {upper}].")
        if initial is None:
            initial = lower + 0.5 * (upper - lower)
        if not lower <= initial <= upper:
            raise InvalidConfiguration("Initial guess must lie within the bounding interval.")

        evaluate = Evaluator(f)
        f_initial = evaluate(initial)
        if within_tolerance(f_initial, self.tolerance):
            return initial

        f_lower = f_initial if initial == lower else evaluate(lower)
        if sign_change(f_lower, f_initial):
            bracket = Bracket(lower, initial, f_lower, f_initial)
        else:
            f_upper = f_initial if initial == upper else evaluate(upper)
            if not sign_change(f_initial, f_upper):
                raise BracketNotFound(
                    f"No sign change in [{lower!r}, {upper!r}].",
                    lower=lower,
                    upper=upper,
                    steps=0,
                )
            bracket = Bracket(initial, upper, f_initial, f_upper)

        return self._refine(evaluate, bracket, None).root

    def _refine(
        self, evaluate: Evaluator, bracket: Bracket, observer: Observer | None
    ) -> RootResult:
        config = self._config
        result = brent_refine(
            evaluate,
            bracket,
            config.tolerance,
            relative_tolerance=config.relative_tolerance,
            max_iterations=config.max_iterations,
            observer=observer,
        )
        logger.info(
            "Root x=%r (f=%r) after %d iterations, %d evaluations",
            result.root,
            result.f_root,
            result.iterations,
            result.function_calls,
        )
        return result
