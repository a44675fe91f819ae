"""Solver configuration.

``SolverConfig`` collects every tunable limit of a solve. Values can be set
in code or overridden from environment variables:

    ROOTSEEK_TOLERANCE: Absolute tolerance (float, > 0)
    ROOTSEEK_RELATIVE_TOLERANCE: Relative tolerance (float, >= 0)
    ROOTSEEK_MAX_ITERATIONS: Brent iteration cap (int, >= 1)
    ROOTSEEK_MAX_BRACKET_STEPS: Bracket expansion cap (int, >= 1)
    ROOTSEEK_INITIAL_STEP: First bracket offset (float, > 0)
    ROOTSEEK_GROWTH_FACTOR: Bracket offset multiplier (float, > 1)
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, fields, replace

from rootseek.errors import InvalidConfiguration
from rootseek.numerics.bracket import (
    DEFAULT_GROWTH_FACTOR,
    DEFAULT_INITIAL_STEP,
    DEFAULT_MAX_STEPS,
)
from rootseek.numerics.root_finding import DEFAULT_MAX_ITERATIONS, DEFAULT_TOLERANCE
from rootseek.numerics.tolerance import MACHINE_EPSILON

ENV_PREFIX = "ROOTSEEK_"


@dataclass(frozen=True)
class SolverConfig:
    """Tolerances and limits for one solver.

    Attributes:
        tolerance: Absolute tolerance on the root and on ``|f(root)|``.
        relative_tolerance: Relative tolerance on the root.
        max_iterations: Maximum Brent iterations per solve.
        max_bracket_steps: Maximum bracket expansion steps per solve.
        initial_step: First bracket offset, relative to ``max(1, |seed|)``.
        growth_factor: Bracket offset multiplier per step.
    """

    tolerance: float = DEFAULT_TOLERANCE
    relative_tolerance: float = MACHINE_EPSILON
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    max_bracket_steps: int = DEFAULT_MAX_STEPS
    initial_step: float = DEFAULT_INITIAL_STEP
    growth_factor: float = DEFAULT_GROWTH_FACTOR

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Check every field.

        Raises:
            InvalidConfiguration: If any field is out of range.
        """
        if not (math.isfinite(self.tolerance) and self.tolerance > 0):
            raise InvalidConfiguration(f"tolerance must be > 0, got {self.tolerance}")
        if not (math.isfinite(self.relative_tolerance) and self.relative_tolerance >= 0):
            raise InvalidConfiguration(
                f"relative_tolerance must be >= 0, got {self.relative_tolerance}"
            )
        if self.max_iterations < 1:
            raise InvalidConfiguration(f"max_iterations must be >= 1, got {self.max_iterations}")
        if self.max_bracket_steps < 1:
            raise InvalidConfiguration(
                f"max_bracket_steps must be >= 1, got {self.max_bracket_steps}"
            )
        if not (math.isfinite(self.initial_step) and self.initial_step > 0):
            raise InvalidConfiguration(f"initial_step must be > 0, got {self.initial_step}")
        if not (math.isfinite(self.growth_factor) and self.growth_factor > 1):
            raise InvalidConfiguration(f"growth_factor must be > 1, got {self.growth_factor}")

    def replace(self, **changes) -> SolverConfig:
        """Return a validated copy with ``changes`` applied."""
        return replace(self, **changes)

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX, **overrides) -> SolverConfig:
        """Build a config from environment variables.

        Unset variables keep their defaults. Keyword ``overrides`` win over
        the environment.

        Raises:
            InvalidConfiguration: If a variable cannot be parsed or is out of range.
        """
        values = {}
        for field in fields(cls):
            raw = os.environ.get(f"{prefix}{field.name.upper()}", "").strip()
            if not raw:
                continue
            parse = int if field.type == "int" else float
            try:
                values[field.name] = parse(raw)
            except ValueError as exc:
                raise InvalidConfiguration(
                    f"{prefix}{field.name.upper()}={raw!r} is not a valid {parse.__name__}"
                ) from exc
        values.update(overrides)
        return cls(**values)
