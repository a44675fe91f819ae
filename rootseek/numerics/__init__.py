"""Numerical core: bracket search and Brent's method.

Pure Python; no third-party numeric dependencies.
"""

from rootseek.numerics.bracket import Bracket, expand_interval, find_bracket
from rootseek.numerics.evaluation import Evaluator
from rootseek.numerics.root_finding import (
    IterationSnapshot,
    RootResult,
    StepKind,
    brent_refine,
    brentq,
)
from rootseek.numerics.tolerance import MACHINE_EPSILON, effective_tolerance, sign_change

__all__ = [
    "MACHINE_EPSILON",
    "Bracket",
    "Evaluator",
    "IterationSnapshot",
    "RootResult",
    "StepKind",
    "brent_refine",
    "brentq",
    "effective_tolerance",
    "expand_interval",
    "find_bracket",
    "sign_change",
]
