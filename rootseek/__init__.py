"""rootseek: scalar root finding from a single starting point.

    >>> import math
    >>> from rootseek import Solver
    >>> Solver(1e-9).solve(lambda x: math.log(x) + 2.0, 1.0)
    0.1353352832...

The library logs under the ``rootseek`` logger and is silent until one of
the ``enable_*_logging`` helpers is called.
"""

from rootseek.config import SolverConfig
from rootseek.errors import (
    BracketNotFound,
    EvaluationError,
    InvalidConfiguration,
    MaxIterationsExceeded,
    RootFindingError,
)
from rootseek.logging_config import (
    configure_from_env,
    disable_logging,
    enable_console_logging,
    enable_file_logging,
    enable_json_file_logging,
    enable_json_logging,
    set_level,
    set_module_level,
)
from rootseek.numerics import (
    Bracket,
    IterationSnapshot,
    RootResult,
    StepKind,
    brent_refine,
    brentq,
    expand_interval,
    find_bracket,
)
from rootseek.solver import Solver
from rootseek.trace import SolveTrace

__version__ = "0.1.0"

__all__ = [
    # Solver
    "Solver",
    "SolverConfig",
    "RootResult",
    # Building blocks
    "Bracket",
    "IterationSnapshot",
    "SolveTrace",
    "StepKind",
    "brent_refine",
    "brentq",
    "expand_interval",
    "find_bracket",
    # Errors
    "BracketNotFound",
    "EvaluationError",
    "InvalidConfiguration",
    "MaxIterationsExceeded",
    "RootFindingError",
    # Logging
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "enable_json_file_logging",
    "enable_json_logging",
    "set_level",
    "set_module_level",
]
