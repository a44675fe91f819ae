"""Per-iteration recording of a Brent solve.

A ``SolveTrace`` is an observer: pass it as ``observer=`` and it stores one
``IterationSnapshot`` per iteration, for inspection or export to pandas.
"""

from __future__ import annotations

from collections.abc import Iterator

import pandas as pd

from rootseek.numerics.bracket import Bracket
from rootseek.numerics.root_finding import IterationSnapshot


class SolveTrace:
    ITERATION = "iteration"
    STEP = "step"
    BEST = "best"
    F_BEST = "f_best"
    COUNTERPOINT = "counterpoint"
    F_COUNTERPOINT = "f_counterpoint"
    WIDTH = "width"

    COLUMNS = [ITERATION, STEP, BEST, F_BEST, COUNTERPOINT, F_COUNTERPOINT, WIDTH]

    def __init__(self) -> None:
        self._snapshots: list[IterationSnapshot] = []

    def __call__(self, snapshot: IterationSnapshot) -> None:
        self._snapshots.append(snapshot)

    def __len__(self) -> int:
        return len(self._snapshots)

    def __iter__(self) -> Iterator[IterationSnapshot]:
        return iter(self._snapshots)

    @property
    def snapshots(self) -> list[IterationSnapshot]:
        return list(self._snapshots)

    def brackets(self) -> list[Bracket]:
        """Bracket held at the top of each iteration."""
        return [snapshot.bracket for snapshot in self._snapshots]

    def clear(self) -> None:
        self._snapshots.clear()

    def to_dataframe(self) -> pd.DataFrame:
        """One row per iteration, in solve order."""
        rows = [
            {
                self.ITERATION: s.iteration,
                self.STEP: s.step.value,
                self.BEST: s.best,
                self.F_BEST: s.f_best,
                self.COUNTERPOINT: s.counterpoint,
                self.F_COUNTERPOINT: s.f_counterpoint,
                self.WIDTH: abs(s.counterpoint - s.best),
            }
            for s in self._snapshots
        ]
        return pd.DataFrame(rows, columns=self.COLUMNS)
