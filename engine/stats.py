"""
stats.py — Live Run Statistics
===============================
Counts come from the Dataset (it sees every compare / swap / place);
the aggregator adds the progress fraction on top.

Progress is comparisons / total_steps.  `total_steps` is the
algorithm's worst-case comparison count for the array size, so the
fraction is exact for Bubble and Selection and an underestimate
elsewhere.  Until the run finishes it never exceeds
RUNNING_PROGRESS_CAP; complete() pins it to 1.0.
"""

from config import RUNNING_PROGRESS_CAP
from dataset import Dataset


class StatsAggregator:

    def __init__(self, dataset: Dataset, total_steps: int = 0):
        self.dataset:     Dataset = dataset
        self.total_steps: int     = max(0, total_steps)
        self._completed:  bool    = False

    def reset(self, total_steps: int) -> None:
        """Called exactly once, at run start."""
        self.dataset.reset_counters()
        self.total_steps = max(0, total_steps)
        self._completed  = False

    def complete(self) -> None:
        self._completed = True

    # ------------------------------------------------------------------
    @property
    def comparisons(self) -> int:
        return self.dataset.comparisons

    @property
    def swaps(self) -> int:
        return self.dataset.swaps

    @property
    def current_step(self) -> int:
        if self._completed:
            return self.total_steps
        return min(self.dataset.comparisons, self.total_steps)

    @property
    def progress(self) -> float:
        if self._completed:
            return 1.0
        if self.total_steps <= 0:
            return 0.0
        return min(self.current_step / self.total_steps, RUNNING_PROGRESS_CAP)
