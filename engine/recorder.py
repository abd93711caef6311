"""
recorder.py — Step Stream Recorder & Run Metrics
=================================================
A Recorder is an ordinary step subscriber.  It always keeps the latest
Step (what the UI draws) and, when asked to, the whole stream; when the
run finishes it computes the RunMetrics card shown in the stats panel.

Usage:
    rec    = Recorder(keep_history=True)
    handle = executor.start(algo, dataset, on_step=rec.record_step, on_finish=rec.finish)
    handle.wait()
    rec.metrics            # RunMetrics
    rec.steps              # every Step, in emission order

Pass the callbacks to start() so no early Step is missed.
"""

import threading
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from algorithms.step import Step
from engine.executor import RunHandle


# ---------------------------------------------------------------------------
# Metrics dataclass — what the stats panel renders after a run
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:     str   = ""
    algo_label:   str   = ""
    size:         int   = 0
    comparisons:  int   = 0
    swaps:        int   = 0
    total_steps:  int   = 0          # number of Steps emitted
    wall_time_ms: float = 0.0        # includes pacing delays and pauses
    outcome:      str   = ""         # RunOutcome value
    is_sorted:    bool  = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        steps    : Recorded Steps (empty unless keep_history=True).
        latest   : Most recent Step, or None before the first one.
        metrics  : RunMetrics, available once the run has finished.
    """

    def __init__(self, keep_history: bool = False):
        self.keep_history: bool                 = keep_history
        self.steps:        List[Step]           = []
        self.latest:       Optional[Step]       = None
        self.metrics:      Optional[RunMetrics] = None
        self._lock = threading.Lock()

    def record_step(self, step: Step) -> None:
        with self._lock:
            self.latest = step
            if self.keep_history:
                self.steps.append(step)

    def finish(self, handle: RunHandle) -> RunMetrics:
        metrics = RunMetrics(
            algo_key=handle.algorithm.key,
            algo_label=handle.algorithm.label,
            size=len(handle.dataset),
            comparisons=handle.stats.comparisons,
            swaps=handle.stats.swaps,
            total_steps=handle.emitter.step_count,
            wall_time_ms=round(handle.elapsed_ms, 2),
            outcome=handle.outcome.value if handle.outcome else "",
            is_sorted=handle.dataset.is_sorted(),
        )
        with self._lock:
            self.metrics = metrics
        return metrics
