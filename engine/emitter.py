"""
emitter.py — Step Emission
===========================
Turns raw algorithm actions ("compared 3 and 4", "swapped 0 and 7")
into Step snapshots and hands them to every subscriber.

Delivery runs on the algorithm thread, synchronously and in emission
order, so subscribers see a strict FIFO stream and nothing is dropped.
The pacing delay in RunControl.checkpoint() that follows each emit is
what throttles production.  Subscribers that need to hand Steps to a
UI thread do so themselves (see RunHandle.steps()).
"""

import threading
from typing import Callable, List, Optional

from algorithms.step import Marker, Step
from dataset import Dataset
from engine.stats import StatsAggregator
from logging_config import get_logger

logger = get_logger(__name__)

StepCallback = Callable[[Step], None]


class StepEmitter:
    """
    Attributes:
        dataset     : The array being sorted (snapshotted into each Step).
        stats       : Source of the counters and progress fraction.
        step_count  : Number of Steps emitted so far.
        last_step   : Most recent Step (or None).
    """

    def __init__(self, dataset: Dataset, stats: StatsAggregator):
        self.dataset:    Dataset         = dataset
        self.stats:      StatsAggregator = stats
        self.step_count: int             = 0
        self.last_step:  Optional[Step]  = None

        self._subscribers: List[StepCallback] = []
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Subscription
    # ------------------------------------------------------------------
    def subscribe(self, callback: StepCallback) -> None:
        with self._lock:
            self._subscribers.append(callback)

    def unsubscribe(self, callback: StepCallback) -> None:
        with self._lock:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

    # ------------------------------------------------------------------
    # Emission
    # ------------------------------------------------------------------
    def emit(
        self,
        primary: Optional[int] = None,
        secondary: Optional[int] = None,
        marker: Marker = Marker.COMPARING,
    ) -> Step:
        step = Step(
            step_number=self.step_count,
            primary_index=primary,
            secondary_index=secondary,
            marker=marker,
            comparisons=self.stats.comparisons,
            swaps=self.stats.swaps,
            progress=self.stats.progress,
            values=self.dataset.snapshot(),
        )
        self.step_count += 1
        self.last_step   = step
        logger.debug("Step %d %s %s", step.step_number, marker.value, step.indices)

        with self._lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            try:
                callback(step)
            except Exception:
                logger.exception("Step subscriber %r failed on step %d", callback, step.step_number)
        return step
