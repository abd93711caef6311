"""
executor.py — Paced Background Execution
=========================================
PacedExecutor runs one sorting algorithm at a time on its own daemon
thread and hands the caller a RunHandle straight away.

    executor = PacedExecutor()
    handle   = executor.start(get_algorithm("quick"), Dataset([5, 3, 4, 1, 2]), delay_ms=20)
    for step in handle.steps():        # blocking FIFO iterator, ends at the terminal event
        render(step)
    handle.outcome                     # RunOutcome.COMPLETED / CANCELLED / FAILED

Policy:
  The executor itself rejects overlapping runs with AlreadyRunning.
  SortSession builds "cancel the old run, wait for it, start the new
  one" on top of cancel_active().

Terminal events:
  Aborted raised by a checkpoint is caught here and reported as
  CANCELLED; it never reaches the caller.  Any other exception is a
  programming fault: it is logged, stored on handle.error and reported
  as FAILED.
"""

import queue
import threading
import time
from enum import Enum
from typing import TYPE_CHECKING, Callable, Iterator, List, Optional, Union

from algorithms.step import Step
from config import DEFAULT_DELAY_MS
from dataset import Dataset
from engine.control import RunControl, RunState
from engine.emitter import StepCallback, StepEmitter
from engine.errors import Aborted, AlreadyRunning
from engine.stats import StatsAggregator
from logging_config import get_logger

if TYPE_CHECKING:
    from algorithms import AlgoInfo

logger = get_logger(__name__)


class RunOutcome(Enum):
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED    = "failed"


FinishCallback = Callable[["RunHandle"], None]

# end-of-stream marker for steps() queues
_END = object()


# ---------------------------------------------------------------------------
# RunHandle
# ---------------------------------------------------------------------------
class RunHandle:
    """
    The caller's view of one run.

    Attributes:
        algorithm : AlgoInfo being executed.
        dataset   : The array being sorted (written only by the run thread).
        control   : The run's RunControl.
        stats     : Live counters / progress.
        outcome   : RunOutcome once finished, else None.
        error     : The exception behind a FAILED outcome.
    """

    def __init__(
        self,
        algorithm: "AlgoInfo",
        dataset: Dataset,
        control: RunControl,
        emitter: StepEmitter,
        stats: StatsAggregator,
    ):
        self.algorithm = algorithm
        self.dataset   = dataset
        self.control   = control
        self.emitter   = emitter
        self.stats     = stats
        self.outcome:  Optional[RunOutcome]    = None
        self.error:    Optional[BaseException] = None

        self.started_at:  float = 0.0
        self.finished_at: float = 0.0

        self._done             = threading.Event()
        self._finished         = False
        self._lock             = threading.Lock()
        self._finish_callbacks: List[FinishCallback] = []
        self._queues:           List[queue.Queue]    = []

    # ------------------------------------------------------------------
    # Control surface
    # ------------------------------------------------------------------
    def pause(self) -> bool:
        return self.control.pause()

    def resume(self) -> bool:
        return self.control.resume()

    def cancel(self) -> None:
        self.control.request_cancel()

    def set_delay(self, delay_ms: float) -> int:
        return self.control.set_delay(delay_ms)

    def is_running(self) -> bool:
        """True while RUNNING or PAUSED."""
        return self.control.state.is_active

    @property
    def state(self) -> RunState:
        return self.control.state

    @property
    def latest_step(self) -> Optional[Step]:
        return self.emitter.last_step

    @property
    def elapsed_ms(self) -> float:
        if not self.started_at:
            return 0.0
        end = self.finished_at or time.monotonic()
        return (end - self.started_at) * 1000

    # ------------------------------------------------------------------
    # Subscription
    # ------------------------------------------------------------------
    def subscribe(self, callback: StepCallback) -> None:
        """callback(step) runs on the algorithm thread, in emission order."""
        self.emitter.subscribe(callback)

    def add_finish_callback(self, callback: FinishCallback) -> None:
        """callback(handle) runs once with the terminal outcome (immediately if already done)."""
        with self._lock:
            if not self._finished:
                self._finish_callbacks.append(callback)
                return
        callback(self)

    def steps(self, timeout: Optional[float] = None) -> Iterator[Step]:
        """
        Blocking iterator over the Steps emitted once iteration starts,
        ending when the run finishes.  `timeout` bounds the wait for each
        Step and raises queue.Empty when exceeded.
        """
        q: queue.Queue = queue.Queue()
        with self._lock:
            if self._finished:
                return
            self._queues.append(q)
            self.emitter.subscribe(q.put)
        try:
            while True:
                item = q.get(timeout=timeout)
                if item is _END:
                    return
                yield item
        finally:
            self.emitter.unsubscribe(q.put)
            with self._lock:
                if q in self._queues:
                    self._queues.remove(q)

    def wait(self, timeout: Optional[float] = None) -> Optional[RunOutcome]:
        """Block until the run finishes; returns the outcome (None on timeout)."""
        self._done.wait(timeout)
        return self.outcome

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _launch(self) -> None:
        thread = threading.Thread(
            target=self._run, name=f"sort-{self.algorithm.key}", daemon=True,
        )
        thread.start()

    def _run(self) -> None:
        self.started_at = time.monotonic()
        logger.info(
            "Running %s on %d values (delay %d ms)",
            self.algorithm.label, len(self.dataset), self.control.delay_ms,
        )

        cancelled = self.control.cancel_requested
        if not cancelled:
            try:
                self.algorithm.fn(self.dataset, self.emitter, self.control)
            except Aborted:
                cancelled = True
            except Exception as exc:
                self.error = exc
                logger.exception("%s failed after %d steps", self.algorithm.label, self.emitter.step_count)

        if self.error is not None:
            self.control.finish(cancelled=True)
            outcome = RunOutcome.FAILED
        elif cancelled:
            self.control.finish(cancelled=True)
            outcome = RunOutcome.CANCELLED
        else:
            self.stats.complete()
            self.control.finish(cancelled=False)
            outcome = RunOutcome.COMPLETED

        self._publish(outcome)

    def _publish(self, outcome: RunOutcome) -> None:
        self.finished_at = time.monotonic()
        with self._lock:
            self.outcome   = outcome
            self._finished = True
            callbacks = list(self._finish_callbacks)
            self._finish_callbacks.clear()
            for q in self._queues:
                q.put(_END)

        logger.info(
            "%s %s: %d comparisons, %d swaps, %d steps in %.0f ms",
            self.algorithm.label, outcome.value, self.stats.comparisons,
            self.stats.swaps, self.emitter.step_count, self.elapsed_ms,
        )
        for callback in callbacks:
            try:
                callback(self)
            except Exception:
                logger.exception("Finish callback %r failed", callback)
        # wait() returns only after every finish callback has run
        self._done.set()

    def __repr__(self) -> str:
        return f"RunHandle({self.algorithm.key}, state={self.state.value}, outcome={self.outcome})"


# ---------------------------------------------------------------------------
# PacedExecutor
# ---------------------------------------------------------------------------
class PacedExecutor:
    """Starts runs and guarantees at most one is RUNNING or PAUSED."""

    def __init__(self):
        self._lock = threading.Lock()
        self._current: Optional[RunHandle] = None

    def is_running(self) -> bool:
        handle = self._current
        return handle is not None and handle.is_running()

    def start(
        self,
        algorithm: Union["AlgoInfo", str],
        dataset: Dataset,
        delay_ms: int = DEFAULT_DELAY_MS,
        on_step: Optional[StepCallback] = None,
        on_finish: Optional[FinishCallback] = None,
    ) -> RunHandle:
        """
        Spawn a run and return its handle immediately.

        Raises:
            AlreadyRunning        – the previous run is still RUNNING or PAUSED.
            InvalidConfiguration  – `algorithm` is an unknown registry key.
        """
        if isinstance(algorithm, str):
            from algorithms import require_algorithm
            algorithm = require_algorithm(algorithm)

        with self._lock:
            if self._current is not None and self._current.is_running():
                raise AlreadyRunning(
                    f"{self._current.algorithm.label} is still {self._current.state.value}"
                )

            control = RunControl(delay_ms)
            stats   = StatsAggregator(dataset)
            stats.reset(algorithm.estimate_comparisons(len(dataset)))
            emitter = StepEmitter(dataset, stats)

            handle = RunHandle(algorithm, dataset, control, emitter, stats)
            if on_step is not None:
                handle.subscribe(on_step)
            if on_finish is not None:
                handle.add_finish_callback(on_finish)

            control.begin()
            self._current = handle
            handle._launch()
        return handle

    def cancel_active(self, wait: bool = True, timeout: Optional[float] = None) -> Optional[RunOutcome]:
        """Cancel the current run (if any); optionally wait for it to unwind."""
        handle = self._current
        if handle is None:
            return None
        handle.cancel()
        if wait:
            return handle.wait(timeout)
        return handle.outcome
