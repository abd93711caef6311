"""
session.py — UI Control Surface
================================
SortSession is the ONLY object the UI talks to.  It owns the current
Dataset, the chosen algorithm / size / delay / distribution, and the
active RunHandle, and exposes the buttons of the visualizer:

    start, pause, resume, cancel, reset, shuffle,
    set_delay, set_speed, set_size, set_distribution, set_algorithm

Start policy:
  start() and reset() always work.  An active run is cancelled and
  waited for before anything else happens, so the PacedExecutor never
  sees overlapping runs.  shuffle() and the size / distribution /
  algorithm setters are refused with AlreadyRunning while a run is
  active.

Reading state:
  While a run is active the Dataset belongs to the algorithm thread.
  `values` and state() therefore read the latest Step snapshot (or the
  snapshot taken at start), never the live array.
"""

import threading
from typing import Any, Dict, Optional, Tuple

from algorithms import AlgoInfo, require_algorithm
from algorithms.step import Step
from config import (
    DEFAULT_ARRAY_SIZE,
    DEFAULT_DELAY_MS,
    DEFAULT_DISTRIBUTION,
    DISTRIBUTIONS,
    MAX_ARRAY_SIZE,
    MAX_DELAY_MS,
    MIN_ARRAY_SIZE,
    MIN_DELAY_MS,
    SPEED_PRESETS,
)
from dataset import Dataset
from engine.control import RunState
from engine.errors import AlreadyRunning, InvalidConfiguration
from engine.executor import PacedExecutor, RunHandle, RunOutcome
from engine.recorder import Recorder
from logging_config import get_logger

logger = get_logger(__name__)

# how long reset()/start() wait for a cancelled run to unwind
CANCEL_WAIT_SECONDS: float = 5.0


def validate_size(size: Any) -> int:
    if isinstance(size, bool) or not isinstance(size, int):
        raise InvalidConfiguration(f"Array size must be an integer, got {size!r}")
    if not (MIN_ARRAY_SIZE <= size <= MAX_ARRAY_SIZE):
        raise InvalidConfiguration(
            f"Array size {size} outside [{MIN_ARRAY_SIZE}, {MAX_ARRAY_SIZE}]"
        )
    return size


def validate_delay(delay_ms: Any) -> int:
    if isinstance(delay_ms, bool) or not isinstance(delay_ms, (int, float)):
        raise InvalidConfiguration(f"Delay must be a number of milliseconds, got {delay_ms!r}")
    if not (MIN_DELAY_MS <= delay_ms <= MAX_DELAY_MS):
        raise InvalidConfiguration(
            f"Delay {delay_ms} ms outside [{MIN_DELAY_MS}, {MAX_DELAY_MS}]"
        )
    return int(delay_ms)


def validate_distribution(name: Any) -> str:
    if name not in DISTRIBUTIONS:
        raise InvalidConfiguration(f"Unknown distribution: {name}")
    return name


class SortSession:
    """
    Attributes:
        executor      : The PacedExecutor running the algorithms.
        algorithm     : Selected AlgoInfo.
        size          : Array size used by reset() / set_size().
        delay_ms      : Pacing delay for the next (and current) run.
        distribution  : Value distribution used when regenerating.
        dataset       : The array; owned by the run thread while running.
        handle        : RunHandle of the latest run, or None.
        recorder      : Recorder of the latest run, or None.
    """

    def __init__(
        self,
        executor: Optional[PacedExecutor] = None,
        algorithm: str = "bubble",
        size: int = DEFAULT_ARRAY_SIZE,
        delay_ms: int = DEFAULT_DELAY_MS,
        distribution: str = DEFAULT_DISTRIBUTION,
        seed: Optional[int] = None,
    ):
        self.executor:     PacedExecutor      = executor or PacedExecutor()
        self.algorithm:    AlgoInfo           = require_algorithm(algorithm)
        self.size:         int                = validate_size(size)
        self.delay_ms:     int                = validate_delay(delay_ms)
        self.distribution: str                = validate_distribution(distribution)
        self.seed:         Optional[int]      = seed
        self.dataset:      Dataset            = Dataset.generate(self.size, self.distribution, seed)
        self.handle:       Optional[RunHandle] = None
        self.recorder:     Optional[Recorder]  = None

        self._start_values: Tuple[int, ...] = self.dataset.snapshot()
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(
        self,
        algorithm: Optional[str] = None,
        size: Optional[int] = None,
        delay_ms: Optional[int] = None,
    ) -> RunHandle:
        """Cancel any active run, apply the given settings and start sorting."""
        info  = require_algorithm(algorithm) if algorithm is not None else self.algorithm
        size  = validate_size(size) if size is not None else self.size
        delay = validate_delay(delay_ms) if delay_ms is not None else self.delay_ms

        with self._lock:
            self._stop_active()
            self.algorithm = info
            self.delay_ms  = delay
            if size != self.size:
                self.size = size
                self._regenerate()

            self.recorder      = Recorder()
            self._start_values = self.dataset.snapshot()
            self.handle = self.executor.start(
                info,
                self.dataset,
                delay,
                on_step=self.recorder.record_step,
                on_finish=self.recorder.finish,
            )
            return self.handle

    def pause(self) -> bool:
        return self.handle.pause() if self.handle else False

    def resume(self) -> bool:
        return self.handle.resume() if self.handle else False

    def toggle_pause(self) -> bool:
        """Pause if running, resume if paused.  Returns True when now paused."""
        if self.handle is None:
            return False
        if not self.handle.pause():
            self.handle.resume()
        return self.handle.state is RunState.PAUSED

    def cancel(self, wait: bool = False) -> Optional[RunOutcome]:
        if self.handle is None:
            return None
        self.handle.cancel()
        if wait:
            return self.handle.wait(CANCEL_WAIT_SECONDS)
        return self.handle.outcome

    def reset(self) -> None:
        """Stop any run and start over with a freshly generated array."""
        with self._lock:
            self._stop_active()
            self._regenerate()
            self.handle   = None
            self.recorder = None
        logger.info("Session reset: %d %s values", self.size, self.distribution)

    def shuffle(self, seed: Optional[int] = None) -> None:
        with self._lock:
            self._require_idle("shuffle")
            self.dataset.shuffle(seed)
            self._start_values = self.dataset.snapshot()
            self.handle   = None
            self.recorder = None

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def set_delay(self, delay_ms: Any) -> int:
        """Applies to the active run from its next checkpoint on."""
        delay = validate_delay(delay_ms)
        with self._lock:
            self.delay_ms = delay
            if self.handle is not None and self.handle.is_running():
                self.handle.set_delay(delay)
        return delay

    def set_speed(self, preset: str) -> int:
        if preset not in SPEED_PRESETS:
            raise InvalidConfiguration(f"Unknown speed preset: {preset}")
        return self.set_delay(SPEED_PRESETS[preset])

    def set_size(self, size: Any) -> None:
        size = validate_size(size)
        with self._lock:
            self._require_idle("resize")
            self.size = size
            self._regenerate()
            self.handle   = None
            self.recorder = None

    def set_distribution(self, name: Any) -> None:
        name = validate_distribution(name)
        with self._lock:
            self._require_idle("change the distribution")
            self.distribution = name
            self._regenerate()
            self.handle   = None
            self.recorder = None

    def set_algorithm(self, key: str) -> AlgoInfo:
        info = require_algorithm(key)
        with self._lock:
            self._require_idle("change the algorithm")
            self.algorithm = info
        return info

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def is_running(self) -> bool:
        return self.handle is not None and self.handle.is_running()

    @property
    def latest_step(self) -> Optional[Step]:
        return self.handle.latest_step if self.handle else None

    @property
    def comparisons(self) -> int:
        return self.handle.stats.comparisons if self.handle else 0

    @property
    def swaps(self) -> int:
        return self.handle.stats.swaps if self.handle else 0

    @property
    def progress(self) -> float:
        return self.handle.stats.progress if self.handle else 0.0

    @property
    def values(self) -> Tuple[int, ...]:
        step = self.latest_step
        if self.is_running():
            return step.values if step else self._start_values
        return self.dataset.snapshot()

    @property
    def status(self) -> str:
        handle = self.handle
        if handle is None:
            return "Ready"
        if handle.outcome is RunOutcome.COMPLETED:
            return "Sorting completed!"
        if handle.outcome is RunOutcome.CANCELLED:
            return "Sorting interrupted"
        if handle.outcome is RunOutcome.FAILED:
            return f"Sorting failed: {handle.error}"
        if handle.state is RunState.PAUSED:
            return "Paused"
        return f"Running {handle.algorithm.label}..."

    def state(self) -> Dict[str, Any]:
        """JSON-ready snapshot for the web front end."""
        handle   = self.handle
        step     = self.latest_step
        metrics  = self.recorder.metrics if self.recorder else None
        return {
            "algorithm":    self.algorithm.key,
            "size":         self.size,
            "delay_ms":     self.delay_ms,
            "distribution": self.distribution,
            "status":       self.status,
            "run_state":    handle.state.value if handle else RunState.IDLE.value,
            "outcome":      handle.outcome.value if handle and handle.outcome else None,
            "is_running":   self.is_running(),
            "comparisons":  self.comparisons,
            "swaps":        self.swaps,
            "progress":     round(self.progress, 4),
            "step":         step.to_dict() if step else None,
            "values":       list(self.values),
            "metrics":      metrics.to_dict() if metrics else None,
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _stop_active(self) -> None:
        if self.executor.is_running():
            logger.info("Preempting active run")
            outcome = self.executor.cancel_active(wait=True, timeout=CANCEL_WAIT_SECONDS)
            if outcome is None:
                raise AlreadyRunning("previous run did not stop in time")

    def _require_idle(self, action: str) -> None:
        if self.is_running():
            raise AlreadyRunning(f"cannot {action} while sorting")

    def _regenerate(self) -> None:
        self.dataset       = Dataset.generate(self.size, self.distribution)
        self._start_values = self.dataset.snapshot()
