"""
control.py — Per-Run State Machine
===================================
One RunControl is shared between the algorithm thread and the control
context (UI / web handlers).  It owns the run state, the pacing delay
and the cancellation flag.

State machine:
    IDLE     →  begin()          →  RUNNING
    RUNNING  →  pause()          →  PAUSED
    PAUSED   →  resume()         →  RUNNING
    RUNNING / PAUSED → finish()  →  COMPLETED | CANCELLED   (terminal)

Thread safety:
  Every read and write goes through one threading.Condition.  The
  algorithm thread blocks only inside checkpoint(); resume(),
  request_cancel() and set_delay() notify it so it wakes promptly.
  While paused the gate also re-checks every PAUSE_POLL_SECONDS.
"""

import threading
import time
from enum import Enum

from config import DEFAULT_DELAY_MS, MAX_DELAY_MS, MIN_DELAY_MS, PAUSE_POLL_SECONDS
from logging_config import get_logger

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# States & signals
# ---------------------------------------------------------------------------
class RunState(Enum):
    IDLE      = "idle"
    RUNNING   = "running"
    PAUSED    = "paused"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (RunState.COMPLETED, RunState.CANCELLED)

    @property
    def is_active(self) -> bool:
        return self in (RunState.RUNNING, RunState.PAUSED)


class Signal(Enum):
    CONTINUE = "continue"
    ABORT    = "abort"


def clamp_delay(delay_ms: float) -> int:
    return int(max(MIN_DELAY_MS, min(MAX_DELAY_MS, delay_ms)))


# ---------------------------------------------------------------------------
# RunControl
# ---------------------------------------------------------------------------
class RunControl:
    """
    Attributes (read-only properties):
        state            : Current RunState.
        delay_ms         : Pacing delay applied at the next checkpoint.
        cancel_requested : True once request_cancel() has been called.
    """

    def __init__(self, delay_ms: int = DEFAULT_DELAY_MS):
        self._cond      = threading.Condition()
        self._state     = RunState.IDLE
        self._delay_ms  = clamp_delay(delay_ms)
        self._cancelled = False

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def state(self) -> RunState:
        with self._cond:
            return self._state

    @property
    def delay_ms(self) -> int:
        with self._cond:
            return self._delay_ms

    @property
    def cancel_requested(self) -> bool:
        with self._cond:
            return self._cancelled

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def begin(self) -> None:
        with self._cond:
            if self._state is not RunState.IDLE:
                raise RuntimeError(f"cannot begin a run from state {self._state.value}")
            self._state = RunState.RUNNING

    def pause(self) -> bool:
        """RUNNING → PAUSED.  Returns False (no-op) from any other state."""
        with self._cond:
            if self._state is not RunState.RUNNING:
                return False
            self._state = RunState.PAUSED
        logger.info("Run paused")
        return True

    def resume(self) -> bool:
        """PAUSED → RUNNING, waking the gate.  Returns False from any other state."""
        with self._cond:
            if self._state is not RunState.PAUSED:
                return False
            self._state = RunState.RUNNING
            self._cond.notify_all()
        logger.info("Run resumed")
        return True

    def request_cancel(self) -> None:
        """Idempotent, never blocks."""
        with self._cond:
            if self._cancelled or self._state.is_terminal:
                return
            self._cancelled = True
            self._cond.notify_all()
        logger.info("Cancellation requested")

    def finish(self, cancelled: bool) -> RunState:
        """Terminal transition, driven by the executor only."""
        with self._cond:
            if not self._state.is_terminal:
                self._state = RunState.CANCELLED if cancelled else RunState.COMPLETED
            self._cond.notify_all()
            return self._state

    def set_delay(self, delay_ms: float) -> int:
        """Clamp to [MIN_DELAY_MS, MAX_DELAY_MS]; used from the next checkpoint on."""
        with self._cond:
            self._delay_ms = clamp_delay(delay_ms)
            return self._delay_ms

    # ------------------------------------------------------------------
    # The gate
    # ------------------------------------------------------------------
    def checkpoint(self) -> Signal:
        """
        Called by the algorithm thread between steps.

        1. Waits the pacing delay (cut short by a cancel request).
        2. While PAUSED, blocks until resumed or cancelled.
        3. Returns ABORT once cancelled, CONTINUE otherwise.
        """
        with self._cond:
            if self._cancelled:
                return Signal.ABORT

            deadline = time.monotonic() + self._delay_ms / 1000.0
            while not self._cancelled:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    break
                self._cond.wait(remaining)

            while self._state is RunState.PAUSED and not self._cancelled:
                self._cond.wait(PAUSE_POLL_SECONDS)

            return Signal.ABORT if self._cancelled else Signal.CONTINUE

    def __repr__(self) -> str:
        return f"RunControl(state={self.state.value}, delay_ms={self.delay_ms})"
