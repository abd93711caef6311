"""
checkpoint.py — Emit-then-Gate Helper
======================================
Every observable action in an algorithm goes through `advance()`:

    1. emit a Step describing the action
    2. pass the run's checkpoint (pacing delay, pause gate)
    3. raise Aborted if the run was cancelled

Aborted unwinds the whole (possibly recursive) algorithm; whatever
order the array is in at that moment is left as-is.
"""

from typing import Optional

from algorithms.step import Marker
from engine.control import RunControl, Signal
from engine.errors import Aborted


def advance(
    emitter,
    control: RunControl,
    primary: Optional[int] = None,
    secondary: Optional[int] = None,
    marker: Marker = Marker.COMPARING,
) -> None:
    emitter.emit(primary, secondary, marker)
    if control.checkpoint() is Signal.ABORT:
        raise Aborted()
