"""
engine/
-------
Execution layer: run control, step emission, statistics, the paced
executor and step recording.

    from engine import PacedExecutor, RunControl, RunOutcome, Recorder

The UI-facing SortSession lives in engine.session and is imported from
there (it depends on the algorithm registry, which depends on this
package).
"""

from engine.errors   import EngineError, AlreadyRunning, InvalidConfiguration, Aborted
from engine.control  import RunControl, RunState, Signal, clamp_delay
from engine.stats    import StatsAggregator
from engine.emitter  import StepEmitter
from engine.executor import PacedExecutor, RunHandle, RunOutcome
from engine.recorder import Recorder, RunMetrics

__all__ = [
    "EngineError",
    "AlreadyRunning",
    "InvalidConfiguration",
    "Aborted",
    "RunControl",
    "RunState",
    "Signal",
    "clamp_delay",
    "StatsAggregator",
    "StepEmitter",
    "PacedExecutor",
    "RunHandle",
    "RunOutcome",
    "Recorder",
    "RunMetrics",
]
