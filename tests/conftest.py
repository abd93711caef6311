import pytest

from dataset import Dataset
from engine import PacedExecutor, RunControl, StatsAggregator, StepEmitter

# seconds; generous upper bound for a run on a handful of values at 1 ms/step
RUN_TIMEOUT = 10.0


class SyncRun:
    """Runs an algorithm function on the calling thread, recording every Step."""

    def __init__(self, values, delay_ms=1):
        self.dataset = Dataset(values)
        self.stats   = StatsAggregator(self.dataset)
        self.emitter = StepEmitter(self.dataset, self.stats)
        self.control = RunControl(delay_ms)
        self.steps   = []
        self.emitter.subscribe(self.steps.append)
        self.control.begin()

    def cancel_after(self, n_steps):
        """Request cancellation from inside the stream once n_steps Steps were seen."""
        def _watch(step):
            if step.step_number + 1 >= n_steps:
                self.control.request_cancel()
        self.emitter.subscribe(_watch)

    def run(self, fn):
        fn(self.dataset, self.emitter, self.control)
        return self


@pytest.fixture
def sync_run():
    return SyncRun


@pytest.fixture
def executor():
    ex = PacedExecutor()
    yield ex
    ex.cancel_active(wait=True, timeout=RUN_TIMEOUT)
