import threading
import time

import pytest

from algorithms import AlgoInfo, get_algorithm
from dataset import Dataset
from engine import AlreadyRunning, InvalidConfiguration, Recorder, RunOutcome, RunState

from conftest import RUN_TIMEOUT

VALUES = [5, 3, 4, 1, 2]


def step_key(step):
    return (step.step_number, step.marker, step.primary_index, step.secondary_index, step.values)


def collect(executor, key, values, delay_ms=1):
    steps = []
    handle = executor.start(key, Dataset(values), delay_ms, on_step=steps.append)
    assert handle.wait(RUN_TIMEOUT) is RunOutcome.COMPLETED
    return handle, steps


# ---------------------------------------------------------------------------
# Happy path
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("key", ["bubble", "selection", "insertion", "merge", "quick", "heap"])
def test_run_completes_and_sorts(executor, key):
    handle, steps = collect(executor, key, VALUES)

    assert handle.dataset.snapshot() == (1, 2, 3, 4, 5)
    assert handle.state is RunState.COMPLETED
    assert not handle.is_running()
    assert handle.stats.progress == 1.0
    assert handle.latest_step is steps[-1]
    assert handle.error is None


def test_start_accepts_algo_info(executor):
    handle = executor.start(get_algorithm("quick"), Dataset(VALUES), 1)
    assert handle.wait(RUN_TIMEOUT) is RunOutcome.COMPLETED


def test_unknown_algorithm_is_invalid(executor):
    with pytest.raises(InvalidConfiguration):
        executor.start("bogo", Dataset(VALUES))


def test_progress_is_bounded_while_running(executor):
    seen = []
    handle = executor.start(
        "insertion", Dataset([9, 8, 7, 6, 5, 4, 3, 2, 1]), 1,
        on_step=lambda s: seen.append(s.progress),
    )
    handle.wait(RUN_TIMEOUT)
    assert all(0.0 <= p <= 1.0 for p in seen)
    assert seen == sorted(seen)


@pytest.mark.parametrize("key, values", [
    ("insertion", list(range(12, 0, -1))),
    ("quick",     list(range(1, 13))),
])
def test_progress_stays_below_one_until_the_run_completes(executor, key, values):
    seen = []
    handle = executor.start(key, Dataset(values), 1, on_step=lambda s: seen.append(s.progress))

    assert handle.wait(RUN_TIMEOUT) is RunOutcome.COMPLETED
    assert seen and all(p < 1.0 for p in seen)
    assert seen == sorted(seen)
    assert handle.stats.progress == 1.0


@pytest.mark.parametrize("key", ["bubble", "selection", "insertion", "merge", "quick", "heap"])
@pytest.mark.parametrize("values", [
    list(range(10, 0, -1)),
    list(range(1, 11)),
    [6, 2, 8, 1, 5, 3, 7, 4, 10, 9],
])
def test_comparisons_never_exceed_the_estimate(executor, key, values):
    handle, _ = collect(executor, key, values)
    assert handle.stats.comparisons <= get_algorithm(key).estimate_comparisons(len(values))


# ---------------------------------------------------------------------------
# Start policy
# ---------------------------------------------------------------------------
def test_overlapping_start_is_rejected(executor):
    first = executor.start("bubble", Dataset(VALUES), 300)
    with pytest.raises(AlreadyRunning):
        executor.start("bubble", Dataset(VALUES), 1)
    assert first.is_running() and executor.is_running()

    assert executor.cancel_active(wait=True, timeout=RUN_TIMEOUT) is RunOutcome.CANCELLED
    second = executor.start("bubble", Dataset(VALUES), 1)
    assert second.wait(RUN_TIMEOUT) is RunOutcome.COMPLETED


def test_cancel_active_without_run(executor):
    assert executor.cancel_active() is None


# ---------------------------------------------------------------------------
# Cancellation
# ---------------------------------------------------------------------------
def test_cancel_during_first_wait_leaves_dataset_unchanged(executor):
    dataset = Dataset(VALUES)
    handle = executor.start("bubble", dataset, 500)
    started = time.monotonic()
    handle.cancel()

    assert handle.wait(RUN_TIMEOUT) is RunOutcome.CANCELLED
    assert time.monotonic() - started < 0.4
    assert handle.state is RunState.CANCELLED
    assert dataset.snapshot() == tuple(VALUES)
    assert handle.emitter.step_count <= 1


def test_cancel_while_paused(executor):
    handle = executor.start("heap", Dataset(list(range(20, 0, -1))), 5)
    time.sleep(0.05)
    assert handle.pause()
    handle.cancel()

    assert handle.wait(RUN_TIMEOUT) is RunOutcome.CANCELLED
    assert sorted(handle.dataset.snapshot()) == list(range(1, 21))


@pytest.mark.parametrize("key", ["insertion", "merge", "quick"])
def test_cancel_midway_keeps_permutation(executor, key):
    values = list(range(30, 0, -1))
    handle = executor.start(key, Dataset(values), 1)
    time.sleep(0.05)
    handle.cancel()

    outcome = handle.wait(RUN_TIMEOUT)
    assert outcome in (RunOutcome.CANCELLED, RunOutcome.COMPLETED)
    assert sorted(handle.dataset.snapshot()) == sorted(values)


# ---------------------------------------------------------------------------
# Pause / resume / delay
# ---------------------------------------------------------------------------
def test_pause_resume_gives_identical_stream(executor):
    values = [7, 3, 6, 1, 5, 2, 4]
    _, reference = collect(executor, "quick", values)

    steps = []
    handle = executor.start("quick", Dataset(values), 10, on_step=steps.append)
    time.sleep(0.05)
    assert handle.pause()
    assert handle.state is RunState.PAUSED

    time.sleep(0.05)
    frozen = handle.emitter.step_count
    time.sleep(0.15)
    assert handle.emitter.step_count == frozen

    assert handle.resume()
    assert handle.wait(RUN_TIMEOUT) is RunOutcome.COMPLETED
    assert [step_key(s) for s in steps] == [step_key(s) for s in reference]


def test_set_delay_applies_from_next_checkpoint(executor):
    handle = executor.start("bubble", Dataset(VALUES), 300)
    time.sleep(0.05)
    assert handle.set_delay(1) == 1

    time.sleep(0.1)
    # still inside the first 300 ms wait
    assert handle.emitter.step_count == 1

    assert handle.wait(RUN_TIMEOUT) is RunOutcome.COMPLETED
    assert handle.control.delay_ms == 1


# ---------------------------------------------------------------------------
# Faults
# ---------------------------------------------------------------------------
def _broken_sort(dataset, emitter, control):
    dataset.get(len(dataset))


def test_algorithm_fault_is_reported_as_failed(executor):
    broken = AlgoInfo(
        key="broken", label="Broken Sort", fn=_broken_sort,
        pseudocode=["boom"], estimate_comparisons=lambda n: n,
    )
    handle = executor.start(broken, Dataset(VALUES), 1)

    assert handle.wait(RUN_TIMEOUT) is RunOutcome.FAILED
    assert isinstance(handle.error, IndexError)
    assert not handle.is_running()
    assert not executor.is_running()


# ---------------------------------------------------------------------------
# Observers
# ---------------------------------------------------------------------------
def test_steps_iterator_ends_with_the_run(executor):
    handle = executor.start("selection", Dataset([4, 3, 2, 1]), 20)
    steps = list(handle.steps(timeout=RUN_TIMEOUT))

    assert handle.outcome is RunOutcome.COMPLETED
    numbers = [s.step_number for s in steps]
    assert numbers == list(range(numbers[0], numbers[0] + len(numbers)))
    assert numbers[-1] == handle.emitter.step_count - 1


def test_steps_subscribes_only_once_iterated(executor):
    handle = executor.start("bubble", Dataset(VALUES), 300)
    before = len(handle.emitter._subscribers)

    steps = handle.steps(timeout=RUN_TIMEOUT)
    assert len(handle.emitter._subscribers) == before

    handle.cancel()
    assert handle.wait(RUN_TIMEOUT) is RunOutcome.CANCELLED
    assert list(steps) == []
    assert len(handle.emitter._subscribers) == before


def test_steps_after_finish_is_empty(executor):
    handle, _ = collect(executor, "bubble", VALUES)
    assert list(handle.steps(timeout=1)) == []


def test_finish_callbacks_run_before_wait_returns(executor):
    recorder = Recorder(keep_history=True)
    handle = executor.start("bubble", Dataset(VALUES), 1,
                            on_step=recorder.record_step, on_finish=recorder.finish)
    handle.wait(RUN_TIMEOUT)

    metrics = recorder.metrics
    assert metrics is not None
    assert metrics.algo_key == "bubble"
    assert metrics.size == 5
    assert (metrics.comparisons, metrics.swaps, metrics.total_steps) == (10, 8, 18)
    assert metrics.outcome == "completed"
    assert metrics.is_sorted
    assert len(recorder.steps) == 18
    assert recorder.latest is recorder.steps[-1]


def test_late_finish_callback_runs_immediately(executor):
    handle, _ = collect(executor, "bubble", VALUES)
    called = threading.Event()
    handle.add_finish_callback(lambda h: called.set())
    assert called.is_set()


def test_failing_subscriber_does_not_break_the_run(executor):
    def _bad(step):
        raise RuntimeError("subscriber bug")

    handle = executor.start("bubble", Dataset(VALUES), 1, on_step=_bad)
    assert handle.wait(RUN_TIMEOUT) is RunOutcome.COMPLETED

