import time

import pytest

from engine import AlreadyRunning, InvalidConfiguration, RunOutcome, RunState
from engine.session import SortSession, validate_delay, validate_size

from conftest import RUN_TIMEOUT


@pytest.fixture
def session():
    s = SortSession(size=8, delay_ms=1, seed=3)
    yield s
    s.cancel(wait=True)


def test_fresh_session_is_ready(session):
    state = session.state()
    assert state["status"] == "Ready"
    assert state["run_state"] == "idle"
    assert state["outcome"] is None
    assert state["is_running"] is False
    assert len(state["values"]) == 8
    assert sorted(state["values"]) == list(range(1, 9))
    assert state["metrics"] is None


def test_seeded_sessions_share_their_first_array():
    assert SortSession(size=10, seed=42).values == SortSession(size=10, seed=42).values


def test_start_runs_to_completion(session):
    handle = session.start("merge")
    assert handle.wait(RUN_TIMEOUT) is RunOutcome.COMPLETED

    state = session.state()
    assert state["status"] == "Sorting completed!"
    assert state["outcome"] == "completed"
    assert state["values"] == list(range(1, 9))
    assert state["progress"] == 1.0
    assert state["metrics"]["algo_key"] == "merge"
    assert session.algorithm.key == "merge"


def test_start_with_new_size_regenerates(session):
    handle = session.start("insertion", size=12)
    handle.wait(RUN_TIMEOUT)
    assert session.size == 12
    assert session.values == tuple(range(1, 13))


def test_start_preempts_the_active_run(session):
    first = session.start("bubble", delay_ms=300)
    second = session.start("selection", delay_ms=1)

    assert first.outcome is RunOutcome.CANCELLED
    assert second.wait(RUN_TIMEOUT) is RunOutcome.COMPLETED
    assert session.handle is second


def test_values_come_from_step_snapshots_while_running(session):
    session.start("bubble", delay_ms=200)
    time.sleep(0.05)
    assert session.is_running()
    assert session.values == session.latest_step.values
    assert session.status == "Running Bubble Sort..."


def test_idle_only_operations_are_refused_while_running(session):
    session.start("heap", delay_ms=200)
    with pytest.raises(AlreadyRunning):
        session.shuffle()
    with pytest.raises(AlreadyRunning):
        session.set_size(10)
    with pytest.raises(AlreadyRunning):
        session.set_distribution("reversed")
    with pytest.raises(AlreadyRunning):
        session.set_algorithm("quick")


def test_cancel_reports_interrupted_and_keeps_permutation(session):
    original = sorted(session.values)
    session.start("quick", delay_ms=50)
    time.sleep(0.08)

    assert session.cancel(wait=True) is RunOutcome.CANCELLED
    assert session.status == "Sorting interrupted"
    assert sorted(session.values) == original
    assert session.recorder.metrics.outcome == "cancelled"


def test_pause_resume_and_toggle(session):
    session.start("bubble", delay_ms=20)
    assert session.pause()
    assert session.status == "Paused"
    assert session.toggle_pause() is False
    assert session.handle.state is RunState.RUNNING
    assert session.toggle_pause() is True
    assert session.resume()
    assert session.handle.wait(RUN_TIMEOUT) is RunOutcome.COMPLETED


def test_controls_without_a_run_are_noops(session):
    assert session.pause() is False
    assert session.resume() is False
    assert session.toggle_pause() is False
    assert session.cancel() is None


def test_set_delay_reaches_the_active_run(session):
    session.start("bubble", delay_ms=200)
    assert session.set_delay(5) == 5
    assert session.handle.control.delay_ms == 5
    assert session.delay_ms == 5


def test_set_speed_uses_presets(session):
    assert session.set_speed("fast") == 10
    assert session.delay_ms == 10
    with pytest.raises(InvalidConfiguration):
        session.set_speed("ludicrous")


def test_reset_stops_and_regenerates(session):
    session.start("bubble", delay_ms=200)
    session.reset()
    assert session.handle is None
    assert session.recorder is None
    assert not session.is_running()
    assert session.status == "Ready"
    assert sorted(session.values) == list(range(1, 9))


def test_shuffle_keeps_values(session):
    handle = session.start("heap")
    handle.wait(RUN_TIMEOUT)
    session.shuffle(seed=1)
    assert session.handle is None
    assert sorted(session.values) == list(range(1, 9))


def test_set_size_and_distribution(session):
    session.set_size(20)
    assert len(session.values) == 20
    session.set_distribution("reversed")
    assert session.values == tuple(range(20, 0, -1))
    assert session.set_algorithm("heap").key == "heap"


@pytest.mark.parametrize("bad", [1, 101, 0, -5, 2.5, True, "10", None])
def test_invalid_sizes(session, bad):
    with pytest.raises(InvalidConfiguration):
        session.set_size(bad)


@pytest.mark.parametrize("bad", [0, 501, -1, False, "fast", None])
def test_invalid_delays(session, bad):
    with pytest.raises(InvalidConfiguration):
        session.set_delay(bad)


def test_validators_accept_bounds():
    assert validate_size(2) == 2
    assert validate_size(100) == 100
    assert validate_delay(1) == 1
    assert validate_delay(500) == 500


def test_invalid_start_arguments(session):
    with pytest.raises(InvalidConfiguration):
        session.start("bogo")
    with pytest.raises(InvalidConfiguration):
        session.start("bubble", size=1000)
    with pytest.raises(InvalidConfiguration):
        session.set_distribution("zigzag")
    assert session.handle is None
