import time

import pytest

import main
from engine.session import SortSession
from ui import CanvasConfig

from conftest import RUN_TIMEOUT


@pytest.fixture
def session():
    previous = main.app.extensions["sort_session"]
    s = SortSession(size=6, delay_ms=1, seed=9)
    main.app.extensions["sort_session"] = s
    yield s
    s.cancel(wait=True)
    main.app.extensions["sort_session"] = previous


@pytest.fixture
def client(session):
    main.app.config["TESTING"] = True
    return main.app.test_client()


def test_index_renders_page(client):
    resp = client.get("/")
    assert resp.status_code == 200
    html = resp.get_data(as_text=True)
    assert "Sorting Algorithm Visualizer" in html
    assert "<svg" in html
    assert 'id="algo-selector"' in html
    assert "Bubble Sort" in html


def test_algorithms_listing(client):
    data = client.get("/api/algorithms").get_json()
    assert [a["key"] for a in data] == ["bubble", "selection", "insertion", "merge", "quick", "heap"]
    assert data[0]["stable"] is True


def test_state_includes_svg(client):
    data = client.get("/api/state").get_json()
    assert data["status"] == "Ready"
    assert data["size"] == 6
    assert data["svg"].startswith("<svg")
    # six bars, each labelled with its value
    assert data["svg"].count('class="bar"') == 6


def test_start_and_complete(client, session):
    resp = client.post("/api/start", json={"algorithm": "quick", "delay_ms": 1})
    assert resp.status_code == 200
    assert session.handle.wait(RUN_TIMEOUT) is not None

    data = client.get("/api/state").get_json()
    assert data["outcome"] == "completed"
    assert data["values"] == [1, 2, 3, 4, 5, 6]
    assert data["metrics"]["algo_key"] == "quick"


def bar_fills(svg):
    return [part.split('fill="')[1].split('"')[0] for part in svg.split("\n") if 'class="bar"' in part]


def test_completed_run_renders_all_bars_sorted(client, session):
    sorted_fill = CanvasConfig().marker_colors["sorted"]
    client.post("/api/start", json={"algorithm": "heap", "delay_ms": 1})
    assert session.handle.wait(RUN_TIMEOUT) is not None

    assert bar_fills(client.get("/api/state").get_json()["svg"]) == [sorted_fill] * 6
    assert client.get("/").get_data(as_text=True).count(f'fill="{sorted_fill}"') >= 6

    data = client.post("/api/shuffle").get_json()
    assert sorted_fill not in bar_fills(data["svg"])


def test_busy_operations_return_409(client, session):
    client.post("/api/start", json={"algorithm": "bubble", "delay_ms": 300})
    resp = client.post("/api/shuffle")
    assert resp.status_code == 409
    assert resp.get_json()["type"] == "AlreadyRunning"

    resp = client.post("/api/cancel")
    assert resp.status_code == 200
    assert resp.get_json()["outcome"] == "cancelled"


@pytest.mark.parametrize("url, body", [
    ("/api/start", {"algorithm": "bogo"}),
    ("/api/config/size", {"size": 500}),
    ("/api/config/delay", {"delay_ms": 0}),
    ("/api/config/speed", {"speed": "ludicrous"}),
    ("/api/config/distribution", {"distribution": "zigzag"}),
    ("/api/config/algo", {"algo_key": "bogo"}),
])
def test_invalid_configuration_returns_400(client, url, body):
    resp = client.post(url, json=body)
    assert resp.status_code == 400
    assert resp.get_json()["type"] == "InvalidConfiguration"


def test_pause_resume_routes(client, session):
    client.post("/api/start", json={"algorithm": "bubble", "delay_ms": 50})
    assert client.post("/api/pause").get_json()["run_state"] == "paused"
    assert client.post("/api/toggle_pause").get_json()["run_state"] == "running"
    assert client.post("/api/resume").get_json()["run_state"] == "running"


def test_config_routes(client, session):
    assert client.post("/api/config/delay", json={"delay_ms": 120}).get_json() == {"delay_ms": 120}
    assert client.post("/api/config/speed", json={"speed": "fast"}).get_json() == {"delay_ms": 10}

    data = client.post("/api/config/size", json={"size": 10}).get_json()
    assert len(data["values"]) == 10

    data = client.post("/api/config/distribution", json={"distribution": "reversed"}).get_json()
    assert data["values"] == list(range(10, 0, -1))

    data = client.post("/api/config/algo", json={"algo_key": "heap"}).get_json()
    assert data["algorithm"] == "heap"
    assert "code-line" in data["pseudocode"]
    assert session.algorithm.key == "heap"


def test_reset_and_shuffle(client, session):
    data = client.post("/api/reset").get_json()
    assert data["status"] == "Ready"
    data = client.post("/api/shuffle").get_json()
    assert sorted(data["values"]) == [1, 2, 3, 4, 5, 6]


def test_stream_without_run_is_404(client):
    assert client.get("/api/stream").status_code == 404


def test_stream_emits_steps_then_done(client, session):
    client.post("/api/start", json={"algorithm": "insertion", "delay_ms": 30})
    time.sleep(0.01)
    resp = client.get("/api/stream")
    assert resp.mimetype == "text/event-stream"

    body = resp.get_data(as_text=True)
    assert "event: step" in body
    assert body.rstrip().endswith('"algorithm": "Insertion Sort"}')
    assert '"outcome": "completed"' in body
