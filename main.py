"""
main.py — Sorting Algorithm Visualizer Flask App
=================================================
The web server that drives the visualizer.

Routes:
  GET  /                          – main UI
  GET  /api/algorithms            – registry listing
  POST /api/start                 – start (or restart) a run
  POST /api/pause                 – pause the active run
  POST /api/resume                – resume the paused run
  POST /api/toggle_pause          – pause / resume button
  POST /api/cancel                – cancel the active run
  POST /api/reset                 – cancel + fresh array
  POST /api/shuffle               – reshuffle (idle only)
  POST /api/config/algo           – select algorithm (idle only)
  POST /api/config/delay          – pacing delay in ms (live)
  POST /api/config/speed          – named speed preset (live)
  POST /api/config/size           – array size (idle only)
  POST /api/config/distribution   – value distribution (idle only)
  GET  /api/state                 – current state + SVG (for polling)
  GET  /api/stream                – Server-Sent Events, one per Step

State management:
  One SortSession per process, stored in app.extensions.  The
  visualizer is a single-user local tool; the session owns the only
  run.  Steps are produced on the run thread; handlers only read
  snapshots from the session.

Configuration:
  SORTVIS_* environment variables are loaded into app.config
  (e.g. SORTVIS_LOG_LEVEL=DEBUG, SORTVIS_LOG_FILE=sortvis.log).
"""

import json
import queue

from flask import Flask, Response, jsonify, render_template_string, request, stream_with_context

from algorithms import list_algorithms
from config import SORTED_SWEEP_MS
from engine.errors import AlreadyRunning, EngineError, InvalidConfiguration
from engine.executor import RunOutcome
from engine.session import SortSession
from logging_config import get_logger, setup_logging
from ui import (
    algorithm_selector,
    array_controls,
    marker_legend,
    playback_controls,
    pseudocode_viewer,
    render_bars,
    stats_panel,
)

logger = get_logger(__name__)

app = Flask(__name__)
app.config.update(
    LOG_LEVEL="INFO",
    LOG_FILE=None,
    STREAM_IDLE_TIMEOUT=30.0,
)
app.config.from_prefixed_env("SORTVIS")
app.extensions["sort_session"] = SortSession()


# ---------------------------------------------------------------------------
# Session Helpers
# ---------------------------------------------------------------------------
def get_session() -> SortSession:
    return app.extensions["sort_session"]


def payload() -> dict:
    return request.get_json(silent=True) or {}


def render_session(session: SortSession) -> str:
    """Latest step while running; all bars sorted-green once a run completed."""
    if session.is_running():
        return render_bars(session.values, session.latest_step)
    completed = session.handle is not None and session.handle.outcome is RunOutcome.COMPLETED
    return render_bars(session.values, all_sorted=completed)


def state_response():
    session = get_session()
    state = session.state()
    state["svg"] = render_session(session)
    return jsonify(state)


# ---------------------------------------------------------------------------
# Error Handling
# ---------------------------------------------------------------------------
@app.errorhandler(EngineError)
def handle_engine_error(exc: EngineError):
    if isinstance(exc, AlreadyRunning):
        status = 409
    elif isinstance(exc, InvalidConfiguration):
        status = 400
    else:
        status = 500
    logger.warning("%s: %s", type(exc).__name__, exc)
    return jsonify({"error": str(exc), "type": type(exc).__name__}), status


# ---------------------------------------------------------------------------
# Main UI Route
# ---------------------------------------------------------------------------
@app.route("/")
def index():
    session = get_session()
    state   = session.state()
    algo    = session.algorithm

    html = render_template_string(INDEX_TEMPLATE,
        svg=render_session(session),
        playback=playback_controls(
            is_running=state["is_running"],
            is_paused=state["run_state"] == "paused",
            delay_ms=session.delay_ms,
        ),
        algo_selector=algorithm_selector(
            algorithms=list_algorithms(),
            selected_key=algo.key,
            disabled=state["is_running"],
        ),
        array=array_controls(
            size=session.size,
            distribution=session.distribution,
            disabled=state["is_running"],
        ),
        stats=stats_panel(
            status=session.status,
            comparisons=session.comparisons,
            swaps=session.swaps,
            progress=session.progress,
            metrics=session.recorder.metrics if session.recorder else None,
        ),
        pseudocode=pseudocode_viewer(algo.pseudocode, algo.label),
        legend=marker_legend(),
        sweep_ms=SORTED_SWEEP_MS,
    )
    return html


@app.route("/api/algorithms")
def api_algorithms():
    return jsonify([
        {
            "key":              a.key,
            "label":            a.label,
            "stable":           a.stable,
            "complexity_time":  a.complexity_time,
            "complexity_space": a.complexity_space,
            "description":      a.description,
        }
        for a in list_algorithms()
    ])


# ---------------------------------------------------------------------------
# API: Run Lifecycle
# ---------------------------------------------------------------------------
@app.route("/api/start", methods=["POST"])
def api_start():
    data = payload()
    get_session().start(
        algorithm=data.get("algorithm"),
        size=data.get("size"),
        delay_ms=data.get("delay_ms"),
    )
    return state_response()


@app.route("/api/pause", methods=["POST"])
def api_pause():
    get_session().pause()
    return state_response()


@app.route("/api/resume", methods=["POST"])
def api_resume():
    get_session().resume()
    return state_response()


@app.route("/api/toggle_pause", methods=["POST"])
def api_toggle_pause():
    get_session().toggle_pause()
    return state_response()


@app.route("/api/cancel", methods=["POST"])
def api_cancel():
    get_session().cancel(wait=True)
    return state_response()


@app.route("/api/reset", methods=["POST"])
def api_reset():
    get_session().reset()
    return state_response()


@app.route("/api/shuffle", methods=["POST"])
def api_shuffle():
    get_session().shuffle()
    return state_response()


# ---------------------------------------------------------------------------
# API: Config Changes
# ---------------------------------------------------------------------------
@app.route("/api/config/algo", methods=["POST"])
def api_config_algo():
    session = get_session()
    info = session.set_algorithm(payload().get("algo_key", "bubble"))
    return jsonify({
        "algorithm":     info.key,
        "algo_selector": algorithm_selector(list_algorithms(), selected_key=info.key),
        "pseudocode":    pseudocode_viewer(info.pseudocode, info.label),
    })


@app.route("/api/config/delay", methods=["POST"])
def api_config_delay():
    delay = get_session().set_delay(payload().get("delay_ms"))
    return jsonify({"delay_ms": delay})


@app.route("/api/config/speed", methods=["POST"])
def api_config_speed():
    delay = get_session().set_speed(payload().get("speed", "medium"))
    return jsonify({"delay_ms": delay})


@app.route("/api/config/size", methods=["POST"])
def api_config_size():
    get_session().set_size(payload().get("size"))
    return state_response()


@app.route("/api/config/distribution", methods=["POST"])
def api_config_distribution():
    get_session().set_distribution(payload().get("distribution"))
    return state_response()


# ---------------------------------------------------------------------------
# API: State & Stream
# ---------------------------------------------------------------------------
@app.route("/api/state")
def api_state():
    return state_response()


@app.route("/api/stream")
def api_stream():
    session = get_session()
    handle  = session.handle
    if handle is None:
        return jsonify({"error": "No run to stream"}), 404

    steps   = handle.steps(timeout=app.config["STREAM_IDLE_TIMEOUT"])

    def generate():
        try:
            for step in steps:
                yield f"event: step\ndata: {json.dumps(step.to_dict())}\n\n"
        except queue.Empty:
            # paused for longer than the idle timeout; the client reconnects
            yield "event: idle\ndata: {}\n\n"
            return
        done = {
            "outcome":   handle.outcome.value if handle.outcome else None,
            "algorithm": handle.algorithm.label,
        }
        yield f"event: done\ndata: {json.dumps(done)}\n\n"

    return Response(stream_with_context(generate()), mimetype="text/event-stream")


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Sorting Algorithm Visualizer</title>
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }

    :root {
      --bg-dark: #0d1117;
      --bg-darker: #010409;
      --bg-panel: #161b22;
      --border: #30363d;
      --text-primary: #e6edf3;
      --text-secondary: #7d8590;
      --accent-cyan: #0ea5e9;
      --accent-emerald: #10b981;
      --accent-amber: #f59e0b;
      --accent-rose: #f43f5e;
    }

    body {
      font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif;
      background: var(--bg-darker);
      color: var(--text-primary);
      display: flex;
      height: 100vh;
      overflow: hidden;
    }

    #sidebar {
      width: 320px;
      background: var(--bg-dark);
      border-right: 1px solid var(--border);
      overflow-y: auto;
      padding: 20px 14px;
    }

    #main { flex: 1; display: flex; flex-direction: column; }

    #canvas-container {
      flex: 1;
      display: flex;
      align-items: center;
      justify-content: center;
      border-bottom: 1px solid var(--border);
    }

    #bottom-panel {
      display: grid;
      grid-template-columns: 1fr 1fr;
      gap: 20px;
      padding: 20px;
      background: var(--bg-dark);
      max-height: 320px;
    }

    .panel {
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 10px;
      padding: 14px;
      margin-bottom: 14px;
    }
    .panel h3 { font-size: 14px; margin-bottom: 10px; color: var(--text-secondary); }
    .panel label { display: block; margin: 8px 0; font-size: 13px; }
    .button-row { display: flex; gap: 8px; flex-wrap: wrap; }

    button, select {
      background: var(--bg-dark);
      color: var(--text-primary);
      border: 1px solid var(--border);
      border-radius: 6px;
      padding: 6px 12px;
      cursor: pointer;
    }
    button:disabled, select:disabled, input:disabled { opacity: 0.4; cursor: not-allowed; }
    .btn-primary { background: var(--accent-emerald); border-color: var(--accent-emerald); }
    .btn-danger  { background: var(--accent-rose);    border-color: var(--accent-rose); }

    .algo-description { font-size: 12px; color: var(--text-secondary); margin-top: 8px; }
    .status-label { font-weight: bold; margin-bottom: 8px; }
    .stat-label { font-size: 13px; color: var(--text-secondary); }
    .progress { height: 8px; background: var(--bg-dark); border-radius: 4px; margin-top: 10px; }
    #progress-bar { height: 100%; background: var(--accent-cyan); border-radius: 4px; }
    .last-run { font-size: 12px; margin-top: 10px; color: var(--text-secondary); }

    .code-block {
      font-family: 'JetBrains Mono', monospace;
      font-size: 12px;
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 10px;
      padding: 12px;
      overflow-y: auto;
    }
    .code-line { white-space: pre; padding: 1px 4px; }

    .legend-item { display: inline-flex; align-items: center; margin-right: 12px; font-size: 12px; }
    .swatch { width: 12px; height: 12px; border-radius: 3px; margin-right: 5px; display: inline-block; }
  </style>
</head>
<body>
  <div id="sidebar">
    <div id="algo-container">{{ algo_selector|safe }}</div>
    {{ array|safe }}
    {{ playback|safe }}
  </div>

  <div id="main">
    <div id="canvas-container"><div id="canvas-svg">{{ svg|safe }}</div></div>
    <div id="bottom-panel">
      <div>
        <div id="stats">{{ stats|safe }}</div>
        {{ legend|safe }}
      </div>
      <div id="pseudocode">{{ pseudocode|safe }}</div>
    </div>
  </div>

  <script>
    const SWEEP_MS = {{ sweep_ms }};
    let source = null;

    async function post(url, body = {}) {
      const res = await fetch(url, {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(body),
      });
      return res.json();
    }

    function applyState(state) {
      if (state.error) { document.getElementById('status-label').textContent = state.error; return; }
      if (state.svg) document.getElementById('canvas-svg').innerHTML = state.svg;
      document.getElementById('status-label').textContent = state.status;
      document.getElementById('comparisons').textContent = state.comparisons;
      document.getElementById('swaps').textContent = state.swaps;
      document.getElementById('progress-bar').style.width = (state.progress * 100) + '%';
      const running = state.is_running;
      document.getElementById('btn-start').disabled = running;
      document.getElementById('btn-shuffle').disabled = running;
      document.getElementById('btn-pause').disabled = !running;
      document.getElementById('btn-pause').textContent = state.run_state === 'paused' ? 'Resume' : 'Pause';
      document.getElementById('algo-selector').disabled = running;
      document.getElementById('size-slider').disabled = running;
      document.getElementById('distro-selector').disabled = running;
    }

    async function refresh() {
      const res = await fetch('/api/state');
      applyState(await res.json());
    }

    async function sortedSweep() {
      const bars = document.querySelectorAll('#canvas-svg rect.bar');
      for (const bar of bars) {
        bar.setAttribute('fill', '#22c55e');
        await new Promise(r => setTimeout(r, SWEEP_MS));
      }
    }

    function listen() {
      if (source) source.close();
      source = new EventSource('/api/stream');
      source.addEventListener('step', () => refresh());
      source.addEventListener('done', async (e) => {
        source.close();
        if (JSON.parse(e.data).outcome === 'completed') await sortedSweep();
        await refresh();
      });
      source.addEventListener('idle', () => { source.close(); setTimeout(listen, 100); });
    }

    document.getElementById('btn-start').addEventListener('click', async () => {
      applyState(await post('/api/start', {
        algorithm: document.getElementById('algo-selector').value,
        delay_ms: +document.getElementById('delay-slider').value,
      }));
      listen();
    });
    document.getElementById('btn-pause').addEventListener('click', async () => {
      applyState(await post('/api/toggle_pause'));
    });
    document.getElementById('btn-reset').addEventListener('click', async () => {
      if (source) source.close();
      applyState(await post('/api/reset'));
    });
    document.getElementById('btn-shuffle').addEventListener('click', async () => {
      applyState(await post('/api/shuffle'));
    });

    document.getElementById('delay-slider').addEventListener('input', async (e) => {
      document.getElementById('delay-val').textContent = e.target.value + 'ms';
      await post('/api/config/delay', {delay_ms: +e.target.value});
    });
    document.getElementById('size-slider').addEventListener('change', async (e) => {
      document.getElementById('size-val').textContent = e.target.value;
      applyState(await post('/api/config/size', {size: +e.target.value}));
    });
    document.getElementById('distro-selector').addEventListener('change', async (e) => {
      applyState(await post('/api/config/distribution', {distribution: e.target.value}));
    });
    document.getElementById('algo-container').addEventListener('change', async (e) => {
      if (e.target.id !== 'algo-selector') return;
      const data = await post('/api/config/algo', {algo_key: e.target.value});
      if (data.algo_selector) document.getElementById('algo-container').innerHTML = data.algo_selector;
      if (data.pseudocode) document.getElementById('pseudocode').innerHTML = data.pseudocode;
    });
  </script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
def run():
    setup_logging(level=app.config["LOG_LEVEL"], log_file=app.config["LOG_FILE"])
    logger.info("Sorting Algorithm Visualizer on http://localhost:5000")
    app.run(debug=app.config.get("DEBUG", False), threaded=True)


if __name__ == "__main__":
    run()
