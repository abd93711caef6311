"""
controls.py — UI Control Panels
=================================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • playback_controls   – start / pause-resume / reset / shuffle + speed slider
  • algorithm_selector  – dropdown with complexity hints
  • array_controls      – size slider + value distribution
  • stats_panel         – status, comparisons, swaps, progress bar, last-run card
  • pseudocode_viewer   – static listing of the selected algorithm
  • marker_legend       – what each highlight colour means

Design:
  - All panels are stateless render functions.
  - State is passed in as kwargs.
  - Output is raw HTML strings (no templating engine).
  - The main app stitches them together.
"""

from typing import List, Optional

from algorithms import AlgoInfo
from algorithms.step import Marker
from config import (
    DISTRIBUTIONS,
    MAX_ARRAY_SIZE,
    MAX_DELAY_MS,
    MIN_ARRAY_SIZE,
    MIN_DELAY_MS,
)
from engine.recorder import RunMetrics
from ui.canvas import CONFIG, CanvasConfig


# ---------------------------------------------------------------------------
# Playback Controls
# ---------------------------------------------------------------------------
def playback_controls(
    is_running: bool = False,
    is_paused: bool = False,
    delay_ms: int = 50,
) -> str:
    pause_label = "Resume" if is_paused else "Pause"
    disabled    = 'disabled' if is_running else ''
    pause_off   = '' if is_running else 'disabled'

    return f"""
    <div class="panel playback-controls">
      <h3>⏯ Playback</h3>
      <div class="button-row">
        <button id="btn-start" class="btn-primary" {disabled}>▶ Start</button>
        <button id="btn-pause" {pause_off}>{pause_label}</button>
        <button id="btn-reset" class="btn-danger">Reset</button>
        <button id="btn-shuffle" {disabled}>Shuffle</button>
      </div>
      <div class="speed-control">
        <label>Delay:
          <input type="range" id="delay-slider" min="{MIN_DELAY_MS}" max="{MAX_DELAY_MS}" value="{delay_ms}">
          <span id="delay-val">{delay_ms}ms</span>
        </label>
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Algorithm Selector
# ---------------------------------------------------------------------------
def algorithm_selector(
    algorithms: List[AlgoInfo],
    selected_key: str = "bubble",
    disabled: bool = False,
) -> str:
    options = []
    for algo in algorithms:
        sel = 'selected' if algo.key == selected_key else ''
        options.append(
            f'<option value="{algo.key}" {sel}>{algo.label} — {algo.complexity_time}</option>'
        )

    selected = next((a for a in algorithms if a.key == selected_key), None)
    description = selected.description if selected else ""

    return f"""
    <div class="panel algorithm-selector">
      <h3>🧠 Algorithm</h3>
      <select id="algo-selector" {'disabled' if disabled else ''}>
        {''.join(options)}
      </select>
      <p class="algo-description">{description}</p>
    </div>
    """


# ---------------------------------------------------------------------------
# Array Controls
# ---------------------------------------------------------------------------
def array_controls(
    size: int = 50,
    distribution: str = "shuffled",
    disabled: bool = False,
) -> str:
    dis = 'disabled' if disabled else ''
    options = []
    for name in DISTRIBUTIONS:
        sel = 'selected' if name == distribution else ''
        options.append(f'<option value="{name}" {sel}>{name.replace("_", " ").capitalize()}</option>')

    return f"""
    <div class="panel array-controls">
      <h3>📶 Array</h3>
      <label>Size:
        <input type="range" id="size-slider" min="{MIN_ARRAY_SIZE}" max="{MAX_ARRAY_SIZE}" value="{size}" {dis}>
        <span id="size-val">{size}</span>
      </label>
      <label>Distribution:
        <select id="distro-selector" {dis}>
          {''.join(options)}
        </select>
      </label>
    </div>
    """


# ---------------------------------------------------------------------------
# Stats Panel
# ---------------------------------------------------------------------------
def stats_panel(
    status: str = "Ready",
    comparisons: int = 0,
    swaps: int = 0,
    progress: float = 0.0,
    metrics: Optional[RunMetrics] = None,
) -> str:
    pct = max(0.0, min(1.0, progress)) * 100

    last_run = ""
    if metrics:
        last_run = f"""
      <table class="last-run">
        <tr><td>Last run:</td><td><strong>{metrics.algo_label} ({metrics.outcome})</strong></td></tr>
        <tr><td>Steps:</td><td><strong>{metrics.total_steps}</strong></td></tr>
        <tr><td>Wall Time:</td><td><strong>{metrics.wall_time_ms:.0f} ms</strong></td></tr>
      </table>
        """

    return f"""
    <div class="panel stats-panel">
      <h3>📊 Statistics</h3>
      <div id="status-label" class="status-label">{status}</div>
      <div class="stat-label">Comparisons: <span id="comparisons">{comparisons}</span></div>
      <div class="stat-label">Swaps: <span id="swaps">{swaps}</span></div>
      <div class="progress"><div id="progress-bar" style="width: {pct:.1f}%"></div></div>
      {last_run}
    </div>
    """


# ---------------------------------------------------------------------------
# Pseudocode Viewer
# ---------------------------------------------------------------------------
def pseudocode_viewer(pseudocode_lines: List[str], algo_label: str = "") -> str:
    if not pseudocode_lines:
        return """
        <div class="code-block">
          <div class="placeholder">Select an algorithm to view pseudocode</div>
        </div>
        """

    lines_html = []
    for i, line in enumerate(pseudocode_lines):
        line_escaped = line.replace('&', '&amp;').replace('<', '&lt;').replace('>', '&gt;')
        lines_html.append(f'<div class="code-line" data-line="{i}">{line_escaped}</div>')

    return f"""
    <div class="code-block" title="{algo_label}">
      {''.join(lines_html)}
    </div>
    """


# ---------------------------------------------------------------------------
# Marker Legend
# ---------------------------------------------------------------------------
def marker_legend(config: CanvasConfig = CONFIG) -> str:
    items = []
    for marker in Marker:
        color = config.marker_colors[marker.value]
        label = marker.value.replace("_", " ").capitalize()
        items.append(
            f'<span class="legend-item"><span class="swatch" style="background: {color}"></span>{label}</span>'
        )
    return f"""
    <div class="panel marker-legend">
      {''.join(items)}
    </div>
    """
