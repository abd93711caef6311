"""
ui/
---
Presentation layer.

    from ui import render_bars
    from ui import playback_controls, algorithm_selector, …
"""

from ui.canvas import render_bars, CanvasConfig

from ui.controls import (
    playback_controls,
    algorithm_selector,
    array_controls,
    stats_panel,
    pseudocode_viewer,
    marker_legend,
)

__all__ = [
    "render_bars",
    "CanvasConfig",
    "playback_controls",
    "algorithm_selector",
    "array_controls",
    "stats_panel",
    "pseudocode_viewer",
    "marker_legend",
]
