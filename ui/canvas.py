"""
canvas.py — SVG Bar Renderer
=============================
Pure rendering function: values + Step → SVG string.

The renderer consumes:
  • values     – the array snapshot to draw (normally step.values)
  • step       – the current Step (which indices to highlight, and why)
  • config     – visual config (canvas size, colours, fonts, …)

Design decisions:
  - NO mutation and no access to the live Dataset.  The caller passes a
    snapshot and gets back a string.
  - Marker → colour is a plain dict lookup; algorithms never pick colours.
  - Values are printed above the bars only when the array is small
    enough for the labels to fit.
"""

from typing import Dict, Optional, Sequence

from algorithms.step import Marker, Step


# ---------------------------------------------------------------------------
# Visual Config — colour palette, dimensions, fonts
# ---------------------------------------------------------------------------
class CanvasConfig:
    # canvas
    width:  int = 800
    height: int = 400
    bg:     str = "#0d1117"
    top_margin: int = 50     # room for value labels

    # bars
    bar_fill:   str = "#7dd3fc"   # light blue
    bar_stroke: str = "#1e3a8a"   # dark blue
    bar_gap:    float = 1.0

    # marker → fill
    marker_colors: Dict[str, str] = {
        Marker.COMPARING.value:    "#ef4444",   # red
        Marker.SWAPPING.value:     "#f97316",   # orange
        Marker.PIVOT_SELECT.value: "#a855f7",   # purple
        Marker.RANGE_ACTIVE.value: "#facc15",   # yellow
        Marker.SORTED.value:       "#22c55e",   # green
    }

    # labels
    label_max_bars: int = 20
    label_color:    str = "#e6edf3"
    label_size:     int = 12


CONFIG = CanvasConfig()


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_bars(
    values: Sequence[int],
    step: Optional[Step] = None,
    config: CanvasConfig = CONFIG,
    all_sorted: bool = False,
) -> str:
    """
    Returns an SVG string.

    Args:
        values     : Array snapshot to draw.
        step       : Current step (or None for a plain array).
        config     : Visual config.
        all_sorted : Paint every bar with the SORTED colour (completed run).
    """
    sorted_color = config.marker_colors[Marker.SORTED.value]
    if all_sorted:
        return _render_svg(values, [sorted_color] * len(values), config)

    highlight: Dict[int, str] = {}
    if step is not None:
        color = config.marker_colors.get(step.marker.value, config.bar_fill)
        for idx in step.indices:
            highlight[idx] = color
    fills = [highlight.get(i, config.bar_fill) for i in range(len(values))]
    return _render_svg(values, fills, config)


def _render_svg(values: Sequence[int], fills: Sequence[str], config: CanvasConfig) -> str:
    svg_parts = [
        f'<svg width="{config.width}" height="{config.height}" '
        f'viewBox="0 0 {config.width} {config.height}" '
        f'xmlns="http://www.w3.org/2000/svg" style="background: {config.bg};">',
        f'<rect width="{config.width}" height="{config.height}" fill="{config.bg}"/>',
    ]
    for i, value in enumerate(values):
        svg_parts.append(_render_bar(i, value, values, fills[i], config))
    svg_parts.append("</svg>")
    return "\n".join(svg_parts)


# ---------------------------------------------------------------------------
# Bar Rendering
# ---------------------------------------------------------------------------
def _render_bar(i: int, value: int, values: Sequence[int], fill: str, config: CanvasConfig) -> str:
    bar_width  = config.width / len(values)
    max_height = config.height - config.top_margin
    max_value  = max(values) or 1

    bar_height = value / max_value * max_height
    x = i * bar_width
    y = config.height - bar_height

    parts = [
        f'<rect class="bar" data-index="{i}" x="{x:.2f}" y="{y:.2f}" '
        f'width="{max(bar_width - config.bar_gap, 0.5):.2f}" height="{bar_height:.2f}" '
        f'fill="{fill}" stroke="{config.bar_stroke}"/>',
    ]
    if len(values) <= config.label_max_bars:
        parts.append(
            f'<text x="{x + bar_width / 2:.2f}" y="{y - 5:.2f}" text-anchor="middle" '
            f'font-size="{config.label_size}" font-family="Arial, sans-serif" '
            f'font-weight="bold" fill="{config.label_color}">{value}</text>'
        )
    return "\n".join(parts)
