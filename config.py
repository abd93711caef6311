"""
config.py — Engine & UI Constants
==================================
Every tunable number lives here so the engine, the session and the web
front end agree on the same bounds.

    from config import MIN_DELAY_MS, MAX_DELAY_MS, SPEED_PRESETS
"""

from typing import Dict, List


# ---------------------------------------------------------------------------
# Pacing (milliseconds between steps)
# ---------------------------------------------------------------------------
MIN_DELAY_MS:     int = 1
MAX_DELAY_MS:     int = 500
DEFAULT_DELAY_MS: int = 50

# upper bound on how long a paused gate sleeps before re-checking its flags
PAUSE_POLL_SECONDS: float = 0.05

# per-bar delay of the browser-side "sorted" sweep
SORTED_SWEEP_MS: int = 20


# ---------------------------------------------------------------------------
# Speed presets (ms per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS: Dict[str, int] = {
    "slow":   250,    # teaching mode
    "medium": DEFAULT_DELAY_MS,
    "fast":   10,
    "turbo":  MIN_DELAY_MS,
}


# ---------------------------------------------------------------------------
# Array sizes
# ---------------------------------------------------------------------------
MIN_ARRAY_SIZE:     int = 2
MAX_ARRAY_SIZE:     int = 100
DEFAULT_ARRAY_SIZE: int = 50

DISTRIBUTIONS: List[str] = ["shuffled", "reversed", "few_unique", "nearly_sorted"]
DEFAULT_DISTRIBUTION: str = "shuffled"


# ---------------------------------------------------------------------------
# Progress
# ---------------------------------------------------------------------------
# ceiling for the progress fraction of a run that has not finished yet
RUNNING_PROGRESS_CAP: float = 0.99
