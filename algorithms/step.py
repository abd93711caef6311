"""
step.py — Sorting Step Snapshot
================================
Every algorithm reports its progress as a stream of Step objects.
A Step is a frozen-in-time picture of everything the visualizer
needs to render one frame:

    • Which indices are involved (primary / secondary)
    • Why they are highlighted (the Marker)
    • The running counters (comparisons, swaps) and progress fraction
    • A copy of the array values at that instant

Design decisions:
  - Step is a frozen dataclass.  The algorithm thread is the only writer
    of the Dataset; renderers read `values` from the Step instead of the
    live array, so they never see a half-finished swap.
  - Marker is a closed set of semantic tags.  The renderer owns the
    Marker → colour mapping.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class Marker(Enum):
    COMPARING    = "comparing"      # two values are being compared
    SWAPPING     = "swapping"       # values just moved (swap or placement)
    PIVOT_SELECT = "pivot_select"   # quick sort pivot chosen
    RANGE_ACTIVE = "range_active"   # a key / sub-range is being worked on
    SORTED       = "sorted"         # index holds its final value


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        step_number     : 0-based index of this step in the run.
        primary_index   : First highlighted index (or None).
        secondary_index : Second highlighted index (or None).
        marker          : Why the indices are highlighted.
        comparisons     : Comparisons made up to and including this step.
        swaps           : Swaps / placements made up to and including this step.
        progress        : Normalised progress in [0, 1].
        values          : Snapshot of the array at emission time.
    """

    step_number:      int                 = 0
    primary_index:    Optional[int]       = None
    secondary_index:  Optional[int]       = None
    marker:           Marker              = Marker.COMPARING
    comparisons:      int                 = 0
    swaps:            int                 = 0
    progress:         float               = 0.0
    values:           Tuple[int, ...]     = field(default_factory=tuple)

    @property
    def indices(self) -> Tuple[int, ...]:
        return tuple(i for i in (self.primary_index, self.secondary_index) if i is not None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step_number":     self.step_number,
            "primary_index":   self.primary_index,
            "secondary_index": self.secondary_index,
            "marker":          self.marker.value,
            "comparisons":     self.comparisons,
            "swaps":           self.swaps,
            "progress":        self.progress,
            "values":          list(self.values),
        }
