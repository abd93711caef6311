"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every sorting algorithm the visualizer knows about.

    from algorithms import REGISTRY, get_algorithm

REGISTRY is a dict:
    {
        "bubble": AlgoInfo(key, label, fn, pseudocode, complexity, …),
        …
    }

Every algorithm is a function fn(dataset, emitter, control) that sorts
in place, emits a Step after each comparison and swap, and raises
Aborted when the run is cancelled.  Adding an algorithm means writing
that function and adding one entry here.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from algorithms.bubble    import bubble_sort    as _bubble,    PSEUDOCODE as _bubble_pc,    estimate_comparisons as _bubble_est
from algorithms.selection import selection_sort as _selection, PSEUDOCODE as _selection_pc, estimate_comparisons as _selection_est
from algorithms.insertion import insertion_sort as _insertion, PSEUDOCODE as _insertion_pc, estimate_comparisons as _insertion_est
from algorithms.merge     import merge_sort     as _merge,     PSEUDOCODE as _merge_pc,     estimate_comparisons as _merge_est
from algorithms.quick     import quick_sort     as _quick,     PSEUDOCODE as _quick_pc,     estimate_comparisons as _quick_est
from algorithms.heap      import heap_sort      as _heap,      PSEUDOCODE as _heap_pc,      estimate_comparisons as _heap_est
from engine.errors import InvalidConfiguration


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:                  str                    # registry key, e.g. "bubble"
    label:                str                    # human label, e.g. "Bubble Sort"
    fn:                   Callable               # fn(dataset, emitter, control)
    pseudocode:           List[str]              # lines for the side-panel
    estimate_comparisons: Callable[[int], int]   # n → expected comparisons (drives progress)
    stable:               bool = False
    complexity_time:      str  = ""              # e.g. "O(n²)"
    complexity_space:     str  = ""              # e.g. "O(1)"
    description:          str  = ""              # one-liner for the UI card


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "bubble": AlgoInfo(
        key="bubble", label="Bubble Sort", fn=_bubble, pseudocode=_bubble_pc,
        estimate_comparisons=_bubble_est, stable=True,
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Repeatedly swaps adjacent out-of-order pairs. The largest value bubbles to the end each pass.",
    ),

    "selection": AlgoInfo(
        key="selection", label="Selection Sort", fn=_selection, pseudocode=_selection_pc,
        estimate_comparisons=_selection_est,
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Finds the minimum of the unsorted part and swaps it to the front. Few swaps, many comparisons.",
    ),

    "insertion": AlgoInfo(
        key="insertion", label="Insertion Sort", fn=_insertion, pseudocode=_insertion_pc,
        estimate_comparisons=_insertion_est, stable=True,
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Grows a sorted prefix by sinking each new key into place. Fast on nearly-sorted input.",
    ),

    "merge": AlgoInfo(
        key="merge", label="Merge Sort", fn=_merge, pseudocode=_merge_pc,
        estimate_comparisons=_merge_est, stable=True,
        complexity_time="O(n log n)", complexity_space="O(n)",
        description="Splits in halves, sorts each, merges through buffers. Swaps count placements.",
    ),

    "quick": AlgoInfo(
        key="quick", label="Quick Sort", fn=_quick, pseudocode=_quick_pc,
        estimate_comparisons=_quick_est,
        complexity_time="O(n log n) avg, O(n²) worst", complexity_space="O(log n)",
        description="Lomuto partition around the last element. Degrades on already-sorted input.",
    ),

    "heap": AlgoInfo(
        key="heap", label="Heap Sort", fn=_heap, pseudocode=_heap_pc,
        estimate_comparisons=_heap_est,
        complexity_time="O(n log n)", complexity_space="O(1)",
        description="Builds a max-heap, then repeatedly moves the root behind the heap.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def require_algorithm(key: str) -> AlgoInfo:
    """Like get_algorithm, but an unknown key is an InvalidConfiguration."""
    info = REGISTRY.get(key)
    if info is None:
        raise InvalidConfiguration(f"Unknown algorithm: {key}")
    return info


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "require_algorithm",
    "list_algorithms",
]
