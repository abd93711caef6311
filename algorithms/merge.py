"""
merge.py — Merge Sort
======================
Top-down merge sort.  Each merge copies both halves into temporary
buffers (Dataset.snapshot_range) and writes the merged run back.

Counting quirk: every write-back is a Dataset.place(), which the swap
counter counts.  "Swaps" for merge sort therefore means placements,
and the tail copies after one buffer runs dry count too.

Cancellation: a write-back can be interrupted half-way, when some
slots already hold merged values and the rest of the run only exists
in the buffers.  Before Aborted propagates the unconsumed buffer
values are copied into the remaining slots (uncounted), so the array
stays a permutation of the input.
"""

import math
from typing import List

from algorithms.checkpoint import advance
from algorithms.step import Marker
from dataset import Dataset
from engine.control import RunControl
from engine.errors import Aborted


PSEUDOCODE: List[str] = [
    "def merge_sort(a, lo, hi):",                   # 0
    "    if lo >= hi: return",                       # 1
    "    mid ← (lo + hi) // 2",                      # 2
    "    merge_sort(a, lo, mid)",                    # 3
    "    merge_sort(a, mid+1, hi)",                  # 4
    "    L ← a[lo..mid];  R ← a[mid+1..hi]",         # 5
    "    while L and R: a[k++] ← min(L[0], R[0])",   # 6
    "    copy what is left of L, then of R",         # 7
]


def merge_sort(dataset: Dataset, emitter, control: RunControl) -> None:
    _merge_sort(dataset, emitter, control, 0, len(dataset) - 1)


def _merge_sort(dataset: Dataset, emitter, control: RunControl, lo: int, hi: int) -> None:
    if lo >= hi:
        return
    mid = (lo + hi) // 2
    _merge_sort(dataset, emitter, control, lo, mid)
    _merge_sort(dataset, emitter, control, mid + 1, hi)
    _merge(dataset, emitter, control, lo, mid, hi)


def _merge(dataset: Dataset, emitter, control: RunControl, lo: int, mid: int, hi: int) -> None:
    left  = dataset.snapshot_range(lo, mid + 1)
    right = dataset.snapshot_range(mid + 1, hi + 1)
    i = j = 0
    k = lo

    try:
        advance(emitter, control, lo, hi, Marker.RANGE_ACTIVE)

        while i < len(left) and j < len(right):
            order = dataset.compare(left[i], right[j])
            advance(emitter, control, k, None, Marker.COMPARING)

            if order <= 0:
                dataset.place(k, left[i])
                i += 1
            else:
                dataset.place(k, right[j])
                j += 1
            k += 1
            advance(emitter, control, k - 1, None, Marker.SWAPPING)

        while i < len(left):
            dataset.place(k, left[i])
            i += 1
            k += 1
            advance(emitter, control, k - 1, None, Marker.SWAPPING)

        while j < len(right):
            dataset.place(k, right[j])
            j += 1
            k += 1
            advance(emitter, control, k - 1, None, Marker.SWAPPING)

    except Aborted:
        for value in left[i:] + right[j:]:
            dataset.set(k, value)
            k += 1
        raise


def estimate_comparisons(n: int) -> int:
    # worst case: n·⌈log2 n⌉ − 2^⌈log2 n⌉ + 1
    if n < 2:
        return 0
    depth = math.ceil(math.log2(n))
    return n * depth - 2 ** depth + 1
