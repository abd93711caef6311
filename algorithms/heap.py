"""
heap.py — Heap Sort
====================
Builds a max-heap bottom-up, then repeatedly swaps the root to the end
of the shrinking heap and sifts the new root down.

heapify() is recursive and checks in at every step: one COMPARING Step
per existing child and one SWAPPING Step per sift move.  Sift moves
are counted as swaps.
"""

import math
from typing import List

from algorithms.checkpoint import advance
from algorithms.step import Marker
from dataset import Dataset
from engine.control import RunControl


PSEUDOCODE: List[str] = [
    "def heap_sort(a):",                            # 0
    "    for i in n/2-1 .. 0: heapify(a, n, i)",     # 1
    "    for end in n-1 .. 1:",                      # 2
    "        swap(a[0], a[end])",                    # 3
    "        heapify(a, end, 0)",                    # 4
    "def heapify(a, size, i):",                     # 5
    "    largest ← max(i, 2i+1, 2i+2) within size",  # 6
    "    if largest != i:",                          # 7
    "        swap(a[i], a[largest]); heapify(a, size, largest)",  # 8
]


def heap_sort(dataset: Dataset, emitter, control: RunControl) -> None:
    n = len(dataset)
    for i in range(n // 2 - 1, -1, -1):
        _heapify(dataset, emitter, control, n, i)

    for end in range(n - 1, 0, -1):
        dataset.swap(0, end)
        advance(emitter, control, 0, end, Marker.SWAPPING)
        _heapify(dataset, emitter, control, end, 0)


def _heapify(dataset: Dataset, emitter, control: RunControl, size: int, i: int) -> None:
    largest = i
    left    = 2 * i + 1
    right   = 2 * i + 2

    if left < size:
        order = dataset.compare(dataset.get(left), dataset.get(largest))
        advance(emitter, control, left, largest, Marker.COMPARING)
        if order > 0:
            largest = left

    if right < size:
        order = dataset.compare(dataset.get(right), dataset.get(largest))
        advance(emitter, control, right, largest, Marker.COMPARING)
        if order > 0:
            largest = right

    if largest != i:
        dataset.swap(i, largest)
        advance(emitter, control, i, largest, Marker.SWAPPING)
        _heapify(dataset, emitter, control, size, largest)


def estimate_comparisons(n: int) -> int:
    if n < 2:
        return 0
    # build ≤ 2n, each of the n-1 sift-downs ≤ 2·⌊log2 n⌋
    return 2 * n + 2 * (n - 1) * math.floor(math.log2(n))
