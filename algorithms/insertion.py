"""
insertion.py — Insertion Sort
==============================
The key sinks into the sorted prefix by adjacent swaps rather than by
shifting, so the array is a permutation of its input at every
checkpoint (a cancelled run never loses the key).

Counting: every key comparison is counted, including the one that ends
the inner loop.  Reverse-sorted input therefore costs n(n-1)/2
comparisons; already-sorted input costs n-1.
"""

from typing import List

from algorithms.checkpoint import advance
from algorithms.step import Marker
from dataset import Dataset
from engine.control import RunControl


PSEUDOCODE: List[str] = [
    "def insertion_sort(a):",                       # 0
    "    for i in 1 .. n-1:",                        # 1
    "        j ← i",                                 # 2
    "        while j > 0 and a[j-1] > a[j]:",        # 3
    "            swap(a[j-1], a[j])",                # 4
    "            j ← j - 1",                         # 5
]


def insertion_sort(dataset: Dataset, emitter, control: RunControl) -> None:
    n = len(dataset)
    for i in range(1, n):
        # highlight the key about to be inserted
        advance(emitter, control, i, None, Marker.RANGE_ACTIVE)

        j = i
        while j > 0:
            order = dataset.compare(dataset.get(j - 1), dataset.get(j))
            advance(emitter, control, j - 1, j, Marker.COMPARING)
            if order <= 0:
                break

            dataset.swap(j - 1, j)
            advance(emitter, control, j - 1, j, Marker.SWAPPING)
            j -= 1


def estimate_comparisons(n: int) -> int:
    # worst case (reversed input): every pair compared once
    return n * (n - 1) // 2
