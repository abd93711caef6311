"""
quick.py — Quick Sort (Lomuto)
===============================
Lomuto partition with the last element as pivot.

Steps per partition:
  1. PIVOT_SELECT on the pivot index
  2. COMPARING a[j] against the pivot, for j in lo .. hi-1
  3. SWAPPING whenever a[j] < pivot (also when i == j: it still counts)
  4. SORTED when the pivot is swapped into its final slot
"""

from typing import List

from algorithms.checkpoint import advance
from algorithms.step import Marker
from dataset import Dataset
from engine.control import RunControl


PSEUDOCODE: List[str] = [
    "def quick_sort(a, lo, hi):",                   # 0
    "    if lo < hi:",                               # 1
    "        p ← partition(a, lo, hi)",              # 2
    "        quick_sort(a, lo, p-1)",                # 3
    "        quick_sort(a, p+1, hi)",                # 4
    "def partition(a, lo, hi):",                    # 5
    "    pivot ← a[hi];  i ← lo - 1",                # 6
    "    for j in lo .. hi-1:",                      # 7
    "        if a[j] < pivot: i++; swap(a[i], a[j])",# 8
    "    swap(a[i+1], a[hi]);  return i+1",          # 9
]


def quick_sort(dataset: Dataset, emitter, control: RunControl) -> None:
    _quick_sort(dataset, emitter, control, 0, len(dataset) - 1)


def _quick_sort(dataset: Dataset, emitter, control: RunControl, lo: int, hi: int) -> None:
    if lo < hi:
        p = _partition(dataset, emitter, control, lo, hi)
        _quick_sort(dataset, emitter, control, lo, p - 1)
        _quick_sort(dataset, emitter, control, p + 1, hi)


def _partition(dataset: Dataset, emitter, control: RunControl, lo: int, hi: int) -> int:
    pivot = dataset.get(hi)
    advance(emitter, control, hi, None, Marker.PIVOT_SELECT)

    i = lo - 1
    for j in range(lo, hi):
        order = dataset.compare(dataset.get(j), pivot)
        advance(emitter, control, j, hi, Marker.COMPARING)

        if order < 0:
            i += 1
            dataset.swap(i, j)
            advance(emitter, control, i, j, Marker.SWAPPING)

    dataset.swap(i + 1, hi)
    advance(emitter, control, i + 1, hi, Marker.SORTED)
    return i + 1


def estimate_comparisons(n: int) -> int:
    # worst case (sorted input): partitions shrink by one each time
    return n * (n - 1) // 2
