"""
selection.py — Selection Sort
==============================
Scans the unsorted suffix for its minimum and swaps it into place.
n(n-1)/2 comparisons always; at most n-1 swaps (none when the minimum
is already in position).
"""

from typing import List

from algorithms.checkpoint import advance
from algorithms.step import Marker
from dataset import Dataset
from engine.control import RunControl


PSEUDOCODE: List[str] = [
    "def selection_sort(a):",                       # 0
    "    for i in 0 .. n-2:",                        # 1
    "        min_idx ← i",                           # 2
    "        for j in i+1 .. n-1:",                  # 3
    "            if a[j] < a[min_idx]: min_idx ← j", # 4
    "        if min_idx != i:",                      # 5
    "            swap(a[i], a[min_idx])",            # 6
]


def selection_sort(dataset: Dataset, emitter, control: RunControl) -> None:
    n = len(dataset)
    for i in range(n - 1):
        min_idx = i
        for j in range(i + 1, n):
            order = dataset.compare(dataset.get(j), dataset.get(min_idx))
            advance(emitter, control, min_idx, j, Marker.COMPARING)
            if order < 0:
                min_idx = j

        if min_idx != i:
            dataset.swap(i, min_idx)
            advance(emitter, control, i, min_idx, Marker.SWAPPING)


def estimate_comparisons(n: int) -> int:
    return n * (n - 1) // 2
