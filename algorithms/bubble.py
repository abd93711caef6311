"""
bubble.py — Bubble Sort
========================
Textbook bubble sort without the early-exit flag, so a full run makes
exactly n(n-1)/2 comparisons whatever the input.  Every comparison and
every swap is one Step.
"""

from typing import List

from algorithms.checkpoint import advance
from algorithms.step import Marker
from dataset import Dataset
from engine.control import RunControl


PSEUDOCODE: List[str] = [
    "def bubble_sort(a):",                          # 0
    "    for i in 0 .. n-2:",                        # 1
    "        for j in 0 .. n-i-2:",                  # 2
    "            if a[j] > a[j+1]:",                 # 3
    "                swap(a[j], a[j+1])",            # 4
]


def bubble_sort(dataset: Dataset, emitter, control: RunControl) -> None:
    n = len(dataset)
    for i in range(n - 1):
        for j in range(n - i - 1):
            order = dataset.compare(dataset.get(j), dataset.get(j + 1))
            advance(emitter, control, j, j + 1, Marker.COMPARING)

            if order > 0:
                dataset.swap(j, j + 1)
                advance(emitter, control, j, j + 1, Marker.SWAPPING)


def estimate_comparisons(n: int) -> int:
    return n * (n - 1) // 2
