"""
dataset.py — Sortable Array & Generators
=========================================
The Dataset is the array being sorted.  Algorithms are its only writers
during a run; everyone else sees it through Step snapshots.

Responsibilities:
  1. Primitive access             (get / set / swap / place / compare)
  2. Operation counters           (comparisons, swaps)
  3. Read-only copies             (snapshot, snapshot_range)
  4. Generation factories         (shuffled, reversed, few-unique, nearly-sorted)

Design decisions:
  - Index checks are strict: negative indices are NOT wrapped.  A bad
    index is a bug in an algorithm and raises IndexError straight away.
  - `place` is a write that counts as a swap.  Merge Sort's write-back
    uses it so its swap counter means "placements".
  - Counters live here because only the Dataset sees every primitive;
    the StatsAggregator reads them when building a Step.
"""

import random
from typing import List, Optional, Sequence, Tuple

from config import DISTRIBUTIONS, DEFAULT_DISTRIBUTION


class Dataset:
    """
    Attributes:
        comparisons : Number of value comparisons made through compare().
        swaps       : Number of swap() and place() calls.
    """

    def __init__(self, values: Sequence[int]):
        self._values:     List[int] = list(values)
        self.comparisons: int       = 0
        self.swaps:       int       = 0

    # ==================================================================
    # PRIMITIVES
    # ==================================================================
    def get(self, i: int) -> int:
        self._check(i)
        return self._values[i]

    def set(self, i: int, value: int) -> None:
        """Plain write; not counted."""
        self._check(i)
        self._values[i] = value

    def swap(self, i: int, j: int) -> None:
        self._check(i)
        self._check(j)
        self._values[i], self._values[j] = self._values[j], self._values[i]
        self.swaps += 1

    def place(self, i: int, value: int) -> None:
        """Write `value` at `i` and count it as a swap (merge write-back)."""
        self._check(i)
        self._values[i] = value
        self.swaps += 1

    def compare(self, a: int, b: int) -> int:
        """Compare two values; returns -1, 0 or 1 and counts one comparison."""
        self.comparisons += 1
        if a < b:
            return -1
        if a > b:
            return 1
        return 0

    def __len__(self) -> int:
        return len(self._values)

    # ==================================================================
    # READ-ONLY COPIES
    # ==================================================================
    def snapshot(self) -> Tuple[int, ...]:
        return tuple(self._values)

    def snapshot_range(self, lo: int, hi: int) -> List[int]:
        """Copy of values[lo:hi] (half-open).  Does not touch the array."""
        if not (0 <= lo <= hi <= len(self._values)):
            raise IndexError(f"range [{lo}, {hi}) outside dataset of length {len(self._values)}")
        return self._values[lo:hi]

    # ==================================================================
    # COUNTERS / REORDERING
    # ==================================================================
    def reset_counters(self) -> None:
        self.comparisons = 0
        self.swaps       = 0

    def shuffle(self, seed: Optional[int] = None) -> None:
        rng = random.Random(seed)
        rng.shuffle(self._values)
        self.reset_counters()

    def is_sorted(self) -> bool:
        return all(self._values[k] <= self._values[k + 1] for k in range(len(self._values) - 1))

    # ==================================================================
    # FACTORY
    # ==================================================================
    @classmethod
    def generate(
        cls,
        size: int,
        distribution: str = DEFAULT_DISTRIBUTION,
        seed: Optional[int] = None,
    ) -> "Dataset":
        return cls(generate_values(size, distribution, seed))

    # ------------------------------------------------------------------
    def _check(self, i: int) -> None:
        if not (0 <= i < len(self._values)):
            raise IndexError(f"index {i} outside dataset of length {len(self._values)}")

    def __repr__(self) -> str:
        return f"Dataset({self._values!r})"


# ---------------------------------------------------------------------------
# Value generators
# ---------------------------------------------------------------------------
def generate_values(
    size: int,
    distribution: str = DEFAULT_DISTRIBUTION,
    seed: Optional[int] = None,
) -> List[int]:
    """
    Build `size` values in 1..size following `distribution`:

        shuffled       – a random permutation of 1..size
        reversed       – size, size-1, …, 1
        few_unique     – values drawn from 5 evenly spaced levels
        nearly_sorted  – 1..size with ~10% adjacent pairs swapped
    """
    if distribution not in DISTRIBUTIONS:
        raise ValueError(f"Unknown distribution: {distribution}")

    rng    = random.Random(seed)
    values = list(range(1, size + 1))

    if distribution == "shuffled":
        rng.shuffle(values)
    elif distribution == "reversed":
        values.reverse()
    elif distribution == "few_unique":
        levels = sorted({max(1, (size * k) // 5) for k in range(1, 6)})
        values = [rng.choice(levels) for _ in range(size)]
    elif distribution == "nearly_sorted" and size > 1:
        for _ in range(max(1, size // 10)):
            k = rng.randrange(size - 1)
            values[k], values[k + 1] = values[k + 1], values[k]
    return values
