"""
Cumulative-weight index for weighted selection.

Maps cumulative thresholds to the value whose weight interval starts at
that threshold. Keys are kept in a sorted list so the floor query is a
binary search (bisect_right), O(log n) in the number of entries.
"""

from __future__ import annotations

import bisect
import math
from typing import Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar

T = TypeVar("T")


class CumulativeIndex(Generic[T]):
    """
    Ordered mapping from cumulative threshold to value.

    Thresholds must be finite and non-negative. Appending a key larger than
    every key present is O(1); other keys are placed at their sorted
    position. Inserting an existing key replaces its value.
    """

    def __init__(self, pairs: Optional[Iterable[Tuple[float, T]]] = None):
        self._keys: List[float] = []
        self._values: List[T] = []
        for key, value in pairs or ():
            self.insert(key, value)

    def insert(self, key: float, value: T) -> None:
        key = float(key)
        if not math.isfinite(key) or key < 0.0:
            raise ValueError(f"Threshold must be finite and non-negative, got {key!r}")

        # Fast path: cumulative thresholds arrive in increasing order
        if not self._keys or key > self._keys[-1]:
            self._keys.append(key)
            self._values.append(value)
            return

        pos = bisect.bisect_left(self._keys, key)
        if pos < len(self._keys) and self._keys[pos] == key:
            self._values[pos] = value
        else:
            self._keys.insert(pos, key)
            self._values.insert(pos, value)

    def floor_position(self, target: float) -> Optional[int]:
        """Position of the greatest key <= target, or None if there is none."""
        pos = bisect.bisect_right(self._keys, target) - 1
        return pos if pos >= 0 else None

    def key_at(self, position: int) -> float:
        return self._keys[position]

    def value_at(self, position: int) -> T:
        return self._values[position]

    def keys(self) -> List[float]:
        return list(self._keys)

    def values(self) -> List[T]:
        return list(self._values)

    def items(self) -> Iterator[Tuple[float, T]]:
        return zip(list(self._keys), list(self._values))

    def get(self, key: float, default: Optional[T] = None) -> Optional[T]:
        pos = bisect.bisect_left(self._keys, key)
        if pos < len(self._keys) and self._keys[pos] == key:
            return self._values[pos]
        return default

    def copy(self) -> "CumulativeIndex[T]":
        clone: CumulativeIndex[T] = CumulativeIndex()
        clone._keys = list(self._keys)
        clone._values = list(self._values)
        return clone

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, (int, float)) and self.get(float(key), _MISSING) is not _MISSING

    def __repr__(self) -> str:
        return f"CumulativeIndex({list(zip(self._keys, self._values))!r})"


_MISSING = object()


def closest_key_below(index: CumulativeIndex, target: float) -> Optional[float]:
    """
    Find the greatest key in the index that is <= target.

    Args:
        index: Cumulative index to search
        target: Threshold to search for

    Returns:
        The floor key, or None if the index is empty or every key is above target
    """
    pos = index.floor_position(target)
    if pos is None:
        return None
    return index.key_at(pos)
