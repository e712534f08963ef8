"""
Weighted random selection.

A WeightedDistribution is grown with add() and sampled with random_pick():
each value is returned with probability weight / total_weight. Every
insertion owns the half-open interval [threshold, threshold + weight) of
the cumulative index; sampling draws a uniform number in
[0, total_weight) and takes the value owning the interval it lands in.

without() derives a new, independent distribution that drops some values
and renormalizes over the rest. snapshot() freezes the current state into a
read-only DistributionSnapshot.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Any, Dict, Generic, Hashable, Iterable, List, Mapping, Optional, TypeVar

import numpy as np

from weighted_distribution.config import DistributionConfig
from weighted_distribution.cumulative_index import CumulativeIndex
from weighted_distribution.errors import EmptyDistribution, InvalidWeight

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Hashable)


class _DistributionView(ABC, Generic[T]):
    """Read-only operations shared by WeightedDistribution and DistributionSnapshot."""

    _index: CumulativeIndex[T]
    _total_weight: float
    _originals: Dict[T, float]
    _rng: np.random.Generator

    @property
    def total_weight(self) -> float:
        """Sum of every weight added, in insertion order."""
        return self._total_weight

    @property
    def index(self) -> CumulativeIndex[T]:
        """Copy of the cumulative index (threshold -> value)."""
        return self._index.copy()

    @property
    def originals(self) -> Mapping[T, float]:
        """Read-only view of value -> most recently added weight."""
        return MappingProxyType(self._originals)

    @property
    def rng(self) -> np.random.Generator:
        return self._rng

    def random_pick(self, rng: Optional[np.random.Generator] = None) -> T:
        """
        Draw one value with probability proportional to its weight.

        Args:
            rng: Generator to draw from (defaults to the distribution's own)

        Returns:
            The value owning the interval the uniform draw landed in

        Raises:
            EmptyDistribution: If nothing has been added
        """
        if len(self._index) == 0 or self._total_weight <= 0.0:
            raise EmptyDistribution()

        generator = rng if rng is not None else self._rng
        r = float(generator.uniform(0.0, self._total_weight))
        pos = self._index.floor_position(r)
        if pos is None:
            raise RuntimeError(
                f"No threshold at or below {r!r} in a non-empty index (total_weight={self._total_weight!r})"
            )
        return self._index.value_at(pos)

    def pick_many(self, count: int, rng: Optional[np.random.Generator] = None) -> List[T]:
        """
        Draw count independent values in one vectorised pass.

        Same floor query as random_pick(), done with numpy.searchsorted over
        all draws at once.

        Raises:
            ValueError: If count is negative
            EmptyDistribution: If nothing has been added
        """
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        if len(self._index) == 0 or self._total_weight <= 0.0:
            raise EmptyDistribution()
        if count == 0:
            return []

        generator = rng if rng is not None else self._rng
        draws = generator.uniform(0.0, self._total_weight, size=count)
        thresholds = np.asarray(self._index.keys(), dtype=np.float64)
        positions = np.searchsorted(thresholds, draws, side="right") - 1
        if (positions < 0).any():
            raise RuntimeError("Draw fell below the first threshold of a non-empty index")

        values = self._index.values()
        return [values[pos] for pos in positions]

    def probability(self, value: T) -> float:
        """
        Exact probability that random_pick() returns value.

        Sums the lengths of every interval the value owns, so repeated
        insertions of an equal value all count.

        Raises:
            EmptyDistribution: If nothing has been added
        """
        if len(self._index) == 0 or self._total_weight <= 0.0:
            raise EmptyDistribution()

        keys = self._index.keys()
        values = self._index.values()
        owned = 0.0
        for pos, candidate in enumerate(values):
            if candidate == value:
                end = keys[pos + 1] if pos + 1 < len(keys) else self._total_weight
                owned += end - keys[pos]
        return owned / self._total_weight

    def without(self, excluded: Iterable[T]):
        """
        Build a new distribution without the given values.

        Every value of the originals table not in excluded is re-added, in
        table order, with its most recent weight. The receiver is not
        modified.

        Args:
            excluded: Values to leave out

        Returns:
            New distribution of the same kind, sharing this one's generator
        """
        excluded_set = set(excluded)
        rebuilt: WeightedDistribution[T] = WeightedDistribution(rng=self._rng)
        for value, weight in self._originals.items():
            if value not in excluded_set:
                rebuilt.add(value, weight)

        logger.debug(f"[DISTRIBUTION] Rebuilt without {len(excluded_set)} value(s): "
                     f"kept {len(rebuilt._originals)} of {len(self._originals)}, "
                     f"total_weight={rebuilt.total_weight:.6g}")
        return self._wrap_rebuilt(rebuilt)

    @abstractmethod
    def _wrap_rebuilt(self, rebuilt: "WeightedDistribution[T]") -> Any:
        """Return a rebuilt distribution as the receiver's own kind."""
        ...

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, value: object) -> bool:
        try:
            return value in self._originals
        except TypeError:
            return False

    def __repr__(self) -> str:
        return f"{type(self).__name__}(entries={len(self._index)}, total_weight={self._total_weight!r})"


class WeightedDistribution(_DistributionView[T]):
    """
    Growable weighted distribution.

    add() is the only mutating operation. Not thread-safe: callers sharing
    an instance across threads must lock around add() and pass a per-thread
    generator to random_pick().
    """

    def __init__(self, rng: Optional[np.random.Generator] = None):
        """
        Initialize an empty distribution.

        Args:
            rng: Uniform random source; if omitted, a generator built from
                DistributionConfig.load_config() (seeded by WEIGHTED_DIST_SEED)

        Raises:
            ValueError: If rng is omitted and the configuration is invalid
        """
        self._index = CumulativeIndex()
        self._total_weight = 0.0
        self._originals = {}
        self._rng = rng if rng is not None else DistributionConfig.load_config().make_rng()

    def add(self, value: T, weight: float) -> None:
        """
        Add value with the given weight.

        The value owns [total_weight, total_weight + weight) in the index.
        Adding an equal value again creates a second interval, but the
        originals table only keeps the latest weight.

        A weight too small to change total_weight (lost to float rounding)
        gives the value an empty interval. The next insertion starts at the
        same threshold and takes that entry's place in the index, so the
        absorbed value is never sampled and len() does not count it; the
        originals table still records it.

        Raises:
            InvalidWeight: If weight is not a positive, finite number, or if
                adding it would overflow total_weight
            TypeError: If value is not hashable
        """
        try:
            weight_value = float(weight)
        except (TypeError, ValueError):
            raise InvalidWeight(value, weight) from None
        if not math.isfinite(weight_value) or weight_value <= 0.0:
            raise InvalidWeight(value, weight)
        if not math.isfinite(self._total_weight + weight_value):
            raise InvalidWeight(value, weight, reason=f"would overflow total_weight={self._total_weight!r}")

        # Unhashable values must fail before the index is touched
        hash(value)

        threshold = self._total_weight
        self._index.insert(threshold, value)
        self._total_weight = threshold + weight_value
        self._originals[value] = weight_value

        if self._total_weight == threshold:
            logger.warning(f"[DISTRIBUTION] Weight {weight_value!r} for {value!r} is too small to change "
                           f"total_weight={threshold!r}; it will never be picked")
        else:
            logger.debug(f"[DISTRIBUTION] Added {value!r} at threshold {threshold:.6g} "
                         f"(weight={weight_value:.6g}, total_weight={self._total_weight:.6g})")

    def snapshot(self) -> "DistributionSnapshot[T]":
        """Freeze the current state into a read-only DistributionSnapshot."""
        return DistributionSnapshot(self._index, self._total_weight, self._originals, self._rng)

    def _wrap_rebuilt(self, rebuilt: "WeightedDistribution[T]") -> "WeightedDistribution[T]":
        return rebuilt


class DistributionSnapshot(_DistributionView[T]):
    """
    Immutable copy of a WeightedDistribution.

    Offers random_pick(), pick_many(), probability() and without(); has no
    add(). Later additions to the source distribution are not seen.
    """

    def __init__(
        self,
        index: CumulativeIndex[T],
        total_weight: float,
        originals: Mapping[T, float],
        rng: np.random.Generator,
    ):
        self._index = index.copy()
        self._total_weight = total_weight
        self._originals = dict(originals)
        self._rng = rng

    def _wrap_rebuilt(self, rebuilt: WeightedDistribution[T]) -> "DistributionSnapshot[T]":
        return rebuilt.snapshot()
