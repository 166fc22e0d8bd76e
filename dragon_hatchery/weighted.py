"""
Immutable weighted random collection.

Picks one value out of a fixed pool of (value, weight) pairs, with
probability proportional to the weight. Lookups are a binary search
over the cumulative weights.
"""
from __future__ import annotations

import bisect
import math
import random
from numbers import Real
from typing import Generic, Iterable, List, Optional, Tuple, TypeVar

T = TypeVar("T")


class WeightedSampler(Generic[T]):
    """
    Weighted random selection over a fixed set of entries.

    The same value may appear several times; each occurrence keeps its
    own weight. Weights must be positive finite numbers and the source
    must not be empty.

    Example:
        >>> sampler = WeightedSampler([("stone", 3.0), ("dirt", 1.0)], prng_seed=7)
        >>> sampler.total
        4.0
        >>> sampler.pick_random() in ("stone", "dirt")
        True
    """

    def __init__(self, source: Iterable[Tuple[T, float]], prng_seed: Optional[int] = None):
        """
        Build the cumulative table.

        Args:
            source: (value, weight) pairs
            prng_seed: Random seed for deterministic behavior

        Raises:
            ValueError: if the source is empty or a weight is invalid
        """
        starts: List[float] = []
        weights: List[float] = []
        values: List[T] = []
        total = 0.0

        for value, weight in source:
            if isinstance(weight, bool) or not isinstance(weight, Real):
                raise ValueError(f"Weight must be a number, got {weight!r}")
            weight = float(weight)
            if not math.isfinite(weight) or weight <= 0:
                raise ValueError(f"Weights must be positive finite values, got {weight!r}")
            starts.append(total)
            weights.append(weight)
            values.append(value)
            total += weight

        if not values:
            raise ValueError("Source must not be empty")

        self._starts: Tuple[float, ...] = tuple(starts)
        self._values: Tuple[T, ...] = tuple(values)
        self._weights: Tuple[float, ...] = tuple(weights)
        self._total = total
        self.rng = random.Random(prng_seed)

    @property
    def total(self) -> float:
        """Sum of all weights."""
        return self._total

    def __len__(self) -> int:
        return len(self._values)

    def pick_random(self) -> T:
        """Get a random value, taking the weights into account."""
        r = self.rng.random() * self._total
        # Entry i owns [starts[i], starts[i + 1]); rounding can push r up to total.
        index = bisect.bisect_right(self._starts, r) - 1
        return self._values[min(index, len(self._values) - 1)]

    def entries(self) -> Tuple[T, ...]:
        """All stored values, duplicates included."""
        return self._values

    def weights(self) -> Tuple[float, ...]:
        """Weights, aligned with entries()."""
        return self._weights

    def probability_of(self, index: int) -> float:
        """Selection probability of the entry at ``index``."""
        return self._weights[index] / self._total

    def __repr__(self) -> str:
        return f"WeightedSampler(entries={len(self._values)}, total={self._total})"
