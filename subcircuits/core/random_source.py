"""
RandomSource — injected randomness for puzzle generation.

Design: the generator never touches a global random facility.  It is
handed a RandomSource so tests can replay an identical sequence of draws
and get a bit-for-bit identical puzzle.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import MutableSequence, Sequence, TypeVar

import numpy as np

T = TypeVar("T")


class RandomSource(ABC):
    """
    Abstract source of uniform draws.

    Only ``randint`` and ``random`` are primitive; ``choice`` and
    ``shuffle`` are built on ``randint`` so every implementation consumes
    draws in the same pattern.
    """

    @abstractmethod
    def randint(self, low: int, high: int) -> int:
        """Uniform integer in the half-open range ``[low, high)``."""
        ...

    @abstractmethod
    def random(self) -> float:
        """Uniform real in ``[0, 1)``."""
        ...

    def choice(self, seq: Sequence[T]) -> T:
        """Pick one element of *seq* uniformly.  Raises IndexError if empty."""
        if not seq:
            raise IndexError("Cannot choose from an empty sequence.")
        return seq[self.randint(0, len(seq))]

    def shuffle(self, items: MutableSequence[T]) -> None:
        """Fisher-Yates shuffle of *items* in place."""
        for i in range(len(items) - 1, 0, -1):
            j = self.randint(0, i + 1)
            items[i], items[j] = items[j], items[i]


class NumpyRandomSource(RandomSource):
    """
    RandomSource backed by a ``numpy.random.Generator``.

    Two instances built with the same *seed* produce identical draws.
    """

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def randint(self, low: int, high: int) -> int:
        if high <= low:
            raise ValueError(f"Empty range [{low}, {high}).")
        return int(self._rng.integers(low, high))

    def random(self) -> float:
        return float(self._rng.random())

    def __repr__(self) -> str:
        return f"NumpyRandomSource(seed={self.seed!r})"
