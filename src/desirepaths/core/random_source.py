"""
Pluggable randomness.

The engine asks for exactly two kinds of random draws: a point in the
unit square (new node) and a pick from a list of ids (spawn node, new
final destination). Tests can supply scripted sequences through the
same protocol.
"""

from __future__ import annotations
from typing import Protocol, Sequence, TypeVar

import numpy as np

T = TypeVar("T")


class RandomSource(Protocol):
    """Protocol for the engine's random draws."""

    def random_position(self) -> tuple[float, float]:
        """Uniform point in [0, 1) x [0, 1)."""
        ...

    def choice(self, items: Sequence[T]) -> T:
        """Uniform pick from a non-empty sequence."""
        ...


class NumpyRandomSource:
    """RandomSource backed by numpy's Generator."""

    def __init__(self, seed: int | None = None):
        self.rng = np.random.default_rng(seed)

    def random_position(self) -> tuple[float, float]:
        x, y = self.rng.random(2)
        return float(x), float(y)

    def choice(self, items: Sequence[T]) -> T:
        if len(items) == 0:
            raise ValueError("Cannot choose from an empty sequence")
        return items[int(self.rng.integers(len(items)))]
