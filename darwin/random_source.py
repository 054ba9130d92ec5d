"""
Shared random number source.

Wraps a numpy Generator so every stochastic operation draws from one
injectable object. The process-wide instance is seeded once from a
monotonic high-resolution clock.
"""

import time
from typing import Optional

import numpy as np


class RandomSource:
    """
    Sequential random draws for selection, recombination and fitness.

    Draw order matters: the same seed reproduces a run only if the
    operations draw in the same order.
    """

    def __init__(self, seed: Optional[int] = None):
        if seed is None:
            seed = time.perf_counter_ns()
        self.seed = seed
        self._generator = np.random.default_rng(seed)

    def integer(self, n: int) -> int:
        """
        Draw a uniform integer from [0, n - 1].

        Args:
            n: Number of possible values (must be positive)

        Returns:
            Random integer
        """
        if n <= 0:
            raise ValueError(f"Cannot draw an integer from an empty range (n={n})")
        return int(self._generator.integers(0, n))

    def uniform(self, low: float, high: float) -> float:
        """Draw a uniform real number from [low, high)."""
        return float(self._generator.uniform(low, high))

    def permutation(self, n: int) -> list[int]:
        """Return a uniformly random permutation of range(n)."""
        return [int(i) for i in self._generator.permutation(n)]


_default_source: Optional[RandomSource] = None


def default_source() -> RandomSource:
    """
    Get the process-wide random source, creating it on first use.

    Returns:
        Shared RandomSource instance
    """
    global _default_source
    if _default_source is None:
        _default_source = RandomSource()
    return _default_source
