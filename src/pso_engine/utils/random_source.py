"""
Seeded uniform-deviate source for the PSO engine.

Every random number the engine consumes goes through a single UniformSource,
so a seed plus a configuration fully determines a run.
"""

import logging
from typing import Optional

import numpy as np

logger = logging.getLogger(__name__)


class UniformSource:
    """
    Sequential source of uniform deviates backed by numpy's default generator.

    Attributes:
        seed: Seed the stream was (re)started from
        draws: Number of deviates consumed since the last (re)seed
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Initialize the source.

        Args:
            seed: Seed for numpy.random.default_rng (None for OS entropy)
        """
        self.seed = seed
        self.draws = 0
        self._rng = np.random.default_rng(seed)

    def uniform(self, low: float = -1.0, high: float = 1.0) -> float:
        """
        Draw one deviate from [low, high).

        Args:
            low: Lower bound
            high: Upper bound

        Returns:
            Deviate as a Python float
        """
        self.draws += 1
        return float(self._rng.uniform(low, high))

    def reseed(self, seed: Optional[int] = None) -> None:
        """Restart the stream from the given seed, or from the current one if None."""
        if seed is not None:
            self.seed = seed
        self._rng = np.random.default_rng(self.seed)
        self.draws = 0
        logger.debug(f"UniformSource reseeded with seed={self.seed}")

    def __call__(self, low: float = -1.0, high: float = 1.0) -> float:
        return self.uniform(low, high)

    def __repr__(self) -> str:
        return f"UniformSource(seed={self.seed}, draws={self.draws})"
