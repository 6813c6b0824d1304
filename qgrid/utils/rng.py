"""Random number generation utilities for Q-learning."""

import numpy as np
from typing import Optional


class SeededRNG:
    """Seeded random number generator for reproducible results.

    Each instance owns its own generator, so independent runs never
    disturb one another's sequences.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._generator = np.random.default_rng(seed)

    def random(self) -> float:
        """Generate random float in [0, 1)."""
        return float(self._generator.random())

    def randint(self, a: int, b: int) -> int:
        """Generate random integer in [a, b]."""
        return int(self._generator.integers(a, b + 1))
