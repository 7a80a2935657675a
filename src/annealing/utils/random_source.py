"""
Random sources for the annealing engine and models.

The engine only needs a uniform [0, 1) draw, so any object with a random()
method works: numpy.random.Generator or random.Random. Passing a seeded source
makes a search reproducible; omitting it falls back to a time-derived seed.
"""

import logging
import time
from typing import Optional, Protocol

import numpy as np

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Anything that draws uniform floats in [0, 1)."""

    def random(self) -> float:
        ...


def time_seed() -> int:
    """Derive a 32-bit seed from the wall clock."""
    return time.time_ns() & 0xFFFFFFFF


def create_rng(seed: Optional[int] = None) -> np.random.Generator:
    """
    Create a numpy random generator.

    Args:
        seed: Seed for the generator; derived from the wall clock when None

    Returns:
        Seeded numpy Generator
    """
    if seed is None:
        seed = time_seed()
        logger.debug(f"Seeding random generator from clock: {seed}")

    return np.random.default_rng(seed)
