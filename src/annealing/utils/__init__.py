"""
Utility modules for the annealing engine.

This package provides the random sources shared by the engine and the
example models.
"""

from .random_source import (
    RandomSource,
    create_rng,
    time_seed
)

__all__ = [
    "RandomSource",
    "create_rng",
    "time_seed",
]
