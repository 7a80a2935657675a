"""
Simulated-annealing optimization engine.

Searches any model implementing the AnnealingModel contract for a high-scoring,
constraint-valid configuration under a geometric cooling schedule.
"""

from .core.model import AnnealingModel, ModelKindMismatchError
from .optimization.config import AnnealingConfig, ConfigurationError, LevelHistory
from .optimization.engine import (
    BOLTZMANN_CONSTANT,
    AnnealingEngine,
    acceptance_probability,
    simulated_annealing,
)

__all__ = [
    "AnnealingModel",
    "ModelKindMismatchError",
    "AnnealingConfig",
    "ConfigurationError",
    "LevelHistory",
    "BOLTZMANN_CONSTANT",
    "AnnealingEngine",
    "acceptance_probability",
    "simulated_annealing",
]
