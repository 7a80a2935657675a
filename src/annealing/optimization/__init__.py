"""
Optimization module for the annealing engine.

This module contains the annealing engine and its configuration: the cooling
schedule, the per-level trial loop and the Metropolis acceptance rule.
"""

from .engine import AnnealingEngine, BOLTZMANN_CONSTANT, acceptance_probability, simulated_annealing
from .config import AnnealingConfig, ConfigurationError, LevelHistory, parse_number

__all__ = [
    "AnnealingEngine",
    "BOLTZMANN_CONSTANT",
    "acceptance_probability",
    "simulated_annealing",
    "AnnealingConfig",
    "ConfigurationError",
    "LevelHistory",
    "parse_number",
]
