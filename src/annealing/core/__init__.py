"""
Core abstractions for the annealing engine.
"""

from .model import AnnealingModel, ModelKindMismatchError

__all__ = ["AnnealingModel", "ModelKindMismatchError"]
