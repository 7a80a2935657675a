"""
Command-line interface for the annealing engine.
"""

from .main import main

__all__ = ["main"]
