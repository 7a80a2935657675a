"""
Fixtures for unit tests.
"""

import random

import numpy as np
import pytest

from annealing.models import QuadraticModel, TimetableModel


@pytest.fixture
def rng():
    """Create a seeded numpy generator."""
    return np.random.default_rng(42)


@pytest.fixture
def quadratic_model():
    """Create the default parabola model starting at x = -1."""
    return QuadraticModel(x=-1.0, rng=random.Random(7))


@pytest.fixture
def timetable_model(rng):
    """Create a sparse valid timetable on the default 3x5x3x5 grid."""
    return TimetableModel.random(rng=rng, density=0.1)


@pytest.fixture
def sample_schedule():
    """Create a small hand-written grid with two meetings and no conflicts."""
    schedule = np.zeros((2, 2, 1, 1), dtype=np.int8)
    schedule[0, 0, 0, 0] = 1
    schedule[1, 1, 0, 0] = 1
    return schedule
