"""
Example models for the annealing engine.

- QuadraticModel: maximizes a parabola over one real variable
- TimetableModel: assigns courses to rooms, time slots and weekdays
"""

from .quadratic import QuadraticModel
from .timetable import DEFAULT_LIMITS, TimetableModel

__all__ = ["QuadraticModel", "TimetableModel", "DEFAULT_LIMITS"]
