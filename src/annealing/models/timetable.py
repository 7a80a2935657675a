"""
Timetable model: assign courses to rooms, time slots and weekdays.

The state is a binary grid indexed by (course, room, slot, day); a cell holds
1 when the course meets in that room at that slot on that day. The score is
the number of meetings, and a valid timetable never double-books a room or a
course.
"""

import copy
import logging
from typing import List, Optional, Tuple

import numpy as np

from ..core.model import AnnealingModel
from ..utils.random_source import create_rng

logger = logging.getLogger(__name__)

COURSE_AXIS = 0
ROOM_AXIS = 1

# (courses, rooms, slots, days)
DEFAULT_LIMITS: Tuple[int, int, int, int] = (3, 5, 3, 5)


class TimetableModel(AnnealingModel):
    """
    Binary course x room x slot x day assignment grid.

    Constraints:
        - at most one course per (room, slot, day)
        - at most one room per (course, slot, day)

    Attributes:
        schedule: int8 array of shape (courses, rooms, slots, days)
        rng: numpy Generator used by perturb(), shared with clones
    """

    def __init__(
        self,
        schedule: np.ndarray,
        rng: Optional[np.random.Generator] = None
    ):
        """
        Initialize a timetable from an existing grid.

        Args:
            schedule: Array of shape (courses, rooms, slots, days) holding 0/1
            rng: Random generator for perturbations (time-seeded if None)

        Raises:
            ValueError: If the grid is not 4-dimensional or not binary
        """
        schedule = np.array(schedule, dtype=np.int8)
        if schedule.ndim != 4:
            raise ValueError(f"schedule must be 4-dimensional, got shape {schedule.shape}")
        if schedule.size == 0:
            raise ValueError("schedule must not be empty")
        if not np.isin(schedule, (0, 1)).all():
            raise ValueError("schedule must contain only 0 and 1")

        self.schedule = schedule
        self.rng = rng if rng is not None else create_rng()

    @classmethod
    def empty(
        cls,
        limits: Tuple[int, int, int, int] = DEFAULT_LIMITS,
        rng: Optional[np.random.Generator] = None
    ) -> "TimetableModel":
        """Create a timetable with no meetings."""
        return cls(np.zeros(limits, dtype=np.int8), rng=rng)

    @classmethod
    def random(
        cls,
        limits: Tuple[int, int, int, int] = DEFAULT_LIMITS,
        rng: Optional[np.random.Generator] = None,
        density: float = 0.1
    ) -> "TimetableModel":
        """
        Create a uniformly random valid timetable.

        Cells are visited in uniformly random order and each is assigned with
        probability density, unless assigning it would double-book a room or
        a course.

        Args:
            limits: Grid shape (courses, rooms, slots, days)
            rng: Random generator, also used by the model's perturb()
            density: Probability of assigning each visited cell

        Returns:
            Valid TimetableModel
        """
        if not 0.0 <= density <= 1.0:
            raise ValueError("density must be between 0 and 1")

        model = cls.empty(limits, rng=rng)
        schedule = model.schedule

        for flat_index in model.rng.permutation(schedule.size):
            course, room, slot, day = np.unravel_index(flat_index, schedule.shape)
            if model.rng.random() >= density:
                continue
            if schedule[:, room, slot, day].any() or schedule[course, :, slot, day].any():
                continue
            schedule[course, room, slot, day] = 1

        logger.debug(f"Generated random timetable with {int(schedule.sum())} meetings")
        return model

    @property
    def limits(self) -> Tuple[int, ...]:
        """Grid shape (courses, rooms, slots, days)."""
        return self.schedule.shape

    def score(self) -> float:
        return float(self.schedule.sum())

    def perturb(self) -> None:
        # Toggle one uniformly chosen cell
        index = self.rng.integers(self.schedule.size)
        self.schedule.flat[index] = 1 - self.schedule.flat[index]

    def copy_from(self, other: AnnealingModel) -> None:
        self._check_kind(other)
        if other.schedule.shape == self.schedule.shape:
            np.copyto(self.schedule, other.schedule)
        else:
            self.schedule = other.schedule.copy()

    def is_valid(self) -> bool:
        return self.conflicts() == 0

    def conflicts(self) -> int:
        """
        Count double bookings.

        Returns:
            Number of (room, slot, day) cells holding more than one course plus
            number of (course, slot, day) cells holding more than one room
        """
        courses_per_room = self.schedule.sum(axis=COURSE_AXIS)
        rooms_per_course = self.schedule.sum(axis=ROOM_AXIS)
        return int((courses_per_room > 1).sum() + (rooms_per_course > 1).sum())

    def clone(self) -> "TimetableModel":
        duplicate = copy.copy(self)
        duplicate.schedule = self.schedule.copy()
        return duplicate

    def assignments(self) -> List[Tuple[int, int, int, int]]:
        """List assigned cells as (course, room, slot, day) tuples."""
        return [tuple(int(i) for i in index) for index in np.argwhere(self.schedule)]

    def __eq__(self, other) -> bool:
        if not isinstance(other, TimetableModel):
            return NotImplemented
        return np.array_equal(self.schedule, other.schedule)

    __hash__ = None

    def __repr__(self) -> str:
        return f"TimetableModel(limits={self.limits}, meetings={int(self.schedule.sum())})"
