"""
Unit tests for TimetableModel.
"""

import numpy as np
import pytest

from annealing.core.model import ModelKindMismatchError
from annealing.models import DEFAULT_LIMITS, QuadraticModel, TimetableModel


class TestTimetableConstruction:
    """Test cases for creating timetables."""

    def test_empty(self):
        """Test creating an empty default timetable."""
        model = TimetableModel.empty()

        assert model.limits == DEFAULT_LIMITS
        assert model.score() == 0.0
        assert model.is_valid() is True
        assert model.assignments() == []

    def test_from_schedule(self, sample_schedule):
        """Test wrapping an existing grid."""
        model = TimetableModel(sample_schedule)

        assert model.limits == (2, 2, 1, 1)
        assert model.score() == 2.0
        assert model.assignments() == [(0, 0, 0, 0), (1, 1, 0, 0)]

    def test_schedule_is_copied(self, sample_schedule):
        """Test that the model does not alias the caller's array."""
        model = TimetableModel(sample_schedule)
        sample_schedule[0, 1, 0, 0] = 1

        assert model.score() == 2.0

    def test_rejects_wrong_dimensions(self):
        """Test that only 4-dimensional grids are accepted."""
        with pytest.raises(ValueError, match="4-dimensional"):
            TimetableModel(np.zeros((3, 5, 3)))

    def test_rejects_non_binary(self):
        """Test that cells must be 0 or 1."""
        schedule = np.zeros((1, 1, 1, 1))
        schedule[0, 0, 0, 0] = 2

        with pytest.raises(ValueError, match="only 0 and 1"):
            TimetableModel(schedule)

    def test_rejects_empty_grid(self):
        """Test that a zero-sized grid is rejected."""
        with pytest.raises(ValueError, match="must not be empty"):
            TimetableModel(np.zeros((0, 5, 3, 5)))

    def test_random_is_valid(self):
        """Test that random timetables never double-book."""
        for seed in range(20):
            model = TimetableModel.random(rng=np.random.default_rng(seed), density=0.5)
            assert model.is_valid()
            assert model.score() > 0

    def test_random_density_bounds(self, rng):
        """Test density extremes and validation."""
        assert TimetableModel.random(rng=rng, density=0.0).score() == 0.0

        full = TimetableModel.random(rng=rng, density=1.0)
        assert full.is_valid()
        # 3 courses x 5 rooms per (slot, day): a full matching places 3 meetings
        assert full.score() == 3 * 3 * 5

        with pytest.raises(ValueError, match="density"):
            TimetableModel.random(rng=rng, density=1.5)

    def test_random_is_reproducible(self):
        """Test that equal seeds give equal timetables."""
        first = TimetableModel.random(rng=np.random.default_rng(11), density=0.3)
        second = TimetableModel.random(rng=np.random.default_rng(11), density=0.3)

        assert first == second


class TestTimetableConstraints:
    """Test cases for validity checking."""

    def test_room_double_booked(self):
        """Test that two courses in one room at the same time are invalid."""
        model = TimetableModel.empty()
        model.schedule[0, 2, 1, 4] = 1
        model.schedule[1, 2, 1, 4] = 1

        assert model.is_valid() is False
        assert model.conflicts() == 1

    def test_course_in_two_rooms(self):
        """Test that one course in two rooms at the same time is invalid."""
        model = TimetableModel.empty()
        model.schedule[2, 0, 0, 0] = 1
        model.schedule[2, 3, 0, 0] = 1

        assert model.is_valid() is False
        assert model.conflicts() == 1

    def test_same_room_different_times(self):
        """Test that reusing a room at another slot or day is valid."""
        model = TimetableModel.empty()
        model.schedule[0, 1, 0, 0] = 1
        model.schedule[1, 1, 1, 0] = 1
        model.schedule[2, 1, 0, 1] = 1

        assert model.is_valid() is True
        assert model.conflicts() == 0

    def test_independent_constraints_are_counted(self):
        """Test counting violations of both constraints."""
        model = TimetableModel.empty()
        model.schedule[0, 0, 0, 0] = 1
        model.schedule[1, 0, 0, 0] = 1
        model.schedule[1, 1, 0, 0] = 1

        # Room 0 hosts two courses; course 1 sits in two rooms
        assert model.conflicts() == 2


class TestTimetableOperations:
    """Test cases for the model contract operations."""

    def test_perturb_toggles_one_cell(self, timetable_model):
        """Test that each perturbation flips exactly one cell."""
        for _ in range(50):
            before = timetable_model.schedule.copy()
            timetable_model.perturb()
            assert np.abs(timetable_model.schedule - before).sum() == 1

    def test_perturb_keeps_binary(self, timetable_model):
        """Test that toggling never leaves the 0/1 domain."""
        for _ in range(500):
            timetable_model.perturb()

        assert set(np.unique(timetable_model.schedule)) <= {0, 1}

    def test_score_counts_meetings(self, sample_schedule):
        """Test that the score is the number of assigned cells."""
        model = TimetableModel(sample_schedule)
        model.schedule[0, 0, 0, 0] = 0

        assert model.score() == 1.0

    def test_clone_is_equal_and_independent(self, timetable_model):
        """Test that clones do not share the grid."""
        duplicate = timetable_model.clone()

        assert duplicate == timetable_model
        assert duplicate.schedule is not timetable_model.schedule

        duplicate.perturb()
        assert duplicate != timetable_model

        perturbed_score = duplicate.score()
        timetable_model.schedule[...] = 0
        assert duplicate.score() == perturbed_score

    def test_clone_keeps_subclass(self, rng):
        """Test that cloning preserves the concrete kind."""

        class LabelledTimetable(TimetableModel):
            pass

        model = LabelledTimetable.random(rng=rng)
        assert type(model.clone()) is LabelledTimetable

    def test_copy_from(self, timetable_model):
        """Test overwriting the grid in place."""
        target = TimetableModel.empty(rng=timetable_model.rng)
        grid = target.schedule

        target.copy_from(timetable_model)

        assert target == timetable_model
        assert target.schedule is grid

    def test_copy_from_other_shape(self, sample_schedule, timetable_model):
        """Test copying a grid of a different shape."""
        target = TimetableModel(sample_schedule)

        target.copy_from(timetable_model)

        assert target.limits == DEFAULT_LIMITS
        assert target == timetable_model
        assert target.schedule is not timetable_model.schedule

    def test_copy_from_other_kind(self, timetable_model):
        """Test that copying from a different model kind fails fast."""
        before = timetable_model.schedule.copy()

        with pytest.raises(ModelKindMismatchError):
            timetable_model.copy_from(QuadraticModel())

        assert np.array_equal(timetable_model.schedule, before)

    def test_repr(self, sample_schedule):
        """Test the short representation."""
        assert repr(TimetableModel(sample_schedule)) == "TimetableModel(limits=(2, 2, 1, 1), meetings=2)"

    def test_unhashable(self, timetable_model):
        """Test that mutable timetables cannot be hashed."""
        with pytest.raises(TypeError):
            hash(timetable_model)
