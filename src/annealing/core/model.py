"""
Model contract for the annealing engine.

This module defines the abstract base class every searchable problem must
implement. The engine never inspects model internals; it only calls the five
operations declared here.
"""

from abc import ABC, abstractmethod


class ModelKindMismatchError(TypeError):
    """Raised when copy_from() receives a model of a different concrete kind."""


class AnnealingModel(ABC):
    """
    Abstract base class for models searched by the annealing engine.

    A model is one point in a problem's solution space. The engine keeps two
    instances of the same concrete kind: the caller's live instance, which it
    perturbs, and a snapshot clone holding the last accepted state.

    Implementations must guarantee:
        - score() and is_valid() are pure functions of the current state
        - perturb() mutates the instance in place to a random neighbor
        - copy_from() overwrites all state from another instance of the same kind
        - clone() returns a fully independent deep copy
    """

    @abstractmethod
    def score(self) -> float:
        """
        Score the current state.

        Returns:
            Objective value to be maximized
        """
        pass

    @abstractmethod
    def perturb(self) -> None:
        """Move the instance in place to a randomly chosen neighboring state."""
        pass

    @abstractmethod
    def copy_from(self, other: "AnnealingModel") -> None:
        """
        Overwrite this instance's state with the state of another instance.

        Args:
            other: Model of the same concrete kind

        Raises:
            ModelKindMismatchError: If other is of a different kind
        """
        pass

    @abstractmethod
    def is_valid(self) -> bool:
        """
        Check the current state against the problem's constraints.

        Returns:
            True if every domain constraint holds
        """
        pass

    @abstractmethod
    def clone(self) -> "AnnealingModel":
        """
        Create an independent copy of this model.

        Returns:
            New instance with identical state and no shared mutable state
        """
        pass

    def _check_kind(self, other: "AnnealingModel") -> None:
        """Raise ModelKindMismatchError unless other has exactly this model's type."""
        if type(other) is not type(self):
            raise ModelKindMismatchError(
                f"Cannot copy {type(other).__name__} into {type(self).__name__}"
            )
