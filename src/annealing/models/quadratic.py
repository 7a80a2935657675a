"""
Quadratic toy model: maximize f(x) = a*x^2 + b*x + c.
"""

import copy
from dataclasses import dataclass, field
from typing import Optional

from ..core.model import AnnealingModel
from ..utils.random_source import RandomSource, create_rng


@dataclass(eq=True)
class QuadraticModel(AnnealingModel):
    """
    One real variable x scored by a parabola.

    With a < 0 the score is maximized at the vertex -b / (2a); the defaults
    place it at x = 0.75.

    Attributes:
        a, b, c: Coefficients of the parabola
        x: Current point
        precision: Perturbation step magnitudes are drawn log-uniformly
            from [10**-precision, 1]
        rng: Uniform [0, 1) source, shared with clones
    """

    a: float = -2.0
    b: float = 3.0
    c: float = 2.0
    x: float = -1.0
    precision: float = 7.0
    rng: Optional[RandomSource] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        if self.rng is None:
            self.rng = create_rng()

    @property
    def vertex(self) -> float:
        """Analytic extremum of the parabola."""
        if self.a == 0:
            raise ValueError("A linear function has no vertex")
        return -self.b / (2.0 * self.a)

    def evaluate(self, x: float) -> float:
        """Evaluate the parabola at x."""
        return self.a * x * x + self.b * x + self.c

    def score(self) -> float:
        return self.evaluate(self.x)

    def perturb(self) -> None:
        # Signed step, magnitude log-uniform so both coarse and fine moves occur
        scale = 10.0 ** (-self.precision * self.rng.random())
        self.x += scale * (2.0 * self.rng.random() - 1.0)

    def copy_from(self, other: AnnealingModel) -> None:
        self._check_kind(other)
        self.a = other.a
        self.b = other.b
        self.c = other.c
        self.x = other.x
        self.precision = other.precision

    def is_valid(self) -> bool:
        return True

    def clone(self) -> "QuadraticModel":
        return copy.copy(self)
