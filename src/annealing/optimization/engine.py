"""
Annealing engine.

This module implements the simulated-annealing control loop: a geometric
cooling schedule, a fixed number of trials per temperature level, and a
Metropolis acceptance rule evaluated against the energy of the last accepted
state.
"""

import logging
import math
import time
from typing import Callable, List, Optional

from ..core.model import AnnealingModel
from ..utils.random_source import RandomSource, create_rng
from .config import AnnealingConfig, LevelHistory

logger = logging.getLogger(__name__)

# Boltzmann constant in eV/K.
BOLTZMANN_CONSTANT = 8.6173432e-5


def acceptance_probability(delta: float, temperature: float) -> float:
    """
    Metropolis probability of accepting an energy change at a temperature.

    Computes exp(-delta / (Kb * T)). Non-positive deltas always pass, so 1.0
    is returned for them without evaluating the exponential, which would
    overflow for large improvements at low temperature.

    Args:
        delta: Energy of the candidate minus the reference energy
        temperature: Current temperature (>= 0)

    Returns:
        Probability in [0, 1]
    """
    if delta <= 0:
        return 1.0

    # Kb * T underflows to 0.0 for temperatures below about 5.8e-320
    thermal_energy = BOLTZMANN_CONSTANT * temperature
    if thermal_energy == 0.0:
        return 0.0
    return math.exp(-delta / thermal_energy)


class AnnealingEngine:
    """
    Simulated-annealing search over an AnnealingModel.

    The engine minimizes the energy -score(), which maximizes the model's
    score. It owns a snapshot clone of the model holding the last accepted
    state. Within a level the caller's model accumulates every trial
    perturbation, accepted or not; at the end of the level it is overwritten
    with the snapshot before the temperature is lowered.

    Example usage:
        ```python
        config = AnnealingConfig(
            initial_temperature=1e4,
            final_temperature=1e-10,
            cooling=0.05,
            trials_per_level=100,
            deadline=10,
        )
        model = QuadraticModel(x=-1.0)
        AnnealingEngine(rng=create_rng(42)).run(config, model)
        print(model.x, model.score())
        ```
    """

    def __init__(
        self,
        rng: Optional[RandomSource] = None,
        clock: Callable[[], float] = time.monotonic
    ):
        """
        Initialize the annealing engine.

        Args:
            rng: Uniform [0, 1) source used for acceptance draws; a
                time-seeded numpy Generator is created when omitted
            clock: Monotonic clock in seconds used for the deadline
        """
        self.rng = rng if rng is not None else create_rng()
        self.clock = clock

        # State of the most recent run
        self.history: List[LevelHistory] = []

    @property
    def levels_completed(self) -> int:
        """Number of temperature levels completed by the most recent run."""
        return len(self.history)

    def run(self, config: AnnealingConfig, model: AnnealingModel) -> None:
        """
        Search in place, leaving model in the last accepted state.

        Exceptions raised by the model propagate unchanged; the model is then
        left in whatever state the failing trial produced.

        Args:
            config: Search parameters
            model: Live model instance, mutated in place
        """
        self.history = []

        snapshot = model.clone()
        reference_energy = -snapshot.score()
        temperature = config.initial_temperature

        start = self.clock()
        deadline_at = start + config.deadline

        logger.info(
            f"Starting annealing: T0={config.initial_temperature:.3g}, "
            f"Tf={config.final_temperature:.3g}, cooling={config.cooling}, "
            f"trials/level={config.trials_per_level + 1}, deadline={config.deadline}s, "
            f"initial score={-reference_energy:.6g}"
        )

        while True:
            now = self.clock()
            if now >= deadline_at or temperature <= config.final_temperature:
                break

            stats = LevelHistory(
                level=len(self.history),
                temperature=temperature,
                reference_energy=reference_energy,
            )

            for _ in range(config.trials_per_level + 1):
                model.perturb()

                energy = -model.score()
                delta = energy - reference_energy
                draw = self.rng.random()

                if delta <= 0 or draw < acceptance_probability(delta, temperature):
                    if not model.is_valid():
                        stats.invalid += 1
                    elif delta != 0:
                        reference_energy = energy
                        snapshot.copy_from(model)
                        stats.accepted += 1
                    else:
                        stats.neutral += 1
                else:
                    stats.rejected += 1

            model.copy_from(snapshot)

            stats.reference_energy = reference_energy
            stats.elapsed = now - start
            self.history.append(stats)
            self._log_level_stats(config, stats)

            temperature *= 1.0 - config.cooling

        stop_reason = "deadline" if now >= deadline_at else "final temperature"
        logger.info(
            f"Annealing complete ({stop_reason}) after {self.levels_completed} levels "
            f"in {now - start:.2f}s: score={-reference_energy:.6g}, T={temperature:.3g}"
        )

    def _log_level_stats(self, config: AnnealingConfig, stats: LevelHistory) -> None:
        """
        Log statistics for a completed level.

        Args:
            config: Search parameters
            stats: Statistics of the level
        """
        if not config.log_level_stats:
            return

        logger.debug(
            f"Level {stats.level}: T={stats.temperature:.3g}, "
            f"score={-stats.reference_energy:.6g}, "
            f"accepted={stats.accepted}, neutral={stats.neutral}, "
            f"rejected={stats.rejected}, invalid={stats.invalid}"
        )


def simulated_annealing(
    config: AnnealingConfig,
    model: AnnealingModel,
    rng: Optional[RandomSource] = None
) -> None:
    """
    Run one annealing search over model in place.

    Args:
        config: Search parameters
        model: Live model instance, mutated in place
        rng: Uniform [0, 1) source for acceptance draws
    """
    AnnealingEngine(rng=rng).run(config, model)
