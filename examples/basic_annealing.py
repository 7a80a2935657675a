#!/usr/bin/env python3
"""
Basic example of using the annealing engine.

This script demonstrates how to:
1. Configure a search
2. Maximize a parabola with the quadratic model
3. Improve a random timetable while keeping it valid
4. Inspect per-level statistics
"""

import logging
import sys

from annealing import AnnealingConfig, AnnealingEngine
from annealing.models import QuadraticModel, TimetableModel
from annealing.utils import create_rng

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def maximize_quadratic():
    """Example: find the vertex of -2x^2 + 3x + 2."""

    logger.info("=" * 80)
    logger.info("EXAMPLE 1: Quadratic Maximization")
    logger.info("=" * 80)

    config = AnnealingConfig(
        initial_temperature=sys.float_info.max,
        final_temperature=1e-10,
        cooling=0.05,
        trials_per_level=100,
        deadline=10
    )

    model = QuadraticModel(x=-1.0, rng=create_rng(7))
    engine = AnnealingEngine(rng=create_rng(42))
    engine.run(config, model)

    logger.info(f"Found x = {model.x:.6f}, f(x) = {model.score():.6f}")
    logger.info(f"Analytic vertex: {model.vertex:.6f}")


def improve_timetable():
    """Example: add meetings to a sparse timetable without double bookings."""

    logger.info("\n\n" + "=" * 80)
    logger.info("EXAMPLE 2: Timetable Assignment")
    logger.info("=" * 80)

    config = AnnealingConfig(
        initial_temperature=1e4,
        final_temperature=1e-10,
        cooling=0.05,
        trials_per_level=100,
        deadline=10
    )

    rng = create_rng(3)
    model = TimetableModel.random(rng=rng, density=0.05)
    initial_score = model.score()

    engine = AnnealingEngine(rng=rng)
    engine.run(config, model)

    logger.info(f"Meetings: {initial_score:.0f} -> {model.score():.0f}, valid={model.is_valid()}")

    # Print level statistics
    logger.info("\n" + "-" * 80)
    logger.info("LEVEL STATISTICS (every 100th level)")
    logger.info("-" * 80)
    for history in engine.history[::100]:
        logger.info(
            f"Level {history.level}: T={history.temperature:.3g}, "
            f"score={-history.reference_energy:.0f}, "
            f"accepted={history.accepted}, invalid={history.invalid}"
        )


def main():
    """Main entry point."""
    maximize_quadratic()
    improve_timetable()


if __name__ == "__main__":
    main()
