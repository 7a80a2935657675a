#!/usr/bin/env python3
"""
Command-line runner for the annealing engine.

Runs one of the example models under a configuration loaded from YAML, with
optional command-line overrides.

Usage:
    annealing --model quadratic --config config/annealing.yaml
    annealing --model timetable --deadline 5 --seed 42 --log-level DEBUG
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..core.model import AnnealingModel
from ..models.quadratic import QuadraticModel
from ..models.timetable import TimetableModel
from ..optimization.config import AnnealingConfig, ConfigurationError
from ..optimization.engine import AnnealingEngine
from ..utils.random_source import create_rng

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "initial_temperature": sys.float_info.max,
    "final_temperature": 1e-10,
    "cooling": 0.05,
    "trials_per_level": 100,
    "deadline": 10.0,
}

OVERRIDES = (
    "initial_temperature",
    "final_temperature",
    "cooling",
    "trials_per_level",
    "deadline",
)


def load_config_dict(config_path: str) -> Dict[str, Any]:
    """
    Load annealing parameters from a YAML file.

    Args:
        config_path: Path to the YAML file

    Returns:
        Parameter dictionary (built-in defaults if the file does not exist)
    """
    config_file = Path(config_path)
    if not config_file.exists():
        logger.warning(f"Config not found: {config_path}, using built-in defaults")
        return dict(DEFAULT_CONFIG)

    with open(config_file) as f:
        config = yaml.safe_load(f) or {}

    logger.info(f"Loaded config from: {config_path}")
    return dict(config.get("annealing", config))


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Run simulated annealing on an example model",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Maximize the parabola -2x^2 + 3x + 2 starting at x = -1
  annealing --model quadratic

  # Improve a random timetable for 5 seconds with a fixed seed
  annealing --model timetable --deadline 5 --seed 42
        """
    )

    parser.add_argument(
        "--model",
        type=str,
        default="quadratic",
        choices=["quadratic", "timetable"],
        help="Example model to optimize (default: quadratic)"
    )

    parser.add_argument(
        "--config",
        type=str,
        default="config/annealing.yaml",
        help="Path to annealing config YAML (default: config/annealing.yaml)"
    )

    parser.add_argument("--initial-temperature", type=float, default=None,
                        help="Override the initial temperature")
    parser.add_argument("--final-temperature", type=float, default=None,
                        help="Override the final temperature")
    parser.add_argument("--cooling", type=float, default=None,
                        help="Override the cooling factor, in (0, 1)")
    parser.add_argument("--trials-per-level", type=int, default=None,
                        help="Override the number of trials per temperature level")
    parser.add_argument("--deadline", type=float, default=None,
                        help="Override the deadline in seconds")

    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed (default: derived from the clock)"
    )

    parser.add_argument(
        "--density",
        type=float,
        default=0.1,
        help="Assignment probability for the initial random timetable (default: 0.1)"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)"
    )

    return parser.parse_args(argv)


def build_model(name: str, rng, density: float) -> AnnealingModel:
    """Create the example model selected on the command line."""
    if name == "timetable":
        return TimetableModel.random(rng=rng, density=density)
    return QuadraticModel(rng=rng)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )

    params = load_config_dict(args.config)
    for name in OVERRIDES:
        value = getattr(args, name)
        if value is not None:
            params[name] = value
    params["log_level_stats"] = args.log_level == "DEBUG"

    try:
        config = AnnealingConfig.from_dict(params)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    rng = create_rng(args.seed)
    model = build_model(args.model, rng, args.density)
    initial_score = model.score()

    engine = AnnealingEngine(rng=rng)
    engine.run(config, model)

    print(f"Model: {args.model}")
    print(f"Levels completed: {engine.levels_completed}")
    print(f"Initial score: {initial_score:.6f}")
    print(f"Final score: {model.score():.6f}")
    if isinstance(model, QuadraticModel):
        print(f"Maximum of f(x) found at x = {model.x:.6f} (vertex {model.vertex:.6f})")
    else:
        print(f"Meetings: {len(model.assignments())}, conflicts: {model.conflicts()}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
