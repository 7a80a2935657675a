"""
Configuration and data classes for the annealing engine.
"""

import logging
import math
import os
import sys
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Raised when an AnnealingConfig violates its invariants."""


def _require_real(name: str, value: Any) -> float:
    """Coerce a numeric parameter to float, rejecting bools, non-numbers and NaN."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"{name} must be a number, got {type(value).__name__}")
    value = float(value)
    if math.isnan(value):
        raise ConfigurationError(f"{name} must not be NaN")
    return value


def parse_number(value: Union[str, int, float], name: Optional[str] = None) -> Union[int, float]:
    """
    Parse a numeric configuration value that may arrive as a string.

    PyYAML loads exponent literals without a dot (e.g. ``1e-10``) as strings,
    so values read from YAML or the environment are coerced here.

    Args:
        value: Number or numeric string like "1e-10", "0.05", "100"
        name: Parameter name used in the error message

    Returns:
        int for integral strings, float otherwise; non-strings unchanged

    Examples:
        >>> parse_number("1e-10")
        1e-10
        >>> parse_number("100")
        100
    """
    if not isinstance(value, str):
        return value

    text = value.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        target = f" for {name}" if name else ""
        raise ConfigurationError(f"Invalid numeric value{target}: {value!r}") from None


@dataclass(frozen=True)
class AnnealingConfig:
    """
    Control parameters for one simulated-annealing search.

    The record is immutable and validated at construction; a search never
    raises configuration errors.

    Attributes:
        initial_temperature: Temperature of the first level
        final_temperature: Cooling floor; the search stops once the
            temperature is at or below it
        cooling: Fraction of the temperature removed after each level, in (0, 1)
        trials_per_level: Each level runs trials_per_level + 1 trials
        deadline: Wall-clock budget for the whole search, in seconds
            (a timedelta is accepted and converted)
        log_level_stats: Log per-level statistics at DEBUG level
    """

    initial_temperature: float
    final_temperature: float
    cooling: float
    trials_per_level: int
    deadline: Union[float, timedelta]
    log_level_stats: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        deadline = self.deadline
        if isinstance(deadline, timedelta):
            deadline = deadline.total_seconds()

        initial = _require_real("initial_temperature", self.initial_temperature)
        final = _require_real("final_temperature", self.final_temperature)
        cooling = _require_real("cooling", self.cooling)
        deadline = _require_real("deadline", deadline)

        if not math.isfinite(initial) or not math.isfinite(final):
            raise ConfigurationError("temperatures must be finite")
        if initial <= final:
            raise ConfigurationError(
                "initial_temperature must be greater than final_temperature"
            )
        if final < 0:
            raise ConfigurationError("final_temperature must be non-negative")
        if not 0.0 < cooling < 1.0:
            raise ConfigurationError("cooling must be strictly between 0 and 1")
        if isinstance(self.trials_per_level, bool) or not isinstance(self.trials_per_level, int):
            raise ConfigurationError("trials_per_level must be an integer")
        if self.trials_per_level < 0:
            raise ConfigurationError("trials_per_level must be non-negative")
        if not deadline > 0:
            raise ConfigurationError("deadline must be positive")

        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "initial_temperature", initial)
        object.__setattr__(self, "final_temperature", final)
        object.__setattr__(self, "cooling", cooling)
        object.__setattr__(self, "deadline", deadline)

    def levels_to_floor(self) -> float:
        """
        Number of levels the schedule needs to cool to the floor, ignoring the deadline.

        Returns:
            Level count, or math.inf when the floor is 0
        """
        if self.final_temperature == 0:
            return math.inf
        ratio = math.log(self.final_temperature / self.initial_temperature)
        return float(math.ceil(ratio / math.log(1.0 - self.cooling)))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "initial_temperature": self.initial_temperature,
            "final_temperature": self.final_temperature,
            "cooling": self.cooling,
            "trials_per_level": self.trials_per_level,
            "deadline": self.deadline,
            "log_level_stats": self.log_level_stats,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnnealingConfig":
        """
        Create instance from a dictionary.

        Raises:
            ConfigurationError: On unknown keys or missing parameters
        """
        known = {
            "initial_temperature",
            "final_temperature",
            "cooling",
            "trials_per_level",
            "deadline",
            "log_level_stats",
        }
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {sorted(unknown)}")

        missing = known - {"log_level_stats"} - set(data)
        if missing:
            raise ConfigurationError(f"Missing configuration keys: {sorted(missing)}")

        parsed = {
            key: (value if key == "log_level_stats" else parse_number(value, key))
            for key, value in data.items()
        }

        # Exponent literals such as 1e2 parse as float
        trials = parsed["trials_per_level"]
        if isinstance(trials, float) and trials.is_integer():
            parsed["trials_per_level"] = int(trials)

        return cls(**parsed)

    @classmethod
    def from_yaml(cls, config_path: Path) -> "AnnealingConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            AnnealingConfig instance
        """
        with open(config_path) as f:
            config = yaml.safe_load(f) or {}

        if not isinstance(config, dict):
            raise ConfigurationError(
                f"Expected a mapping in {config_path}, got {type(config).__name__}"
            )

        # Extract nested parameters if present
        annealing_config = config.get("annealing", config)
        if not isinstance(annealing_config, dict):
            raise ConfigurationError(
                f"Expected a mapping under 'annealing' in {config_path}, "
                f"got {type(annealing_config).__name__}"
            )

        logger.debug(f"Loaded annealing configuration from {config_path}")
        return cls.from_dict(annealing_config)

    @classmethod
    def from_env(cls) -> "AnnealingConfig":
        """
        Load configuration from environment variables.

        Reads the following environment variables:
        - ANNEALING_INITIAL_TEMPERATURE: initial_temperature
        - ANNEALING_FINAL_TEMPERATURE: final_temperature
        - ANNEALING_COOLING: cooling
        - ANNEALING_TRIALS_PER_LEVEL: trials_per_level
        - ANNEALING_DEADLINE: deadline (seconds)

        Returns:
            AnnealingConfig instance

        Raises:
            ConfigurationError: If a variable is not a valid number
        """
        return cls.from_dict({
            "initial_temperature": os.getenv(
                "ANNEALING_INITIAL_TEMPERATURE", repr(sys.float_info.max)
            ),
            "final_temperature": os.getenv("ANNEALING_FINAL_TEMPERATURE", "1e-10"),
            "cooling": os.getenv("ANNEALING_COOLING", "0.05"),
            "trials_per_level": os.getenv("ANNEALING_TRIALS_PER_LEVEL", "100"),
            "deadline": os.getenv("ANNEALING_DEADLINE", "10"),
        })

    def to_yaml(self, save_path: Path) -> None:
        """
        Save configuration to YAML file.

        Args:
            save_path: Path where to save the configuration
        """
        with open(save_path, 'w') as f:
            yaml.dump({"annealing": self.to_dict()}, f, default_flow_style=False)

        logger.info(f"Saved configuration to {save_path}")


@dataclass
class LevelHistory:
    """
    Statistics for a single temperature level.

    Kept in memory by the engine for the most recent search only.
    reference_energy is the energy of the last accepted state when the level
    ends; elapsed is measured from the start of the search to the level start.
    """

    level: int
    temperature: float
    reference_energy: float
    accepted: int = 0
    neutral: int = 0
    rejected: int = 0
    invalid: int = 0
    elapsed: float = 0.0

    @property
    def trials(self) -> int:
        """Total number of trials run in this level."""
        return self.accepted + self.neutral + self.rejected + self.invalid

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "level": self.level,
            "temperature": self.temperature,
            "reference_energy": self.reference_energy,
            "accepted": self.accepted,
            "neutral": self.neutral,
            "rejected": self.rejected,
            "invalid": self.invalid,
            "elapsed": self.elapsed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LevelHistory":
        """Create instance from dictionary."""
        return cls(**data)
