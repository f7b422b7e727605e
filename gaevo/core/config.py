"""
Configuration management for gaevo.

Settings live in dataclass sections that can be overridden from a JSON file.
A handful of run-level knobs (seed, log level, population size) can also be
set from environment variables or a .env file.
"""

import os
import json
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import asdict, dataclass
from dotenv import load_dotenv

from .exceptions import ConfigurationError
from .logging import get_logger


SELECTION_METHODS = ("tournament", "roulette")


@dataclass
class ProblemConfig:
    """Configuration for the TSP instance handed to the engine."""
    num_cities: int = 25
    width: float = 100.0
    height: float = 100.0
    cities_file: Optional[str] = None


@dataclass
class EvolutionConfig:
    """Configuration for the genetic algorithm and its driver loop."""
    population_size: int = 100
    mutation_rate: float = 0.01
    selection_fraction: float = 0.5
    elitism_fraction: float = 0.05
    selection_method: str = "tournament"
    tournament_size: int = 5
    tournament_probability: float = 0.8

    # Driver loop
    max_generations: int = 500
    patience: int = 0
    min_improvement: float = 0.0
    log_interval: int = 25
    seed: Optional[int] = None


@dataclass
class LoggingConfig:
    """Configuration for log output."""
    level: str = "INFO"
    log_file: str = "logs/gaevo.log"
    enable_file: bool = True


class Config:
    """
    Main configuration class for gaevo.

    Sections are populated from their dataclass defaults, then from an optional
    JSON file, then from environment variables.
    """

    ENV_OVERRIDES = {
        "GAEVO_SEED": ("evolution", "seed", int),
        "GAEVO_POPULATION_SIZE": ("evolution", "population_size", int),
        "GAEVO_LOG_LEVEL": ("logging", "level", str),
    }

    def __init__(self, config_file: Optional[Path] = None, env_file: Optional[Path] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to JSON configuration file
            env_file: Path to .env file with GAEVO_* overrides
        """
        self.logger = get_logger(__name__)

        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        self.problem = ProblemConfig()
        self.evolution = EvolutionConfig()
        self.logging = LoggingConfig()

        if config_file:
            config_file = Path(config_file)
            if not config_file.exists():
                raise ConfigurationError(f"Config file not found: {config_file}")
            self._load_from_file(config_file)

        self._load_env_overrides()

        self.validate()

        self.logger.debug("Configuration loaded successfully")

    def _load_from_file(self, config_file: Path):
        """Load configuration from JSON file."""
        try:
            with open(config_file, 'r') as f:
                config_data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Failed to load config file {config_file}: {str(e)}")

        for section_name, section_data in config_data.items():
            section = self._section(section_name)
            if section is None or not isinstance(section_data, dict):
                self.logger.warning(f"Ignoring unknown config section: {section_name}")
                continue
            for key, value in section_data.items():
                if hasattr(section, key):
                    setattr(section, key, value)
                else:
                    self.logger.warning(f"Ignoring unknown config key: {section_name}.{key}")

        self.logger.info(f"Loaded configuration from {config_file}")

    def _section(self, name: str) -> Optional[Any]:
        if name in ("problem", "evolution", "logging"):
            return getattr(self, name)
        return None

    def _load_env_overrides(self):
        """Apply GAEVO_* environment variables on top of file settings."""
        for env_name, (section_name, key, cast) in self.ENV_OVERRIDES.items():
            raw = os.getenv(env_name)
            if raw is None or raw == "":
                continue
            try:
                value = cast(raw)
            except ValueError:
                raise ConfigurationError(f"Invalid value for {env_name}: {raw!r}")
            setattr(self._section(section_name), key, value)
            self.logger.debug(f"{section_name}.{key} overridden from {env_name}")

    def validate(self):
        """Validate configuration settings."""
        errors = []
        evolution = self.evolution
        problem = self.problem

        if problem.cities_file is None and problem.num_cities < 2:
            errors.append("Number of cities must be at least 2")

        if problem.width <= 0 or problem.height <= 0:
            errors.append("Map width and height must be positive")

        if evolution.population_size <= 0:
            errors.append("Population size must be positive and greater than 0")

        if not 0 <= evolution.mutation_rate <= 1:
            errors.append("Mutation rate must be between 0 and 1")

        if not 0 < evolution.selection_fraction <= 1:
            errors.append("Selection fraction must be in (0, 1]")

        if not 0 <= evolution.elitism_fraction <= 1:
            errors.append("Elitism fraction must be between 0 and 1")

        if evolution.elitism_fraction > evolution.selection_fraction:
            errors.append("Elitism fraction cannot exceed selection fraction")

        if (evolution.population_size > 0 and 0 < evolution.selection_fraction <= 1
                and int(evolution.population_size * evolution.selection_fraction) < 1):
            errors.append(
                f"Selection fraction {evolution.selection_fraction} of population "
                f"{evolution.population_size} rounds down to 0 parents"
            )

        if evolution.selection_method not in SELECTION_METHODS:
            errors.append(f"Selection method must be one of {SELECTION_METHODS}")

        if evolution.tournament_size < 1:
            errors.append("Tournament size must be at least 1")

        if not 0 <= evolution.tournament_probability <= 1:
            errors.append("Tournament probability must be between 0 and 1")

        if evolution.max_generations <= 0:
            errors.append("Max generations must be positive and greater than 0")

        if evolution.patience < 0:
            errors.append("Patience cannot be negative")

        if evolution.log_interval <= 0:
            errors.append("Log interval must be positive and greater than 0")

        if errors:
            raise ConfigurationError("Configuration validation failed", details=errors)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "problem": asdict(self.problem),
            "evolution": asdict(self.evolution),
            "logging": asdict(self.logging),
        }

    def save(self, config_file: Path):
        """Save configuration to JSON file."""
        try:
            config_file.parent.mkdir(parents=True, exist_ok=True)
            with open(config_file, 'w') as f:
                json.dump(self.to_dict(), f, indent=2)
        except OSError as e:
            raise ConfigurationError(f"Failed to save config file {config_file}: {str(e)}")
        self.logger.info(f"Configuration saved to {config_file}")

    def __repr__(self) -> str:
        return (
            f"Config(cities={self.problem.cities_file or self.problem.num_cities}, "
            f"population={self.evolution.population_size}, "
            f"selection={self.evolution.selection_method})"
        )


# Global configuration instance
_config: Optional[Config] = None


def get_config() -> Config:
    """
    Get the global configuration instance.

    Returns:
        Global configuration instance
    """
    global _config
    if _config is None:
        _config = Config()
    return _config


def set_config(config: Optional[Config]):
    """
    Set the global configuration instance.

    Args:
        config: Configuration instance to set, or None to reset it
    """
    global _config
    _config = config
