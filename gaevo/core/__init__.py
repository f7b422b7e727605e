"""
Core functionality for gaevo.

This module contains configuration management, logging setup, and custom exceptions.
"""

from .config import Config, get_config, set_config
from .exceptions import (
    GAEvoException,
    ConfigurationError,
    ValidationError,
    EmptyPopulationError,
    InvalidGenomeError,
    DegenerateFitnessError,
)
from .logging import setup_logging, get_logger

__all__ = [
    "Config",
    "get_config",
    "set_config",
    "GAEvoException",
    "ConfigurationError",
    "ValidationError",
    "EmptyPopulationError",
    "InvalidGenomeError",
    "DegenerateFitnessError",
    "setup_logging",
    "get_logger"
]
