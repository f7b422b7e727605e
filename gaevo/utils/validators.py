"""
Validation utilities for gaevo.

These checks turn the engine's preconditions into exceptions raised at the
point where a caller hands over bad input.
"""

import math
from typing import Any, Sequence

from ..core.exceptions import (
    ConfigurationError,
    EmptyPopulationError,
    InvalidGenomeError,
)
from ..core.logging import get_logger


def validate_permutation(genome: Sequence[int], size: int) -> bool:
    """
    Validate that a genome visits every index in ``range(size)`` exactly once.

    Args:
        genome: Sequence of city indices
        size: Number of cities

    Returns:
        True if validation passes

    Raises:
        InvalidGenomeError: If the genome has the wrong length, duplicates or
            indices outside the city range
    """
    if size <= 0:
        raise InvalidGenomeError("Genome must cover at least one city")

    if len(genome) != size:
        raise InvalidGenomeError(
            f"Genome length {len(genome)} does not match city count {size}"
        )

    seen = set(genome)
    if len(seen) != size:
        duplicates = sorted({g for g in genome if genome.count(g) > 1})
        raise InvalidGenomeError("Genome contains duplicate cities", details=duplicates)

    missing = sorted(set(range(size)) - seen)
    if missing:
        raise InvalidGenomeError("Genome is missing cities", details=missing)

    return True


def validate_population(population: Sequence[Any], min_size: int = 1) -> bool:
    """
    Validate that a population holds at least ``min_size`` candidates.

    Raises:
        EmptyPopulationError: If the population is empty or too small
    """
    if population is None or len(population) < max(1, min_size):
        size = 0 if population is None else len(population)
        raise EmptyPopulationError(
            f"Population must have at least {max(1, min_size)} candidates, got {size}"
        )
    return True


def validate_fraction(name: str, value: float, allow_zero: bool = True) -> bool:
    """
    Validate that ``value`` is a probability-like fraction.

    Args:
        name: Parameter name used in the error message
        value: Value to check
        allow_zero: Whether 0 is an acceptable value

    Raises:
        ConfigurationError: If the value is not a finite number in range
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ConfigurationError(f"{name} must be a finite number, got {value!r}")

    lower_ok = value >= 0 if allow_zero else value > 0
    if not lower_ok or value > 1:
        bound = "[0, 1]" if allow_zero else "(0, 1]"
        raise ConfigurationError(f"{name} must be in {bound}, got {value}")
    return True


def validate_targets(population_size: int, selection_target: int, elitism_target: int) -> bool:
    """
    Validate ``elitism_target <= selection_target <= population_size``.

    Raises:
        ConfigurationError: If the derived parent counts are inconsistent
    """
    logger = get_logger(__name__)
    errors = []

    if selection_target < 1:
        errors.append(
            f"Selection target rounds down to {selection_target}; at least one parent is required"
        )
    if selection_target > population_size:
        errors.append(
            f"Selection target {selection_target} exceeds population size {population_size}"
        )
    if elitism_target > selection_target:
        errors.append(
            f"Elitism target {elitism_target} exceeds selection target {selection_target}"
        )

    if errors:
        raise ConfigurationError("Invalid genetic algorithm targets", details=errors)

    logger.debug(
        f"Targets valid: population={population_size}, "
        f"selection={selection_target}, elitism={elitism_target}"
    )
    return True
