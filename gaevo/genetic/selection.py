"""
Parent selection strategies.

Both strategies are plain functions of the population and an injected random
source, so a seeded ``random.Random`` reproduces the same parents. The top
``elitism_count`` candidates are always seeded into the parent list first and
only the remaining slots are filled by the strategy itself.
"""

import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

import numpy as np

from ..core.exceptions import ConfigurationError, DegenerateFitnessError
from ..utils.validators import validate_population
from .candidate import GaCandidate


@dataclass(frozen=True)
class Tournament:
    """Tournament selection over ``k`` contenders.

    The fittest contender wins with probability ``probability``; otherwise a
    random other contender wins, which keeps some pressure off pure greed.
    """
    k: int = 3
    probability: float = 0.8

    def __post_init__(self):
        if self.k < 1:
            raise ConfigurationError(f"Tournament size must be at least 1, got {self.k}")
        if not 0 <= self.probability <= 1:
            raise ConfigurationError(
                f"Tournament probability must be between 0 and 1, got {self.probability}"
            )


@dataclass(frozen=True)
class RouletteWheel:
    """Fitness-proportional selection."""


SelectionMethod = Union[Tournament, RouletteWheel]


def _rng(rng: Optional[random.Random]):
    return rng if rng is not None else random


def fittest(population: Sequence[GaCandidate], count: int) -> List[GaCandidate]:
    """The ``count`` highest-fitness candidates, best first."""
    if count <= 0:
        return []
    return sorted(population, key=lambda c: c.fitness, reverse=True)[:count]


def _check_counts(population: Sequence[GaCandidate], target_count: int, elitism_count: int):
    validate_population(population)
    if elitism_count < 0 or target_count < elitism_count:
        raise ConfigurationError(
            f"Elitism count {elitism_count} must be between 0 and target count {target_count}"
        )
    if elitism_count > len(population):
        raise ConfigurationError(
            f"Elitism count {elitism_count} exceeds population size {len(population)}"
        )


def cumulative_probabilities(candidates: Sequence[GaCandidate]) -> np.ndarray:
    """
    Cumulative fitness-proportional distribution over ``candidates``.

    Returns:
        Non-decreasing array whose last entry is 1.0 (up to rounding)

    Raises:
        DegenerateFitnessError: If total fitness is zero, negative or not finite
    """
    validate_population(candidates)
    fitness = np.array([c.fitness for c in candidates], dtype=np.float64)
    total = fitness.sum()
    if not np.isfinite(total) or total <= 0 or (fitness < 0).any():
        raise DegenerateFitnessError(
            "Fitness-proportional selection needs non-negative fitness with a positive total",
            details={"total_fitness": float(total)}
        )
    return np.cumsum(fitness / total)


def choose(candidates: Sequence[GaCandidate], cumulative: np.ndarray, value: float) -> GaCandidate:
    """Pick the first candidate whose cumulative bucket exceeds ``value``."""
    index = int(np.searchsorted(cumulative, value, side="right"))
    # value can land past the last bucket when the sum rounds below 1.0
    return candidates[min(index, len(candidates) - 1)]


def tournament_selection(
    population: Sequence[GaCandidate],
    target_count: int,
    elitism_count: int = 0,
    k: int = 3,
    probability: float = 0.8,
    rng: Optional[random.Random] = None
) -> List[GaCandidate]:
    """
    Select ``target_count`` parents by repeated tournaments.

    Each tournament draws ``min(k, len(population))`` distinct contenders.
    Tournaments are independent, so a candidate can be picked many times.

    Args:
        population: Candidates to choose from
        target_count: Total number of parents to return, elites included
        elitism_count: Number of top candidates seeded into the result
        k: Tournament size
        probability: Chance that the fittest contender wins
        rng: Random source

    Returns:
        Parents, elites first
    """
    _check_counts(population, target_count, elitism_count)
    rng = _rng(rng)

    population = list(population)
    parents = fittest(population, elitism_count)
    size = min(k, len(population))
    while len(parents) < target_count:
        # Contenders are positions, so a candidate listed twice is two contenders
        contenders = rng.sample(range(len(population)), size)
        winner = max(contenders, key=lambda i: population[i].fitness)
        if size == 1 or rng.random() < probability:
            parents.append(population[winner])
        else:
            parents.append(population[rng.choice([i for i in contenders if i != winner])])
    return parents


def roulette_wheel_selection(
    population: Sequence[GaCandidate],
    target_count: int,
    elitism_count: int = 0,
    rng: Optional[random.Random] = None
) -> List[GaCandidate]:
    """
    Select ``target_count`` parents with probability proportional to fitness.

    Returns:
        Parents, elites first

    Raises:
        DegenerateFitnessError: If the population's total fitness is zero
    """
    _check_counts(population, target_count, elitism_count)
    rng = _rng(rng)

    parents = fittest(population, elitism_count)
    if len(parents) < target_count:
        cumulative = cumulative_probabilities(population)
        while len(parents) < target_count:
            parents.append(choose(population, cumulative, rng.random()))
    return parents


def select(
    population: Sequence[GaCandidate],
    method: SelectionMethod,
    target_count: int,
    elitism_count: int = 0,
    rng: Optional[random.Random] = None
) -> List[GaCandidate]:
    """Dispatch to the strategy described by ``method``."""
    if isinstance(method, Tournament):
        return tournament_selection(
            population, target_count, elitism_count,
            k=method.k, probability=method.probability, rng=rng
        )
    if isinstance(method, RouletteWheel):
        return roulette_wheel_selection(population, target_count, elitism_count, rng=rng)
    raise ConfigurationError(f"Unknown selection method: {method!r}")
