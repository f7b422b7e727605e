"""
Generational genetic algorithm with elitism.

The engine owns a fixed-size population. Each ``step`` selects parents,
breeds a full replacement generation from them and carries the best parents
over unchanged. Drivers advance it one generation at a time and read back
``GenerationStats`` for display.
"""

import copy
import random
from typing import Generic, List, NamedTuple, Optional, Sequence, Tuple, TypeVar

import numpy as np

from ..core.logging import get_logger
from ..utils.validators import (
    validate_fraction,
    validate_population,
    validate_targets,
)
from .candidate import GaCandidate
from .selection import SelectionMethod, choose, cumulative_probabilities, select

logger = get_logger(__name__)

T = TypeVar("T", bound=GaCandidate)


class GenerationStats(NamedTuple):
    """Progress signal of one generation."""
    best_fitness: float
    std_deviation: float
    mean_fitness: float


class GeneticAlgorithm(Generic[T]):
    """
    Genetic algorithm over any ``GaCandidate`` population.

    Configuration is fixed at construction. ``selection_target`` and
    ``elitism_target`` are derived from their fractions by truncation and must
    satisfy ``elitism_target <= selection_target <= population_size``.

    Diversity (standard deviation of fitness) is reported but never used to
    adapt mutation rate or selection pressure.
    """

    def __init__(
        self,
        population: Sequence[T],
        mutation_rate: float,
        selection_fraction: float,
        elitism_fraction: float,
        rng: Optional[random.Random] = None
    ):
        """
        Initialize the engine.

        Args:
            population: Initial, already evaluated candidates
            mutation_rate: Per-gene mutation probability in [0, 1]
            selection_fraction: Share of the population selected as parents
            elitism_fraction: Share of the population carried over unchanged
            rng: Random source; seed it for reproducible runs

        Raises:
            EmptyPopulationError: If the population is empty
            ConfigurationError: If rates or derived targets are invalid
        """
        validate_population(population)
        validate_fraction("mutation_rate", mutation_rate)
        validate_fraction("selection_fraction", selection_fraction, allow_zero=False)
        validate_fraction("elitism_fraction", elitism_fraction)

        self._population: List[T] = list(population)
        self._population_size = len(self._population)
        self._mutation_rate = float(mutation_rate)
        self._selection_target = int(self._population_size * selection_fraction)
        self._elitism_target = int(self._population_size * elitism_fraction)
        validate_targets(self._population_size, self._selection_target, self._elitism_target)

        self.rng = rng if rng is not None else random.Random()
        self.generation = 0

        logger.info(
            f"Genetic algorithm ready: population={self._population_size}, "
            f"parents={self._selection_target}, elites={self._elitism_target}, "
            f"mutation_rate={self._mutation_rate}"
        )

    @property
    def population(self) -> List[T]:
        return list(self._population)

    @property
    def population_size(self) -> int:
        return self._population_size

    @property
    def mutation_rate(self) -> float:
        return self._mutation_rate

    @property
    def selection_target(self) -> int:
        return self._selection_target

    @property
    def elitism_target(self) -> int:
        return self._elitism_target

    def select(self, method: SelectionMethod) -> List[T]:
        """Choose ``selection_target`` parents, the current elites among them."""
        return select(
            self._population,
            method,
            self._selection_target,
            self._elitism_target,
            rng=self.rng
        )

    def repopulate(self, parents: Sequence[T]) -> None:
        """
        Replace the population with children of ``parents`` plus the elites.

        Breeding pairs are drawn fitness-proportionally from ``parents``
        whichever method selected them. Each child is crossed over, mutated
        and re-evaluated. The ``elitism_target`` best parents are then cloned
        into the new generation unchanged.

        Raises:
            EmptyPopulationError: If there are fewer parents than elites to keep
            DegenerateFitnessError: If the parents' total fitness is zero
        """
        validate_population(parents, min_size=self._elitism_target)
        parents = list(parents)
        new_population: List[T] = []

        offspring = self._population_size - self._elitism_target
        if offspring > 0:
            cumulative = cumulative_probabilities(parents)
            for _ in range(offspring):
                first = choose(parents, cumulative, self.rng.random())
                second = choose(parents, cumulative, self.rng.random())
                child = first.crossover(second, self.rng)
                child.mutate(self._mutation_rate, self.rng)
                child.recompute_fitness()
                new_population.append(child)

        for elite in self._rank_elites(parents)[:self._elitism_target]:
            new_population.append(elite.clone())

        self._population = new_population

    @staticmethod
    def _rank_elites(parents: Sequence[T]) -> List[T]:
        # The same candidate can be selected more than once; rank each
        # distinct object ahead of repeats so one elite cannot crowd out another.
        distinct: List[T] = []
        repeats: List[T] = []
        seen = set()
        for parent in sorted(parents, key=lambda p: p.fitness, reverse=True):
            if id(parent) in seen:
                repeats.append(parent)
            else:
                seen.add(id(parent))
                distinct.append(parent)
        return distinct + repeats

    def step(self, method: SelectionMethod) -> GenerationStats:
        """
        Advance one generation.

        Returns:
            ``(best_fitness, std_deviation, mean_fitness)`` of the new population
        """
        parents = self.select(method)
        self.repopulate(parents)
        self.generation += 1

        stats = self.statistics()
        logger.debug(
            f"Generation {self.generation}: best={stats.best_fitness:.4f}, "
            f"std={stats.std_deviation:.4f}, mean={stats.mean_fitness:.4f}"
        )
        return stats

    def statistics(self) -> GenerationStats:
        """Best, population standard deviation and mean of current fitness."""
        fitness = np.array([c.fitness for c in self._population], dtype=np.float64)
        return GenerationStats(
            best_fitness=float(fitness.max()),
            std_deviation=float(fitness.std()),
            mean_fitness=float(fitness.mean()),
        )

    def diversity(self) -> Tuple[float, float]:
        """Standard deviation and mean of the population's fitness."""
        stats = self.statistics()
        return stats.std_deviation, stats.mean_fitness

    def best(self) -> T:
        """Copy of the fittest candidate in the current population."""
        return max(self._population, key=lambda c: c.fitness).clone()

    def clone(self) -> "GeneticAlgorithm[T]":
        """Independent engine with a copied population and random state."""
        twin = copy.copy(self)
        twin._population = [c.clone() for c in self._population]
        twin.rng = random.Random()
        twin.rng.setstate(self.rng.getstate())
        return twin

    def __repr__(self) -> str:
        return (
            f"GeneticAlgorithm(population_size={self._population_size}, "
            f"selection_target={self._selection_target}, "
            f"elitism_target={self._elitism_target}, generation={self.generation})"
        )
