"""
Traveling Salesman instantiation of the candidate contract.

A ``TspCandidate`` is a closed tour over a shared, read-only list of cities.
Its genome is a permutation of city indices and its fitness is
``1000 / tour_length``, so shorter tours score higher.
"""

from __future__ import annotations

import copy
import random
from pathlib import Path
from typing import List, NamedTuple, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from ..core.exceptions import DegenerateFitnessError, InvalidGenomeError, ValidationError
from ..core.logging import get_logger
from ..utils.validators import validate_permutation

logger = get_logger(__name__)

FITNESS_SCALE = 1000.0


class City(NamedTuple):
    """Immutable 2D coordinate."""
    x: float
    y: float


Cities = Sequence[City]


def _rng(rng: Optional[random.Random]):
    # Fall back to the module-level generator when no source is injected
    return rng if rng is not None else random


def tour_length(cities: Cities, genome: Sequence[int]) -> float:
    """
    Length of the closed tour visiting ``cities`` in ``genome`` order.

    The last city connects back to the first.
    """
    coords = np.asarray(cities, dtype=np.float64)[list(genome)]
    legs = coords - np.roll(coords, -1, axis=0)
    return float(np.sqrt((legs ** 2).sum(axis=1)).sum())


class TspCandidate:
    """
    A tour over a fixed set of cities.

    The fitness value is cached. ``recompute_fitness`` refreshes it
    explicitly; ``mutate`` marks it stale and the ``fitness`` accessor
    refreshes a stale cache before returning.
    """

    def __init__(
        self,
        cities: Cities,
        genome: Sequence[int],
        fitness: Optional[float] = None
    ):
        """
        Args:
            cities: Shared city list, referenced rather than copied
            genome: Visiting order, a permutation of ``range(len(cities))``
            fitness: Known fitness for ``genome``; computed on first read if omitted

        Raises:
            InvalidGenomeError: If ``genome`` is not a permutation of the cities
        """
        genome = list(genome)
        validate_permutation(genome, len(cities))
        self.cities = cities
        self.genome: List[int] = genome
        self._fitness: float = 0.0 if fitness is None else float(fitness)
        self._stale: bool = fitness is None

    @classmethod
    def random(cls, cities: Cities, rng: Optional[random.Random] = None) -> "TspCandidate":
        """Create a candidate with a uniformly random tour and evaluated fitness."""
        genome = list(range(len(cities)))
        _rng(rng).shuffle(genome)
        candidate = cls(cities, genome)
        candidate.recompute_fitness()
        return candidate

    @property
    def fitness(self) -> float:
        if self._stale:
            self.recompute_fitness()
        return self._fitness

    @property
    def is_stale(self) -> bool:
        """Whether the genome changed since fitness was last computed."""
        return self._stale

    def tour_length(self) -> float:
        return tour_length(self.cities, self.genome)

    def recompute_fitness(self, cities: Optional[Cities] = None) -> float:
        """
        Recompute and cache fitness from the current genome.

        Args:
            cities: Optional replacement city list of the same size

        Returns:
            The new fitness value

        Raises:
            DegenerateFitnessError: If the tour has zero length (one city, or
                all cities on the same point)
        """
        if cities is not None:
            validate_permutation(self.genome, len(cities))
            self.cities = cities

        length = self.tour_length()
        if length <= 0.0:
            raise DegenerateFitnessError(
                "Tour length is zero, fitness is undefined",
                details={"cities": len(self.cities)}
            )

        self._fitness = FITNESS_SCALE / length
        self._stale = False
        return self._fitness

    def mutate(self, rate: float, rng: Optional[random.Random] = None) -> None:
        """
        Swap mutation: each position is swapped with another random position
        with probability ``rate``. Fitness is left stale.
        """
        rng = _rng(rng)
        size = len(self.genome)
        if size < 2:
            return
        for i in range(size):
            if rng.random() < rate:
                # Draw from the size - 1 positions other than i
                j = rng.randrange(size - 1)
                if j >= i:
                    j += 1
                self.genome[i], self.genome[j] = self.genome[j], self.genome[i]
                self._stale = True

    def crossover(self, other: "TspCandidate", rng: Optional[random.Random] = None) -> "TspCandidate":
        """
        Order crossover (OX).

        The child keeps a random slice of this tour in place and fills the
        remaining positions with the other parent's cities in the order they
        appear after the slice, wrapping around. Every city appears once.

        Returns:
            A new candidate whose fitness has not been computed yet
        """
        size = len(self.genome)
        if len(other.genome) != size:
            raise InvalidGenomeError(
                f"Cannot cross tours of different sizes ({size} and {len(other.genome)})"
            )
        if size < 2:
            return TspCandidate(self.cities, self.genome)

        start, end = sorted(_rng(rng).sample(range(size + 1), 2))
        segment = self.genome[start:end]
        taken = set(segment)

        donor = [g for g in other.genome[end:] + other.genome[:end] if g not in taken]
        child: List[Optional[int]] = [None] * size
        child[start:end] = segment
        for position, gene in zip(list(range(end, size)) + list(range(start)), donor):
            child[position] = gene

        return TspCandidate(self.cities, child)

    def clone(self) -> "TspCandidate":
        twin = copy.copy(self)
        twin.genome = list(self.genome)
        return twin

    def route(self) -> List[City]:
        """Cities in visiting order."""
        return [self.cities[i] for i in self.genome]

    def __repr__(self) -> str:
        fitness = "stale" if self._stale else f"{self._fitness:.4f}"
        return f"TspCandidate(genome={self.genome}, fitness={fitness})"


def random_cities(
    count: int,
    width: float = 100.0,
    height: float = 100.0,
    rng: Optional[random.Random] = None
) -> Tuple[City, ...]:
    """Scatter ``count`` cities uniformly over a ``width`` x ``height`` map."""
    if count < 1:
        raise ValidationError(f"City count must be positive, got {count}")
    rng = _rng(rng)
    return tuple(City(rng.uniform(0, width), rng.uniform(0, height)) for _ in range(count))


def load_cities(path: Union[str, Path]) -> Tuple[City, ...]:
    """
    Load cities from a CSV file with ``x`` and ``y`` columns.

    Raises:
        ValidationError: If the file is missing, lacks the columns, or holds
            non-numeric or missing coordinates
    """
    path = Path(path)
    if not path.exists():
        raise ValidationError(f"Cities file does not exist: {path}")

    df = pd.read_csv(path)
    df.columns = [str(c).strip().lower() for c in df.columns]
    missing = {"x", "y"} - set(df.columns)
    if missing:
        raise ValidationError(f"Cities file is missing columns: {sorted(missing)}")

    coords = df[["x", "y"]].apply(pd.to_numeric, errors="coerce")
    if coords.isnull().values.any():
        bad_rows = coords.index[coords.isnull().any(axis=1)].tolist()
        raise ValidationError("Cities file has missing or non-numeric coordinates", details=bad_rows)
    if coords.empty:
        raise ValidationError(f"Cities file has no rows: {path}")

    cities = tuple(City(float(x), float(y)) for x, y in coords.itertuples(index=False))
    logger.info(f"Loaded {len(cities)} cities from {path}")
    return cities
