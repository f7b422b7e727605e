"""
Candidate contract for the genetic algorithm engine.

The engine never looks inside a genome. Anything that exposes the members of
``GaCandidate`` can be evolved, whatever its genome representation.
"""

import random
from typing import Optional, Protocol, TypeVar, runtime_checkable


C = TypeVar("C", bound="GaCandidate")


@runtime_checkable
class GaCandidate(Protocol):
    """Capabilities the engine needs from an individual."""

    @property
    def fitness(self) -> float:
        """Cached fitness score, higher is better."""
        ...

    def recompute_fitness(self) -> float:
        """Recompute fitness from the current genome and return it."""
        ...

    def mutate(self, rate: float, rng: Optional[random.Random] = None) -> None:
        """Mutate the genome in place."""
        ...

    def crossover(self: C, other: C, rng: Optional[random.Random] = None) -> C:
        """Combine this candidate with ``other`` into a new child."""
        ...

    def clone(self: C) -> C:
        """Return an independent copy sharing immutable problem data."""
        ...
