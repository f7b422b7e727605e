"""
gaevo - Genetic Algorithm Engine for the Traveling Salesman Problem

Evolves a population of candidate tours with tournament or roulette-wheel
selection, order crossover, swap mutation and elitism.
"""

__version__ = "0.1.0"

from .core.config import Config
from .core.logging import setup_logging
from .genetic import (
    City,
    TspCandidate,
    GeneticAlgorithm,
    GenerationStats,
    Tournament,
    RouletteWheel,
    EvolutionRunner,
)

__all__ = [
    "Config",
    "setup_logging",
    "City",
    "TspCandidate",
    "GeneticAlgorithm",
    "GenerationStats",
    "Tournament",
    "RouletteWheel",
    "EvolutionRunner",
]
