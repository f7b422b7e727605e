"""
Genetic algorithm engine, selection strategies and the TSP candidate.
"""

from .candidate import GaCandidate
from .tsp import City, TspCandidate, tour_length, random_cities, load_cities
from .selection import (
    SelectionMethod,
    Tournament,
    RouletteWheel,
    tournament_selection,
    roulette_wheel_selection,
    cumulative_probabilities,
)
from .genetic_algorithm import GeneticAlgorithm, GenerationStats
from .runner import EvolutionRunner, RunSummary, build_selection_method

__all__ = [
    "GaCandidate",
    "City",
    "TspCandidate",
    "tour_length",
    "random_cities",
    "load_cities",
    "SelectionMethod",
    "Tournament",
    "RouletteWheel",
    "tournament_selection",
    "roulette_wheel_selection",
    "cumulative_probabilities",
    "GeneticAlgorithm",
    "GenerationStats",
    "EvolutionRunner",
    "RunSummary",
    "build_selection_method",
]
