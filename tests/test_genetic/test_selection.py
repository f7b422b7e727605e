"""
Tests for tournament and roulette-wheel selection.
"""

import dataclasses
import random
from collections import Counter

import numpy as np
import pytest

from gaevo.core.exceptions import ConfigurationError, DegenerateFitnessError, EmptyPopulationError
from gaevo.genetic.selection import (
    RouletteWheel,
    Tournament,
    choose,
    cumulative_probabilities,
    fittest,
    roulette_wheel_selection,
    select,
    tournament_selection,
)

pytestmark = [
    pytest.mark.unit,
    pytest.mark.genetic
]


class FixedCandidate:
    """Candidate with a fixed fitness, enough for selection tests."""

    def __init__(self, name, fitness):
        self.name = name
        self._fitness = fitness

    @property
    def fitness(self):
        return self._fitness

    def recompute_fitness(self):
        return self._fitness

    def mutate(self, rate, rng=None):
        pass

    def crossover(self, other, rng=None):
        return FixedCandidate(f"{self.name}{other.name}", (self.fitness + other.fitness) / 2)

    def clone(self):
        return FixedCandidate(self.name, self._fitness)

    def __repr__(self):
        return f"FixedCandidate({self.name}, {self._fitness})"


@pytest.fixture
def population():
    return [FixedCandidate(name, fitness) for name, fitness in
            [("a", 1.0), ("b", 5.0), ("c", 3.0), ("d", 2.0), ("e", 4.0)]]


def names(candidates):
    return [c.name for c in candidates]


class TestSelectionMethods:
    """Test the selection method descriptors."""

    def test_tournament_defaults(self):
        method = Tournament()
        assert method.k == 3
        assert method.probability == 0.8

    @pytest.mark.parametrize("kwargs", [{"k": 0}, {"probability": 1.5}, {"probability": -0.1}])
    def test_tournament_rejects_bad_values(self, kwargs):
        with pytest.raises(ConfigurationError):
            Tournament(**kwargs)

    def test_methods_are_immutable(self):
        method = Tournament(k=4)
        with pytest.raises(dataclasses.FrozenInstanceError):
            method.k = 5

    def test_unknown_method(self, population, rng):
        with pytest.raises(ConfigurationError, match="Unknown selection method"):
            select(population, "rank", 3, 0, rng)


class TestFittest:

    def test_best_first(self, population):
        assert names(fittest(population, 3)) == ["b", "e", "c"]

    def test_zero_count(self, population):
        assert fittest(population, 0) == []


class TestTournamentSelection:
    """Test tournament selection."""

    def test_returns_target_count(self, population, rng):
        parents = tournament_selection(population, 8, 0, k=3, rng=rng)
        assert len(parents) == 8
        assert all(p in population for p in parents)

    def test_elites_seeded_first(self, population, rng):
        parents = tournament_selection(population, 4, 2, k=2, rng=rng)
        assert len(parents) == 4
        assert names(parents[:2]) == ["b", "e"]

    def test_elites_fill_whole_target(self, population, rng):
        parents = tournament_selection(population, 2, 2, rng=rng)
        assert names(parents) == ["b", "e"]

    def test_certain_win_with_full_tournament(self, population, rng):
        parents = tournament_selection(population, 10, 0, k=5, probability=1.0, rng=rng)
        assert set(names(parents)) == {"b"}

    def test_never_fittest_when_probability_zero(self, rng):
        pair = [FixedCandidate("low", 1.0), FixedCandidate("high", 2.0)]
        parents = tournament_selection(pair, 20, 0, k=2, probability=0.0, rng=rng)
        assert set(names(parents)) == {"low"}

    def test_repeated_candidate_object(self, rng):
        only = FixedCandidate("only", 2.0)
        parents = tournament_selection([only, only], 20, 0, k=2, probability=0.0, rng=rng)
        assert len(parents) == 20
        assert all(p is only for p in parents)

    def test_accepts_any_sequence(self, population, rng):
        parents = tournament_selection(tuple(population), 6, 1, k=3, probability=0.5, rng=rng)
        assert len(parents) == 6
        assert parents[0].name == "b"

    def test_tournament_size_capped_at_population(self, population, rng):
        parents = tournament_selection(population, 5, 0, k=50, probability=1.0, rng=rng)
        assert set(names(parents)) == {"b"}

    def test_sampling_with_replacement_across_tournaments(self, rng):
        pair = [FixedCandidate("x", 1.0), FixedCandidate("y", 1.5)]
        parents = tournament_selection(pair, 6, 0, k=1, rng=rng)
        assert len(parents) == 6
        assert len(set(names(parents))) <= 2

    def test_reproducible_with_seed(self, population):
        first = tournament_selection(population, 10, 1, k=3, rng=random.Random(42))
        second = tournament_selection(population, 10, 1, k=3, rng=random.Random(42))
        assert names(first) == names(second)

    def test_empty_population(self, rng):
        with pytest.raises(EmptyPopulationError):
            tournament_selection([], 1, 0, rng=rng)

    def test_elitism_above_target(self, population, rng):
        with pytest.raises(ConfigurationError):
            tournament_selection(population, 2, 3, rng=rng)


class TestCumulativeProbabilities:
    """Test the shared fitness-proportional table."""

    def test_table_values(self):
        table = cumulative_probabilities(
            [FixedCandidate("a", 1.0), FixedCandidate("b", 1.0), FixedCandidate("c", 2.0)]
        )
        np.testing.assert_allclose(table, [0.25, 0.5, 1.0])

    def test_zero_total_fitness(self):
        with pytest.raises(DegenerateFitnessError):
            cumulative_probabilities([FixedCandidate("a", 0.0), FixedCandidate("b", 0.0)])

    def test_negative_fitness(self):
        with pytest.raises(DegenerateFitnessError):
            cumulative_probabilities([FixedCandidate("a", -1.0), FixedCandidate("b", 3.0)])

    def test_infinite_fitness(self):
        with pytest.raises(DegenerateFitnessError):
            cumulative_probabilities([FixedCandidate("a", float("inf"))])

    @pytest.mark.parametrize("value,expected", [
        (0.0, "a"), (0.2499, "a"), (0.25, "b"), (0.5, "c"), (0.9999, "c"), (1.0, "c")
    ])
    def test_choose_first_bucket_exceeding_value(self, value, expected):
        candidates = [FixedCandidate("a", 1.0), FixedCandidate("b", 1.0), FixedCandidate("c", 2.0)]
        table = cumulative_probabilities(candidates)
        assert choose(candidates, table, value).name == expected


class TestRouletteWheelSelection:
    """Test roulette-wheel selection."""

    def test_returns_target_count_with_elites(self, population, rng):
        parents = roulette_wheel_selection(population, 6, 1, rng=rng)
        assert len(parents) == 6
        assert parents[0].name == "b"

    def test_zero_fitness_never_chosen(self, rng):
        candidates = [FixedCandidate("dead", 0.0), FixedCandidate("alive", 1.0)]
        parents = roulette_wheel_selection(candidates, 25, 0, rng=rng)
        assert set(names(parents)) == {"alive"}

    def test_zero_total_fitness(self, rng):
        candidates = [FixedCandidate("a", 0.0), FixedCandidate("b", 0.0)]
        with pytest.raises(DegenerateFitnessError):
            roulette_wheel_selection(candidates, 2, 0, rng=rng)

    def test_elites_only_skip_the_wheel(self, rng):
        # The wheel is never spun, so zero total fitness is fine
        candidates = [FixedCandidate("a", 0.0), FixedCandidate("b", 0.0)]
        parents = roulette_wheel_selection(candidates, 1, 1, rng=rng)
        assert len(parents) == 1

    def test_selection_is_fitness_proportional(self):
        candidates = [FixedCandidate("light", 1.0), FixedCandidate("heavy", 3.0)]
        parents = roulette_wheel_selection(candidates, 10000, 0, rng=random.Random(7))
        share = Counter(names(parents))["heavy"] / len(parents)
        assert share == pytest.approx(0.75, abs=0.03)

    def test_reproducible_with_seed(self, population):
        first = roulette_wheel_selection(population, 10, 2, rng=random.Random(3))
        second = roulette_wheel_selection(population, 10, 2, rng=random.Random(3))
        assert names(first) == names(second)

    def test_dispatch_through_select(self, population):
        direct = roulette_wheel_selection(population, 5, 1, rng=random.Random(9))
        via_select = select(population, RouletteWheel(), 5, 1, rng=random.Random(9))
        assert names(direct) == names(via_select)

    def test_tournament_dispatch_through_select(self, population):
        direct = tournament_selection(population, 5, 1, k=2, probability=0.6, rng=random.Random(9))
        via_select = select(population, Tournament(k=2, probability=0.6), 5, 1, rng=random.Random(9))
        assert names(direct) == names(via_select)
