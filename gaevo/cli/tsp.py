"""
TSP run CLI for gaevo.

Builds a city map and a random initial population, then evolves it with the
genetic algorithm and prints the best tour found.
"""

import argparse
import random
from pathlib import Path
from typing import Optional

from ..core.config import Config, SELECTION_METHODS
from ..core.exceptions import GAEvoException
from ..core.logging import (
    generate_correlation_id,
    get_logger,
    set_correlation_id,
    setup_logging,
)
from ..genetic import (
    EvolutionRunner,
    GeneticAlgorithm,
    RunSummary,
    TspCandidate,
    load_cities,
    random_cities,
)

# CLI flag dest -> (config section, config key)
OVERRIDES = {
    "cities": ("problem", "num_cities"),
    "cities_file": ("problem", "cities_file"),
    "width": ("problem", "width"),
    "height": ("problem", "height"),
    "population_size": ("evolution", "population_size"),
    "mutation_rate": ("evolution", "mutation_rate"),
    "selection_fraction": ("evolution", "selection_fraction"),
    "elitism_fraction": ("evolution", "elitism_fraction"),
    "selection": ("evolution", "selection_method"),
    "tournament_size": ("evolution", "tournament_size"),
    "tournament_probability": ("evolution", "tournament_probability"),
    "max_generations": ("evolution", "max_generations"),
    "patience": ("evolution", "patience"),
    "min_improvement": ("evolution", "min_improvement"),
    "log_interval": ("evolution", "log_interval"),
    "seed": ("evolution", "seed"),
    "log_level": ("logging", "level"),
}


def _load_config(parsed_args: argparse.Namespace) -> Config:
    config = Config(config_file=parsed_args.config, env_file=parsed_args.env_file)
    for dest, (section, key) in OVERRIDES.items():
        value = getattr(parsed_args, dest)
        if value is not None:
            setattr(getattr(config, section), key, str(value) if dest == "cities_file" else value)
    if parsed_args.cities is not None:
        config.problem.cities_file = None
    if parsed_args.no_log_file:
        config.logging.enable_file = False
    config.validate()
    return config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gaevo run",
        description="Evolve a short tour through a set of cities",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 30 random cities, tournament selection
  gaevo run --cities 30 --max-generations 300 --seed 7

  # Cities from a CSV with x,y columns, roulette-wheel selection
  gaevo run --cities-file cities.csv --selection roulette --elitism-fraction 0.1
        """
    )

    # -- Configuration ------------------------------------
    config_group = parser.add_argument_group('Configuration')
    config_group.add_argument('--config', '-c', type=Path, help='Path to configuration file (JSON)')
    config_group.add_argument('--env-file', '-e', type=Path, help='Path to .env file with GAEVO_* overrides')

    # -- Problem ------------------------------------------
    problem_group = parser.add_argument_group('Problem')
    cities = problem_group.add_mutually_exclusive_group()
    cities.add_argument('--cities', type=int, help='Number of random cities')
    cities.add_argument('--cities-file', type=Path, help='CSV file with x,y columns')
    problem_group.add_argument('--width', type=float, help='Map width for random cities')
    problem_group.add_argument('--height', type=float, help='Map height for random cities')

    # -- Genetic Algorithm --------------------------------
    genetic_group = parser.add_argument_group('Genetic Algorithm')
    genetic_group.add_argument('--population-size', type=int, help='Population size')
    genetic_group.add_argument('--mutation-rate', type=float, help='Per-gene mutation probability')
    genetic_group.add_argument('--selection-fraction', type=float, help='Share of population selected as parents')
    genetic_group.add_argument('--elitism-fraction', type=float, help='Share of population kept unchanged')
    genetic_group.add_argument('--selection', choices=SELECTION_METHODS, help='Selection method')
    genetic_group.add_argument('--tournament-size', type=int, help='Contenders per tournament')
    genetic_group.add_argument('--tournament-probability', type=float, help='Chance the fittest contender wins')
    genetic_group.add_argument('--max-generations', type=int, help='Generation budget')
    genetic_group.add_argument('--patience', type=int, help='Stop after this many generations without improvement (0 disables)')
    genetic_group.add_argument('--min-improvement', type=float, help='Improvement that resets patience')
    genetic_group.add_argument('--log-interval', type=int, help='Log progress every N generations')
    genetic_group.add_argument('--seed', type=int, help='Random seed')

    # -- Output -------------------------------------------
    output_group = parser.add_argument_group('Output')
    output_group.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'], help='Logging level')
    output_group.add_argument('--no-log-file', action='store_true', help='Log to the console only')

    return parser


def tsp_command(args: Optional[list] = None) -> RunSummary:
    parser = build_parser()
    parsed_args = parser.parse_args(args)

    try:
        config = _load_config(parsed_args)
    except GAEvoException as e:
        parser.error(str(e))

    setup_logging(
        level=config.logging.level,
        log_file=Path(config.logging.log_file),
        enable_file=config.logging.enable_file
    )
    set_correlation_id(generate_correlation_id())
    logger = get_logger(__name__)
    logger.info(f"Configuration: {config}")

    problem = config.problem
    evolution = config.evolution
    rng = random.Random(evolution.seed)

    try:
        if problem.cities_file:
            cities = load_cities(problem.cities_file)
        else:
            cities = random_cities(problem.num_cities, problem.width, problem.height, rng)

        population = [TspCandidate.random(cities, rng) for _ in range(evolution.population_size)]
        engine = GeneticAlgorithm(
            population,
            mutation_rate=evolution.mutation_rate,
            selection_fraction=evolution.selection_fraction,
            elitism_fraction=evolution.elitism_fraction,
            rng=rng
        )
    except GAEvoException as e:
        logger.error(f"Could not set up the run: {e}")
        set_correlation_id(None)
        parser.error(str(e))

    summary = EvolutionRunner.from_config(engine, evolution).run()

    best = summary.best
    print("\n=== Evolution Completed ===")
    print(f"Cities: {len(cities)}")
    print(f"Generations: {summary.generations}{' (stopped early)' if summary.stopped_early else ''}")
    print(f"Best fitness: {summary.best_fitness:.4f}")
    print(f"Best tour length: {best.tour_length():.4f}")
    print(f"Best tour: {' -> '.join(str(i) for i in best.genome + best.genome[:1])}")

    set_correlation_id(None)
    return summary


if __name__ == "__main__":
    tsp_command()
