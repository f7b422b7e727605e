"""
Headless driver for the genetic algorithm.

Steps an engine for a number of generations, keeps the per-generation
statistics and stops early once the best fitness stops improving.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from ..core.config import EvolutionConfig
from ..core.exceptions import ConfigurationError
from ..core.logging import get_logger
from .genetic_algorithm import GenerationStats, GeneticAlgorithm
from .selection import RouletteWheel, SelectionMethod, Tournament

logger = get_logger(__name__)


@dataclass
class RunSummary:
    """Outcome of an evolution run."""

    best: Any
    best_fitness: float
    generations: int
    history: List[GenerationStats] = field(default_factory=list)
    stopped_early: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "best_fitness": self.best_fitness,
            "generations": self.generations,
            "stopped_early": self.stopped_early,
            "fitness_history": [s.best_fitness for s in self.history],
            "mean_history": [s.mean_fitness for s in self.history],
            "std_history": [s.std_deviation for s in self.history],
        }


def build_selection_method(config: EvolutionConfig) -> SelectionMethod:
    """Map the configured selection method name onto a ``SelectionMethod``."""
    if config.selection_method == "tournament":
        return Tournament(k=config.tournament_size, probability=config.tournament_probability)
    if config.selection_method == "roulette":
        return RouletteWheel()
    raise ConfigurationError(f"Unknown selection method: {config.selection_method}")


class EvolutionRunner:
    """
    Run a ``GeneticAlgorithm`` for up to ``max_generations`` generations.

    With ``patience > 0`` the run stops once the best fitness has improved by
    no more than ``min_improvement`` over the last ``patience`` generations.
    """

    def __init__(
        self,
        engine: GeneticAlgorithm,
        method: SelectionMethod,
        max_generations: int = 500,
        patience: int = 0,
        min_improvement: float = 0.0,
        log_interval: int = 25,
        on_generation: Optional[Callable[[int, GenerationStats], None]] = None
    ):
        if max_generations <= 0:
            raise ConfigurationError("Max generations must be positive and greater than 0")
        if patience < 0:
            raise ConfigurationError("Patience cannot be negative")
        if log_interval <= 0:
            raise ConfigurationError("Log interval must be positive and greater than 0")

        self.engine = engine
        self.method = method
        self.max_generations = max_generations
        self.patience = patience
        self.min_improvement = min_improvement
        self.log_interval = log_interval
        self.on_generation = on_generation
        self.history: List[GenerationStats] = []

    @classmethod
    def from_config(
        cls,
        engine: GeneticAlgorithm,
        config: EvolutionConfig,
        on_generation: Optional[Callable[[int, GenerationStats], None]] = None
    ) -> "EvolutionRunner":
        return cls(
            engine,
            build_selection_method(config),
            max_generations=config.max_generations,
            patience=config.patience,
            min_improvement=config.min_improvement,
            log_interval=config.log_interval,
            on_generation=on_generation,
        )

    def run(self) -> RunSummary:
        """Evolve until the generation budget runs out or progress stalls."""
        logger.info(
            f"Starting evolution: max_generations={self.max_generations}, "
            f"method={self.method}"
        )

        self.history = []
        stopped_early = False
        for _ in range(self.max_generations):
            stats = self.engine.step(self.method)
            self.history.append(stats)
            generation = self.engine.generation

            if self.on_generation is not None:
                self.on_generation(generation, stats)

            if generation % self.log_interval == 0:
                self._log_progress(generation, stats)

            if self._should_stop_early():
                logger.info(f"Early stopping at generation {generation}")
                stopped_early = True
                break

        best = self.engine.best()
        summary = RunSummary(
            best=best,
            best_fitness=best.fitness,
            generations=len(self.history),
            history=list(self.history),
            stopped_early=stopped_early,
        )
        logger.info(
            f"Evolution finished after {summary.generations} generations, "
            f"best fitness {summary.best_fitness:.4f}",
            extra={"extra_fields": summary.to_dict()}
        )
        return summary

    def _log_progress(self, generation: int, stats: GenerationStats) -> None:
        logger.info(
            f"Generation {generation}: "
            f"Best={stats.best_fitness:.4f}, "
            f"Mean={stats.mean_fitness:.4f}, "
            f"Diversity={stats.std_deviation:.4f}"
        )

    def _should_stop_early(self) -> bool:
        if self.patience == 0 or len(self.history) <= self.patience:
            return False

        recent_improvement = (
            self.history[-1].best_fitness -
            self.history[-1 - self.patience].best_fitness
        )
        return recent_improvement <= self.min_improvement
