"""
Memetic Algorithm Engine for the Knapsack Optimizer.

This module implements the engine that orchestrates the generational loop:
evaluation, ranking, parent sampling, reproduction with local improvement,
and periodic best-fitness reporting.
"""

import random
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional
import logging

import logfire

from src.knapsack.core.catalog import ItemCatalog, generate_catalog
from src.knapsack.core.config import MemeticConfig
from src.knapsack.core.local_search import improve
from src.knapsack.core.operators import crossover, mutate
from src.knapsack.core.population import Individual, Population
from src.knapsack.fitness.base import FitnessFunction
from src.knapsack.fitness.value import KnapsackValueFitness


@dataclass
class GenerationReport:
    """Best fitness of the population after one reported generation."""

    generation: int
    best_fitness: int
    best_individual: Individual
    final: bool = False

    def format(self) -> str:
        return f"Generation {self.generation} - Best Fitness: {self.best_fitness}"


@dataclass
class EvolutionResult:
    """Outcome of a complete run."""

    best_individual: Individual
    best_fitness: int
    best_ever: Individual
    generations: int
    reports: List[GenerationReport] = field(default_factory=list)
    history: List[Dict[str, Any]] = field(default_factory=list)
    total_evaluations: int = 0
    runtime: timedelta = timedelta(0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "best_fitness": self.best_fitness,
            "best_individual": self.best_individual.to_dict(),
            "best_ever_fitness": self.best_ever.fitness,
            "generations": self.generations,
            "total_evaluations": self.total_evaluations,
            "runtime": str(self.runtime)
        }


ReportCallback = Callable[[GenerationReport], None]


class MemeticEngine:
    """
    Main engine for running memetic knapsack optimization.

    Parent selection is uniform over the whole ranked population; ranking only
    orders the population for reporting. All randomness comes from one
    ``random.Random`` so a seeded run is reproducible.
    """

    def __init__(
        self,
        config: MemeticConfig,
        catalog: Optional[ItemCatalog] = None,
        rng: Optional[random.Random] = None,
        fitness_function: Optional[FitnessFunction] = None,
        logger: Optional[logging.Logger] = None,
        on_report: Optional[ReportCallback] = None
    ):
        """
        Initialize the memetic engine.

        Args:
            config: Optimizer configuration
            catalog: Problem instance; generated from ``config.problem`` when omitted
            rng: Random source; seeded from ``config.random_seed`` when omitted
            fitness_function: Scorer for gene vectors (total value by default)
            logger: Optional logger instance
            on_report: Called with every generation report
        """
        config.validate_consistency()

        self.config = config
        self.logger = logger or self._setup_logger()
        self.on_report = on_report

        if rng is None:
            rng = random.Random(config.random_seed)
        self.rng = rng

        if catalog is None:
            catalog = generate_catalog(config.problem, self.rng)
        elif catalog.capacity != config.problem.capacity:
            raise ValueError(
                f"Catalog capacity ({catalog.capacity}) does not match configured "
                f"capacity ({config.problem.capacity})"
            )
        self.catalog = catalog

        self.fitness_function = fitness_function or KnapsackValueFitness(catalog)

        # State tracking
        self.current_population: Optional[Population] = None
        self.reports: List[GenerationReport] = []
        self.start_time: Optional[datetime] = None
        self.total_evaluations = 0

    def _setup_logger(self) -> logging.Logger:
        """Setup default logger."""
        logger = logging.getLogger("knapsack.engine")
        logger.setLevel(getattr(logging, self.config.logging.log_level))

        if not logger.hasHandlers():
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            logger.addHandler(handler)

        return logger

    def evolve(self, initial_population: Optional[Population] = None) -> EvolutionResult:
        """
        Run the generational loop.

        Args:
            initial_population: Optional pre-initialized population

        Returns:
            Best individual of the final population together with run statistics
        """
        evolution = self.config.evolution
        interval = self.config.logging.report_interval

        with logfire.span("Memetic Evolution",
                          population_size=evolution.population_size,
                          generations=evolution.generations,
                          items=len(self.catalog),
                          capacity=self.catalog.capacity):

            self.start_time = datetime.now()
            self.logger.info(
                f"Starting evolution with population size {evolution.population_size} "
                f"over {len(self.catalog)} items"
            )

            if initial_population is not None:
                self._check_population(initial_population)
                self.current_population = initial_population
            else:
                self.current_population = self._initialize_population()

            for generation in range(1, evolution.generations + 1):
                with logfire.span("Generation", generation=generation):
                    self._evaluate_population()

                    self.current_population.rank()
                    self.current_population.update_best_individual()
                    self.current_population.record_history()

                    if generation % interval == 0:
                        self._log_progress(generation)

                    self._create_next_generation()

                    if generation % interval == 0:
                        self._report(generation)

            final_report = self._report(evolution.generations, final=True)

            elapsed_time = datetime.now() - self.start_time
            self.logger.info(f"Evolution completed in {elapsed_time}")

            best_ever = self.current_population.best_individual
            if best_ever is None or final_report.best_fitness > best_ever.fitness:
                best_ever = final_report.best_individual.clone()

            return EvolutionResult(
                best_individual=final_report.best_individual,
                best_fitness=final_report.best_fitness,
                best_ever=best_ever,
                generations=evolution.generations,
                reports=list(self.reports),
                history=list(self.current_population.history),
                total_evaluations=self.total_evaluations,
                runtime=elapsed_time
            )

    def _check_population(self, population: Population) -> None:
        expected = len(self.catalog)
        for individual in population:
            if len(individual.genes) != expected:
                raise ValueError(
                    f"Individual has {len(individual.genes)} genes, catalog has {expected} items"
                )
        if len(population) != self.config.evolution.population_size:
            raise ValueError(
                f"Population holds {len(population)} individuals, "
                f"expected {self.config.evolution.population_size}"
            )

    def _initialize_population(self) -> Population:
        """Initialize the population with randomized greedy packings."""
        with logfire.span("Initialize Population"):
            population = Population(self.config.evolution.population_size, generation=0)
            population.initialize_greedy(self.catalog, self.rng)

            self.logger.info(f"Initialized population with {len(population)} individuals")
            return population

    def _evaluate_population(self) -> None:
        """Evaluate fitness for all individuals in the population."""
        with logfire.span("Evaluate Population", size=len(self.current_population)):
            for individual in self.current_population:
                individual.update_fitness(self.fitness_function.evaluate(individual.genes))

            self.total_evaluations += len(self.current_population)

    def _create_next_generation(self) -> None:
        """Create the next generation of individuals."""
        evolution = self.config.evolution

        with logfire.span("Create Next Generation"):
            new_individuals: List[Individual] = []

            while len(new_individuals) < evolution.population_size:
                parent1 = self.current_population.sample(self.rng)
                parent2 = self.current_population.sample(self.rng)

                if self.rng.random() < evolution.crossover_rate:
                    offspring = crossover(parent1, parent2, self.rng)
                else:
                    # Parents carry over; copies keep every slot a distinct object.
                    offspring = (parent1.clone(), parent2.clone())

                for child in offspring:
                    mutate(child, self.rng, evolution.mutation_rate)
                for child in offspring:
                    improve(child, self.catalog)

                new_individuals.extend(offspring)

            # Trim to exact population size
            new_individuals = new_individuals[:evolution.population_size]

            self.current_population.replace_population(new_individuals)

    def _report(self, generation: int, final: bool = False) -> GenerationReport:
        """Rank the current population and publish its best fitness."""
        ranked = self.current_population.rank()
        best = ranked[0]

        report = GenerationReport(
            generation=generation,
            best_fitness=best.fitness,
            best_individual=best,
            final=final
        )
        self.reports.append(report)

        if self.on_report is not None:
            self.on_report(report)

        return report

    def _log_progress(self, generation: int) -> None:
        """Log evolution progress."""
        stats = self.current_population.statistics
        diversity = self.current_population.diversity_metrics

        self.logger.info(
            f"Generation {generation}: "
            f"Best: {stats.get('best_fitness', 0)}, "
            f"Avg: {stats.get('avg_fitness', 0):.2f}, "
            f"Diversity: {diversity.get('uniqueness_ratio', 0):.2f}"
        )

        if self.config.logging.metrics_export:
            metrics = {
                "evolution_generation": generation,
                **{k: v for k, v in stats.items() if k != "generation"},
                **diversity
            }
            logfire.info("Evolution Progress", **metrics)
