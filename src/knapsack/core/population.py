"""
Population Management for the Knapsack Optimizer.

This module manages populations of individuals (boolean gene vectors)
throughout the evolution process, including randomized greedy
initialization, ranking, statistics and diversity tracking.
"""

from typing import List, Optional, Dict, Any
from dataclasses import dataclass
from datetime import datetime
import random
import statistics

import numpy as np

from src.knapsack.core.catalog import ItemCatalog


@dataclass
class Individual:
    """
    Represents a candidate packing.

    ``genes[i]`` is True when catalog item ``i`` is packed. The fitness is a
    cached value that is only meaningful while ``evaluated`` is True.
    """

    genes: List[bool]
    fitness: int = 0
    evaluated: bool = False
    age: int = 0

    @classmethod
    def empty(cls, length: int) -> "Individual":
        """Create an individual with no items packed."""
        return cls(genes=[False] * length)

    def __len__(self) -> int:
        return len(self.genes)

    def update_fitness(self, fitness: int) -> None:
        """Update the individual's cached fitness."""
        self.fitness = fitness
        self.evaluated = True

    def invalidate(self) -> None:
        """Mark the cached fitness stale after the genes changed."""
        self.evaluated = False

    def flip(self, index: int) -> None:
        """Toggle the inclusion of one item."""
        self.genes[index] = not self.genes[index]
        self.invalidate()

    def selected_indices(self) -> List[int]:
        """Indices of the packed items."""
        return [i for i, gene in enumerate(self.genes) if gene]

    def increment_age(self) -> None:
        """Increment the individual's age by one generation."""
        self.age += 1

    def clone(self) -> "Individual":
        """Create an independent copy of this individual."""
        return Individual(
            genes=list(self.genes),
            fitness=self.fitness,
            evaluated=self.evaluated,
            age=self.age
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert individual to dictionary representation."""
        return {
            "genes": [int(gene) for gene in self.genes],
            "selected_items": self.selected_indices(),
            "fitness": self.fitness,
            "evaluated": self.evaluated,
            "age": self.age
        }

    def __repr__(self) -> str:
        return (
            f"Individual(items={len(self.selected_indices())}/{len(self.genes)}, "
            f"fitness={self.fitness}, evaluated={self.evaluated})"
        )


def greedy_individual(catalog: ItemCatalog, rng: random.Random) -> Individual:
    """
    Build one individual by packing items in a random order.

    Items are visited in a shuffled order and packed whenever they still fit,
    so the result never exceeds the capacity. Fitness is left unevaluated.
    """
    order = list(range(len(catalog)))
    rng.shuffle(order)

    individual = Individual.empty(len(catalog))
    total_weight = 0
    for index in order:
        weight = catalog[index].weight
        if total_weight + weight <= catalog.capacity:
            individual.genes[index] = True
            total_weight += weight

    return individual


def initialize_population(size: int, catalog: ItemCatalog, rng: random.Random) -> List[Individual]:
    """Create ``size`` individuals with randomized greedy packing."""
    return [greedy_individual(catalog, rng) for _ in range(size)]


class Population:
    """
    Manages a population of individuals in the memetic algorithm.

    Handles initialization, ranking, best-individual tracking, statistics
    and diversity metrics.
    """

    def __init__(self, size: int, generation: int = 0):
        """Initialize an empty population of the given target size."""
        self.size = size
        self.individuals: List[Individual] = []
        self.generation = generation
        self.best_individual: Optional[Individual] = None
        self.diversity_metrics: Dict[str, float] = {}
        self.statistics: Dict[str, Any] = {}
        self.history: List[Dict[str, Any]] = []

    def __len__(self) -> int:
        return len(self.individuals)

    def __iter__(self):
        return iter(self.individuals)

    def __getitem__(self, index: int) -> Individual:
        return self.individuals[index]

    def initialize_greedy(self, catalog: ItemCatalog, rng: random.Random) -> None:
        """Fill the population with randomized greedy packings."""
        self.individuals = initialize_population(self.size, catalog, rng)

    def rank(self) -> List[Individual]:
        """Sort individuals by descending fitness and return them."""
        self.individuals.sort(key=lambda ind: ind.fitness, reverse=True)
        return self.individuals

    def best(self) -> Optional[Individual]:
        """Best individual of the current generation by cached fitness."""
        if not self.individuals:
            return None
        return max(self.individuals, key=lambda ind: ind.fitness)

    def sample(self, rng: random.Random) -> Individual:
        """Pick one individual uniformly at random (with replacement)."""
        return self.individuals[rng.randrange(len(self.individuals))]

    def replace_population(self, new_individuals: List[Individual]) -> None:
        """Replace current population with new individuals."""
        self.individuals = new_individuals

        self.generation += 1
        for ind in self.individuals:
            ind.increment_age()

    def update_best_individual(self) -> None:
        """Update the best individual seen so far across all generations."""
        evaluated = [ind for ind in self.individuals if ind.evaluated]
        if not evaluated:
            return

        best = max(evaluated, key=lambda x: x.fitness)

        if self.best_individual is None or best.fitness > self.best_individual.fitness:
            # Copy: the live individual keeps changing in later generations.
            self.best_individual = best.clone()

    def calculate_diversity(self) -> Dict[str, float]:
        """Calculate population diversity metrics."""
        if not self.individuals:
            return {}

        genes = np.array([ind.genes for ind in self.individuals], dtype=bool)

        unique_genomes = len({tuple(ind.genes) for ind in self.individuals})
        uniqueness_ratio = unique_genomes / len(self.individuals)

        # Mean pairwise Hamming distance, normalised by gene length
        n = len(genes)
        if n > 1 and genes.shape[1] > 0:
            ones = genes.sum(axis=0).astype(np.float64)
            pair_diffs = (ones * (n - ones)).sum()
            avg_distance = float(pair_diffs / (n * (n - 1) / 2) / genes.shape[1])
        else:
            avg_distance = 0.0

        self.diversity_metrics = {
            "uniqueness_ratio": uniqueness_ratio,
            "avg_hamming_distance": avg_distance,
            "unique_genomes": unique_genomes
        }

        return self.diversity_metrics

    def calculate_statistics(self) -> Dict[str, Any]:
        """Calculate population statistics."""
        fitnesses = [ind.fitness for ind in self.individuals if ind.evaluated]

        if not fitnesses:
            return {}

        stats = {
            "generation": self.generation,
            "population_size": len(self.individuals),
            "evaluated_count": len(fitnesses),
            "best_fitness": max(fitnesses),
            "worst_fitness": min(fitnesses),
            "avg_fitness": float(np.mean(fitnesses)),
            "median_fitness": statistics.median(fitnesses),
            "fitness_std": float(np.std(fitnesses)),
            "zero_fitness_count": sum(1 for f in fitnesses if f == 0)
        }

        ages = [ind.age for ind in self.individuals]
        stats["avg_age"] = float(np.mean(ages))
        stats["max_age"] = max(ages)

        selected = [len(ind.selected_indices()) for ind in self.individuals]
        stats["avg_items"] = float(np.mean(selected))

        self.statistics = stats
        return stats

    def record_history(self) -> None:
        """Record current population state in history."""
        stats = self.calculate_statistics()
        diversity = self.calculate_diversity()

        self.history.append({
            **stats,
            **diversity,
            "timestamp": datetime.now().isoformat()
        })

        # Limit history size
        max_history = 100
        if len(self.history) > max_history:
            self.history = self.history[-max_history:]
