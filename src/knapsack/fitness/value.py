"""
Total-value fitness for the 0/1 knapsack.

A packing is scored by the summed value of its items when it fits in the
knapsack. Overweight packings are fully penalized with a score of zero.
"""

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from src.knapsack.core.catalog import ItemCatalog
from src.knapsack.core.population import Individual
from src.knapsack.fitness.base import FitnessFunction, FitnessMetrics


@dataclass
class KnapsackMetrics(FitnessMetrics):
    """Breakdown of a packing's value and weight."""
    total_value: int = 0
    total_weight: int = 0
    feasible: bool = True
    slack: int = 0


def score_packing(total_value: int, total_weight: int, capacity: int) -> int:
    """Fitness of a packing with the given totals."""
    if total_weight > capacity:
        return 0
    return total_value


class KnapsackValueFitness(FitnessFunction):
    """Scores a packing by its total value, or 0 when over capacity."""

    def totals(self, genes: Sequence[bool]):
        """Return ``(total_value, total_weight)`` of the selected items."""
        self._check_length(genes)
        mask = np.asarray(genes, dtype=bool)
        return int(self.catalog.values[mask].sum()), int(self.catalog.weights[mask].sum())

    def evaluate(self, genes: Sequence[bool]) -> int:
        total_value, total_weight = self.totals(genes)
        return score_packing(total_value, total_weight, self.catalog.capacity)

    def calculate_metrics(self, genes: Sequence[bool]) -> KnapsackMetrics:
        total_value, total_weight = self.totals(genes)
        capacity = self.catalog.capacity
        return KnapsackMetrics(
            score=score_packing(total_value, total_weight, capacity),
            total_value=total_value,
            total_weight=total_weight,
            feasible=total_weight <= capacity,
            slack=capacity - total_weight,
            details={
                "selected_items": int(np.count_nonzero(genes)),
                "capacity": capacity,
            }
        )

    def evaluate_individual(self, individual: Individual) -> int:
        """Score an individual and store the result in its cached fitness."""
        fitness = self.evaluate(individual.genes)
        individual.update_fitness(fitness)
        return fitness


def evaluate(individual: Individual, catalog: ItemCatalog) -> int:
    """
    Evaluate an individual against a catalog.

    The fitness is written into the individual and also returned.
    """
    return KnapsackValueFitness(catalog).evaluate_individual(individual)
