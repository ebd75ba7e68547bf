"""
Knapsack fitness functions.

This module provides the fitness function used to score packings: total
value when the packing fits, zero otherwise.
"""

from src.knapsack.fitness.base import (
    FitnessFunction,
    FitnessMetrics
)

from src.knapsack.fitness.value import (
    KnapsackValueFitness,
    KnapsackMetrics,
    score_packing,
    evaluate
)

__all__ = [
    # Base classes
    "FitnessFunction",
    "FitnessMetrics",

    # Total value
    "KnapsackValueFitness",
    "KnapsackMetrics",
    "score_packing",
    "evaluate",
]
