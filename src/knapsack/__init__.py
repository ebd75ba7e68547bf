"""
Memetic optimizer for the 0/1 knapsack problem.

A genetic algorithm (randomized greedy initialization, three-point crossover,
single-flip mutation) combined with a greedy value-density hill-climbing pass
applied to every offspring.
"""

from src.knapsack.core import (
    MemeticConfig,
    ProblemConfig,
    EvolutionParameters,
    LoggingConfig,
    create_default_config,
    create_test_config,
    Item,
    ItemCatalog,
    generate_catalog,
    Individual,
    Population,
    initialize_population,
    crossover,
    mutate,
    improve,
    MemeticEngine,
    EvolutionResult,
    GenerationReport
)
from src.knapsack.fitness import (
    FitnessFunction,
    KnapsackValueFitness,
    evaluate
)

__version__ = "1.0.0"

__all__ = [
    # Configuration
    "MemeticConfig",
    "ProblemConfig",
    "EvolutionParameters",
    "LoggingConfig",
    "create_default_config",
    "create_test_config",
    # Problem instance
    "Item",
    "ItemCatalog",
    "generate_catalog",
    # Population
    "Individual",
    "Population",
    "initialize_population",
    # Operators
    "crossover",
    "mutate",
    "improve",
    # Fitness
    "FitnessFunction",
    "KnapsackValueFitness",
    "evaluate",
    # Engine
    "MemeticEngine",
    "EvolutionResult",
    "GenerationReport",
]
