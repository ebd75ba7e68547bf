"""
Knapsack Core Module - Memetic Algorithm Components.

This module contains the core components of the optimizer: configuration,
the item catalog, population management, genetic operators, local
improvement and the evolution engine.
"""

from src.knapsack.core.config import (
    MemeticConfig,
    ProblemConfig,
    EvolutionParameters,
    LoggingConfig,
    create_default_config,
    create_test_config
)

from src.knapsack.core.catalog import (
    Item,
    ItemCatalog,
    generate_catalog
)

from src.knapsack.core.population import (
    Individual,
    Population,
    greedy_individual,
    initialize_population
)

from src.knapsack.core.operators import (
    crossover,
    draw_cut_points,
    mutate
)

from src.knapsack.core.local_search import improve

from src.knapsack.core.engine import (
    MemeticEngine,
    EvolutionResult,
    GenerationReport
)

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

    # Population management
    "Individual",
    "Population",
    "greedy_individual",
    "initialize_population",

    # Operators
    "crossover",
    "draw_cut_points",
    "mutate",
    "improve",

    # Engine
    "MemeticEngine",
    "EvolutionResult",
    "GenerationReport"
]
