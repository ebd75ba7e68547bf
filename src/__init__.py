"""
Knapsack Memetic Optimizer - Source Package

This package contains the application settings and the memetic
(genetic algorithm + local search) optimizer for the 0/1 knapsack problem.
"""

__version__ = "1.0.0"

# Package-level imports for convenience
from src.core.config import settings

__all__ = [
    "settings",
    "__version__",
]
