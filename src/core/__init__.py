"""
Core functionality for the Knapsack Memetic Optimizer.

This package contains application-wide configuration shared by the
optimizer package and the console runner.
"""

from src.core.config import settings

__all__ = [
    "settings",
]
