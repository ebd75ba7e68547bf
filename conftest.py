"""
PyTest configuration and fixtures for the Knapsack Memetic Optimizer.

This module provides shared test fixtures: seeded random sources, small
item catalogs and a fast optimizer configuration.
"""

import os
import sys
import random

import pytest
import logfire

# Add project root to Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from src.core.config import settings
from src.knapsack.core.catalog import Item, ItemCatalog
from src.knapsack.core.config import create_test_config


# Override settings for testing
settings.environment = "testing"
settings.logfire_environment = "testing"

# Keep spans local; nothing is exported during tests
logfire.configure(send_to_logfire=False, console=False)


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source."""
    return random.Random(1234)


@pytest.fixture
def scenario_catalog() -> ItemCatalog:
    """Three items with capacity 10."""
    return ItemCatalog(
        [
            Item(value=10, weight=5),
            Item(value=8, weight=4),
            Item(value=6, weight=3),
        ],
        capacity=10
    )


@pytest.fixture
def small_catalog() -> ItemCatalog:
    """Ten fixed items with capacity 50."""
    pairs = [
        (12, 7), (5, 3), (30, 20), (9, 9), (14, 4),
        (2, 11), (25, 12), (7, 1), (18, 15), (11, 6),
    ]
    return ItemCatalog.from_pairs(pairs, capacity=50)


@pytest.fixture
def heavy_catalog() -> ItemCatalog:
    """Every item is heavier than the capacity on its own."""
    pairs = [(10, 21), (20, 25), (5, 22), (30, 24)]
    return ItemCatalog.from_pairs(pairs, capacity=20)


@pytest.fixture
def test_config():
    """Small, seeded configuration (10 items, population 10, 5 generations)."""
    return create_test_config()
