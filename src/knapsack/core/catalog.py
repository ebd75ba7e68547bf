"""
Item catalog for the knapsack optimizer.

The catalog is the fixed, immutable problem instance: an ordered sequence of
items plus the weight capacity. Item indices are the identifiers that gene
vectors refer to.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence
import random

import logfire
import numpy as np

from src.knapsack.core.config import ProblemConfig


@dataclass(frozen=True)
class Item:
    """A single item that may be packed."""

    value: int
    weight: int

    @property
    def density(self) -> float:
        """Value per unit of weight."""
        return self.value / self.weight


class ItemCatalog:
    """
    Ordered, read-only collection of items together with the knapsack capacity.
    """

    def __init__(self, items: Sequence[Item], capacity: int):
        if not items:
            raise ValueError("Item catalog must contain at least one item")
        if capacity <= 0:
            raise ValueError(f"Capacity must be positive, got {capacity}")
        for index, item in enumerate(items):
            if item.weight <= 0:
                raise ValueError(f"Item {index} has non-positive weight {item.weight}")
            if item.value < 0:
                raise ValueError(f"Item {index} has negative value {item.value}")

        self._items = tuple(items)
        self.capacity = capacity

        self.values = np.array([item.value for item in self._items], dtype=np.int64)
        self.weights = np.array([item.weight for item in self._items], dtype=np.int64)
        self.values.setflags(write=False)
        self.weights.setflags(write=False)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> Item:
        return self._items[index]

    def __iter__(self) -> Iterator[Item]:
        return iter(self._items)

    @property
    def items(self) -> tuple:
        return self._items

    @property
    def total_weight(self) -> int:
        return int(self.weights.sum())

    @property
    def total_value(self) -> int:
        return int(self.values.sum())

    def densities(self) -> List[float]:
        """Value/weight ratio of every item, in catalog order."""
        return [item.density for item in self._items]

    def to_dict(self):
        return {
            "capacity": self.capacity,
            "items": [{"value": item.value, "weight": item.weight} for item in self._items],
        }

    @classmethod
    def from_pairs(cls, pairs: Sequence[Sequence[int]], capacity: int) -> "ItemCatalog":
        """Build a catalog from ``(value, weight)`` pairs."""
        return cls([Item(value=int(v), weight=int(w)) for v, w in pairs], capacity)

    def __repr__(self) -> str:
        return f"ItemCatalog(items={len(self)}, capacity={self.capacity})"


def generate_catalog(problem: ProblemConfig, rng: Optional[random.Random] = None) -> ItemCatalog:
    """
    Generate a random catalog.

    Values and weights are drawn uniformly (inclusive) from the configured
    ranges, value first then weight for each item.

    Args:
        problem: Problem configuration with ranges, item count and capacity
        rng: Random source; a fresh unseeded one is used when omitted

    Returns:
        A new ItemCatalog
    """
    rng = rng or random.Random()

    with logfire.span("Generate item catalog", item_count=problem.item_count, capacity=problem.capacity):
        items = [
            Item(
                value=rng.randint(problem.min_value, problem.max_value),
                weight=rng.randint(problem.min_weight, problem.max_weight)
            )
            for _ in range(problem.item_count)
        ]
        catalog = ItemCatalog(items, problem.capacity)

        logfire.info(
            "Generated item catalog",
            item_count=len(catalog),
            total_weight=catalog.total_weight,
            total_value=catalog.total_value
        )

    return catalog
