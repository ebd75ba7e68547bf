"""
Base classes for fitness evaluation in the knapsack optimizer.

This module provides the abstract base class and common result type for
fitness functions that score gene vectors against an item catalog.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Sequence

from src.knapsack.core.catalog import ItemCatalog


@dataclass
class FitnessMetrics:
    """Base class for fitness metrics."""
    score: int  # Fitness assigned to the individual
    details: Dict[str, Any] = field(default_factory=dict)


class FitnessFunction(ABC):
    """
    Abstract base class for fitness functions.

    All fitness functions should inherit from this class and implement
    the evaluate method to score gene vectors.
    """

    def __init__(self, catalog: ItemCatalog):
        """
        Initialize fitness function for a problem instance.

        Args:
            catalog: Items and capacity the genes refer to
        """
        self.catalog = catalog

    @abstractmethod
    def evaluate(self, genes: Sequence[bool]) -> int:
        """
        Score a gene vector.

        Args:
            genes: Inclusion flags, one per catalog item

        Returns:
            Integer fitness, higher is better
        """
        pass

    @abstractmethod
    def calculate_metrics(self, genes: Sequence[bool]) -> FitnessMetrics:
        """
        Calculate detailed metrics for a gene vector.

        Args:
            genes: Inclusion flags, one per catalog item

        Returns:
            Detailed fitness metrics including score and breakdown
        """
        pass

    def _check_length(self, genes: Sequence[bool]) -> None:
        if len(genes) != len(self.catalog):
            raise ValueError(
                f"Gene vector has length {len(genes)}, catalog has {len(self.catalog)} items"
            )
