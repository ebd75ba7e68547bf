"""
Knapsack Optimizer Configuration Module.

This module defines configuration classes for the memetic knapsack optimizer,
including the problem instance, evolution parameters and logging settings.
"""

from typing import Optional, Dict, Any, Literal
from pydantic import BaseModel, Field, ConfigDict, model_validator
import json
import os


class ProblemConfig(BaseModel):
    """Parameters describing the knapsack instance to generate."""

    model_config = ConfigDict(validate_assignment=True)

    capacity: int = Field(
        default=250,
        gt=0,
        description="Maximum total weight the knapsack can carry"
    )
    item_count: int = Field(
        default=100,
        ge=1,
        description="Number of items in the generated catalog"
    )
    min_value: int = Field(default=2, ge=0, description="Smallest item value")
    max_value: int = Field(default=30, ge=0, description="Largest item value")
    min_weight: int = Field(default=1, ge=1, description="Smallest item weight")
    max_weight: int = Field(default=25, ge=1, description="Largest item weight")

    @model_validator(mode="after")
    def validate_ranges(self) -> "ProblemConfig":
        """Ensure value and weight ranges are not inverted."""
        if self.min_value > self.max_value:
            raise ValueError(
                f"min_value ({self.min_value}) cannot exceed max_value ({self.max_value})"
            )
        if self.min_weight > self.max_weight:
            raise ValueError(
                f"min_weight ({self.min_weight}) cannot exceed max_weight ({self.max_weight})"
            )
        return self


class EvolutionParameters(BaseModel):
    """Parameters controlling the generational loop."""

    model_config = ConfigDict(validate_assignment=True)

    population_size: int = Field(
        default=100,
        ge=2,
        le=100000,
        description="Number of individuals in the population"
    )
    generations: int = Field(
        default=1000,
        ge=1,
        le=1000000,
        description="Number of generations to evolve"
    )
    mutation_rate: float = Field(
        default=0.05,
        ge=0.0,
        le=1.0,
        description="Probability that a mutation call flips one gene"
    )
    crossover_rate: float = Field(
        default=0.25,
        ge=0.0,
        le=1.0,
        description="Probability of crossover between sampled parents"
    )


class LoggingConfig(BaseModel):
    """Configuration for logging and progress reporting."""

    model_config = ConfigDict(validate_assignment=True)

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging level"
    )
    report_interval: int = Field(
        default=10,
        ge=1,
        description="Generations between best-fitness reports"
    )
    metrics_export: bool = Field(
        default=True,
        description="Export progress metrics to logfire"
    )


class MemeticConfig(BaseModel):
    """Main configuration class for the knapsack optimizer."""

    model_config = ConfigDict(
        validate_assignment=True,
        extra='forbid'
    )

    problem: ProblemConfig = Field(
        default_factory=ProblemConfig,
        description="Knapsack instance parameters"
    )
    evolution: EvolutionParameters = Field(
        default_factory=EvolutionParameters,
        description="Evolution parameters"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging and reporting configuration"
    )

    random_seed: Optional[int] = Field(
        default=None,
        description="Random seed for reproducibility"
    )

    @classmethod
    def from_env(cls) -> "MemeticConfig":
        """Create configuration from environment variables."""
        config_dict: Dict[str, Any] = {}

        if capacity := os.getenv("KNAPSACK_CAPACITY"):
            config_dict.setdefault("problem", {})["capacity"] = int(capacity)
        if item_count := os.getenv("KNAPSACK_ITEM_COUNT"):
            config_dict.setdefault("problem", {})["item_count"] = int(item_count)

        if pop_size := os.getenv("KNAPSACK_POPULATION_SIZE"):
            config_dict.setdefault("evolution", {})["population_size"] = int(pop_size)
        if generations := os.getenv("KNAPSACK_GENERATIONS"):
            config_dict.setdefault("evolution", {})["generations"] = int(generations)
        if mutation_rate := os.getenv("KNAPSACK_MUTATION_RATE"):
            config_dict.setdefault("evolution", {})["mutation_rate"] = float(mutation_rate)
        if crossover_rate := os.getenv("KNAPSACK_CROSSOVER_RATE"):
            config_dict.setdefault("evolution", {})["crossover_rate"] = float(crossover_rate)

        if report_interval := os.getenv("KNAPSACK_REPORT_INTERVAL"):
            config_dict.setdefault("logging", {})["report_interval"] = int(report_interval)
        if log_level := os.getenv("KNAPSACK_LOG_LEVEL"):
            config_dict.setdefault("logging", {})["log_level"] = log_level.upper()

        if random_seed := os.getenv("KNAPSACK_RANDOM_SEED"):
            config_dict["random_seed"] = int(random_seed)

        return cls(**config_dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump()

    def save(self, filepath: str) -> None:
        """Save configuration to JSON file."""
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2, default=str)

    @classmethod
    def load(cls, filepath: str) -> "MemeticConfig":
        """Load configuration from JSON file."""
        with open(filepath, 'r') as f:
            data = json.load(f)
        return cls(**data)

    def validate_consistency(self) -> None:
        """Validate configuration consistency across components."""
        if self.evolution.population_size < 2:
            raise ValueError(
                f"Population size ({self.evolution.population_size}) must be at least 2 "
                "to form parent pairs"
            )

        if self.problem.capacity <= 0:
            raise ValueError(f"Capacity ({self.problem.capacity}) must be positive")

        if self.problem.item_count < 1:
            raise ValueError(f"Item count ({self.problem.item_count}) must be at least 1")


def create_default_config() -> MemeticConfig:
    """Create the default configuration: 100 items, capacity 250, 1000 generations."""
    return MemeticConfig()


def create_test_config() -> MemeticConfig:
    """Create a configuration suitable for testing (smaller, faster, seeded)."""
    return MemeticConfig(
        problem=ProblemConfig(
            capacity=50,
            item_count=10
        ),
        evolution=EvolutionParameters(
            population_size=10,
            generations=5
        ),
        logging=LoggingConfig(
            report_interval=1,
            metrics_export=False
        ),
        random_seed=42
    )
