"""
Knapsack Memetic Optimizer - Console Entry Point

Generates a random item catalog, evolves a population of packings and prints
the best fitness every few generations, followed by the final best fitness.
"""

import argparse
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv
import logfire

from src.core.config import settings
from src.knapsack import GenerationReport, MemeticConfig, MemeticEngine

# Load environment variables
load_dotenv()

logger = logging.getLogger("knapsack")


def configure_observability() -> None:
    """Configure logfire and the console handler shared by all knapsack loggers."""
    logfire.configure(**settings.get_logfire_settings())

    logger.setLevel(getattr(logging, settings.log_level))
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))
        logger.addHandler(handler)


def print_report(report: GenerationReport) -> None:
    """Write one report line to standard output."""
    if report.final:
        print(f"Best fitness after {report.generation} generations: {report.best_fitness}")
    else:
        print(report.format())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Solve a random 0/1 knapsack instance with a memetic algorithm"
    )
    parser.add_argument(
        "--version", action="version", version=f"{settings.app_name} {settings.app_version}"
    )
    parser.add_argument("--config", help="JSON file with a full optimizer configuration")
    parser.add_argument("--seed", type=int, help="Random seed for a reproducible run")
    parser.add_argument("--generations", type=int, help="Number of generations")
    parser.add_argument("--population-size", type=int, help="Individuals per generation")
    parser.add_argument("--items", type=int, help="Number of items in the catalog")
    parser.add_argument("--capacity", type=int, help="Knapsack weight capacity")
    parser.add_argument("--report-interval", type=int, help="Generations between reports")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Engine log level"
    )
    return parser


def load_config(args: argparse.Namespace) -> MemeticConfig:
    """Build the configuration from file or environment, then apply CLI overrides."""
    config = MemeticConfig.load(args.config) if args.config else MemeticConfig.from_env()

    # validate_assignment re-checks every override
    if args.seed is not None:
        config.random_seed = args.seed
    if args.generations is not None:
        config.evolution.generations = args.generations
    if args.population_size is not None:
        config.evolution.population_size = args.population_size
    if args.items is not None:
        config.problem.item_count = args.items
    if args.capacity is not None:
        config.problem.capacity = args.capacity
    if args.report_interval is not None:
        config.logging.report_interval = args.report_interval
    if args.log_level is not None:
        config.logging.log_level = args.log_level

    config.validate_consistency()
    return config


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_observability()

    try:
        config = load_config(args)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2
    except OSError as e:
        logger.error(f"Could not read configuration file: {e}")
        return 2

    logfire.info(
        "Starting knapsack optimizer",
        environment=settings.environment,
        seed=config.random_seed,
        items=config.problem.item_count,
        capacity=config.problem.capacity
    )

    engine = MemeticEngine(config, on_report=print_report)
    result = engine.evolve()

    logfire.info("Knapsack optimizer finished", **result.to_dict())
    return 0


if __name__ == "__main__":
    sys.exit(main())
