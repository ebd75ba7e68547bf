"""
Unit tests for greedy local improvement.

Tests cover:
- Greedy filling of remaining capacity
- Value-density swaps and tie handling
- Feasibility preservation and fitness caching
"""

import random

from src.knapsack.core.catalog import ItemCatalog
from src.knapsack.core.local_search import improve
from src.knapsack.core.operators import mutate
from src.knapsack.core.population import Individual, initialize_population
from src.knapsack.fitness import KnapsackValueFitness


def packed_weight(individual, catalog):
    return sum(item.weight for item, gene in zip(catalog, individual.genes) if gene)


class TestLocalImprovement:
    """Test suite for the hill-climbing pass."""

    def test_fills_empty_knapsack(self, scenario_catalog):
        """Test greedy filling from an empty packing."""
        individual = Individual.empty(3)

        fitness = improve(individual, scenario_catalog)

        assert individual.genes == [True, True, False]
        assert fitness == 18
        assert individual.fitness == 18
        assert individual.evaluated
        assert packed_weight(individual, scenario_catalog) <= 10

    def test_swaps_for_denser_item(self):
        """Test a packed item is replaced by a denser one that fits."""
        catalog = ItemCatalog.from_pairs([(4, 4), (9, 3), (6, 6)], capacity=10)
        individual = Individual(genes=[True, False, True])

        improve(individual, catalog)

        assert individual.genes == [False, True, True]
        assert individual.fitness == 15
        assert packed_weight(individual, catalog) == 9

    def test_equal_density_keeps_original(self):
        """Test that ties in density do not trigger a swap."""
        catalog = ItemCatalog.from_pairs([(2, 2), (4, 4)], capacity=5)
        individual = Individual(genes=[True, False])

        improve(individual, catalog)

        assert individual.genes == [True, False]
        assert individual.fitness == 2

    def test_swap_requires_room(self):
        """Test that a denser item is ignored when it does not fit."""
        catalog = ItemCatalog.from_pairs([(5, 5), (20, 6)], capacity=10)
        individual = Individual(genes=[True, False])

        improve(individual, catalog)

        # Dropping item 0 leaves room for item 1, so it is taken
        assert individual.genes == [False, True]
        assert individual.fitness == 20

        tight = ItemCatalog.from_pairs([(5, 5), (20, 11)], capacity=10)
        individual = Individual(genes=[True, False])

        improve(individual, tight)

        assert individual.genes == [True, False]
        assert individual.fitness == 5

    def test_density_swap_can_lower_value(self):
        """Test a light dense item replaces a heavier, more valuable one."""
        catalog = ItemCatalog.from_pairs([(10, 5), (3, 1)], capacity=5)
        individual = Individual(genes=[True, False])
        individual.update_fitness(10)

        fitness = improve(individual, catalog)

        # Density 3 beats density 2, so value falls from 10 to 3
        assert individual.genes == [False, True]
        assert fitness == 3
        assert individual.fitness == 3

    def test_densities_computed_once_per_pass(self, small_catalog, monkeypatch):
        """Test the pass reads item densities from one precomputed list."""
        calls = []
        original = ItemCatalog.densities

        def counting_densities(catalog):
            calls.append(catalog)
            return original(catalog)

        monkeypatch.setattr(ItemCatalog, "densities", counting_densities)
        individual = Individual(genes=[True] * 5 + [False] * 5)

        improve(individual, small_catalog)

        assert len(calls) == 1

    def test_overweight_input_scores_zero(self):
        """Test that an infeasible packing the pass cannot repair scores zero."""
        catalog = ItemCatalog.from_pairs([(3, 4), (3, 4)], capacity=5)
        individual = Individual(genes=[True, True])

        fitness = improve(individual, catalog)

        assert individual.genes == [True, True]
        assert fitness == 0
        assert individual.fitness == 0

    def test_nothing_fits(self, heavy_catalog):
        """Test the pass is a no-op when every item is too heavy."""
        individual = Individual.empty(len(heavy_catalog))

        assert improve(individual, heavy_catalog) == 0
        assert individual.genes == [False] * len(heavy_catalog)

    def test_feasible_individuals_stay_feasible(self, small_catalog):
        """Test feasibility and fitness consistency on many packings."""
        rng = random.Random(77)
        fitness_fn = KnapsackValueFitness(small_catalog)

        for individual in initialize_population(100, small_catalog, rng):
            # Drop a random item so there is room to improve
            packed = individual.selected_indices()
            if packed:
                individual.genes[rng.choice(packed)] = False

            improve(individual, small_catalog)

            assert len(individual.genes) == len(small_catalog)
            assert packed_weight(individual, small_catalog) <= small_catalog.capacity
            assert individual.fitness == fitness_fn.evaluate(individual.genes)

    def test_cached_fitness_matches_evaluator(self, small_catalog):
        """Test the stored fitness equals a fresh evaluation, even after mutation."""
        rng = random.Random(3)
        fitness_fn = KnapsackValueFitness(small_catalog)

        for individual in initialize_population(50, small_catalog, rng):
            mutate(individual, rng, rate=1.0)
            improve(individual, small_catalog)

            assert individual.fitness == fitness_fn.evaluate(individual.genes)

    def test_refilled_packing_is_maximal(self, small_catalog):
        """Test that after filling an empty packing no excluded item still fits."""
        individual = Individual.empty(len(small_catalog))
        improve(individual, small_catalog)

        weight = packed_weight(individual, small_catalog)
        assert weight <= small_catalog.capacity
        for index, gene in enumerate(individual.genes):
            if not gene:
                assert weight + small_catalog[index].weight > small_catalog.capacity
