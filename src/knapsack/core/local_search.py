"""
Greedy local improvement applied to offspring after reproduction.
"""

from src.knapsack.core.catalog import ItemCatalog
from src.knapsack.core.population import Individual
from src.knapsack.fitness.value import score_packing


def improve(individual: Individual, catalog: ItemCatalog) -> int:
    """
    Run one left-to-right hill-climbing pass over the items, in place.

    An excluded item is packed if it still fits. A packed item is swapped for
    the excluded item of highest value density that fits in its place, but
    only if that density is strictly higher than its own. The pass is not
    repeated until no move is left.

    Returns:
        The individual's new fitness, which is also stored on it
    """
    genes = individual.genes
    capacity = catalog.capacity
    values = catalog.values.tolist()
    weights = catalog.weights.tolist()
    densities = catalog.densities()
    total_weight = sum(w for w, gene in zip(weights, genes) if gene)
    total_value = sum(v for v, gene in zip(values, genes) if gene)

    for i in range(len(genes)):
        if not genes[i]:
            if total_weight + weights[i] <= capacity:
                genes[i] = True
                total_weight += weights[i]
                total_value += values[i]
            continue

        best_index = i
        best_density = densities[i]
        room = capacity - (total_weight - weights[i])

        for j, density in enumerate(densities):
            if not genes[j] and weights[j] <= room and density > best_density:
                best_density = density
                best_index = j

        if best_index != i:
            genes[i] = False
            genes[best_index] = True
            total_weight += weights[best_index] - weights[i]
            total_value += values[best_index] - values[i]

    fitness = score_packing(total_value, total_weight, capacity)
    individual.update_fitness(fitness)
    return fitness
