"""
Genetic operators for boolean gene vectors.

Three-point crossover and single-flip mutation. Every operator that needs
randomness takes the random source explicitly so the draw order is fixed by
the caller.
"""

from typing import Optional, Tuple
import random

from src.knapsack.core.population import Individual


CutPoints = Tuple[int, int, int]


def draw_cut_points(length: int, rng: random.Random) -> CutPoints:
    """
    Draw three ordered cut points ``p1 <= p2 <= p3 < length``.

    Each point is drawn from the range left open by the previous one, so the
    points are ordered but not uniformly distributed over all ordered triples.
    """
    p1 = rng.randrange(length)
    p2 = rng.randrange(p1, length)
    p3 = rng.randrange(p2, length)
    return p1, p2, p3


def crossover(
    parent1: Individual,
    parent2: Individual,
    rng: Optional[random.Random] = None,
    cut_points: Optional[CutPoints] = None
) -> Tuple[Individual, Individual]:
    """
    Perform three-point crossover.

    Offspring one takes parent one's genes on ``[0, p1)`` and ``[p2, p3)`` and
    parent two's genes everywhere else; offspring two is the complement.
    Parents are left untouched.

    Args:
        parent1: First parent
        parent2: Second parent
        rng: Random source used to draw cut points
        cut_points: Explicit ``(p1, p2, p3)``; no randomness is drawn when given

    Returns:
        Two new, unevaluated offspring
    """
    length = len(parent1.genes)
    if len(parent2.genes) != length:
        raise ValueError(
            f"Parents have different gene lengths: {length} and {len(parent2.genes)}"
        )

    if cut_points is None:
        if rng is None:
            raise ValueError("Either rng or cut_points must be provided")
        cut_points = draw_cut_points(length, rng)

    p1, p2, p3 = cut_points
    if not 0 <= p1 <= p2 <= p3 <= length:
        raise ValueError(f"Invalid cut points {cut_points} for gene length {length}")

    genes1 = []
    genes2 = []
    for i in range(length):
        if i < p1 or p2 <= i < p3:
            genes1.append(parent1.genes[i])
            genes2.append(parent2.genes[i])
        else:
            genes1.append(parent2.genes[i])
            genes2.append(parent1.genes[i])

    return Individual(genes=genes1), Individual(genes=genes2)


def mutate(individual: Individual, rng: random.Random, rate: float = 0.05) -> bool:
    """
    Flip at most one gene, in place.

    With probability ``rate`` one gene at a uniformly random index is flipped.

    Returns:
        True if a gene was flipped
    """
    if rng.random() < rate:
        individual.flip(rng.randrange(len(individual.genes)))
        return True
    return False
