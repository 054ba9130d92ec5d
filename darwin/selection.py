"""
Pair selection for crossover.

Picks disjoint random pairs of organisms out of the population. Selected
organisms leave the population and go to recombination.
"""

from typing import Sequence

from .data_models import Organism, GenerationResult
from .random_source import RandomSource


class InsufficientPopulationError(Exception):
    """Raised in strict mode when fewer than two organisms are left to pair."""
    pass


def resize_pair_count(k: int, population_size: int) -> int:
    """
    Shrink the requested pair count until the population can supply it.

    While k exceeds half the population, k is replaced by a third of the
    population (integer division). Populations of 0 or 1 organisms yield 0.

    Args:
        k: Requested number of pairs
        population_size: Number of organisms available

    Returns:
        Number of pairs that will actually be selected
    """
    while k > population_size // 2:
        k = population_size // 3
    return k


def select_pairs(
    population: Sequence[Organism],
    k: int,
    rng: RandomSource,
    strict: bool = False
) -> GenerationResult:
    """
    Select k random pairs of organisms for recombination.

    For each pair, a first index is drawn uniformly, then a second index is
    redrawn until it differs from the first. Both organisms are appended in
    draw order and removed from the working copy, larger index first.

    Args:
        population: Current population (not modified)
        k: Requested number of pairs
        rng: Random source
        strict: Raise InsufficientPopulationError instead of selecting
            nothing when fewer than two organisms are available

    Returns:
        GenerationResult with the selected organisms and the rest

    Raises:
        InsufficientPopulationError: If strict and the population has fewer than 2 organisms
    """
    remaining = list(population)

    if strict and len(remaining) < 2:
        raise InsufficientPopulationError(
            f"Cannot select pairs from a population of {len(remaining)} organism(s)"
        )

    pair_count = resize_pair_count(k, len(remaining))
    selected = []

    for _ in range(pair_count):
        size = len(remaining)
        line1 = rng.integer(size)
        line2 = rng.integer(size)
        while line2 == line1:
            line2 = rng.integer(size)

        selected.append(remaining[line1])
        selected.append(remaining[line2])

        del remaining[max(line1, line2)]
        del remaining[min(line1, line2)]

    return GenerationResult(selected=selected, remaining=remaining)
