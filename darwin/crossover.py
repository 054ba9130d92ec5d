"""
Crossover operators for the evolution engine.

Implements chromosome halving, random recombination of halves, and the
merge of recombined organisms back into the population.
"""

from typing import Sequence

from .data_models import Organism
from .random_source import RandomSource


def split_point(length: int) -> int:
    """
    Index where a chromosome of the given length is cut.

    Odd lengths put the extra gene in the first half.
    """
    if length % 2 != 0:
        return (length + 1) // 2
    return length // 2


def split_in_half(organisms: Sequence[Organism]) -> list[Organism]:
    """
    Slice every organism into a first and second half.

    Args:
        organisms: Organisms selected for crossover

    Returns:
        List twice as long as the input: first half, second half, for
        each organism in order
    """
    halves = []
    for organism in organisms:
        cut = split_point(len(organism))
        halves.append(Organism(organism.genes[:cut]))
        halves.append(Organism(organism.genes[cut:]))
    return halves


def recombine(halves: Sequence[Organism], rng: RandomSource) -> list[Organism]:
    """
    Join randomly paired halves into new full-length organisms.

    A random permutation of half indices is consumed two at a time; the
    half at the first index is followed by the half at the second.

    Args:
        halves: Chromosome halves (even count)
        rng: Random source

    Returns:
        New organisms, half as many as the input halves

    Raises:
        ValueError: If the number of halves is odd
    """
    if len(halves) % 2 != 0:
        raise ValueError(f"Recombination needs an even number of halves, got {len(halves)}")

    mixer = rng.permutation(len(halves))

    offspring = []
    for i in range(0, len(mixer), 2):
        first = halves[mixer[i]]
        second = halves[mixer[i + 1]]
        offspring.append(first.concat(second))
    return offspring


def remove_empty(population: Sequence[Organism]) -> list[Organism]:
    """Drop organisms with an empty chromosome."""
    return [organism for organism in population if not organism.is_empty()]


def merge_populations(
    original: Sequence[Organism],
    recombined: Sequence[Organism]
) -> list[Organism]:
    """
    Combine the unselected population with newly recombined organisms.

    Empty organisms are removed from ``original`` only. No deduplication is
    performed.

    Args:
        original: Organisms left after selection
        recombined: Organisms produced by recombination

    Returns:
        New list: original organisms first, then recombined ones
    """
    merged = remove_empty(original)
    merged.extend(recombined)
    return merged
