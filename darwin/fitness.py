"""
Fitness evaluation for the evolution engine.

Scores each organism with a stochastic cosine function of its chromosome
sum and decides whether it is duplicated, kept, or removed.

The same formula feeds both the proliferation and the extinction check;
only the comparisons differ.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from .data_models import Organism
from .random_source import RandomSource

# Lower bound of the factor range sits this far below the extinction threshold
FACTOR_OFFSET = 0.04


class Fate(Enum):
    """Classification of an organism after scoring."""
    DUPLICATE = "duplicate"
    KEEP = "keep"
    REMOVE = "remove"


@dataclass
class FitnessReport:
    """
    Result of evaluating one generation.

    Attributes:
        population: Next generation's population
        factor: Factor shared by all organisms in this evaluation
        duplicated: Number of organisms appended twice
        kept: Number of organisms appended once
        removed: Number of organisms dropped
    """
    population: list[Organism]
    factor: float
    duplicated: int = 0
    kept: int = 0
    removed: int = 0


def fitness_shape(row_sum: int) -> float:
    """Cosine of the raw sum, mapped to [0, 1]."""
    return (math.cos(row_sum) / 2) + 0.5


def fitness_score(factor: float, row_sum: int) -> float:
    return factor * fitness_shape(row_sum)


def draw_factor(rng: RandomSource, extinction_threshold: float) -> float:
    """
    Draw the per-generation factor.

    Args:
        rng: Random source
        extinction_threshold: Extinction threshold of the run

    Returns:
        Uniform value from [extinction_threshold - 0.04, 1.0]
    """
    return rng.uniform(extinction_threshold - FACTOR_OFFSET, 1.0)


def classify(
    score: float,
    proliferation_threshold: float,
    extinction_threshold: float
) -> Fate:
    """
    Decide what happens to an organism with the given score.

    Proliferation is checked first, so a score that satisfies both
    thresholds is duplicated.
    """
    if score >= proliferation_threshold:
        return Fate.DUPLICATE
    if score < extinction_threshold:
        return Fate.REMOVE
    return Fate.KEEP


def evaluate(
    population: Sequence[Organism],
    proliferation_threshold: float,
    extinction_threshold: float,
    rng: RandomSource,
    factor: Optional[float] = None
) -> FitnessReport:
    """
    Build the next population from fitness scores.

    One factor is drawn per call and shared by every organism. Each organism
    is appended twice (duplicate), once (keep) or not at all (remove), in
    population order.

    Args:
        population: Merged population for this generation
        proliferation_threshold: Duplication threshold
        extinction_threshold: Removal threshold
        rng: Random source
        factor: Use this factor instead of drawing one

    Returns:
        FitnessReport with the new population and per-fate counts
    """
    if factor is None:
        factor = draw_factor(rng, extinction_threshold)

    report = FitnessReport(population=[], factor=factor)

    for organism in population:
        score = fitness_score(factor, organism.row_sum)
        fate = classify(score, proliferation_threshold, extinction_threshold)

        if fate is Fate.DUPLICATE:
            report.population.append(organism)
            report.population.append(organism)
            report.duplicated += 1
        elif fate is Fate.REMOVE:
            report.removed += 1
        else:
            report.population.append(organism)
            report.kept += 1

    return report
