"""
Final population statistics.
"""

from typing import Sequence

import numpy as np

from .data_models import Organism, SummaryStats
from .fitness import fitness_shape


def summarize(population: Sequence[Organism], proliferation_threshold: float) -> SummaryStats:
    """
    Compute mean fitness and perfect-fit count for a population.

    The perfect-fit count compares each organism's raw row sum (not its
    cosine score) against the proliferation threshold.

    Args:
        population: Final population
        proliferation_threshold: Threshold used for the perfect-fit count

    Returns:
        SummaryStats; mean is NaN and count is 0 for an empty population
    """
    if not population:
        return SummaryStats(mean_fitness=float("nan"), perfect_fits=0)

    row_sums = [organism.row_sum for organism in population]
    shapes = np.array([fitness_shape(row_sum) for row_sum in row_sums], dtype=float)
    perfect_fits = sum(1 for row_sum in row_sums if row_sum > proliferation_threshold)

    return SummaryStats(mean_fitness=float(shapes.mean()), perfect_fits=perfect_fits)
