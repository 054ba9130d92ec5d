"""
Data models for the evolution engine.

Core data structures representing organisms, run parameters, per-generation
records and the final summary.
"""

import math
import numbers
from dataclasses import dataclass
from typing import Any, Iterable, Iterator

# Genes are 32-bit signed integers
GENE_MIN = -2**31
GENE_MAX = 2**31 - 1


@dataclass(frozen=True)
class Organism:
    """
    A single chromosome (ordered sequence of signed integers).

    Organisms are immutable: recombination builds new organisms instead of
    editing existing ones.

    Attributes:
        genes: Chromosome entries, stored as a tuple
    """
    genes: tuple[int, ...] = ()

    def __post_init__(self):
        """Store genes as a tuple of ints, rejecting anything else."""
        genes = tuple(self.genes)
        for gene in genes:
            if isinstance(gene, bool) or not isinstance(gene, numbers.Integral):
                raise TypeError(f"Gene must be an integer, got {gene!r}")
            if not GENE_MIN <= gene <= GENE_MAX:
                raise ValueError(
                    f"Gene {gene} outside 32-bit range [{GENE_MIN}, {GENE_MAX}]"
                )
        object.__setattr__(self, "genes", tuple(int(g) for g in genes))

    def __len__(self) -> int:
        return len(self.genes)

    def __iter__(self) -> Iterator[int]:
        return iter(self.genes)

    @property
    def row_sum(self) -> int:
        """Integer sum of all chromosome entries."""
        return sum(self.genes)

    def concat(self, other: "Organism") -> "Organism":
        """
        Build a new organism from this chromosome followed by another.

        Args:
            other: Organism whose genes are appended

        Returns:
            New Organism with ``self.genes + other.genes``
        """
        return Organism(self.genes + other.genes)

    def is_empty(self) -> bool:
        return not self.genes


def to_population(rows: Iterable[Iterable[int]]) -> list[Organism]:
    """Convert nested integer sequences into a list of Organisms."""
    return [row if isinstance(row, Organism) else Organism(tuple(row)) for row in rows]


@dataclass
class Parameters:
    """
    Parameters consumed by the evolution engine.

    Attributes:
        extinction_threshold: Score below which an organism is removed
        proliferation_threshold: Score at or above which an organism is duplicated
        generations: Number of generations to run
        pairs_to_crossover: Requested number of pairs per generation (resized when too large)
        strict_selection: Raise instead of skipping crossover when fewer than
            two organisms remain
    """
    extinction_threshold: float
    proliferation_threshold: float
    generations: int
    pairs_to_crossover: int
    strict_selection: bool = False

    def __post_init__(self):
        """Validate parameter ranges."""
        for name in ("extinction_threshold", "proliferation_threshold"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{name} must be a number, got: {value!r}")
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got: {value}")

        for name in ("generations", "pairs_to_crossover"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got: {value!r}")


@dataclass
class GenerationResult:
    """
    Outcome of selection for one generation.

    Attributes:
        selected: Organisms chosen for recombination, in pair order
        remaining: Organisms left in the population
    """
    selected: list[Organism]
    remaining: list[Organism]

    @property
    def pair_count(self) -> int:
        return len(self.selected) // 2


@dataclass
class GenerationRecord:
    """
    History entry describing one completed generation.

    Attributes:
        generation: Zero-based generation index
        factor: Stochastic factor shared by every organism in this generation
        pairs_selected: Number of pairs actually recombined (after resizing)
        merged_size: Population size entering fitness evaluation
        duplicated: Organisms copied twice
        kept: Organisms copied once
        removed: Organisms dropped
        population_size: Population size after evaluation
    """
    generation: int
    factor: float
    pairs_selected: int
    merged_size: int
    duplicated: int
    kept: int
    removed: int
    population_size: int

    def to_dict(self) -> dict[str, Any]:
        """
        Convert record to dictionary for CSV export.

        Returns:
            Dictionary with one entry per log column
        """
        return {
            "generation": self.generation + 1,
            "factor": self.factor,
            "pairs_selected": self.pairs_selected,
            "merged_size": self.merged_size,
            "duplicated": self.duplicated,
            "kept": self.kept,
            "removed": self.removed,
            "population_size": self.population_size,
        }


@dataclass(frozen=True)
class SummaryStats:
    """
    Population-wide statistics computed after the final generation.

    Attributes:
        mean_fitness: Mean of cos(row_sum)/2 + 0.5, NaN for an empty population
        perfect_fits: Organisms whose raw row sum exceeds the proliferation threshold
    """
    mean_fitness: float
    perfect_fits: int

    def reportable_mean(self) -> float:
        """Mean fitness with non-finite values replaced by 0."""
        if not math.isfinite(self.mean_fitness):
            return 0.0
        return self.mean_fitness

    def accuracy_percent(self) -> float:
        return self.reportable_mean() * 100
