"""
Darwin - Evolution Simulation Engine

This package evolves a population of integer chromosomes over a fixed
number of generations through random pair selection, half-chromosome
recombination, and a stochastic cosine fitness rule.

Key Features:
- Injectable random source (process-wide by default, seedable for tests)
- Automatic resizing of the requested pair count
- Duplicate / keep / remove classification per generation
- Final summary with mean fitness and perfect-fit count

Modules:
- data_models: Core data structures (Organism, Parameters, GenerationRecord, SummaryStats)
- random_source: Shared random number source
- selection: Random pair selection
- crossover: Chromosome halving, recombination and merge
- fitness: Stochastic fitness evaluation
- summary: Final population statistics
- engine: Generation loop and run_evolution entry point
- io_utils: Population file I/O and generation log
- cli: Run configuration loading and validation
- orchestration: End-to-end evolution run
- visualization_utils: Generation history plot
"""

__version__ = "0.1.0"
__author__ = "Darwin Team"

from .data_models import Organism, Parameters, GenerationRecord, SummaryStats
from .random_source import RandomSource
from .engine import EvolutionEngine, run_evolution

__all__ = [
    "Organism",
    "Parameters",
    "GenerationRecord",
    "SummaryStats",
    "RandomSource",
    "EvolutionEngine",
    "run_evolution",
]
