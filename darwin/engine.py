"""
Generation loop for the evolution engine.

Each generation runs, in order: pair selection, halving, recombination,
merge and fitness evaluation. The evaluated population replaces the
working population and the loop repeats for the configured number of
generations.
"""

from enum import Enum
from typing import Callable, Optional, Sequence

from .data_models import Organism, Parameters, GenerationRecord, SummaryStats, to_population
from .random_source import RandomSource, default_source
from .selection import select_pairs
from .crossover import split_in_half, recombine, merge_populations
from .fitness import evaluate
from .summary import summarize


class EngineState(Enum):
    """Lifecycle of an EvolutionEngine."""
    INITIALIZING = "initializing"
    RUNNING = "running"
    COMPLETED = "completed"


class EvolutionEngine:
    """
    Runs the generation loop over a population.

    Errors raised during a generation propagate unchanged; the working
    population is only replaced once a generation completes.
    """

    def __init__(
        self,
        population: Sequence[Organism],
        parameters: Parameters,
        rng: Optional[RandomSource] = None,
        on_generation: Optional[Callable[[GenerationRecord], None]] = None
    ):
        self.parameters = parameters
        self.rng = rng if rng is not None else default_source()
        self.on_generation = on_generation
        self.population: list[Organism] = to_population(population)
        self.history: list[GenerationRecord] = []
        self.state = EngineState.INITIALIZING
        self.generation = 0

    def step(self) -> GenerationRecord:
        """
        Run one generation.

        Returns:
            GenerationRecord for the completed generation

        Raises:
            RuntimeError: If all configured generations have already run
        """
        if self.state is EngineState.COMPLETED:
            raise RuntimeError("Evolution already completed")

        self.state = EngineState.RUNNING
        params = self.parameters

        selection = select_pairs(
            self.population,
            params.pairs_to_crossover,
            self.rng,
            strict=params.strict_selection
        )
        halves = split_in_half(selection.selected)
        offspring = recombine(halves, self.rng)
        merged = merge_populations(selection.remaining, offspring)
        report = evaluate(
            merged,
            params.proliferation_threshold,
            params.extinction_threshold,
            self.rng
        )

        record = GenerationRecord(
            generation=self.generation,
            factor=report.factor,
            pairs_selected=selection.pair_count,
            merged_size=len(merged),
            duplicated=report.duplicated,
            kept=report.kept,
            removed=report.removed,
            population_size=len(report.population)
        )

        self.population = report.population
        self.history.append(record)
        self.generation += 1

        if self.generation >= params.generations:
            self.state = EngineState.COMPLETED

        if self.on_generation is not None:
            self.on_generation(record)

        return record

    def run(self) -> list[Organism]:
        """
        Run all remaining generations.

        Returns:
            Final population
        """
        while self.state is not EngineState.COMPLETED:
            self.step()
        return self.population

    def summarize(self) -> SummaryStats:
        return summarize(self.population, self.parameters.proliferation_threshold)


def run_evolution(
    population: Sequence[Organism],
    parameters: Parameters,
    rng: Optional[RandomSource] = None,
    on_generation: Optional[Callable[[GenerationRecord], None]] = None
) -> tuple[list[Organism], SummaryStats]:
    """
    Evolve a population and summarize the result.

    Args:
        population: Starting population
        parameters: Validated run parameters
        rng: Random source (defaults to the process-wide source)
        on_generation: Optional callback invoked after each generation

    Returns:
        Tuple of (final_population, summary_stats)
    """
    engine = EvolutionEngine(population, parameters, rng=rng, on_generation=on_generation)
    final_population = engine.run()
    return final_population, engine.summarize()
