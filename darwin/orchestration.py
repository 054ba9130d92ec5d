"""
Orchestration module for the evolution engine.

Runs a complete evolution: load the population, evolve it, report, and
write the results.
"""

from typing import Dict, Iterable, Optional, Union
from pathlib import Path

from .data_models import GenerationRecord, Parameters
from .io_utils import load_population, save_population, save_generation_log, format_accuracy
from .engine import EvolutionEngine
from .cli import parameters_from_config


def print_parameters(input_path: Path, output_path: Path, params: Parameters) -> None:
    """Echo the run parameters."""
    print("User input:")
    print(f"  - Input file: '{input_path}'")
    print(f"  - Output file: '{output_path}'")
    print(f"  - Extinction threshold: {params.extinction_threshold}")
    print(f"  - Proliferation threshold: {params.proliferation_threshold}")
    print(f"  - Number of generations: {params.generations}")
    print(f"  - Pairs to cross-over: {params.pairs_to_crossover}")
    if params.strict_selection:
        print("  - Strict selection: enabled")


def print_generation(record: GenerationRecord) -> None:
    print(
        f"  Generation: {record.generation + 1:4d}  "
        f"Factor: {record.factor:.6f}  "
        f"Population: {record.population_size}"
    )


def check_output_paths(paths: Iterable[Optional[Union[str, Path]]]) -> None:
    """
    Refuse to start a run that would replace an existing output.

    Args:
        paths: Configured output paths; unset entries (None or '') are ignored

    Raises:
        FileExistsError: Naming the first path that already exists
    """
    for path in paths:
        if path and Path(path).exists():
            raise FileExistsError(
                f"Output file already exists: {path}\n"
                f"Use --overwrite or set 'output.overwrite: true' to overwrite"
            )


def run_evolution_mode(run_config: Dict) -> None:
    """
    Evolve a population file and save the result.

    Args:
        run_config: Validated run configuration dict

    Algorithm:
        1. Build Parameters from run_config['evolution'] and refuse existing
           output paths (population, generation log, plot) unless overwrite is set
        2. Load population from run_config['input']['population']
        3. Run the generation loop, printing one line per generation
        4. Summarize the final population
        5. Save population with summary header to run_config['output']['population']
        6. Optionally save generation log and history plot
        7. Print summary report

    Returns:
        None (writes to disk)
    """
    print("=" * 70)
    print("DARWIN EVOLUTION")
    print("=" * 70)

    params = parameters_from_config(run_config)
    input_path = Path(run_config['input']['population'])
    output_config = run_config['output']
    output_path = Path(output_config['population'])
    overwrite = output_config.get('overwrite', False)

    log_path = output_config.get('generation_log')
    plot_path = output_config.get('plot')

    print_parameters(input_path, output_path, params)

    if not overwrite:
        check_output_paths([output_path, log_path, plot_path])

    print(f"\nLoading population from: {input_path}")
    population = load_population(input_path)
    print(f"Initial population: {len(population)} organisms\n")

    print(f"Evolving for {params.generations} generations...")
    engine = EvolutionEngine(population, params, on_generation=print_generation)
    final_population = engine.run()
    stats = engine.summarize()

    save_population(final_population, stats, output_path, overwrite=overwrite)

    if log_path:
        save_generation_log(engine.history, log_path, overwrite=overwrite)

    if plot_path:
        from .visualization_utils import plot_generation_history
        plot_generation_history(engine.history, plot_path, overwrite=overwrite)
        print(f"  Saved visualization: {plot_path}")

    print()
    print("=" * 70)
    print("SUMMARY")
    print("=" * 70)
    print(f"Final population: {len(final_population)} organisms")
    print(f"Accuracy: {format_accuracy(stats)}")
    print(f"Perfect fits: {stats.perfect_fits}")
    print(f"Output file: {output_path}")
    if log_path:
        print(f"Generation log: {log_path}")
