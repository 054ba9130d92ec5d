"""
Visualization utilities for the evolution engine.

Plots how population size and the per-generation factor change over a run.
"""

from pathlib import Path
from typing import Sequence, Tuple, Union

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np

from .data_models import GenerationRecord


def plot_generation_history(
    records: Sequence[GenerationRecord],
    output_path: Union[str, Path],
    figsize: Tuple[int, int] = (12, 8),
    overwrite: bool = False
) -> Path:
    """
    Generate a two-panel history plot for a run.

    Creates:
    - Population size per generation with duplicated/kept/removed bars
    - Drawn factor per generation

    Args:
        records: GenerationRecord objects in generation order
        output_path: Path to save PNG file
        figsize: Figure size (width, height) in inches
        overwrite: If True, overwrite existing file

    Returns:
        Path to saved plot

    Raises:
        ValueError: If there are no records to plot
        FileExistsError: If file exists and overwrite=False
    """
    if not records:
        raise ValueError("No generation records to plot")

    output_path = Path(output_path)

    if output_path.exists() and not overwrite:
        raise FileExistsError(f"Plot file already exists: {output_path}")

    output_path.parent.mkdir(parents=True, exist_ok=True)

    generations = np.arange(1, len(records) + 1)
    duplicated = np.array([r.duplicated for r in records])
    kept = np.array([r.kept for r in records])
    removed = np.array([r.removed for r in records])
    sizes = np.array([r.population_size for r in records])
    factors = np.array([r.factor for r in records])

    fig, (ax_size, ax_factor) = plt.subplots(2, 1, figsize=figsize, sharex=True)

    # Fate breakdown as stacked bars, resulting size as a line
    ax_size.bar(generations, duplicated, color='green', alpha=0.6, label='Duplicated')
    ax_size.bar(generations, kept, bottom=duplicated, color='steelblue', alpha=0.6, label='Kept')
    ax_size.bar(generations, removed, bottom=duplicated + kept, color='red', alpha=0.6, label='Removed')
    ax_size.plot(generations, sizes, color='black', marker='o', linewidth=2, label='Population size')
    ax_size.set_ylabel('Organisms')
    ax_size.set_title('Population per Generation')
    ax_size.legend(loc='upper left')
    ax_size.grid(True, alpha=0.3)

    ax_factor.plot(generations, factors, color='purple', marker='s', linewidth=1.5)
    ax_factor.set_xlabel('Generation')
    ax_factor.set_ylabel('Factor')
    ax_factor.set_title('Fitness Factor per Generation')
    ax_factor.grid(True, alpha=0.3)

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)

    return output_path
