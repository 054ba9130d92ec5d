"""
I/O utilities for the evolution engine.

Handles population text files (one organism per line, whitespace-separated
integers), the result file with its summary header, and the per-generation
CSV log.
"""

import csv
import re
from pathlib import Path
from typing import Sequence, Union

from .data_models import GENE_MAX, GENE_MIN, Organism, GenerationRecord, SummaryStats

_INTEGER_TOKEN = re.compile(r"[+-]?[0-9]+")

GENERATION_LOG_FIELDS = [
    "generation", "factor", "pairs_selected", "merged_size",
    "duplicated", "kept", "removed", "population_size",
]


class PopulationFormatError(ValueError):
    """Raised when a population file contains a non-integer or out-of-range value."""

    def __init__(
        self,
        path: Union[str, Path],
        line_number: int,
        wrong_char: str,
        out_of_range: bool = False
    ):
        self.path = Path(path)
        self.line_number = line_number
        self.wrong_char = wrong_char
        self.out_of_range = out_of_range
        if out_of_range:
            message = (
                f"Integer out of range found in file: {self.path} "
                f"(Value: {wrong_char} at line {line_number}; "
                f"allowed {GENE_MIN} to {GENE_MAX})"
            )
        else:
            message = (
                f"Non-integer value found in file: {self.path} "
                f"(Character: {wrong_char} at line {line_number})"
            )
        super().__init__(message)


def _gene_in_range(text: str) -> bool:
    digits = text.lstrip("+-").lstrip("0")
    # More than 10 significant digits can't fit, skip the int() conversion
    if len(digits) > 10:
        return False
    return GENE_MIN <= int(text) <= GENE_MAX


def parse_population_line(line: str, line_number: int, path: Union[str, Path] = "<string>") -> Organism:
    """
    Parse one line of a population file.

    Integers are read back to back, so a sign inside a token starts the next
    value (``1-2`` reads as ``1 -2``).

    Args:
        line: Text line with whitespace-separated integers
        line_number: 1-based line number (for error messages)
        path: Source file (for error messages)

    Returns:
        Organism for this line (empty if the line is blank)

    Raises:
        PopulationFormatError: If the line holds anything but signed integers,
            or an integer outside the 32-bit signed range
    """
    genes = []
    for token in line.split():
        pos = 0
        while pos < len(token):
            match = _INTEGER_TOKEN.match(token, pos)
            if match is None:
                raise PopulationFormatError(path, line_number, token[pos])
            text = match.group()
            if not _gene_in_range(text):
                raise PopulationFormatError(path, line_number, text, out_of_range=True)
            genes.append(int(text))
            pos = match.end()
    return Organism(tuple(genes))


def load_population(path: Union[str, Path]) -> list[Organism]:
    """
    Load a population from a text file.

    File format:
        12 645 24 1 37 21
        95 30 15 1 283 12
        1 23 481 1

    Blank lines are skipped.

    Args:
        path: Path to population file

    Returns:
        List of Organisms in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        PopulationFormatError: If a non-integer or out-of-range value is found
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Population file not found: {path}")

    population = []
    with open(path, 'r', encoding='utf-8') as f:
        for line_number, line in enumerate(f, start=1):
            organism = parse_population_line(line, line_number, path)
            if not organism.is_empty():
                population.append(organism)

    return population


def format_accuracy(stats: SummaryStats) -> str:
    """Render mean fitness as a percentage with 6 significant digits."""
    return f"{stats.accuracy_percent():g}%"


def save_population(
    population: Sequence[Organism],
    stats: SummaryStats,
    output_path: Union[str, Path],
    overwrite: bool = False
) -> Path:
    """
    Save the final population with its summary header.

    Output format:
        Accuracy: 73.4812%
        Perfect fits: 12
        12 645 24
        ...

    Empty organisms are not written.

    Args:
        population: Population to save
        stats: Summary statistics for the header
        output_path: Path for output file
        overwrite: If True, overwrite existing file

    Returns:
        Path to saved file

    Raises:
        FileExistsError: If file exists and overwrite=False
    """
    output_path = Path(output_path)

    if output_path.exists() and not overwrite:
        raise FileExistsError(f"Output file already exists: {output_path}")

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(f"Accuracy: {format_accuracy(stats)}\n")
        f.write(f"Perfect fits: {stats.perfect_fits}\n")

        for organism in population:
            if not organism.is_empty():
                f.write(" ".join(str(gene) for gene in organism) + "\n")

    return output_path


def save_generation_log(
    records: Sequence[GenerationRecord],
    output_path: Union[str, Path],
    overwrite: bool = False
) -> Path:
    """
    Save per-generation records to CSV file.

    Args:
        records: GenerationRecord objects in generation order
        output_path: Path for output CSV
        overwrite: If True, overwrite existing file

    Returns:
        Path to saved log

    Raises:
        FileExistsError: If file exists and overwrite=False
    """
    output_path = Path(output_path)

    if output_path.exists() and not overwrite:
        raise FileExistsError(f"Generation log already exists: {output_path}")

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=GENERATION_LOG_FIELDS)
        writer.writeheader()

        for record in records:
            writer.writerow(record.to_dict())

    return output_path

