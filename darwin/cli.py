"""
CLI module for the evolution engine.

Handles run configuration loading, validation, and conversion to engine
parameters.
"""

from typing import Dict, Any, Optional
from pathlib import Path
import yaml

from .data_models import Parameters


class ConfigValidationError(Exception):
    """Raised when run configuration is invalid."""
    pass


def load_run_config(config_path: str) -> Dict[str, Any]:
    """
    Load run configuration from YAML file.

    Args:
        config_path: Path to run configuration YAML file

    Returns:
        Dictionary containing run configuration

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If config is invalid
    """
    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(config_file, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML in configuration file: {e}")

    if config is None:
        raise ConfigValidationError("Configuration file is empty")

    if not isinstance(config, dict):
        raise ConfigValidationError("Configuration file must contain a mapping")

    return config


def build_run_config(
    input_path: str,
    output_path: str,
    extinction_threshold: float,
    proliferation_threshold: float,
    generations: int,
    pairs_to_crossover: int,
    generation_log: Optional[str] = None,
    plot: Optional[str] = None,
    overwrite: bool = False,
    strict_selection: bool = False
) -> Dict[str, Any]:
    """
    Build a run configuration dictionary from individual settings.

    Produces the same structure as a YAML run configuration, so command-line
    flags and config files share validation.

    Returns:
        Run configuration dictionary
    """
    output = {
        'population': output_path,
        'overwrite': overwrite,
    }
    if generation_log:
        output['generation_log'] = generation_log
    if plot:
        output['plot'] = plot

    return {
        'input': {'population': input_path},
        'output': output,
        'evolution': {
            'extinction_threshold': extinction_threshold,
            'proliferation_threshold': proliferation_threshold,
            'generations': generations,
            'pairs_to_crossover': pairs_to_crossover,
            'strict_selection': strict_selection,
        },
    }


def validate_run_config(config: Dict[str, Any]) -> None:
    """
    Validate run configuration structure.

    Args:
        config: Run configuration dictionary

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    # Check required sections
    for section in ['input', 'output', 'evolution']:
        if section not in config:
            raise ConfigValidationError(f"Missing required field: '{section}'")
        if not isinstance(config[section], dict):
            raise ConfigValidationError(f"'{section}' must be a dictionary")

    # Validate input section
    if 'population' not in config['input']:
        raise ConfigValidationError("Missing required field: 'input.population'")

    input_path = Path(config['input']['population'])
    if not input_path.exists():
        raise ConfigValidationError(f"Population file not found: {input_path}")
    if not input_path.is_file():
        raise ConfigValidationError(f"Population path is not a file: {input_path}")

    # Validate output section
    if 'population' not in config['output']:
        raise ConfigValidationError("Missing required field: 'output.population'")

    overwrite = config['output'].get('overwrite', False)
    if not isinstance(overwrite, bool):
        raise ConfigValidationError(f"'output.overwrite' must be true or false, got: {overwrite}")

    _validate_evolution_config(config['evolution'])


def _validate_evolution_config(evolution: Dict[str, Any]) -> None:
    """
    Validate the evolution section.

    Args:
        evolution: 'evolution' section of the run configuration

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    for field in ['extinction_threshold', 'proliferation_threshold']:
        if field not in evolution:
            raise ConfigValidationError(f"Missing required field: 'evolution.{field}'")

        value = evolution[field]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigValidationError(f"'evolution.{field}' must be a number, got: {value}")
        if not 0.0 <= value <= 1.0:
            raise ConfigValidationError(
                f"'evolution.{field}' must be within [0, 1], got: {value}"
            )

    for field in ['generations', 'pairs_to_crossover']:
        if field not in evolution:
            raise ConfigValidationError(f"Missing required field: 'evolution.{field}'")

        value = evolution[field]
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ConfigValidationError(
                f"'evolution.{field}' must be a positive integer, got: {value}"
            )

    strict = evolution.get('strict_selection', False)
    if not isinstance(strict, bool):
        raise ConfigValidationError(
            f"'evolution.strict_selection' must be true or false, got: {strict}"
        )


def parameters_from_config(config: Dict[str, Any]) -> Parameters:
    """
    Convert a validated run configuration into engine parameters.

    Args:
        config: Run configuration dictionary

    Returns:
        Parameters for the evolution engine

    Raises:
        ConfigValidationError: If the parameters are rejected
    """
    evolution = config['evolution']
    try:
        return Parameters(
            extinction_threshold=evolution['extinction_threshold'],
            proliferation_threshold=evolution['proliferation_threshold'],
            generations=evolution['generations'],
            pairs_to_crossover=evolution['pairs_to_crossover'],
            strict_selection=evolution.get('strict_selection', False),
        )
    except (KeyError, ValueError) as e:
        raise ConfigValidationError(f"Invalid evolution parameters: {e}")


def run_from_config(config_path: str) -> None:
    """
    Load run configuration and execute the evolution run.

    Args:
        config_path: Path to run configuration YAML file

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If config is invalid
        Various exceptions from the evolution run
    """
    print(f"Loading configuration from: {config_path}")
    config = load_run_config(config_path)
    run(config)


def run(config: Dict[str, Any]) -> None:
    """
    Validate a run configuration and execute the evolution run.

    Args:
        config: Run configuration dictionary
    """
    print("Validating configuration...")
    validate_run_config(config)

    from .orchestration import run_evolution_mode
    run_evolution_mode(config)

    print("\nRun completed successfully!")
