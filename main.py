#!/usr/bin/env python3
"""
Darwin - Evolution Simulation

Main entry point for the evolution engine.
Reads a population file (one organism per line, whitespace-separated
integers), evolves it for a number of generations, and writes the final
population with its accuracy and perfect-fit count.
"""

import sys
import argparse
from pathlib import Path

# Add current directory to path for imports
sys.path.append(str(Path(__file__).parent))

from darwin.cli import build_run_config, run, run_from_config
from darwin.io_utils import PopulationFormatError


EXAMPLE_POPULATION = """\
  27 26 30 41 42 99
  49 1 22 51 90 92 78 51 46
  58 33 80 79 39 49 93
  46 44 69 29 62 1
  58 69
  42 28 71 1 48 97 44 33"""


def print_population_file_help():
    """Show what a valid population file looks like"""
    print("\nThe population file may only contain integers separated by whitespace,")
    print("one organism per line, for example:\n")
    print(EXAMPLE_POPULATION)


def main():
    """Main entry point with command-line argument parsing"""
    parser = argparse.ArgumentParser(
        description="Darwin - Evolution Simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 main.py -i population.txt -o evolved.txt -w 0.2 -r 0.8 -p 10 -k 3
  python3 main.py -i population.txt -o evolved.txt -w 0.2 -r 0.8 -p 50 -k 5 --log generations.csv --plot history.png
  python3 main.py --config run_config.yaml

Parameters:
  -w  extinction threshold, within [0, 1]
  -r  proliferation threshold, within [0, 1]
  -p  number of generations (positive integer)
  -k  number of pairs to cross over (a number lower than the number of organisms is recommended)
        """
    )

    parser.add_argument(
        '--config', '-c',
        metavar='FILE',
        help='Run configuration YAML file (replaces the individual flags)'
    )

    parser.add_argument('-i', dest='input', metavar='FILE', help='Input file with a population')
    parser.add_argument('-o', dest='output', metavar='FILE', help='Output file for the evolved population')
    parser.add_argument('-w', dest='extinction', type=float, metavar='W', help='Extinction threshold')
    parser.add_argument('-r', dest='proliferation', type=float, metavar='R', help='Proliferation threshold')
    parser.add_argument('-p', dest='generations', type=int, metavar='P', help='Number of generations')
    parser.add_argument('-k', dest='pairs', type=int, metavar='K', help='Number of pairs to cross over')

    parser.add_argument(
        '--log',
        metavar='FILE',
        help='Write a per-generation CSV log'
    )

    parser.add_argument(
        '--plot',
        metavar='FILE',
        help='Save a population/factor history plot (PNG)'
    )

    parser.add_argument(
        '--overwrite',
        action='store_true',
        help='Overwrite existing output files'
    )

    parser.add_argument(
        '--strict-selection',
        action='store_true',
        help='Fail instead of skipping crossover when fewer than two organisms remain'
    )

    args = parser.parse_args()

    if not args.config:
        required = {
            '-i': args.input, '-o': args.output, '-w': args.extinction,
            '-r': args.proliferation, '-p': args.generations, '-k': args.pairs,
        }
        missing = [flag for flag, value in required.items() if value is None]
        if missing:
            parser.error(f"missing required arguments: {', '.join(missing)} (or use --config)")

    try:
        if args.config:
            run_from_config(args.config)
        else:
            run(build_run_config(
                input_path=args.input,
                output_path=args.output,
                extinction_threshold=args.extinction,
                proliferation_threshold=args.proliferation,
                generations=args.generations,
                pairs_to_crossover=args.pairs,
                generation_log=args.log,
                plot=args.plot,
                overwrite=args.overwrite,
                strict_selection=args.strict_selection,
            ))

    except KeyboardInterrupt:
        print("\nOperation cancelled by user.")
        sys.exit(1)
    except PopulationFormatError as e:
        print(f"Error: {e}")
        print_population_file_help()
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
