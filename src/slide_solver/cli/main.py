"""Main CLI entry point for the sliding-tile puzzle solver."""

import sys
import argparse
import logging
from typing import List, Optional

from slide_solver.search.heuristics import EvaluationMode, HeuristicType

from . import commands
from .utils import setup_logging


def _add_puzzle_arguments(parser: argparse.ArgumentParser) -> None:
    """Options describing the puzzle instance, shared by solve and compare."""
    start = parser.add_mutually_exclusive_group(required=True)
    start.add_argument(
        '--initial', '-i',
        type=str,
        help='Initial arrangement, row-major, 0 is the blank (e.g. 4,5,0,6,1,8,7,3,2)'
    )
    start.add_argument(
        '--random',
        action='store_true',
        help='Start from a uniformly random arrangement (may be unsolvable)'
    )
    start.add_argument(
        '--scramble',
        type=int,
        metavar='N',
        help='Start from N random moves away from the goal'
    )

    parser.add_argument(
        '--goal', '-g',
        type=str,
        help='Goal arrangement (default: puzzle.goal from the configuration)'
    )
    parser.add_argument('--rows', type=int, help='Grid rows (default: puzzle.rows)')
    parser.add_argument('--cols', type=int, help='Grid columns (default: puzzle.cols)')
    parser.add_argument(
        '--max-iterations',
        type=int,
        help='Iteration budget (default: search.max_iterations)'
    )
    parser.add_argument(
        '--seed',
        type=int,
        help='Random seed for --random and --scramble'
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog='slide-solver',
        description='Sliding-tile puzzle solver - best-first graph search with configurable heuristics',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  slide-solver solve --initial 1,2,3,4,5,0,7,8,6     # Solve a given arrangement
  slide-solver solve --scramble 20 --seed 7           # Solve a random reachable puzzle
  slide-solver compare --scramble 15                  # Compare all 6 configurations
  slide-solver config show                            # Show current configuration
        """
    )

    # Global options
    parser.add_argument(
        '--config', '-c',
        type=str,
        help='Configuration override (e.g., search.max_iterations=5000)'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='count',
        default=0,
        help='Increase verbosity (use -v or -vv)'
    )
    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress all output except errors'
    )
    parser.add_argument(
        '--output', '-o',
        type=str,
        help='Output file for results (JSON format)'
    )

    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands',
        metavar='COMMAND'
    )

    # Solve command
    solve_parser = subparsers.add_parser(
        'solve',
        help='Solve a single puzzle',
        description='Search for a move sequence from the initial to the goal arrangement'
    )
    _add_puzzle_arguments(solve_parser)
    solve_parser.add_argument(
        '--mode', '-m',
        choices=[mode.value for mode in EvaluationMode],
        help='Evaluation mode (default: search.evaluation_mode)'
    )
    solve_parser.add_argument(
        '--heuristic', '-H',
        choices=[heuristic.value for heuristic in HeuristicType],
        help='Heuristic (default: search.heuristic)'
    )

    # Compare command
    compare_parser = subparsers.add_parser(
        'compare',
        help='Run every evaluation configuration on one puzzle',
        description='Run all evaluation mode and heuristic combinations and tabulate the results'
    )
    _add_puzzle_arguments(compare_parser)

    # Config command
    config_parser = subparsers.add_parser(
        'config',
        help='Configuration management',
        description='Inspect solver configuration'
    )
    config_subparsers = config_parser.add_subparsers(
        dest='config_action',
        help='Configuration actions'
    )
    config_subparsers.add_parser('show', help='Show current configuration')
    config_subparsers.add_parser('validate', help='Validate configuration')

    return parser


def main_cli(args: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Args:
        args: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if parsed_args.quiet:
        log_level = logging.ERROR
    elif parsed_args.verbose == 0:
        log_level = logging.WARNING
    elif parsed_args.verbose == 1:
        log_level = logging.INFO
    else:
        log_level = logging.DEBUG

    setup_logging(log_level)
    logger = logging.getLogger(__name__)

    try:
        if not parsed_args.command:
            parser.print_help()
            return 1

        if parsed_args.command == 'solve':
            return commands.solve_command(parsed_args)
        if parsed_args.command == 'compare':
            return commands.compare_command(parsed_args)
        if parsed_args.command == 'config':
            return commands.config_command(parsed_args)

        logger.error(f"Unknown command: {parsed_args.command}")
        return 1

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130


def main() -> None:
    """Entry point for console script."""
    sys.exit(main_cli())


if __name__ == '__main__':
    main()
