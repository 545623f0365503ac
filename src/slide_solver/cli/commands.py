"""CLI command implementations."""

import logging
import time
from typing import List, Optional, Tuple

import numpy as np
from omegaconf import DictConfig, OmegaConf

from slide_solver.config import (
    get_parameter, load_config, validate_config, ConfigValidationError
)
from slide_solver.core.data_models import Dimension, GridState, format_grid
from slide_solver.search.agent import create_search_agent
from slide_solver.search.heuristics import EvaluationMode, HeuristicType

from .utils import (
    create_comparison_table, format_duration, parse_arrangement, save_results
)

logger = logging.getLogger(__name__)


def load_solver_config(args) -> Optional[DictConfig]:
    """Load the Hydra configuration, applying the global ``--config`` override.

    Returns None when no configuration directory is available, in which case
    built-in defaults are used.
    """
    overrides: List[str] = []
    if getattr(args, 'config', None):
        overrides.append(args.config)

    try:
        return load_config(overrides=overrides)
    except FileNotFoundError as e:
        logger.warning(f"{e}; using built-in defaults")
        return None


def build_puzzle(args) -> Tuple[GridState, GridState]:
    """Create the initial and goal states described by the command arguments.

    Args:
        args: Parsed arguments carrying rows/cols, goal, and one of
            initial/random/scramble

    Returns:
        (initial, goal) pair

    Raises:
        InvalidArrangement: If a given arrangement is malformed
    """
    rows = args.rows if args.rows is not None else int(get_parameter('puzzle.rows', 3))
    cols = args.cols if args.cols is not None else int(get_parameter('puzzle.cols', 3))
    dimension = Dimension(rows, cols)

    if args.goal:
        goal = GridState(dimension, parse_arrangement(args.goal))
    else:
        configured_goal = get_parameter('puzzle.goal')
        if configured_goal is not None and len(configured_goal) == dimension.size:
            goal = GridState(dimension, list(configured_goal))
        else:
            goal = GridState.solved(dimension)

    rng = np.random.default_rng(args.seed)
    if args.initial:
        initial = GridState(dimension, parse_arrangement(args.initial))
    elif args.random:
        initial = GridState.randomized(dimension, rng)
    else:
        initial = GridState.scrambled(goal, args.scramble, rng)

    return initial, goal


def solve_command(args) -> int:
    """Handle solve command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 when a solution was found)
    """
    try:
        load_solver_config(args)
        initial, goal = build_puzzle(args)

        if not args.quiet:
            print(f"Goal:\n{format_grid(goal)}\n")
            print(f"Start:\n{format_grid(initial)}\n")

        agent = create_search_agent(
            initial, goal,
            evaluation_mode=args.mode,
            heuristic=args.heuristic,
            max_iterations=args.max_iterations,
        )

        start_time = time.perf_counter()
        result = agent.run()
        total_time = time.perf_counter() - start_time

        output = result.to_dict()
        output.update({
            'initial': initial.to_list(),
            'goal': goal.to_list(),
            'dimension': list(initial.dimension),
            'total_time': total_time
        })

        if args.output:
            save_results(output, args.output)
            logger.info(f"Results saved to {args.output}")

        if not args.quiet:
            print(f"Status: {result.status.value}")
            if result.solution is not None:
                moves = " ".join(move.value for move in result.solution.forward_moves())
                print(f"Steps: {result.solution.steps}")
                print(f"Moves: {moves or '(none)'}\n")
                print(result.solution.render())
                print()
            print(f"Nodes expanded: {result.statistics.nodes_expanded}")
            print(f"Computation time: {format_duration(result.computation_time)}")

        return 0 if result.success else 1

    except Exception as e:
        logger.error(f"Solve command failed: {e}")
        return 1


def compare_command(args) -> int:
    """Handle compare command: run every evaluation configuration on one puzzle.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        load_solver_config(args)
        initial, goal = build_puzzle(args)

        if not args.quiet:
            print(f"Goal:\n{format_grid(goal)}\n")
            print(f"Start:\n{format_grid(initial)}\n")

        agent = create_search_agent(initial, goal, max_iterations=args.max_iterations)
        results = []
        for mode in EvaluationMode:
            for heuristic in HeuristicType:
                result = agent.run(evaluation_mode=mode, heuristic=heuristic)
                results.append(result.to_dict())

        if args.output:
            save_results({
                'initial': initial.to_list(),
                'goal': goal.to_list(),
                'results': results
            }, args.output)
            logger.info(f"Results saved to {args.output}")

        if not args.quiet:
            print(create_comparison_table(results))

        return 0

    except Exception as e:
        logger.error(f"Compare command failed: {e}")
        return 1


def config_command(args) -> int:
    """Handle config command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        if args.config_action == 'show':
            config = load_config(overrides=[args.config] if args.config else [], validate=False)
            print("Current Configuration:")
            print("=" * 50)
            print(OmegaConf.to_yaml(config, resolve=True))
            return 0

        elif args.config_action == 'validate':
            try:
                config = load_config(overrides=[args.config] if args.config else [], validate=False)
                validate_config(config)
                print("Configuration is valid")
                return 0
            except ConfigValidationError as e:
                print(f"Configuration validation failed: {e}")
                return 1

        else:
            print("Unknown config action")
            return 1

    except Exception as e:
        logger.error(f"Config command failed: {e}")
        return 1
