"""Configuration validation for the sliding-tile puzzle solver."""

import logging
from typing import Any

from omegaconf import DictConfig, ListConfig, OmegaConf

from slide_solver.search.heuristics import parse_evaluation_mode, parse_heuristic

logger = logging.getLogger(__name__)


class ConfigValidationError(Exception):
    """Exception raised when configuration validation fails."""
    pass


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def validate_config(config: DictConfig) -> None:
    """Validate the complete configuration.

    Args:
        config: Configuration to validate

    Raises:
        ConfigValidationError: If validation fails
    """
    try:
        validate_puzzle_config(config.get('puzzle', {}))
        validate_search_config(config.get('search', {}))

        logger.info("Configuration validation passed")

    except Exception as e:
        raise ConfigValidationError(f"Configuration validation failed: {e}")


def validate_puzzle_config(puzzle_config: DictConfig) -> None:
    """Validate puzzle configuration section.

    Args:
        puzzle_config: Puzzle configuration section
    """
    if not puzzle_config:
        return

    rows = puzzle_config.get('rows', 3)
    cols = puzzle_config.get('cols', 3)
    for name, value in (('rows', rows), ('cols', cols)):
        if not _is_positive_int(value):
            raise ConfigValidationError(f"puzzle.{name} must be a positive integer, got {value}")

    goal = puzzle_config.get('goal', None)
    if goal is None:
        return

    if isinstance(goal, ListConfig):
        goal = OmegaConf.to_container(goal)
    if not isinstance(goal, (list, tuple)):
        raise ConfigValidationError(f"puzzle.goal must be a list of labels, got {goal}")

    size = rows * cols
    if len(goal) != size:
        raise ConfigValidationError(
            f"puzzle.goal must have {size} labels for a {rows}x{cols} grid, got {len(goal)}"
        )
    if sorted(goal) != list(range(size)):
        raise ConfigValidationError(
            f"puzzle.goal must contain each label 0..{size - 1} exactly once"
        )


def validate_search_config(search_config: DictConfig) -> None:
    """Validate search configuration section.

    Args:
        search_config: Search configuration section
    """
    if not search_config:
        return

    try:
        parse_evaluation_mode(search_config.get('evaluation_mode', 'cost_plus_heuristic'))
    except ValueError as e:
        raise ConfigValidationError(f"search.evaluation_mode: {e}") from None

    try:
        parse_heuristic(search_config.get('heuristic', 'manhattan'))
    except ValueError as e:
        raise ConfigValidationError(f"search.heuristic: {e}") from None

    max_iterations = search_config.get('max_iterations', 1_000_000)
    if not _is_positive_int(max_iterations):
        raise ConfigValidationError(
            f"search.max_iterations must be a positive integer, got {max_iterations}"
        )
