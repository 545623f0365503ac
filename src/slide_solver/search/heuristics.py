"""Heuristics and evaluation functions for best-first search.

Heuristics are plain functions ``(state, goal) -> score`` selected by name:
- misplaced: count of non-blank tiles out of place (admissible)
- manhattan: summed orthogonal tile distances (admissible)
- inversions: out-of-order label pairs; not admissible, kept for comparison runs

The evaluation mode decides how a successor is scored:
- pure_heuristic: f(n) = h(n)
- cost_plus_heuristic: f(n) = g(n) + h(n)

Lower scores are expanded first in both modes.
"""

from enum import Enum
from typing import Callable, Dict, Union

from slide_solver.core.data_models import GridState

HeuristicFn = Callable[[GridState, GridState], int]


class HeuristicType(str, Enum):
    """Available goal-distance heuristics."""
    MISPLACED = "misplaced"
    MANHATTAN = "manhattan"
    INVERSIONS = "inversions"


class EvaluationMode(str, Enum):
    """How heuristic value and path cost combine into a priority."""
    PURE_HEURISTIC = "pure_heuristic"
    COST_PLUS_HEURISTIC = "cost_plus_heuristic"


def misplaced_tiles(state: GridState, goal: GridState) -> int:
    return state.misplaced_count(goal)


def manhattan_distance(state: GridState, goal: GridState) -> int:
    return state.manhattan_distance(goal)


def inversion_count(state: GridState, goal: GridState) -> int:
    """Inversions of ``state``; ``goal`` is unused."""
    return state.inversion_count()


HEURISTICS: Dict[HeuristicType, HeuristicFn] = {
    HeuristicType.MISPLACED: misplaced_tiles,
    HeuristicType.MANHATTAN: manhattan_distance,
    HeuristicType.INVERSIONS: inversion_count,
}

ADMISSIBLE_HEURISTICS = frozenset({HeuristicType.MISPLACED, HeuristicType.MANHATTAN})


def parse_heuristic(value: Union[str, HeuristicType]) -> HeuristicType:
    """Convert a configuration value to a HeuristicType.

    Raises:
        ValueError: If ``value`` names no known heuristic
    """
    if isinstance(value, HeuristicType):
        return value
    try:
        return HeuristicType(str(value).lower())
    except ValueError:
        valid = ", ".join(h.value for h in HeuristicType)
        raise ValueError(f"Unknown heuristic '{value}', expected one of: {valid}") from None


def parse_evaluation_mode(value: Union[str, EvaluationMode]) -> EvaluationMode:
    """Convert a configuration value to an EvaluationMode.

    Raises:
        ValueError: If ``value`` names no known mode
    """
    if isinstance(value, EvaluationMode):
        return value
    try:
        return EvaluationMode(str(value).lower())
    except ValueError:
        valid = ", ".join(m.value for m in EvaluationMode)
        raise ValueError(f"Unknown evaluation mode '{value}', expected one of: {valid}") from None


def get_heuristic(value: Union[str, HeuristicType]) -> HeuristicFn:
    """Look up the heuristic function for a name or HeuristicType."""
    return HEURISTICS[parse_heuristic(value)]


def compute_priority(mode: EvaluationMode, heuristic_value: float, path_cost: float) -> float:
    """Combine a heuristic value with the path cost of the node being scored.

    Args:
        mode: Evaluation mode
        heuristic_value: h(n)
        path_cost: g(n), the accumulated cost from the root to n

    Returns:
        Frontier priority (lower is expanded first)
    """
    if mode is EvaluationMode.PURE_HEURISTIC:
        return heuristic_value
    return heuristic_value + path_cost


def is_admissible(value: Union[str, HeuristicType]) -> bool:
    return parse_heuristic(value) in ADMISSIBLE_HEURISTICS
