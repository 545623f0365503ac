"""Sliding-tile puzzle solver using informed best-first graph search."""

from slide_solver.core.data_models import (
    Dimension, GridState, InvalidArrangement, Move, format_grid
)
from slide_solver.search.agent import (
    SearchAgent, SearchConfig, SearchResult, SearchStatus, Solution,
    create_search_agent, solve
)
from slide_solver.search.heuristics import EvaluationMode, HeuristicType

__version__ = "0.1.0"

__all__ = [
    'Dimension',
    'GridState',
    'InvalidArrangement',
    'Move',
    'format_grid',
    'SearchAgent',
    'SearchConfig',
    'SearchResult',
    'SearchStatus',
    'Solution',
    'create_search_agent',
    'solve',
    'EvaluationMode',
    'HeuristicType'
]
