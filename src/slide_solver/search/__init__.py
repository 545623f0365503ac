"""Search algorithms for the sliding-tile puzzle solver.

This module implements best-first graph search over puzzle states with a
configurable heuristic and evaluation mode.
"""

from .heuristics import (
    EvaluationMode, HeuristicType, compute_priority, get_heuristic,
    parse_evaluation_mode, parse_heuristic
)
from .tree import SearchNode, SearchTree
from .memory import Frontier, FrontierEmpty, SearchMemory
from .agent import (
    SearchAgent, SearchConfig, SearchResult, SearchStatistics, SearchStatus,
    Solution, create_search_agent, solve
)

__all__ = [
    'EvaluationMode',
    'HeuristicType',
    'compute_priority',
    'get_heuristic',
    'parse_evaluation_mode',
    'parse_heuristic',
    'SearchNode',
    'SearchTree',
    'Frontier',
    'FrontierEmpty',
    'SearchMemory',
    'SearchAgent',
    'SearchConfig',
    'SearchResult',
    'SearchStatistics',
    'SearchStatus',
    'Solution',
    'create_search_agent',
    'solve'
]
