"""Best-first search agent for the sliding-tile puzzle.

The agent pops the lowest-priority frontier node, tests it against the goal,
and otherwise expands it into its four directional successors. Priorities
come from the configured heuristic, optionally plus the path cost (A*-like).
A search ends in one of three states:
- solved: the goal was popped from the frontier
- exhausted: the frontier emptied, so the goal is unreachable
- budget_exceeded: the iteration budget ran out first
"""

import logging
import time
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from slide_solver.core.data_models import (
    DIRECTIONAL_MOVES, GridState, Move, format_states
)
from slide_solver.search.heuristics import (
    EvaluationMode, HeuristicFn, HeuristicType, compute_priority, get_heuristic,
    parse_evaluation_mode, parse_heuristic
)
from slide_solver.search.memory import FrontierEmpty, SearchMemory
from slide_solver.search.tree import SearchNode

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITERATIONS = 1_000_000


class SearchStatus(str, Enum):
    """Lifecycle of a search agent."""
    READY = "ready"
    RUNNING = "running"
    SOLVED = "solved"
    EXHAUSTED = "exhausted"
    BUDGET_EXCEEDED = "budget_exceeded"


@dataclass
class SearchConfig:
    """Configuration for best-first search."""
    evaluation_mode: EvaluationMode = EvaluationMode.COST_PLUS_HEURISTIC
    heuristic: HeuristicType = HeuristicType.MANHATTAN
    max_iterations: int = DEFAULT_MAX_ITERATIONS

    def __post_init__(self) -> None:
        self.evaluation_mode = parse_evaluation_mode(self.evaluation_mode)
        self.heuristic = parse_heuristic(self.heuristic)
        _check_budget(self.max_iterations)

    @classmethod
    def from_config(cls, cfg: Any) -> "SearchConfig":
        """Build a SearchConfig from the ``search`` section of a loaded config.

        Args:
            cfg: Full configuration (DictConfig or mapping)

        Returns:
            SearchConfig with defaults for any missing keys
        """
        search_cfg = cfg.get('search', {}) if cfg is not None else {}
        search_cfg = search_cfg or {}
        defaults = cls()
        return cls(
            evaluation_mode=search_cfg.get('evaluation_mode', defaults.evaluation_mode),
            heuristic=search_cfg.get('heuristic', defaults.heuristic),
            max_iterations=int(search_cfg.get('max_iterations', defaults.max_iterations)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'evaluation_mode': self.evaluation_mode.value,
            'heuristic': self.heuristic.value,
            'max_iterations': self.max_iterations
        }


def _check_budget(max_iterations: int) -> None:
    if isinstance(max_iterations, bool) or not isinstance(max_iterations, int) or max_iterations < 1:
        raise ValueError(f"max_iterations must be a positive integer, got {max_iterations!r}")


@dataclass
class SearchStatistics:
    """Counters collected during one run."""
    nodes_expanded: int = 0
    nodes_generated: int = 0
    duplicate_states: int = 0
    replacements: int = 0
    max_depth_reached: int = 0
    peak_frontier_size: int = 0
    heuristic_computations: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Solution:
    """Path found by the agent.

    ``states`` and ``moves`` run from the goal back to the initial state, the
    order in which the tree is walked. ``moves[i]`` produced ``states[i]``;
    the initial state's move is ``Move.NONE``.
    """
    states: List[GridState]
    moves: List[Move]
    steps: int

    def forward_states(self) -> List[GridState]:
        """States from the initial state to the goal."""
        return list(reversed(self.states))

    def forward_moves(self) -> List[Move]:
        """Moves to play from the initial state to reach the goal."""
        return [move for move in reversed(self.moves) if move is not Move.NONE]

    def render(self) -> str:
        return format_states(self.forward_states())

    def to_dict(self) -> Dict[str, Any]:
        return {
            'steps': self.steps,
            'moves': [move.value for move in self.forward_moves()],
            'states': [state.to_list() for state in self.forward_states()]
        }


@dataclass
class SearchResult:
    """Result of a search run."""
    status: SearchStatus
    solution: Optional[Solution] = None
    statistics: SearchStatistics = field(default_factory=SearchStatistics)
    iterations: int = 0
    computation_time: float = 0.0
    evaluation_mode: EvaluationMode = EvaluationMode.COST_PLUS_HEURISTIC
    heuristic: HeuristicType = HeuristicType.MANHATTAN

    @property
    def success(self) -> bool:
        return self.status is SearchStatus.SOLVED

    @property
    def termination_reason(self) -> str:
        return self.status.value

    def to_dict(self) -> Dict[str, Any]:
        return {
            'success': self.success,
            'status': self.status.value,
            'evaluation_mode': self.evaluation_mode.value,
            'heuristic': self.heuristic.value,
            'iterations': self.iterations,
            'computation_time': self.computation_time,
            'solution': self.solution.to_dict() if self.solution else None,
            'search_stats': self.statistics.to_dict()
        }


class SearchAgent:
    """Best-first graph search from an initial state to a goal state."""

    def __init__(self, initial: GridState, goal: GridState, config: Optional[SearchConfig] = None):
        """Initialize the agent and seed the frontier with the initial state.

        Args:
            initial: Starting state
            goal: Goal state
            config: Search configuration parameters

        Raises:
            ValueError: If the two states have different dimensions
        """
        if initial.dimension != goal.dimension:
            raise ValueError(
                f"Initial state is {initial.dimension.rows}x{initial.dimension.cols} "
                f"but goal is {goal.dimension.rows}x{goal.dimension.cols}"
            )

        self.initial = initial
        self.goal = goal
        self.config = config or SearchConfig()
        self.status = SearchStatus.READY
        self.statistics = SearchStatistics()
        self._seed(self.config.evaluation_mode, self.config.heuristic)

        logger.info(f"Search agent initialized: {self.config.evaluation_mode.value}/"
                    f"{self.config.heuristic.value}, max_iterations={self.config.max_iterations}")

    def _seed(self, mode: EvaluationMode, heuristic: HeuristicType) -> None:
        heuristic_fn = get_heuristic(heuristic)
        root_priority = compute_priority(mode, heuristic_fn(self.initial, self.goal), 0)
        self.memory = SearchMemory(self.initial, root_priority)
        self._seeded_with = (mode, heuristic)

    def run(self,
            evaluation_mode: Union[str, EvaluationMode, None] = None,
            heuristic: Union[str, HeuristicType, None] = None,
            max_iterations: Optional[int] = None) -> SearchResult:
        """Search for a path to the goal.

        Arguments left as None fall back to the agent's SearchConfig. Running
        an agent a second time starts over from a freshly seeded memory.

        Args:
            evaluation_mode: pure_heuristic or cost_plus_heuristic
            heuristic: misplaced, manhattan or inversions
            max_iterations: Maximum number of node expansions

        Returns:
            SearchResult whose status is SOLVED, EXHAUSTED or BUDGET_EXCEEDED

        Raises:
            ValueError: If an option is unknown or the budget is not positive
        """
        mode = self.config.evaluation_mode if evaluation_mode is None else parse_evaluation_mode(evaluation_mode)
        heuristic_type = self.config.heuristic if heuristic is None else parse_heuristic(heuristic)
        budget = self.config.max_iterations if max_iterations is None else max_iterations
        _check_budget(budget)

        if self.status is not SearchStatus.READY or self._seeded_with != (mode, heuristic_type):
            self._seed(mode, heuristic_type)
        self.statistics = SearchStatistics()
        self.status = SearchStatus.RUNNING

        heuristic_fn = get_heuristic(heuristic_type)
        solution: Optional[Solution] = None
        iterations = 0
        remaining = budget

        logger.info(f"Starting search ({mode.value}/{heuristic_type.value}, budget {budget})")
        start_time = time.perf_counter()

        while True:
            try:
                node, _ = self.memory.pop_best()
            except FrontierEmpty:
                self.status = SearchStatus.EXHAUSTED
                break

            if node.state == self.goal:
                self.status = SearchStatus.SOLVED
                solution = self.reconstruct_solution(node.node_id)
                break

            self.memory.mark_explored(node)
            self._expand(node, mode, heuristic_fn)
            iterations += 1

            remaining -= 1
            if remaining == 0:
                self.status = SearchStatus.BUDGET_EXCEEDED
                break

        computation_time = time.perf_counter() - start_time
        logger.info(f"Search finished: {self.status.value} after {iterations} iterations, "
                    f"{self.statistics.nodes_expanded} nodes expanded in {computation_time:.3f}s")

        return SearchResult(
            status=self.status,
            solution=solution,
            statistics=self.statistics,
            iterations=iterations,
            computation_time=computation_time,
            evaluation_mode=mode,
            heuristic=heuristic_type,
        )

    def _expand(self, node: SearchNode, mode: EvaluationMode, heuristic_fn: HeuristicFn) -> None:
        """Score the four successors of ``node`` and update the frontier.

        Boundary no-op moves reproduce the parent's state, which is already
        explored, so they are rejected by the duplicate check.
        """
        memory = self.memory
        stats = self.statistics
        path_cost = node.path_cost + 1

        stats.nodes_expanded += 1
        stats.max_depth_reached = max(stats.max_depth_reached, node.depth)

        for move in DIRECTIONAL_MOVES:
            child = node.state.apply(move)
            stats.nodes_generated += 1

            if memory.is_explored(child):
                stats.duplicate_states += 1
                continue

            queued = memory.frontier_node(child)
            if queued is not None and queued.path_cost <= path_cost:
                stats.duplicate_states += 1
                continue

            priority = compute_priority(mode, heuristic_fn(child, self.goal), path_cost)
            stats.heuristic_computations += 1

            if queued is None:
                memory.insert(node.node_id, child, move, path_cost, priority)
            else:
                memory.replace_if_better(node.node_id, child, move, path_cost, priority)
                stats.replacements += 1

        stats.peak_frontier_size = max(stats.peak_frontier_size, len(memory.frontier))

    def reconstruct_solution(self, node_id: int) -> Solution:
        """Walk from ``node_id`` back to the root.

        Returns:
            Solution with states in node-to-root order and the number of
            edges traversed as ``steps``
        """
        path = self.memory.tree.path_to_root(node_id)
        return Solution(
            states=[node.state for node in path],
            moves=[node.move for node in path],
            steps=len(path) - 1,
        )

    def get_search_stats(self) -> Dict[str, Any]:
        """Current statistics plus memory sizes."""
        stats = self.statistics.to_dict()
        stats.update({
            'status': self.status.value,
            'frontier_size': len(self.memory.frontier),
            'explored_size': len(self.memory.explored),
            'tree_size': len(self.memory.tree)
        })
        return stats


def create_search_agent(initial: GridState,
                        goal: GridState,
                        evaluation_mode: Union[str, EvaluationMode, None] = None,
                        heuristic: Union[str, HeuristicType, None] = None,
                        max_iterations: Optional[int] = None) -> SearchAgent:
    """Factory function to create a configured search agent.

    Options not given explicitly are read from the global configuration when
    one has been loaded, and otherwise take the SearchConfig defaults.

    Args:
        initial: Starting state
        goal: Goal state
        evaluation_mode: pure_heuristic or cost_plus_heuristic
        heuristic: misplaced, manhattan or inversions
        max_iterations: Maximum number of node expansions

    Returns:
        Configured SearchAgent instance
    """
    from slide_solver.config import get_config

    base = SearchConfig.from_config(get_config())
    config = SearchConfig(
        evaluation_mode=base.evaluation_mode if evaluation_mode is None else evaluation_mode,
        heuristic=base.heuristic if heuristic is None else heuristic,
        max_iterations=base.max_iterations if max_iterations is None else max_iterations,
    )
    return SearchAgent(initial, goal, config)


def solve(initial: GridState,
          goal: GridState,
          evaluation_mode: Union[str, EvaluationMode, None] = None,
          heuristic: Union[str, HeuristicType, None] = None,
          max_iterations: Optional[int] = None) -> SearchResult:
    """Create an agent and run it once."""
    return create_search_agent(initial, goal, evaluation_mode, heuristic, max_iterations).run()
