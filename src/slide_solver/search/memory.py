"""Search memory: frontier, frontier index, explored set and search tree.

Invariants maintained by SearchMemory:
- a state is in at most one of {frontier, explored}
- the frontier holds at most one node per state, the cheapest found so far
- every frontier or explored id refers to a live node in the tree
"""

import heapq
import itertools
import logging
from typing import Dict, Iterator, List, Optional, Tuple

from slide_solver.core.data_models import GridState, Move
from slide_solver.search.tree import SearchNode, SearchTree

logger = logging.getLogger(__name__)

_REMOVED = -1  # Placeholder id for entries invalidated in the heap


class FrontierEmpty(Exception):
    """Raised when popping from an empty frontier."""
    pass


class Frontier:
    """Min-priority queue of node ids with removal by id.

    Entries are ``[priority, sequence, node_id]`` lists in a binary heap.
    Removed entries are marked in place and skipped when popped. Ties on
    priority pop in insertion order.
    """

    def __init__(self):
        self._heap: List[list] = []
        self._entries: Dict[int, list] = {}
        self._sequence = itertools.count()

    def push(self, node_id: int, priority: float) -> None:
        """Insert ``node_id``, replacing its priority if already present."""
        if node_id in self._entries:
            self.remove(node_id)
        entry = [priority, next(self._sequence), node_id]
        self._entries[node_id] = entry
        heapq.heappush(self._heap, entry)

    def remove(self, node_id: int) -> None:
        """Remove ``node_id``.

        Raises:
            KeyError: If ``node_id`` is not queued
        """
        entry = self._entries.pop(node_id)
        entry[-1] = _REMOVED

    def pop(self) -> Tuple[int, float]:
        """Remove and return ``(node_id, priority)`` with the lowest priority.

        Raises:
            FrontierEmpty: If no entries remain
        """
        while self._heap:
            priority, _, node_id = heapq.heappop(self._heap)
            if node_id != _REMOVED:
                del self._entries[node_id]
                return node_id, priority
        raise FrontierEmpty("Frontier is empty")

    def peek(self) -> Tuple[int, float]:
        while self._heap and self._heap[0][-1] == _REMOVED:
            heapq.heappop(self._heap)
        if not self._heap:
            raise FrontierEmpty("Frontier is empty")
        priority, _, node_id = self._heap[0]
        return node_id, priority

    def priority_of(self, node_id: int) -> float:
        return self._entries[node_id][0]

    def __contains__(self, node_id: int) -> bool:
        return node_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)


class SearchMemory:
    """Everything the agent remembers during a single search."""

    def __init__(self, initial: GridState, root_priority: float = 0):
        """Create the tree and seed the frontier with its root.

        Args:
            initial: Initial state, stored as the tree root
            root_priority: Frontier priority of the root
        """
        self.tree = SearchTree(initial)
        self.frontier = Frontier()
        self.frontier_index: Dict[GridState, int] = {}
        self.explored: Dict[GridState, int] = {}

        root = self.tree.root
        self.frontier.push(root.node_id, root_priority)
        self.frontier_index[root.state] = root.node_id

    def insert(self, parent_id: int, state: GridState, move: Move,
               path_cost: int, priority: float) -> SearchNode:
        """Add ``state`` to the tree under ``parent_id`` and queue it.

        Args:
            parent_id: Id of the expanded node
            state: Successor state
            move: Move that produced ``state``
            path_cost: g(n) of the new node
            priority: Frontier priority of the new node

        Returns:
            The new node
        """
        node = self.tree.append(parent_id, state, move, path_cost)
        self.frontier.push(node.node_id, priority)
        self.frontier_index[state] = node.node_id
        return node

    def replace_if_better(self, parent_id: int, state: GridState, move: Move,
                          path_cost: int, priority: float) -> Optional[SearchNode]:
        """Swap the queued node for ``state`` with a cheaper one.

        The queued node has never been expanded, so dropping it from the tree
        removes no explored descendants.

        Returns:
            The new node, or None if ``state`` is not queued or the queued
            node is at least as cheap
        """
        old_id = self.frontier_index.get(state)
        if old_id is None:
            return None

        old = self.tree.get(old_id)
        if old.path_cost <= path_cost:
            return None

        self._remove_queued(old_id, state)
        logger.debug(f"Replaced frontier node {old_id} (cost {old.path_cost}) "
                     f"with cheaper path (cost {path_cost})")
        return self.insert(parent_id, state, move, path_cost, priority)

    def _remove_queued(self, node_id: int, state: GridState) -> None:
        self.tree.remove(node_id)
        self.frontier.remove(node_id)
        del self.frontier_index[state]

    def pop_best(self) -> Tuple[SearchNode, float]:
        """Take the lowest-priority node off the frontier.

        Raises:
            FrontierEmpty: If the frontier is empty
        """
        node_id, priority = self.frontier.pop()
        node = self.tree.get(node_id)
        del self.frontier_index[node.state]
        return node, priority

    def mark_explored(self, node: SearchNode) -> None:
        self.explored[node.state] = node.node_id

    def in_frontier(self, state: GridState) -> bool:
        return state in self.frontier_index

    def is_explored(self, state: GridState) -> bool:
        return state in self.explored

    def is_known(self, state: GridState) -> bool:
        return state in self.frontier_index or state in self.explored

    def frontier_node(self, state: GridState) -> Optional[SearchNode]:
        node_id = self.frontier_index.get(state)
        return None if node_id is None else self.tree.get(node_id)

    def frontier_nodes(self) -> Iterator[SearchNode]:
        for node_id in self.frontier_index.values():
            yield self.tree.get(node_id)
