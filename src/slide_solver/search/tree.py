"""Search tree stored as an arena of nodes keyed by integer id."""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from slide_solver.core.data_models import GridState, Move


@dataclass(frozen=True)
class SearchNode:
    """Node in the search tree."""
    node_id: int
    state: GridState
    move: Move  # Move that produced this state from the parent
    path_cost: int  # g(n) - number of moves from the root
    parent_id: Optional[int] = None
    depth: int = 0

    @property
    def is_root(self) -> bool:
        return self.parent_id is None


class SearchTree:
    """Owns every SearchNode discovered during one search.

    Nodes reference their parent by id; children lists allow a node to be
    dropped together with its subtree. The root is created with the tree and
    can never be removed.
    """

    def __init__(self, root_state: GridState):
        self._nodes: Dict[int, SearchNode] = {}
        self._children: Dict[int, List[int]] = {}
        self._next_id = 0
        self.root_id = self._add(SearchNode(
            node_id=self._allocate_id(),
            state=root_state,
            move=Move.NONE,
            path_cost=0,
        ))

    def _allocate_id(self) -> int:
        node_id = self._next_id
        self._next_id += 1
        return node_id

    def _add(self, node: SearchNode) -> int:
        self._nodes[node.node_id] = node
        self._children[node.node_id] = []
        return node.node_id

    @property
    def root(self) -> SearchNode:
        return self._nodes[self.root_id]

    def append(self, parent_id: int, state: GridState, move: Move,
               path_cost: Optional[int] = None) -> SearchNode:
        """Create a child of ``parent_id``.

        Args:
            parent_id: Id of an existing node
            state: State reached by the move
            move: Move applied to the parent's state
            path_cost: Accumulated cost; defaults to the parent's cost plus one

        Returns:
            The new node

        Raises:
            KeyError: If ``parent_id`` is not in the tree
        """
        parent = self._nodes[parent_id]
        node = SearchNode(
            node_id=self._allocate_id(),
            state=state,
            move=move,
            path_cost=parent.path_cost + 1 if path_cost is None else path_cost,
            parent_id=parent_id,
            depth=parent.depth + 1,
        )
        self._add(node)
        self._children[parent_id].append(node.node_id)
        return node

    def get(self, node_id: int) -> SearchNode:
        return self._nodes[node_id]

    def children(self, node_id: int) -> List[int]:
        return list(self._children[node_id])

    def remove(self, node_id: int) -> int:
        """Drop a node and all of its descendants.

        Returns:
            Number of nodes removed
        """
        if node_id == self.root_id:
            raise ValueError("The root node cannot be removed")

        node = self._nodes[node_id]
        self._children[node.parent_id].remove(node_id)

        removed = 0
        pending = [node_id]
        while pending:
            current = pending.pop()
            pending.extend(self._children.pop(current))
            del self._nodes[current]
            removed += 1
        return removed

    def ancestors(self, node_id: int) -> Iterator[SearchNode]:
        """Yield the node itself and then each ancestor up to the root."""
        current: Optional[int] = node_id
        while current is not None:
            node = self._nodes[current]
            yield node
            current = node.parent_id

    def path_to_root(self, node_id: int) -> List[SearchNode]:
        return list(self.ancestors(node_id))

    def __contains__(self, node_id: int) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)
