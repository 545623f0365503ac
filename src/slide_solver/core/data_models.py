"""Core data models for the sliding-tile puzzle solver."""

from enum import Enum
from functools import lru_cache
from typing import Iterable, List, NamedTuple, Optional, Sequence, Tuple, Union
import numpy as np

# Label reserved for the empty slot.
BLANK = 0
BLANK_GLYPH = "_"

Position = Tuple[int, int]  # (row, col) position in the grid
Arrangement = Union[Sequence[int], np.ndarray]
RandomSource = Union[None, int, np.random.Generator]


class InvalidArrangement(ValueError):
    """Raised when a tile arrangement cannot form a valid grid state."""
    pass


class Dimension(NamedTuple):
    """Grid size as (rows, cols)."""
    rows: int
    cols: int

    @property
    def size(self) -> int:
        return self.rows * self.cols


class Move(Enum):
    """Direction the blank travels."""

    NONE = "none"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> Position:
        return _MOVE_DELTAS[self]

    @property
    def opposite(self) -> "Move":
        return _MOVE_OPPOSITES[self]


_MOVE_DELTAS = {
    Move.NONE: (0, 0),
    Move.UP: (-1, 0),
    Move.DOWN: (1, 0),
    Move.LEFT: (0, -1),
    Move.RIGHT: (0, 1),
}

_MOVE_OPPOSITES = {
    Move.NONE: Move.NONE,
    Move.UP: Move.DOWN,
    Move.DOWN: Move.UP,
    Move.LEFT: Move.RIGHT,
    Move.RIGHT: Move.LEFT,
}

# Order in which successors are generated during expansion.
DIRECTIONAL_MOVES: Tuple[Move, ...] = (Move.UP, Move.DOWN, Move.LEFT, Move.RIGHT)


@lru_cache(maxsize=None)
def _cell_coordinates(dimension: Dimension) -> Tuple[np.ndarray, np.ndarray]:
    """Row and column index of every cell in row-major order."""
    rows, cols = np.divmod(np.arange(dimension.size), dimension.cols)
    rows.setflags(write=False)
    cols.setflags(write=False)
    return rows, cols


def _as_dimension(dimension: Union[Dimension, Tuple[int, int]]) -> Dimension:
    try:
        rows, cols = dimension
    except (TypeError, ValueError):
        raise InvalidArrangement(f"Dimension must be a (rows, cols) pair, got {dimension!r}") from None

    for value in (rows, cols):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < 1:
            raise InvalidArrangement(
                f"Grid dimensions must be positive integers, got {rows}x{cols}"
            )
    return Dimension(int(rows), int(cols))


class GridState:
    """Immutable tile arrangement with a tracked blank.

    Equality and hashing depend on the arrangement only, so instances can be
    used directly as dictionary keys by the search memory. Every transformation
    returns a new instance; the underlying array is read-only.
    """

    __slots__ = ('_tiles', '_blank', '_dimension', '_key', '_hash', '_positions')

    def __init__(self, dimension: Union[Dimension, Tuple[int, int]], arrangement: Arrangement):
        """Build a state from a flat row-major arrangement.

        Args:
            dimension: Grid size as (rows, cols)
            arrangement: Flat sequence of rows*cols labels

        Raises:
            InvalidArrangement: If the length is wrong, the blank is missing,
                or the labels are not a permutation of 0..rows*cols-1
        """
        dimension = _as_dimension(dimension)
        try:
            flat = np.asarray(arrangement)
        except ValueError:
            raise InvalidArrangement(
                "Arrangement must be a flat or rectangular sequence of labels"
            ) from None

        if flat.size and not np.issubdtype(flat.dtype, np.integer):
            raise InvalidArrangement(f"Tile labels must be integers, got dtype {flat.dtype}")
        flat = flat.ravel()

        if flat.size != dimension.size:
            raise InvalidArrangement(
                f"Arrangement has {flat.size} labels, expected {dimension.size} "
                f"for a {dimension.rows}x{dimension.cols} grid"
            )
        if not np.any(flat == BLANK):
            raise InvalidArrangement("Arrangement contains no blank")
        if not np.array_equal(np.sort(flat), np.arange(dimension.size)):
            raise InvalidArrangement(
                f"Arrangement must contain each label 0..{dimension.size - 1} exactly once"
            )

        # Narrowed only once every label is known to be in range
        tiles = flat.astype(np.int32).reshape(dimension)
        blank = np.argwhere(tiles == BLANK)[0]
        self._init(dimension, tiles, (int(blank[0]), int(blank[1])))

    def _init(self, dimension: Dimension, tiles: np.ndarray, blank: Position) -> None:
        tiles.setflags(write=False)
        self._dimension = dimension
        self._tiles = tiles
        self._blank = blank
        self._key = tiles.tobytes()
        self._hash = hash((dimension, self._key))
        self._positions: Optional[np.ndarray] = None

    @classmethod
    def _from_trusted(cls, dimension: Dimension, tiles: np.ndarray, blank: Position) -> "GridState":
        """Wrap an array already known to be a valid arrangement."""
        state = cls.__new__(cls)
        state._init(dimension, tiles, blank)
        return state

    @classmethod
    def from_sequence(cls, dimension: Union[Dimension, Tuple[int, int]],
                      arrangement: Arrangement) -> "GridState":
        return cls(dimension, arrangement)

    @classmethod
    def solved(cls, dimension: Union[Dimension, Tuple[int, int]]) -> "GridState":
        """Canonical goal: labels 1..N-1 in order followed by the blank."""
        dimension = _as_dimension(dimension)
        return cls(dimension, list(range(1, dimension.size)) + [BLANK])

    @classmethod
    def randomized(cls, dimension: Union[Dimension, Tuple[int, int]],
                   rng: RandomSource = None) -> "GridState":
        """Uniformly random permutation of the labels.

        The result is not guaranteed to be solvable relative to any goal; use
        ``scrambled`` when a reachable start is needed.

        Args:
            dimension: Grid size as (rows, cols)
            rng: Seed or numpy Generator

        Returns:
            New random state
        """
        dimension = _as_dimension(dimension)
        generator = np.random.default_rng(rng)
        return cls(dimension, generator.permutation(dimension.size))

    @classmethod
    def scrambled(cls, goal: "GridState", moves: int, rng: RandomSource = None) -> "GridState":
        """Random walk of legal blank moves starting from ``goal``.

        The walk never immediately undoes its previous move, unless that is
        the only legal move left. The result is always reachable from (and
        therefore solvable relative to) ``goal``.

        Args:
            goal: State the walk starts from
            moves: Number of moves to apply
            rng: Seed or numpy Generator

        Returns:
            Scrambled state
        """
        generator = np.random.default_rng(rng)
        state = goal
        previous: Optional[Move] = None

        for _ in range(moves):
            legal = state.legal_moves()
            if not legal:
                break
            candidates = [m for m in legal if previous is None or m is not previous.opposite]
            if not candidates:
                candidates = legal
            move = candidates[int(generator.integers(len(candidates)))]
            state = state.apply(move)
            previous = move

        return state

    @property
    def dimension(self) -> Dimension:
        return self._dimension

    @property
    def size(self) -> int:
        return self._dimension.size

    @property
    def blank(self) -> Position:
        return self._blank

    @property
    def tiles(self) -> np.ndarray:
        """Read-only 2D view of the arrangement."""
        return self._tiles

    def to_list(self) -> List[int]:
        """Flat row-major labels."""
        return self._tiles.ravel().tolist()

    def _in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self._dimension.rows and 0 <= col < self._dimension.cols

    def legal_moves(self) -> List[Move]:
        """Directional moves that actually move the blank."""
        row, col = self._blank
        return [
            move for move in DIRECTIONAL_MOVES
            if self._in_bounds(row + move.delta[0], col + move.delta[1])
        ]

    def apply(self, move: Move) -> "GridState":
        """Slide the blank one step in ``move``'s direction.

        Moves that would push the blank off the grid leave the arrangement
        unchanged and return an equal state.
        """
        row, col = self._blank
        d_row, d_col = move.delta
        new_row, new_col = row + d_row, col + d_col

        if move is Move.NONE or not self._in_bounds(new_row, new_col):
            return self

        tiles = self._tiles.copy()
        tiles[row, col], tiles[new_row, new_col] = tiles[new_row, new_col], tiles[row, col]
        return GridState._from_trusted(self._dimension, tiles, (new_row, new_col))

    def is_goal(self, goal: "GridState") -> bool:
        """Exact structural match against ``goal``."""
        return self == goal

    def misplaced_count(self, goal: "GridState") -> int:
        """Number of non-blank cells whose label differs from ``goal``."""
        tiles = self._tiles
        return int(np.count_nonzero((tiles != goal._tiles) & (tiles != BLANK)))

    def label_positions(self) -> np.ndarray:
        """Array mapping each label to its (row, col) in this state."""
        if self._positions is None:
            rows, cols = _cell_coordinates(self._dimension)
            positions = np.empty((self.size, 2), dtype=np.int64)
            positions[self._tiles.ravel()] = np.column_stack((rows, cols))
            positions.setflags(write=False)
            self._positions = positions
        return self._positions

    def manhattan_distance(self, goal: "GridState") -> int:
        """Sum of orthogonal distances of every non-blank tile to its goal cell."""
        labels = self._tiles.ravel()
        rows, cols = _cell_coordinates(self._dimension)
        targets = goal.label_positions()[labels]

        distances = np.abs(rows - targets[:, 0]) + np.abs(cols - targets[:, 1])
        return int(distances[labels != BLANK].sum())

    def inversion_count(self) -> int:
        """Out-of-order pairs of non-blank labels in row-major order."""
        labels = self._tiles.ravel()
        labels = labels[labels != BLANK]
        return int(np.count_nonzero(np.triu(labels[:, None] > labels[None, :], k=1)))

    def is_solvable_parity(self) -> bool:
        """Even inversion count.

        This is the odd-width rule only: for even-width grids the blank's row
        also matters, which this check deliberately ignores.
        """
        return self.inversion_count() % 2 == 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GridState):
            return NotImplemented
        return self._dimension == other._dimension and self._key == other._key

    def __hash__(self) -> int:
        return self._hash

    def __repr__(self) -> str:
        return f"GridState({tuple(self._dimension)}, {self.to_list()})"

    def __str__(self) -> str:
        return format_grid(self)


def format_grid(state: GridState) -> str:
    """Render a state as rows of labels with the blank shown as ``_``.

    Labels are right-aligned to the width of the largest label.
    """
    width = len(str(state.size - 1))
    lines = []
    for row in state.tiles:
        cells = (BLANK_GLYPH if value == BLANK else str(value) for value in row)
        lines.append(" ".join(cell.rjust(width) for cell in cells))
    return "\n".join(lines)


def format_states(states: Iterable[GridState], separator: str = "\n\n") -> str:
    """Render several states one after another."""
    return separator.join(format_grid(state) for state in states)
