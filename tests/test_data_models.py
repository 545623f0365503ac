"""Tests for core data models."""

import pytest
import numpy as np

from slide_solver.core.data_models import (
    BLANK, DIRECTIONAL_MOVES, Dimension, GridState, InvalidArrangement, Move,
    format_grid, format_states
)


class TestConstruction:
    """Test GridState construction and validation."""

    def test_valid_arrangement(self, goal):
        """Test building a state from a flat arrangement."""
        assert goal.dimension == Dimension(3, 3)
        assert goal.size == 9
        assert goal.blank == (2, 2)
        assert goal.to_list() == [1, 2, 3, 4, 5, 6, 7, 8, 0]
        assert goal.tiles.shape == (3, 3)

    def test_blank_located(self, unsolvable):
        """Test blank coordinates are cached at construction."""
        assert unsolvable.blank == (0, 2)

    def test_accepts_numpy_input(self):
        """Test numpy arrays are accepted as arrangements."""
        state = GridState(Dimension(2, 2), np.array([[1, 2], [3, 0]]))
        assert state.to_list() == [1, 2, 3, 0]

    def test_rectangular_grid(self):
        """Test non-square grids."""
        state = GridState((2, 3), [1, 2, 3, 4, 0, 5])
        assert state.dimension.rows == 2
        assert state.dimension.cols == 3
        assert state.blank == (1, 1)

    @pytest.mark.parametrize("arrangement", [
        [1, 2, 3, 4, 5, 6, 7, 8],            # too short
        [1, 2, 3, 4, 5, 6, 7, 8, 0, 9],      # too long
        [1, 1, 3, 4, 5, 6, 7, 8, 0],         # duplicate label
        [1, 2, 3, 4, 5, 6, 7, 8, 9],         # no blank
        [1, 2, 3, 4, 5, 6, 7, 8, 10],        # label out of range and no blank
        [0, 2, 3, 4, 5, 6, 7, 8, 12],        # label out of range
        [1.5, 2, 3, 4, 5, 6, 7, 8, 0],       # not integers
        [],
    ])
    def test_invalid_arrangements(self, arrangement):
        """Test malformed arrangements raise InvalidArrangement."""
        with pytest.raises(InvalidArrangement):
            GridState((3, 3), arrangement)

    @pytest.mark.parametrize("arrangement", [
        [1, 2**32],          # would wrap to the blank in 32 bits
        [0, 2**32 + 1],      # would wrap to label 1
        [0, -(2**32) + 1],
        [0, 2**70],          # beyond any integer dtype
    ])
    def test_out_of_range_labels_rejected(self, arrangement):
        """Test oversized labels are rejected rather than truncated."""
        with pytest.raises(InvalidArrangement):
            GridState((1, 2), arrangement)

    def test_out_of_range_numpy_labels_rejected(self):
        """Test wide numpy arrays are checked before narrowing."""
        with pytest.raises(InvalidArrangement):
            GridState((1, 2), np.array([0, 2**32 + 1], dtype=np.int64))

    @pytest.mark.parametrize("arrangement", [
        [[1, 2], [3]],
        [[1, 2], 3, 0],
    ])
    def test_ragged_arrangement(self, arrangement):
        """Test ragged nesting raises InvalidArrangement."""
        with pytest.raises(InvalidArrangement):
            GridState((2, 2), arrangement)

    @pytest.mark.parametrize("dimension", [(0, 3), (3, -1), (3,), "ab", (2.5, 2)])
    def test_invalid_dimensions(self, dimension):
        """Test non-positive or malformed dimensions are rejected."""
        with pytest.raises(InvalidArrangement):
            GridState(dimension, [0, 1, 2])

    def test_invalid_arrangement_is_value_error(self):
        """Test InvalidArrangement can be caught as ValueError."""
        with pytest.raises(ValueError, match="no blank"):
            GridState((1, 2), [1, 2])

    def test_tiles_are_read_only(self, goal):
        """Test the tile array cannot be mutated."""
        with pytest.raises(ValueError):
            goal.tiles[0, 0] = 5

    def test_input_not_aliased(self):
        """Test mutating the input array does not change the state."""
        source = np.array([1, 2, 3, 0])
        state = GridState((2, 2), source)
        source[0] = 3
        assert state.to_list() == [1, 2, 3, 0]

    def test_solved(self):
        """Test canonical solved arrangement."""
        assert GridState.solved((3, 3)).to_list() == [1, 2, 3, 4, 5, 6, 7, 8, 0]
        assert GridState.solved((2, 3)).to_list() == [1, 2, 3, 4, 5, 0]

    def test_randomized_is_permutation(self):
        """Test randomized states are valid permutations."""
        for seed in range(20):
            state = GridState.randomized((3, 3), rng=seed)
            assert sorted(state.to_list()) == list(range(9))
            assert state.to_list().count(BLANK) == 1

    def test_randomized_seeded(self):
        """Test the same seed reproduces the same state."""
        assert GridState.randomized((4, 4), rng=42) == GridState.randomized((4, 4), rng=42)

    def test_scrambled_is_reachable(self, goal):
        """Test scrambled states keep the goal's parity."""
        for seed in range(10):
            state = GridState.scrambled(goal, 25, rng=seed)
            assert state.is_solvable_parity() == goal.is_solvable_parity()

    def test_scrambled_zero_moves(self, goal):
        """Test a zero-move scramble returns the goal."""
        assert GridState.scrambled(goal, 0, rng=1) == goal

    def test_scrambled_narrow_grid(self):
        """Test scrambling works when only the undo move is legal."""
        start = GridState((1, 2), [1, 0])
        state = GridState.scrambled(start, 3, rng=0)
        assert state == GridState((1, 2), [0, 1])


class TestMoves:
    """Test move application."""

    def test_move_up(self, goal):
        """Test the blank travels up."""
        moved = goal.apply(Move.UP)
        assert moved == GridState((3, 3), [1, 2, 3, 4, 5, 0, 7, 8, 6])
        assert moved.blank == (1, 2)

    def test_move_sequence(self, goal):
        """Test chaining moves."""
        moved = goal.apply(Move.UP).apply(Move.LEFT)
        assert moved == GridState((3, 3), [1, 2, 3, 4, 0, 5, 7, 8, 6])

    def test_apply_returns_new_state(self, goal):
        """Test the original state is untouched."""
        goal.apply(Move.UP)
        assert goal.to_list() == [1, 2, 3, 4, 5, 6, 7, 8, 0]

    @pytest.mark.parametrize("move", [Move.DOWN, Move.RIGHT])
    def test_boundary_moves_are_noops(self, goal, move):
        """Test moves off the grid return an equal state."""
        assert goal.apply(move) == goal

    def test_none_move(self, goal):
        """Test Move.NONE leaves the state unchanged."""
        assert goal.apply(Move.NONE) == goal

    def test_boundary_noop_for_every_corner(self):
        """Test applying an off-grid move is idempotent."""
        corners = [
            ([0, 1, 2, 3, 4, 5, 6, 7, 8], (Move.UP, Move.LEFT)),
            ([1, 2, 0, 3, 4, 5, 6, 7, 8], (Move.UP, Move.RIGHT)),
            ([1, 2, 3, 4, 5, 6, 0, 7, 8], (Move.DOWN, Move.LEFT)),
            ([1, 2, 3, 4, 5, 6, 7, 8, 0], (Move.DOWN, Move.RIGHT)),
        ]
        for arrangement, blocked in corners:
            state = GridState((3, 3), arrangement)
            for move in blocked:
                assert state.apply(move) == state
                assert state.apply(move).apply(move) == state

    def test_moves_are_invertible(self):
        """Test every legal move is undone by its opposite."""
        for seed in range(10):
            state = GridState.randomized((3, 3), rng=seed)
            for move in state.legal_moves():
                assert state.apply(move).apply(move.opposite) == state

    def test_legal_moves(self, goal, unsolvable):
        """Test legal moves exclude boundary no-ops."""
        assert goal.legal_moves() == [Move.UP, Move.LEFT]
        assert unsolvable.legal_moves() == [Move.DOWN, Move.LEFT]
        center = GridState((3, 3), [1, 2, 3, 4, 0, 5, 6, 7, 8])
        assert center.legal_moves() == list(DIRECTIONAL_MOVES)

    def test_opposites(self):
        """Test move opposites."""
        assert Move.UP.opposite is Move.DOWN
        assert Move.LEFT.opposite is Move.RIGHT
        assert Move.NONE.opposite is Move.NONE

    def test_moves_preserve_permutation(self, unsolvable):
        """Test moves always yield valid arrangements."""
        state = unsolvable
        for move in [Move.DOWN, Move.LEFT, Move.LEFT, Move.UP, Move.RIGHT, Move.DOWN]:
            state = state.apply(move)
            assert sorted(state.to_list()) == list(range(9))
            row, col = state.blank
            assert state.tiles[row, col] == BLANK


class TestEqualityAndHashing:
    """Test structural equality and hashing."""

    def test_equal_states(self):
        """Test states with identical arrangements are equal."""
        a = GridState((3, 3), [1, 2, 3, 4, 5, 6, 7, 8, 0])
        b = GridState((3, 3), np.array([1, 2, 3, 4, 5, 6, 7, 8, 0]))
        assert a == b
        assert hash(a) == hash(b)

    def test_different_states(self, goal, unsolvable):
        """Test differing arrangements are unequal."""
        assert goal != unsolvable

    def test_same_labels_different_shape(self):
        """Test dimension is part of identity."""
        assert GridState((2, 3), [1, 2, 3, 4, 5, 0]) != GridState((3, 2), [1, 2, 3, 4, 5, 0])

    def test_usable_as_dict_key(self, goal):
        """Test states work as dictionary keys."""
        table = {goal: 1}
        assert table[goal.apply(Move.UP).apply(Move.DOWN)] == 1

    def test_not_equal_to_other_types(self, goal):
        """Test comparison against non-states."""
        assert goal != [1, 2, 3, 4, 5, 6, 7, 8, 0]


class TestHeuristicMeasures:
    """Test heuristic measures on GridState."""

    def test_known_values(self, goal, unsolvable):
        """Test heuristic values on a known arrangement."""
        assert unsolvable.misplaced_count(goal) == 7
        assert unsolvable.manhattan_distance(goal) == 14
        assert unsolvable.inversion_count() == 15

    def test_zero_at_goal(self, goal):
        """Test both distance heuristics are zero at the goal."""
        assert goal.misplaced_count(goal) == 0
        assert goal.manhattan_distance(goal) == 0
        assert goal.is_goal(goal)

    def test_zero_only_at_goal(self, goal):
        """Test distance heuristics are zero iff the state is the goal."""
        for seed in range(30):
            state = GridState.randomized((3, 3), rng=seed)
            at_goal = state.is_goal(goal)
            assert (state.misplaced_count(goal) == 0) == at_goal
            assert (state.manhattan_distance(goal) == 0) == at_goal

    def test_one_move_from_goal(self, goal):
        """Test heuristic values one move away from the goal."""
        state = goal.apply(Move.UP)
        assert state.misplaced_count(goal) == 1
        assert state.manhattan_distance(goal) == 1
        assert not state.is_goal(goal)

    def test_blank_not_counted(self):
        """Test the blank never contributes to misplaced count."""
        goal = GridState((2, 2), [1, 2, 3, 0])
        state = GridState((2, 2), [1, 2, 0, 3])
        assert state.misplaced_count(goal) == 1
        assert state.manhattan_distance(goal) == 1

    def test_manhattan_against_custom_goal(self):
        """Test goal positions are looked up in the goal arrangement."""
        goal = GridState((2, 2), [0, 1, 2, 3])
        state = GridState((2, 2), [3, 2, 1, 0])
        # 3: (0,0)->(1,1) = 2, 2: (0,1)->(1,0) = 2, 1: (1,0)->(0,1) = 2
        assert state.manhattan_distance(goal) == 6

    def test_label_positions(self, unsolvable):
        """Test the label to position table."""
        positions = unsolvable.label_positions()
        assert tuple(positions[0]) == (0, 2)
        assert tuple(positions[4]) == (0, 0)
        assert tuple(positions[2]) == (2, 2)

    def test_inversions_of_sorted(self, goal):
        """Test sorted arrangements have no inversions."""
        assert goal.inversion_count() == 0
        assert goal.is_solvable_parity()

    def test_parity_preserved_on_odd_width(self):
        """Test every move keeps parity on a 3-wide grid."""
        for seed in range(20):
            state = GridState.randomized((3, 3), rng=seed)
            for move in DIRECTIONAL_MOVES:
                assert state.apply(move).is_solvable_parity() == state.is_solvable_parity()

    def test_parity_on_even_width(self):
        """Test vertical moves flip parity on a 4-wide grid while horizontal ones keep it."""
        solved = GridState.solved((4, 4))
        assert solved.apply(Move.LEFT).is_solvable_parity() == solved.is_solvable_parity()
        assert solved.apply(Move.UP).is_solvable_parity() != solved.is_solvable_parity()
        assert solved.apply(Move.UP).inversion_count() == 3

    def test_unsolvable_parity(self, unsolvable):
        """Test the odd-inversion arrangement reports odd parity."""
        assert not unsolvable.is_solvable_parity()


class TestFormatting:
    """Test human-readable rendering."""

    def test_format_3x3(self, goal):
        """Test rendering with the blank placeholder."""
        assert format_grid(goal) == "1 2 3\n4 5 6\n7 8 _"
        assert str(goal) == format_grid(goal)

    def test_format_4x4_pads_labels(self):
        """Test labels are right-aligned on larger grids."""
        text = format_grid(GridState.solved((4, 4)))
        assert text.splitlines() == [
            " 1  2  3  4",
            " 5  6  7  8",
            " 9 10 11 12",
            "13 14 15  _",
        ]

    def test_format_states(self, goal):
        """Test rendering several states."""
        text = format_states([goal, goal.apply(Move.UP)])
        assert text == "1 2 3\n4 5 6\n7 8 _\n\n1 2 3\n4 5 _\n7 8 6"

    def test_repr(self):
        """Test repr shows dimension and labels."""
        assert repr(GridState((1, 2), [0, 1])) == "GridState((1, 2), [0, 1])"


if __name__ == "__main__":
    pytest.main([__file__])
