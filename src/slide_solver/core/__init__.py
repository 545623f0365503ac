"""Puzzle state representation."""

from .data_models import (
    BLANK, DIRECTIONAL_MOVES, Dimension, GridState, InvalidArrangement, Move,
    format_grid, format_states
)

__all__ = [
    'BLANK',
    'DIRECTIONAL_MOVES',
    'Dimension',
    'GridState',
    'InvalidArrangement',
    'Move',
    'format_grid',
    'format_states'
]
