"""Command-line interface for the sliding-tile puzzle solver.

This module provides CLI commands for solving and comparing puzzle instances.
"""

from .main import main_cli
from .commands import solve_command, compare_command, config_command
from .utils import setup_logging, parse_arrangement, save_results

__all__ = [
    'main_cli',
    'solve_command',
    'compare_command',
    'config_command',
    'setup_logging',
    'parse_arrangement',
    'save_results'
]
