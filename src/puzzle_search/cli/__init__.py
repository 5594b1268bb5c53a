"""Command-line interface for puzzle-search.

This module provides CLI commands for listing and solving puzzles.
"""

from .main import main_cli, create_parser
from .commands import PuzzleSolver, solve_command, advise_command, list_command, config_command
from .utils import setup_logging, save_results

__all__ = [
    'main_cli',
    'create_parser',
    'PuzzleSolver',
    'solve_command',
    'advise_command',
    'list_command',
    'config_command',
    'setup_logging',
    'save_results'
]
