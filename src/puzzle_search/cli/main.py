"""Main CLI entry point for puzzle-search."""

import sys
import argparse
import logging
from typing import List, Optional

from puzzle_search.puzzles import PuzzleId

from . import commands
from .utils import setup_logging


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog='puzzle-search',
        description='Puzzle Search - A* solver for classic state-space puzzles',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  puzzle-search list                                        # Show puzzles
  puzzle-search solve eight-puzzle --tiles 1,2,3,4,5,6,7,0,8
  puzzle-search solve eight-puzzle --random --seed 7
  puzzle-search solve missionaries-cannibals
  puzzle-search solve eight-queens --queens 0,4,-,-,-,-,-,-
  puzzle-search advise --cells XX.OO....                    # Rule-based hint
  puzzle-search config show                                 # Show configuration
  puzzle-search config save run.yaml development.random_seed=7
        """
    )

    # Global options
    parser.add_argument(
        '--config', '-c',
        type=str,
        help='Configuration override (e.g., search.astar.max_visited_states=100000)'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='count',
        default=0,
        help='Increase verbosity (use -v or -vv)'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress all output except errors'
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        help='Output file for results (JSON format)'
    )

    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands',
        metavar='COMMAND'
    )

    # List command
    subparsers.add_parser(
        'list',
        help='List available puzzles'
    )

    # Solve command
    solve_parser = subparsers.add_parser(
        'solve',
        help='Solve a puzzle with A* search',
        description='Build a start state and search for the shortest path to the goal'
    )

    solve_parser.add_argument(
        'puzzle',
        choices=[p.value for p in PuzzleId],
        help='Puzzle to solve'
    )

    solve_parser.add_argument(
        '--timeout', '-t',
        type=float,
        default=None,
        help='Search time ceiling in seconds (default: from config, 3600)'
    )

    solve_parser.add_argument(
        '--max-states',
        type=int,
        default=None,
        help='Stop after discovering this many distinct states'
    )

    eight = solve_parser.add_argument_group('eight-puzzle')
    eight.add_argument('--tiles', type=str, help='Start tiles row-major, 0 for blank (e.g. 1,2,3,4,5,6,7,0,8)')
    eight.add_argument('--goal', type=str, help='Goal tiles (default: from config)')
    eight.add_argument('--random', action='store_true', help='Start from a random solvable board')
    eight.add_argument('--seed', type=int, default=None, help='Random seed for --random')

    river = solve_parser.add_argument_group('missionaries-cannibals')
    river.add_argument('--missionaries', type=int, default=3, help='Missionaries on the starting shore (default: 3)')
    river.add_argument('--cannibals', type=int, default=3, help='Cannibals on the starting shore (default: 3)')
    river.add_argument('--boat', choices=['left', 'right'], default='left', help='Boat side (default: left)')

    queens = solve_parser.add_argument_group('eight-queens')
    queens.add_argument('--queens', type=str, help='Column per row, "-" for empty (e.g. 0,4,-,-,-,-,-,-)')

    board = solve_parser.add_argument_group('tic-tac-toe')
    board.add_argument('--cells', type=str, help='9 cells row-major using X, O and . (default: empty)')
    board.add_argument('--to-move', choices=['X', 'O'], default=None, help='Side to move (default: inferred)')

    # Advise command
    advise_parser = subparsers.add_parser(
        'advise',
        help='Suggest a rule-based tic-tac-toe move',
        description='Pick a move by win/block/center/corner rules without search'
    )
    advise_parser.add_argument('--cells', type=str, default='.' * 9, help='9 cells row-major using X, O and .')
    advise_parser.add_argument('--to-move', choices=['X', 'O'], default=None, help='Side to move (default: inferred)')

    # Config command
    config_parser = subparsers.add_parser(
        'config',
        help='Configuration management',
        description='Inspect solver configuration'
    )

    config_subparsers = config_parser.add_subparsers(
        dest='config_action',
        help='Configuration actions'
    )

    config_subparsers.add_parser(
        'show',
        help='Show current configuration'
    )

    config_subparsers.add_parser(
        'validate',
        help='Validate configuration'
    )

    get_parser = config_subparsers.add_parser(
        'get',
        help='Print one configuration value'
    )
    get_parser.add_argument('key', help='Dotted key (e.g. search.astar.max_computation_time)')

    save_parser = config_subparsers.add_parser(
        'save',
        help='Write the effective configuration to a YAML file'
    )
    save_parser.add_argument('path', help='Output YAML file')
    save_parser.add_argument(
        'assignments',
        nargs='*',
        metavar='KEY=VALUE',
        help='Values to set before saving (e.g. development.random_seed=7)'
    )

    return parser


def main_cli(args: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Args:
        args: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if parsed_args.quiet:
        log_level = logging.ERROR
    elif parsed_args.verbose == 0:
        log_level = logging.WARNING
    elif parsed_args.verbose == 1:
        log_level = logging.INFO
    else:
        log_level = logging.DEBUG

    setup_logging(log_level)
    logger = logging.getLogger(__name__)

    try:
        if not parsed_args.command:
            parser.print_help()
            return 1

        if parsed_args.command == 'list':
            return commands.list_command(parsed_args)
        if parsed_args.command == 'solve':
            return commands.solve_command(parsed_args)
        if parsed_args.command == 'advise':
            return commands.advise_command(parsed_args)
        if parsed_args.command == 'config':
            return commands.config_command(parsed_args)

        logger.error(f"Unknown command: {parsed_args.command}")
        return 1

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130


def main() -> None:
    """Entry point for console script."""
    sys.exit(main_cli())


if __name__ == '__main__':
    main()
