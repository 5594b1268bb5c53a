"""CLI command implementations."""

import json
import logging
import time
from typing import Any, Dict, List, Optional, Tuple
import numpy as np

from omegaconf import OmegaConf

from puzzle_search.config import ConfigManager, load_config, validate_config, ConfigValidationError
from puzzle_search.search.astar import AStarSearcher, SearchConfig, SearchReport
from puzzle_search.puzzles import (
    PuzzleId, PuzzleRegistry, EightPuzzleState, EightQueensState,
    MissionariesCannibalsState, XorTicTacToeState, Player, GOAL_TILES,
    pick_best_move, solve_towards
)

from .utils import parse_int_list, parse_queens, save_results, format_duration

logger = logging.getLogger(__name__)

# Distinguishes a missing key from an explicit null
_UNSET = object()


class PuzzleSolver:
    """Ties configuration, the A* searcher and the puzzle definitions together."""

    def __init__(self, config_overrides: Optional[List[str]] = None,
                 config_dir: Optional[str] = None):
        """Initialize the solver.

        Args:
            config_overrides: List of configuration overrides
            config_dir: Configuration directory (defaults to the project ``conf``)
        """
        try:
            self.config = load_config(overrides=config_overrides or [], config_dir=config_dir)
        except Exception as e:
            logger.error(f"Failed to load configuration: {e}")
            raise

        self.search_config = SearchConfig.from_config(self.config)
        self.searcher = AStarSearcher(self.search_config)
        self.registry = PuzzleRegistry.initialize()

        seed = self.config.get('development', {}).get('random_seed', None)
        self.rng = np.random.default_rng(seed)

        logger.info("Puzzle solver initialized")

    def default_goal(self) -> EightPuzzleState:
        """Goal board for the 8-puzzle from configuration."""
        goal = self.config.get('puzzles', {}).get('eight_puzzle', {}).get('goal', None)
        return EightPuzzleState(tuple(goal) if goal is not None else GOAL_TILES)

    def solve(self, puzzle_id: PuzzleId, start: Any,
              goal: Optional[EightPuzzleState] = None) -> Tuple[Dict[str, Any], SearchReport]:
        """Solve one puzzle instance.

        Args:
            puzzle_id: Which puzzle ``start`` belongs to
            start: Initial state
            goal: Target board (8-puzzle only; defaults to the configured goal)

        Returns:
            Tuple of (JSON-friendly result dictionary, SearchReport)
        """
        descriptor = self.registry.descriptor(puzzle_id)
        logger.info(f"Solving {descriptor.name}")

        if puzzle_id is PuzzleId.EIGHT_PUZZLE:
            goal = goal or self.default_goal()
            if goal.tiles == GOAL_TILES:
                report: SearchReport = self.searcher.search(start)
            else:
                report = solve_towards(start, goal, self.searcher)
        else:
            report = self.searcher.search(start)

        result = {
            'puzzle': puzzle_id.value,
            'start': start.to_dict(),
        }
        if goal is not None:
            result['goal'] = goal.to_dict()
        result.update(report.to_dict(encode_state=lambda state: state.to_dict()))
        return result, report


def build_start_state(args, solver: PuzzleSolver) -> Tuple[Any, Optional[EightPuzzleState]]:
    """Create the start state (and 8-puzzle goal) from parsed arguments.

    Raises:
        ValueError: If the arguments describe an invalid state
    """
    puzzle_id = PuzzleId(args.puzzle)

    if puzzle_id is PuzzleId.EIGHT_PUZZLE:
        if args.seed is not None:
            solver.rng = np.random.default_rng(args.seed)
        if args.tiles:
            start = EightPuzzleState(tuple(parse_int_list(args.tiles)))
        elif args.random:
            start = EightPuzzleState.random_solvable(solver.rng)
        else:
            raise ValueError("eight-puzzle needs --tiles or --random")
        goal = EightPuzzleState(tuple(parse_int_list(args.goal))) if args.goal else None
        return start, goal

    if puzzle_id is PuzzleId.MISSIONARIES_CANNIBALS:
        start = MissionariesCannibalsState(
            left_m=args.missionaries,
            left_c=args.cannibals,
            boat_left=args.boat == 'left',
        )
        if not start.is_valid():
            raise ValueError("Missionaries are outnumbered on one shore in the start state")
        return start, None

    if puzzle_id is PuzzleId.EIGHT_QUEENS:
        if args.queens:
            return EightQueensState(parse_queens(args.queens)), None
        return EightQueensState(), None

    to_move = Player(args.to_move) if args.to_move else None
    return XorTicTacToeState.from_string(args.cells or "." * 9, to_move), None


def _config_overrides(args) -> List[str]:
    overrides = []
    if getattr(args, 'timeout', None) is not None:
        overrides.append(f"search.astar.max_computation_time={args.timeout}")
    if getattr(args, 'max_states', None) is not None:
        overrides.append(f"search.astar.max_visited_states={args.max_states}")
    if getattr(args, 'config', None):
        overrides.append(args.config)
    return overrides


def solve_command(args) -> int:
    """Handle solve command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        solver = PuzzleSolver(_config_overrides(args))
        start, goal = build_start_state(args, solver)

        start_time = time.perf_counter()
        result, report = solver.solve(PuzzleId(args.puzzle), start, goal)
        total_time = time.perf_counter() - start_time

        result.update({
            'solver_version': solver.config.get('solver', {}).get('version', '0.1.0'),
            'total_time': total_time,
            'timestamp': time.time()
        })

        if args.output:
            save_results(result, args.output)
            logger.info(f"Results saved to {args.output}")

        if not args.quiet:
            print(f"Puzzle: {args.puzzle}")
            print(f"Goal found: {report.goal_found} ({report.termination_reason})")
            if report.goal_found:
                print(f"Steps: {report.total_steps}")
                for step, state in enumerate(report.path):
                    print(f"\n[{step}]")
                    print(state)
            print(f"\nExpanded nodes: {report.expanded_nodes}")
            print(f"Visited states: {report.visited_states}")
            print(f"Search time: {format_duration(report.elapsed)}")

        return 0 if report.goal_found else 1

    except Exception as e:
        logger.error(f"Solve command failed: {e}")
        return 1


def advise_command(args) -> int:
    """Suggest a rule-based tic-tac-toe move for the side to move."""
    try:
        to_move = Player(args.to_move) if args.to_move else None
        state = XorTicTacToeState.from_string(args.cells, to_move)
        move = pick_best_move(state)

        result = {
            'board': state.to_dict(),
            'player': state.to_move.value,
            'move': move,
        }
        if args.output:
            save_results(result, args.output)
        elif not args.quiet:
            print(json.dumps(result, indent=2))

        return 0 if move is not None else 1

    except Exception as e:
        logger.error(f"Advise command failed: {e}")
        return 1


def list_command(args) -> int:
    """List available puzzles."""
    registry = PuzzleRegistry.initialize()
    for descriptor in registry.descriptors:
        print(f"{descriptor.id.value:<24} {descriptor.name}: {descriptor.summary}")
    return 0


def _parse_assignment(assignment: str) -> Tuple[str, Any]:
    """Split ``key=value`` and parse the value as YAML (``null``, ``7``, ``[1, 2]``)."""
    key, sep, _ = assignment.partition('=')
    if not sep or not key:
        raise ValueError(f"Expected KEY=VALUE, got {assignment!r}")
    parsed = OmegaConf.from_dotlist([assignment])
    return key, OmegaConf.select(parsed, key)


def config_command(args) -> int:
    """Handle config command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        manager = ConfigManager()
        overrides = _config_overrides(args)

        if args.config_action == 'show':
            config = manager.load_config(overrides=overrides)
            print("Current Configuration:")
            print("=" * 50)
            print(OmegaConf.to_yaml(config, resolve=True))
            return 0

        elif args.config_action == 'validate':
            try:
                config = manager.load_config(overrides=overrides, validate=False)
                validate_config(config)
                print("Configuration is valid")
                return 0
            except ConfigValidationError as e:
                print(f"Configuration validation failed: {e}")
                return 1

        elif args.config_action == 'get':
            manager.load_config(overrides=overrides)
            value = manager.get_parameter(args.key, default=_UNSET)
            if value is _UNSET:
                print(f"Unknown configuration key: {args.key}")
                return 1
            if OmegaConf.is_config(value):
                print(OmegaConf.to_yaml(value, resolve=True).rstrip())
            else:
                print("null" if value is None else value)
            return 0

        elif args.config_action == 'save':
            manager.load_config(overrides=overrides)
            for assignment in args.assignments:
                manager.set_parameter(*_parse_assignment(assignment))
            path = manager.save_config(args.path)
            if not args.quiet:
                print(f"Configuration saved to {path}")
            return 0

        else:
            print("Unknown config action")
            return 1

    except Exception as e:
        logger.error(f"Config command failed: {e}")
        return 1
