"""Sliding-tile 8-puzzle.

Tiles are stored row-major in a 9-tuple with 0 for the blank. Moves name the
direction the blank travels. The heuristic is the sum of Manhattan distances
of every non-blank tile to its goal cell.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

from puzzle_search.search.astar import AStarSearcher, SearchReport

logger = logging.getLogger(__name__)

SIZE = 3
BLANK = 0
GOAL_TILES: Tuple[int, ...] = (1, 2, 3, 4, 5, 6, 7, 8, 0)


class SlideMove(Enum):
    """Direction the blank moves in."""
    UP = "Up"
    DOWN = "Down"
    LEFT = "Left"
    RIGHT = "Right"

    @property
    def label(self) -> str:
        return self.value


def _validate_tiles(tiles: Sequence[int]) -> Tuple[int, ...]:
    """Normalize tiles to a tuple, rejecting anything but a permutation of 0..8."""
    tiles = tuple(int(t) for t in tiles)
    if len(tiles) != SIZE * SIZE:
        raise ValueError(f"Expected {SIZE * SIZE} tiles, got {len(tiles)}")
    if sorted(tiles) != list(range(SIZE * SIZE)):
        raise ValueError(f"Tiles must be a permutation of 0..8, got {list(tiles)}")
    return tiles


def count_inversions(tiles: Sequence[int]) -> int:
    """Count tile pairs that appear in the wrong order, ignoring the blank."""
    values = [t for t in tiles if t != BLANK]
    return sum(
        1
        for i in range(len(values))
        for j in range(i + 1, len(values))
        if values[i] > values[j]
    )


def is_solvable(tiles: Sequence[int]) -> bool:
    """True when the canonical goal is reachable (even inversion parity)."""
    return count_inversions(tiles) % 2 == 0


def manhattan_distance(tiles: Sequence[int], goal: Sequence[int] = GOAL_TILES) -> int:
    """Sum of Manhattan distances of each non-blank tile to its cell in ``goal``."""
    goal_index = {tile: idx for idx, tile in enumerate(goal)}
    total = 0
    for idx, tile in enumerate(tiles):
        if tile == BLANK:
            continue
        goal_idx = goal_index[tile]
        total += abs(idx // SIZE - goal_idx // SIZE) + abs(idx % SIZE - goal_idx % SIZE)
    return total


def _blank_moves(blank: int) -> List[Tuple[SlideMove, int]]:
    """Legal (move, target index) pairs for a blank at ``blank``."""
    row, col = divmod(blank, SIZE)
    moves = []
    if row > 0:
        moves.append((SlideMove.UP, blank - SIZE))
    if row < SIZE - 1:
        moves.append((SlideMove.DOWN, blank + SIZE))
    if col > 0:
        moves.append((SlideMove.LEFT, blank - 1))
    if col < SIZE - 1:
        moves.append((SlideMove.RIGHT, blank + 1))
    return moves


def _swap(tiles: Tuple[int, ...], i: int, j: int) -> Tuple[int, ...]:
    cells = list(tiles)
    cells[i], cells[j] = cells[j], cells[i]
    return tuple(cells)


@dataclass(frozen=True)
class EightPuzzleState:
    """Immutable 3x3 sliding-tile board."""
    tiles: Tuple[int, ...] = GOAL_TILES

    def __post_init__(self) -> None:
        object.__setattr__(self, 'tiles', _validate_tiles(self.tiles))

    @classmethod
    def random_solvable(cls, rng: Optional[np.random.Generator] = None) -> 'EightPuzzleState':
        """Shuffle the goal board until the permutation is solvable.

        Args:
            rng: numpy random generator (a fresh one is created if omitted)

        Returns:
            A random board with even inversion parity
        """
        rng = rng or np.random.default_rng()
        attempts = 0
        while True:
            attempts += 1
            tiles = tuple(int(t) for t in rng.permutation(GOAL_TILES))
            if is_solvable(tiles):
                logger.debug(f"Generated solvable board after {attempts} shuffle(s)")
                return cls(tiles)

    @property
    def blank_index(self) -> int:
        return self.tiles.index(BLANK)

    def manhattan_distance(self, goal: Sequence[int] = GOAL_TILES) -> int:
        return manhattan_distance(self.tiles, goal)

    def apply_move(self, move: SlideMove) -> Optional['EightPuzzleState']:
        """Slide the blank one cell, or return None at the grid edge."""
        blank = self.blank_index
        for candidate, target in _blank_moves(blank):
            if candidate is move:
                return EightPuzzleState(_swap(self.tiles, blank, target))
        return None

    def is_goal(self) -> bool:
        return self.tiles == GOAL_TILES

    def heuristic(self) -> int:
        return self.manhattan_distance()

    def successors(self) -> List[Tuple[SlideMove, 'EightPuzzleState']]:
        blank = self.blank_index
        return [
            (move, EightPuzzleState(_swap(self.tiles, blank, target)))
            for move, target in _blank_moves(blank)
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {'tiles': list(self.tiles)}

    def __str__(self) -> str:
        rows = []
        for row in range(SIZE):
            cells = self.tiles[row * SIZE:(row + 1) * SIZE]
            rows.append(" ".join(" ." if t == BLANK else f"{t:>2}" for t in cells))
        return "\n".join(rows)


@dataclass(frozen=True)
class TargetedEightPuzzleState:
    """An 8-puzzle board bundled with the arrangement it must reach.

    Both fields take part in equality and hashing, so the ordinary engine
    can search towards any goal without a second implementation.
    """
    board: EightPuzzleState
    goal: EightPuzzleState

    def is_goal(self) -> bool:
        return self.board == self.goal

    def heuristic(self) -> int:
        return self.board.manhattan_distance(self.goal.tiles)

    def successors(self) -> List[Tuple[SlideMove, 'TargetedEightPuzzleState']]:
        return [
            (move, TargetedEightPuzzleState(board=next_board, goal=self.goal))
            for move, next_board in self.board.successors()
        ]


def can_reach(start: EightPuzzleState, goal: EightPuzzleState) -> bool:
    """True when ``goal`` is reachable from ``start`` (matching inversion parity)."""
    return count_inversions(start.tiles) % 2 == count_inversions(goal.tiles) % 2


def solve_towards(start: EightPuzzleState,
                  goal: EightPuzzleState,
                  searcher: Optional[AStarSearcher] = None) -> SearchReport[EightPuzzleState]:
    """Search from ``start`` to an arbitrary ``goal`` arrangement.

    Args:
        start: Initial board
        goal: Target board
        searcher: Searcher to use (defaults to a fresh AStarSearcher)

    Returns:
        SearchReport whose path holds plain EightPuzzleState boards
    """
    searcher = searcher or AStarSearcher()
    if not can_reach(start, goal):
        logger.warning("Goal has different inversion parity than start; search will exhaust")

    report = searcher.search(TargetedEightPuzzleState(board=start, goal=goal))
    return SearchReport(
        path=[state.board for state in report.path],
        expanded_nodes=report.expanded_nodes,
        visited_states=report.visited_states,
        goal_found=report.goal_found,
        elapsed=report.elapsed,
        termination_reason=report.termination_reason,
    )
