"""Puzzle definitions searchable by the A* engine.

Each module supplies an immutable state type with goal test, heuristic and
successor generation. The registry below describes the available puzzles.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .eight_puzzle import (
    EightPuzzleState, SlideMove, TargetedEightPuzzleState, GOAL_TILES,
    can_reach, count_inversions, is_solvable, solve_towards
)
from .eight_queens import EightQueensState, PlaceQueen
from .missionaries_cannibals import BoatMove, MissionariesCannibalsState, BOAT_MOVES
from .xor_tic_tac_toe import (
    Player, PlaceMark, XorTicTacToeState, WINNING_LINES,
    find_winning_move, pick_best_move
)


class PuzzleId(Enum):
    EIGHT_PUZZLE = "eight-puzzle"
    XOR_TIC_TAC_TOE = "tic-tac-toe"
    MISSIONARIES_CANNIBALS = "missionaries-cannibals"
    EIGHT_QUEENS = "eight-queens"


@dataclass
class PuzzleDescriptor:
    id: PuzzleId
    name: str
    summary: str


@dataclass
class PuzzleRegistry:
    descriptors: List[PuzzleDescriptor] = field(default_factory=list)

    def descriptor(self, puzzle_id: PuzzleId) -> Optional[PuzzleDescriptor]:
        return next((d for d in self.descriptors if d.id == puzzle_id), None)

    @classmethod
    def initialize(cls) -> 'PuzzleRegistry':
        return cls([
            PuzzleDescriptor(
                PuzzleId.EIGHT_PUZZLE,
                "8-Puzzle Solver",
                "Slide tiles into place with A* and the Manhattan heuristic.",
            ),
            PuzzleDescriptor(
                PuzzleId.XOR_TIC_TAC_TOE,
                "XOR Tic-Tac-Toe",
                "Search for a forced line of three X marks.",
            ),
            PuzzleDescriptor(
                PuzzleId.MISSIONARIES_CANNIBALS,
                "Missionaries & Cannibals",
                "Get 3 missionaries and 3 cannibals across the river safely.",
            ),
            PuzzleDescriptor(
                PuzzleId.EIGHT_QUEENS,
                "8 Queens Problem",
                "Place 8 queens on a chessboard so none attack each other.",
            ),
        ])


__all__ = [
    'PuzzleId',
    'PuzzleDescriptor',
    'PuzzleRegistry',
    'EightPuzzleState',
    'SlideMove',
    'TargetedEightPuzzleState',
    'GOAL_TILES',
    'can_reach',
    'count_inversions',
    'is_solvable',
    'solve_towards',
    'EightQueensState',
    'PlaceQueen',
    'BoatMove',
    'MissionariesCannibalsState',
    'BOAT_MOVES',
    'Player',
    'PlaceMark',
    'XorTicTacToeState',
    'WINNING_LINES',
    'find_winning_move',
    'pick_best_move'
]
