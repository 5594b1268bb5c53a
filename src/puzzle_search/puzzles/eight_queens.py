"""Eight queens, placed one row at a time."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

BOARD_SIZE = 8

# Heuristic penalties for empty rows that are nearly or fully blocked
DEAD_ROW_PENALTY = 10
CONSTRAINED_ROW_PENALTY = 2


@dataclass(frozen=True)
class PlaceQueen:
    row: int
    col: int


def _validate_queens(queens: Sequence[Optional[int]]) -> Tuple[Optional[int], ...]:
    queens = tuple(None if q is None else int(q) for q in queens)
    if len(queens) != BOARD_SIZE:
        raise ValueError(f"Expected {BOARD_SIZE} rows, got {len(queens)}")
    for row, col in enumerate(queens):
        if col is not None and not 0 <= col < BOARD_SIZE:
            raise ValueError(f"Column for row {row} must be in 0..{BOARD_SIZE - 1}, got {col}")
    return queens


@dataclass(frozen=True)
class EightQueensState:
    """queens[row] is the queen's column in that row, or None."""
    queens: Tuple[Optional[int], ...] = (None,) * BOARD_SIZE

    def __post_init__(self) -> None:
        object.__setattr__(self, 'queens', _validate_queens(self.queens))

    @property
    def queens_placed(self) -> int:
        return sum(1 for q in self.queens if q is not None)

    @property
    def first_empty_row(self) -> Optional[int]:
        for row, col in enumerate(self.queens):
            if col is None:
                return row
        return None

    def is_valid_placement(self, row: int, col: int) -> bool:
        """True if a queen at (row, col) shares no column or diagonal with another."""
        for r, c in enumerate(self.queens):
            if c is None:
                continue
            if c == col or abs(r - row) == abs(c - col):
                return False
        return True

    def valid_columns(self, row: int) -> List[int]:
        return [col for col in range(BOARD_SIZE) if self.is_valid_placement(row, col)]

    def count_conflicts(self) -> int:
        """Column repeats plus attacking diagonal pairs."""
        conflicts = 0
        for col in range(BOARD_SIZE):
            count = sum(1 for c in self.queens if c == col)
            if count > 1:
                conflicts += count - 1

        for row1, col1 in enumerate(self.queens):
            if col1 is None:
                continue
            for row2 in range(row1 + 1, BOARD_SIZE):
                col2 = self.queens[row2]
                if col2 is not None and abs(row2 - row1) == abs(col2 - col1):
                    conflicts += 1

        return conflicts

    def apply_placement(self, placement: PlaceQueen) -> Optional['EightQueensState']:
        if not (0 <= placement.row < BOARD_SIZE and 0 <= placement.col < BOARD_SIZE):
            return None
        if not self.is_valid_placement(placement.row, placement.col):
            return None
        queens = list(self.queens)
        queens[placement.row] = placement.col
        return EightQueensState(tuple(queens))

    def remove_queen(self, row: int) -> 'EightQueensState':
        if not 0 <= row < BOARD_SIZE:
            return self
        queens = list(self.queens)
        queens[row] = None
        return EightQueensState(tuple(queens))

    def is_goal(self) -> bool:
        return self.queens_placed == BOARD_SIZE and self.count_conflicts() == 0

    def heuristic(self) -> int:
        """Conflicts plus missing queens plus a penalty for blocked rows."""
        missing = BOARD_SIZE - self.queens_placed
        penalty = 0
        for row, col in enumerate(self.queens):
            if col is not None:
                continue
            options = len(self.valid_columns(row))
            if options == 0:
                penalty += DEAD_ROW_PENALTY
            elif options == 1:
                penalty += CONSTRAINED_ROW_PENALTY
        return self.count_conflicts() + missing + penalty

    def successors(self) -> List[Tuple[PlaceQueen, 'EightQueensState']]:
        row = self.first_empty_row
        if row is None:
            return []

        successors = []
        for col in range(BOARD_SIZE):
            placement = PlaceQueen(row=row, col=col)
            new_state = self.apply_placement(placement)
            if new_state is not None:
                successors.append((placement, new_state))
        return successors

    def to_dict(self) -> Dict[str, Any]:
        return {'queens': list(self.queens), 'conflicts': self.count_conflicts()}

    def __str__(self) -> str:
        return "\n".join(
            " ".join("Q" if col == c else "." for c in range(BOARD_SIZE))
            for col in self.queens
        )
