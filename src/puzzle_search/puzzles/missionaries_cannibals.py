"""Missionaries and cannibals river crossing.

The state tracks who is still on the starting (left) shore and which side
the boat is on. A shore is unsafe when missionaries there are outnumbered by
cannibals.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

TOTAL = 3
BOAT_CAPACITY = 2


@dataclass(frozen=True)
class BoatMove:
    """People carried in one crossing."""
    missionaries: int
    cannibals: int

    @property
    def load(self) -> int:
        return self.missionaries + self.cannibals

    def __str__(self) -> str:
        return f"{self.missionaries}M {self.cannibals}C"


BOAT_MOVES: Tuple[BoatMove, ...] = (
    BoatMove(1, 0),
    BoatMove(2, 0),
    BoatMove(0, 1),
    BoatMove(0, 2),
    BoatMove(1, 1),
)


def _shore_is_safe(missionaries: int, cannibals: int) -> bool:
    return missionaries == 0 or cannibals <= missionaries


@dataclass(frozen=True)
class MissionariesCannibalsState:
    """Occupants of the left shore plus boat position."""
    left_m: int = TOTAL
    left_c: int = TOTAL
    boat_left: bool = True

    def __post_init__(self) -> None:
        for name in ('left_m', 'left_c'):
            value = getattr(self, name)
            if not 0 <= value <= TOTAL:
                raise ValueError(f"{name} must be between 0 and {TOTAL}, got {value}")

    @property
    def right_m(self) -> int:
        return TOTAL - self.left_m

    @property
    def right_c(self) -> int:
        return TOTAL - self.left_c

    def is_valid(self) -> bool:
        """Check that nobody is outnumbered on either shore."""
        return (_shore_is_safe(self.left_m, self.left_c) and
                _shore_is_safe(self.right_m, self.right_c))

    def apply_move(self, move: BoatMove) -> Optional['MissionariesCannibalsState']:
        """Row ``move`` across from the boat's side, or None if illegal."""
        if move.load == 0 or move.load > BOAT_CAPACITY:
            return None

        if self.boat_left:
            if move.missionaries > self.left_m or move.cannibals > self.left_c:
                return None
            new_state = MissionariesCannibalsState(
                left_m=self.left_m - move.missionaries,
                left_c=self.left_c - move.cannibals,
                boat_left=False,
            )
        else:
            if move.missionaries > self.right_m or move.cannibals > self.right_c:
                return None
            new_state = MissionariesCannibalsState(
                left_m=self.left_m + move.missionaries,
                left_c=self.left_c + move.cannibals,
                boat_left=True,
            )

        return new_state if new_state.is_valid() else None

    def valid_moves(self) -> List[BoatMove]:
        return [move for move, _ in self.successors()]

    def is_goal(self) -> bool:
        return self.left_m == 0 and self.left_c == 0 and not self.boat_left

    def heuristic(self) -> int:
        # Everyone still on the left shore has to cross
        return self.left_m + self.left_c

    def successors(self) -> List[Tuple[BoatMove, 'MissionariesCannibalsState']]:
        moves = []
        for move in BOAT_MOVES:
            new_state = self.apply_move(move)
            if new_state is not None:
                moves.append((move, new_state))
        return moves

    def to_dict(self) -> Dict[str, Any]:
        return {
            'left': {'missionaries': self.left_m, 'cannibals': self.left_c},
            'right': {'missionaries': self.right_m, 'cannibals': self.right_c},
            'boat': 'left' if self.boat_left else 'right',
        }

    def __str__(self) -> str:
        return (f"Left:  M={self.left_m} C={self.left_c}\n"
                f"Right: M={self.right_m} C={self.right_c}\n"
                f"Boat:  {'Left' if self.boat_left else 'Right'}")
