"""XOR tic-tac-toe searched as a single-agent problem.

The search drives towards any board where X owns a line. A separate
rule-based policy (win, block, center, corner) picks moves for play
without search.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)

CENTER = 4
CORNERS = (0, 2, 6, 8)

X_WIN_COST = 0
O_WIN_COST = 100


class Player(Enum):
    X = "X"
    O = "O"

    def opponent(self) -> 'Player':
        return Player.O if self is Player.X else Player.X


@dataclass(frozen=True)
class PlaceMark:
    index: int


def _validate_cells(cells: Sequence[Optional[Player]], to_move: Player) -> Tuple[Optional[Player], ...]:
    cells = tuple(cells)
    if len(cells) != 9:
        raise ValueError(f"Expected 9 cells, got {len(cells)}")
    x_count = sum(1 for c in cells if c is Player.X)
    o_count = sum(1 for c in cells if c is Player.O)
    if x_count + o_count != sum(1 for c in cells if c is not None):
        raise ValueError("Cells must hold Player values or None")
    if abs(x_count - o_count) > 1:
        raise ValueError(f"Mark counts differ by more than one (X={x_count}, O={o_count})")
    if (x_count > o_count and to_move is Player.X) or (o_count > x_count and to_move is Player.O):
        raise ValueError(f"{to_move.value} cannot move with X={x_count}, O={o_count}")
    return cells


@dataclass(frozen=True)
class XorTicTacToeState:
    cells: Tuple[Optional[Player], ...] = (None,) * 9
    to_move: Player = Player.X

    def __post_init__(self) -> None:
        object.__setattr__(self, 'cells', _validate_cells(self.cells, self.to_move))

    def winner(self) -> Optional[Player]:
        for a, b, c in WINNING_LINES:
            mark = self.cells[a]
            if mark is not None and mark == self.cells[b] == self.cells[c]:
                return mark
        return None

    def is_full(self) -> bool:
        return all(cell is not None for cell in self.cells)

    def is_terminal(self) -> bool:
        return self.winner() is not None or self.is_full()

    def empty_cells(self) -> List[int]:
        return [idx for idx, cell in enumerate(self.cells) if cell is None]

    def place(self, index: int) -> Optional['XorTicTacToeState']:
        """Place the mover's mark at ``index``, or None if the move is illegal."""
        if self.is_terminal() or not 0 <= index < 9 or self.cells[index] is not None:
            return None
        cells = list(self.cells)
        cells[index] = self.to_move
        return XorTicTacToeState(tuple(cells), self.to_move.opponent())

    def is_goal(self) -> bool:
        return self.winner() is Player.X

    def heuristic(self) -> int:
        winner = self.winner()
        if winner is Player.X:
            return X_WIN_COST
        if winner is Player.O:
            return O_WIN_COST
        center = self.cells[CENTER]
        if center is Player.X:
            return 0
        if center is Player.O:
            return 4
        return 2

    def successors(self) -> List[Tuple[PlaceMark, 'XorTicTacToeState']]:
        if self.is_terminal():
            return []
        return [(PlaceMark(idx), self.place(idx)) for idx in self.empty_cells()]

    @classmethod
    def from_string(cls, text: str, to_move: Optional[Player] = None) -> 'XorTicTacToeState':
        """Parse a 9-character board such as ``"X.O......"``.

        Args:
            text: Cells row-major; X/O for marks, '.', '-' or space for empty
            to_move: Side to move (inferred from mark counts if omitted)

        Returns:
            Parsed state
        """
        if len(text) != 9:
            raise ValueError(f"Board must have 9 cells, got {len(text)}")
        cells: List[Optional[Player]] = []
        for ch in text.upper():
            if ch in ('X', 'O'):
                cells.append(Player(ch))
            elif ch in ('.', '-', ' ', '_'):
                cells.append(None)
            else:
                raise ValueError(f"Invalid cell character: {ch!r}")
        if to_move is None:
            x_count = cells.count(Player.X)
            o_count = cells.count(Player.O)
            to_move = Player.O if x_count > o_count else Player.X
        return cls(tuple(cells), to_move)

    def to_dict(self) -> Dict[str, Any]:
        winner = self.winner()
        return {
            'cells': [cell.value if cell else None for cell in self.cells],
            'to_move': self.to_move.value,
            'winner': winner.value if winner else None,
        }

    def __str__(self) -> str:
        marks = [cell.value if cell else "." for cell in self.cells]
        return "\n".join(" ".join(marks[row * 3:row * 3 + 3]) for row in range(3))


def find_winning_move(state: XorTicTacToeState, player: Player) -> Optional[int]:
    """Return the empty cell completing a line for ``player``, if any."""
    for line in WINNING_LINES:
        marks = [state.cells[idx] for idx in line]
        empty = [idx for idx in line if state.cells[idx] is None]
        if marks.count(player) == 2 and len(empty) == 1:
            return empty[0]
    return None


def pick_best_move(state: XorTicTacToeState, player: Optional[Player] = None) -> Optional[int]:
    """Rule-based move choice: win, block, center, corner, then first empty cell.

    Args:
        state: Current board
        player: Side to choose for (defaults to the side to move)

    Returns:
        Cell index, or None when the game is over
    """
    if state.is_terminal():
        return None
    player = player or state.to_move

    move = find_winning_move(state, player)
    if move is None:
        move = find_winning_move(state, player.opponent())
    if move is None and state.cells[CENTER] is None:
        move = CENTER
    if move is None:
        move = next((idx for idx in CORNERS if state.cells[idx] is None), None)
    if move is None:
        move = next(iter(state.empty_cells()), None)
    return move
