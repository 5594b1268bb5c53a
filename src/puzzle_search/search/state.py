"""State abstraction shared by every searchable puzzle.

Any value type can be searched as long as it is hashable by value and
provides the three methods below. The engine never looks at anything else.
"""

from typing import Any, Protocol, Sequence, Tuple, TypeVar


class SearchState(Protocol):
    """Capability contract for a puzzle state explored by A*.

    Implementations must also define value equality and a matching hash;
    the engine deduplicates states by value.
    """

    def is_goal(self) -> bool:
        """Return True when this state satisfies the puzzle goal."""
        ...

    def heuristic(self) -> int:
        """Non-negative estimate of the remaining number of moves."""
        ...

    def successors(self) -> Sequence[Tuple[Any, "SearchState"]]:
        """Return (move, next_state) pairs; empty when no move is legal."""
        ...


S = TypeVar("S", bound=SearchState)
