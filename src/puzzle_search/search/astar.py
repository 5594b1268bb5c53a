"""A* search algorithm for puzzle states.

This module implements a single-threaded, unit-cost A* search over any value
type that satisfies the SearchState protocol. The frontier is a binary heap
with lazy deletion; a best-cost map keyed by state records the predecessor
and g-cost of every state discovered so far.
"""

import heapq
import itertools
import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, List, Optional, Tuple

from puzzle_search.search.state import S

logger = logging.getLogger(__name__)

# One hour safety ceiling for pathological or unsolvable starts
DEFAULT_MAX_COMPUTATION_TIME = 3600.0

GOAL_REACHED = "goal_reached"
SEARCH_EXHAUSTED = "search_exhausted"
TIMEOUT = "timeout"
CANCELLED = "cancelled"
MAX_STATES_REACHED = "max_states_reached"


@dataclass
class FrontierEntry(Generic[S]):
    """Open-set entry ordered by f = g + h."""
    state: S
    g_cost: int
    h_cost: int
    sequence: int = 0

    @property
    def f_cost(self) -> int:
        """Total estimated cost f(n) = g(n) + h(n)."""
        return self.g_cost + self.h_cost

    def __lt__(self, other: 'FrontierEntry') -> bool:
        """Comparison for priority queue (lower f_cost has higher priority)."""
        if self.f_cost != other.f_cost:
            return self.f_cost < other.f_cost
        # Tie-breaking: prefer lower heuristic (deeper nodes)
        if self.h_cost != other.h_cost:
            return self.h_cost < other.h_cost
        # Final tie-breaking: first pushed, first popped
        return self.sequence < other.sequence


@dataclass
class SearchReport(Generic[S]):
    """Result from A* search."""
    path: List[S] = field(default_factory=list)
    expanded_nodes: int = 0
    visited_states: int = 0
    goal_found: bool = False
    elapsed: float = 0.0
    termination_reason: str = "unknown"

    @property
    def total_steps(self) -> int:
        """Number of moves along the path (0 when nothing was found)."""
        return max(len(self.path) - 1, 0)

    @property
    def timed_out(self) -> bool:
        return self.termination_reason == TIMEOUT

    @property
    def final_state(self) -> Optional[S]:
        return self.path[-1] if self.path else None

    def to_dict(self, encode_state: Optional[Callable[[S], Any]] = None) -> Dict[str, Any]:
        """Convert the report to a JSON-friendly dictionary.

        Args:
            encode_state: Optional converter for each state on the path.
                Defaults to ``str``.

        Returns:
            Dictionary with the path and search statistics
        """
        encode = encode_state or str
        return {
            'goal_found': self.goal_found,
            'path': [encode(state) for state in self.path],
            'total_steps': self.total_steps,
            'expanded_nodes': self.expanded_nodes,
            'visited_states': self.visited_states,
            'elapsed': self.elapsed,
            'termination_reason': self.termination_reason,
        }


@dataclass
class SearchConfig:
    """Configuration for A* search."""
    max_computation_time: float = DEFAULT_MAX_COMPUTATION_TIME
    max_visited_states: Optional[int] = None  # None disables the cap

    @classmethod
    def from_config(cls, config: Any) -> 'SearchConfig':
        """Build a search configuration from a loaded OmegaConf config.

        Args:
            config: Full application configuration (or None for defaults)

        Returns:
            SearchConfig populated from ``search.astar``
        """
        if config is None:
            return cls()

        astar_cfg = config.get('search', {}).get('astar', {}) or {}
        max_time = astar_cfg.get('max_computation_time', DEFAULT_MAX_COMPUTATION_TIME)
        max_states = astar_cfg.get('max_visited_states', None)
        return cls(
            max_computation_time=float(max_time),
            max_visited_states=int(max_states) if max_states is not None else None,
        )


class AStarSearcher:
    """A* search with lazy deletion and a wall-clock safety ceiling."""

    def __init__(self, config: Optional[SearchConfig] = None):
        """Initialize A* searcher.

        Args:
            config: Search configuration parameters
        """
        self.config = config or SearchConfig()
        logger.debug(f"A* searcher initialized with max_time={self.config.max_computation_time}s, "
                     f"max_states={self.config.max_visited_states}")

    def search(self, start: S, cancel_event: Optional[threading.Event] = None) -> SearchReport[S]:
        """Search for a shortest path from ``start`` to any goal state.

        Every edge costs 1. The returned path is optimal whenever the
        state's heuristic is admissible.

        Args:
            start: Initial state
            cancel_event: Optional event that stops the search when set

        Returns:
            SearchReport with the path (empty if not found) and statistics
        """
        start_time = time.perf_counter()
        counter = itertools.count()

        open_queue: List[FrontierEntry[S]] = [
            FrontierEntry(state=start, g_cost=0, h_cost=start.heuristic(), sequence=next(counter))
        ]
        came_from: Dict[S, Tuple[Optional[S], int]] = {start: (None, 0)}
        expanded = 0
        stale = 0

        logger.info(f"Starting A* search from {type(start).__name__} "
                    f"(h={open_queue[0].h_cost})")

        def finish(reason: str, path: Optional[List[S]] = None) -> SearchReport[S]:
            elapsed = time.perf_counter() - start_time
            report = SearchReport(
                path=path or [],
                expanded_nodes=expanded,
                visited_states=len(came_from),
                goal_found=reason == GOAL_REACHED,
                elapsed=elapsed,
                termination_reason=reason,
            )
            if reason in (TIMEOUT, MAX_STATES_REACHED):
                logger.warning(f"A* search stopped early ({reason}) after {expanded} expansions, "
                               f"{len(came_from)} states in {elapsed:.3f}s")
            else:
                logger.info(f"A* search finished: {reason}, {report.total_steps} steps, "
                            f"{expanded} expanded, {len(came_from)} visited, {elapsed:.3f}s")
            logger.debug(f"Discarded {stale} stale frontier entries")
            return report

        while open_queue:
            entry = heapq.heappop(open_queue)

            if time.perf_counter() - start_time >= self.config.max_computation_time:
                return finish(TIMEOUT)
            if cancel_event is not None and cancel_event.is_set():
                return finish(CANCELLED)

            current = entry.state
            _, best_cost = came_from[current]
            if entry.g_cost > best_cost:
                stale += 1
                continue

            if current.is_goal():
                return finish(GOAL_REACHED, reconstruct_path(came_from, current))

            # The cap only blocks further expansion; a popped goal still wins
            if (self.config.max_visited_states is not None and
                    len(came_from) > self.config.max_visited_states):
                return finish(MAX_STATES_REACHED)

            expanded += 1

            tentative_cost = entry.g_cost + 1
            for _, successor in current.successors():
                known = came_from.get(successor)
                if known is None or tentative_cost < known[1]:
                    came_from[successor] = (current, tentative_cost)
                    heapq.heappush(open_queue, FrontierEntry(
                        state=successor,
                        g_cost=tentative_cost,
                        h_cost=successor.heuristic(),
                        sequence=next(counter),
                    ))

        return finish(SEARCH_EXHAUSTED)


def reconstruct_path(came_from: Dict[S, Tuple[Optional[S], int]], goal: S) -> List[S]:
    """Rebuild the start-to-goal path from predecessor back-pointers.

    Args:
        came_from: Map of state -> (predecessor, best g-cost)
        goal: Final state of the path

    Returns:
        States from start to goal inclusive
    """
    path = [goal]
    parent, _ = came_from[goal]
    while parent is not None:
        path.append(parent)
        parent, _ = came_from[parent]
    path.reverse()
    return path


def astar(start: S, config: Optional[SearchConfig] = None) -> SearchReport[S]:
    """Run a one-off A* search from ``start``."""
    return AStarSearcher(config).search(start)


def create_astar_searcher(max_computation_time: float = DEFAULT_MAX_COMPUTATION_TIME,
                          max_visited_states: Optional[int] = None) -> AStarSearcher:
    """Factory function to create A* searcher with custom configuration.

    Args:
        max_computation_time: Wall-clock ceiling in seconds
        max_visited_states: Optional cap on distinct states discovered

    Returns:
        Configured AStarSearcher instance
    """
    config = SearchConfig(
        max_computation_time=max_computation_time,
        max_visited_states=max_visited_states,
    )

    return AStarSearcher(config)
