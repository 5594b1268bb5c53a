"""Shared test helpers."""

from collections import deque
from typing import Optional

import pytest


def breadth_first_steps(start) -> Optional[int]:
    """Length of the shortest path from ``start`` to any goal, by plain BFS."""
    if start.is_goal():
        return 0

    seen = {start}
    frontier = deque([(start, 0)])
    while frontier:
        state, depth = frontier.popleft()
        for _, successor in state.successors():
            if successor in seen:
                continue
            if successor.is_goal():
                return depth + 1
            seen.add(successor)
            frontier.append((successor, depth + 1))
    return None


@pytest.fixture
def bfs_steps():
    """Reference shortest-path oracle for optimality checks."""
    return breadth_first_steps
