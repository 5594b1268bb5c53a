"""Search algorithms for the puzzle suite.

This module implements a generic A* search over any state satisfying the
SearchState protocol.
"""

from .state import SearchState
from .astar import (
    AStarSearcher, FrontierEntry, SearchReport, SearchConfig,
    astar, create_astar_searcher, reconstruct_path
)

__all__ = [
    'SearchState',
    'AStarSearcher',
    'FrontierEntry',
    'SearchReport',
    'SearchConfig',
    'astar',
    'create_astar_searcher',
    'reconstruct_path'
]
