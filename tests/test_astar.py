"""Tests for A* search algorithm."""

import heapq
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Set

import pytest
from omegaconf import OmegaConf

from puzzle_search.search.astar import (
    AStarSearcher, FrontierEntry, SearchConfig, SearchReport,
    astar, create_astar_searcher, reconstruct_path,
    DEFAULT_MAX_COMPUTATION_TIME
)
from puzzle_search.puzzles import EightPuzzleState, SlideMove, GOAL_TILES


@dataclass
class Graph:
    """Small explicit graph used to drive the engine."""
    edges: Dict[str, List[str]]
    goals: Set[str]
    estimates: Dict[str, int] = field(default_factory=dict)
    calls: Dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class GraphState:
    name: str
    graph: Graph = field(compare=False, hash=False, repr=False)

    def is_goal(self) -> bool:
        return self.name in self.graph.goals

    def heuristic(self) -> int:
        return self.graph.estimates.get(self.name, 0)

    def successors(self):
        self.graph.calls[self.name] = self.graph.calls.get(self.name, 0) + 1
        return [(target, GraphState(target, self.graph)) for target in self.graph.edges.get(self.name, [])]


def scramble(moves: List[SlideMove]) -> EightPuzzleState:
    """Apply blank moves to the goal board, skipping moves that hit an edge."""
    state = EightPuzzleState(GOAL_TILES)
    for move in moves:
        state = state.apply_move(move) or state
    return state


class TestFrontierEntry:
    """Test frontier ordering."""

    def test_f_cost(self):
        """Test f = g + h."""
        entry = FrontierEntry(state="a", g_cost=3, h_cost=4)
        assert entry.f_cost == 7

    def test_lower_f_first(self):
        """Test entries with lower f pop first."""
        low = FrontierEntry(state="low", g_cost=1, h_cost=1, sequence=5)
        high = FrontierEntry(state="high", g_cost=0, h_cost=3, sequence=0)
        assert low < high
        assert not high < low

    def test_lower_h_breaks_f_ties(self):
        """Test equal f prefers the smaller heuristic."""
        deep = FrontierEntry(state="deep", g_cost=4, h_cost=0, sequence=9)
        shallow = FrontierEntry(state="shallow", g_cost=1, h_cost=3, sequence=1)
        assert deep < shallow

    def test_insertion_order_breaks_full_ties(self):
        """Test identical f and h pop in insertion order."""
        heap = []
        for seq, name in enumerate(["first", "second", "third"]):
            heapq.heappush(heap, FrontierEntry(state=name, g_cost=2, h_cost=1, sequence=seq))
        popped = [heapq.heappop(heap).state for _ in range(3)]
        assert popped == ["first", "second", "third"]


class TestSearchReport:
    """Test SearchReport helpers."""

    def test_defaults(self):
        """Test an empty report."""
        report = SearchReport()
        assert report.path == []
        assert report.total_steps == 0
        assert report.goal_found is False
        assert report.final_state is None
        assert report.termination_reason == "unknown"

    def test_total_steps(self):
        """Test steps count moves, not states."""
        report = SearchReport(path=["a", "b", "c"], goal_found=True, termination_reason="goal_reached")
        assert report.total_steps == 2
        assert report.final_state == "c"
        assert report.timed_out is False

    def test_to_dict(self):
        """Test JSON-friendly conversion."""
        report = SearchReport(
            path=[EightPuzzleState(GOAL_TILES)],
            expanded_nodes=0,
            visited_states=1,
            goal_found=True,
            termination_reason="goal_reached",
        )
        data = report.to_dict(encode_state=lambda s: s.to_dict())

        assert data['goal_found'] is True
        assert data['path'] == [{'tiles': list(GOAL_TILES)}]
        assert data['total_steps'] == 0
        assert data['visited_states'] == 1
        assert data['termination_reason'] == "goal_reached"

    def test_to_dict_default_encoder(self):
        """Test states are stringified when no encoder is given."""
        report = SearchReport(path=[1, 2])
        assert report.to_dict()['path'] == ["1", "2"]


class TestSearchConfig:
    """Test SearchConfig."""

    def test_default_config(self):
        """Test default configuration values."""
        config = SearchConfig()

        assert config.max_computation_time == DEFAULT_MAX_COMPUTATION_TIME == 3600.0
        assert config.max_visited_states is None

    def test_from_config(self):
        """Test reading the search.astar section."""
        cfg = OmegaConf.create({
            'search': {'astar': {'max_computation_time': 12, 'max_visited_states': 500}}
        })
        config = SearchConfig.from_config(cfg)

        assert config.max_computation_time == 12.0
        assert config.max_visited_states == 500

    def test_from_config_missing_section(self):
        """Test defaults when the config has no search section."""
        config = SearchConfig.from_config(OmegaConf.create({}))
        assert config.max_computation_time == DEFAULT_MAX_COMPUTATION_TIME
        assert config.max_visited_states is None

    def test_from_none(self):
        """Test defaults when no config is loaded."""
        assert SearchConfig.from_config(None) == SearchConfig()


class TestAStarSearcher:
    """Test A* search algorithm."""

    @pytest.fixture
    def searcher(self):
        """Create A* searcher for testing."""
        return AStarSearcher(SearchConfig(max_computation_time=60.0))

    def test_start_is_goal(self, searcher):
        """Test a goal start returns a one-state path without expanding."""
        graph = Graph(edges={'S': ['A']}, goals={'S'})
        report = searcher.search(GraphState('S', graph))

        assert report.goal_found is True
        assert [s.name for s in report.path] == ['S']
        assert report.total_steps == 0
        assert report.expanded_nodes == 0
        assert report.visited_states == 1
        assert report.termination_reason == "goal_reached"
        assert graph.calls == {}

    def test_dead_end_start(self, searcher):
        """Test a start with no successors exhausts the search."""
        graph = Graph(edges={}, goals={'G'})
        report = searcher.search(GraphState('S', graph))

        assert report.goal_found is False
        assert report.path == []
        assert report.expanded_nodes == 1
        assert report.visited_states == 1
        assert report.termination_reason == "search_exhausted"

    def test_unreachable_goal_exhausts(self, searcher):
        """Test a finite graph without reachable goals."""
        graph = Graph(edges={'S': ['A', 'B'], 'A': ['S'], 'B': ['A']}, goals={'G'})
        report = searcher.search(GraphState('S', graph))

        assert report.goal_found is False
        assert report.expanded_nodes == 3
        assert report.visited_states == 3

    def test_cheaper_path_replaces_stale_entry(self, searcher):
        """Test lazy deletion when a cheaper route to a queued state appears."""
        graph = Graph(
            edges={'S': ['A', 'B'], 'A': ['C'], 'C': ['D'], 'B': ['D'], 'D': ['G']},
            goals={'G'},
            estimates={'B': 1},
        )
        report = searcher.search(GraphState('S', graph))

        assert report.goal_found is True
        assert [s.name for s in report.path] == ['S', 'B', 'D', 'G']
        assert report.total_steps == 3
        assert report.expanded_nodes == 5
        assert report.visited_states == 6
        # The stale D entry is discarded, not expanded a second time
        assert graph.calls['D'] == 1

    def test_successor_order_breaks_ties(self, searcher):
        """Test equal-cost routes resolve to the first generated successor."""
        graph = Graph(edges={'S': ['A', 'B'], 'A': ['G'], 'B': ['G']}, goals={'G'})
        report = searcher.search(GraphState('S', graph))

        assert [s.name for s in report.path] == ['S', 'A', 'G']

    def test_duplicate_successors_tolerated(self, searcher):
        """Test a state listed twice by successors is only recorded once."""
        graph = Graph(edges={'S': ['A', 'A'], 'A': ['G']}, goals={'G'})
        report = searcher.search(GraphState('S', graph))

        assert [s.name for s in report.path] == ['S', 'A', 'G']
        assert report.visited_states == 3

    def test_timeout(self):
        """Test a zero ceiling stops on the first pop."""
        searcher = AStarSearcher(SearchConfig(max_computation_time=0.0))
        report = searcher.search(EightPuzzleState((1, 2, 3, 4, 5, 6, 7, 0, 8)))

        assert report.goal_found is False
        assert report.path == []
        assert report.timed_out is True
        assert report.termination_reason == "timeout"
        assert report.expanded_nodes == 0
        assert report.visited_states == 1

    def test_cancel_event(self, searcher):
        """Test a set cancel event stops the search."""
        cancel = threading.Event()
        cancel.set()
        report = searcher.search(EightPuzzleState((1, 2, 3, 4, 5, 6, 7, 0, 8)), cancel_event=cancel)

        assert report.goal_found is False
        assert report.termination_reason == "cancelled"
        assert report.expanded_nodes == 0

    def test_unset_cancel_event_is_ignored(self, searcher):
        """Test an unset event leaves the search alone."""
        report = searcher.search(EightPuzzleState((1, 2, 3, 4, 5, 6, 7, 0, 8)),
                                 cancel_event=threading.Event())
        assert report.goal_found is True

    def test_max_visited_states(self):
        """Test the optional cap on discovered states."""
        searcher = AStarSearcher(SearchConfig(max_visited_states=10))
        report = searcher.search(EightPuzzleState((8, 6, 7, 2, 5, 4, 3, 0, 1)))

        assert report.goal_found is False
        assert report.termination_reason == "max_states_reached"
        assert report.visited_states > 10

    def test_max_visited_states_keeps_popped_goal(self):
        """Test a goal popped after the cap is exceeded is still returned."""
        graph = Graph(edges={'S': ['G', 'X', 'Y']}, goals={'G'})
        searcher = AStarSearcher(SearchConfig(max_visited_states=2))
        report = searcher.search(GraphState('S', graph))

        assert report.goal_found is True
        assert report.termination_reason == "goal_reached"
        assert [s.name for s in report.path] == ['S', 'G']
        assert report.expanded_nodes == 1
        assert report.visited_states == 4

    def test_max_visited_states_blocks_expansion(self):
        """Test the cap stops the search before a non-goal is expanded."""
        graph = Graph(edges={'S': ['A', 'B', 'C'], 'A': ['G']}, goals={'G'})
        searcher = AStarSearcher(SearchConfig(max_visited_states=2))
        report = searcher.search(GraphState('S', graph))

        assert report.goal_found is False
        assert report.termination_reason == "max_states_reached"
        assert report.expanded_nodes == 1
        assert 'A' not in graph.calls

    def test_visited_at_least_expanded(self, searcher):
        """Test every expanded state was also visited."""
        start = scramble([SlideMove.UP, SlideMove.LEFT, SlideMove.UP, SlideMove.LEFT,
                          SlideMove.DOWN, SlideMove.RIGHT, SlideMove.DOWN])
        report = searcher.search(start)

        assert report.goal_found is True
        assert report.visited_states >= report.expanded_nodes
        assert report.expanded_nodes > 0

    @pytest.mark.parametrize("moves", [
        [SlideMove.UP],
        [SlideMove.UP, SlideMove.LEFT, SlideMove.DOWN],
        [SlideMove.LEFT, SlideMove.LEFT, SlideMove.UP, SlideMove.RIGHT, SlideMove.UP],
        [SlideMove.UP, SlideMove.UP, SlideMove.LEFT, SlideMove.DOWN, SlideMove.LEFT,
         SlideMove.UP, SlideMove.RIGHT, SlideMove.DOWN, SlideMove.DOWN, SlideMove.LEFT],
        [SlideMove.LEFT, SlideMove.UP, SlideMove.RIGHT, SlideMove.UP, SlideMove.LEFT,
         SlideMove.LEFT, SlideMove.DOWN, SlideMove.RIGHT, SlideMove.DOWN, SlideMove.LEFT,
         SlideMove.UP, SlideMove.RIGHT],
    ])
    def test_matches_breadth_first_length(self, searcher, bfs_steps, moves):
        """Test A* path length equals the BFS shortest path length."""
        start = scramble(moves)
        report = searcher.search(start)

        assert report.goal_found is True
        assert report.total_steps == bfs_steps(start)
        assert report.path[0] == start
        assert report.path[-1].is_goal()

    def test_path_follows_successors(self, searcher):
        """Test consecutive path states are linked by a legal move."""
        start = scramble([SlideMove.UP, SlideMove.LEFT, SlideMove.LEFT, SlideMove.UP])
        report = searcher.search(start)

        for current, following in zip(report.path, report.path[1:]):
            assert following in [s for _, s in current.successors()]

    def test_searcher_is_reusable(self, searcher):
        """Test repeated searches do not share state."""
        start = EightPuzzleState((1, 2, 3, 4, 5, 6, 7, 0, 8))
        first = searcher.search(start)
        second = searcher.search(start)

        assert first.path == second.path
        assert first.expanded_nodes == second.expanded_nodes


class TestHelpers:
    """Test module-level helpers."""

    def test_reconstruct_path(self):
        """Test walking predecessor pointers back to the start."""
        came_from = {'S': (None, 0), 'A': ('S', 1), 'B': ('A', 2)}
        assert reconstruct_path(came_from, 'B') == ['S', 'A', 'B']
        assert reconstruct_path(came_from, 'S') == ['S']

    def test_astar_function(self):
        """Test the one-off search function."""
        report = astar(EightPuzzleState((1, 2, 3, 4, 5, 6, 7, 0, 8)))
        assert report.goal_found is True
        assert report.total_steps == 1

    def test_create_astar_searcher(self):
        """Test factory function."""
        searcher = create_astar_searcher(max_computation_time=5.0, max_visited_states=100)

        assert isinstance(searcher, AStarSearcher)
        assert searcher.config.max_computation_time == 5.0
        assert searcher.config.max_visited_states == 100
