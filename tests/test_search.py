"""
Tests for the BFS and A* executors: paths, visit order, failure, weighting
and statistics.
"""

import pytest

from gridsearch.core.astar import AStarSearch
from gridsearch.core.bfs import BreadthFirstSearch
from gridsearch.core.grid import Grid
from gridsearch.core.types import Algorithm, Status

BOTH = [Algorithm.BFS, Algorithm.ASTAR]


def manhattan(grid: Grid, a: int, b: int) -> int:
    ca, cb = grid.get_cell(a), grid.get_cell(b)
    return abs(ca.row - cb.row) + abs(ca.col - cb.col)


def assert_connected(grid: Grid, path):
    for a, b in zip(path, path[1:]):
        assert manhattan(grid, a, b) == 1
        assert grid.get_cell(b).walkable


@pytest.fixture
def corridor(grid):
    """Column 2 walled on every row but the bottom one."""
    for row in range(4):
        grid.toggle_wall(grid.cell_id(row, 2))
    return grid


@pytest.fixture
def row_grid():
    """5x5 grid with start (2, 0) and target (2, 4) on the same row."""
    g = Grid(10, 50, 50)
    assert g.set_start(g.cell_id(2, 0))
    assert g.set_target(g.cell_id(2, 4))
    return g


class TestOpenGrid:
    """Test both algorithms on a grid without marks."""

    @pytest.mark.parametrize("algo", BOTH)
    def test_path_shape(self, grid, solve, algo):
        """Corner to corner is 8 edges / 9 cells."""
        ex = solve(algo, grid)
        assert ex.status is Status.SUCCESS
        path = ex.path()
        assert len(path) == 9
        assert path[0] == grid.start_id and path[-1] == grid.target_id
        assert_connected(grid, path)
        assert ex.stats.path_length == 8 == manhattan(grid, grid.start_id, grid.target_id)

    def test_bfs_equals_astar_cost(self, grid, solve):
        """Without weighting both report the same cost."""
        assert solve(Algorithm.BFS, grid).stats.path_cost == solve(Algorithm.ASTAR, grid).stats.path_cost == 8

    def test_bfs_visits_in_layers(self, grid, solve):
        """BFS expands in non-decreasing distance from the start."""
        ex = solve(Algorithm.BFS, grid)
        dists = [manhattan(grid, grid.start_id, i) for i in ex.visited]
        assert dists == sorted(dists)
        assert ex.visited[:6] == [1, 6, 2, 11, 7, 3]

    def test_bfs_frontier_after_first_step(self, grid):
        """Start enqueues its down neighbour before its right one."""
        ex = BreadthFirstSearch().start(grid)
        res = ex.step()
        assert res.status is Status.RUNNING
        assert res.visited == [1]
        assert res.current == 1
        assert res.frontier == [6, 2]

    def test_astar_seeds_start(self, grid):
        """Start gets g=0 and the Manhattan heuristic."""
        ex = AStarSearch().start(grid)
        s = grid.start
        assert (s.g, s.h, s.f) == (0, 8, 8)
        assert ex.frontier_ids() == [s.id]

    def test_astar_visits_target_last(self, grid, solve):
        """The target is expanded, then the run stops."""
        ex = solve(Algorithm.ASTAR, grid)
        assert ex.visited[-1] == grid.target_id
        assert ex.stats.visited_count == len(ex.visited)

    def test_astar_parents_are_ids(self, grid, solve):
        """Predecessors are stored as ids on the cells."""
        ex = solve(Algorithm.ASTAR, grid)
        path = ex.path()
        for prev, cur in zip(path, path[1:]):
            assert grid.get_cell(cur).parent == prev


class TestWalls:
    """Test single-corridor and blocked boards."""

    @pytest.mark.parametrize("algo", BOTH)
    def test_corridor(self, corridor, solve, algo):
        """The only way through is (4, 2)."""
        ex = solve(algo, corridor)
        assert ex.status is Status.SUCCESS
        path = ex.path()
        assert corridor.cell_id(4, 2) in path
        assert_connected(corridor, path)
        assert ex.stats.path_length == 8

    def test_corridor_costs_match(self, corridor, solve):
        """BFS and A* agree on cost through the corridor."""
        assert solve(Algorithm.BFS, corridor).stats.path_cost == solve(Algorithm.ASTAR, corridor).stats.path_cost

    @pytest.mark.parametrize("algo", BOTH)
    def test_full_wall_fails(self, corridor, solve, algo):
        """Closing the gap is a failure status, not an exception."""
        corridor.toggle_wall(corridor.cell_id(4, 2))
        ex = solve(algo, corridor)
        assert ex.status is Status.FAILURE
        assert ex.path() == []
        assert ex.stats.path_length == 0

    @pytest.mark.parametrize("algo", BOTH)
    def test_boxed_in_start_fails_on_first_step(self, grid, algo):
        """A start with no open neighbours fails after one expansion."""
        grid.toggle_wall(2)
        grid.toggle_wall(6)
        ex = (BreadthFirstSearch() if algo is Algorithm.BFS else AStarSearch()).start(grid)
        res = ex.step()
        assert res.status is Status.FAILURE
        assert res.visited == [1]
        assert res.path is None


class TestWeighting:
    """Test weighted cells under both executors."""

    @pytest.mark.parametrize(
        "weight,through_weight,cost",
        [(2, True, 5), (3, None, 6), (5, False, 6)],
    )
    def test_astar_picks_cheaper_route(self, row_grid, solve, weight, through_weight, cost):
        """A weighted cell on the straight line vs. a 2-step-longer detour."""
        weighted = row_grid.cell_id(2, 2)
        row_grid.toggle_weighted_zone(weighted)
        ex = solve(Algorithm.ASTAR, row_grid, weighting=True, weight=weight)
        assert ex.status is Status.SUCCESS
        assert ex.stats.path_cost == cost
        if through_weight is not None:
            assert (weighted in ex.path()) is through_weight
        assert_connected(row_grid, ex.path())

    def test_weighting_disabled_ignores_weights(self, row_grid, solve):
        """With weighting off every move costs 1."""
        row_grid.toggle_weighted_zone(row_grid.cell_id(2, 2))
        ex = solve(Algorithm.ASTAR, row_grid, weighting=False, weight=5)
        assert ex.stats.path_cost == 4
        assert ex.stats.path_length == 4

    def test_bfs_reports_weighted_cost(self, row_grid, solve):
        """BFS ignores weights when searching but counts them in the cost."""
        weighted = row_grid.cell_id(2, 2)
        row_grid.toggle_weighted_zone(weighted)
        ex = solve(Algorithm.BFS, row_grid, weighting=True, weight=5)
        assert weighted in ex.path()
        assert ex.stats.path_length == 4
        assert ex.stats.path_cost == 8

    def test_weighted_row_detoured(self, solve):
        """A run of weighted cells is walked around when that is cheaper."""
        g = Grid(10, 40, 30)
        assert g.set_start(g.cell_id(1, 0))
        assert g.set_target(g.cell_id(1, 3))
        for col in (1, 2):
            g.toggle_weighted_zone(g.cell_id(1, col))
        ex = solve(Algorithm.ASTAR, g, weighting=True, weight=4)
        assert ex.stats.path_cost == 5
        assert g.cell_id(1, 1) not in ex.path()

    @pytest.mark.parametrize("algo", BOTH)
    def test_bad_multiplier_rejected(self, grid, algo):
        """A multiplier below 1 would break the heuristic."""
        ex = BreadthFirstSearch() if algo is Algorithm.BFS else AStarSearch()
        with pytest.raises(ValueError):
            ex.start(grid, True, 0)

    @pytest.mark.parametrize("weight", [1.5, 2.25, float("inf"), float("nan")])
    def test_fractional_multiplier_rejected(self, grid, weight):
        """Multipliers must be whole numbers; 1.5 is not quietly read as 1."""
        with pytest.raises(ValueError):
            AStarSearch().start(grid, True, weight)

    def test_whole_float_multiplier_accepted(self, grid):
        """3.0 is the same as 3."""
        ex = AStarSearch().start(grid, True, 3.0)
        assert ex.weight_multiplier == 3


class TestLifecycle:
    """Test the Idle -> Running -> terminal state machine."""

    @pytest.mark.parametrize("cls", [BreadthFirstSearch, AStarSearch])
    def test_idle_before_start(self, cls):
        """Stepping an unstarted executor does nothing."""
        ex = cls()
        assert ex.status is Status.IDLE
        assert ex.step().status is Status.IDLE
        assert ex.path() == []

    @pytest.mark.parametrize("algo", BOTH)
    def test_terminal_step_is_idempotent(self, grid, solve, algo):
        """Stepping after success repeats the result without new work."""
        ex = solve(algo, grid)
        visited = list(ex.visited)
        res = ex.step()
        assert res.status is Status.SUCCESS
        assert res.visited == []
        assert res.path == ex.path()
        assert ex.visited == visited

    @pytest.mark.parametrize("algo", BOTH)
    def test_success_result_carries_path_and_metrics(self, grid, algo):
        """The final step result has the path and stats."""
        ex = (BreadthFirstSearch() if algo is Algorithm.BFS else AStarSearch()).start(grid)
        res = ex.run()
        assert res.status is Status.SUCCESS
        assert res.path == ex.path()
        assert res.metrics["path_len"] == 8
        assert res.metrics["total_cost"] == 8
        assert res.metrics["visited"] == ex.stats.visited_count
        assert res.metrics["duration_ms"] >= 0

    def test_run_max_steps(self, grid):
        """run() can stop early and resume."""
        ex = BreadthFirstSearch().start(grid)
        res = ex.run(max_steps=3)
        assert res.status is Status.RUNNING
        assert ex.visited == [1, 6, 2]
        assert ex.run().status is Status.SUCCESS

    def test_reset_replays_identically(self, grid):
        """Restarting on the same board gives the same visit order."""
        ex = AStarSearch().start(grid)
        ex.run()
        first = (list(ex.visited), ex.path())
        ex.reset()
        assert ex.status is Status.RUNNING
        assert ex.visited == []
        ex.run()
        assert (ex.visited, ex.path()) == first
