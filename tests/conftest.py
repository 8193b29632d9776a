"""
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest and provides
fixtures available to all test files.
"""

from typing import Callable

import pytest

from gridsearch.core.executor import SearchExecutor
from gridsearch.core.grid import Grid
from gridsearch.core.session import start_search
from gridsearch.core.types import Algorithm


@pytest.fixture
def grid() -> Grid:
    """Open 5x5 grid (cell size 10), start at (0, 0), target at (4, 4)."""
    g = Grid(10, 50, 50)
    assert g.set_start(g.cell_id(0, 0))
    assert g.set_target(g.cell_id(4, 4))
    return g


@pytest.fixture
def solve() -> Callable[..., SearchExecutor]:
    """Run an algorithm to completion on a grid and return the executor."""

    def _solve(algorithm: Algorithm, grid: Grid, weighting: bool = False, weight: int = 3) -> SearchExecutor:
        ex = start_search(algorithm, grid, weighting, weight)
        ex.run()
        return ex

    return _solve
