#!/usr/bin/env python3
"""
Session: one grid plus at most one active search.

Front-ends hold a Session and go through it for every edit and every step.
Board edits are refused with SearchInProgressError while a search is
running; reset() first (or let it finish).
"""

import logging
from functools import wraps
from typing import Optional

from gridsearch.core.astar import AStarSearch
from gridsearch.core.bfs import BreadthFirstSearch
from gridsearch.core.executor import SearchExecutor
from gridsearch.core.grid import Grid
from gridsearch.core.types import Algorithm, SearchInProgressError, SearchStats, Status, StepResult

logger = logging.getLogger(__name__)


def _idle_only(method):
    @wraps(method)
    def guarded(self, *args, **kwargs):
        if self.running:
            raise SearchInProgressError(f"{method.__name__}() while a search is running; reset first")
        return method(self, *args, **kwargs)
    return guarded


def make_executor(algorithm: Algorithm) -> SearchExecutor:
    algorithm = Algorithm(algorithm)
    if algorithm is Algorithm.BFS:
        return BreadthFirstSearch()
    return AStarSearch()


def start_search(algorithm: Algorithm, grid: Grid, weighting_enabled: bool = False,
                 weight_multiplier: int = 3) -> SearchExecutor:
    """Build and start an executor without a session."""
    return make_executor(algorithm).start(grid, weighting_enabled, weight_multiplier)


class Session:
    def __init__(self, grid: Grid, weighting_enabled: bool = False, weight_multiplier: int = 3):
        self.grid = grid
        self.weighting_enabled = weighting_enabled
        self.weight_multiplier = weight_multiplier
        self.executor: Optional[SearchExecutor] = None

    @property
    def status(self) -> Status:
        return self.executor.status if self.executor else Status.IDLE

    @property
    def running(self) -> bool:
        return self.status is Status.RUNNING

    @property
    def stats(self) -> SearchStats:
        return self.executor.stats if self.executor else SearchStats()

    # -------------------- search --------------------

    def start(self, algorithm: Algorithm) -> SearchExecutor:
        """Discard any previous run and start a fresh one."""
        self.executor = start_search(algorithm, self.grid, self.weighting_enabled, self.weight_multiplier)
        return self.executor

    def step(self) -> StepResult:
        if self.executor is None:
            return StepResult(status=Status.IDLE)
        return self.executor.step()

    def run(self, max_steps: Optional[int] = None) -> StepResult:
        if self.executor is None:
            return StepResult(status=Status.IDLE)
        return self.executor.run(max_steps)

    def path(self):
        return self.executor.path() if self.executor else []

    def reset(self) -> None:
        """Drop the current run; walls, weights and endpoints stay."""
        logger.info("resetting search state...")
        self.executor = None
        self.grid.reset_search_state()

    # -------------------- board edits --------------------

    @_idle_only
    def toggle_wall(self, cell_id: int, allow_toggle_off: bool = True) -> bool:
        return self.grid.toggle_wall(cell_id, allow_toggle_off)

    @_idle_only
    def toggle_weighted_zone(self, cell_id: int, allow_toggle_off: bool = True) -> bool:
        return self.grid.toggle_weighted_zone(cell_id, allow_toggle_off)

    @_idle_only
    def set_start(self, cell_id: int) -> bool:
        return self.grid.set_start(cell_id)

    @_idle_only
    def set_target(self, cell_id: int) -> bool:
        return self.grid.set_target(cell_id)

    @_idle_only
    def resize(self, viewport_width: int, viewport_height: int) -> None:
        self.grid.resize(viewport_width, viewport_height)
        self.executor = None

    @_idle_only
    def clear_all_marks(self) -> None:
        logger.info("clearing grid...")
        self.reset()
        self.grid.clear_all_marks()
