#!/usr/bin/env python3
"""
Shared stepping machinery for the search executors.

API used by the session and the viewer:
- start(grid, weighting_enabled, weight_multiplier) - reset() - step() -> StepResult
- path(), stats, status

Each step() does exactly one expansion and returns immediately; the caller
decides when to call it again. Idle -> Running -> Success | Failure.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from gridsearch.core.grid import Cell, Grid, edge_cost
from gridsearch.core.types import CellId, SearchStats, Status, StepResult

logger = logging.getLogger(__name__)


@dataclass
class SearchExecutor:
    name: str = "search"

    grid: Optional[Grid] = None
    weighting_enabled: bool = False
    weight_multiplier: int = 3
    status: Status = Status.IDLE
    visited: List[CellId] = field(default_factory=list)
    stats: SearchStats = field(default_factory=SearchStats)
    _path: List[CellId] = field(default_factory=list, repr=False)

    # -------------------- lifecycle --------------------

    def start(self, grid: Grid, weighting_enabled: bool = False, weight_multiplier: int = 3) -> "SearchExecutor":
        if not float(weight_multiplier).is_integer() or weight_multiplier < 1:
            raise ValueError(f"weight multiplier must be a whole number >= 1, got {weight_multiplier}")
        self.grid = grid
        self.weighting_enabled = bool(weighting_enabled)
        self.weight_multiplier = int(weight_multiplier)
        self.reset()
        return self

    def reset(self) -> None:
        """Clear all state and seed with the start cell."""
        if self.grid is None:
            return
        self.grid.reset_search_state()
        self.visited = []
        self.stats = SearchStats()
        self._path = []
        self._seed(self.grid.start)
        self.status = Status.RUNNING
        logger.info("running %s...", self.name)

    # -------------------- subclass hooks --------------------

    def _seed(self, start: Cell) -> None:
        raise NotImplementedError

    def _expand(self) -> Tuple[Optional[Cell], List[CellId]]:
        """One expansion. Returns (current cell, ids newly appended to visited)."""
        raise NotImplementedError

    def _predecessor(self, cell_id: CellId) -> Optional[CellId]:
        raise NotImplementedError

    def frontier_ids(self) -> List[CellId]:
        raise NotImplementedError

    # -------------------- stepping --------------------

    def step(self) -> StepResult:
        if self.grid is None or self.status is Status.IDLE:
            return StepResult(status=Status.IDLE, metrics={"algo": self.name})

        if self.status.terminal:
            return self._result(None, [])

        t0 = time.perf_counter()
        current, newly_visited = self._expand()
        self.stats.duration_ms += (time.perf_counter() - t0) * 1000.0
        return self._result(current, newly_visited)

    def run(self, max_steps: Optional[int] = None) -> StepResult:
        """Step until terminal (or `max_steps` expansions). Returns the last result."""
        res = self.step()
        n = 1
        while res.status is Status.RUNNING and (max_steps is None or n < max_steps):
            res = self.step()
            n += 1
        return res

    def path(self) -> List[CellId]:
        """Start-to-target ids, inclusive. Empty unless the run succeeded."""
        return list(self._path)

    # -------------------- helpers --------------------

    def _visit(self, cell: Cell) -> None:
        self.visited.append(cell.id)
        self.stats.visited_count = len(self.visited)

    def _edge_cost(self, dest: Cell) -> int:
        return edge_cost(dest, self.weighting_enabled, self.weight_multiplier)

    def _succeed(self, end: Cell) -> None:
        path: List[CellId] = []
        cur: Optional[CellId] = end.id
        while cur is not None:
            path.append(cur)
            cur = self._predecessor(cur)
        path.reverse()

        self._path = path
        self.stats.path_length = len(path) - 1
        self.stats.path_cost = sum(self._edge_cost(self.grid.get_cell(i)) for i in path[1:])
        self.status = Status.SUCCESS
        logger.info(
            "%s reached cell %d: %d edges, cost %d, %d cells visited",
            self.name, end.id, self.stats.path_length, self.stats.path_cost, self.stats.visited_count,
        )

    def _fail(self) -> None:
        self.status = Status.FAILURE
        logger.info("No valid path from cell %s to cell %s", self.grid.start_id, self.grid.target_id)

    def _result(self, current: Optional[Cell], newly_visited: List[CellId]) -> StepResult:
        return StepResult(
            status=self.status,
            visited=newly_visited,
            frontier=self.frontier_ids(),
            current=current.id if current is not None else None,
            path=self.path() if self.status is Status.SUCCESS else None,
            metrics=self._metrics(),
        )

    def _metrics(self) -> dict:
        return {
            "algo": self.name,
            "visited": self.stats.visited_count,
            "frontier_size": len(self.frontier_ids()),
            "path_len": self.stats.path_length,
            "total_cost": self.stats.path_cost if self.status is Status.SUCCESS else None,
            "duration_ms": round(self.stats.duration_ms, 3),
        }
