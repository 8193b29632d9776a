#!/usr/bin/env python3
"""
A* — one expansion per step() for animation.

Heuristic:
- Manhattan distance to the target in whole cells, computed once per cell.
- Admissible: every move costs at least 1 and movement is 4-connected;
  weighted cells cost `weight_multiplier` >= 1, so weighting keeps it admissible.

Open set is the heap in queues.PriorityQueue. An improved g on a cell that is
already open is pushed through with reheapify().
"""

from dataclasses import dataclass, field
from typing import List, Optional, Set, Tuple

from gridsearch.core.executor import SearchExecutor
from gridsearch.core.grid import Cell
from gridsearch.core.queues import PriorityQueue
from gridsearch.core.types import CellId


@dataclass
class AStarSearch(SearchExecutor):
    name: str = "A*"

    open_set: PriorityQueue = field(default_factory=PriorityQueue)
    closed_set: Set[CellId] = field(default_factory=set)

    def _seed(self, start: Cell) -> None:
        self.open_set = PriorityQueue()
        self.closed_set = set()
        start.g = 0
        start.h = self.grid.heuristic(start)
        start.f = start.g + start.h
        self.open_set.insert(start)

    def _predecessor(self, cell_id: CellId) -> Optional[CellId]:
        return self.grid.get_cell(cell_id).parent

    def frontier_ids(self) -> List[CellId]:
        return [c.id for c in self.open_set]

    def _expand(self) -> Tuple[Optional[Cell], List[CellId]]:
        current = self.open_set.extract_min()
        if current is None:
            self._fail()
            return None, []

        self.closed_set.add(current.id)
        self._visit(current)

        if current.id == self.grid.target_id:
            self._succeed(current)
            return current, [current.id]

        for nb in current.neighbors():
            if not nb.walkable or nb.id in self.closed_set:
                continue

            alt = current.g + self._edge_cost(nb)
            in_open = nb in self.open_set
            if in_open and alt >= nb.g:
                continue

            nb.g = alt
            if nb.h is None:
                nb.h = self.grid.heuristic(nb)
            nb.f = nb.g + nb.h
            nb.parent = current.id
            if in_open:
                self.open_set.reheapify()
            else:
                self.open_set.insert(nb)

        if self.open_set.is_empty():
            self._fail()
        return current, [current.id]
