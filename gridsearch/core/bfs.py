#!/usr/bin/env python3
"""
Breadth-first search — one dequeue per step() for animation.

Unweighted and FIFO, so the first time the target is dequeued its predecessor
chain is a shortest path in edges. Neighbours are enumerated up, left, down,
right; changing that order changes the visit order.

Weights are ignored by the search itself but still count towards the reported
path cost when weighting is enabled.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from gridsearch.core.executor import SearchExecutor
from gridsearch.core.grid import Cell
from gridsearch.core.queues import FifoQueue
from gridsearch.core.types import CellId


@dataclass
class BreadthFirstSearch(SearchExecutor):
    name: str = "breadth-first search"

    frontier: FifoQueue = field(default_factory=FifoQueue)
    came_from: Dict[CellId, Optional[CellId]] = field(default_factory=dict)

    def _seed(self, start: Cell) -> None:
        self.frontier = FifoQueue()
        self.came_from = {start.id: None}
        self.frontier.enqueue(start)

    def _predecessor(self, cell_id: CellId) -> Optional[CellId]:
        return self.came_from.get(cell_id)

    def frontier_ids(self) -> List[CellId]:
        return [c.id for c in self.frontier]

    def _expand(self) -> Tuple[Optional[Cell], List[CellId]]:
        current = self.frontier.dequeue()
        if current is None:
            self._fail()
            return None, []

        if current.id == self.grid.target_id:
            self._succeed(current)
            return current, []

        for nb in current.neighbors():
            if nb.walkable and nb.id not in self.came_from:
                self.frontier.enqueue(nb)
                self.came_from[nb.id] = current.id
        self._visit(current)

        if self.frontier.is_empty():
            self._fail()
        return current, [current.id]
