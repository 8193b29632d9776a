#!/usr/bin/env python3
"""
Cell grid — the search graph.

- Cells are laid out row-major and numbered from 1: id = row * width + col + 1
  (row/col are 0-based here).
- Every cell links to its up/left/down/right neighbour; links are absent at the
  border (no wraparound, no diagonals).
- Cell category is a single tag (open / wall / weighted), so a cell can never be
  both a wall and weighted.
- Start and target are held by id and are always open cells.

Topology must not change while a search is running; `Session` enforces that.
"""

import logging
from dataclasses import dataclass, field
from math import ceil, inf, isfinite
from typing import Dict, Iterator, List, Optional, Set, Tuple

from gridsearch.core.types import CellId, CellKind

logger = logging.getLogger(__name__)

RowCol = Tuple[int, int]


@dataclass(eq=False)
class Cell:
    id: CellId
    row: int
    col: int
    size: int
    kind: CellKind = CellKind.OPEN

    # neighbours (same grid only, rebuilt on resize)
    up: Optional["Cell"] = field(default=None, repr=False)
    left: Optional["Cell"] = field(default=None, repr=False)
    down: Optional["Cell"] = field(default=None, repr=False)
    right: Optional["Cell"] = field(default=None, repr=False)

    # search state
    parent: Optional[CellId] = None
    g: float = inf
    h: Optional[int] = None
    f: float = inf

    @property
    def x(self) -> int:
        return self.col * self.size

    @property
    def y(self) -> int:
        return self.row * self.size

    @property
    def walkable(self) -> bool:
        return self.kind is not CellKind.WALL

    @property
    def weighted(self) -> bool:
        return self.kind is CellKind.WEIGHTED

    def neighbors(self) -> Iterator["Cell"]:
        """Existing neighbours in fixed order: up, left, down, right."""
        for n in (self.up, self.left, self.down, self.right):
            if n is not None:
                yield n

    def reset_search(self) -> None:
        self.parent = None
        self.g = inf
        self.h = None
        self.f = inf


def edge_cost(dest: Cell, weighting_enabled: bool, weight_multiplier: int) -> int:
    """Cost of stepping into `dest`."""
    if weighting_enabled and dest.weighted:
        return weight_multiplier
    return 1


class Grid:
    def __init__(self, cell_size: int, viewport_width: int, viewport_height: int):
        if cell_size <= 0:
            raise ValueError(f"cell size must be positive, got {cell_size}")
        self.cell_size = int(cell_size)
        self.viewport_width = 0
        self.viewport_height = 0
        self.width_in_cells = 0
        self.height_in_cells = 0
        self.cells: List[Cell] = []
        self.start_id: Optional[CellId] = None
        self.target_id: Optional[CellId] = None
        self.wall_ids: Set[CellId] = set()
        self.weighted_ids: Set[CellId] = set()

        self.build(viewport_width, viewport_height)
        self.pick_default_start_and_target()

    # -------------------- construction --------------------

    def build(self, viewport_width: int, viewport_height: int) -> None:
        """Partition the viewport into cells and wire 4-way adjacency."""
        w = ceil(viewport_width / self.cell_size) if viewport_width > 0 else 0
        h = ceil(viewport_height / self.cell_size) if viewport_height > 0 else 0
        if w * h < 2:
            raise ValueError(
                f"viewport {viewport_width}x{viewport_height} with cell size "
                f"{self.cell_size} gives fewer than two cells"
            )

        self.viewport_width = viewport_width
        self.viewport_height = viewport_height
        self.width_in_cells = w
        self.height_in_cells = h
        self.cells = [
            Cell(id=row * w + col + 1, row=row, col=col, size=self.cell_size)
            for row in range(h)
            for col in range(w)
        ]
        self.wall_ids = set()
        self.weighted_ids = set()

        for c in self.cells:
            if c.row > 0:
                c.up = self.cells[c.id - 1 - w]
            if c.col > 0:
                c.left = self.cells[c.id - 2]
            if c.row < h - 1:
                c.down = self.cells[c.id - 1 + w]
            if c.col < w - 1:
                c.right = self.cells[c.id]

    def pick_default_start_and_target(self) -> None:
        """Start a quarter across, target three quarters across, both mid-height."""
        sx = self.viewport_width // 4
        tx = ceil(self.viewport_width * 3 / 4)
        y = self.viewport_height // 2

        start = self._clamped_cell_at(sx, y)
        target = self._clamped_cell_at(tx, y)
        if target.id == start.id:
            nxt = self.get_cell(start.id + 1) or self.get_cell(start.id - 1)
            target = nxt

        for c in (start, target):
            self._set_kind(c, CellKind.OPEN)
        self.start_id = start.id
        self.target_id = target.id

    def _clamped_cell_at(self, px: int, py: int) -> Cell:
        col = min(px // self.cell_size, self.width_in_cells - 1)
        row = min(py // self.cell_size, self.height_in_cells - 1)
        return self.cells[self.cell_id(row, col) - 1]

    # -------------------- queries --------------------

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height_in_cells and 0 <= col < self.width_in_cells

    def cell_id(self, row: int, col: int) -> CellId:
        return row * self.width_in_cells + col + 1

    def get_cell(self, cell_id) -> Optional[Cell]:
        """Indexed lookup; None for anything that isn't a valid id."""
        if isinstance(cell_id, bool) or not isinstance(cell_id, int):
            return None
        if 1 <= cell_id <= len(self.cells):
            return self.cells[cell_id - 1]
        return None

    def get_cell_at(self, px: float, py: float) -> Optional[Cell]:
        """Cell under a pixel coordinate, or None outside the grid or for nan/inf."""
        if not (isfinite(px) and isfinite(py)) or px < 0 or py < 0:
            return None
        row, col = int(py // self.cell_size), int(px // self.cell_size)
        if not self.in_bounds(row, col):
            return None
        return self.cells[self.cell_id(row, col) - 1]

    @property
    def start(self) -> Cell:
        return self.cells[self.start_id - 1]

    @property
    def target(self) -> Cell:
        return self.cells[self.target_id - 1]

    def heuristic(self, cell: Cell) -> int:
        """Manhattan distance to the target in whole cells."""
        t = self.target
        return (abs(cell.x - t.x) + abs(cell.y - t.y)) // self.cell_size

    # -------------------- mutators --------------------

    def _set_kind(self, cell: Cell, kind: CellKind) -> None:
        self.wall_ids.discard(cell.id)
        self.weighted_ids.discard(cell.id)
        cell.kind = kind
        if kind is CellKind.WALL:
            self.wall_ids.add(cell.id)
        elif kind is CellKind.WEIGHTED:
            self.weighted_ids.add(cell.id)

    def _is_endpoint(self, cell_id: CellId) -> bool:
        return cell_id == self.start_id or cell_id == self.target_id

    def toggle_wall(self, cell_id: CellId, allow_toggle_off: bool = True) -> bool:
        """Make an open or weighted cell a wall, or (optionally) a wall open again.

        Returns True if anything changed. Start and target are never touched.
        """
        cell = self.get_cell(cell_id)
        if cell is None or self._is_endpoint(cell.id):
            return False
        if cell.walkable:
            self._set_kind(cell, CellKind.WALL)
            return True
        if allow_toggle_off:
            self._set_kind(cell, CellKind.OPEN)
            return True
        return False

    def toggle_weighted_zone(self, cell_id: CellId, allow_toggle_off: bool = True) -> bool:
        cell = self.get_cell(cell_id)
        if cell is None or self._is_endpoint(cell.id):
            return False
        if cell.kind is CellKind.OPEN:
            self._set_kind(cell, CellKind.WEIGHTED)
            return True
        if cell.kind is CellKind.WEIGHTED and allow_toggle_off:
            self._set_kind(cell, CellKind.OPEN)
            return True
        return False

    def _can_host_endpoint(self, cell_id: CellId, other: Optional[CellId]) -> bool:
        cell = self.get_cell(cell_id)
        return cell is not None and cell.kind is CellKind.OPEN and cell.id != other

    def set_start(self, cell_id: CellId) -> bool:
        if not self._can_host_endpoint(cell_id, self.target_id):
            return False
        self.start_id = cell_id
        return True

    def set_target(self, cell_id: CellId) -> bool:
        if not self._can_host_endpoint(cell_id, self.start_id):
            return False
        self.target_id = cell_id
        return True

    def resize(self, viewport_width: int, viewport_height: int) -> None:
        """Rebuild for a new viewport, carrying marks and endpoints by (row, col)."""
        old_start = (self.start.row, self.start.col)
        old_target = (self.target.row, self.target.col)
        marks: Dict[RowCol, CellKind] = {
            (c.row, c.col): c.kind for c in self.cells if c.kind is not CellKind.OPEN
        }
        old_dims = (self.width_in_cells, self.height_in_cells)

        self.build(viewport_width, viewport_height)

        dropped = 0
        for (row, col), kind in marks.items():
            if self.in_bounds(row, col):
                self._set_kind(self.cells[self.cell_id(row, col) - 1], kind)
            else:
                dropped += 1

        if self.in_bounds(*old_start) and self.in_bounds(*old_target):
            self.start_id = self.cell_id(*old_start)
            self.target_id = self.cell_id(*old_target)
        else:
            self.pick_default_start_and_target()

        logger.debug(
            "resized grid %sx%s -> %sx%s, %d marks dropped",
            old_dims[0], old_dims[1], self.width_in_cells, self.height_in_cells, dropped,
        )

    def reset_search_state(self) -> None:
        for c in self.cells:
            c.reset_search()

    def clear_all_marks(self) -> None:
        for c in self.cells:
            c.kind = CellKind.OPEN
        self.wall_ids.clear()
        self.weighted_ids.clear()
