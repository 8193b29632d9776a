#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Dict, Any

CellId = int  # 1-based, row-major


class CellKind(Enum):
    OPEN = "open"
    WALL = "wall"
    WEIGHTED = "weighted"


class Status(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    SUCCESS = "success"
    FAILURE = "failure"

    @property
    def terminal(self) -> bool:
        return self in (Status.SUCCESS, Status.FAILURE)


class Algorithm(str, Enum):
    BFS = "bfs"
    ASTAR = "astar"


class SearchInProgressError(RuntimeError):
    """Raised when the board is edited while a search is running."""


@dataclass
class SearchStats:
    visited_count: int = 0
    path_length: int = 0          # edges
    path_cost: int = 0            # transit cost, weighted cells included when enabled
    duration_ms: float = 0.0      # time spent inside step()


@dataclass
class StepResult:
    status: Status
    visited: List[CellId] = field(default_factory=list)    # newly expanded this step
    frontier: List[CellId] = field(default_factory=list)   # queue / open set contents
    current: Optional[CellId] = None
    path: Optional[List[CellId]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)
