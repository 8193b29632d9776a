#!/usr/bin/env python3
"""
Frontier containers.

FifoQueue:     BFS frontier. Front/back counters over a dict, so dequeue never
               shifts storage.
PriorityQueue: A* open set. Binary min-heap on `cell.f`, 1-indexed with a None
               sentinel at slot 0, plus a membership set.

Decrease-key is done by `reheapify()` (rebuild from current contents) rather
than repositioning a single interior entry. O(n) per update instead of
O(log n); paths and visit order are the same either way.
"""

from typing import Callable, Dict, Iterator, List, Optional, Set

from gridsearch.core.grid import Cell


class FifoQueue:
    def __init__(self) -> None:
        self._storage: Dict[int, Cell] = {}
        self._front = 0
        self._back = -1

    def enqueue(self, cell: Cell) -> None:
        self._back += 1
        self._storage[self._back] = cell

    def dequeue(self) -> Optional[Cell]:
        if self.is_empty():
            return None
        cell = self._storage.pop(self._front)
        self._front += 1
        return cell

    def is_empty(self) -> bool:
        return self._front > self._back

    def __len__(self) -> int:
        return self._back - self._front + 1

    def __iter__(self) -> Iterator[Cell]:
        for i in range(self._front, self._back + 1):
            yield self._storage[i]

    def for_each_pending(self, visitor: Callable[[Cell], None]) -> None:
        for cell in self:
            visitor(cell)


class PriorityQueue:
    def __init__(self) -> None:
        self._heap: List[Optional[Cell]] = [None]
        self._members: Set[Cell] = set()

    # -------------------- core heap ops --------------------

    def insert(self, cell: Cell) -> None:
        self._heap.append(cell)
        self._members.add(cell)
        self._sift_up(len(self._heap) - 1)

    def extract_min(self) -> Optional[Cell]:
        if self.is_empty():
            return None
        if len(self._heap) == 2:
            root = self._heap.pop()
            self._members.discard(root)
            return root

        root = self._heap[1]
        self._heap[1] = self._heap.pop()
        self._sift_down(1)
        self._members.discard(root)
        return root

    def peek_min(self) -> Optional[Cell]:
        return self._heap[1] if len(self._heap) > 1 else None

    def insert_then_peek(self, cell: Cell) -> Cell:
        self.insert(cell)
        return self.peek_min()

    def reheapify(self) -> None:
        """Rebuild the heap by re-inserting members in their current slot order.

        Equal-f entries keep their relative order, so replays are deterministic.
        """
        members = self._heap[1:]
        self._heap = [None]
        for cell in members:
            self._heap.append(cell)
            self._sift_up(len(self._heap) - 1)

    def update(self, cell: Cell, f: float) -> bool:
        """Set a member's key and restore heap order. False if not a member."""
        if cell not in self._members:
            return False
        cell.f = f
        self.reheapify()
        return True

    def remove(self, cell: Cell) -> bool:
        if cell not in self._members:
            return False
        tail = self._heap.pop()
        if tail is not cell:
            idx = self._heap.index(cell)
            self._heap[idx] = tail
            self.reheapify()
        self._members.discard(cell)
        return True

    # -------------------- queries --------------------

    def contains(self, cell: Cell) -> bool:
        return cell in self._members

    __contains__ = contains

    def size(self) -> int:
        return len(self._heap) - 1

    __len__ = size

    def is_empty(self) -> bool:
        return len(self._heap) <= 1

    def __iter__(self) -> Iterator[Cell]:
        """Members in heap (slot) order, not sorted order."""
        return iter(self._heap[1:])

    def for_each_pending(self, visitor: Callable[[Cell], None]) -> None:
        for cell in self:
            visitor(cell)

    # -------------------- helpers --------------------

    def _sift_up(self, idx: int) -> None:
        heap = self._heap
        while idx > 1:
            parent = idx // 2
            if heap[parent].f <= heap[idx].f:
                break
            heap[parent], heap[idx] = heap[idx], heap[parent]
            idx = parent

    def _smaller_child(self, idx: int) -> Optional[int]:
        left, right = 2 * idx, 2 * idx + 1
        n = len(self._heap)
        if left >= n:
            return None
        if right >= n or self._heap[left].f <= self._heap[right].f:
            return left
        return right

    def _sift_down(self, idx: int) -> None:
        heap = self._heap
        child = self._smaller_child(idx)
        while child is not None and heap[child].f < heap[idx].f:
            heap[child], heap[idx] = heap[idx], heap[child]
            idx = child
            child = self._smaller_child(idx)
