"""
Shortest-path search for autoplay.

The Pathfinder turns the current board into a walkability matrix and hands it
to a GraphSearch. The search itself is injected so tests (or a different
algorithm) can replace it:

    pathfinder = Pathfinder(search=BreadthFirstSearch())
    step = pathfinder.next_step(grid, body, food)
"""
from __future__ import annotations

import heapq
import logging
from abc import ABC, abstractmethod
from collections import deque
from typing import Dict, List, Optional, Sequence

import numpy as np

from .grid import Cell, GridModel

logger = logging.getLogger(__name__)

NEIGHBOUR_OFFSETS = [(1, 0), (-1, 0), (0, 1), (0, -1)]


def manhattan(a: Cell, b: Cell) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def _neighbours(walkable: np.ndarray, cell: Cell):
    height, width = walkable.shape
    x, y = cell
    for dx, dy in NEIGHBOUR_OFFSETS:
        nx, ny = x + dx, y + dy
        if 0 <= nx < width and 0 <= ny < height and walkable[ny, nx]:
            yield (nx, ny)


def _reconstruct(parent: Dict[Cell, Optional[Cell]], goal: Cell) -> List[Cell]:
    """Walk parents back from goal; the start (parent None) is left out."""
    path = []
    current = goal
    while parent[current] is not None:
        path.append(current)
        current = parent[current]
    path.reverse()
    return path


class GraphSearch(ABC):
    """
    Shortest path over a 4-connected grid.

    Implementations receive a boolean matrix indexed [y, x] where True means
    the cell can be entered, plus start and goal cells as (x, y).
    """

    @abstractmethod
    def search(self, walkable: np.ndarray, start: Cell, goal: Cell) -> Optional[List[Cell]]:
        """
        Returns:
            Cells from the first step up to and including the goal, [] when
            start == goal, or None if the goal cannot be reached.
        """
        pass


class AStarSearch(GraphSearch):
    """A* with a Manhattan heuristic and unit edge cost."""

    def search(self, walkable: np.ndarray, start: Cell, goal: Cell) -> Optional[List[Cell]]:
        if start == goal:
            return []
        gx, gy = goal
        height, width = walkable.shape
        if not (0 <= gx < width and 0 <= gy < height) or not walkable[gy, gx]:
            return None

        g_score = {start: 0}
        parent: Dict[Cell, Optional[Cell]] = {start: None}
        closed = set()
        # (f, h, cell): ties on f prefer cells nearer the goal, then the
        # smaller coordinate, so the result is reproducible
        open_heap = [(manhattan(start, goal), manhattan(start, goal), start)]

        while open_heap:
            _, _, current = heapq.heappop(open_heap)
            if current == goal:
                return _reconstruct(parent, goal)
            if current in closed:
                continue
            closed.add(current)

            for neighbour in _neighbours(walkable, current):
                if neighbour in closed:
                    continue
                tentative = g_score[current] + 1
                if tentative < g_score.get(neighbour, float('inf')):
                    g_score[neighbour] = tentative
                    parent[neighbour] = current
                    h = manhattan(neighbour, goal)
                    heapq.heappush(open_heap, (tentative + h, h, neighbour))

        return None


class BreadthFirstSearch(GraphSearch):
    """Plain BFS. Same path lengths as A*, explores more cells."""

    def search(self, walkable: np.ndarray, start: Cell, goal: Cell) -> Optional[List[Cell]]:
        if start == goal:
            return []

        parent: Dict[Cell, Optional[Cell]] = {start: None}
        queue = deque([start])
        while queue:
            current = queue.popleft()
            for neighbour in _neighbours(walkable, current):
                if neighbour in parent:
                    continue
                parent[neighbour] = current
                if neighbour == goal:
                    return _reconstruct(parent, goal)
                queue.append(neighbour)

        return None


class Pathfinder:
    """
    Suggests the next cell for the head on the way to the food.

    Nothing is cached: the body moves every tick, so the obstacle set and
    the path are rebuilt on every call.
    """

    def __init__(self, search: Optional[GraphSearch] = None):
        self.search = search if search is not None else AStarSearch()

    def find_path(self, grid: GridModel, body: Sequence[Cell], food: Optional[Cell]) -> Optional[List[Cell]]:
        """Full path from the head to the food, head excluded."""
        if not body or food is None:
            return None
        head = body[0]
        walkable = grid.traversable(body, origin=head)
        path = self.search.search(walkable, head, food)
        if path is None:
            logger.debug(f"No path from {head} to food at {food}")
        return path

    def next_step(self, grid: GridModel, body: Sequence[Cell], food: Optional[Cell]) -> Optional[Cell]:
        """First cell of the shortest path, or None if the food is unreachable."""
        path = self.find_path(grid, body, food)
        if not path:
            return None
        return path[0]
