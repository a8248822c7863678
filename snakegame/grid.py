"""
Board geometry and occupancy queries.

The grid never stores the snake. Every query takes the body (or the set
derived from it) as an argument, so the state machine stays the only owner
of game state.
"""
from __future__ import annotations

import math
from typing import Iterable, List, Optional, Set, Tuple

import numpy as np

from .errors import ConfigurationError

Cell = Tuple[int, int]

MIN_GRID_SIZE = 2


def _check_cell(cell) -> Cell:
    """Reject anything that is not an (x, y) pair of integers."""
    if not isinstance(cell, tuple) or len(cell) != 2:
        raise TypeError(f"Cell must be an (x, y) tuple, got {cell!r}")
    x, y = cell
    for value in (x, y):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise TypeError(f"Cell coordinates must be integers, got {cell!r}")
    return int(x), int(y)


class GridModel:
    """
    Square board of grid_size x grid_size cells.

    Coordinates are (x, y) with y growing downward, matching the canvas the
    frontend draws on. Arrays produced here are indexed [y, x].
    """

    def __init__(self, grid_size: int):
        if isinstance(grid_size, bool) or not isinstance(grid_size, int) or grid_size < MIN_GRID_SIZE:
            raise ConfigurationError(
                f"Grid size must be an integer >= {MIN_GRID_SIZE}, got {grid_size!r}"
            )
        self.grid_size = grid_size

    @classmethod
    def from_pixels(cls, board_size, block_size) -> "GridModel":
        """
        Derive the grid from the board and block sizes in pixels.

        The ratio is floored, so a 410px board with 20px blocks gives a
        20x20 grid and the leftover pixels are unused.

        Raises:
            ConfigurationError: if either size is not a positive finite number
                or the board holds fewer than 2 blocks per side.
        """
        for name, value in (("board_size", board_size), ("block_size", block_size)):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigurationError(f"{name} must be a number, got {value!r}")
            if not math.isfinite(value) or value <= 0:
                raise ConfigurationError(f"{name} must be positive, got {value!r}")

        grid_size = int(math.floor(board_size / block_size))
        if grid_size < MIN_GRID_SIZE:
            raise ConfigurationError(
                f"Board of {board_size}px with {block_size}px blocks gives "
                f"{grid_size} blocks per side (minimum {MIN_GRID_SIZE})"
            )
        return cls(grid_size)

    @property
    def cell_count(self) -> int:
        return self.grid_size * self.grid_size

    def is_inside(self, cell) -> bool:
        x, y = _check_cell(cell)
        return 0 <= x < self.grid_size and 0 <= y < self.grid_size

    def occupied_cells(self, body: Iterable[Cell]) -> Set[Cell]:
        return {_check_cell(cell) for cell in body}

    def is_free(self, cell, occupied: Set[Cell]) -> bool:
        """True if the cell is on the board and nothing occupies it."""
        return self.is_inside(cell) and _check_cell(cell) not in occupied

    def free_cells(self, occupied: Set[Cell]) -> List[Cell]:
        """All free cells in row-major order (y first, then x)."""
        return [
            (x, y)
            for y in range(self.grid_size)
            for x in range(self.grid_size)
            if (x, y) not in occupied
        ]

    def traversable(self, body: Iterable[Cell], origin: Optional[Cell] = None) -> np.ndarray:
        """
        Boolean walkability matrix indexed [y, x].

        Body cells are blocked. The origin (usually the head) is always
        left open so a search can start from it.
        """
        walkable = np.ones((self.grid_size, self.grid_size), dtype=bool)
        for x, y in self.occupied_cells(body):
            if self.is_inside((x, y)):
                walkable[y, x] = False
        if origin is not None and self.is_inside(origin):
            ox, oy = _check_cell(origin)
            walkable[oy, ox] = True
        return walkable

    def __repr__(self) -> str:
        return f"GridModel(grid_size={self.grid_size})"
