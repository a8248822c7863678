"""Food placement on free cells."""
from __future__ import annotations

import logging
import random
from typing import Optional, Set

from .errors import BoardFullError
from .grid import Cell, GridModel

logger = logging.getLogger(__name__)

# Random draws per cell before falling back to a linear scan
RETRY_FACTOR = 4


class FoodSpawner:
    """
    Picks a random unoccupied cell for the next piece of food.

    Sampling is uniform over the whole board with a bounded number of
    retries. When the board is nearly full the retries can run out, so the
    spawner then scans the free cells in row-major order and takes the first
    one.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        """
        Args:
            rng: Random source; pass a seeded random.Random for reproducible
                 games. Defaults to an unseeded one.
        """
        self.rng = rng if rng is not None else random.Random()

    def spawn(self, grid_size: int, occupied: Set[Cell]) -> Cell:
        """
        Return a cell inside the board that is not in `occupied`.

        Raises:
            BoardFullError: if every cell is occupied.
        """
        grid = GridModel(grid_size)
        if len(occupied) >= grid.cell_count:
            raise BoardFullError(grid_size)

        max_attempts = grid.cell_count * RETRY_FACTOR
        for _ in range(max_attempts):
            candidate = (
                self.rng.randint(0, grid_size - 1),
                self.rng.randint(0, grid_size - 1),
            )
            if candidate not in occupied:
                return candidate

        logger.debug(f"No free cell after {max_attempts} draws, scanning board")
        free = grid.free_cells(occupied)
        if not free:
            raise BoardFullError(grid_size)
        return free[0]
