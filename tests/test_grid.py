"""
Tests for board geometry and occupancy queries.
"""
import pytest
import sys
import os

import numpy as np

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from snakegame.errors import ConfigurationError
from snakegame.grid import GridModel


class TestGridFromPixels:
    """Tests for deriving the grid size from pixel sizes."""

    def test_exact_division(self):
        """Test that 400px with 20px blocks gives 20 cells."""
        assert GridModel.from_pixels(400, 20).grid_size == 20

    def test_floors_remainder(self):
        """Test that leftover pixels are dropped."""
        assert GridModel.from_pixels(410, 20).grid_size == 20
        assert GridModel.from_pixels(399, 20).grid_size == 19

    def test_minimum_two_blocks(self):
        """Test that a board of exactly two blocks is accepted."""
        assert GridModel.from_pixels(40, 20).grid_size == 2

    def test_too_small_board_fails(self):
        """Test that fewer than two blocks per side is rejected."""
        with pytest.raises(ConfigurationError):
            GridModel.from_pixels(39, 20)

    def test_zero_block_size_fails(self):
        """Test that a zero block size is rejected."""
        with pytest.raises(ConfigurationError):
            GridModel.from_pixels(400, 0)

    def test_negative_board_fails(self):
        """Test that negative sizes are rejected."""
        with pytest.raises(ConfigurationError):
            GridModel.from_pixels(-400, 20)

    def test_non_finite_fails(self):
        """Test that infinite or NaN sizes are rejected."""
        with pytest.raises(ConfigurationError):
            GridModel.from_pixels(float('inf'), 20)
        with pytest.raises(ConfigurationError):
            GridModel.from_pixels(float('nan'), 20)

    def test_non_numeric_fails(self):
        """Test that strings are rejected."""
        with pytest.raises(ConfigurationError):
            GridModel.from_pixels("400", 20)

    def test_configuration_error_is_value_error(self):
        """Test that callers catching ValueError also catch config errors."""
        with pytest.raises(ValueError):
            GridModel(1)


class TestGridQueries:
    """Tests for inside/free/occupied queries."""

    def test_is_inside_corners(self):
        """Test that all four corners are inside."""
        grid = GridModel(5)
        for cell in [(0, 0), (4, 0), (0, 4), (4, 4)]:
            assert grid.is_inside(cell)

    def test_is_inside_just_outside(self):
        """Test that cells one step past each edge are outside."""
        grid = GridModel(5)
        for cell in [(-1, 0), (5, 0), (0, -1), (0, 5)]:
            assert not grid.is_inside(cell)

    def test_malformed_cell_rejected(self):
        """Test that non-integer coordinates are a programmer error."""
        grid = GridModel(5)
        with pytest.raises(TypeError):
            grid.is_inside((1.5, 2))
        with pytest.raises(TypeError):
            grid.is_inside([1, 2])
        with pytest.raises(TypeError):
            grid.is_inside((1, 2, 3))

    def test_occupied_cells(self):
        """Test that the occupied set matches the body."""
        grid = GridModel(5)
        assert grid.occupied_cells([(1, 0), (0, 0)]) == {(1, 0), (0, 0)}

    def test_is_free(self):
        """Test free checks against occupancy and bounds."""
        grid = GridModel(5)
        occupied = {(1, 0), (0, 0)}
        assert grid.is_free((2, 0), occupied)
        assert not grid.is_free((1, 0), occupied)
        assert not grid.is_free((5, 0), occupied)

    def test_free_cells_row_major(self):
        """Test that free cells are listed row by row."""
        grid = GridModel(2)
        assert grid.free_cells({(0, 0)}) == [(1, 0), (0, 1), (1, 1)]

    def test_free_cells_full_board(self):
        """Test that a full board has no free cells."""
        grid = GridModel(2)
        assert grid.free_cells({(0, 0), (1, 0), (0, 1), (1, 1)}) == []


class TestTraversable:
    """Tests for the walkability matrix."""

    def test_shape_and_dtype(self):
        """Test that the matrix is square and boolean."""
        walkable = GridModel(4).traversable([(1, 0), (0, 0)])
        assert walkable.shape == (4, 4)
        assert walkable.dtype == np.bool_

    def test_body_blocked(self):
        """Test that body cells are blocked, indexed [y, x]."""
        walkable = GridModel(4).traversable([(2, 1), (2, 2)])
        assert not walkable[1, 2]
        assert not walkable[2, 2]
        assert walkable[2, 1]
        assert walkable.sum() == 14

    def test_origin_open(self):
        """Test that the origin stays walkable even if occupied."""
        walkable = GridModel(4).traversable([(2, 1), (2, 2)], origin=(2, 1))
        assert walkable[1, 2]
        assert not walkable[2, 2]


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
