"""
Tests for food placement.
"""
import pytest
import random
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from snakegame.errors import BoardFullError
from snakegame.food import FoodSpawner


class AlwaysOrigin(random.Random):
    """Random source that keeps drawing 0, i.e. cell (0, 0)."""

    def randint(self, a, b):
        return a


class TestFoodSpawner:
    """Tests for FoodSpawner.spawn."""

    def test_spawn_inside_and_free(self):
        """Test that food lands on a free cell inside the board."""
        spawner = FoodSpawner(random.Random(1))
        occupied = {(1, 0), (0, 0)}
        for _ in range(50):
            x, y = spawner.spawn(10, occupied)
            assert 0 <= x < 10 and 0 <= y < 10
            assert (x, y) not in occupied

    def test_seeded_spawner_is_deterministic(self):
        """Test that two spawners with the same seed agree."""
        a = FoodSpawner(random.Random(42))
        b = FoodSpawner(random.Random(42))
        occupied = {(0, 0)}
        assert [a.spawn(8, occupied) for _ in range(20)] == [b.spawn(8, occupied) for _ in range(20)]

    def test_single_free_cell_found(self):
        """Test that the last free cell is found."""
        occupied = {(0, 0), (1, 0), (0, 1)}
        assert FoodSpawner(random.Random(3)).spawn(2, occupied) == (1, 1)

    def test_fallback_scan_when_sampling_fails(self):
        """Test that exhausted retries fall back to the first free cell."""
        spawner = FoodSpawner(AlwaysOrigin())
        occupied = {(0, 0), (1, 0)}
        assert spawner.spawn(3, occupied) == (2, 0)

    def test_full_board_raises(self):
        """Test that a full board raises BoardFullError."""
        occupied = {(0, 0), (1, 0), (0, 1), (1, 1)}
        with pytest.raises(BoardFullError) as exc_info:
            FoodSpawner(random.Random(0)).spawn(2, occupied)
        assert exc_info.value.grid_size == 2

    def test_default_rng(self):
        """Test that a spawner works without an explicit random source."""
        cell = FoodSpawner().spawn(5, set())
        assert 0 <= cell[0] < 5 and 0 <= cell[1] < 5


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
