"""
Tests for directions, the reversal guard and key mapping.
"""
import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from snakegame.direction import Direction, DirectionResolver, direction_from_key


class TestDirection:
    """Tests for the Direction enum."""

    def test_vectors(self):
        """Test unit vectors in screen coordinates (y grows downward)."""
        assert Direction.UP.vector == (0, -1)
        assert Direction.DOWN.vector == (0, 1)
        assert Direction.LEFT.vector == (-1, 0)
        assert Direction.RIGHT.vector == (1, 0)

    def test_opposites(self):
        """Test that opposite pairs map to each other."""
        assert Direction.UP.opposite is Direction.DOWN
        assert Direction.DOWN.opposite is Direction.UP
        assert Direction.LEFT.opposite is Direction.RIGHT
        assert Direction.RIGHT.opposite is Direction.LEFT

    def test_between_adjacent(self):
        """Test that each neighbour offset maps to one direction."""
        assert Direction.between((5, 5), (5, 4)) is Direction.UP
        assert Direction.between((5, 5), (5, 6)) is Direction.DOWN
        assert Direction.between((5, 5), (4, 5)) is Direction.LEFT
        assert Direction.between((5, 5), (6, 5)) is Direction.RIGHT

    def test_between_not_adjacent(self):
        """Test that non-neighbours give None."""
        assert Direction.between((5, 5), (7, 5)) is None
        assert Direction.between((5, 5), (6, 6)) is None
        assert Direction.between((5, 5), (5, 5)) is None

    def test_from_name(self):
        """Test parsing names case-insensitively."""
        assert Direction.from_name('up') is Direction.UP
        assert Direction.from_name(' Left ') is Direction.LEFT
        with pytest.raises(ValueError):
            Direction.from_name('sideways')


class TestDirectionResolver:
    """Tests for the 180° reversal guard."""

    def test_reversal_ignored(self):
        """Test that the exact opposite keeps the current direction."""
        resolver = DirectionResolver()
        for current in Direction:
            assert resolver.resolve(current, current.opposite) is current

    def test_turns_accepted(self):
        """Test that 90° turns are accepted."""
        resolver = DirectionResolver()
        assert resolver.resolve(Direction.RIGHT, Direction.UP) is Direction.UP
        assert resolver.resolve(Direction.RIGHT, Direction.DOWN) is Direction.DOWN
        assert resolver.resolve(Direction.UP, Direction.LEFT) is Direction.LEFT

    def test_same_direction(self):
        """Test that repeating the current direction is fine."""
        assert DirectionResolver().resolve(Direction.LEFT, Direction.LEFT) is Direction.LEFT

    def test_none_keeps_current(self):
        """Test that no request keeps the current direction."""
        assert DirectionResolver().resolve(Direction.DOWN, None) is Direction.DOWN

    def test_never_returns_opposite(self):
        """Test every combination: the result is never the opposite of current."""
        resolver = DirectionResolver()
        for current in Direction:
            for requested in list(Direction) + [None]:
                assert resolver.resolve(current, requested) is not current.opposite


class TestDirectionFromKey:
    """Tests for the input boundary adapter."""

    def test_arrow_key_codes(self):
        """Test browser keyCodes 37-40."""
        assert direction_from_key(37) is Direction.LEFT
        assert direction_from_key(38) is Direction.UP
        assert direction_from_key(39) is Direction.RIGHT
        assert direction_from_key(40) is Direction.DOWN

    def test_key_code_strings(self):
        """Test keyCodes sent as strings."""
        assert direction_from_key('39') is Direction.RIGHT

    def test_key_names(self):
        """Test KeyboardEvent.key names and WASD."""
        assert direction_from_key('ArrowUp') is Direction.UP
        assert direction_from_key('arrowdown') is Direction.DOWN
        assert direction_from_key('a') is Direction.LEFT
        assert direction_from_key('D') is Direction.RIGHT

    def test_direction_passthrough(self):
        """Test that a Direction is returned unchanged."""
        assert direction_from_key(Direction.UP) is Direction.UP

    def test_unknown_keys_ignored(self):
        """Test that unknown input maps to None instead of raising."""
        for key in [13, 'Enter', '', None, True, 3.5, {'key': 37}]:
            assert direction_from_key(key) is None


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
