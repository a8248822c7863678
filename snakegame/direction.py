"""
Movement directions and input normalization.

Directions are a closed enum. Whatever the input device sends (browser key
codes, key names, WASD) is mapped to a Direction at the boundary by
direction_from_key(), so the core never sees raw key encodings.
"""
from enum import Enum
from typing import Optional, Tuple


class Direction(Enum):
    """Unit step on the grid. y grows downward."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def vector(self) -> Tuple[int, int]:
        return self.value

    @property
    def opposite(self) -> "Direction":
        dx, dy = self.value
        return Direction((-dx, -dy))

    @classmethod
    def between(cls, origin, target) -> Optional["Direction"]:
        """
        Direction that moves `origin` onto an adjacent `target`.

        Returns None if the cells are not 4-neighbours.
        """
        offset = (target[0] - origin[0], target[1] - origin[1])
        try:
            return cls(offset)
        except ValueError:
            return None

    @classmethod
    def from_name(cls, name: str) -> "Direction":
        """Parse 'up', 'Down', 'LEFT', ... into a Direction."""
        try:
            return cls[str(name).strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown direction: {name!r}") from None


# Browser KeyboardEvent.keyCode values for the arrow keys
KEY_CODES = {
    37: Direction.LEFT,
    38: Direction.UP,
    39: Direction.RIGHT,
    40: Direction.DOWN,
}

# KeyboardEvent.key values, compared case-insensitively
KEY_NAMES = {
    'arrowleft': Direction.LEFT,
    'arrowup': Direction.UP,
    'arrowright': Direction.RIGHT,
    'arrowdown': Direction.DOWN,
    'a': Direction.LEFT,
    'w': Direction.UP,
    'd': Direction.RIGHT,
    's': Direction.DOWN,
    'left': Direction.LEFT,
    'up': Direction.UP,
    'right': Direction.RIGHT,
    'down': Direction.DOWN,
}


def direction_from_key(key) -> Optional[Direction]:
    """
    Map a key code or key name to a Direction.

    Unknown keys return None so the caller can ignore them.
    """
    if isinstance(key, Direction):
        return key
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return KEY_CODES.get(key)
    if isinstance(key, str):
        stripped = key.strip()
        if stripped.isdigit():
            return KEY_CODES.get(int(stripped))
        return KEY_NAMES.get(stripped.lower())
    return None


class DirectionResolver:
    """Filters requested turns so the snake can never reverse into itself."""

    def resolve(self, current: Direction, requested: Optional[Direction]) -> Direction:
        """
        Return the direction to use this tick.

        A missing request or a 180° reversal keeps the current direction.
        """
        if requested is None or requested is current.opposite:
            return current
        return requested
