"""
Exceptions raised by the snake game core.

Only conditions the caller has to act on are exceptions. Illegal reversals,
unknown keys and unreachable food are normalized inside the core instead.
"""


class SnakeGameError(Exception):
    """Base class for all snake game errors."""


class ConfigurationError(SnakeGameError, ValueError):
    """
    The game cannot be built from the given settings.

    Raised at construction time, e.g. when the board does not hold at least
    2x2 blocks or the starting body is malformed. No game is created.
    """


class BoardFullError(SnakeGameError):
    """
    No free cell is left for food.

    The state machine turns this into the Won state rather than retrying.
    """

    def __init__(self, grid_size: int):
        self.grid_size = grid_size
        super().__init__(f"No free cell left on a {grid_size}x{grid_size} board")
