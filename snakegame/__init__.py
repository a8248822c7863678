"""Grid snake game core with A* autoplay."""

from .config import GameConfig
from .direction import Direction, DirectionResolver, direction_from_key
from .errors import BoardFullError, ConfigurationError, SnakeGameError
from .food import FoodSpawner
from .grid import GridModel
from .pathfinding import AStarSearch, BreadthFirstSearch, GraphSearch, Pathfinder
from .snake import SnakeStateMachine
from .state import Event, GameState, Snapshot


def create_game(config: GameConfig, **kwargs) -> SnakeStateMachine:
    """
    Build a state machine from a GameConfig.

    Extra keyword arguments (body, food, spawner, pathfinder...) are passed
    straight to SnakeStateMachine.
    """
    return SnakeStateMachine(
        grid_size=config.grid_size,
        autoplay=config.autoplay,
        seed=config.seed,
        **kwargs
    )


__all__ = [
    "AStarSearch",
    "BoardFullError",
    "BreadthFirstSearch",
    "ConfigurationError",
    "Direction",
    "DirectionResolver",
    "Event",
    "FoodSpawner",
    "GameConfig",
    "GameState",
    "GraphSearch",
    "GridModel",
    "Pathfinder",
    "SnakeGameError",
    "SnakeStateMachine",
    "Snapshot",
    "create_game",
    "direction_from_key",
]
