"""Value types shared by the state machine and its listeners."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .direction import Direction
from .grid import Cell


class GameState(Enum):
    RUNNING = 'running'
    GAME_OVER = 'game_over'
    WON = 'won'

    @property
    def is_terminal(self) -> bool:
        return self is not GameState.RUNNING


class Event(Enum):
    """What happened during a tick. Values are the wire names."""

    MOVED = 'moved'
    EATEN = 'eaten'
    WALL_COLLISION = 'wall-collision'
    SELF_COLLISION = 'self-collision'
    WON = 'won'


@dataclass(frozen=True)
class Snapshot:
    """
    Read-only view of the game after a tick.

    Listeners (renderer, audio, scoreboard) get one of these and never touch
    the state machine directly.
    """

    body: Tuple[Cell, ...]
    food: Optional[Cell]
    score: int
    state: GameState
    direction: Direction
    events: Tuple[Event, ...] = ()
    path_hint: Optional[Cell] = None
    grid_size: int = field(default=0)

    @property
    def head(self) -> Cell:
        return self.body[0]

    @property
    def game_over(self) -> bool:
        return self.state.is_terminal

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly form for the socket layer."""
        return {
            'grid_size': self.grid_size,
            'body': [{'x': x, 'y': y} for x, y in self.body],
            'food': {'x': self.food[0], 'y': self.food[1]} if self.food is not None else None,
            'score': self.score,
            'state': self.state.value,
            'direction': self.direction.name.lower(),
            'events': [event.value for event in self.events],
            'path_hint': {'x': self.path_hint[0], 'y': self.path_hint[1]} if self.path_hint is not None else None,
            'game_over': self.game_over,
        }
