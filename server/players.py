"""
Player abstractions for the two control modes.

The Session asks its player for a direction once per tick without knowing
whether it is dealing with:
- A human (direction comes from keyboard input between ticks)
- Autoplay (direction comes from the pathfinder inside the state machine)
"""
from abc import ABC, abstractmethod
from threading import Lock
from typing import Optional

from snakegame import Direction


class Player(ABC):
    """
    Abstract base class for all player types.

    The Session calls get_direction() each tick.
    """

    autoplay = False

    @abstractmethod
    def get_direction(self) -> Optional[Direction]:
        """
        Direction requested for the coming tick.

        Returns:
            Direction, or None to keep going the same way
        """
        pass

    def reset(self):
        """Called when a new game starts."""
        pass


class HumanPlayer(Player):
    """
    Human player - direction comes from key presses.

    Key presses arrive on socket handler threads between ticks. Only the
    latest one is kept, and it is consumed by the next tick.
    """

    def __init__(self):
        self._pending: Optional[Direction] = None
        self._lock = Lock()

    def set_direction(self, direction: Optional[Direction]):
        """Called by the input handler. None is ignored."""
        if direction is None:
            return
        with self._lock:
            self._pending = direction

    def get_direction(self) -> Optional[Direction]:
        with self._lock:
            direction, self._pending = self._pending, None
        return direction

    def reset(self):
        with self._lock:
            self._pending = None


class AutoPlayer(Player):
    """
    Autoplay - the state machine steers with its pathfinder.

    Key presses are ignored.
    """

    autoplay = True

    def get_direction(self) -> Optional[Direction]:
        return None


def create_player(control_mode: str) -> Player:
    """
    Create a player based on control mode.

    Args:
        control_mode: 'human' or 'autoplay'

    Returns:
        Player instance
    """
    if control_mode == 'human':
        return HumanPlayer()
    elif control_mode == 'autoplay':
        return AutoPlayer()
    else:
        raise ValueError(f"Unknown control mode: {control_mode}")
