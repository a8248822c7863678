"""
Game session management.

A Session ties together a state machine and a Player, handling:
- Direction routing (player -> game)
- The game loop and elapsed-time clock (start / stop)
- Score tracking
- Pushing snapshots to whoever renders them
"""
import logging
from threading import Lock
from typing import Callable, Optional

from snakegame import Direction, GameConfig, SnakeStateMachine, Snapshot, direction_from_key
from .players import HumanPlayer, Player
from .scheduler import ElapsedClock, TickScheduler
from .scoreboard import Scoreboard

logger = logging.getLogger(__name__)


class Session:
    """
    Runs one game for one client.

    tick() is serialized with a lock: key presses and manual steps arrive on
    socket handler threads while the scheduler ticks on its own thread, and
    the state machine must never run two ticks at once.
    """

    def __init__(self, game: SnakeStateMachine, player: Player, config: Optional[GameConfig] = None):
        """
        Args:
            game: The state machine to drive
            player: HumanPlayer or AutoPlayer
            config: Used for the tick rate (default GameConfig())
        """
        self.game = game
        self.config = config or GameConfig()
        self.scoreboard = Scoreboard()
        self.game.add_listener(self.scoreboard.on_event)

        self._lock = Lock()
        self._update_callback: Optional[Callable[[Snapshot], None]] = None
        self._time_callback: Optional[Callable[[int], None]] = None

        self.scheduler = TickScheduler(self.config.tick_interval, self._scheduled_tick, name="game-loop")
        self.clock = ElapsedClock(on_second=self._on_second)

        self.set_player(player)

    def set_update_callback(self, callback: Callable[[Snapshot], None]):
        """Set callback receiving every snapshot produced by the game loop."""
        self._update_callback = callback

    def set_time_callback(self, callback: Callable[[int], None]):
        """Set callback receiving elapsed seconds once per second."""
        self._time_callback = callback

    def set_player(self, player: Player):
        """Swap control mode. Autoplay games don't count towards the high score."""
        with self._lock:
            self.player = player
            self.game.set_autoplay(player.autoplay)
            self.scoreboard.set_track_highscore(not player.autoplay)

    def handle_key(self, key) -> Optional[Direction]:
        """
        Input adapter: map a raw key to a Direction and hand it to the player.

        Unknown keys and key presses during autoplay are ignored.

        Returns:
            The Direction queued, or None
        """
        direction = direction_from_key(key)
        if direction is not None and isinstance(self.player, HumanPlayer):
            self.player.set_direction(direction)
            return direction
        return None

    def tick(self) -> Snapshot:
        """
        Execute one game step.

        1. Ask the player for a direction
        2. Step the state machine (scoreboard updates through its listener)
        3. Stop the loop if the game just ended

        Returns:
            Snapshot after the step
        """
        with self._lock:
            direction = self.player.get_direction()
            snapshot = self.game.step(direction)

        if snapshot.game_over and snapshot.events:
            logger.info(f"Game ended: {snapshot.state.value}, score {snapshot.score}")
            self.pause()
        return snapshot

    def _scheduled_tick(self):
        snapshot = self.tick()
        if self._update_callback is not None:
            self._update_callback(snapshot)

    def _on_second(self, seconds: int):
        self.scoreboard.on_second(seconds)
        if self._time_callback is not None:
            self._time_callback(seconds)

    def play(self) -> bool:
        """
        Start (or resume) the game loop and clock.

        Returns:
            False if the game has already ended
        """
        if self.game.state.is_terminal:
            return False
        self.scheduler.start()
        self.clock.start()
        return True

    def pause(self):
        """Stop delivering ticks. The game state is left untouched."""
        self.scheduler.stop()
        self.clock.stop()

    @property
    def is_playing(self) -> bool:
        return self.scheduler.is_running

    def reset(self) -> Snapshot:
        """
        Stop the loop and start a new game.

        Returns:
            Initial snapshot of the new game
        """
        self.pause()
        with self._lock:
            snapshot = self.game.reset()
            self.player.reset()
            self.scoreboard.new_game()
            self.clock.reset()
        return snapshot

    def get_debug_info(self, debug_path: bool = False, debug_distance: bool = False) -> dict:
        with self._lock:
            return self.game.get_debug_info(debug_path=debug_path, debug_distance=debug_distance)

    def get_state(self) -> dict:
        """Current snapshot merged with the scoreboard, for the frontend."""
        with self._lock:
            snapshot = self.game.snapshot()
        return {**snapshot.to_dict(), **self.scoreboard.to_dict()}
