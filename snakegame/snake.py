"""
Snake game state machine.

One call to step() is one tick:
    1. pick the direction (player input, or the pathfinder in autoplay)
    2. compute the next head cell
    3. classify it: wall, self, food or empty, in that order
    4. mutate body / score / food and report what happened

States:
    RUNNING   -> RUNNING on every successful tick
    RUNNING   -> GAME_OVER on a wall or self collision
    RUNNING   -> WON when the snake eats and no free cell is left for food
GAME_OVER and WON are terminal; step() is then a no-op.
"""
from __future__ import annotations

import logging
import random
from typing import Callable, List, Optional, Sequence

from .direction import Direction, DirectionResolver
from .errors import BoardFullError, ConfigurationError
from .food import FoodSpawner
from .grid import Cell, GridModel
from .pathfinding import Pathfinder, manhattan
from .state import Event, GameState, Snapshot

logger = logging.getLogger(__name__)

DEFAULT_BODY = ((1, 0), (0, 0))

Listener = Callable[[Event, Snapshot], None]


class SnakeStateMachine:
    """
    Owns the body, food, score, direction and game state.

    Collaborators are injectable so tests can pin them down:
        - spawner: FoodSpawner (seeded via `seed` or `rng` by default)
        - pathfinder: Pathfinder used in autoplay
        - resolver: DirectionResolver guarding against reversals
    """

    def __init__(self, grid_size: int = 20, body: Optional[Sequence[Cell]] = None,
                 direction: Direction = Direction.RIGHT, food: Optional[Cell] = None,
                 autoplay: bool = False, seed: Optional[int] = None,
                 rng: Optional[random.Random] = None,
                 spawner: Optional[FoodSpawner] = None,
                 pathfinder: Optional[Pathfinder] = None,
                 resolver: Optional[DirectionResolver] = None):
        """
        Args:
            grid_size: Cells per side of the square board
            body: Starting body, head first (default [(1, 0), (0, 0)])
            direction: Starting direction
            food: Starting food cell; placed randomly if omitted
            autoplay: Steer with the pathfinder instead of player input
            seed: Seed for the default random source (ignored if rng or
                  spawner is given)
            rng: Random source for the default FoodSpawner

        Raises:
            ConfigurationError: if the grid, body or food are invalid, or the
                starting direction points back into the body.
        """
        self.grid = GridModel(grid_size)
        self.autoplay = autoplay
        self.spawner = spawner if spawner is not None else FoodSpawner(rng or random.Random(seed))
        self.pathfinder = pathfinder if pathfinder is not None else Pathfinder()
        self.resolver = resolver if resolver is not None else DirectionResolver()
        self._listeners: List[Listener] = []

        self._initial_body = self._validate_body(body if body is not None else DEFAULT_BODY)
        if Direction.between(self._initial_body[0], self._initial_body[1]) is direction:
            raise ConfigurationError(f"Starting direction {direction.name} runs into the body")
        self._initial_direction = direction
        if food is not None:
            food = tuple(food)
        if food is not None and not self.grid.is_free(food, set(self._initial_body)):
            raise ConfigurationError(f"Food {food} must be a free cell on the board")

        self.reset(food=food)

    # ------------ setup ------------
    def _validate_body(self, body: Sequence[Cell]) -> List[Cell]:
        cells = [tuple(cell) for cell in body]
        if len(cells) < 2:
            raise ConfigurationError("Snake body needs at least 2 cells")
        if len(set(cells)) != len(cells):
            raise ConfigurationError("Snake body cells must be distinct")
        for cell in cells:
            if not self.grid.is_inside(cell):
                raise ConfigurationError(f"Body cell {cell} is outside the board")
        for a, b in zip(cells, cells[1:]):
            if manhattan(a, b) != 1:
                raise ConfigurationError(f"Body cells {a} and {b} are not adjacent")
        return cells

    def reset(self, food: Optional[Cell] = None) -> Snapshot:
        """Start a new game with the starting body and direction."""
        self.body: List[Cell] = list(self._initial_body)
        self.direction = self._initial_direction
        self.score = 0
        self.state = GameState.RUNNING
        self._path_hint: Optional[Cell] = None

        if food is not None:
            self.food: Optional[Cell] = food
        else:
            try:
                self.food = self.spawner.spawn(self.grid.grid_size, set(self.body))
            except BoardFullError:
                # Only reachable when the starting body already fills the board
                self.food = None
                self.state = GameState.WON
        return self.snapshot()

    # ------------ listeners ------------
    def add_listener(self, callback: Listener):
        """Register callback(event, snapshot), called once per event per tick."""
        self._listeners.append(callback)

    def remove_listener(self, callback: Listener):
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify(self, snapshot: Snapshot):
        for event in snapshot.events:
            for callback in list(self._listeners):
                callback(event, snapshot)

    # ------------ core API ------------
    @property
    def grid_size(self) -> int:
        return self.grid.grid_size

    @property
    def head(self) -> Cell:
        return self.body[0]

    def set_autoplay(self, enabled: bool):
        """Switch between player input and pathfinder steering (can change mid-game)."""
        self.autoplay = bool(enabled)

    def step(self, requested: Optional[Direction] = None) -> Snapshot:
        """
        Advance the game by one tick.

        Args:
            requested: Latest direction from the player. Ignored in autoplay;
                       None keeps the current direction.

        Returns:
            Snapshot after the tick, with the events it produced.
        """
        if self.state.is_terminal:
            return self.snapshot()

        direction = self._effective_direction(requested)
        dx, dy = direction.vector
        next_head = (self.head[0] + dx, self.head[1] + dy)
        events: List[Event] = []

        if not self.grid.is_inside(next_head):
            self.state = GameState.GAME_OVER
            events.append(Event.WALL_COLLISION)
        elif next_head in self.body:
            # Checked against the body before it moves, so running into the
            # tail that is about to leave still counts as a collision
            self.state = GameState.GAME_OVER
            events.append(Event.SELF_COLLISION)
        elif next_head == self.food:
            self.body.insert(0, next_head)
            self.score += 1
            events.append(Event.EATEN)
            try:
                self.food = self.spawner.spawn(self.grid.grid_size, set(self.body))
            except BoardFullError:
                self.food = None
                self.state = GameState.WON
                events.append(Event.WON)
        else:
            self.body.insert(0, next_head)
            self.body.pop()
            events.append(Event.MOVED)

        self.direction = direction

        if self.state is GameState.GAME_OVER:
            logger.info(f"Game over ({events[-1].value}) at {next_head} with score {self.score}")
        elif self.state is GameState.WON:
            logger.info(f"Board filled, game won with score {self.score}")

        snapshot = self.snapshot(events)
        self._notify(snapshot)
        return snapshot

    def _effective_direction(self, requested: Optional[Direction]) -> Direction:
        self._path_hint = None
        if self.autoplay:
            self._path_hint = self.pathfinder.next_step(self.grid, self.body, self.food)
            if self._path_hint is None:
                logger.debug(f"Autoplay has no path to food, keeping {self.direction.name}")
                requested = None
            else:
                requested = Direction.between(self.head, self._path_hint)
        return self.resolver.resolve(self.direction, requested)

    def snapshot(self, events: Sequence[Event] = ()) -> Snapshot:
        return Snapshot(
            body=tuple(self.body),
            food=self.food,
            score=self.score,
            state=self.state,
            direction=self.direction,
            events=tuple(events),
            path_hint=self._path_hint,
            grid_size=self.grid.grid_size,
        )

    # ------------ debug overlays ------------
    def get_debug_info(self, debug_path: bool = False, debug_distance: bool = False) -> dict:
        """
        Extra data for frontend overlays.

        Args:
            debug_path: Include the full planned path to the food
            debug_distance: Include the Manhattan distance to the food and the
                            two corner cells joining head and food along the axes

        Returns:
            dict with any of path_cells, distance, perpendicular
        """
        result = {}
        if self.food is None:
            return result

        if debug_path:
            path = self.pathfinder.find_path(self.grid, self.body, self.food) or []
            result['path_cells'] = [{'x': x, 'y': y} for x, y in path]

        if debug_distance:
            hx, hy = self.head
            fx, fy = self.food
            result['distance'] = manhattan(self.head, self.food)
            result['perpendicular'] = [{'x': fx, 'y': hy}, {'x': hx, 'y': fy}]

        return result
