"""Structured configuration for a game."""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

from .errors import ConfigurationError
from .grid import GridModel

# camelCase keys sent by the browser client
ALIASES = {
    "boardSize": "board_size",
    "blockSize": "block_size",
    "showGrid": "show_grid",
    "aStar": "autoplay",
}


@dataclass
class GameConfig:
    board_size: float = 400      # px, the board is square
    block_size: float = 20       # px per cell
    fps: float = 10              # ticks per second
    autoplay: bool = False
    seed: Optional[int] = None
    show_grid: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.fps, bool) or not isinstance(self.fps, (int, float)) or self.fps <= 0:
            raise ConfigurationError(f"fps must be a positive number, got {self.fps!r}")
        # Fail at construction rather than when the game is created
        GridModel.from_pixels(self.board_size, self.block_size)

    @property
    def grid_size(self) -> int:
        return GridModel.from_pixels(self.board_size, self.block_size).grid_size

    @property
    def tick_interval(self) -> float:
        """Seconds between ticks."""
        return 1.0 / self.fps

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameConfig":
        """Build a config from defaults overlaid with `data`; unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in (data or {}).items():
            key = ALIASES.get(key, key)
            if key in known:
                values[key] = value
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "board_size": self.board_size,
            "block_size": self.block_size,
            "fps": self.fps,
            "autoplay": self.autoplay,
            "seed": self.seed,
            "show_grid": self.show_grid,
            "grid_size": self.grid_size,
        }
