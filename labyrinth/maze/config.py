import os
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .cells import Grid


class MazeError(Exception):
    """Base class for maze engine errors."""


class MazeConfigError(MazeError, ValueError):
    """Raised before generation when the requested configuration cannot be honored."""


class BehaviorConflictError(MazeError):
    """Raised when a second dynamic behavior is attached to the same maze."""


class MazeType(str, Enum):
    LINEAR = "LINEAR"
    MULTI_LAYERED = "MULTI_LAYERED"
    TIME_CHANGING = "TIME_CHANGING"
    SHADOW = "SHADOW"
    MEMORY = "MEMORY"


@dataclass
class MazeTemplate:
    """Hand-authored grid reused across many generations; never handed out directly."""

    id: str
    grid: Grid
    puzzle_elements: List[dict] = field(default_factory=list)

    @property
    def width(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    @property
    def height(self) -> int:
        return len(self.grid)


# env var -> MazeConfig attribute
_ENV_OVERRIDES = {
    "LABYRINTH_VISIBILITY_RADIUS": "visibility_radius",
    "LABYRINTH_FADE_DELAY_MS": "fade_delay_ms",
    "LABYRINTH_CHANGE_INTERVAL_MS": "change_interval_ms",
}


@dataclass
class MazeConfig:
    type: MazeType = MazeType.LINEAR
    difficulty: float = 1.0
    width: int = 10
    height: int = 10
    layers: int = 1
    obstacle_count: int = 0
    collectible_count: int = 0
    template: Optional[MazeTemplate] = None
    seed: Optional[int] = None
    # behavior tuning
    visibility_radius: int = 3
    fade_delay_ms: int = 2000
    change_interval_ms: int = 5000

    def __post_init__(self):
        self.type = coerce_maze_type(self.type)
        # 0 is a valid deterministic seed; None => random
        if self.seed is None:
            self.seed = random.randint(0, 2**31 - 1)
        if self.layers < 1:
            raise MazeConfigError(f"layers must be >= 1, got {self.layers}")
        for env_key, attr in _ENV_OVERRIDES.items():
            raw = os.environ.get(env_key)
            if raw is None or raw.strip() == "":
                continue
            try:
                setattr(self, attr, int(raw))
            except ValueError:
                raise MazeConfigError(f"{env_key} must be an integer, got {raw!r}") from None
        # Flask app config overrides (highest precedence) when running under the API
        from flask import current_app, has_app_context

        if has_app_context():
            cfg = current_app.config
            for env_key, attr in _ENV_OVERRIDES.items():
                raw = cfg.get(env_key)
                if raw is None:
                    continue
                try:
                    setattr(self, attr, int(raw))
                except (TypeError, ValueError):
                    raise MazeConfigError(f"app config {env_key} must be an integer, got {raw!r}") from None


def coerce_maze_type(value) -> MazeType:
    if isinstance(value, MazeType):
        return value
    if isinstance(value, str):
        try:
            return MazeType(value.strip().upper())
        except ValueError:
            pass
    raise MazeConfigError(f"unknown maze type: {value!r}")


__all__ = [
    "MazeError",
    "MazeConfigError",
    "BehaviorConflictError",
    "MazeType",
    "MazeTemplate",
    "MazeConfig",
    "coerce_maze_type",
]
