from __future__ import annotations

import math
from typing import TYPE_CHECKING, Dict

if TYPE_CHECKING:
    from .config import MazeConfig
    from .maze import Maze


def init_metrics() -> Dict[str, int | float]:
    return {
        'cells': 0,
        'passages_carved': 0,
        'dead_ends': 0,
        'runtime_ms': 0.0,
    }


def count_dead_ends(maze: "Maze") -> int:
    return sum(1 for cell in maze.cells() if maze.is_walkable(cell.position) and len(maze.neighbors(cell.position)) == 1)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_maze_complexity(config: "MazeConfig") -> int:
    """Score a configuration before generation; higher is harder."""
    score = config.width * config.height * 0.1
    score += config.layers * 10
    score += config.obstacle_count * 5
    score += config.collectible_count * 2
    score *= config.difficulty
    return _round_half_up(score)


def calculate_actual_complexity(maze: "Maze", obstacles: int = 0, collectibles: int = 0) -> int:
    """Score a generated maze given what the placement layer actually put on it."""
    score = maze.width * maze.height * 0.1
    score += maze.layers * 10
    score += obstacles * 5
    score += collectibles * 2
    return _round_half_up(score)
