"""Maze factory: pick a generator, then attach the behavior the maze type calls for.

At most one behavior is ever attached to a maze; behaviors write the shared
grid in place. A second ``wrap_maze`` on the same maze raises
``BehaviorConflictError``.
"""
from __future__ import annotations

import random
from typing import Optional, Union

from ..logging_utils import get_logger
from .config import BehaviorConflictError, MazeConfig, MazeType
from .generator import ProceduralMazeGenerator
from .hybrid import HybridMazeGenerator
from .layered import MultiLayeredMaze
from .maze import Maze
from .memory import MemoryMaze
from .shadow import ShadowMaze
from .shifting import TimeChangingMaze

log = get_logger(__name__)

WrappedMaze = Union[Maze, ShadowMaze, MemoryMaze, MultiLayeredMaze, TimeChangingMaze]


class MazeFactory:
    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng
        self.procedural = ProceduralMazeGenerator(rng)
        self.hybrid = HybridMazeGenerator(procedural=self.procedural)

    def create_maze(self, config: MazeConfig) -> Maze:
        if config.template is not None:
            return self.hybrid.generate(config)
        return self.procedural.generate(config)

    def wrap_maze(self, maze: Maze) -> WrappedMaze:
        if maze.behavior is not None:
            raise BehaviorConflictError(f"{maze!r} already has a {maze.behavior.kind.value} behavior attached")
        config = maze.config or MazeConfig(type=maze.type, width=maze.width, height=maze.height, layers=maze.layers)
        rng = self.rng or random.Random(config.seed)
        if maze.type == MazeType.MEMORY:
            wrapped = MemoryMaze(maze, fade_delay_ms=config.fade_delay_ms)
        elif maze.type == MazeType.SHADOW:
            wrapped = ShadowMaze(maze, visibility_radius=config.visibility_radius)
        elif maze.type == MazeType.MULTI_LAYERED:
            wrapped = MultiLayeredMaze(maze, rng=rng)
        elif maze.type == MazeType.TIME_CHANGING:
            wrapped = TimeChangingMaze(maze, change_interval_ms=config.change_interval_ms, rng=rng)
        else:
            return maze
        maze.behavior = wrapped
        log.debug(event="maze_wrapped", behavior=wrapped.kind.value, width=maze.width, height=maze.height)
        return wrapped

    def build(self, config: MazeConfig) -> WrappedMaze:
        return self.wrap_maze(self.create_maze(config))


def unwrap(maze_or_behavior: WrappedMaze) -> Maze:
    if isinstance(maze_or_behavior, Maze):
        return maze_or_behavior
    return maze_or_behavior.maze


__all__ = ["MazeFactory", "WrappedMaze", "unwrap"]
