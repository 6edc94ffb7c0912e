"""Procedural generation: randomized depth-first spanning tree (perfect maze).

Every cell starts fully walled and unvisited. From the root (0,0) each cell
shuffles the four directions and, in that order, carves into every neighbour
still unvisited when its turn comes, descending before trying the next
direction. The walk runs on an explicit stack of (cell, pending directions)
frames so deep grids never hit the interpreter's recursion limit; the frame
order reproduces the recursive formulation exactly, RNG calls included.

The result is a spanning tree: width*height - 1 open passages, no cycles,
entrance (0,0) to exit (width-1, height-1) always connected.
"""
from __future__ import annotations

import random
import time
from typing import List, Optional, Tuple

from ..logging_utils import get_logger
from .cells import DIRECTIONS, Cell, CellType, Grid, Position, WallSet
from .config import MazeConfig, MazeConfigError
from .connectivity import is_solvable
from .maze import Maze
from .metrics import count_dead_ends, init_metrics

log = get_logger(__name__)

ROOT = Position(0, 0)


def init_grid(width: int, height: int) -> Grid:
    if width <= 0 or height <= 0:
        raise MazeConfigError(f"Maze dimensions must be positive, got {width}x{height}")
    return [
        [Cell(Position(x, y), CellType.EMPTY, WallSet(), is_visible=True, is_revealed=False) for x in range(width)]
        for y in range(height)
    ]


def carve_spanning_tree(grid: Grid, rng, root: Position = ROOT) -> int:
    """Carve a perfect maze into a fully walled grid in place. Returns passages carved."""
    height = len(grid)
    width = len(grid[0])
    visited = [[False] * width for _ in range(height)]
    carved = 0

    def enter(pos: Position) -> Tuple[Position, List[str]]:
        visited[pos.y][pos.x] = True
        dirs = list(DIRECTIONS)
        rng.shuffle(dirs)
        return pos, dirs

    stack = [enter(root)]
    while stack:
        pos, pending = stack[-1]
        if not pending:
            stack.pop()
            continue
        direction = pending.pop(0)
        dx, dy, opposite = DIRECTIONS[direction]
        nx, ny = pos.x + dx, pos.y + dy
        if 0 <= nx < width and 0 <= ny < height and not visited[ny][nx]:
            setattr(grid[pos.y][pos.x].walls, direction, False)
            setattr(grid[ny][nx].walls, opposite, False)
            carved += 1
            stack.append(enter(Position(nx, ny)))
    return carved


class ProceduralMazeGenerator:
    def __init__(self, rng: Optional[random.Random] = None):
        # Injected RNG wins; otherwise each generate() seeds its own from config.seed
        self.rng = rng

    def generate(self, config: MazeConfig) -> Maze:
        start = time.perf_counter()
        rng = self.rng if self.rng is not None else random.Random(config.seed)
        grid = init_grid(config.width, config.height)
        carved = carve_spanning_tree(grid, rng)
        maze = Maze(
            grid,
            maze_type=config.type,
            layers=config.layers,
            entrance=ROOT,
            exit=Position(config.width - 1, config.height - 1),
            config=config,
        )
        metrics = init_metrics()
        metrics['cells'] = config.width * config.height
        metrics['passages_carved'] = carved
        metrics['dead_ends'] = count_dead_ends(maze)
        metrics['runtime_ms'] = int((time.perf_counter() - start) * 1000)
        maze.metrics = metrics
        log.debug(
            event="maze_generated",
            generator="procedural",
            width=config.width,
            height=config.height,
            seed=config.seed,
            passages=carved,
            runtime_ms=metrics['runtime_ms'],
        )
        return maze

    def validate(self, maze: Maze) -> bool:
        return is_solvable(maze)


__all__ = ["ProceduralMazeGenerator", "init_grid", "carve_spanning_tree", "ROOT"]
