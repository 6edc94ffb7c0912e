"""Maze container.

A ``Maze`` is produced once by a generator. Afterwards only its own methods or
the single behavior attached by the factory may write to ``grid``; width,
height, entrance and exit are fixed for its lifetime.

Public contract consumed elsewhere:
    grid[y][x] -> Cell, width, height, layers, type, entrance, exit
    get_cell(pos), is_walkable(pos), is_solvable()
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional

from .cells import DIRECTIONS, Cell, CellType, Grid, Position
from .config import MazeConfig, MazeType


class Maze:
    def __init__(
        self,
        grid: Grid,
        *,
        maze_type: MazeType = MazeType.LINEAR,
        layers: int = 1,
        entrance: Optional[Position] = None,
        exit: Optional[Position] = None,
        config: Optional[MazeConfig] = None,
    ):
        self.grid = grid
        self.height = len(grid)
        self.width = len(grid[0]) if grid else 0
        self.type = maze_type
        self.layers = layers
        self.entrance = Position(*(entrance or (0, 0)))
        self.exit = Position(*(exit or (self.width - 1, self.height - 1)))
        self.config = config
        self.metrics: Dict[str, Any] = {}
        # set by MazeFactory.wrap_maze; at most one behavior writes to the grid
        self.behavior = None

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    def in_bounds(self, pos) -> bool:
        return 0 <= pos[0] < self.width and 0 <= pos[1] < self.height

    def get_cell(self, pos) -> Optional[Cell]:
        if not self.in_bounds(pos):
            return None
        return self.grid[pos[1]][pos[0]]

    def is_walkable(self, pos) -> bool:
        cell = self.get_cell(pos)
        return cell is not None and cell.type != CellType.WALL

    def is_solvable(self) -> bool:
        from .connectivity import is_solvable

        return is_solvable(self)

    def cells(self) -> Iterator[Cell]:
        for row in self.grid:
            yield from row

    def neighbors(self, pos) -> List[Position]:
        """Positions reachable in one step: in bounds, edge open on this side, neighbour walkable."""
        cell = self.get_cell(pos)
        if cell is None:
            return []
        out = []
        for direction, (dx, dy, _opp) in DIRECTIONS.items():
            if getattr(cell.walls, direction):
                continue
            nxt = Position(pos[0] + dx, pos[1] + dy)
            if self.is_walkable(nxt):
                out.append(nxt)
        return out

    def open_passages(self) -> int:
        """Count interior edges open on both sides."""
        count = 0
        for y in range(self.height):
            for x in range(self.width):
                walls = self.grid[y][x].walls
                if x + 1 < self.width and not walls.east and not self.grid[y][x + 1].walls.west:
                    count += 1
                if y + 1 < self.height and not walls.south and not self.grid[y + 1][x].walls.north:
                    count += 1
        return count

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def set_wall(self, pos, direction: str, blocked: bool) -> bool:
        """Set one edge on both cells that share it. Returns False for unknown/out-of-range input."""
        if direction not in DIRECTIONS:
            return False
        cell = self.get_cell(pos)
        if cell is None:
            return False
        dx, dy, opposite = DIRECTIONS[direction]
        setattr(cell.walls, direction, blocked)
        other = self.get_cell((pos[0] + dx, pos[1] + dy))
        if other is not None:
            setattr(other.walls, opposite, blocked)
        return True

    def seal(self, pos) -> bool:
        if not self.in_bounds(pos):
            return False
        for direction in DIRECTIONS:
            self.set_wall(pos, direction, True)
        return True

    def tick(self, player_position=None, elapsed_ms: float = 0) -> None:
        """No-op so an unwrapped LINEAR maze shares the behaviors' tick surface."""
        return None

    def __repr__(self):
        return f"Maze({self.type.value}, {self.width}x{self.height}, layers={self.layers})"


__all__ = ["Maze"]
