"""Time-changing maze: a fixed set of interior cells periodically flips WALL <-> EMPTY.

Candidates are drawn once at construction (each interior cell independently
with ``changeable_fraction`` probability) and never change afterwards. Every
``change_interval_ms`` a batch of ``floor(len(candidates) * transform_fraction)``
picks, with replacement, toggles cell types.

Known limitation: EMPTY -> WALL is gated by a local check only (at least two of
the four orthogonal neighbours are EMPTY). That does not prove the maze stays
connected; a flip can still cut off a distant region. No global re-validation
runs after a batch, so maze evolution stays exactly as described above.
"""
from __future__ import annotations

import random
from typing import List, Optional

from ..logging_utils import get_logger
from .cells import DIRECTIONS, CellType, Position, as_delta
from .config import MazeType
from .maze import Maze

log = get_logger(__name__)

MIN_EMPTY_NEIGHBOURS = 2


class TimeChangingMaze:
    kind = MazeType.TIME_CHANGING

    def __init__(
        self,
        maze: Maze,
        change_interval_ms: float = 5000,
        rng: Optional[random.Random] = None,
        changeable_fraction: float = 0.2,
        transform_fraction: float = 0.3,
    ):
        self._maze = maze
        self._rng = rng or random.Random(maze.config.seed if maze.config else None)
        self.change_interval_ms = change_interval_ms
        self.transform_fraction = transform_fraction
        self._elapsed = 0.0
        self.changes_applied = 0
        self._candidates: List[Position] = [
            Position(x, y)
            for y in range(1, maze.height - 1)
            for x in range(1, maze.width - 1)
            if self._rng.random() < changeable_fraction
        ]

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._maze, name)

    @property
    def maze(self) -> Maze:
        return self._maze

    def update(self, delta_ms: float) -> List[Position]:
        """Advance the clock; returns the positions toggled by this call (usually none)."""
        self._elapsed += as_delta(delta_ms)
        if self._elapsed < self.change_interval_ms:
            return []
        self._elapsed = 0.0
        return self._transform_walls()

    def tick(self, player_position=None, elapsed_ms: float = 0) -> None:
        self.update(elapsed_ms)

    def can_safely_add_wall(self, pos) -> bool:
        return self._count_adjacent_empty(pos) >= MIN_EMPTY_NEIGHBOURS

    def get_time_until_next_change(self) -> float:
        return max(0, self.change_interval_ms - self._elapsed)

    def get_changeable_positions(self) -> List[Position]:
        return list(self._candidates)

    def state(self) -> dict:
        return {
            "kind": self.kind.value,
            "change_interval_ms": self.change_interval_ms,
            "time_until_next_change": self.get_time_until_next_change(),
            "changeable": len(self._candidates),
            "changes_applied": self.changes_applied,
        }

    def _transform_walls(self) -> List[Position]:
        toggled = []
        if not self._candidates:
            return toggled
        picks = int(len(self._candidates) * self.transform_fraction)
        for _ in range(picks):
            pos = self._rng.choice(self._candidates)
            cell = self._maze.grid[pos.y][pos.x]
            if cell.type == CellType.WALL:
                cell.type = CellType.EMPTY
                toggled.append(pos)
            elif cell.type == CellType.EMPTY and self.can_safely_add_wall(pos):
                cell.type = CellType.WALL
                toggled.append(pos)
        self.changes_applied += 1
        log.debug(event="maze_walls_shifted", picks=picks, toggled=len(toggled), batch=self.changes_applied)
        return toggled

    def _count_adjacent_empty(self, pos) -> int:
        count = 0
        for dx, dy, _opp in DIRECTIONS.values():
            cell = self._maze.get_cell((pos[0] + dx, pos[1] + dy))
            if cell is not None and cell.type == CellType.EMPTY:
                count += 1
        return count
