"""Memory maze: cells stay lit for a while after the player last stood on or next to them.

Only positions that have ever been stamped are tracked, so a tick costs
O(visited) rather than a full grid scan. ``is_revealed`` is never cleared.
"""
from __future__ import annotations

from typing import Dict, List

from .cells import DIRECTIONS, Position, as_delta, as_position
from .config import MazeType
from .maze import Maze


class MemoryMaze:
    kind = MazeType.MEMORY

    def __init__(self, maze: Maze, fade_delay_ms: float = 2000):
        self._maze = maze
        self.fade_delay_ms = fade_delay_ms
        self.current_time = 0.0
        self._last_seen: Dict[Position, float] = {}
        for row in maze.grid:
            for cell in row:
                cell.is_visible = False

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._maze, name)

    @property
    def maze(self) -> Maze:
        return self._maze

    def update(self, player_position, elapsed_ms: float) -> None:
        self.current_time += as_delta(elapsed_ms)
        pos = as_position(player_position)
        if pos is not None and self._maze.in_bounds(pos):
            self._stamp(pos)
            for dx, dy, _opp in DIRECTIONS.values():
                nxt = Position(pos.x + dx, pos.y + dy)
                if self._maze.in_bounds(nxt):
                    self._stamp(nxt)
        self._fade_old_cells()

    def tick(self, player_position=None, elapsed_ms: float = 0) -> None:
        if player_position is None:
            self.current_time += as_delta(elapsed_ms)
            self._fade_old_cells()
            return
        self.update(player_position, elapsed_ms)

    def _stamp(self, pos: Position) -> None:
        self._last_seen[pos] = self.current_time
        cell = self._maze.grid[pos.y][pos.x]
        cell.is_visible = True
        cell.is_revealed = True

    def _fade_old_cells(self) -> None:
        for pos, seen_at in self._last_seen.items():
            if self.current_time - seen_at > self.fade_delay_ms:
                self._maze.grid[pos.y][pos.x].is_visible = False

    def get_fade_delay(self) -> float:
        return self.fade_delay_ms

    def visited_positions(self) -> List[Position]:
        return list(self._last_seen)

    def state(self) -> dict:
        return {
            "kind": self.kind.value,
            "fade_delay_ms": self.fade_delay_ms,
            "current_time": self.current_time,
            "tracked": len(self._last_seen),
        }
