"""Shadow maze: fog of war limited to a Manhattan radius around the player."""
from __future__ import annotations

from .cells import as_position, manhattan
from .config import MazeType
from .maze import Maze


class ShadowMaze:
    kind = MazeType.SHADOW

    def __init__(self, maze: Maze, visibility_radius: int = 3):
        self._maze = maze
        self.visibility_radius = max(1, int(visibility_radius))
        self._hide_all()

    def __getattr__(self, name):
        # grid / is_walkable / entrance ... read straight through to the wrapped maze
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._maze, name)

    @property
    def maze(self) -> Maze:
        return self._maze

    def update(self, player_position) -> None:
        """Full recompute: everything dark, then light every cell within the radius."""
        pos = as_position(player_position)
        if pos is None:
            return
        self._hide_all()
        px, py = pos
        r = self.visibility_radius
        # only rows/columns that can fall inside the diamond are scanned
        for y in range(max(0, py - r), min(self._maze.height, py + r + 1)):
            for x in range(max(0, px - r), min(self._maze.width, px + r + 1)):
                if manhattan((x, y), (px, py)) <= r:
                    cell = self._maze.grid[y][x]
                    cell.is_visible = True
                    cell.is_revealed = True

    def tick(self, player_position=None, elapsed_ms: float = 0) -> None:
        if player_position is not None:
            self.update(player_position)

    def get_visibility_radius(self) -> int:
        return self.visibility_radius

    def set_visibility_radius(self, radius: int) -> None:
        self.visibility_radius = max(1, int(radius))

    def state(self) -> dict:
        return {"kind": self.kind.value, "visibility_radius": self.visibility_radius}

    def _hide_all(self) -> None:
        for row in self._maze.grid:
            for cell in row:
                cell.is_visible = False
