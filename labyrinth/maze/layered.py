"""Multi-layered maze: stacked floors joined by stair transitions.

Transitions are created once, in forward/backward pairs, at a random EMPTY
cell for every adjacent pair of layers. All layers currently share the wrapped
maze's single grid; callers must not expect per-layer walls or obstacles.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional

from .cells import CellType, Grid, Position, as_position
from .config import MazeType
from .maze import Maze


@dataclass(frozen=True)
class LayerTransition:
    position: Position
    from_layer: int
    to_layer: int
    type: str = "stairs"

    def to_dict(self):
        return {
            "position": [self.position.x, self.position.y],
            "from_layer": self.from_layer,
            "to_layer": self.to_layer,
            "type": self.type,
        }


class MultiLayeredMaze:
    kind = MazeType.MULTI_LAYERED

    def __init__(self, maze: Maze, rng: Optional[random.Random] = None):
        self._maze = maze
        self._rng = rng or random.Random(maze.config.seed if maze.config else None)
        self.current_layer = 0
        self._transitions: List[LayerTransition] = []
        self._generate_transitions()

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._maze, name)

    @property
    def maze(self) -> Maze:
        return self._maze

    def use_transition(self, position) -> bool:
        """Switch layers if a transition leaves the current layer at position."""
        transition = self._find_transition(position, self.current_layer)
        if transition is None:
            return False
        self.current_layer = transition.to_layer
        return True

    def tick(self, player_position=None, elapsed_ms: float = 0) -> None:
        # layer changes are explicit (use_transition); nothing time-driven here
        return None

    def get_current_layer(self) -> int:
        return self.current_layer

    def set_current_layer(self, layer: int) -> None:
        if 0 <= layer < self._maze.layers:
            self.current_layer = layer

    def get_current_layer_cells(self) -> Grid:
        return self._maze.grid

    def get_transitions(self) -> List[LayerTransition]:
        return list(self._transitions)

    def transitions_at(self, position) -> List[LayerTransition]:
        pos = as_position(position)
        return [t for t in self._transitions if t.position == pos]

    def state(self) -> dict:
        return {
            "kind": self.kind.value,
            "current_layer": self.current_layer,
            "layers": self._maze.layers,
            "transitions": [t.to_dict() for t in self._transitions],
        }

    def _find_transition(self, position, layer: int) -> Optional[LayerTransition]:
        pos = as_position(position)
        if pos is None:
            return None
        for t in self._transitions:
            if t.position == pos and t.from_layer == layer:
                return t
        return None

    def _generate_transitions(self) -> None:
        if self._maze.layers < 2:
            return
        empties = [cell.position for cell in self._maze.cells() if cell.type == CellType.EMPTY]
        for layer in range(self._maze.layers - 1):
            position = self._rng.choice(empties) if empties else Position(0, 0)
            self._transitions.append(LayerTransition(position, layer, layer + 1))
            self._transitions.append(LayerTransition(position, layer + 1, layer))
