"""Grid model shared by generators, the validator and the behaviors."""

from __future__ import annotations

import math
from enum import Enum
from typing import Dict, List, NamedTuple, Optional, Tuple


class Position(NamedTuple):
    x: int
    y: int


class CellType(str, Enum):
    EMPTY = "EMPTY"
    WALL = "WALL"
    PHASING_WALL = "PHASING_WALL"
    PUZZLE_DOOR = "PUZZLE_DOOR"
    CHECKPOINT = "CHECKPOINT"


# direction -> (dx, dy, opposite); y grows southward (grid[y][x])
DIRECTIONS: Dict[str, Tuple[int, int, str]] = {
    "north": (0, -1, "south"),
    "south": (0, 1, "north"),
    "east": (1, 0, "west"),
    "west": (-1, 0, "east"),
}


class WallSet:
    """Four edge flags; True means the edge is blocked."""

    __slots__ = ("north", "south", "east", "west")

    def __init__(self, north: bool = True, south: bool = True, east: bool = True, west: bool = True):
        self.north = north
        self.south = south
        self.east = east
        self.west = west

    def copy(self) -> "WallSet":
        return WallSet(self.north, self.south, self.east, self.west)

    def is_sealed(self) -> bool:
        return self.north and self.south and self.east and self.west

    def to_dict(self):
        return {"north": self.north, "south": self.south, "east": self.east, "west": self.west}

    def __eq__(self, other):
        if not isinstance(other, WallSet):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"WallSet(n={self.north}, s={self.south}, e={self.east}, w={self.west})"


class Cell:
    """Lightweight container for one maze grid location."""

    __slots__ = ("position", "type", "walls", "is_visible", "is_revealed")

    def __init__(
        self,
        position: Position,
        cell_type: CellType = CellType.EMPTY,
        walls: Optional[WallSet] = None,
        is_visible: bool = True,
        is_revealed: bool = False,
    ):
        self.position = Position(*position)
        self.type = cell_type
        self.walls = walls if walls is not None else WallSet()
        self.is_visible = is_visible
        self.is_revealed = is_revealed

    def clone(self) -> "Cell":
        return Cell(self.position, self.type, self.walls.copy(), self.is_visible, self.is_revealed)

    def to_dict(self):
        return {
            "position": [self.position.x, self.position.y],
            "type": self.type.value,
            "walls": self.walls.to_dict(),
            "is_visible": self.is_visible,
            "is_revealed": self.is_revealed,
        }

    def __repr__(self):
        return f"Cell({self.position.x},{self.position.y},{self.type.value})"


Grid = List[List[Cell]]


def manhattan(a, b) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def as_position(value) -> Optional[Position]:
    """Coerce an (x, y) pair to a Position; None for anything malformed."""
    try:
        x, y = value
        return Position(int(x), int(y))
    except (TypeError, ValueError):
        return None


def as_delta(value) -> float:
    """Elapsed milliseconds for a tick; negative, non-finite or non-numeric values count as 0."""
    try:
        delta = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(delta) or delta < 0:
        return 0.0
    return delta


__all__ = ["Position", "CellType", "WallSet", "Cell", "Grid", "DIRECTIONS", "manhattan", "as_position", "as_delta"]
