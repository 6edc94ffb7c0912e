"""JSON-ready views of mazes and template parsing for the HTTP layer.

Nothing here persists anything; these are wire shapes only.
"""
from __future__ import annotations

from typing import Any, Dict, List

from .cells import Cell, CellType, Grid, Position, WallSet
from .config import MazeConfigError, MazeTemplate


def maze_to_dict(maze, include_cells: bool = True) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "type": maze.type.value,
        "width": maze.width,
        "height": maze.height,
        "layers": maze.layers,
        "entrance": [maze.entrance.x, maze.entrance.y],
        "exit": [maze.exit.x, maze.exit.y],
        "metrics": dict(maze.metrics),
    }
    if include_cells:
        data["grid"] = [[cell.to_dict() for cell in row] for row in maze.grid]
    return data


def visible_positions(maze) -> List[List[int]]:
    return [[c.position.x, c.position.y] for c in maze.cells() if c.is_visible]


def cell_from_dict(raw: Dict[str, Any], x: int, y: int) -> Cell:
    try:
        cell_type = CellType(str(raw.get("type", "EMPTY")).upper())
    except ValueError:
        raise MazeConfigError(f"unknown cell type at ({x},{y}): {raw.get('type')!r}") from None
    walls_raw = raw.get("walls") or {}
    walls = WallSet(
        bool(walls_raw.get("north", True)),
        bool(walls_raw.get("south", True)),
        bool(walls_raw.get("east", True)),
        bool(walls_raw.get("west", True)),
    )
    return Cell(
        Position(x, y),
        cell_type,
        walls,
        is_visible=bool(raw.get("is_visible", True)),
        is_revealed=bool(raw.get("is_revealed", False)),
    )


def grid_from_rows(rows: List[List[Dict[str, Any]]]) -> Grid:
    if not isinstance(rows, list) or not rows or not all(isinstance(r, list) for r in rows):
        raise MazeConfigError("template grid must be a non-empty list of rows")
    return [[cell_from_dict(raw or {}, x, y) for x, raw in enumerate(row)] for y, row in enumerate(rows)]


def template_from_dict(data: Dict[str, Any]) -> MazeTemplate:
    if not isinstance(data, dict):
        raise MazeConfigError("template must be an object")
    return MazeTemplate(
        id=str(data.get("id") or "inline"),
        grid=grid_from_rows(data.get("grid")),
        puzzle_elements=list(data.get("puzzle_elements") or []),
    )


__all__ = ["maze_to_dict", "visible_positions", "cell_from_dict", "grid_from_rows", "template_from_dict"]
