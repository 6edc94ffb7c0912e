"""Reachability utilities: shortest-path BFS, flood fill and structural checks.

Two cells are adjacent for traversal iff they are grid neighbours, the current
cell has no wall on the shared edge and the neighbour is walkable. An
unreachable goal is a normal outcome (``None`` / ``False``), never an error.
"""
from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING, Dict, List, NamedTuple, Optional, Set, Tuple

from .cells import DIRECTIONS, Position

if TYPE_CHECKING:
    from .maze import Maze

# minimum reachable share of walkable cells before validate_structure warns
REACHABLE_WARN_RATIO = 0.8


class StructureReport(NamedTuple):
    is_valid: bool
    errors: List[str]
    warnings: List[str]


def find_path(start, goal, maze: "Maze") -> Optional[List[Position]]:
    """Return the shortest hop-count path from start to goal (both inclusive) or None."""
    start = Position(*start)
    goal = Position(*goal)
    if not maze.in_bounds(start) or not maze.in_bounds(goal):
        return None
    parents: Dict[Position, Optional[Position]] = {start: None}
    q = deque([start])
    while q:
        cur = q.popleft()
        if cur == goal:
            path = []
            node: Optional[Position] = cur
            while node is not None:
                path.append(node)
                node = parents[node]
            path.reverse()
            return path
        for nxt in maze.neighbors(cur):
            if nxt not in parents:
                parents[nxt] = cur
                q.append(nxt)
    return None


def is_solvable(maze: "Maze") -> bool:
    return find_path(maze.entrance, maze.exit, maze) is not None


def reachable_from(start, maze: "Maze") -> Set[Position]:
    start = Position(*start)
    if not maze.in_bounds(start):
        return set()
    visited = {start}
    q = deque([start])
    while q:
        cur = q.popleft()
        for nxt in maze.neighbors(cur):
            if nxt not in visited:
                visited.add(nxt)
                q.append(nxt)
    return visited


def wall_symmetry_violations(maze: "Maze") -> List[Tuple[Position, str]]:
    """Edges open on one side and blocked on the other, reported from the west/north cell."""
    bad = []
    for y in range(maze.height):
        for x in range(maze.width):
            walls = maze.grid[y][x].walls
            for direction in ("east", "south"):
                dx, dy, opposite = DIRECTIONS[direction]
                other = maze.get_cell((x + dx, y + dy))
                if other is None:
                    continue
                if getattr(walls, direction) != getattr(other.walls, opposite):
                    bad.append((Position(x, y), direction))
    return bad


def validate_structure(maze: "Maze") -> StructureReport:
    errors: List[str] = []
    warnings: List[str] = []
    if maze.width <= 0 or maze.height <= 0:
        errors.append("Invalid maze dimensions")
        return StructureReport(False, errors, warnings)
    if len(maze.grid) != maze.height:
        errors.append(f"Grid height mismatch: {len(maze.grid)} vs {maze.height}")
    for y, row in enumerate(maze.grid):
        if len(row) != maze.width:
            errors.append(f"Grid width mismatch at row {y}: {len(row)} vs {maze.width}")
            continue
        for x, cell in enumerate(row):
            if tuple(cell.position) != (x, y):
                errors.append(f"Cell at ({x},{y}) reports position {tuple(cell.position)}")
    if errors:
        return StructureReport(False, errors, warnings)
    if maze.entrance == maze.exit:
        errors.append("Entrance and exit are the same position")
    for pos, direction in wall_symmetry_violations(maze):
        errors.append(f"Asymmetric wall at ({pos.x},{pos.y}) {direction}")
    walkable = sum(1 for cell in maze.cells() if maze.is_walkable(cell.position))
    reachable = len(reachable_from(maze.entrance, maze))
    if walkable and reachable < walkable * REACHABLE_WARN_RATIO:
        warnings.append(f"Only {reachable}/{walkable} cells are reachable")
    return StructureReport(not errors, errors, warnings)


__all__ = [
    "StructureReport",
    "find_path",
    "is_solvable",
    "reachable_from",
    "wall_symmetry_violations",
    "validate_structure",
]
