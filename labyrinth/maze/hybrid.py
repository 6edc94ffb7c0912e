"""Template-or-procedural generation.

Templates are reused across many generations, so every cell is cloned with its
own wall set; nothing produced here aliases the template. A template-derived
maze carries no spanning-tree guarantee, hence ``validate`` always runs the
connectivity check.
"""
from __future__ import annotations

import random
import time
from typing import Optional

from ..logging_utils import get_logger
from .cells import Position
from .config import MazeConfig, MazeConfigError
from .connectivity import is_solvable, validate_structure
from .generator import ProceduralMazeGenerator
from .maze import Maze
from .metrics import count_dead_ends, init_metrics

log = get_logger(__name__)


class HybridMazeGenerator:
    def __init__(self, rng: Optional[random.Random] = None, procedural: Optional[ProceduralMazeGenerator] = None):
        self.procedural = procedural or ProceduralMazeGenerator(rng)

    def generate(self, config: MazeConfig) -> Maze:
        if config.template is not None:
            return self.generate_from_template(config)
        return self.procedural.generate(config)

    def validate(self, maze: Maze) -> bool:
        return is_solvable(maze)

    def generate_from_template(self, config: MazeConfig) -> Maze:
        template = config.template
        if template is None:
            raise MazeConfigError("Template is required for template-based generation")
        if not template.grid or not template.grid[0]:
            raise MazeConfigError(f"Template {template.id!r} has an empty grid")
        width, height = template.width, template.height
        if any(len(row) != width for row in template.grid):
            raise MazeConfigError(f"Template {template.id!r} is not rectangular")
        if (config.width, config.height) != (width, height):
            raise MazeConfigError(
                f"Template {template.id!r} is {width}x{height}, config asks for {config.width}x{config.height}"
            )
        start = time.perf_counter()
        grid = [[cell.clone() for cell in row] for row in template.grid]
        maze = Maze(
            grid,
            maze_type=config.type,
            layers=config.layers,
            entrance=Position(0, 0),
            exit=Position(width - 1, height - 1),
            config=config,
        )
        report = validate_structure(maze)
        if not report.is_valid:
            raise MazeConfigError(f"Template {template.id!r} is malformed: {'; '.join(report.errors)}")
        metrics = init_metrics()
        metrics['cells'] = width * height
        metrics['passages_carved'] = maze.open_passages()
        metrics['dead_ends'] = count_dead_ends(maze)
        metrics['runtime_ms'] = int((time.perf_counter() - start) * 1000)
        maze.metrics = metrics
        log.debug(event="maze_generated", generator="template", template=template.id, width=width, height=height)
        return maze


__all__ = ["HybridMazeGenerator"]
