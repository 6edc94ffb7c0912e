"""Public maze package interface."""

from .cells import Cell, CellType, Position, WallSet  # noqa: F401
from .config import (  # noqa: F401
    BehaviorConflictError,
    MazeConfig,
    MazeConfigError,
    MazeError,
    MazeTemplate,
    MazeType,
)
from .connectivity import find_path, is_solvable, validate_structure  # noqa: F401
from .factory import MazeFactory  # noqa: F401
from .generator import ProceduralMazeGenerator  # noqa: F401
from .hybrid import HybridMazeGenerator  # noqa: F401
from .layered import LayerTransition, MultiLayeredMaze  # noqa: F401
from .maze import Maze  # noqa: F401
from .memory import MemoryMaze  # noqa: F401
from .shadow import ShadowMaze  # noqa: F401
from .shifting import TimeChangingMaze  # noqa: F401

__all__ = [
    "Cell",
    "CellType",
    "Position",
    "WallSet",
    "BehaviorConflictError",
    "MazeConfig",
    "MazeConfigError",
    "MazeError",
    "MazeTemplate",
    "MazeType",
    "find_path",
    "is_solvable",
    "validate_structure",
    "MazeFactory",
    "ProceduralMazeGenerator",
    "HybridMazeGenerator",
    "LayerTransition",
    "MultiLayeredMaze",
    "Maze",
    "MemoryMaze",
    "ShadowMaze",
    "TimeChangingMaze",
]
