"""
project: Labyrinth
module: maze_api.py
License: MIT

Maze creation, tick and query routes.

Generated mazes (with their behavior, if any) live in a small in-process
registry keyed by a random id. Each request that touches a maze holds the
registry lock for its whole duration, so a maze is never ticked by two
requests at once.
"""

import hashlib
import math
import threading
import uuid

from flask import Blueprint, current_app, jsonify, request

from labyrinth.logging_utils import get_logger
from labyrinth.maze import MazeConfig, MazeConfigError, MazeFactory, MultiLayeredMaze
from labyrinth.maze.connectivity import find_path, validate_structure
from labyrinth.maze.factory import unwrap
from labyrinth.maze.metrics import calculate_actual_complexity, calculate_maze_complexity
from labyrinth.maze.serialization import maze_to_dict, template_from_dict, visible_positions

bp_maze = Blueprint("maze", __name__)
log = get_logger(__name__)

SEED_MAX_INT = 9223372036854775807

_mazes = {}
_mazes_lock = threading.Lock()


def _coerce_seed(payload_seed):
    """Convert provided seed (int or str) into bounded 64-bit signed int.

    None (or a blank string) is passed through; MazeConfig picks a random seed.
    """
    if payload_seed is None:
        return None
    if isinstance(payload_seed, bool):
        raise MazeConfigError("seed must be an integer or string")
    if isinstance(payload_seed, int):
        return payload_seed % SEED_MAX_INT
    if isinstance(payload_seed, str):
        s = payload_seed.strip()
        if not s:
            return None
        if s.isdigit():
            return int(s) % SEED_MAX_INT
        h = hashlib.sha256(s.encode("utf-8")).digest()
        return int.from_bytes(h[:8], "big") % SEED_MAX_INT
    raise MazeConfigError("seed must be an integer or string")


def _int_field(data, key, default):
    value = data.get(key, default)
    if isinstance(value, bool):
        raise MazeConfigError(f"{key} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise MazeConfigError(f"{key} must be an integer") from None


def _json_body():
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MazeConfigError("request body must be a JSON object")
    return data


def _finite_field(data, key, default):
    try:
        value = float(data.get(key, default))
    except (TypeError, ValueError):
        raise MazeConfigError(f"{key} must be a number") from None
    if not math.isfinite(value):
        raise MazeConfigError(f"{key} must be finite")
    return value


def _config_from_payload(data) -> MazeConfig:
    template = template_from_dict(data["template"]) if data.get("template") else None
    width = _int_field(data, "width", template.width if template else 10)
    height = _int_field(data, "height", template.height if template else 10)
    limit = current_app.config["LABYRINTH_MAX_DIMENSION"]
    if width > limit or height > limit:
        raise MazeConfigError(f"maze dimensions are capped at {limit}")
    layers = _int_field(data, "layers", 1)
    max_layers = current_app.config["LABYRINTH_MAX_LAYERS"]
    if layers > max_layers:
        raise MazeConfigError(f"layers are capped at {max_layers}")
    difficulty = _finite_field(data, "difficulty", 1.0)
    return MazeConfig(
        type=data.get("type", "LINEAR"),
        difficulty=difficulty,
        width=width,
        height=height,
        layers=layers,
        obstacle_count=_int_field(data, "obstacle_count", 0),
        collectible_count=_int_field(data, "collectible_count", 0),
        template=template,
        seed=_coerce_seed(data.get("seed")),
    )


def _store(wrapped) -> str:
    maze_id = uuid.uuid4().hex
    cap = current_app.config["LABYRINTH_MAZE_CACHE_MAX"]
    with _mazes_lock:
        _mazes[maze_id] = wrapped
        while len(_mazes) > cap:
            _mazes.pop(next(iter(_mazes)))
    return maze_id


def _behavior_state(wrapped):
    state = getattr(wrapped, "state", None)
    return state() if callable(state) else None


@bp_maze.errorhandler(MazeConfigError)
def _config_error(exc):
    return jsonify({"error": str(exc)}), 400


@bp_maze.route("/api/maze", methods=["POST"])
def create_maze():
    """Generate a maze and attach the behavior its type calls for.

    Body JSON (all optional): type, width, height, layers, difficulty, seed,
    obstacle_count, collectible_count, template {id, grid}.
    Response: { "id", "seed", "behavior", "maze": {...} }
    """
    config = _config_from_payload(_json_body())
    wrapped = MazeFactory().build(config)
    maze_id = _store(wrapped)
    log.bind(maze_id=maze_id).info(
        event="maze_created", type=config.type.value, width=config.width, height=config.height, seed=config.seed
    )
    return jsonify(
        {
            "id": maze_id,
            "seed": config.seed,
            "behavior": _behavior_state(wrapped),
            "maze": maze_to_dict(unwrap(wrapped)),
        }
    )


@bp_maze.route("/api/maze/<maze_id>", methods=["GET"])
def get_maze(maze_id):
    with _mazes_lock:
        wrapped = _mazes.get(maze_id)
        if wrapped is None:
            return jsonify({"error": "unknown maze"}), 404
        maze = unwrap(wrapped)
        return jsonify(
            {
                "id": maze_id,
                "behavior": _behavior_state(wrapped),
                "solvable": maze.is_solvable(),
                "maze": maze_to_dict(maze),
            }
        )


@bp_maze.route("/api/maze/<maze_id>/tick", methods=["POST"])
def tick_maze(maze_id):
    """Advance one external tick. Body: { "pos": [x, y], "elapsed_ms": n }."""
    data = _json_body()
    elapsed = _finite_field(data, "elapsed_ms", 0)
    with _mazes_lock:
        wrapped = _mazes.get(maze_id)
        if wrapped is None:
            return jsonify({"error": "unknown maze"}), 404
        wrapped.tick(data.get("pos"), elapsed)
        return jsonify({"behavior": _behavior_state(wrapped), "visible": visible_positions(unwrap(wrapped))})


@bp_maze.route("/api/maze/<maze_id>/transition", methods=["POST"])
def use_transition(maze_id):
    data = _json_body()
    with _mazes_lock:
        wrapped = _mazes.get(maze_id)
        if wrapped is None:
            return jsonify({"error": "unknown maze"}), 404
        if not isinstance(wrapped, MultiLayeredMaze):
            return jsonify({"error": "maze is not multi-layered"}), 400
        ok = wrapped.use_transition(data.get("pos"))
        return jsonify({"ok": ok, "current_layer": wrapped.get_current_layer()})


@bp_maze.route("/api/maze/<maze_id>/path", methods=["GET"])
def maze_path(maze_id):
    with _mazes_lock:
        wrapped = _mazes.get(maze_id)
        if wrapped is None:
            return jsonify({"error": "unknown maze"}), 404
        maze = unwrap(wrapped)
        path = find_path(maze.entrance, maze.exit, maze)
        return jsonify({"solvable": path is not None, "path": [list(p) for p in path] if path else None})


@bp_maze.route("/api/maze/<maze_id>/report", methods=["GET"])
def maze_report(maze_id):
    with _mazes_lock:
        wrapped = _mazes.get(maze_id)
        if wrapped is None:
            return jsonify({"error": "unknown maze"}), 404
        maze = unwrap(wrapped)
        report = validate_structure(maze)
        return jsonify(
            {
                "is_valid": report.is_valid,
                "errors": report.errors,
                "warnings": report.warnings,
                "metrics": dict(maze.metrics),
                "open_passages": maze.open_passages(),
                "complexity": {
                    "configured": calculate_maze_complexity(maze.config) if maze.config else None,
                    "actual": calculate_actual_complexity(maze),
                },
            }
        )
