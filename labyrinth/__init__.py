"""
project: Labyrinth
module: __init__.py
License: MIT

Flask application factory for the maze engine's HTTP surface.

Configuration is sourced from environment variables (optionally via a local
.env file) with defaults suited to development. The maze engine itself lives
in ``labyrinth.maze`` and has no dependency on the app beyond optional config
overrides read while an app context is active.
"""

import os

from dotenv import load_dotenv
from flask import Flask

__version__ = "0.1.0"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def create_app(test_config=None) -> Flask:
    # Load .env if present so LABYRINTH_* settings can be supplied without exporting them
    load_dotenv()
    app = Flask(__name__)
    app.config.update(
        LABYRINTH_MAZE_CACHE_MAX=_env_int("LABYRINTH_MAZE_CACHE_MAX", 32),
        LABYRINTH_MAX_DIMENSION=_env_int("LABYRINTH_MAX_DIMENSION", 200),
        LABYRINTH_MAX_LAYERS=_env_int("LABYRINTH_MAX_LAYERS", 16),
    )
    if test_config:
        app.config.update(test_config)

    from labyrinth.routes.maze_api import bp_maze

    app.register_blueprint(bp_maze)
    return app
