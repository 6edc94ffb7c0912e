"""Labyrinth CLI entry point.

Provides subcommands for serving the maze HTTP API and for generating a single
maze from the command line. Accepts configuration via flags and environment
variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import logging
import os
import sys
from textwrap import dedent

from dotenv import load_dotenv

from labyrinth import __version__


def _configure_logging(level: int = logging.INFO) -> None:
    """Send stdlib logging (Flask, werkzeug) to the console in a single format."""
    root = logging.getLogger()
    root.setLevel(level)
    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
    # Avoid duplicate handlers if reconfigured
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(console)


def parse_args(argv: list[str]) -> argparse.Namespace:
    epilog = dedent(
        """
        Environment variables:
          HOST                          Bind address for the web server (default: 127.0.0.1)
          PORT                          Port for the web server (default: 5000)
          LABYRINTH_LOG_LEVEL           debug | info | warn | error (default: info)
          LABYRINTH_LOG_JSON            Emit JSON log records when truthy
          LABYRINTH_VISIBILITY_RADIUS   Shadow maze radius override
          LABYRINTH_FADE_DELAY_MS       Memory maze fade delay override
          LABYRINTH_CHANGE_INTERVAL_MS  Time-changing maze interval override

        Examples:
          python run.py server --port 8080
          python run.py generate --type SHADOW --width 20 --height 15 --seed 42
        """
    )
    parser = argparse.ArgumentParser(
        prog="Labyrinth",
        description="Maze topology engine",
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("--env-file", dest="env_file", help="Path to a .env file to load before processing flags")
    parser.add_argument("--version", action="version", version=f"Labyrinth {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    server_parser = subparsers.add_parser("server", help="Run the maze HTTP API")
    server_parser.add_argument("--host", default=None, help="Host interface to bind (default: env HOST or 127.0.0.1)")
    server_parser.add_argument("--port", type=int, default=None, help="Port to listen on (default: env PORT or 5000)")
    server_parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")

    gen_parser = subparsers.add_parser("generate", help="Generate one maze and print a JSON summary")
    gen_parser.add_argument("--type", default="LINEAR", help="LINEAR | SHADOW | MEMORY | MULTI_LAYERED | TIME_CHANGING")
    gen_parser.add_argument("--width", type=int, default=10)
    gen_parser.add_argument("--height", type=int, default=10)
    gen_parser.add_argument("--layers", type=int, default=1)
    gen_parser.add_argument("--seed", type=int, default=None)
    gen_parser.add_argument("--cells", action="store_true", help="Include the full cell grid in the output")

    if len(argv) == 0:
        argv = ["server"]
    return parser.parse_args(argv)


def _generate(args) -> int:
    from labyrinth.maze import MazeConfig, MazeConfigError, MazeFactory
    from labyrinth.maze.factory import unwrap
    from labyrinth.maze.serialization import maze_to_dict

    try:
        config = MazeConfig(type=args.type, width=args.width, height=args.height, layers=args.layers, seed=args.seed)
        wrapped = MazeFactory().build(config)
    except MazeConfigError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 2
    maze = unwrap(wrapped)
    summary = maze_to_dict(maze, include_cells=args.cells)
    summary["seed"] = config.seed
    summary["solvable"] = maze.is_solvable()
    print(json.dumps(summary, indent=2))
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()
    if mode == "generate":
        return _generate(args)

    host = getattr(args, "host", None) or os.getenv("HOST", "127.0.0.1")
    port = int(getattr(args, "port", None) or os.getenv("PORT", "5000"))
    _configure_logging()

    from labyrinth import create_app
    from labyrinth.logging_utils import log

    app = create_app()
    log.info(event="startup", host=host, port=port)
    app.run(host=host, port=port, debug=getattr(args, "debug", False))
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main(sys.argv[1:]))
