"""Minimal structured logging helper.

Emits key=value (or JSON) records with a timestamp, level and logger name.
Generation and behavior code log through this so a tick-driven host can grep
or parse maze events without configuring the stdlib logging tree.

Usage:
    from labyrinth.logging_utils import get_logger
    log = get_logger(__name__)
    log.info(event="maze_generated", width=10, height=10)

    # fields repeated on every record
    maze_log = log.bind(maze_id=maze_id)

Level and output mode are read from LABYRINTH_LOG_LEVEL / LABYRINTH_LOG_JSON on
every call. Spaces in values become underscores in key=value mode; None values
are dropped. Reserved keys: level, ts, logger.
"""

from __future__ import annotations

import json
import os
import sys
import time
from typing import Any, Dict

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
_TRUTHY = ("1", "true", "yes", "on")


def _current_level() -> int:
    return LEVELS.get(os.getenv("LABYRINTH_LOG_LEVEL", "info").strip().lower(), LEVELS["info"])


def _json_mode() -> bool:
    return os.getenv("LABYRINTH_LOG_JSON", "0").strip().lower() in _TRUTHY


def _kv(key: str, value: Any) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return f"{key}={value}"
    return f"{key}={str(value).replace(' ', '_')}"


def _format(level: str, fields: Dict[str, Any]) -> str:
    now = int(time.time())
    kept = {k: v for k, v in fields.items() if v is not None}
    if _json_mode():
        rec = dict(kept, level=level, ts=now)
        try:
            return json.dumps(rec, separators=(",", ":"), default=str)
        except (TypeError, ValueError):
            return json.dumps({"level": level, "ts": now, "error": "json_encode_failed"})
    head = [f"level={level}", f"ts={now}"]
    return " ".join(head + [_kv(k, v) for k, v in kept.items()])


class _Logger:
    def __init__(self, name: str | None = None, context: Dict[str, Any] | None = None):
        self.name = name or "labyrinth"
        self.context = dict(context or {})

    def bind(self, **context) -> "_Logger":
        """Child logger that adds ``context`` to every record."""
        return _Logger(self.name, {**self.context, **context})

    def _emit(self, lvl: str, fields: Dict[str, Any]) -> None:
        if LEVELS[lvl] < _current_level():
            return
        record = {**self.context, **fields}
        record.setdefault("logger", self.name)
        stream = sys.stderr if lvl == "error" else sys.stdout
        print(_format(lvl, record), file=stream)

    def debug(self, **fields):
        self._emit("debug", fields)

    def info(self, **fields):
        self._emit("info", fields)

    def warn(self, **fields):
        self._emit("warn", fields)

    def error(self, **fields):
        self._emit("error", fields)


_LOGGER_CACHE: Dict[str, _Logger] = {}


def get_logger(name: str) -> _Logger:
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("labyrinth")
