"""Structured event logging for the shortest-path engine.

The engine reports through a :class:`Logger` rather than the ``logging``
module. It emits three events:

* ``initialize`` (debug): ``source`` and the number of ``vertices``.
* ``early_exit`` (debug): the ``target`` and its final ``distance`` when a
  targeted run stops.
* ``run`` (info): ``source``, ``target`` and the engine counters once a run
  completes.

The CLI wires a :class:`StdLogger` to stderr, or to stdout with ``--log-json``.
"""

from __future__ import annotations

import json
import sys
from typing import Any, Dict, Protocol

from .exceptions import ConfigError


class Logger(Protocol):
    """Protocol for minimal logger implementations."""

    def info(self, event: str, **fields: Any) -> None:
        """Emit an ``INFO``-level event."""
        ...

    def debug(self, event: str, **fields: Any) -> None:
        """Emit a ``DEBUG``-level event."""
        ...


class NoopLogger:
    """Logger that discards all events."""

    def info(self, event: str, **fields: Any) -> None:
        """Ignore an ``INFO`` event."""
        return

    def debug(self, event: str, **fields: Any) -> None:
        """Ignore a ``DEBUG`` event."""
        return


class StdLogger:
    """Minimal logger writing ``level event key=value`` lines or JSON objects."""

    _levels: Dict[str, int] = {"debug": 10, "info": 20, "warning": 30}

    def __init__(
        self,
        level: str = "warning",
        json_fmt: bool = False,
        stream: Any | None = None,
    ) -> None:
        """Initialize the logger.

        Args:
            level: Minimum level that is written (``debug``, ``info`` or
                ``warning``).
            json_fmt: Emit one JSON object per line instead of plain text.
            stream: Output stream, defaults to ``sys.stderr``.

        Raises:
            ConfigError: If ``level`` is not a known level name.
        """
        if level not in self._levels:
            raise ConfigError(f"unknown log level {level!r}")
        self.level = level
        self.json_fmt = json_fmt
        self.stream = stream or sys.stderr

    def _enabled(self, level: str) -> bool:
        return self._levels[level] >= self._levels[self.level]

    def log(self, level: str, event: str, **fields: Any) -> None:
        """Emit a log ``event`` at ``level`` with additional ``fields``."""
        if not self._enabled(level):
            return
        if self.json_fmt:
            obj = {"level": level, "event": event}
            obj.update(fields)
            self.stream.write(json.dumps(obj, default=str) + "\n")
        else:
            kv = " ".join(f"{k}={v}" for k, v in fields.items())
            msg = f"{level} {event} {kv}".rstrip()
            self.stream.write(msg + "\n")

    def info(self, event: str, **fields: Any) -> None:
        """Emit an ``INFO`` event."""
        self.log("info", event, **fields)

    def debug(self, event: str, **fields: Any) -> None:
        """Emit a ``DEBUG`` event."""
        self.log("debug", event, **fields)
