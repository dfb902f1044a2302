"""
Log sink abstractions and concrete implementations.
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Literal

import orjson
import structlog
from structlog.typing import EventDict

LogFormat = Literal["console", "json"]


def orjson_dumps(v: Any, *, default: Any = None) -> str:
    """Fast JSON serialization using orjson."""
    return orjson.dumps(v, default=default or str, option=orjson.OPT_UTC_Z | orjson.OPT_NAIVE_UTC).decode()


class BaseSink(ABC):
    """Abstract base class for log sinks."""

    @abstractmethod
    def emit(self, event_dict: EventDict) -> None:
        """Emit a log event to the sink."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Close the sink and release resources."""
        ...


class StdioSink(BaseSink):
    """Standard I/O sink with configurable format.

    Args:
        fmt: Output format - "console" (colored human-readable) or "json"
        stream: Output stream (default: stderr)
    """

    def __init__(self, fmt: LogFormat = "console", stream: Any = None):
        self._fmt = fmt
        self._stream = stream or sys.stderr
        use_color = bool(getattr(self._stream, "isatty", lambda: False)())
        self._console = structlog.dev.ConsoleRenderer(colors=use_color)

    def emit(self, event_dict: EventDict) -> None:
        if self._fmt == "json":
            output = orjson_dumps(event_dict)
        else:
            # ConsoleRenderer pops keys and expects "event"
            event = dict(event_dict)
            event["event"] = event.pop("message", "")
            output = self._console(None, "", event)

        self._stream.write(output + "\n")
        self._stream.flush()

    def close(self) -> None:
        pass


class FileSink(BaseSink):
    """Local file sink with size-based rotation (JSON lines)."""

    def __init__(self, path: str | Path, max_bytes: int = 10 * 1024 * 1024, backup_count: int = 5):
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._max_bytes = max_bytes
        self._backup_count = backup_count
        self._file = open(self._path, "a", encoding="utf-8")

    def emit(self, event_dict: EventDict) -> None:
        self._file.write(orjson_dumps(event_dict) + "\n")
        self._file.flush()
        self._maybe_rotate()

    def _backup_path(self, index: int) -> Path:
        return self._path.with_suffix(f".{index}{self._path.suffix}")

    def _maybe_rotate(self) -> None:
        if self._path.stat().st_size <= self._max_bytes:
            return
        self._file.close()
        for i in range(self._backup_count - 1, 0, -1):
            src = self._backup_path(i)
            if src.exists():
                src.replace(self._backup_path(i + 1))
        self._path.replace(self._backup_path(1))
        self._file = open(self._path, "a", encoding="utf-8")

    def close(self) -> None:
        self._file.close()
