"""
Structured logging for passwordreset.

Sinks:
- stdio: Standard output (console/json format)
- file: Local file rotation with JSON

Library: structlog + orjson for JSON serialization.
"""

from .core import configure_library_defaults, configure_logging, get_logger

__all__ = ["configure_library_defaults", "configure_logging", "get_logger"]
