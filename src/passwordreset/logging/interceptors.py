"""
Redirect standard library logging into the structlog pipeline.
"""

import logging

from .core import get_logger


class RedirectStdLibHandler(logging.Handler):
    """Forward stdlib log records to structlog so they reach the same sinks."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            # Our own logger factory writes nowhere, but never loop back
            if "structlog" in record.name:
                return
            logger = get_logger(self._simplify_logger_name(record.name))
            logger.log(getattr(logging, record.levelname, logging.INFO), self.format(record))
        except Exception:
            self.handleError(record)

    @staticmethod
    def _simplify_logger_name(name: str) -> str:
        """Keep short names as they are and the last two parts of long ones."""
        if not name:
            return "stdlib"
        parts = name.split(".")
        if len(parts) <= 2:
            return name
        return ".".join(parts[-2:])
