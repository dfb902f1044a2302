"""
Logging setup from settings, for applications embedding passwordreset.
"""

from __future__ import annotations

from typing import Optional

from passwordreset.config import LoggingSettings, settings
from passwordreset.logging import configure_logging


def init_logging(logging_settings: Optional[LoggingSettings] = None) -> None:
    cfg = logging_settings or settings.logging
    configure_logging(
        level=cfg.level,
        sinks=cfg.sinks,
        fmt="json" if cfg.json_output else "console",
        file_path=str(cfg.file_path),
    )
