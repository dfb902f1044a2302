"""
Logging Configuration.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

Level = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

SINK_NAMES = frozenset({"stdio", "file"})


class LoggingSettings(BaseSettings):
    """Where and how much passwordreset logs once logging is configured."""

    model_config = SettingsConfigDict(
        env_prefix="PWRESET_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    level: Level = Field(default="INFO", description="Lowest level written to the sinks")
    sinks: str = Field(default="stdio", description="Comma-separated sink names: stdio, file")
    json_output: bool = Field(default=False, description="Write stdio as JSON lines instead of console text")
    file_path: Path = Field(default=Path("logs/passwordreset.log"), description="JSON lines file for the file sink")

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    @field_validator("sinks")
    @classmethod
    def _known_sinks(cls, value: str) -> str:
        unknown = {name.strip().lower() for name in value.split(",")} - SINK_NAMES
        if unknown:
            raise ValueError(f"unknown log sinks: {', '.join(sorted(unknown))}")
        return value
