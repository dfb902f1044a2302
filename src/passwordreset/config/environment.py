"""
Environment Configuration.

The environment is determined by the `PWRESET_ENV` environment variable.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


Environment = Literal["development", "testing", "staging", "production"]


class EnvironmentSettings(BaseSettings):
    """
    Environment detection.

    File Resolution Order (later overrides earlier):
    1. `.env`
    2. `.env.local`
    3. `.env.{environment}`
    4. `.env.{environment}.local`
    """

    model_config = SettingsConfigDict(
        env_prefix="PWRESET_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    env: Environment = Field(
        default="development",
        description="Current environment (development, testing, staging, production)",
    )

    @property
    def is_production(self) -> bool:
        return self.env == "production"

    @property
    def env_files(self) -> tuple[str, ...]:
        return (
            ".env",
            ".env.local",
            f".env.{self.env}",
            f".env.{self.env}.local",
        )
