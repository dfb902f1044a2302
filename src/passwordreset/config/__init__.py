"""
Password Reset Configuration Module.

Nested settings, one class per concern, each with its own environment
variable prefix.

Multi-Environment Support:
    Set `PWRESET_ENV` to one of: development, testing, staging, production
    The .env files are loaded in this order (later overrides earlier):
    1. .env
    2. .env.local
    3. .env.{environment}
    4. .env.{environment}.local

Usage:
    from passwordreset.config import settings

    settings.reset.secret_key.get_secret_value()
    settings.reset.token_ttl_seconds
    settings.logging.level
"""

from functools import cached_property

from pydantic_settings import BaseSettings, SettingsConfigDict

from .environment import EnvironmentSettings
from .logging import LoggingSettings
from .reset import PasswordResetSettings


class Settings(BaseSettings):
    """Composite settings aggregating the configuration domains."""

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @cached_property
    def environment(self) -> EnvironmentSettings:
        return EnvironmentSettings()

    @cached_property
    def reset(self) -> PasswordResetSettings:
        return PasswordResetSettings(_env_file=self.environment.env_files)

    @cached_property
    def logging(self) -> LoggingSettings:
        return LoggingSettings(_env_file=self.environment.env_files)


# Singleton instance
settings = Settings()

__all__ = [
    "Settings",
    "settings",
    "EnvironmentSettings",
    "LoggingSettings",
    "PasswordResetSettings",
]
