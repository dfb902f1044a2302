"""
Password Reset Token Configuration.
"""

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class PasswordResetSettings(BaseSettings):
    """Reset token issuance and verification settings."""

    model_config = SettingsConfigDict(
        env_prefix="PWRESET_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    secret_key: SecretStr = Field(
        default=SecretStr(""),
        description="Application secret mixed into every user's signing key",
    )
    token_ttl_seconds: int = Field(default=60 * 60 * 12, description="Token lifetime in seconds")
    padding: bool = Field(default=True, description="Issue padded base64 tokens")
    max_login_length: int = Field(
        default=256,
        gt=0,
        description="Longest login in bytes; longer tokens are rejected before decoding",
    )
