"""
Password reset tokens bound to application settings.
"""

from __future__ import annotations

from typing import Optional

from passwordreset.config import PasswordResetSettings, settings as app_settings
from passwordreset.logging import get_logger

from .codec import max_token_length
from .crypto import SecretLike, to_bytes
from .exceptions import MalformedTokenError, TokenError
from .tokens import PasswordLookup, new_token, verify_token

logger = get_logger("passwordreset.service")


class PasswordResetService:
    """Issue and verify reset tokens with configured lifetime, encoding and secret.

    ``lookup`` returns the current password value for a login and raises if
    the login does not exist.
    """

    def __init__(
        self,
        lookup: PasswordLookup,
        *,
        settings: Optional[PasswordResetSettings] = None,
        secret: Optional[SecretLike] = None,
    ):
        self._settings = settings or app_settings.reset
        self._secret = secret if secret is not None else self._settings.secret_key
        if not to_bytes(self._secret):
            raise ValueError("PWRESET_SECRET_KEY is required")
        self._lookup = lookup

    @property
    def max_token_length(self) -> int:
        return max_token_length(self._settings.max_login_length)

    def issue(self, login: str, password_value: Optional[SecretLike] = None) -> str:
        if len(login.encode("utf-8")) > self._settings.max_login_length:
            raise ValueError(f"login longer than {self._settings.max_login_length} bytes")
        if password_value is None:
            password_value = self._lookup(login)
        token = new_token(
            login,
            self._settings.token_ttl_seconds,
            password_value,
            self._secret,
            padding=self._settings.padding,
        )
        logger.info("password reset token issued", login=login, ttl_seconds=self._settings.token_ttl_seconds)
        return token

    def verify(self, token: str) -> str:
        """Return the login ``token`` authorizes a reset for.

        Oversized input is rejected before decoding. Errors raised by the
        lookup propagate unchanged.
        """
        try:
            if len(token) > self.max_token_length:
                raise MalformedTokenError(details={"reason": "token too long", "length": len(token)})
            login = verify_token(token, self._lookup, self._secret)
        except TokenError as exc:
            logger.warning("password reset token rejected", code=exc.code, reason=exc.message)
            raise
        logger.info("password reset token verified", login=login)
        return login
