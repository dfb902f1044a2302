"""
Password reset token exceptions.

Every verification failure is terminal: the caller must not allow the reset.
Errors raised by the password lookup are never wrapped and do not appear here.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class TokenError(ValueError):
    """Base class for token verification failures.

    Subclasses ``ValueError`` so callers that only care about "bad input"
    can catch it without importing this module.
    """

    default_message = "invalid token"
    code = "TOKEN_ERROR"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        self.details = details or {}


class MalformedTokenError(TokenError):
    """The token could not be decoded, or is too short or too long."""

    default_message = "malformed token"
    code = "MALFORMED_TOKEN"


class ExpiredTokenError(TokenError):
    """The token's expiration time has passed."""

    default_message = "token expired"
    code = "EXPIRED_TOKEN"

    def __init__(self, *, expiration: int) -> None:
        super().__init__(details={"expiration": expiration})
        self.expiration = expiration


class WrongSignatureError(TokenError):
    """The signature does not match.

    Covers tampering, a different application secret, and tokens issued
    before the user's password changed.
    """

    default_message = "wrong token signature"
    code = "WRONG_SIGNATURE"
