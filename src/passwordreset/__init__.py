"""
Stateless one-time password reset tokens.

Token format (URL-safe base64, padded or not):

    expiration (4 bytes, big-endian) || login || signature (32 bytes)

where ``signature = HMAC-SHA256(expiration || login, k)``,
``k = HMAC-SHA256(expiration || login, user_key)`` and
``user_key = HMAC-SHA256(password_value, secret)``. The password value is
anything derived from the user's password that changes when the password
does, which makes each token single-use.
"""

from .constants import MIN_TOKEN_LENGTH
from .exceptions import ExpiredTokenError, MalformedTokenError, TokenError, WrongSignatureError
from .tokens import (
    TokenParts,
    averify_token,
    new_token,
    new_token_expiring_at,
    new_token_no_padding,
    parse_token,
    verify_token,
)

__all__ = [
    "MIN_TOKEN_LENGTH",
    "TokenError",
    "MalformedTokenError",
    "ExpiredTokenError",
    "WrongSignatureError",
    "TokenParts",
    "new_token",
    "new_token_no_padding",
    "new_token_expiring_at",
    "verify_token",
    "averify_token",
    "parse_token",
]
