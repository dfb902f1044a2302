"""
Creation and verification of one-time password reset tokens.

A token carries its own expiration time and the login it was issued for, and
is signed with a key derived from the application secret and a value tied to
the user's current password (a password hash, its salt, or the time it was
set). Once the user changes their password the derived key changes too, so
every token issued before the change stops verifying. Nothing is stored
server-side.

Usage:
    secret = settings.reset.secret_key

    def lookup(login: str) -> bytes:
        # current password hash for login; raise if there is no such user
        ...

    token = new_token(login, timedelta(hours=12), lookup(login), secret)

    # later, when the user follows the link
    login = verify_token(token, lookup, secret)
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Awaitable, Callable, Optional, Union

from passwordreset.logging import get_logger

from .codec import decode, encode, encode_payload
from .constants import MAX_EXPIRATION
from .crypto import SecretLike, derive_user_secret_key, sign, verify
from .exceptions import ExpiredTokenError, MalformedTokenError, WrongSignatureError

logger = get_logger("passwordreset.tokens")

Duration = Union[timedelta, int, float]
Timestamp = Union[datetime, int, float]
PasswordLookup = Callable[[str], SecretLike]
AsyncPasswordLookup = Callable[[str], Awaitable[SecretLike]]


@dataclass(frozen=True)
class TokenParts:
    """Decoded, unverified contents of a token."""

    expiration: int
    login: str
    signature: bytes

    @property
    def payload(self) -> bytes:
        return encode_payload(self.expiration, self.login.encode("utf-8"))

    @property
    def expires_at(self) -> datetime:
        return datetime.fromtimestamp(self.expiration, tz=timezone.utc)

    def is_expired(self, now: Optional[float] = None) -> bool:
        return _is_expired(self.expiration, _now(now))


def _now(now: Optional[float]) -> float:
    return time.time() if now is None else now


def _is_expired(expiration: int, now: float) -> bool:
    # Still valid during the expiration second itself
    return expiration < now


def _seconds(duration: Duration) -> float:
    if isinstance(duration, timedelta):
        return duration.total_seconds()
    return float(duration)


def _clamp_expiration(timestamp: float) -> int:
    return min(max(math.floor(timestamp), 0), MAX_EXPIRATION)


def _issue(login: str, expiration: int, password_value: SecretLike, app_secret: SecretLike, padding: bool) -> str:
    if not login:
        raise ValueError("login must not be empty")
    login_bytes = login.encode("utf-8")
    user_key = derive_user_secret_key(password_value, app_secret)
    signature = sign(encode_payload(expiration, login_bytes), user_key)
    return encode(expiration, login_bytes, signature, padding=padding)


def new_token(
    login: str,
    valid_for: Duration,
    password_value: SecretLike,
    app_secret: SecretLike,
    *,
    padding: bool = True,
    now: Optional[float] = None,
) -> str:
    """Issue a token for ``login`` that expires ``valid_for`` from now.

    ``valid_for`` is a timedelta or a number of seconds. Negative durations
    are accepted and produce a token that is already expired.
    """
    expiration = _clamp_expiration(_now(now) + _seconds(valid_for))
    return _issue(login, expiration, password_value, app_secret, padding)


def new_token_no_padding(
    login: str,
    valid_for: Duration,
    password_value: SecretLike,
    app_secret: SecretLike,
    *,
    now: Optional[float] = None,
) -> str:
    """Like :func:`new_token`, without trailing ``=`` characters."""
    return new_token(login, valid_for, password_value, app_secret, padding=False, now=now)


def new_token_expiring_at(
    login: str,
    expires: Timestamp,
    password_value: SecretLike,
    app_secret: SecretLike,
    *,
    padding: bool = True,
) -> str:
    """Issue a token with an absolute expiration time.

    Naive datetimes are interpreted as local time, as ``datetime.timestamp``
    does.
    """
    timestamp = expires.timestamp() if isinstance(expires, datetime) else float(expires)
    return _issue(login, _clamp_expiration(timestamp), password_value, app_secret, padding)


def _to_parts(expiration: int, login_bytes: bytes, signature: bytes) -> TokenParts:
    try:
        login = login_bytes.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedTokenError(details={"reason": "login is not valid UTF-8"}) from exc
    return TokenParts(expiration=expiration, login=login, signature=signature)


def parse_token(token: str) -> TokenParts:
    """Decode a token without checking its expiration or signature.

    Never trust the returned login; use :func:`verify_token` for that.
    """
    return _to_parts(*decode(token))


def _unexpired_parts(token: str, now: Optional[float]) -> TokenParts:
    expiration, login_bytes, signature = decode(token)
    # Checked before the lookup so expired links cost no user store query
    if _is_expired(expiration, _now(now)):
        logger.debug("reset token expired", expiration=expiration)
        raise ExpiredTokenError(expiration=expiration)
    return _to_parts(expiration, login_bytes, signature)


def _check_signature(parts: TokenParts, password_value: SecretLike, app_secret: SecretLike) -> str:
    user_key = derive_user_secret_key(password_value, app_secret)
    if not verify(parts.payload, parts.signature, user_key):
        logger.debug("reset token signature mismatch", login=parts.login)
        raise WrongSignatureError()
    return parts.login


def verify_token(
    token: str,
    lookup_password_value: PasswordLookup,
    app_secret: SecretLike,
    *,
    now: Optional[float] = None,
) -> str:
    """Verify ``token`` and return the login it was issued for.

    ``lookup_password_value`` receives the login and must return that user's
    current password value, or raise if the user does not exist. It is only
    called for tokens that decode and have not expired, and whatever it
    raises propagates unchanged.

    Raises:
        MalformedTokenError: the token cannot be decoded.
        ExpiredTokenError: the token's expiration time has passed.
        WrongSignatureError: the token was tampered with, signed with another
            secret, or issued before the password changed.
    """
    parts = _unexpired_parts(token, now)
    return _check_signature(parts, lookup_password_value(parts.login), app_secret)


async def averify_token(
    token: str,
    lookup_password_value: AsyncPasswordLookup,
    app_secret: SecretLike,
    *,
    now: Optional[float] = None,
) -> str:
    """Async variant of :func:`verify_token` for awaitable lookups."""
    parts = _unexpired_parts(token, now)
    return _check_signature(parts, await lookup_password_value(parts.login), app_secret)
