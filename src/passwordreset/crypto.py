"""
Key derivation and token signatures.

    user_key  = HMAC-SHA256(key=app_secret, msg=password_value)
    inner_key = HMAC-SHA256(key=user_key,   msg=payload)
    signature = HMAC-SHA256(key=inner_key,  msg=payload)
"""

from __future__ import annotations

import hmac
from hashlib import sha256
from typing import Union

from pydantic import SecretStr

SecretLike = Union[bytes, str, SecretStr]


def to_bytes(value: SecretLike) -> bytes:
    if isinstance(value, SecretStr):
        value = value.get_secret_value()
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise TypeError(f"expected bytes, str or SecretStr, got {type(value).__name__}")


def derive_user_secret_key(password_value: SecretLike, app_secret: SecretLike) -> bytes:
    """Derive the per-user signing key.

    Never cache the result: the password value changes when the user resets
    their password, and that change is what invalidates old tokens.
    """
    return hmac.new(to_bytes(app_secret), to_bytes(password_value), sha256).digest()


def sign(payload: bytes, user_secret_key: bytes) -> bytes:
    inner_key = hmac.new(user_secret_key, payload, sha256).digest()
    return hmac.new(inner_key, payload, sha256).digest()


def verify(payload: bytes, signature: bytes, user_secret_key: bytes) -> bool:
    """Check ``signature`` against ``payload`` in constant time."""
    return hmac.compare_digest(sign(payload, user_secret_key), signature)
