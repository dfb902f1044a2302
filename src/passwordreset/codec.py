"""
Binary layout and text encoding of reset tokens.

Tokens are URL-safe base64 of ``expiration || login || signature``. Issuers
may emit either the padded or the unpadded variant, so decoding inspects the
text for a padding character and decodes accordingly.
"""

from __future__ import annotations

import base64
import binascii
import math
import re
import struct

from .constants import (
    EXPIRATION_SIZE,
    MAX_EXPIRATION,
    MIN_DECODED_LENGTH,
    MIN_LOGIN_SIZE,
    PADDING_CHAR,
    SIGNATURE_SIZE,
)
from .exceptions import MalformedTokenError

_EXPIRATION = struct.Struct(">I")

_PADDED_RE = re.compile(r"[A-Za-z0-9_-]*={0,2}")
_UNPADDED_RE = re.compile(r"[A-Za-z0-9_-]*")


def is_padded(text: str) -> bool:
    """Return True if ``text`` uses the padded base64 variant."""
    return PADDING_CHAR in text


def encode_payload(expiration: int, login: bytes) -> bytes:
    if not 0 <= expiration <= MAX_EXPIRATION:
        raise ValueError(f"expiration {expiration} does not fit in 32 bits")
    return _EXPIRATION.pack(expiration) + login


def encode(expiration: int, login: bytes, signature: bytes, *, padding: bool = True) -> str:
    if len(signature) != SIGNATURE_SIZE:
        raise ValueError(f"signature must be {SIGNATURE_SIZE} bytes, got {len(signature)}")
    text = base64.urlsafe_b64encode(encode_payload(expiration, login) + signature).decode("ascii")
    if not padding:
        text = text.rstrip(PADDING_CHAR)
    return text


def _b64decode(text: str) -> bytes:
    if is_padded(text):
        if len(text) % 4 or not _PADDED_RE.fullmatch(text):
            raise MalformedTokenError(details={"reason": "invalid padded base64"})
        data = text
    else:
        # A single leftover character can never encode a whole byte
        if len(text) % 4 == 1 or not _UNPADDED_RE.fullmatch(text):
            raise MalformedTokenError(details={"reason": "invalid unpadded base64"})
        data = text + PADDING_CHAR * (-len(text) % 4)
    try:
        return base64.urlsafe_b64decode(data)
    except (binascii.Error, ValueError) as exc:
        raise MalformedTokenError(details={"reason": str(exc)}) from exc


def decode(text: str) -> tuple[int, bytes, bytes]:
    """Split a token into ``(expiration, login, signature)``.

    Raises:
        MalformedTokenError: the text is not URL-safe base64 in either
            variant, or decodes to fewer than the minimum number of bytes.
    """
    if not isinstance(text, str):
        raise MalformedTokenError(details={"reason": "token must be a string"})
    raw = _b64decode(text)
    if len(raw) < MIN_DECODED_LENGTH:
        raise MalformedTokenError(details={"reason": "token too short", "length": len(raw)})
    (expiration,) = _EXPIRATION.unpack_from(raw)
    return expiration, raw[EXPIRATION_SIZE:-SIGNATURE_SIZE], raw[-SIGNATURE_SIZE:]


def max_token_length(max_login_length: int) -> int:
    """Padded encoded length of a token carrying a ``max_login_length``-byte login.

    Screen untrusted input against this before calling :func:`decode`.
    """
    return 4 * math.ceil((MIN_DECODED_LENGTH - MIN_LOGIN_SIZE + max_login_length) / 3)
