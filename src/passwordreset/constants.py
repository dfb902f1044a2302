"""
Token layout constants.

Single source of truth for the binary layout of a reset token:

    expiration (4 bytes, big-endian) || login (>= 1 byte) || signature (32 bytes)
"""

from __future__ import annotations

import math


# ================================
# Payload layout
# ================================

# Expiration timestamp, seconds since the Unix epoch, unsigned 32-bit
EXPIRATION_SIZE = 4

# Shortest login a token can carry
MIN_LOGIN_SIZE = 1

# HMAC-SHA256 output
SIGNATURE_SIZE = 32

# Smallest decoded token that can be valid
MIN_DECODED_LENGTH = EXPIRATION_SIZE + MIN_LOGIN_SIZE + SIGNATURE_SIZE

MAX_EXPIRATION = 2**32 - 1


# ================================
# Text encoding
# ================================

PADDING_CHAR = "="

# Padded URL-safe base64 length of the smallest token.
# Reject input longer than max_login_length + MIN_TOKEN_LENGTH before decoding.
MIN_TOKEN_LENGTH = 4 * math.ceil(MIN_DECODED_LENGTH / 3)
