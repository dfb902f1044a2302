"""
Byte codec tests: payload layout, base64 variants and malformed input.
"""

from __future__ import annotations

import base64

import pytest

from passwordreset import MIN_TOKEN_LENGTH, MalformedTokenError
from passwordreset.codec import decode, encode, encode_payload, is_padded, max_token_length
from passwordreset.constants import MAX_EXPIRATION, MIN_DECODED_LENGTH

SIGNATURE = bytes(range(32))


class TestLayout:
    def test_payload_is_big_endian_expiration_then_login(self) -> None:
        assert encode_payload(0x01020304, b"bob") == b"\x01\x02\x03\x04bob"

    def test_encoded_bytes_follow_layout(self) -> None:
        raw = base64.urlsafe_b64decode(encode(7, b"alice", SIGNATURE))
        assert raw[:4] == b"\x00\x00\x00\x07"
        assert raw[4:-32] == b"alice"
        assert raw[-32:] == SIGNATURE

    def test_decode_splits_fields(self) -> None:
        assert decode(encode(123456, b"alice", SIGNATURE)) == (123456, b"alice", SIGNATURE)

    def test_expiration_must_fit_in_32_bits(self) -> None:
        with pytest.raises(ValueError):
            encode_payload(MAX_EXPIRATION + 1, b"alice")
        with pytest.raises(ValueError):
            encode_payload(-1, b"alice")

    def test_signature_must_be_32_bytes(self) -> None:
        with pytest.raises(ValueError):
            encode(1, b"alice", b"short")


class TestVariants:
    def test_unpadded_is_padded_without_trailing_equals(self) -> None:
        # 4 + 5 + 32 = 41 bytes, not a multiple of 3
        padded = encode(1, b"alice", SIGNATURE)
        unpadded = encode(1, b"alice", SIGNATURE, padding=False)
        assert padded.endswith("=")
        assert "=" not in unpadded
        assert padded.rstrip("=") == unpadded

    def test_padding_detection(self) -> None:
        assert is_padded("abcd==")
        assert not is_padded("abcd")

    @pytest.mark.parametrize("padding", [True, False])
    def test_both_variants_decode(self, padding: bool) -> None:
        token = encode(99, b"bob", SIGNATURE, padding=padding)
        assert decode(token) == (99, b"bob", SIGNATURE)

    def test_output_is_url_safe(self) -> None:
        token = encode(MAX_EXPIRATION, b"\xfb\xff\xfe" * 10, b"\xff" * 32)
        assert "+" not in token
        assert "/" not in token


class TestMalformed:
    @pytest.mark.parametrize(
        "token",
        [
            "",
            "bad token",
            "!!!!",
            "A",
            "A===",
            "AAAAA",
            "AA=A",
        ],
    )
    def test_garbage_is_malformed(self, token: str) -> None:
        with pytest.raises(MalformedTokenError):
            decode(token)

    def test_standard_alphabet_is_rejected(self) -> None:
        token = encode(1, b"\xfb\xff\xfe" * 3, SIGNATURE)
        standard = token.replace("-", "+").replace("_", "/")
        assert standard != token
        with pytest.raises(MalformedTokenError):
            decode(standard)

    def test_one_byte_short_is_malformed(self) -> None:
        raw = b"\x00" * (MIN_DECODED_LENGTH - 1)
        with pytest.raises(MalformedTokenError) as exc_info:
            decode(base64.urlsafe_b64encode(raw).decode())
        assert exc_info.value.details["reason"] == "token too short"

    def test_empty_login_is_malformed(self) -> None:
        raw = b"\x00\x00\x00\x01" + SIGNATURE
        with pytest.raises(MalformedTokenError):
            decode(base64.urlsafe_b64encode(raw).decode())

    def test_non_string_is_malformed(self) -> None:
        with pytest.raises(MalformedTokenError):
            decode(b"AAAA")  # type: ignore[arg-type]


class TestLengthScreen:
    def test_min_token_length_is_padded_minimum(self) -> None:
        assert MIN_TOKEN_LENGTH == 52
        assert len(encode(1, b"a", SIGNATURE)) == MIN_TOKEN_LENGTH

    def test_max_token_length_for_one_byte_login(self) -> None:
        assert max_token_length(1) == MIN_TOKEN_LENGTH

    @pytest.mark.parametrize("login_length", [1, 2, 3, 50, 256])
    def test_longest_login_fits(self, login_length: int) -> None:
        token = encode(1, b"x" * login_length, SIGNATURE)
        assert len(token) == max_token_length(login_length)
        assert len(encode(1, b"x" * (login_length + 3), SIGNATURE)) > max_token_length(login_length)
