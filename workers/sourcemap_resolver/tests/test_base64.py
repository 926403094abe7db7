"""
test_base64 — plain base64 decoding.

Tests verify:
  - Standard vectors decode to the expected bytes (MSB-first bit order).
  - "=" decodes as a zero sextet, so padding may append zero bytes.
  - Characters outside [A-Za-z0-9+/=] raise DecodeError.
"""
import base64
import os

import pytest

from sourcemap_resolver.core.base64_decoder import decode_base64
from sourcemap_resolver.core.errors import DecodeError


class TestDecodeBase64:

    def test_standard_vector(self):
        assert decode_base64("TWFu") == b"Man"

    def test_empty_input(self):
        assert decode_base64("") == b""

    def test_full_byte_range(self):
        data = bytes(range(256)) + b"\x00\x00"  # 258 bytes, no padding
        assert decode_base64(base64.b64encode(data).decode()) == data

    def test_single_pad_yields_zero_byte(self):
        """'=' is a zero sextet: "TWE=" → b"Ma" plus one zero byte."""
        assert decode_base64("TWE=") == b"Ma\x00"

    def test_double_pad_yields_zero_bytes(self):
        assert decode_base64("TQ==") == b"M\x00\x00"

    def test_partial_bits_dropped(self):
        """A lone sextet never fills a byte."""
        assert decode_base64("T") == b""

    @pytest.mark.parametrize("length", [1, 2, 3, 4, 5, 31, 32, 33])
    def test_roundtrip_prefix(self, length):
        """Decoding reproduces the input; padding only appends zeros."""
        data = os.urandom(length)
        decoded = decode_base64(base64.b64encode(data).decode())
        assert decoded[:length] == data
        assert set(decoded[length:]) <= {0}

    def test_invalid_character(self):
        with pytest.raises(DecodeError, match="position 2") as exc:
            decode_base64("TW#u")
        assert exc.value.position == 2

    def test_urlsafe_alphabet_rejected(self):
        with pytest.raises(DecodeError):
            decode_base64("ab-_")
