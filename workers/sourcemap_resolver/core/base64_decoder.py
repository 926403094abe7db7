"""
Base64 decoder — standard alphabet, one sextet at a time.

Each character contributes 6 bits to a small bit buffer (most significant
bit first).  As soon as the buffer holds 8 bits, one byte is emitted and the
remainder is kept.  The buffer never holds more than 13 bits.

``=`` is decoded as the value 0 rather than as "end of data", so padding
can append zero bytes to the output; bits that never fill a byte are
dropped.  Any character outside ``[A-Za-z0-9+/=]`` raises DecodeError.
"""
from typing import Dict

from sourcemap_resolver.core.errors import DecodeError

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"

SEXTETS: Dict[str, int] = {c: i for i, c in enumerate(ALPHABET)}
SEXTETS["="] = 0


def sextet_value(char: str, text: str, position: int) -> int:
    """Look up the 6-bit value of a base64 character."""
    try:
        return SEXTETS[char]
    except KeyError:
        raise DecodeError(
            f"invalid base64 character {char!r}", text=text, position=position
        ) from None


def decode_base64(text: str) -> bytes:
    """Decode *text* into raw bytes."""
    out = bytearray()
    buffer = 0
    n_bits = 0
    for position, char in enumerate(text):
        buffer = (buffer << 6) | sextet_value(char, text, position)
        n_bits += 6
        if n_bits >= 8:
            n_bits -= 8
            out.append((buffer >> n_bits) & 0xFF)
            buffer &= (1 << n_bits) - 1
    return bytes(out)
