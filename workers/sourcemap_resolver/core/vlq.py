"""
Base64-VLQ decoder for source-map segments.

Uses the base64 alphabet, but each sextet is split differently:

  +-----+-----+-----+-----+-----+-----+
  |  c  |  p4 |  p3 |  p2 |  p1 |  p0 |
  +-----+-----+-----+-----+-----+-----+

``c`` is the continuation flag, ``p0..p4`` are payload bits.  Payloads of
consecutive sextets are concatenated little-end first until a sextet with
``c == 0`` closes the integer.  The lowest bit of the accumulated value is
the sign, the rest is the magnitude.
"""
from typing import List

from sourcemap_resolver.core.base64_decoder import SEXTETS
from sourcemap_resolver.core.errors import DecodeError

_SHIFT = 5
_CONTINUATION = 1 << _SHIFT
_PAYLOAD_MASK = _CONTINUATION - 1


def decode_vlq_segment(text: str) -> List[int]:
    """Decode one segment string into its signed integers."""
    values: List[int] = []
    accumulated = 0
    shift = 0
    for position, char in enumerate(text):
        # "=" is padding for plain base64, never a VLQ digit
        sextet = SEXTETS.get(char) if char != "=" else None
        if sextet is None:
            raise DecodeError(
                f"invalid base64-VLQ character {char!r}", text=text, position=position
            )

        accumulated |= (sextet & _PAYLOAD_MASK) << shift
        if sextet & _CONTINUATION:
            shift += _SHIFT
            continue

        magnitude = accumulated >> 1
        values.append(-magnitude if accumulated & 1 else magnitude)
        accumulated = 0
        shift = 0

    if shift:
        raise DecodeError("unterminated base64-VLQ value", text=text, position=len(text))
    return values
