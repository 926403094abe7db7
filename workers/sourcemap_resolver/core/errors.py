"""
Errors raised by the decoding pipeline.

Only malformed map content raises.  A missing map is not an error: it is
reported as ``None`` by the builder and the resolver.
"""
from typing import Optional


class DecodeError(ValueError):
    """Malformed base64 or base64-VLQ input."""

    def __init__(self, message: str, text: str = "", position: Optional[int] = None):
        if position is not None:
            message = f"{message} at position {position}"
        super().__init__(message)
        self.text = text
        self.position = position
