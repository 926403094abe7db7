"""
test_vlq — base64-VLQ segment decoding.

Tests verify:
  - Known vectors, including multi-sextet and negative values.
  - Agreement with the reference encoder for arbitrary signed lists.
  - Unterminated values and foreign characters raise DecodeError.
"""
import random

import pytest

from sourcemap_resolver.core.errors import DecodeError
from sourcemap_resolver.core.vlq import decode_vlq_segment


class TestDecodeVlqSegment:

    @pytest.mark.parametrize("text, expected", [
        ("AAAA", [0, 0, 0, 0]),
        ("C", [1]),
        ("D", [-1]),
        ("gqjG", [100000]),
        ("hqjG", [-100000]),
        ("DFLx+BhqjG", [-1, -2, -5, -1000, -100000]),
        ("CEKw+BgqjG", [1, 2, 5, 1000, 100000]),
        ("/+Z", [-13295]),
    ])
    def test_known_vectors(self, text, expected):
        assert decode_vlq_segment(text) == expected

    def test_negative_zero_is_zero(self):
        """Sign bit set with zero magnitude decodes to 0."""
        assert decode_vlq_segment("B") == [0]

    def test_empty_segment(self):
        assert decode_vlq_segment("") == []

    def test_matches_reference_encoder(self, vlq):
        rng = random.Random(1234)
        for _ in range(200):
            values = [rng.randint(-(1 << 20), 1 << 20) for _ in range(rng.randint(1, 5))]
            assert decode_vlq_segment(vlq(*values)) == values

    def test_unterminated_value(self):
        """'g' carries a continuation bit and nothing follows."""
        with pytest.raises(DecodeError, match="unterminated"):
            decode_vlq_segment("AAg")

    def test_invalid_character(self):
        with pytest.raises(DecodeError) as exc:
            decode_vlq_segment("AA!A")
        assert exc.value.position == 2

    def test_padding_character_rejected(self):
        with pytest.raises(DecodeError):
            decode_vlq_segment("A=")
