"""
Test Field Encoding

Space-delimited list codec and the seconds encoder for max_auth_age.
"""

from datetime import timedelta

import pytest

from openid_pape.core.encoding import (
    TimespanSecondsEncoder,
    concatenate_list_of_elements,
    split_list_of_elements,
)
from openid_pape.core.errors import MalformedMessageError


class TestListCodec:
    """Tests for the space-delimited list codec"""

    def test_concatenate_joins_with_single_space(self):
        """Tokens are joined with one space, in order"""
        assert concatenate_list_of_elements(["b", "a", "c"]) == "b a c"

    def test_concatenate_empty_list(self):
        """An empty list encodes to an empty string"""
        assert concatenate_list_of_elements([]) == ""

    def test_concatenate_accepts_generator(self):
        """Any iterable of tokens can be encoded"""
        assert concatenate_list_of_elements(t for t in ("x", "y")) == "x y"

    def test_split_empty_string(self):
        """Decoding an empty string yields no tokens"""
        assert split_list_of_elements("") == []

    def test_split_drops_empty_tokens(self):
        """Repeated, leading and trailing spaces never produce empty entries"""
        assert split_list_of_elements("  a   b c ") == ["a", "b", "c"]

    def test_split_only_spaces(self):
        """A string of spaces decodes to nothing"""
        assert split_list_of_elements("     ") == []

    @pytest.mark.parametrize("tokens", [
        ["http://schemas.openid.net/pape/policies/2007/06/phishing-resistant"],
        ["nist", "0", "1"],
        ["urn:a", "urn:a", "urn:b"],
    ])
    def test_round_trip_preserves_order_and_duplicates(self, tokens):
        """decode(encode(xs)) == xs for whitespace-free tokens"""
        assert split_list_of_elements(concatenate_list_of_elements(tokens)) == tokens


class TestTimespanSecondsEncoder:
    """Tests for the max_auth_age duration encoder"""

    def test_encode_whole_seconds(self):
        """Durations are written as integer seconds"""
        assert TimespanSecondsEncoder.encode(timedelta(hours=1)) == "3600"

    def test_encode_truncates_fraction(self):
        """Sub-second parts are dropped"""
        assert TimespanSecondsEncoder.encode(timedelta(seconds=5, milliseconds=900)) == "5"

    def test_encode_zero(self):
        """Zero is a valid age"""
        assert TimespanSecondsEncoder.encode(timedelta(0)) == "0"

    def test_encode_negative_rejected(self):
        """Negative durations cannot be expressed on the wire"""
        with pytest.raises(ValueError):
            TimespanSecondsEncoder.encode(timedelta(seconds=-1))

    def test_decode(self):
        """Integer seconds decode to a timedelta"""
        assert TimespanSecondsEncoder.decode("86400") == timedelta(days=1)

    @pytest.mark.parametrize("value", ["", "-5", "1.5", "abc", " 10", "9" * 20])
    def test_decode_rejects_non_integer(self, value):
        """Anything but a non-negative integer is malformed"""
        with pytest.raises(MalformedMessageError):
            TimespanSecondsEncoder.decode(value)
