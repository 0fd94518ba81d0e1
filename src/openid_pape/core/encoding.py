"""
Field Encoding

Codecs for the string values carried in extension fields:
- space-delimited lists of policy URIs or aliases
- durations carried as whole seconds
"""

from datetime import timedelta
from typing import Iterable, List

from .errors import MalformedMessageError

LIST_SEPARATOR = " "


def concatenate_list_of_elements(items: Iterable[str]) -> str:
    """
    Join tokens into a single space-delimited string.

    Tokens are not escaped. Policy URIs and aliases never contain
    whitespace, so callers must not pass tokens that do.
    """
    return LIST_SEPARATOR.join(items)


def split_list_of_elements(text: str) -> List[str]:
    """
    Split a space-delimited string into its tokens.

    Empty tokens produced by repeated, leading or trailing spaces are dropped.
    """
    return [token for token in text.split(LIST_SEPARATOR) if token]


class TimespanSecondsEncoder:
    """Encodes a timedelta as a non-negative integer count of seconds."""

    @staticmethod
    def encode(value: timedelta) -> str:
        seconds = int(value.total_seconds())
        if seconds < 0:
            raise ValueError(f"Duration must not be negative: {value}")
        return str(seconds)

    @staticmethod
    def decode(value: str) -> timedelta:
        if not value.isdigit() or not value.isascii():
            raise MalformedMessageError(
                f"Expected a non-negative number of seconds, got '{value}'"
            )
        try:
            return timedelta(seconds=int(value))
        except OverflowError as e:
            raise MalformedMessageError(f"Number of seconds out of range: '{value}'") from e
