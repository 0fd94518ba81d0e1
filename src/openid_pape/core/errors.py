"""
PAPE Extension Errors

Exceptions raised while encoding or decoding extension fields.

Every error aborts only the current send or receive transformation.
The host message framework decides whether a ProtocolError invalidates
the whole incoming message or just this extension.
"""

from typing import Optional


class PapeError(Exception):
    """Base class for all errors raised by this library."""


class AliasCollisionError(PapeError):
    """
    Two distinct identifiers would receive the same alias in one assignment pass.

    Raised before anything is written to the outgoing fields.
    """

    def __init__(self, alias: str, existing: str, requested: str, message: Optional[str] = None):
        self.alias = alias
        self.existing = existing
        self.requested = requested
        super().__init__(message or (
            f"Alias '{alias}' is already assigned to '{existing}' "
            f"and cannot also be assigned to '{requested}'"
        ))


class AliasNotFoundError(PapeError, KeyError):
    """
    Lookup of an identifier or alias that was never assigned.

    This is a caller contract violation, not a protocol condition.
    """

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0]) if self.args else ""


class ProtocolError(PapeError):
    """Incoming extension fields are malformed."""


class MissingRequiredFieldError(ProtocolError):
    """A required extension field is absent from an incoming message."""

    def __init__(self, field_name: str, message: Optional[str] = None):
        self.field_name = field_name
        super().__init__(message or f"Required field '{field_name}' is missing")


class MalformedMessageError(ProtocolError):
    """
    Incoming fields cannot be decoded.

    Covers alias references without a declaration, declarations that cannot
    be parsed, and values with the wrong format.
    """


class ConfigError(PapeError):
    """Configuration values are invalid."""
