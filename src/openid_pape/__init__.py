"""
OpenID PAPE Policy Request

Encodes and decodes the Provider Authentication Policy Extension request
carried in OpenID authentication requests.
"""

from .core.errors import (
    AliasCollisionError,
    AliasNotFoundError,
    ConfigError,
    MalformedMessageError,
    MissingRequiredFieldError,
    PapeError,
    ProtocolError,
)
from .pape import PolicyRequest, from_wire, to_wire

__version__ = "0.1.0"

__all__ = [
    "AliasCollisionError",
    "AliasNotFoundError",
    "ConfigError",
    "MalformedMessageError",
    "MissingRequiredFieldError",
    "PapeError",
    "ProtocolError",
    "PolicyRequest",
    "from_wire",
    "to_wire",
]
