"""
Core message machinery shared by extensions:
- field encoding (space-delimited lists, seconds)
- alias management for type URIs
- extension envelope and factory
- error types
"""

from .aliases import AliasManager, find_incoming_aliases
from .encoding import (
    TimespanSecondsEncoder,
    concatenate_list_of_elements,
    split_list_of_elements,
)
from .errors import (
    AliasCollisionError,
    AliasNotFoundError,
    ConfigError,
    MalformedMessageError,
    MissingRequiredFieldError,
    PapeError,
    ProtocolError,
)
from .extension import ExtensionArgs, ExtensionFactory

__all__ = [
    "AliasManager",
    "find_incoming_aliases",
    "TimespanSecondsEncoder",
    "concatenate_list_of_elements",
    "split_list_of_elements",
    "AliasCollisionError",
    "AliasNotFoundError",
    "ConfigError",
    "MalformedMessageError",
    "MissingRequiredFieldError",
    "PapeError",
    "ProtocolError",
    "ExtensionArgs",
    "ExtensionFactory",
]
