"""
Extension Envelope

How an extension's fields sit inside the flat key/value fields of the
outer message, and how received extensions are matched to their classes.

Flattened form (prefix "openid", namespace alias "pape"):
    openid.ns.pape = http://specs.openid.net/extensions/pape/1.0
    openid.pape.preferred_auth_policies = ...
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

DEFAULT_MESSAGE_PREFIX = "openid"

# (fields, is_request) -> extension instance, or None when the constructor declines
ExtensionConstructor = Callable[[Dict[str, str], bool], Optional[Any]]


class ExtensionArgs(BaseModel):
    """
    The fields one extension contributes to a message.

    `fields` holds the extension's own keys without any namespace prefix.
    """
    type_uri: str
    namespace_alias: str
    fields: Dict[str, str] = Field(default_factory=dict)

    @field_validator("namespace_alias")
    @classmethod
    def _check_alias(cls, value: str) -> str:
        if not value or "." in value or " " in value:
            raise ValueError(f"Invalid namespace alias: '{value}'")
        return value

    def to_message_fields(self, prefix: str = DEFAULT_MESSAGE_PREFIX) -> Dict[str, str]:
        """Flatten into namespaced message keys"""
        flat = {f"{prefix}.ns.{self.namespace_alias}": self.type_uri}
        for key, value in self.fields.items():
            flat[f"{prefix}.{self.namespace_alias}.{key}"] = value
        return flat

    @classmethod
    def from_message_fields(
        cls,
        message_fields: Mapping[str, str],
        type_uri: str,
        prefix: str = DEFAULT_MESSAGE_PREFIX,
    ) -> Optional["ExtensionArgs"]:
        """
        Extract one extension's fields from a flat message.

        Returns None if the message declares no namespace for `type_uri`.
        """
        ns_prefix = f"{prefix}.ns."
        namespace_alias = None
        for key, value in message_fields.items():
            if key.startswith(ns_prefix) and value == type_uri:
                namespace_alias = key[len(ns_prefix):]
                break

        if namespace_alias is None:
            return None

        field_prefix = f"{prefix}.{namespace_alias}."
        fields = {
            key[len(field_prefix):]: value
            for key, value in message_fields.items()
            if key.startswith(field_prefix)
        }
        return cls(type_uri=type_uri, namespace_alias=namespace_alias, fields=fields)


class ExtensionFactory:
    """
    Registry mapping extension type URIs to constructors.

    Used on receive to turn extension fields into typed objects.
    """

    def __init__(self):
        self._constructors: Dict[str, List[ExtensionConstructor]] = {}

    def register(self, type_uri: str, constructor: ExtensionConstructor) -> None:
        """Register a constructor for a type URI"""
        self._constructors.setdefault(type_uri, []).append(constructor)
        logger.debug(f"Registered extension constructor for {type_uri}")

    def is_registered(self, type_uri: str) -> bool:
        return type_uri in self._constructors

    def create(self, type_uri: str, fields: Dict[str, str], is_request: bool) -> Optional[Any]:
        """
        Build the extension for received fields.

        Returns None when no registered constructor accepts the fields.
        """
        for constructor in self._constructors.get(type_uri, []):
            extension = constructor(fields, is_request)
            if extension is not None:
                return extension

        logger.debug(f"No extension constructor accepted {type_uri} (is_request={is_request})")
        return None
