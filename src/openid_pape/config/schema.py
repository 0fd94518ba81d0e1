"""
PAPE Configuration Schema

Defines the protocol settings used when encoding PAPE requests.
All configuration can be specified via pape.yaml or programmatic defaults.
"""

from dataclasses import dataclass, field
from typing import Any, Dict

from ..core.aliases import DEFAULT_ALIAS_FORMAT, check_alias_format, is_valid_alias
from ..core.errors import ConfigError
from ..core.extension import DEFAULT_MESSAGE_PREFIX
from ..pape.constants import AssuranceLevels
from ..pape.policy_request import DEFAULT_NAMESPACE_ALIAS


@dataclass
class PapeConfig:
    """
    Protocol configuration for PAPE requests.

    Example pape.yaml:
    ```yaml
    pape:
      namespace_alias: pape
      message_prefix: openid
      alias_format: "{0}"

    reserved_auth_level_aliases:
      "http://csrc.nist.gov/publications/nistpubs/800-63/SP800-63V1_0_2.pdf": nist
      "${CUSTOM_LEVEL_URI:-urn:example:level}": custom
    ```
    """
    # Well-known assurance level type URI -> alias table
    reserved_auth_level_aliases: Dict[str, str] = field(
        default_factory=lambda: dict(AssuranceLevels.PREFERRED_TYPE_URI_TO_ALIAS_MAP)
    )

    # Format for synthesized aliases; "{0}" receives a counter
    alias_format: str = DEFAULT_ALIAS_FORMAT

    # Message namespacing
    namespace_alias: str = DEFAULT_NAMESPACE_ALIAS
    message_prefix: str = DEFAULT_MESSAGE_PREFIX

    # Additional metadata
    metadata: Dict[str, Any] = field(default_factory=dict)

    def validate(self) -> "PapeConfig":
        """
        Check the configuration is usable.

        Raises:
            ConfigError: If a reserved alias is empty, repeated, or not a
                single token, or alias_format cannot produce distinct
                single-token aliases
        """
        seen: Dict[str, str] = {}
        for type_uri, alias in self.reserved_auth_level_aliases.items():
            if not type_uri:
                raise ConfigError("Reserved auth level type URI must not be empty")
            if not is_valid_alias(alias):
                raise ConfigError(f"Invalid reserved alias '{alias}' for {type_uri}")
            if alias in seen:
                raise ConfigError(
                    f"Reserved alias '{alias}' used for both {seen[alias]} and {type_uri}"
                )
            seen[alias] = type_uri

        check_alias_format(self.alias_format)

        if not is_valid_alias(self.namespace_alias):
            raise ConfigError(f"Invalid namespace alias '{self.namespace_alias}'")

        return self

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PapeConfig":
        """Create PapeConfig from dictionary (e.g., parsed YAML)"""
        pape_data = data.get("pape", {}) or {}

        reserved = data.get("reserved_auth_level_aliases")
        if reserved is None:
            reserved = dict(AssuranceLevels.PREFERRED_TYPE_URI_TO_ALIAS_MAP)
        elif not isinstance(reserved, dict):
            raise ConfigError("reserved_auth_level_aliases must be a mapping")

        return cls(
            reserved_auth_level_aliases={str(k): str(v) for k, v in reserved.items()},
            alias_format=str(pape_data.get("alias_format", DEFAULT_ALIAS_FORMAT)),
            namespace_alias=str(pape_data.get("namespace_alias", DEFAULT_NAMESPACE_ALIAS)),
            message_prefix=str(pape_data.get("message_prefix", DEFAULT_MESSAGE_PREFIX)),
            metadata=data.get("metadata", {}),
        ).validate()

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary (for serialization)"""
        return {
            "pape": {
                "namespace_alias": self.namespace_alias,
                "message_prefix": self.message_prefix,
                "alias_format": self.alias_format,
            },
            "reserved_auth_level_aliases": dict(self.reserved_auth_level_aliases),
            "metadata": self.metadata,
        }
