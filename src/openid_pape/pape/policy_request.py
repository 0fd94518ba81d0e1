"""
PAPE Policy Request

The Relying Party's half of the Provider Authentication Policy Extension:
which authentication policies and assurance levels it prefers, and how
stale the End User's authentication may be.

Wire fields (inside the extension's namespace):
    preferred_auth_policies     required, space-delimited policy URIs
    auth_level.ns.<alias>       assurance level type URI for <alias>
    preferred_auth_level_types  optional, space-delimited aliases
    max_auth_age                optional, whole seconds

Note on equality: the two preference lists keep their order, but two
requests compare equal when the lists hold the same URIs in any order.
Consumers compare requests for meaning, not wire order. __hash__ follows
the same order-insensitive rule.
"""

import logging
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Dict, List, Mapping, MutableMapping, Optional, Tuple

from ..core.aliases import DEFAULT_ALIAS_FORMAT, AliasManager, FieldSource, find_incoming_aliases
from ..core.encoding import (
    TimespanSecondsEncoder,
    concatenate_list_of_elements,
    split_list_of_elements,
)
from ..core.errors import AliasNotFoundError, MalformedMessageError, MissingRequiredFieldError
from ..core.extension import ExtensionArgs, ExtensionFactory
from .constants import (
    AUTH_LEVEL_NAMESPACE_DECLARATION_PREFIX,
    TYPE_URI,
    VERSION,
    AssuranceLevels,
    RequestParameters,
)

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE_ALIAS = "pape"


@dataclass(eq=False)
class PolicyRequest:
    """
    PAPE request attached to an authentication request.

    `preferred_policies` and `preferred_auth_level_types` are in the RP's
    order of preference.
    """
    max_authentication_age: Optional[timedelta] = None
    preferred_policies: List[str] = field(default_factory=list)
    preferred_auth_level_types: List[str] = field(default_factory=list)

    type_uri = TYPE_URI
    version = VERSION

    def on_sending(
        self,
        fields: MutableMapping[str, str],
        reserved_aliases: Optional[Mapping[str, str]] = None,
        alias_format: str = DEFAULT_ALIAS_FORMAT,
    ) -> None:
        """Called when the message is about to be transmitted"""
        to_wire(self, fields, reserved_aliases=reserved_aliases, alias_format=alias_format)

    def on_receiving(self, fields: Mapping[str, str]) -> None:
        """
        Called when the message has been received, before application code reads it.

        All three fields are reset first, so a reused request never keeps
        values from an earlier message, even when decoding fails.
        """
        self.max_authentication_age = None
        self.preferred_policies.clear()
        self.preferred_auth_level_types.clear()

        max_age, policies, auth_levels = _decode_fields(fields)
        self.max_authentication_age = max_age
        self.preferred_policies.extend(policies)
        self.preferred_auth_level_types.extend(auth_levels)

    def to_extension_args(
        self,
        namespace_alias: str = DEFAULT_NAMESPACE_ALIAS,
        reserved_aliases: Optional[Mapping[str, str]] = None,
        alias_format: str = DEFAULT_ALIAS_FORMAT,
    ) -> ExtensionArgs:
        """Encode into an envelope ready to be merged into a message"""
        fields: Dict[str, str] = {}
        to_wire(self, fields, reserved_aliases=reserved_aliases, alias_format=alias_format)
        return ExtensionArgs(type_uri=self.type_uri, namespace_alias=namespace_alias, fields=fields)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary"""
        return {
            "type_uri": self.type_uri,
            "max_auth_age": (
                int(self.max_authentication_age.total_seconds())
                if self.max_authentication_age is not None else None
            ),
            "preferred_policies": list(self.preferred_policies),
            "preferred_auth_level_types": list(self.preferred_auth_level_types),
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PolicyRequest):
            return NotImplemented

        return (
            self.max_authentication_age == other.max_authentication_age
            and set(self.preferred_policies) == set(other.preferred_policies)
            and set(self.preferred_auth_level_types) == set(other.preferred_auth_level_types)
        )

    def __hash__(self) -> int:
        return hash((
            self.max_authentication_age,
            frozenset(self.preferred_policies),
            frozenset(self.preferred_auth_level_types),
        ))


def to_wire(
    request: PolicyRequest,
    fields: MutableMapping[str, str],
    reserved_aliases: Optional[Mapping[str, str]] = None,
    alias_format: str = DEFAULT_ALIAS_FORMAT,
) -> None:
    """
    Write a request into the extension fields of an outgoing message.

    Every value is computed before `fields` is touched, so a failure leaves
    it unchanged. Keys owned by other parties are never modified.

    Raises:
        AliasCollisionError: Two assurance level types map to the same reserved alias
    """
    if reserved_aliases is None:
        reserved_aliases = AssuranceLevels.PREFERRED_TYPE_URI_TO_ALIAS_MAP

    encoded: Dict[str, str] = {
        RequestParameters.PREFERRED_AUTH_POLICIES: concatenate_list_of_elements(request.preferred_policies),
    }

    if request.preferred_auth_level_types:
        aliases = AliasManager(alias_format=alias_format)
        aliases.assign_aliases(request.preferred_auth_level_types, reserved_aliases)

        # Declare each alias before it is used in the preference list
        for alias, type_uri in aliases.items():
            encoded[AUTH_LEVEL_NAMESPACE_DECLARATION_PREFIX + alias] = type_uri

        encoded[RequestParameters.PREFERRED_AUTH_LEVEL_TYPES] = concatenate_list_of_elements(
            aliases.get_alias(type_uri) for type_uri in request.preferred_auth_level_types
        )

    if request.max_authentication_age is not None:
        encoded[RequestParameters.MAX_AUTH_AGE] = TimespanSecondsEncoder.encode(
            request.max_authentication_age
        )

    _clear_request_fields(fields)
    fields.update(encoded)
    logger.debug(f"Encoded PAPE request into {len(encoded)} field(s)")


def from_wire(fields: FieldSource) -> PolicyRequest:
    """
    Read a request from the extension fields of an incoming message.

    Raises:
        MissingRequiredFieldError: preferred_auth_policies is absent
        MalformedMessageError: An alias is undeclared, or a value cannot be parsed
    """
    max_age, policies, auth_levels = _decode_fields(fields)
    return PolicyRequest(
        max_authentication_age=max_age,
        preferred_policies=policies,
        preferred_auth_level_types=auth_levels,
    )


def create_policy_request(fields: Dict[str, str], is_request: bool) -> Optional[PolicyRequest]:
    """Extension constructor: PAPE requests only ride on authentication requests"""
    if not is_request:
        return None
    return from_wire(fields)


def register(factory: ExtensionFactory) -> None:
    """Register the PAPE request constructor with an extension factory"""
    factory.register(TYPE_URI, create_policy_request)


def _clear_request_fields(fields: MutableMapping[str, str]) -> None:
    owned = [
        key for key in fields
        if key.startswith(AUTH_LEVEL_NAMESPACE_DECLARATION_PREFIX)
        or key in (
            RequestParameters.PREFERRED_AUTH_POLICIES,
            RequestParameters.PREFERRED_AUTH_LEVEL_TYPES,
            RequestParameters.MAX_AUTH_AGE,
        )
    ]
    for key in owned:
        del fields[key]


def _decode_fields(fields: FieldSource) -> Tuple[Optional[timedelta], List[str], List[str]]:
    if not isinstance(fields, Mapping):
        fields = list(fields)
        # Alias declarations may repeat; plain fields take the last value
        aliases = find_incoming_aliases(fields, AUTH_LEVEL_NAMESPACE_DECLARATION_PREFIX)
        values = dict(fields)
    else:
        aliases = find_incoming_aliases(fields, AUTH_LEVEL_NAMESPACE_DECLARATION_PREFIX)
        values = fields

    policies_value = values.get(RequestParameters.PREFERRED_AUTH_POLICIES)
    if policies_value is None:
        logger.error(f"PAPE request is missing {RequestParameters.PREFERRED_AUTH_POLICIES}")
        raise MissingRequiredFieldError(RequestParameters.PREFERRED_AUTH_POLICIES)
    policies = split_list_of_elements(policies_value)

    auth_levels: List[str] = []
    auth_levels_value = values.get(RequestParameters.PREFERRED_AUTH_LEVEL_TYPES)
    if auth_levels_value is not None:
        for alias in split_list_of_elements(auth_levels_value):
            try:
                auth_levels.append(aliases.resolve_alias(alias))
            except AliasNotFoundError as e:
                logger.error(f"PAPE request references undeclared auth level alias '{alias}'")
                raise MalformedMessageError(
                    f"Auth level alias '{alias}' has no "
                    f"{AUTH_LEVEL_NAMESPACE_DECLARATION_PREFIX}{alias} declaration"
                ) from e

    max_age = None
    max_age_value = values.get(RequestParameters.MAX_AUTH_AGE)
    if max_age_value is not None:
        max_age = TimespanSecondsEncoder.decode(max_age_value)

    logger.debug(
        f"Decoded PAPE request: {len(policies)} policy(ies), {len(auth_levels)} auth level type(s)"
    )
    return max_age, policies, auth_levels
