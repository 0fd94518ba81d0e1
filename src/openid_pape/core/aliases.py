"""
Alias Manager

Assigns short aliases to long type URIs so they can be referenced compactly
inside the flat key/value fields of a message, and resolves them back.

An AliasManager lives for exactly one send or one receive transformation.

Sending:
    aliases = AliasManager()
    aliases.assign_aliases(type_uris, {NIST_TYPE_URI: "nist"})
    for alias in aliases.aliases:
        fields[prefix + alias] = aliases.resolve_alias(alias)

Receiving:
    aliases = find_incoming_aliases(fields, prefix)
    type_uri = aliases.resolve_alias("nist")
"""

import logging
from collections.abc import Mapping as MappingABC
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from .errors import AliasCollisionError, AliasNotFoundError, ConfigError, MalformedMessageError

logger = logging.getLogger(__name__)

DEFAULT_ALIAS_FORMAT = "{0}"

# Counter values sampled when checking an alias format
_FORMAT_SAMPLE_SIZE = 100

FieldSource = Union[Mapping[str, str], Iterable[Tuple[str, str]]]


class AliasManager:
    """
    Bidirectional identifier <-> alias map built up in one pass.

    At most one alias per identifier and one identifier per alias.
    """

    def __init__(self, alias_format: str = DEFAULT_ALIAS_FORMAT):
        """
        Args:
            alias_format: Format string for synthesized aliases; "{0}" receives
                a counter (default: bare numbers "0", "1", ...)

        Raises:
            ConfigError: alias_format cannot produce distinct, single-token aliases
        """
        check_alias_format(alias_format)
        self.alias_format = alias_format
        self._identifier_to_alias: Dict[str, str] = {}
        self._alias_to_identifier: Dict[str, str] = {}

    @property
    def aliases(self) -> List[str]:
        """Aliases currently assigned, in assignment order"""
        return list(self._alias_to_identifier)

    def __len__(self) -> int:
        return len(self._alias_to_identifier)

    def __contains__(self, identifier: str) -> bool:
        return identifier in self._identifier_to_alias

    def assign_aliases(
        self,
        identifiers: Iterable[str],
        reserved: Optional[Mapping[str, str]] = None,
    ) -> None:
        """
        Give every identifier an alias, in input order.

        Identifiers listed in `reserved` get their reserved alias. Others get
        a synthesized alias that collides with neither an assigned alias nor
        any reserved alias.

        Raises:
            AliasCollisionError: A reserved alias already belongs to another identifier
        """
        reserved = reserved or {}
        reserved_aliases = set(reserved.values())

        for identifier in identifiers:
            if identifier in self._identifier_to_alias:
                continue

            alias = reserved.get(identifier)
            if alias is None:
                alias = self._next_alias(reserved_aliases)

            self.set_alias(alias, identifier)

    def set_alias(self, alias: str, identifier: str) -> None:
        """
        Record an explicit alias/identifier pair.

        Raises:
            AliasCollisionError: The alias or the identifier is already paired differently
        """
        existing = self._alias_to_identifier.get(alias)
        if existing is not None and existing != identifier:
            raise AliasCollisionError(alias, existing, identifier)

        current_alias = self._identifier_to_alias.get(identifier)
        if current_alias is not None and current_alias != alias:
            raise AliasCollisionError(
                alias, identifier, identifier,
                message=f"'{identifier}' already has alias '{current_alias}', cannot also use '{alias}'",
            )

        self._identifier_to_alias[identifier] = alias
        self._alias_to_identifier[alias] = identifier
        logger.debug(f"Alias '{alias}' -> {identifier}")

    def get_alias(self, identifier: str) -> str:
        """
        Alias assigned to an identifier.

        Raises:
            AliasNotFoundError: The identifier was never assigned an alias
        """
        try:
            return self._identifier_to_alias[identifier]
        except KeyError:
            raise AliasNotFoundError(f"No alias assigned to '{identifier}'") from None

    def resolve_alias(self, alias: str) -> str:
        """
        Identifier an alias stands for.

        Raises:
            AliasNotFoundError: The alias is unknown
        """
        try:
            return self._alias_to_identifier[alias]
        except KeyError:
            raise AliasNotFoundError(f"Alias '{alias}' is not defined") from None

    def is_alias_used(self, alias: str) -> bool:
        """Check if an alias is assigned to some identifier"""
        return alias in self._alias_to_identifier

    def is_alias_assigned(self, identifier: str) -> bool:
        """Check if an identifier has an alias"""
        return identifier in self._identifier_to_alias

    def items(self) -> List[Tuple[str, str]]:
        """(alias, identifier) pairs in assignment order"""
        return list(self._alias_to_identifier.items())

    def _next_alias(self, reserved_aliases: Iterable[str]) -> str:
        taken = set(reserved_aliases)
        counter = len(self._alias_to_identifier)
        while True:
            alias = self.alias_format.format(counter)
            if alias not in self._alias_to_identifier and alias not in taken:
                return alias
            counter += 1


def is_valid_alias(alias: str) -> bool:
    """Aliases must be non-empty and free of whitespace and '.'"""
    return bool(alias) and "." not in alias and not any(c.isspace() for c in alias)


def check_alias_format(alias_format: str) -> None:
    """
    Check that a format yields aliases a receiver can parse back.

    Every sampled counter value must give a valid alias, and no two may
    give the same one.

    Raises:
        ConfigError: The format is unusable
    """
    seen = set()
    for counter in range(_FORMAT_SAMPLE_SIZE):
        try:
            alias = alias_format.format(counter)
        except (IndexError, KeyError, ValueError) as e:
            raise ConfigError(f"Invalid alias_format '{alias_format}': {e}") from e

        if not is_valid_alias(alias):
            raise ConfigError(
                f"alias_format '{alias_format}' produces '{alias}', "
                f"which is empty or contains whitespace or '.'"
            )
        if alias in seen:
            raise ConfigError(
                f"alias_format '{alias_format}' does not produce distinct aliases"
            )
        seen.add(alias)


def find_incoming_aliases(fields: FieldSource, prefix: str) -> AliasManager:
    """
    Build an AliasManager from the alias declarations in received fields.

    A declaration is a key `<prefix><alias>` whose value is the identifier.
    `fields` may be a mapping or a sequence of (key, value) pairs, since a
    parsed query string can repeat a key.

    Raises:
        MalformedMessageError: A declaration is empty, contains '.', or
            conflicts with an earlier one
    """
    pairs = fields.items() if isinstance(fields, MappingABC) else fields
    aliases = AliasManager()

    for key, value in pairs:
        if not key.startswith(prefix):
            continue

        alias = key[len(prefix):]
        if not is_valid_alias(alias):
            raise MalformedMessageError(f"Invalid alias declaration key '{key}'")
        if not value:
            raise MalformedMessageError(f"Alias declaration '{key}' has no identifier")

        try:
            aliases.set_alias(alias, value)
        except AliasCollisionError as e:
            raise MalformedMessageError(f"Conflicting alias declaration '{key}': {e}") from e

    logger.debug(f"Found {len(aliases)} incoming alias declaration(s) under '{prefix}'")
    return aliases
