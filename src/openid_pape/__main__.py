"""
OpenID PAPE - Entry Point

Encode a PAPE request into extension fields, or decode received fields.
"""

import argparse
import json
import logging
import sys
from datetime import timedelta
from typing import Dict, List, Optional

from .config import load_config
from .core.errors import ConfigError, MalformedMessageError, PapeError
from .core.extension import ExtensionArgs
from .pape.constants import TYPE_URI
from .pape.policy_request import PolicyRequest, from_wire, to_wire

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="openid_pape",
        description="OpenID PAPE policy request encoder/decoder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Encode a request preferring phishing-resistant authentication
  python -m openid_pape encode \\
      --policy http://schemas.openid.net/pape/policies/2007/06/phishing-resistant \\
      --max-age 3600

  # Encode with namespaced message keys (openid.ns.pape, openid.pape.*)
  python -m openid_pape --namespaced encode --auth-level urn:example:level

  # Decode fields read from a JSON file (or stdin)
  python -m openid_pape decode fields.json
"""
    )

    parser.add_argument(
        '--config', '-c',
        help='Path to pape.yaml (default: search current directory)'
    )

    parser.add_argument(
        '--namespaced',
        action='store_true',
        help='Read/write full message keys instead of bare extension fields'
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    encode = subparsers.add_parser('encode', help='Encode a PAPE request as JSON fields')
    encode.add_argument(
        '--policy', '-p',
        action='append',
        default=[],
        help='Preferred authentication policy URI (repeatable, in preference order)'
    )
    encode.add_argument(
        '--auth-level', '-a',
        action='append',
        default=[],
        help='Preferred assurance level type URI (repeatable, in preference order)'
    )
    encode.add_argument(
        '--max-age',
        type=int,
        help='Maximum authentication age in seconds'
    )

    decode = subparsers.add_parser('decode', help='Decode JSON fields into a PAPE request')
    decode.add_argument(
        'file',
        nargs='?',
        help='JSON file with the received fields (default: stdin)'
    )

    return parser


def _encode(args, config) -> Dict[str, str]:
    if args.max_age is not None and args.max_age < 0:
        raise ConfigError("--max-age must not be negative")

    request = PolicyRequest(
        max_authentication_age=timedelta(seconds=args.max_age) if args.max_age is not None else None,
        preferred_policies=list(args.policy),
        preferred_auth_level_types=list(args.auth_level),
    )

    if args.namespaced:
        extension = request.to_extension_args(
            namespace_alias=config.namespace_alias,
            reserved_aliases=config.reserved_auth_level_aliases,
            alias_format=config.alias_format,
        )
        return extension.to_message_fields(config.message_prefix)

    fields: Dict[str, str] = {}
    to_wire(
        request,
        fields,
        reserved_aliases=config.reserved_auth_level_aliases,
        alias_format=config.alias_format,
    )
    return fields


def _decode(args, config) -> Dict:
    if args.file:
        with open(args.file, 'r') as f:
            data = json.load(f)
    else:
        data = json.load(sys.stdin)

    if not isinstance(data, dict):
        raise MalformedMessageError("Input must be a JSON object of string fields")
    for key, value in data.items():
        if not isinstance(value, str):
            raise MalformedMessageError(
                f"Field '{key}' must be a string, got {type(value).__name__}"
            )

    if args.namespaced:
        extension = ExtensionArgs.from_message_fields(data, TYPE_URI, prefix=config.message_prefix)
        if extension is None:
            raise MalformedMessageError(f"Message declares no namespace for {TYPE_URI}")
        data = extension.fields

    return from_wire(data).to_dict()


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        config = load_config(args.config)
        if args.command == 'encode':
            result = _encode(args, config)
        else:
            result = _decode(args, config)
    except (PapeError, json.JSONDecodeError) as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2))
    return 0


def run():
    """Entry point for console script"""
    sys.exit(main())


if __name__ == '__main__':
    run()
