"""
CLI Parse Command

Validate a digest string and render it.

Usage:
    ethdigest parse 0xEEEE...EE
    ethdigest parse eeee...ee --upper --no-prefix
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace
from typing import Any

from ethdigest import Alphabet, Digest, ParseDigestError


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def render(digest: Digest, upper: bool = False, prefix: bool = True) -> str:
    """Render a digest the way the --upper/--no-prefix flags ask for."""
    alphabet = Alphabet.UPPER if upper else Alphabet.LOWER
    return digest.to_hex(alphabet, prefix=prefix)


def wants_json(args: Namespace) -> bool:
    """--json, or a configured default output format of "json"."""
    return bool(args.json) or args.cli_config.default_output_format == "json"


def digest_summary(digest: Digest, rendered: str) -> dict[str, Any]:
    return {
        "digest": str(digest),
        "rendered": rendered,
        "bytes": list(digest),
    }


def parse_cmd(args: Namespace) -> int:
    """
    Execute the parse command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    try:
        digest = Digest.parse(args.text)
    except ParseDigestError as e:
        if wants_json(args):
            print(json.dumps({"ok": False, "error": e.to_error_model().model_dump()}, indent=2))
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    rendered = render(digest, upper=args.upper, prefix=not args.no_prefix)
    if wants_json(args):
        print(json.dumps({"ok": True, **digest_summary(digest, rendered)}, indent=2))
    else:
        print(rendered)
    return EXIT_SUCCESS
