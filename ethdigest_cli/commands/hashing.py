"""
CLI Hash Command

Compute Keccak-256 digests of text, files or stdin.

Usage:
    ethdigest hash "Hello Ethereum!"
    ethdigest hash --file data.bin
    cat data.bin | ethdigest hash --file -
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path
from typing import BinaryIO

from ethdigest import Digest, Keccak
from ethdigest_cli.commands.parse import digest_summary, render, wants_json

logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def hash_stream(stream: BinaryIO, chunk_size: int = 65536) -> Digest:
    """Hash a binary stream in fixed-size chunks."""
    hasher = Keccak()
    total = 0
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            break
        hasher.update(chunk)
        total += len(chunk)
    logger.debug("Hashed %d bytes", total)
    return hasher.finalize()


def hash_cmd(args: Namespace) -> int:
    """
    Execute the hash command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    chunk_size = args.cli_config.hash_chunk_size

    if args.file is not None and args.text is not None:
        print("Error: pass either TEXT or --file, not both", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.file == "-":
        digest = hash_stream(sys.stdin.buffer, chunk_size)
    elif args.file is not None:
        path = Path(args.file)
        if not path.is_file():
            print(f"Error: File not found: {path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR
        with open(path, "rb") as f:
            digest = hash_stream(f, chunk_size)
    elif args.text is not None:
        digest = Digest.of(args.text)
    else:
        print("Error: nothing to hash (pass TEXT or --file)", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    rendered = render(digest, upper=args.upper, prefix=not args.no_prefix)
    if wants_json(args):
        print(json.dumps({"ok": True, **digest_summary(digest, rendered)}, indent=2))
    else:
        print(rendered)
    return EXIT_SUCCESS
