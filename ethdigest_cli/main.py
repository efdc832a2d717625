"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m ethdigest_cli parse <text> [--upper] [--no-prefix] [--json]
    python -m ethdigest_cli hash [<text>] [--file PATH] [--upper] [--no-prefix] [--json]
    python -m ethdigest_cli build <paths...> [--out DIR | --in-place | --check] [--json]
    python -m ethdigest_cli config --init

Environment Variables:
    ETHDIGEST_LOG_LEVEL         Log level (default: INFO)
    ETHDIGEST_LOG_FILE          Also log to this file
    ETHDIGEST_CONSTRUCTOR       Expression emitted for expanded literals (default: Digest)
    ETHDIGEST_DIGEST_NAME       Call name of digest literals (default: digest)
    ETHDIGEST_KECCAK_NAME       Call name of keccak literals (default: keccak)
    ETHDIGEST_INCLUDE           File glob for directory builds (default: *.py)
    ETHDIGEST_HASH_CHUNK_SIZE   Read size when hashing files (default: 65536)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from ethdigest_cli import __version__
from ethdigest_cli.commands import build, hashing, parse
from ethdigest_cli.config import get_default_config_template, load_config


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_LITERAL_ERRORS = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def _add_render_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--upper",
        action="store_true",
        default=False,
        help="Render hex digits in uppercase",
    )
    parser.add_argument(
        "--no-prefix",
        action="store_true",
        default=False,
        help="Omit the 0x prefix",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="ethdigest",
        description="Ethereum digest CLI - Parse digests, compute Keccak-256 hashes and expand digest literals.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./ethdigest.json or ~/.config/ethdigest/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks for unexpected errors",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- parse command ---
    parse_parser = subparsers.add_parser(
        "parse",
        help="Validate and render a digest",
        description="Parse a 64-digit hex digest (0x prefix optional) and print it.",
    )
    parse_parser.add_argument("text", type=str, help="Digest hex string")
    _add_render_flags(parse_parser)
    parse_parser.set_defaults(func=parse.parse_cmd)

    # --- hash command ---
    hash_parser = subparsers.add_parser(
        "hash",
        help="Compute a Keccak-256 digest",
        description="Hash TEXT (UTF-8) or the contents of a file with Keccak-256.",
    )
    hash_parser.add_argument("text", type=str, nargs="?", default=None, help="Text to hash")
    hash_parser.add_argument(
        "--file", "-f",
        type=str,
        default=None,
        help="Hash this file instead ('-' for stdin)",
    )
    _add_render_flags(hash_parser)
    hash_parser.set_defaults(func=hashing.hash_cmd)

    # --- build command ---
    build_parser = subparsers.add_parser(
        "build",
        help="Expand digest/keccak literals in Python sources",
        description="Validate digest(\"...\") literals, hash keccak(\"...\") literals and rewrite them as constants.",
    )
    build_parser.add_argument("paths", nargs="+", help="Files or directories to process")
    build_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write expanded sources into this directory",
    )
    build_parser.add_argument(
        "--in-place",
        action="store_true",
        default=False,
        help="Rewrite source files in place",
    )
    build_parser.add_argument(
        "--check",
        action="store_true",
        default=False,
        help="Only validate literals; write nothing",
    )
    build_parser.add_argument(
        "--constructor",
        type=str,
        default=None,
        help="Expression used to construct expanded digests (default: from config or Digest)",
    )
    build_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON report",
    )
    build_parser.set_defaults(func=build.build_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="ethdigest.json",
        help="Path for config file (default: ethdigest.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (ETHDIGEST_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    # Default: show help
    print("Usage: ethdigest config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=literal errors)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Setup logging
    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if args.debug:
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
