"""
CLI Build Command

Run the literal build phase: validate digest("...") literals, hash
keccak("...") literals and rewrite them into constants.

Usage:
    ethdigest build src/ --out build/src
    ethdigest build src/ --in-place
    ethdigest build src/ --check
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path

from ethdigest.literals.codegen import BuildReport, expand_tree
from ethdigest_cli.commands.parse import wants_json

logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_LITERAL_ERRORS = 2


def print_report_human(report: BuildReport, check: bool) -> None:
    """Print report in human-readable format."""
    for diagnostic in report.diagnostics:
        print(str(diagnostic), file=sys.stderr)

    if not report.ok:
        count = len(report.diagnostics)
        print(f"build failed: {count} literal error{'s' if count != 1 else ''}", file=sys.stderr)
        return

    if check:
        print(f"checked {len(report.files)} files, {report.literal_count} literals OK")
    else:
        print(
            f"expanded {report.literal_count} literals, "
            f"wrote {len(report.written)} files"
        )


def build_cmd(args: Namespace) -> int:
    """
    Execute the build command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0=success, 1=error, 2=literal errors)
    """
    config = args.cli_config
    out_dir = Path(args.out) if args.out else None

    if not args.check and out_dir is None and not args.in_place:
        print("Error: pass --out DIR, --in-place or --check", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    if out_dir is not None and args.in_place:
        print("Error: --out and --in-place are mutually exclusive", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        report = expand_tree(
            [Path(p) for p in args.paths],
            out_dir=out_dir,
            in_place=args.in_place,
            check=args.check,
            names=config.macro_names,
            constructor=args.constructor or config.constructor,
            include=config.include,
        )
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if wants_json(args):
        print(json.dumps(report.to_dict(), indent=2))
    else:
        print_report_human(report, args.check)

    return EXIT_SUCCESS if report.ok else EXIT_LITERAL_ERRORS
