"""
CLI command modules.
"""

from ethdigest_cli.commands import build, hashing, parse

__all__ = ["build", "hashing", "parse"]
