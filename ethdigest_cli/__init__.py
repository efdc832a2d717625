"""
ethdigest CLI

Command-line interface for digests, hashing and the literal build phase.

Usage:
    python -m ethdigest_cli parse 0xeeee...
    python -m ethdigest_cli hash "Hello Ethereum!"
    python -m ethdigest_cli build src/ --out build/
    python -m ethdigest_cli config --init
"""

__version__ = "0.2.0"
