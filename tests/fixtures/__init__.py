"""
Shared test fixtures and known values for ethdigest tests.
"""

from .digests import (
    ANSWER_42,
    EE_HEX,
    EMPTY_KECCAK,
    HELLO_ETHEREUM,
    hex_with_char_at,
    write_tree,
)

__all__ = [
    "ANSWER_42",
    "EE_HEX",
    "EMPTY_KECCAK",
    "HELLO_ETHEREUM",
    "hex_with_char_at",
    "write_tree",
]
