"""
Ethereum 32-byte digests and Keccak-256 hashing.

This package provides:
- Digest: the 32-byte value type (parsing, formatting, ordering)
- Keccak / keccak256: streaming and one-shot Keccak-256 hashing
- digest / keccak: literals expanded ahead of time by ``ethdigest build``
- pydantic integration: Digest fields (de)serialize as 0x-prefixed strings

Usage:
    from ethdigest import Digest, Keccak

    d = Digest.parse("0x67e083fb08738b8d7984e349687fec5bf03224c2dad4906020dfab9a0e4ceeac")
    assert d == Digest.of("Hello Ethereum!")
"""

__version__ = "0.2.0"

from .buffer import Alphabet, FormattingBuffer
from .digest import Digest, digest, keccak
from .errors import (
    CompileError,
    DigestError,
    DigestException,
    ErrorCodes,
    HasherFinalizedError,
    InvalidHexCharacter,
    InvalidLength,
    InvalidSliceLength,
    MissingPrefixError,
    ParseDigestError,
)
from .hasher import Keccak, keccak256
from .serde import DigestStr

__all__ = [
    "Alphabet",
    "FormattingBuffer",
    "Digest",
    "digest",
    "keccak",
    "Keccak",
    "keccak256",
    "DigestStr",
    # Errors
    "ErrorCodes",
    "DigestError",
    "DigestException",
    "ParseDigestError",
    "InvalidLength",
    "InvalidHexCharacter",
    "MissingPrefixError",
    "InvalidSliceLength",
    "HasherFinalizedError",
    "CompileError",
]
