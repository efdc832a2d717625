"""
Keccak-256 Hashing
Streaming Keccak-256 hasher producing Digest values.

This module provides:
- Keccak: incremental hasher (update/finalize), also usable as a file-like
  sink for ``print()`` and ``write()``
- keccak256: one-shot hashing helper

The permutation itself comes from pycryptodome's ``Crypto.Hash.keccak``.
Note that this is the original Keccak padding used by Ethereum, not the
NIST SHA3-256 from ``hashlib``.

Determinism Notes:
- Chunking never affects the result: update(a); update(b) == update(a + b)
- A hasher is spent after finalize() and cannot be rewound
"""
from __future__ import annotations

from typing import Union

from Crypto.Hash import keccak as _keccak

from ethdigest.digest import Digest
from ethdigest.errors import HasherFinalizedError

HashInput = Union[bytes, bytearray, memoryview, str]


def _as_bytes(data: HashInput) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"cannot hash object of type {type(data).__name__}")


class Keccak:
    """
    A Keccak-256 hasher.

    Example:
        >>> hasher = Keccak()
        >>> hasher.update("Hello ")
        >>> hasher.update("Ethereum!")
        >>> str(hasher.finalize())
        '0x67e083fb08738b8d7984e349687fec5bf03224c2dad4906020dfab9a0e4ceeac'

    The hasher also implements ``write()``/``flush()``, so formatted text can
    be hashed directly:

        >>> hasher = Keccak()
        >>> print("The Answer is", 42, end="", file=hasher)
        >>> str(hasher.finalize())
        '0xf9d9f4d155c91f313f104a6d5d013959dfa819490df182a4bcda752ee9833d5d'

    Instances are private sequential accumulators and are not safe for
    concurrent updates without external locking.
    """

    __slots__ = ("_state",)

    def __init__(self) -> None:
        self._state = _keccak.new(digest_bits=256)

    @property
    def finalized(self) -> bool:
        return self._state is None

    def _live_state(self, operation: str):
        if self._state is None:
            raise HasherFinalizedError(operation)
        return self._state

    def update(self, data: HashInput) -> None:
        """Process new data and update the hasher."""
        self._live_state("update").update(_as_bytes(data))

    def write(self, data: HashInput) -> int:
        """File-like write; returns the number of characters or bytes consumed."""
        self._live_state("write").update(_as_bytes(data))
        return len(data)

    def flush(self) -> None:
        pass

    def finalize(self) -> Digest:
        """Retrieve the resulting digest, consuming the hasher."""
        state = self._live_state("finalize")
        self._state = None
        return Digest(state.digest())

    def __repr__(self) -> str:
        return "Keccak(finalized)" if self.finalized else "Keccak()"


def keccak256(data: HashInput) -> Digest:
    """
    Compute the Keccak-256 digest of some input in one call.

    Args:
        data: Bytes-like input, or text (hashed as UTF-8)

    Returns:
        The resulting Digest
    """
    hasher = Keccak()
    hasher.update(data)
    return hasher.finalize()


__all__ = ["HashInput", "Keccak", "keccak256"]
