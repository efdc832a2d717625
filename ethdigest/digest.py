"""
Digest Value Type
An Ethereum 32-byte digest.

Display Rules (Hard Contracts):
- str(d) / repr(d): always 0x-prefixed, lowercase
- format(d, "x") / format(d, "X"): no prefix
- format(d, "#x") / format(d, "#X"): 0x-prefixed
The default rendering is always prefixed while explicit-case renderings are
prefixed only in alternate mode. Existing callers rely on this.
"""
from __future__ import annotations

import re
from functools import total_ordering
from typing import TYPE_CHECKING, Any, Iterator

from ethdigest import buffer
from ethdigest.buffer import Alphabet
from ethdigest.hex import DIGEST_LEN, decode
from ethdigest.errors import InvalidSliceLength

if TYPE_CHECKING:
    from ethdigest.hasher import HashInput

_BYTES_LIKE = (bytes, bytearray, memoryview)

# [[fill]align][sign][z][#][0][width][grouping][.precision][type]
_FORMAT_SPEC = re.compile(r"^(?P<head>.*?)(?P<alt>#?)(?P<tail>0?\d*)(?P<type>[xXs]?)$", re.S)


@total_ordering
class Digest:
    """
    A 32-byte digest.

    Equality and ordering are byte-wise lexicographic and hashing is derived
    from the byte content, so digests work as dict keys and sort naturally.

    Example:
        >>> d = Digest.parse("0x" + "ee" * 32)
        >>> d == b"\\xee" * 32
        True
        >>> format(d, "X")[:4]
        'EEEE'
    """

    __slots__ = ("_bytes",)

    def __init__(self, data: bytes | bytearray | memoryview | None = None) -> None:
        if data is None:
            self._bytes = bytearray(DIGEST_LEN)
            return
        if not isinstance(data, _BYTES_LIKE):
            raise TypeError(f"Digest requires a bytes-like value, got {type(data).__name__}")
        if len(data) != DIGEST_LEN:
            raise InvalidSliceLength(len(data))
        self._bytes = bytearray(data)

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def zero(cls) -> "Digest":
        """The all-zero digest."""
        return cls()

    @classmethod
    def from_slice(cls, data: bytes | bytearray | memoryview) -> "Digest":
        """
        Create a digest from a buffer slice.

        Raises:
            InvalidSliceLength: If the slice is not exactly 32 bytes; the
                input is never truncated or padded
        """
        return cls(data)

    @classmethod
    def parse(cls, s: str) -> "Digest":
        """
        Parse a digest from hex, with or without the 0x prefix.

        Raises:
            InvalidLength: Wrong number of hex digits
            InvalidHexCharacter: Non-hex character (with its position)
        """
        return cls(decode(s))

    from_hex = parse

    @classmethod
    def of(cls, data: "HashInput") -> "Digest":
        """
        Create a digest by Keccak-256 hashing some input.

        Example:
            >>> str(Digest.of("Hello Ethereum!"))
            '0x67e083fb08738b8d7984e349687fec5bf03224c2dad4906020dfab9a0e4ceeac'
        """
        from ethdigest.hasher import keccak256

        return keccak256(data)

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    def as_bytes(self) -> bytes:
        return bytes(self._bytes)

    def as_array(self) -> tuple[int, ...]:
        return tuple(self._bytes)

    def as_mut(self) -> memoryview:
        """
        Writable fixed-length view of the digest bytes.

        Mutating a digest that is already used as a dict key or set member
        is not supported.
        """
        return memoryview(self._bytes)

    def __bytes__(self) -> bytes:
        return bytes(self._bytes)

    def __len__(self) -> int:
        return DIGEST_LEN

    def __getitem__(self, index):
        if isinstance(index, slice):
            return bytes(self._bytes[index])
        return self._bytes[index]

    def __iter__(self) -> Iterator[int]:
        return iter(bytes(self._bytes))

    # -------------------------------------------------------------------------
    # Formatting
    # -------------------------------------------------------------------------

    def to_hex(self, alphabet: Alphabet = Alphabet.LOWER, prefix: bool = True) -> str:
        """Render with an explicit alphabet and prefix choice."""
        buf = buffer.fmt(self._bytes, alphabet)
        return buf.as_str() if prefix else buf.as_bytes_str()

    def __str__(self) -> str:
        return buffer.fmt(self._bytes, Alphabet.default()).as_str()

    def __repr__(self) -> str:
        return f"Digest({self})"

    def __format__(self, spec: str) -> str:
        m = _FORMAT_SPEC.match(spec)
        kind = m.group("type")
        if kind in ("x", "X"):
            alphabet = Alphabet.UPPER if kind == "X" else Alphabet.LOWER
            text = self.to_hex(alphabet, prefix=bool(m.group("alt")))
            padding = m.group("head") + m.group("tail")
        else:
            # always prefixed, with or without "#"
            text = str(self)
            padding = m.group("head") + m.group("tail")
        return format(text, padding)

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Digest):
            return self._bytes == other._bytes
        if isinstance(other, _BYTES_LIKE):
            return self._bytes == other
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, Digest):
            return self._bytes < other._bytes
        return NotImplemented

    def __hash__(self) -> int:
        return hash(bytes(self._bytes))

    def __copy__(self) -> "Digest":
        return Digest(self._bytes)

    def __deepcopy__(self, memo: dict[int, Any]) -> "Digest":
        return Digest(self._bytes)

    def __reduce__(self):
        return (Digest, (bytes(self._bytes),))

    # -------------------------------------------------------------------------
    # Pydantic integration
    # -------------------------------------------------------------------------

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any):
        from ethdigest.serde import digest_core_schema

        return digest_core_schema(cls)

    @classmethod
    def __get_pydantic_json_schema__(cls, core_schema: Any, handler: Any):
        from ethdigest.serde import digest_json_schema

        return digest_json_schema()


def digest(literal: str) -> Digest:
    """
    Digest literal.

    ``ethdigest build`` replaces calls with precomputed constants and fails
    the build on invalid hex. Unexpanded calls parse at runtime.
    """
    return Digest.parse(literal)


def keccak(literal: str) -> Digest:
    """
    Hash literal.

    ``ethdigest build`` replaces calls with the precomputed Keccak-256 of the
    literal text. Unexpanded calls hash at runtime.
    """
    return Digest.of(literal)


__all__ = ["Digest", "digest", "keccak"]
