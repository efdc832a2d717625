"""
Formatting Buffer
Fixed-size rendering of 32 digest bytes as 0x-prefixed hex text.

Digests are formatted as 0x-prefixed hex strings, so the buffer is always
exactly 66 ASCII characters long: the prefix followed by two characters per
byte, most-significant nibble first.
"""
from __future__ import annotations

from enum import Enum

from ethdigest.errors import InvalidSliceLength
from ethdigest.hex import DIGEST_LEN

LEN = 2 + DIGEST_LEN * 2


class Alphabet(Enum):
    """The alphabet to render hex digits with."""

    LOWER = "lower"
    UPPER = "upper"

    @property
    def lut(self) -> bytes:
        """The 16-entry nibble lookup table for this alphabet."""
        if self is Alphabet.UPPER:
            return b"0123456789ABCDEF"
        return b"0123456789abcdef"

    @classmethod
    def default(cls) -> "Alphabet":
        return cls.LOWER


class FormattingBuffer:
    """
    A formatted digest.

    The buffer is filled completely by ``fmt()`` before being wrapped, and is
    read-only afterwards.
    """

    __slots__ = ("_buf",)

    def __init__(self, buf: bytes) -> None:
        if len(buf) != LEN:
            raise ValueError(f"formatting buffer must be {LEN} bytes, got {len(buf)}")
        self._buf = buf

    def as_str(self) -> str:
        """Returns the buffered digest string, including the 0x prefix."""
        return self._buf.decode("ascii")

    def as_bytes_str(self) -> str:
        """Returns the hex digits of the digest without the 0x prefix."""
        return self._buf[2:].decode("ascii")

    def view(self) -> memoryview:
        """Zero-copy view over the full 66-byte buffer."""
        return memoryview(self._buf)

    def bytes_view(self) -> memoryview:
        """Zero-copy view over the 64 hex digits (no prefix)."""
        return memoryview(self._buf)[2:]

    def __len__(self) -> int:
        return LEN

    def __str__(self) -> str:
        return self.as_str()

    def __repr__(self) -> str:
        return f"FormattingBuffer({self.as_str()!r})"


def fmt(data: bytes | bytearray | memoryview, alphabet: Alphabet = Alphabet.LOWER) -> FormattingBuffer:
    """
    Format digest bytes into a fixed-size buffer.

    Args:
        data: Exactly 32 bytes
        alphabet: Letter case for hex digits (default: lowercase)

    Returns:
        FormattingBuffer holding ``0x`` + 64 hex digits

    Raises:
        InvalidSliceLength: If ``data`` is not 32 bytes long
    """
    if len(data) != DIGEST_LEN:
        raise InvalidSliceLength(len(data))

    buffer = bytearray(LEN)
    buffer[0] = 0x30  # '0'
    buffer[1] = 0x78  # 'x'

    lut = alphabet.lut
    for i, byte in enumerate(bytes(data)):
        j = i * 2 + 2
        buffer[j] = lut[byte >> 4]
        buffer[j + 1] = lut[byte & 0xF]

    return FormattingBuffer(bytes(buffer))


__all__ = ["LEN", "Alphabet", "FormattingBuffer", "fmt"]
