"""
Hex Codec
Decoding of 64-digit hex strings into 32 raw digest bytes.

This module provides:
- decode: hex string (optionally 0x-prefixed) -> 32 bytes
- nibble: single hex character -> 4-bit value

Parsing Rules (Hard Contracts):
1. A leading "0x" (exactly those two lowercase ASCII characters) is stripped
2. Exactly 64 characters must remain, otherwise InvalidLength
3. Hex digits are case-insensitive
4. The first invalid character (left to right) is reported, with its index
   in the original input (the stripped prefix is counted)
"""
from __future__ import annotations

from ethdigest.errors import InvalidHexCharacter, InvalidLength

PREFIX = "0x"
DIGEST_LEN = 32
HEX_LEN = DIGEST_LEN * 2


def nibble(c: str) -> int | None:
    """
    Map one hex character to its 4-bit value.

    Returns:
        0-15 for ``0-9``, ``A-F`` and ``a-f``; None for anything else.
    """
    if "0" <= c <= "9":
        return ord(c) - 0x30
    if "A" <= c <= "F":
        return ord(c) - 0x41 + 0xA
    if "a" <= c <= "f":
        return ord(c) - 0x61 + 0xA
    return None


def decode(s: str) -> bytes:
    """
    Decode a hex string into digest bytes.

    Args:
        s: 64 hex digits, optionally prefixed with ``0x``

    Returns:
        The 32 decoded bytes

    Raises:
        InvalidLength: If the string (without prefix) is not 64 characters
        InvalidHexCharacter: On the first character that is not a hex digit
        TypeError: If ``s`` is not a string

    Example:
        >>> decode("0x" + "ee" * 32) == b"\\xee" * 32
        True
    """
    if not isinstance(s, str):
        raise TypeError(f"digest hex must be a str, got {type(s).__name__}")

    if s.startswith(PREFIX):
        s, offset = s[2:], 2
    else:
        offset = 0
    if len(s) != HEX_LEN:
        raise InvalidLength()

    out = bytearray(DIGEST_LEN)
    for i in range(DIGEST_LEN):
        j = i * 2
        hi = nibble(s[j])
        if hi is None:
            raise InvalidHexCharacter(s[j], j + offset)
        lo = nibble(s[j + 1])
        if lo is None:
            raise InvalidHexCharacter(s[j + 1], j + 1 + offset)
        out[i] = (hi << 4) | lo

    return bytes(out)


__all__ = ["PREFIX", "DIGEST_LEN", "HEX_LEN", "nibble", "decode"]
