"""
Literal Validator
Turns the argument tokens of a ``digest(...)`` or ``keccak(...)`` literal
into a constant 32-byte value, or a CompileError anchored at the literal.

Grammar (Hard Contract):
    input := <string literal> <eof>

Parser states: STRING -> EOF. Transparent (NONE-delimited) groups are
flattened in every state; any other token out of place is fatal.

Rules:
1. digest literal: the string content is hex-decoded (validated, not hashed)
2. keccak literal: the string content is hashed (never fails on content)
3. A failed literal never yields a partial constant
"""
from __future__ import annotations

import ast
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from ethdigest.errors import CompileError, ParseDigestError
from ethdigest.hasher import keccak256
from ethdigest.hex import decode
from ethdigest.literals.tokens import Delimiter, Group, Literal, Span, Token

logger = logging.getLogger(__name__)

# Resolves without any import at the call site.
DEFAULT_CONSTRUCTOR = '__import__("ethdigest").Digest'

_QUOTES = ('"""', "'''", '"', "'")


@dataclass
class LiteralInput:
    """The string content of a literal and where it was written."""
    value: str
    span: Span | None


class ParserState(Enum):
    STRING = "string literal"
    EOF = "<eof>"

    @classmethod
    def start(cls) -> "ParserState":
        return cls.STRING

    def input(self, tokens: Iterable[Token], result: LiteralInput) -> "ParserState":
        state = self
        for token in tokens:
            state = state.next(token, result)
        return state

    def next(self, token: Token, result: LiteralInput) -> "ParserState":
        # Literals passed through other expansions may arrive wrapped in a
        # zero-width group.
        if isinstance(token, Group) and token.delimiter is Delimiter.NONE:
            return self.input(token.tokens, result)

        if self is ParserState.STRING and isinstance(token, Literal):
            value = parse_string(token)
            if value is None:
                raise self.unexpected(token)
            result.value = value
            result.span = token.span
            return ParserState.EOF

        raise self.unexpected(token)

    def end(self) -> None:
        if self is not ParserState.EOF:
            raise self.unexpected(None)

    def unexpected(self, token: Token | None) -> CompileError:
        if isinstance(token, Group):
            value, span = token.delimiter.open, token.span_open
        elif token is not None:
            value, span = str(token), token.span
        else:
            value, span = "<eof>", None
        return CompileError(f"expected {self.value} but found `{value}`", span)


def parse_string(literal: Literal) -> str | None:
    """
    Evaluate a plain string literal.

    Returns None for anything that is not an unprefixed string literal
    (numbers, bytes/f/raw strings). Escape sequences are interpreted exactly
    as the interpreter would, so an expanded literal hashes the same text as
    the runtime ``keccak()`` call it replaces.
    """
    text = literal.text
    for quote in _QUOTES:
        if len(text) >= 2 * len(quote) and text.startswith(quote) and text.endswith(quote):
            break
    else:
        return None
    try:
        value = ast.literal_eval(text)
    except (SyntaxError, ValueError):
        return None
    return value if isinstance(value, str) else None


def parse_input(tokens: Iterable[Token]) -> LiteralInput:
    """
    Extract the single string literal from a token sequence.

    Raises:
        CompileError: If the input is not exactly one string literal
    """
    result = LiteralInput(value="", span=None)
    ParserState.start().input(tokens, result).end()
    return result


@dataclass(frozen=True)
class DigestLiteral:
    """A validated digest constant."""
    value: bytes
    span: Span | None = None

    def to_source(self, constructor: str = DEFAULT_CONSTRUCTOR) -> str:
        """
        Render the constant as a Python expression.

        Example:
            >>> DigestLiteral(bytes(32)).to_source("Digest")[:17]
            'Digest(b"\\\\x00\\\\x00'
        """
        escaped = "".join(f"\\x{byte:02x}" for byte in self.value)
        return f'{constructor}(b"{escaped}")'


def generate_digest(tokens: Iterable[Token]) -> DigestLiteral:
    """
    Validate a digest literal.

    Raises:
        CompileError: On a malformed invocation or invalid hex content
    """
    literal = parse_input(tokens)
    try:
        value = decode(literal.value)
    except ParseDigestError as e:
        raise CompileError(f"invalid digest literal: {e.message}", literal.span) from e
    logger.debug("Validated digest literal at %s", literal.span)
    return DigestLiteral(value, literal.span)


def generate_keccak(tokens: Iterable[Token]) -> DigestLiteral:
    """
    Hash a keccak literal.

    Raises:
        CompileError: On a malformed invocation only
    """
    literal = parse_input(tokens)
    value = keccak256(literal.value).as_bytes()
    logger.debug("Hashed keccak literal at %s", literal.span)
    return DigestLiteral(value, literal.span)


__all__ = [
    "DEFAULT_CONSTRUCTOR",
    "LiteralInput",
    "ParserState",
    "parse_string",
    "parse_input",
    "DigestLiteral",
    "generate_digest",
    "generate_keccak",
]
