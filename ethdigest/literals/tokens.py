"""
Literal Token Model
Token trees presented to the literal validator.

A token is one of:
- Ident: a name
- Punct: a single operator/punctuation character
- Literal: a literal as written in source (strings keep their quotes)
- Group: a delimited token sequence; NONE-delimited groups are transparent
  wrappers that the parser flattens

Every token carries the Span it was read from so diagnostics can point at
the exact source location.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


@dataclass(frozen=True)
class Span:
    """
    A source region. Lines are 1-based and columns 0-based, matching the
    positions reported by the ``tokenize`` module.
    """
    line: int
    column: int
    end_line: int
    end_column: int

    @classmethod
    def at(cls, line: int, column: int, width: int = 1) -> "Span":
        return cls(line, column, line, column + width)

    def to_dict(self) -> dict[str, Any]:
        return {
            "line": self.line,
            "column": self.column,
            "end_line": self.end_line,
            "end_column": self.end_column,
        }

    def __str__(self) -> str:
        return f"{self.line}:{self.column + 1}"


class Delimiter(Enum):
    PARENTHESIS = ("(", ")")
    BRACE = ("{", "}")
    BRACKET = ("[", "]")
    NONE = ("Ø", "")

    @property
    def open(self) -> str:
        return self.value[0]

    @property
    def close(self) -> str:
        return self.value[1]

    @classmethod
    def for_open(cls, char: str) -> "Delimiter | None":
        for delimiter in (cls.PARENTHESIS, cls.BRACE, cls.BRACKET):
            if delimiter.open == char:
                return delimiter
        return None


@dataclass(frozen=True)
class Ident:
    name: str
    span: Span

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Punct:
    char: str
    span: Span

    def __str__(self) -> str:
        return self.char


@dataclass(frozen=True)
class Literal:
    text: str
    span: Span

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class Group:
    delimiter: Delimiter
    tokens: tuple["Token", ...]
    span_open: Span
    span: Span = field(default=None)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.span is None:
            object.__setattr__(self, "span", self.span_open)

    def __str__(self) -> str:
        if self.delimiter is Delimiter.NONE:
            return " ".join(str(t) for t in self.tokens)
        inner = " ".join(str(t) for t in self.tokens)
        return f"{self.delimiter.open}{inner}{self.delimiter.close}"


Token = Union[Ident, Punct, Literal, Group]


__all__ = ["Span", "Delimiter", "Ident", "Punct", "Literal", "Group", "Token"]
