"""
ethdigest - Error Taxonomy
File: errors.py

Purpose: Standard error taxonomy for digest parsing, hashing and literal
expansion. Defines both Pydantic models for structured error reporting
and Python exceptions for control flow.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from ethdigest.literals.tokens import Span


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Hex parsing
    INVALID_LENGTH = "INVALID_LENGTH"
    INVALID_HEX_CHARACTER = "INVALID_HEX_CHARACTER"
    MISSING_PREFIX = "MISSING_PREFIX"

    # Byte conversions
    INVALID_SLICE_LENGTH = "INVALID_SLICE_LENGTH"

    # Hashing
    HASHER_FINALIZED = "HASHER_FINALIZED"

    # Build-time literals
    LITERAL_COMPILE_ERROR = "LITERAL_COMPILE_ERROR"


# =============================================================================
# Pydantic Error Model (Structured Communication)
# =============================================================================

class DigestError(BaseModel):
    """
    Structured error model, used where errors are reported rather than raised
    (for example the CLI's JSON output).
    """

    model_config = ConfigDict(extra="forbid")

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.INVALID_LENGTH],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )

    def to_exception(self) -> "DigestException":
        """Convert this error model to a raised exception."""
        return DigestException(
            message=self.message,
            code=self.code,
            details=self.details,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class DigestException(Exception):
    """
    Base exception for all ethdigest errors.

    Carries structured error information and can be converted to a
    DigestError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "DIGEST_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_error_model(self) -> DigestError:
        """Convert this exception to a DigestError model."""
        return DigestError(
            code=self.code,
            message=self.message,
            details=self.details,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class ParseDigestError(DigestException, ValueError):
    """Raised when a string cannot be parsed as a digest."""


class InvalidLength(ParseDigestError):
    """The hex string does not have the correct length."""

    def __init__(self) -> None:
        super().__init__(
            message="invalid hex string length",
            code=ErrorCodes.INVALID_LENGTH,
        )

    def __eq__(self, other: object) -> bool:
        return isinstance(other, InvalidLength)

    __hash__ = DigestException.__hash__


class InvalidHexCharacter(ParseDigestError):
    """An invalid character was found at ``index`` of the original input."""

    def __init__(self, character: str, index: int) -> None:
        super().__init__(
            message=f"invalid character `{character}` at position {index}",
            code=ErrorCodes.INVALID_HEX_CHARACTER,
            details={"character": character, "index": index},
        )
        self.character = character
        self.index = index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InvalidHexCharacter):
            return NotImplemented
        return (self.character, self.index) == (other.character, other.index)

    __hash__ = DigestException.__hash__


class MissingPrefixError(ParseDigestError):
    """A serialized digest string did not start with ``0x``."""

    def __init__(self) -> None:
        super().__init__(
            message="missing `0x`-prefix",
            code=ErrorCodes.MISSING_PREFIX,
        )


class InvalidSliceLength(DigestException, ValueError):
    """A byte buffer of the wrong length was converted to a digest."""

    def __init__(self, length: int, expected: int = 32) -> None:
        super().__init__(
            message=(
                f"could not convert slice to digest: "
                f"expected {expected} bytes, got {length}"
            ),
            code=ErrorCodes.INVALID_SLICE_LENGTH,
            details={"length": length, "expected": expected},
        )
        self.length = length
        self.expected = expected


class HasherFinalizedError(DigestException, RuntimeError):
    """A Keccak hasher was used after ``finalize()`` consumed it."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            message=f"cannot {operation}: hasher has already been finalized",
            code=ErrorCodes.HASHER_FINALIZED,
            details={"operation": operation},
        )


class CompileError(DigestException):
    """
    A build-time literal diagnostic.

    ``span`` is the source location the diagnostic is anchored at, or None
    when the input simply ended where a token was expected.
    """

    def __init__(self, message: str, span: "Span | None" = None) -> None:
        details: dict[str, Any] = {}
        if span is not None:
            details["span"] = span.to_dict()
        super().__init__(
            message=message,
            code=ErrorCodes.LITERAL_COMPILE_ERROR,
            details=details,
        )
        self.span = span


__all__ = [
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
