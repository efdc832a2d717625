"""
Build-time digest literals.

- tokens: token trees with source spans
- parser: single-string-literal validation and constant generation
- codegen: source-to-source build phase over Python files

Usage:
    from ethdigest.literals import expand_source

    result = expand_source('X = digest("0x' + 'ee' * 32 + '")')
    assert result.ok
"""
from .tokens import Span, Delimiter, Ident, Punct, Literal, Group, Token
from .parser import (
    DEFAULT_CONSTRUCTOR,
    LiteralInput,
    ParserState,
    DigestLiteral,
    parse_input,
    generate_digest,
    generate_keccak,
)
from .codegen import (
    Diagnostic,
    ExpansionResult,
    BuildReport,
    scan_source,
    expand_source,
    expand_file,
    expand_tree,
)

__all__ = [
    # Tokens
    "Span",
    "Delimiter",
    "Ident",
    "Punct",
    "Literal",
    "Group",
    "Token",
    # Validation
    "DEFAULT_CONSTRUCTOR",
    "LiteralInput",
    "ParserState",
    "DigestLiteral",
    "parse_input",
    "generate_digest",
    "generate_keccak",
    # Build phase
    "Diagnostic",
    "ExpansionResult",
    "BuildReport",
    "scan_source",
    "expand_source",
    "expand_file",
    "expand_tree",
]
