"""
Literal Validator Unit Tests
Tests for ethdigest/literals/parser.py

Tests:
- STRING -> EOF state machine
- Transparent (NONE) group flattening
- Diagnostic messages and spans
- digest/keccak constant generation
"""
import pytest

from ethdigest import Digest
from ethdigest.errors import CompileError
from ethdigest.hasher import keccak256
from ethdigest.literals.parser import (
    DEFAULT_CONSTRUCTOR,
    DigestLiteral,
    ParserState,
    generate_digest,
    generate_keccak,
    parse_input,
    parse_string,
)
from ethdigest.literals.tokens import Delimiter, Group, Ident, Literal, Punct, Span

from fixtures import EE_HEX, HELLO_ETHEREUM


def lit(text: str, column: int = 0, line: int = 1) -> Literal:
    return Literal(text, Span.at(line, column, len(text)))


def none_group(*tokens) -> Group:
    return Group(Delimiter.NONE, tuple(tokens), Span.at(1, 0, 0))


class TestParseString:
    """Tests for string literal evaluation."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ('"abc"', "abc"),
            ("'abc'", "abc"),
            ('""', ""),
            ('"""abc"""', "abc"),
            ("'''a'b'''", "a'b"),
            (r'"a\nb"', "a\nb"),
            (r'"\x41\u00e9"', "A\u00e9"),
            (r"'it\'s'", "it's"),
        ],
    )
    def test_plain_strings(self, text, expected):
        assert parse_string(lit(text)) == expected

    @pytest.mark.parametrize("text", ["42", 'b"abc"', 'f"abc"', 'r"abc"', "0x12", '"a"b"'])
    def test_not_plain_strings(self, text):
        assert parse_string(lit(text)) is None


class TestParseInput:
    """Tests for the parser state machine."""

    def test_single_literal(self):
        token = lit('"hello"', column=7)
        result = parse_input([token])

        assert result.value == "hello"
        assert result.span == token.span

    def test_start_state(self):
        assert ParserState.start() is ParserState.STRING

    def test_transparent_group(self):
        token = lit('"hello"')

        assert parse_input([none_group(token)]).value == "hello"

    def test_nested_transparent_groups(self):
        token = lit('"deep"', column=3)
        result = parse_input([none_group(none_group(none_group(token)))])

        assert result.value == "deep"
        assert result.span == token.span

    def test_empty_transparent_group_after_literal(self):
        assert parse_input([lit('"x"'), none_group()]).value == "x"

    def test_empty_input(self):
        with pytest.raises(CompileError) as exc_info:
            parse_input([])

        assert exc_info.value.message == "expected string literal but found `<eof>`"
        assert exc_info.value.span is None

    def test_only_empty_transparent_group(self):
        with pytest.raises(CompileError, match="found `<eof>`"):
            parse_input([none_group()])

    def test_number_literal(self):
        token = lit("42", column=5)

        with pytest.raises(CompileError) as exc_info:
            parse_input([token])

        assert exc_info.value.message == "expected string literal but found `42`"
        assert exc_info.value.span == token.span

    def test_identifier(self):
        with pytest.raises(CompileError, match="expected string literal but found `value`"):
            parse_input([Ident("value", Span.at(1, 0, 5))])

    def test_bracketed_group(self):
        open_span = Span.at(1, 2)
        group = Group(Delimiter.PARENTHESIS, (lit('"x"', column=3),), open_span, Span(1, 2, 1, 7))

        with pytest.raises(CompileError) as exc_info:
            parse_input([group])

        assert exc_info.value.message == "expected string literal but found `(`"
        assert exc_info.value.span == open_span

    @pytest.mark.parametrize(
        "delimiter,char",
        [(Delimiter.BRACKET, "["), (Delimiter.BRACE, "{")],
    )
    def test_other_brackets(self, delimiter, char):
        group = Group(delimiter, (), Span.at(1, 0))

        with pytest.raises(CompileError, match=f"found `\\{char}`"):
            parse_input([group])

    def test_trailing_literal(self):
        second = lit('"b"', column=5)

        with pytest.raises(CompileError) as exc_info:
            parse_input([lit('"a"'), second])

        assert exc_info.value.message == 'expected <eof> but found `"b"`'
        assert exc_info.value.span == second.span

    def test_trailing_comma(self):
        comma = Punct(",", Span.at(1, 3))

        with pytest.raises(CompileError) as exc_info:
            parse_input([lit('"a"'), comma])

        assert exc_info.value.message == "expected <eof> but found `,`"
        assert exc_info.value.span == comma.span

    def test_second_literal_inside_transparent_group(self):
        with pytest.raises(CompileError, match="expected <eof>"):
            parse_input([none_group(lit('"a"'), lit('"b"'))])

    def test_bytes_literal_rejected(self):
        with pytest.raises(CompileError, match='found `b"abc"`'):
            parse_input([lit('b"abc"')])

    def test_error_model(self):
        token = lit("1", column=4)

        with pytest.raises(CompileError) as exc_info:
            parse_input([token])

        model = exc_info.value.to_error_model()
        assert model.code == "LITERAL_COMPILE_ERROR"
        assert model.details["span"] == token.span.to_dict()


class TestGenerateDigest:
    """Tests for digest literal validation."""

    @pytest.mark.parametrize("text", [EE_HEX, "EE" * 32, "0x" + "eE" * 32])
    def test_valid(self, text):
        result = generate_digest([lit(f'"{text}"')])

        assert result.value == b"\xee" * 32

    def test_invalid_length(self):
        token = lit('"not a valid hex digest literal!"', column=10)

        with pytest.raises(CompileError) as exc_info:
            generate_digest([token])

        assert exc_info.value.message == "invalid digest literal: invalid hex string length"
        assert exc_info.value.span == token.span

    def test_invalid_character(self):
        with pytest.raises(CompileError) as exc_info:
            generate_digest([lit('"0x' + "e" * 63 + 'z"')])

        assert exc_info.value.message == (
            "invalid digest literal: invalid character `z` at position 65"
        )

    def test_shape_errors_come_first(self):
        with pytest.raises(CompileError, match="expected string literal"):
            generate_digest([Ident("x", Span.at(1, 0))])


class TestGenerateKeccak:
    """Tests for keccak literal hashing."""

    def test_hello(self):
        result = generate_keccak([lit('"Hello Ethereum!"')])

        assert Digest(result.value) == Digest.parse(HELLO_ETHEREUM)

    @pytest.mark.parametrize("text", ['"not hex"', '""', '"0xzz"', "'single'"])
    def test_never_fails_on_content(self, text):
        assert len(generate_keccak([lit(text)]).value) == 32

    def test_transparent_group(self):
        result = generate_keccak([none_group(lit('"Hello Ethereum!"'))])

        assert Digest(result.value) == Digest.parse(HELLO_ETHEREUM)

    def test_escapes_match_runtime_string(self):
        result = generate_keccak([lit(r'"a\nb"')])

        assert Digest(result.value) == keccak256("a\nb")
        assert Digest(result.value) != keccak256(r"a\nb")

    def test_shape_errors(self):
        with pytest.raises(CompileError, match="expected <eof>"):
            generate_keccak([lit('"a"'), lit('"b"')])


class TestDigestLiteral:
    """Tests for constant rendering."""

    def test_to_source(self):
        source = DigestLiteral(bytes(range(32))).to_source("Digest")

        assert source.startswith('Digest(b"\\x00\\x01\\x02')
        assert source.endswith('\\x1f")')

    def test_default_constructor_needs_no_import(self, hello_digest):
        source = DigestLiteral(hello_digest.as_bytes()).to_source()

        assert source.startswith(DEFAULT_CONSTRUCTOR + "(b")
        assert eval(source, {}) == hello_digest

    def test_custom_constructor(self):
        source = DigestLiteral(bytes(32)).to_source("ethdigest.Digest")

        assert source.startswith("ethdigest.Digest(b")
