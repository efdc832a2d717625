"""
Literal Build Phase
Source-to-source expansion of digest and keccak literals.

Scans Python source for ``digest("...")`` and ``keccak("...")`` calls (bare
or qualified as ``ethdigest.digest(...)``), validates or hashes each literal
ahead of time, and rewrites the call into a constant construction that
resolves in any scope:

    digest("0xee...ee")         ->  __import__("ethdigest").Digest(b"\\xee...")
    ethdigest.keccak("Hello")   ->  ethdigest.Digest(b"\\x06\\xb3...")

Build Rules (Hard Contracts):
1. Every invalid literal becomes a Diagnostic anchored at its source span
2. A source with any diagnostic produces no rewritten output
3. A tree with any diagnostic writes no files at all
4. Attribute calls on other objects (``h.digest()``) and definitions
   (``def digest(...)``) are never touched
5. ``digest`` and ``keccak`` (or the configured call names) are reserved:
   a bare call is a literal unless the module rebinds the name (parameter,
   assignment, def, class or a non-ethdigest import), in which case bare
   calls to it are left alone
"""
from __future__ import annotations

import ast
import io
import logging
import shutil
import tokenize
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Iterable, Sequence

from ethdigest.errors import CompileError
from ethdigest.literals.parser import (
    DEFAULT_CONSTRUCTOR,
    DigestLiteral,
    generate_digest,
    generate_keccak,
)
from ethdigest.literals.tokens import Delimiter, Group, Ident, Literal, Punct, Span, Token

logger = logging.getLogger(__name__)

DEFAULT_NAMES: dict[str, str] = {"digest": "digest", "keccak": "keccak"}
QUALIFIER = "ethdigest"
QUALIFIED_CONSTRUCTOR = f"{QUALIFIER}.Digest"

GENERATORS: dict[str, Callable[[Iterable[Token]], DigestLiteral]] = {
    "digest": generate_digest,
    "keccak": generate_keccak,
}

_SKIP = {tokenize.NL, tokenize.NEWLINE, tokenize.COMMENT, tokenize.INDENT, tokenize.DEDENT}
_CLOSERS = {")": Delimiter.PARENTHESIS, "]": Delimiter.BRACKET, "}": Delimiter.BRACE}
_NOT_CALLS = {"def", "class", "import"}


def _span(tok: tokenize.TokenInfo) -> Span:
    return Span(tok.start[0], tok.start[1], tok.end[0], tok.end[1])


def _is_op(tok: tokenize.TokenInfo, char: str) -> bool:
    return tok.type == tokenize.OP and tok.string == char


# =============================================================================
# Results
# =============================================================================

@dataclass(frozen=True)
class Diagnostic:
    """A build error for one literal."""
    filename: str
    span: Span | None
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "filename": self.filename,
            "span": self.span.to_dict() if self.span else None,
            "message": self.message,
        }

    def __str__(self) -> str:
        location = f"{self.filename}:{self.span}" if self.span else self.filename
        return f"{location}: error: {self.message}"


@dataclass
class LiteralInvocation:
    """A ``digest(...)``/``keccak(...)`` call found in source."""
    kind: str
    tokens: tuple[Token, ...]
    span: Span
    qualified: bool = False


@dataclass(frozen=True)
class ExpandedLiteral:
    kind: str
    span: Span
    value: DigestLiteral
    qualified: bool = False


@dataclass
class ExpansionResult:
    """
    Outcome of expanding one source text.

    ``source`` is None whenever ``diagnostics`` is non-empty.
    """
    source: str | None
    literals: list[ExpandedLiteral] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.diagnostics


# =============================================================================
# Scanning
# =============================================================================

def _lines(source: str) -> list[str]:
    # Same line splitting as the readline fed to tokenize.
    return io.StringIO(source).readlines()


def _source_text(lines: list[str], start: tuple[int, int], end: tuple[int, int]) -> str:
    if start[0] == end[0]:
        return lines[start[0] - 1][start[1]:end[1]]
    parts = [lines[start[0] - 1][start[1]:]]
    parts.extend(lines[start[0]:end[0] - 1])
    parts.append(lines[end[0] - 1][:end[1]])
    return "".join(parts)


class _TokenTreeBuilder:
    """Builds token trees from a flat ``tokenize`` stream."""

    def __init__(self, toks: list[tokenize.TokenInfo], lines: list[str]) -> None:
        self.toks = toks
        self.lines = lines

    def group(self, index: int) -> tuple[Group, int]:
        """
        Build the group opened at ``toks[index]``.

        Returns:
            The group and the index just past its closing delimiter
        """
        opener = self.toks[index]
        delimiter = Delimiter.for_open(opener.string)
        children: list[Token] = []
        i = index + 1
        while i < len(self.toks):
            tok = self.toks[i]
            if tok.type in _SKIP:
                i += 1
            elif tok.type == tokenize.ENDMARKER:
                break
            elif tok.type == tokenize.OP and Delimiter.for_open(tok.string):
                child, i = self.group(i)
                children.append(child)
            elif tok.type == tokenize.OP and tok.string in _CLOSERS:
                if _CLOSERS[tok.string] is not delimiter:
                    raise CompileError(f"mismatched closing delimiter `{tok.string}`", _span(tok))
                span = Span(opener.start[0], opener.start[1], tok.end[0], tok.end[1])
                return Group(delimiter, tuple(children), _span(opener), span), i + 1
            elif tokenize.tok_name[tok.type] in ("FSTRING_START", "TSTRING_START"):
                literal, i = self.interpolated_string(i)
                children.append(literal)
            elif tok.type == tokenize.NAME:
                children.append(Ident(tok.string, _span(tok)))
                i += 1
            elif tok.type in (tokenize.STRING, tokenize.NUMBER):
                children.append(Literal(tok.string, _span(tok)))
                i += 1
            else:
                line, col = tok.start
                children.extend(Punct(c, Span.at(line, col + k)) for k, c in enumerate(tok.string))
                i += 1
        raise CompileError(f"unclosed delimiter `{opener.string}`", _span(opener))

    def interpolated_string(self, index: int) -> tuple[Literal, int]:
        start = self.toks[index]
        depth = 0
        i = index
        while i < len(self.toks):
            name = tokenize.tok_name[self.toks[i].type]
            if name.endswith("STRING_START"):
                depth += 1
            elif name.endswith("STRING_END"):
                depth -= 1
                if depth == 0:
                    end = self.toks[i]
                    text = _source_text(self.lines, start.start, end.end)
                    return Literal(text, Span(*start.start, *end.end)), i + 1
            i += 1
        raise CompileError("unterminated string", _span(start))


def rebound_names(source: str, names: dict[str, str]) -> set[str]:
    """
    Call names the module binds to something other than the ethdigest helper.

    ``from ethdigest import digest`` (or ``... import digest as h256`` when
    ``h256`` maps to the digest kind) is the helper itself; any other
    binding (parameter, assignment, def, class, import, loop or ``except``
    target) shadows it somewhere in the module.

    Raises:
        SyntaxError: If the source does not parse
    """
    bound: set[str] = set()
    for node in ast.walk(ast.parse(source)):
        if isinstance(node, ast.Name) and isinstance(node.ctx, (ast.Store, ast.Del)):
            bound.add(node.id)
        elif isinstance(node, ast.arg):
            bound.add(node.arg)
        elif isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef, ast.ClassDef)):
            bound.add(node.name)
        elif isinstance(node, ast.ExceptHandler) and node.name:
            bound.add(node.name)
        elif isinstance(node, ast.Import):
            bound.update((alias.asname or alias.name).split(".")[0] for alias in node.names)
        elif isinstance(node, ast.ImportFrom):
            for alias in node.names:
                local = alias.asname or alias.name
                if node.module != QUALIFIER or names.get(local) != alias.name:
                    bound.add(local)
    return bound & set(names)


def scan_source(source: str, names: dict[str, str] | None = None) -> list[LiteralInvocation]:
    """
    Find literal invocations in Python source.

    Bare calls to a name the module rebinds are left alone; qualified
    ``ethdigest.<name>(...)`` calls are always literals.

    Args:
        source: Python source text
        names: Call name -> literal kind ("digest" or "keccak")

    Returns:
        Invocations in source order

    Raises:
        CompileError: If an invocation's delimiters are malformed
        tokenize.TokenError: If the source cannot be tokenized
        SyntaxError: If the source does not parse
    """
    names = names or DEFAULT_NAMES
    lines = _lines(source)
    toks = list(tokenize.generate_tokens(io.StringIO(source).readline))
    shadowed = rebound_names(source, names)
    builder = _TokenTreeBuilder(toks, lines)
    significant = [i for i, t in enumerate(toks) if t.type not in _SKIP]

    found: list[LiteralInvocation] = []
    resume = 0
    for pos, i in enumerate(significant):
        tok = toks[i]
        if i < resume or tok.type != tokenize.NAME or tok.string not in names:
            continue
        if pos + 1 >= len(significant) or not _is_op(toks[significant[pos + 1]], "("):
            continue

        start = tok
        prev = toks[significant[pos - 1]] if pos >= 1 else None
        qualified = prev is not None and _is_op(prev, ".")
        if qualified:
            qualifier = toks[significant[pos - 2]] if pos >= 2 else None
            before = toks[significant[pos - 3]] if pos >= 3 else None
            if qualifier is None or qualifier.string != QUALIFIER:
                continue
            if before is not None and _is_op(before, "."):
                continue
            start = qualifier
        elif prev is not None and prev.type == tokenize.NAME and prev.string in _NOT_CALLS:
            continue
        elif tok.string in shadowed:
            logger.debug("Skipping call to rebound name %r at %s", tok.string, _span(tok))
            continue

        group, resume = builder.group(significant[pos + 1])
        span = Span(start.start[0], start.start[1], group.span.end_line, group.span.end_column)
        found.append(LiteralInvocation(names[tok.string], group.tokens, span, qualified))

    return found


# =============================================================================
# Expansion
# =============================================================================

def _offsets(source: str) -> list[int]:
    offsets = [0]
    for line in _lines(source):
        offsets.append(offsets[-1] + len(line))
    return offsets


def expand_source(
    source: str,
    filename: str = "<string>",
    names: dict[str, str] | None = None,
    constructor: str = DEFAULT_CONSTRUCTOR,
) -> ExpansionResult:
    """
    Validate and expand every literal in a source text.

    Args:
        source: Python source text
        filename: Name used in diagnostics
        names: Call name -> literal kind mapping
        constructor: Expression used to construct the Digest constant

    Returns:
        ExpansionResult with the rewritten source, or diagnostics
    """
    try:
        invocations = scan_source(source, names)
    except CompileError as e:
        diagnostic = Diagnostic(filename, e.span, e.message)
        logger.warning("%s", diagnostic)
        return ExpansionResult(None, diagnostics=[diagnostic])
    except tokenize.TokenError as e:
        diagnostic = Diagnostic(filename, None, f"could not tokenize source: {e.args[0] if e.args else e}")
        logger.warning("%s", diagnostic)
        return ExpansionResult(None, diagnostics=[diagnostic])
    except SyntaxError as e:
        span = Span.at(e.lineno, (e.offset or 1) - 1) if e.lineno else None
        diagnostic = Diagnostic(filename, span, f"could not parse source: {e.msg}")
        logger.warning("%s", diagnostic)
        return ExpansionResult(None, diagnostics=[diagnostic])

    result = ExpansionResult(None)
    for invocation in invocations:
        try:
            value = GENERATORS[invocation.kind](invocation.tokens)
        except CompileError as e:
            diagnostic = Diagnostic(filename, e.span or invocation.span, e.message)
            logger.warning("%s", diagnostic)
            result.diagnostics.append(diagnostic)
            continue
        logger.debug("Expanded %s literal at %s:%s", invocation.kind, filename, invocation.span)
        result.literals.append(
            ExpandedLiteral(invocation.kind, invocation.span, value, invocation.qualified)
        )

    if result.diagnostics:
        return result

    offsets = _offsets(source)
    rewritten = source
    for literal in reversed(result.literals):
        begin = offsets[literal.span.line - 1] + literal.span.column
        end = offsets[literal.span.end_line - 1] + literal.span.end_column
        # ethdigest.digest(...) already has the package in scope
        expression = (
            QUALIFIED_CONSTRUCTOR
            if literal.qualified and constructor == DEFAULT_CONSTRUCTOR
            else constructor
        )
        rewritten = rewritten[:begin] + literal.value.to_source(expression) + rewritten[end:]
    result.source = rewritten
    return result


@dataclass
class FileReport:
    path: Path
    output: Path | None
    result: ExpansionResult


@dataclass
class BuildReport:
    """Outcome of a build over one or more files."""
    files: list[FileReport] = field(default_factory=list)
    written: list[Path] = field(default_factory=list)

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return [d for f in self.files for d in f.result.diagnostics]

    @property
    def literal_count(self) -> int:
        return sum(len(f.result.literals) for f in self.files)

    @property
    def ok(self) -> bool:
        return not self.diagnostics

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "files": len(self.files),
            "literals": self.literal_count,
            "written": [str(p) for p in self.written],
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }


def collect_files(paths: Sequence[Path], include: str = "*.py") -> list[tuple[Path, Path]]:
    """
    Expand paths into (file, path relative to its root) pairs.

    Directories are walked recursively for files matching ``include``.
    """
    files: list[tuple[Path, Path]] = []
    for root in paths:
        if root.is_dir():
            for path in sorted(root.rglob(include)):
                if path.is_file():
                    files.append((path, path.relative_to(root)))
        elif root.is_file():
            files.append((root, Path(root.name)))
        else:
            raise FileNotFoundError(f"No such file or directory: {root}")
    return files


def _expand_path(path: Path, names: dict[str, str] | None, constructor: str) -> ExpansionResult:
    logger.debug("Scanning %s", path)
    return expand_source(path.read_text(encoding="utf-8"), str(path), names, constructor)


def expand_file(
    path: Path,
    output: Path | None = None,
    names: dict[str, str] | None = None,
    constructor: str = DEFAULT_CONSTRUCTOR,
) -> FileReport:
    """
    Expand a single file.

    The rewritten source is written to ``output`` (which may be ``path``
    itself) only when the file has no diagnostics. With no ``output`` the
    file is just validated.
    """
    result = _expand_path(path, names, constructor)
    if output is not None and result.ok:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(result.source, encoding="utf-8")
        logger.info("Wrote %s (%d literals)", output, len(result.literals))
    return FileReport(path, output, result)


def expand_tree(
    paths: Sequence[Path],
    out_dir: Path | None = None,
    in_place: bool = False,
    check: bool = False,
    names: dict[str, str] | None = None,
    constructor: str = DEFAULT_CONSTRUCTOR,
    include: str = "*.py",
) -> BuildReport:
    """
    Run the literal build phase over files and directories.

    Args:
        paths: Files or directories to process
        out_dir: Mirror expanded files into this directory
        in_place: Overwrite files that contain literals
        check: Only validate; never write
        names: Call name -> literal kind mapping
        constructor: Expression used to construct the Digest constant
        include: Glob for files inside directories

    Returns:
        BuildReport; nothing is written if any diagnostic was produced
    """
    if not check and out_dir is None and not in_place:
        raise ValueError("expand_tree needs out_dir, in_place or check")

    report = BuildReport()
    for path, relative in collect_files(paths, include):
        result = _expand_path(path, names, constructor)
        output = out_dir / relative if out_dir is not None else (path if in_place else None)
        report.files.append(FileReport(path, output, result))

    if check or not report.ok:
        return report

    for file in report.files:
        if file.output is None:
            continue
        if out_dir is not None:
            file.output.parent.mkdir(parents=True, exist_ok=True)
            if not file.result.literals:
                shutil.copyfile(file.path, file.output)
                report.written.append(file.output)
                continue
        elif not file.result.literals:
            continue
        file.output.write_text(file.result.source, encoding="utf-8")
        report.written.append(file.output)
        logger.info("Wrote %s (%d literals)", file.output, len(file.result.literals))

    return report


__all__ = [
    "DEFAULT_NAMES",
    "DEFAULT_CONSTRUCTOR",
    "Diagnostic",
    "LiteralInvocation",
    "ExpandedLiteral",
    "ExpansionResult",
    "FileReport",
    "BuildReport",
    "rebound_names",
    "scan_source",
    "expand_source",
    "collect_files",
    "expand_file",
    "expand_tree",
]
