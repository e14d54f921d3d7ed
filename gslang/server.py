"""
GS Language Server entry point.

This server provides basic language features for GS source files using
`pygls`. It reuses the GS parser to report syntax errors as diagnostics and
to list the top-level declarations of a document.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from pygls.server import LanguageServer
from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    MarkupContent,
    MarkupKind,
    Position,
    Range,
    SymbolKind,
)

from gslang import __version__
from gslang.ast import AssignStmt, File, FuncStmt, Ident, Node, VarStmt
from gslang.errors import Error
from gslang.parser import Parser
from gslang.position import SourceFile, is_valid
from gslang.tokens import TokenType


@dataclass
class GSSymbol:
    """Represents a top-level symbol in a GS file."""

    name: str
    kind: SymbolKind
    range: Range
    selection_range: Range
    detail: str


def _lsp_position(source: SourceFile, pos: int) -> Position:
    """Convert a parser position into a zero-based LSP position, clamped to the buffer."""
    if is_valid(pos):
        pos = min(max(pos, source.base), source.base + source.size)
    p = source.position(pos)
    if not p.is_valid():
        return Position(line=0, character=0)
    return Position(line=p.line - 1, character=p.column - 1)


def _node_range(source: SourceFile, node: Node) -> Range:
    return Range(start=_lsp_position(source, node.pos()), end=_lsp_position(source, node.end()))


def to_diagnostic(err: Error) -> Diagnostic:
    """Convert a parser diagnostic into an LSP diagnostic one character wide."""
    line = max(err.pos.line - 1, 0)
    character = max(err.pos.column - 1, 0)
    rng = Range(
        start=Position(line=line, character=character),
        end=Position(line=line, character=character + 1),
    )
    return Diagnostic(range=rng, message=err.msg, severity=DiagnosticSeverity.Error, source="gs")


def analyze(uri: str, text: str) -> tuple[List[Diagnostic], List[GSSymbol]]:
    """
    Parse ``text`` and return its diagnostics and top-level symbols.

    Symbols are still collected when there are syntax errors, unless the
    parser gave up on the document.
    """
    parser = Parser(uri, text)
    ast = parser.parse_file()
    diagnostics = [to_diagnostic(err) for err in parser.errors]
    symbols = collect_symbols(ast, parser.file) if ast is not None else []
    return diagnostics, symbols


def collect_symbols(ast: File, source: SourceFile) -> List[GSSymbol]:
    """Extract top-level ``var``, ``:=`` and ``func`` declarations."""
    symbols: List[GSSymbol] = []

    def add(ident: Ident, kind: SymbolKind, decl: Node, detail: str) -> None:
        if ident.name == "_":
            return
        symbols.append(
            GSSymbol(ident.name, kind, _node_range(source, decl), _node_range(source, ident), detail)
        )

    for stmt in ast.stmts:
        if isinstance(stmt, FuncStmt):
            params = ", ".join(
                " ".join([", ".join(n.name for n in f.names)] + ([f.type_.name] if f.type_ else []))
                for f in stmt.params.fields
            )
            add(stmt.name, SymbolKind.Function, stmt, f"func {stmt.name.name}({params})")
        elif isinstance(stmt, VarStmt):
            typ = f" {stmt.type_.name}" if stmt.type_ is not None else ""
            for name in stmt.names:
                add(name, SymbolKind.Variable, stmt, f"var {name.name}{typ}")
        elif isinstance(stmt, AssignStmt) and stmt.tok == TokenType.DEFINE:
            for name in stmt.lhs:
                if isinstance(name, Ident):
                    add(name, SymbolKind.Variable, stmt, f"{name.name} :=")
    return symbols


class GSLanguageServer(LanguageServer):
    """Language server for GS source files."""

    def __init__(self) -> None:
        super().__init__("gs-ls", f"v{__version__}")
        self.symbols_by_uri: Dict[str, List[GSSymbol]] = {}

    def update(self, uri: str, text: str) -> None:
        """Parse ``text``, publish its diagnostics and index its symbols."""
        diagnostics, symbols = analyze(uri, text)
        self.symbols_by_uri[uri] = symbols
        self.publish_diagnostics(uri, diagnostics)


lang_server = GSLanguageServer()


@lang_server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: GSLanguageServer, params: DidOpenTextDocumentParams) -> None:
    """Check a document when it is opened."""
    ls.update(params.text_document.uri, params.text_document.text)


@lang_server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: GSLanguageServer, params: DidChangeTextDocumentParams) -> None:
    """Re-check a document when it changes."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    ls.update(doc.uri, doc.source)


@lang_server.feature(TEXT_DOCUMENT_HOVER)
def hover(ls: GSLanguageServer, params: HoverParams) -> Optional[Hover]:
    """Return the declaration of the top-level symbol under the cursor."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    word = doc.word_at_position(params.position)
    if not word:
        return None
    for sym in ls.symbols_by_uri.get(params.text_document.uri, []):
        if sym.name == word:
            return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=sym.detail))
    return None


@lang_server.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def document_symbols(ls: GSLanguageServer, params: DocumentSymbolParams):
    """Return top-level symbols for the given document."""
    symbols = ls.symbols_by_uri.get(params.text_document.uri, [])
    return [
        DocumentSymbol(
            name=sym.name,
            kind=sym.kind,
            range=sym.range,
            selection_range=sym.selection_range,
            detail=sym.detail,
        )
        for sym in symbols
    ]


def main() -> None:
    """Start the language server."""
    lang_server.start_io()


if __name__ == "__main__":
    main()
