"""
Main parser entry point for the GS language.

This module defines the `Parser` class, which coordinates the recursive
descent parsing process. The actual parsing routines are split across
`gslang.parser.expressions` and `gslang.parser.statements`.

The parser holds exactly one token of lookahead in ``(pos, tok, lit)`` and
never stops at the first syntax error: it records a diagnostic, substitutes
a bad node and carries on. Once ``MAX_ERRORS`` diagnostics have been
collected it gives up on the rest of the input.

While parsing it also maintains a chain of scopes so that declarations can
be checked (redeclarations, ``:=`` without new names) and identifiers can
be linked to the objects they refer to.


File: parser.py
Version: 0.1.0
License: MIT
"""

from gslang.ast import File, Ident, Stmt
from gslang.errors import ErrorList, MAX_ERRORS
from gslang.exceptions import ParseError
from gslang.lexer import Scanner
from gslang.position import NO_POS, Pos, SourceFile
from gslang.scope import Object, ObjKind, Scope
from gslang.tokens import TokenType

from . import expressions as _expr
from . import statements as _stmt


class _Bailout(Exception):
    """Raised internally once the error limit is reached."""


class Parser:
    """GS parser."""

    def __init__(self, filename: str, src: str, semicolon_comments: bool = False):
        """
        Initialize the parser and read the first token.

        Parameters:
            filename (str): The name of the script, used in diagnostics.
            src (str): The source text.
            semicolon_comments (bool): Scan ``;`` as a line comment.
        """
        self.file = SourceFile(filename, src)
        self.errors = ErrorList()
        self.scanner = Scanner(self.file, src, semicolon_comments=semicolon_comments)
        self.bailed_out = False

        self.top_scope: Scope | None = None
        self.file_scope: Scope | None = None

        # current token
        self.pos: Pos = NO_POS
        self.tok: TokenType = TokenType.ILLEGAL
        self.lit: str = ""

        self.open_scope()
        self.file_scope = self.top_scope
        self.next()

    # ------------------------------------------------------------------
    # Tokens
    # ------------------------------------------------------------------

    def next(self) -> None:
        """Advance to the next token."""
        self.lit, self.tok, self.pos = self.scanner.scan()

    def found(self) -> str:
        """Describe the current token for diagnostics."""
        if self.tok == TokenType.EOF:
            return "'EOF'"
        if self.tok.is_literal():
            return self.lit
        return f"'{self.lit or self.tok}'"

    def expect(self, tok: TokenType) -> Pos:
        """
        Consume the current token, reporting an error if it is not ``tok``.

        Returns:
            Pos: The position of the consumed token.
        """
        pos = self.pos
        if self.tok != tok:
            self.error_expected(pos, f"'{tok}'")
        self.next()
        return pos

    def expect_closing(self, tok: TokenType) -> Pos:
        """
        Consume ``tok`` if it is the current token. A missing closing token
        is reported but not skipped.

        Returns:
            Pos: The position of ``tok``, or ``NO_POS`` if it was missing.
        """
        if self.tok != tok:
            self.error_expected(self.pos, f"'{tok}'")
            return NO_POS
        pos = self.pos
        self.next()
        return pos

    def on_line_of(self, pos: Pos) -> bool:
        """Return ``True`` if the current token is on the same line as ``pos``."""
        return self.file.line(self.pos) == self.file.line(pos)

    def at_comma(self, context: str, follow: TokenType) -> bool:
        """
        Return ``True`` if the list continues. A token other than ``,`` or
        ``follow`` is reported as a missing comma and treated as one.
        """
        if self.tok == TokenType.COMMA:
            return True
        if self.tok not in (follow, TokenType.EOF):
            self.error(self.pos, f"missing ',' in {context}")
            return True
        return False

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------

    def error(self, pos: Pos, msg: str) -> None:
        """
        Record a diagnostic at ``pos``.

        Raises:
            _Bailout: When the diagnostic limit has been reached.
        """
        self.errors.add(self.file.position(pos), msg)
        if len(self.errors) >= MAX_ERRORS:
            raise _Bailout()

    def error_expected(self, pos: Pos, what: str) -> None:
        """Report ``expected <what>``, naming the current token if it is at ``pos``."""
        msg = f"expected {what}"
        if pos == self.pos:
            msg += f", found {self.found()}"
        self.error(pos, msg)

    # ------------------------------------------------------------------
    # Scoping
    # ------------------------------------------------------------------

    def open_scope(self) -> None:
        """Push a new scope."""
        self.top_scope = Scope(self.top_scope)

    def close_scope(self) -> None:
        """Pop the innermost scope."""
        self.top_scope = self.top_scope.outer

    def declare(self, decl, kind: ObjKind, scope: Scope, idents: list[Ident]) -> None:
        """
        Create an object for each identifier and insert it into ``scope``.
        The blank identifier is never inserted.
        """
        for ident in idents:
            obj = Object(kind, ident.name, decl)
            ident.obj = obj
            if ident.name != "_":
                if scope.insert(obj) is not None:
                    self.error(ident.pos(), f"{ident.name} redeclared in this block")

    def resolve(self, ident: Ident) -> None:
        """Link ``ident`` to the binding it refers to, if one is in scope."""
        if ident.name == "_":
            return
        ident.obj = self.top_scope.lookup(ident.name)

    # Expression wrappers
    def expr(self):
        """
        Parse a full expression.
        """
        return _expr.parse_expr(self)

    def binary_expr(self, prec1: int):
        """
        Parse binary operators whose precedence is at least ``prec1``.
        """
        return _expr.parse_binary_expr(self, prec1)

    def unary_expr(self):
        """
        Parse a unary expression.
        """
        return _expr.parse_unary_expr(self)

    def primary_expr(self):
        """
        Parse a literal, parenthesized expression, identifier or call.
        """
        return _expr.parse_primary_expr(self)

    def expr_list(self) -> list:
        """
        Parse a comma separated list of expressions.
        """
        return _expr.parse_expr_list(self)

    def ident(self) -> Ident:
        """
        Parse an identifier.
        """
        return _expr.parse_ident(self)

    def ident_list(self) -> list[Ident]:
        """
        Parse a comma separated list of identifiers.
        """
        return _expr.parse_ident_list(self)

    # Statement wrappers
    def statement(self) -> Stmt:
        """
        Parse a single statement.
        """
        return _stmt.parse_statement(self)

    def statement_list(self) -> list[Stmt]:
        """
        Parse statements up to a closing brace or end of input.
        """
        return _stmt.parse_statement_list(self)

    def block(self, new_scope: bool = True):
        """
        Parse a block of statements enclosed in braces.
        """
        return _stmt.parse_block(self, new_scope)

    def simple_stmt(self) -> Stmt:
        """
        Parse an expression statement, assignment or short declaration.
        """
        return _stmt.parse_simple_stmt(self)

    def parse_var(self):
        """
        Parse a 'var' declaration.
        """
        return _stmt.parse_var(self)

    def parse_func(self):
        """
        Parse a function declaration.
        """
        return _stmt.parse_func(self)

    def parse_if(self):
        """
        Parse an 'if' statement.
        """
        return _stmt.parse_if(self)

    def parse_for(self):
        """
        Parse a 'for' statement.
        """
        return _stmt.parse_for(self)

    def parse_return(self):
        """
        Parse a 'return' statement.
        """
        return _stmt.parse_return(self)

    def parse_file(self) -> File | None:
        """
        Parse the full input.

        Returns:
            File: The parsed file, or ``None`` if parsing gave up after
            reaching the error limit or on input nested too deeply. Check
            :attr:`errors` either way.
        """
        stmts = []
        try:
            while self.tok != TokenType.EOF:
                if self.tok == TokenType.SEMICOLON:
                    self.next()
                    continue
                stmts.append(self.statement())
        except _Bailout:
            self.bailed_out = True
            return None
        except RecursionError:
            self.errors.add(self.file.position(self.pos), "expression nested too deeply")
            self.bailed_out = True
            return None
        return File(self.file.name, stmts, self.file_scope, self.file)


def parse_file(filename: str, src: str, semicolon_comments: bool = False) -> File:
    """
    Parse ``src`` into a :class:`File`.

    Raises:
        ParseError: If any diagnostic was reported. No partial tree is
            returned in that case.
    """
    parser = Parser(filename, src, semicolon_comments=semicolon_comments)
    f = parser.parse_file()
    if len(parser.errors) > 0:
        raise ParseError(parser.errors, bailout=parser.bailed_out)
    return f
