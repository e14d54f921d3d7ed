"""AST node definitions for the GS language.

Nodes are plain dataclasses grouped in two families, expressions and
statements. Only leaves store their own positions; every composite node
computes ``pos()`` and ``end()`` from its children so that a node's span is
always the union of its children's spans (``end() >= pos()``).

Parentheses are not kept in the tree: ``(a + b)`` produces the
``BinaryExpr`` for ``a + b`` and spans only the inner expression.


File: ast.py
Version: 0.1.0
License: MIT
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional, TYPE_CHECKING

from gslang.position import Pos, NO_POS, SourceFile, is_valid
from gslang.tokens import TokenType

if TYPE_CHECKING:
    from gslang.scope import Object, Scope


class Node:
    """Base for all nodes."""

    def pos(self) -> Pos:
        """Position of the first character belonging to the node."""
        raise NotImplementedError

    def end(self) -> Pos:
        """Position immediately after the node."""
        raise NotImplementedError


class Expr(Node):
    """Base for expression nodes."""


class Stmt(Node):
    """Base for statement nodes."""


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------

@dataclass
class BadExpr(Expr):
    """Placeholder for an expression that failed to parse."""

    from_: Pos
    to: Pos

    def pos(self) -> Pos:
        return self.from_

    def end(self) -> Pos:
        return self.to


@dataclass
class Ident(Expr):
    """
    An identifier. ``obj`` points at the resolved binding, if any. A
    ``missing`` identifier stands in for one the parser expected; it is
    blank and has no width.
    """

    name_pos: Pos
    name: str
    obj: Optional[Object] = field(default=None, repr=False, compare=False)
    missing: bool = field(default=False, repr=False, compare=False)

    def pos(self) -> Pos:
        return self.name_pos

    def end(self) -> Pos:
        if self.missing:
            return self.name_pos
        return self.name_pos + len(self.name)


@dataclass
class BasicLit(Expr):
    """A literal of kind INT, FLOAT, CHAR or STRING; ``value`` is the source text."""

    lit_pos: Pos
    kind: TokenType
    value: str

    def pos(self) -> Pos:
        return self.lit_pos

    def end(self) -> Pos:
        return self.lit_pos + len(self.value)


@dataclass
class UnaryExpr(Expr):
    op_pos: Pos
    op: TokenType
    x: Expr

    def pos(self) -> Pos:
        return self.op_pos

    def end(self) -> Pos:
        return self.x.end()


@dataclass
class BinaryExpr(Expr):
    x: Expr
    op_pos: Pos
    op: TokenType
    y: Expr

    def pos(self) -> Pos:
        return self.x.pos()

    def end(self) -> Pos:
        return self.y.end()


@dataclass
class CallExpr(Expr):
    """A call; ``rparen`` is ``NO_POS`` if the closing parenthesis is missing."""

    fun: Expr
    lparen: Pos
    args: list[Expr]
    rparen: Pos

    def pos(self) -> Pos:
        return self.fun.pos()

    def end(self) -> Pos:
        if is_valid(self.rparen):
            return self.rparen + 1
        if self.args:
            return self.args[-1].end()
        return self.lparen + 1


# ---------------------------------------------------------------------------
# Fields (parameter and result lists)
# ---------------------------------------------------------------------------

@dataclass
class Field(Node):
    """A group of names sharing an optional type, e.g. ``a, b int``."""

    names: list[Ident]
    type_: Optional[Ident] = None

    def pos(self) -> Pos:
        if self.names:
            return self.names[0].pos()
        return self.type_.pos() if self.type_ is not None else NO_POS

    def end(self) -> Pos:
        if self.type_ is not None:
            return self.type_.end()
        return self.names[-1].end() if self.names else NO_POS


@dataclass
class FieldList(Node):
    """A parenthesised list of fields; ``opening``/``closing`` may be ``NO_POS``."""

    opening: Pos
    fields: list[Field]
    closing: Pos

    def pos(self) -> Pos:
        if is_valid(self.opening):
            return self.opening
        return self.fields[0].pos() if self.fields else NO_POS

    def end(self) -> Pos:
        if is_valid(self.closing):
            return self.closing + 1
        return self.fields[-1].end() if self.fields else self.pos()

    def num_fields(self) -> int:
        """Count names, or one per unnamed field."""
        return sum(len(f.names) or 1 for f in self.fields)


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------

@dataclass
class BadStmt(Stmt):
    """Placeholder for a statement that failed to parse."""

    from_: Pos
    to: Pos

    def pos(self) -> Pos:
        return self.from_

    def end(self) -> Pos:
        return self.to


@dataclass
class VarStmt(Stmt):
    """``var a, b int = 1, 2``; ``type_`` and ``values`` are optional."""

    var_pos: Pos
    names: list[Ident]
    type_: Optional[Ident] = None
    values: list[Expr] = field(default_factory=list)

    def pos(self) -> Pos:
        return self.var_pos

    def end(self) -> Pos:
        if self.values:
            return self.values[-1].end()
        if self.type_ is not None:
            return self.type_.end()
        if self.names:
            return self.names[-1].end()
        return self.var_pos + len("var")


@dataclass
class AssignStmt(Stmt):
    """Assignment (``=``) or short variable declaration (``:=``)."""

    lhs: list[Expr]
    tok_pos: Pos
    tok: TokenType
    rhs: list[Expr]

    def pos(self) -> Pos:
        return self.lhs[0].pos()

    def end(self) -> Pos:
        if self.rhs:
            return self.rhs[-1].end()
        return self.tok_pos + len(self.tok.value)


@dataclass
class ExprStmt(Stmt):
    x: Expr

    def pos(self) -> Pos:
        return self.x.pos()

    def end(self) -> Pos:
        return self.x.end()


@dataclass
class BlockStmt(Stmt):
    """A braced statement list; ``rbrace`` is ``NO_POS`` if missing."""

    lbrace: Pos
    stmts: list[Stmt]
    rbrace: Pos = NO_POS

    def pos(self) -> Pos:
        return self.lbrace

    def end(self) -> Pos:
        if is_valid(self.rbrace):
            return self.rbrace + 1
        if self.stmts:
            return self.stmts[-1].end()
        return self.lbrace + 1


@dataclass
class IfStmt(Stmt):
    if_pos: Pos
    init: Optional[Stmt]
    cond: Expr
    body: BlockStmt | BadStmt
    else_: Optional[Stmt] = None

    def pos(self) -> Pos:
        return self.if_pos

    def end(self) -> Pos:
        if self.else_ is not None:
            return self.else_.end()
        return self.body.end()


@dataclass
class ForStmt(Stmt):
    for_pos: Pos
    init: Optional[Stmt]
    cond: Optional[Expr]
    post: Optional[Stmt]
    body: BlockStmt | BadStmt

    def pos(self) -> Pos:
        return self.for_pos

    def end(self) -> Pos:
        return self.body.end()


@dataclass
class ReturnStmt(Stmt):
    return_pos: Pos
    results: list[Expr] = field(default_factory=list)

    def pos(self) -> Pos:
        return self.return_pos

    def end(self) -> Pos:
        if self.results:
            return self.results[-1].end()
        return self.return_pos + len("return")


@dataclass
class FuncStmt(Stmt):
    """Function declaration. Bodies are parsed and resolved, never executed."""

    func_pos: Pos
    name: Ident
    params: FieldList
    results: Optional[FieldList]
    body: BlockStmt | BadStmt

    def pos(self) -> Pos:
        return self.func_pos

    def end(self) -> Pos:
        return self.body.end()


# ---------------------------------------------------------------------------
# File
# ---------------------------------------------------------------------------

@dataclass
class File(Node):
    """A parsed source unit."""

    name: str
    stmts: list[Stmt]
    scope: Optional[Scope] = field(default=None, repr=False, compare=False)
    source: Optional[SourceFile] = field(default=None, repr=False, compare=False)

    def pos(self) -> Pos:
        return self.stmts[0].pos() if self.stmts else NO_POS

    def end(self) -> Pos:
        return self.stmts[-1].end() if self.stmts else NO_POS


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------

def children(node: Node) -> list[Node]:
    """Return the direct children of ``node`` in source order."""
    match node:
        case File(stmts=stmts) | BlockStmt(stmts=stmts):
            return list(stmts)
        case UnaryExpr(x=x) | ExprStmt(x=x):
            return [x]
        case BinaryExpr(x=x, y=y):
            return [x, y]
        case CallExpr(fun=fun, args=args):
            return [fun, *args]
        case Field(names=names, type_=type_):
            return [*names, *([type_] if type_ is not None else [])]
        case FieldList(fields=fields):
            return list(fields)
        case VarStmt(names=names, type_=type_, values=values):
            return [*names, *([type_] if type_ is not None else []), *values]
        case AssignStmt(lhs=lhs, rhs=rhs):
            return [*lhs, *rhs]
        case IfStmt(init=init, cond=cond, body=body, else_=else_):
            return [n for n in (init, cond, body, else_) if n is not None]
        case ForStmt(init=init, cond=cond, post=post, body=body):
            return [n for n in (init, cond, post, body) if n is not None]
        case ReturnStmt(results=results):
            return list(results)
        case FuncStmt(name=name, params=params, results=results, body=body):
            return [n for n in (name, params, results, body) if n is not None]
    return []


def walk(node: Node, fn: Callable[[Node, int], None], level: int = 0) -> None:
    """
    Visit ``node`` and its descendants depth first, calling ``fn(node, level)``
    before descending.
    """
    if node is None:
        raise ValueError("walk() called with None")
    fn(node, level)
    for child in children(node):
        walk(child, fn, level + 1)
