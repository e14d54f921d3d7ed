"""Debug printing for GS syntax trees.

:func:`format_expr` renders an expression back to source text; the
interpreter uses it in runtime error messages. :func:`dump` prints an
indented tree with node positions, used by the ``GSDEBUG`` switch of the
command line entry point.


File: printer.py
Version: 0.1.0
License: MIT
"""

import sys

from gslang.ast import (
    AssignStmt,
    BadExpr,
    BadStmt,
    BasicLit,
    BinaryExpr,
    BlockStmt,
    CallExpr,
    ExprStmt,
    Field,
    FieldList,
    File,
    ForStmt,
    FuncStmt,
    Ident,
    IfStmt,
    Node,
    ReturnStmt,
    UnaryExpr,
    VarStmt,
    walk,
)


def format_expr(node) -> str:
    """
    Convert an expression node back to a readable string.

    Binary operands that are themselves binary expressions are wrapped in
    parentheses so the grouping of the tree is visible.
    """
    match node:
        case Ident(name=name):
            return name
        case BasicLit(value=value):
            return value
        case UnaryExpr(op=op, x=x):
            return f"{op}{format_expr(x)}"
        case BinaryExpr(x=x, op=op, y=y):
            left = format_expr(x)
            right = format_expr(y)
            if isinstance(x, BinaryExpr):
                left = f"({left})"
            if isinstance(y, BinaryExpr):
                right = f"({right})"
            return f"{left} {op} {right}"
        case CallExpr(fun=fun, args=args):
            return f"{format_expr(fun)}({', '.join(format_expr(a) for a in args)})"
        case BadExpr():
            return "<bad expr>"
    name = type(node).__name__
    return f"<expr {name}>"


def _describe(node: Node) -> str:
    match node:
        case File(name=name):
            return f"File: {name or '<source>'}"
        case BasicLit(kind=kind, value=value):
            return f"BasicLit: {kind.name} {value}"
        case Ident(name=name, obj=obj):
            resolved = f" -> {obj.kind.name}" if obj is not None else ""
            return f"Ident: {name}{resolved}"
        case UnaryExpr(op=op):
            return f"UnaryExpr: {op}"
        case BinaryExpr(op=op, op_pos=op_pos):
            return f"BinaryExpr: op: {op}, op_pos: {op_pos}"
        case CallExpr(args=args):
            return f"CallExpr: {len(args)} args"
        case AssignStmt(tok=tok):
            return f"AssignStmt: {tok}"
        case VarStmt(names=names):
            return f"VarStmt: {', '.join(n.name for n in names)}"
        case FuncStmt(name=name):
            return f"FuncStmt: {name.name}"
        case Field(names=names, type_=type_):
            typ = f" {type_.name}" if type_ is not None else ""
            return f"Field: {', '.join(n.name for n in names)}{typ}"
        case FieldList(fields=fields):
            return f"FieldList: {len(fields)} fields"
        case BlockStmt() | IfStmt() | ForStmt() | ExprStmt() | ReturnStmt():
            return type(node).__name__
        case BadExpr() | BadStmt():
            return type(node).__name__
    return f"dunno what I got: {node!r}"


def dump(node: Node, out=None) -> None:
    """
    Print ``node`` and its descendants, one per line, indented by depth.
    """
    stream = out if out is not None else sys.stdout

    def visit(n: Node, level: int) -> None:
        print(f"{'.  ' * level}{_describe(n)} [{n.pos()}-{n.end()}]", file=stream)

    walk(node, visit)
