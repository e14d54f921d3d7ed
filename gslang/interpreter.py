"""Interpreter.

This is a tree-walk interpreter for the syntax trees produced by
:mod:`gslang.parser`.

1. Execution Model
Top-level statements run once each, strictly in source order, via
`execute()`. Expressions are evaluated by `eval_expr()`. The value of the
last top-level expression statement is returned, so a source consisting of
a single expression such as ``8 - (2+3) * 2`` evaluates to ``-2``.

2. Environment
The interpreter keeps its own chain of :class:`gslang.scope.Scope` frames,
independent from the one the parser used. Blocks, ``if`` and ``for``
statements push a frame and pop it on exit. Each binding is an
:class:`gslang.scope.Object` whose ``data`` holds the current value.

3. Values
Expression results are Python ``int``, ``bool`` and ``str`` values, or an
``Object`` when the expression is an identifier. `value_of()` unwraps such
references; every consumer of an expression result goes through it.
A function name or a call to ``print`` has no value, and using one where a
value is needed raises ``TypeMismatchException``.

4. Declarations and assignment
- ``var`` binds each name in the current frame; without values it binds 0.
- ``:=`` binds in the current frame, shadowing outer bindings.
- ``=`` updates the nearest existing binding, or creates one in the current
  frame.
Name and value lists must have the same length.

5. Built-ins
``print(args...)`` writes one line per argument. It is the only callable;
function declarations only bind a name.

6. Error Handling
Runtime errors are fatal. The first one raises a typed exception carrying
the ``file:line:col`` of the offending node and evaluation stops. A
statement nested too deeply to evaluate raises ``RecursionDepthException``.


File: interpreter.py
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
    File,
    ForStmt,
    FuncStmt,
    Ident,
    IfStmt,
    Node,
    ReturnStmt,
    UnaryExpr,
    VarStmt,
)
from gslang.exceptions import (
    DivisionByZeroException,
    GSRuntimeError,
    LengthMismatchException,
    RecursionDepthException,
    TypeMismatchException,
    UndefinedVariableException,
    UnsupportedCallException,
)
from gslang.parser import parse_file
from gslang.position import SourceFile
from gslang.printer import format_expr
from gslang.scope import Object, ObjKind, Scope
from gslang.tokens import TokenType

BUILTINS = ("print",)


def value_of(value):
    """Unwrap an ``Object`` reference to the value it holds."""
    if isinstance(value, Object):
        return value.data
    return value


def format_value(value) -> str:
    """Render a runtime value the way ``print`` shows it."""
    value = value_of(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _unquote(lit: str) -> str:
    return lit[1:-1].encode("latin-1", "backslashreplace").decode("unicode_escape")


class Interpreter:
    """Tree-walk interpreter for the GS language."""

    def __init__(self, file: str = "<stdin>", out=None):
        """
        Initialize the interpreter.

        Parameters:
            file (str): Name of the script, used in error messages.
            out: Stream that ``print`` writes to; ``sys.stdout`` by default.
        """
        self.file = file
        self.out = out
        self.source: SourceFile | None = None
        self.scope = Scope()
        self.global_scope = self.scope

    # ------------------------------------------------------------------
    # Scopes and positions
    # ------------------------------------------------------------------

    def open_scope(self) -> None:
        """Push an evaluation frame."""
        self.scope = Scope(self.scope)

    def close_scope(self) -> None:
        """Pop the innermost evaluation frame."""
        self.scope = self.scope.outer

    def _where(self, node: Node):
        """Position of ``node`` for error messages, if the source is known."""
        if self.source is None:
            return None
        return self.source.position(node.pos())

    def _bind(self, name: str, value, decl, scope: Scope) -> None:
        """Bind ``name`` in ``scope``, updating an existing local binding."""
        if name == "_":
            return
        obj = scope.lookup_local(name)
        if obj is None:
            scope.insert(Object(ObjKind.VAR, name, decl, value))
        else:
            obj.data = value

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def eval_expr(self, node):
        """
        Evaluate an expression node.

        Returns:
            An ``int``, ``bool`` or ``str``; or the ``Object`` bound to an
            identifier.

        Raises:
            UndefinedVariableException: For names not bound in any frame.
            DivisionByZeroException: For ``/`` or ``%`` by zero.
            TypeMismatchException: For operands of the wrong type.
            UnsupportedCallException: For calls to anything but a built-in.
        """
        match node:
            case BasicLit(kind=TokenType.INT, value=value):
                return int(value)
            case BasicLit(kind=TokenType.STRING, value=value):
                return _unquote(value)
            case BasicLit(kind=kind):
                raise TypeMismatchException(f"Unsupported {kind.name} literal", self._where(node))
            case Ident(name=name):
                obj = self.scope.lookup(name)
                if obj is None:
                    raise UndefinedVariableException(name, self._where(node))
                return obj
            case UnaryExpr():
                return self.eval_unary(node)
            case BinaryExpr():
                return self.eval_binary(node)
            case CallExpr():
                return self.eval_call(node)
            case BadExpr():
                raise GSRuntimeError("Cannot evaluate a malformed expression", self._where(node))
        raise GSRuntimeError(f"Invalid expression node: {node!r}")

    def eval_value(self, node):
        """
        Evaluate ``node`` and unwrap the result.

        Raises:
            TypeMismatchException: If ``node`` names a function or is a call
                that produces no value.
        """
        value = self.eval_expr(node)
        if isinstance(value, Object) and value.kind == ObjKind.FUN:
            raise TypeMismatchException(f"'{value.name}' is a function, not a value", self._where(node))
        if value is None:
            raise TypeMismatchException(f"'{format_expr(node)}' has no value", self._where(node))
        return value_of(value)

    def eval_int(self, node) -> int:
        """Evaluate ``node``, which must produce an integer."""
        value = self.eval_value(node)
        if not _is_int(value):
            raise TypeMismatchException(
                f"Expected an integer, got {format_value(value)!r} in '{format_expr(node)}'",
                self._where(node),
            )
        return value

    def eval_bool(self, node) -> bool:
        """Evaluate ``node``, which must produce a boolean."""
        value = self.eval_value(node)
        if not isinstance(value, bool):
            raise TypeMismatchException(
                f"Expected a boolean, got {format_value(value)!r} in '{format_expr(node)}'",
                self._where(node),
            )
        return value

    def eval_unary(self, node: UnaryExpr):
        """
        Evaluate ``+x``, ``-x`` or ``!x``.
        """
        match node.op:
            case TokenType.ADD:
                return self.eval_int(node.x)
            case TokenType.SUB:
                return -self.eval_int(node.x)
            case TokenType.NOT:
                return not self.eval_bool(node.x)
        raise GSRuntimeError(f"Unknown unary operator '{node.op}'", self._where(node))

    def eval_binary(self, node: BinaryExpr):
        """
        Evaluate a binary expression, left operand first.
        """
        op = node.op
        if op == TokenType.LAND:
            return self.eval_bool(node.x) and self.eval_bool(node.y)
        if op == TokenType.LOR:
            return self.eval_bool(node.x) or self.eval_bool(node.y)

        lhs = self.eval_value(node.x)
        rhs = self.eval_value(node.y)

        if op in (TokenType.EQL, TokenType.NEQ):
            if type(lhs) is not type(rhs):
                raise TypeMismatchException(
                    f"Mismatched types in '{format_expr(node)}'", self._where(node)
                )
            return (lhs == rhs) == (op == TokenType.EQL)

        if op == TokenType.ADD and isinstance(lhs, str) and isinstance(rhs, str):
            return lhs + rhs

        if op in (TokenType.LSS, TokenType.LEQ, TokenType.GTR, TokenType.GEQ):
            if not ((_is_int(lhs) and _is_int(rhs)) or (isinstance(lhs, str) and isinstance(rhs, str))):
                raise TypeMismatchException(
                    f"Cannot compare operands in '{format_expr(node)}'", self._where(node)
                )
            match op:
                case TokenType.LSS:
                    return lhs < rhs
                case TokenType.LEQ:
                    return lhs <= rhs
                case TokenType.GTR:
                    return lhs > rhs
                case _:
                    return lhs >= rhs

        if not (_is_int(lhs) and _is_int(rhs)):
            raise TypeMismatchException(
                f"Operator '{op}' requires integer operands in '{format_expr(node)}'",
                self._where(node),
            )

        # 1 + 2: the left operand seeds the result
        term = lhs
        match op:
            case TokenType.ADD:
                term += rhs
            case TokenType.SUB:
                term -= rhs
            case TokenType.MUL:
                term *= rhs
            case TokenType.QUO | TokenType.REM:
                if rhs == 0:
                    raise DivisionByZeroException(format_expr(node), self._where(node))
                # truncate toward zero
                quotient = abs(lhs) // abs(rhs)
                if (lhs < 0) != (rhs < 0):
                    quotient = -quotient
                term = quotient if op == TokenType.QUO else lhs - rhs * quotient
            case _:
                raise GSRuntimeError(f"Unknown binary operator '{op}'", self._where(node))
        return term

    def eval_call(self, node: CallExpr):
        """
        Evaluate a call. Only the built-in ``print`` can be called.
        """
        fun = node.fun
        if not isinstance(fun, Ident):
            raise UnsupportedCallException(format_expr(fun), self._where(node))
        if fun.name not in BUILTINS or self.scope.lookup(fun.name) is not None:
            raise UnsupportedCallException(fun.name, self._where(node))

        for arg in node.args:
            print(format_value(self.eval_value(arg)), file=self.out if self.out is not None else sys.stdout)
        return None

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def execute(self, program):
        """
        Execute a parsed file or a list of statements.

        Parameters:
            program (File | list): The statements to run.

        Returns:
            The value of the last top-level expression statement, or ``None``
            if the last statement executed was not a bare expression.
        """
        if isinstance(program, File):
            if program.source is not None:
                self.source = program.source
            statements = program.stmts
        else:
            statements = program

        result = None
        for stmt in statements:
            try:
                result = self.exec_stmt(stmt)
            except RecursionError:
                raise RecursionDepthException(self._where(stmt)) from None
        return value_of(result)

    def exec_block(self, statements: list) -> None:
        """Run ``statements`` inside a fresh frame."""
        self.open_scope()
        try:
            for stmt in statements:
                self.exec_stmt(stmt)
        finally:
            self.close_scope()

    def exec_stmt(self, stmt):
        """
        Execute one statement.

        Returns:
            The expression value for expression statements, else ``None``.
        """
        match stmt:
            case VarStmt():
                self.exec_var(stmt)
            case AssignStmt():
                self.exec_assign(stmt)
            case ExprStmt(x=CallExpr() as x):
                return self.eval_expr(x)
            case ExprStmt(x=x):
                return self.eval_value(x)
            case BlockStmt(stmts=stmts):
                self.exec_block(stmts)
            case IfStmt():
                self.exec_if(stmt)
            case ForStmt():
                self.exec_for(stmt)
            case FuncStmt(name=name):
                if name.name != "_":
                    self.scope.insert(Object(ObjKind.FUN, name.name, stmt, stmt))
            case ReturnStmt():
                raise GSRuntimeError("Return outside of a function", self._where(stmt))
            case BadStmt():
                raise GSRuntimeError("Cannot execute a malformed statement", self._where(stmt))
            case _:
                raise GSRuntimeError(f"Unknown statement type: {type(stmt).__name__}")
        return None

    def exec_var(self, stmt: VarStmt) -> None:
        """
        Bind every declared name in the current frame.

        Raises:
            LengthMismatchException: If values are given but their number
                differs from the number of names.
        """
        if stmt.values:
            if len(stmt.values) != len(stmt.names):
                raise LengthMismatchException(len(stmt.names), len(stmt.values), self._where(stmt))
            values = [self.eval_value(v) for v in stmt.values]
        else:
            values = [0] * len(stmt.names)
        for ident, value in zip(stmt.names, values):
            self._bind(ident.name, value, stmt, self.scope)

    def exec_assign(self, stmt: AssignStmt) -> None:
        """
        Execute ``=`` or ``:=``. All right-hand sides are evaluated before
        any name is bound.
        """
        if len(stmt.lhs) != len(stmt.rhs):
            raise LengthMismatchException(len(stmt.lhs), len(stmt.rhs), self._where(stmt))
        for target in stmt.lhs:
            if not isinstance(target, Ident):
                raise TypeMismatchException(
                    f"Cannot assign to '{format_expr(target)}'", self._where(target)
                )
        values = [self.eval_value(v) for v in stmt.rhs]

        for target, value in zip(stmt.lhs, values):
            name = target.name
            if stmt.tok == TokenType.DEFINE or name == "_":
                self._bind(name, value, stmt, self.scope)
                continue
            obj = self.scope.lookup(name)
            if obj is None:
                self._bind(name, value, stmt, self.scope)
            elif obj.kind == ObjKind.FUN:
                raise TypeMismatchException(f"Cannot assign to function '{name}'", self._where(target))
            else:
                obj.data = value

    def exec_if(self, stmt: IfStmt) -> None:
        """Run the init statement, then the body or the else branch."""
        self.open_scope()
        try:
            if stmt.init is not None:
                self.exec_stmt(stmt.init)
            if self.eval_bool(stmt.cond):
                self.exec_stmt(stmt.body)
            elif stmt.else_ is not None:
                self.exec_stmt(stmt.else_)
        finally:
            self.close_scope()

    def exec_for(self, stmt: ForStmt) -> None:
        """Run the loop body while the condition holds."""
        self.open_scope()
        try:
            if stmt.init is not None:
                self.exec_stmt(stmt.init)
            while stmt.cond is None or self.eval_bool(stmt.cond):
                self.exec_stmt(stmt.body)
                if stmt.post is not None:
                    self.exec_stmt(stmt.post)
        finally:
            self.close_scope()


def run_source(filename: str, src: str, semicolon_comments: bool = False, out=None):
    """
    Parse and execute ``src``.

    Returns:
        The value of the last top-level expression statement, or ``None``.

    Raises:
        ParseError: If the source has syntax errors; nothing is executed.
        GSRuntimeError: On the first runtime error.
    """
    program = parse_file(filename, src, semicolon_comments=semicolon_comments)
    interpreter = Interpreter(filename, out=out)
    return interpreter.execute(program)
