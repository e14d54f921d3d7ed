"""Statement parsing utilities for the GS language.

These functions operate on a `gslang.parser.parser.Parser` instance and
handle the statement forms of the language: declarations, assignments,
blocks, conditionals, loops and function declarations.

Statements may be terminated by ``;``. Every block, ``if`` and ``for``
statement and function opens a scope; declarations are checked against the
innermost one.


File: statements.py
Version: 0.1.0
License: MIT
"""

from typing import TYPE_CHECKING

from gslang.ast import (
    AssignStmt,
    BadExpr,
    BadStmt,
    BlockStmt,
    ExprStmt,
    Field,
    FieldList,
    ForStmt,
    FuncStmt,
    Ident,
    IfStmt,
    ReturnStmt,
    Stmt,
    VarStmt,
)
from gslang.position import NO_POS
from gslang.scope import Object, ObjKind
from gslang.tokens import TokenType

from .expressions import at_operand

if TYPE_CHECKING:
    from gslang.parser import Parser


def parse_statement_list(parser: 'Parser') -> list[Stmt]:
    """
    Parse statements until a closing brace or end of input.

    Syntax:
        { <statement> [ ";" ] }

    Args:
        parser: The parser instance.

    Returns:
        list: The statement nodes.
    """
    stmts = []
    while parser.tok not in (TokenType.RBRACE, TokenType.EOF):
        if parser.tok == TokenType.SEMICOLON:
            parser.next()
            continue
        stmts.append(parser.statement())
    return stmts


def parse_block(parser: 'Parser', new_scope: bool = True) -> BlockStmt | BadStmt:
    """
    Parse a block of statements enclosed in braces.

    Syntax:
        { <statement>* }

    Args:
        parser: The parser instance.
        new_scope: Open a scope for the block. Function bodies share the
            scope holding their parameters.

    Returns:
        BlockStmt: The block node; ``rbrace`` is ``NO_POS`` if it was missing.
        A ``BadStmt`` with no width if the opening brace is missing.
    """
    if parser.tok != TokenType.LBRACE:
        pos = parser.pos
        parser.error_expected(pos, "'{'")
        return BadStmt(pos, pos)
    lbrace = parser.pos
    parser.next()
    if new_scope:
        parser.open_scope()
    stmts = parser.statement_list()
    if new_scope:
        parser.close_scope()
    rbrace = NO_POS
    if parser.tok == TokenType.RBRACE:
        rbrace = parser.pos
        parser.next()
    else:
        parser.error_expected(parser.pos, "'}'")
    return BlockStmt(lbrace, stmts, rbrace)


def parse_statement(parser: 'Parser') -> Stmt:
    """
    Parse a single statement.

    Syntax:
        <var> | <func> | <if> | <for> | <return> | <block> | <simple>

    Args:
        parser: The parser instance.

    Returns:
        Stmt: The statement node, a ``BadStmt`` if no statement starts here.
    """
    tok = parser.tok
    if tok == TokenType.VAR:
        return parser.parse_var()
    elif tok == TokenType.FUNC:
        return parser.parse_func()
    elif tok == TokenType.IF:
        return parser.parse_if()
    elif tok == TokenType.FOR:
        return parser.parse_for()
    elif tok == TokenType.RETURN:
        return parser.parse_return()
    elif tok == TokenType.LBRACE:
        return parser.block()
    elif at_operand(parser):
        return parser.simple_stmt()

    pos = parser.pos
    parser.error_expected(pos, "statement")
    parser.next()
    return BadStmt(pos, parser.pos)


def short_var_decl(parser: 'Parser', stmt: AssignStmt) -> None:
    """
    Declare the left side of ``:=`` in the current scope.

    Names already bound in the current scope are redeclarations and reuse
    their object; at least one non-blank name must be new.
    """
    n = 0  # number of new variables
    for x in stmt.lhs:
        if not isinstance(x, Ident):
            parser.error_expected(x.pos(), "identifier on left side of :=")
            continue
        obj = Object(ObjKind.VAR, x.name, stmt)
        x.obj = obj
        if x.name == "_":
            continue
        alt = parser.top_scope.insert(obj)
        if alt is not None:
            x.obj = alt  # redeclaration
        else:
            n += 1
    if n == 0:
        parser.error(stmt.tok_pos, "no new variables on left side of :=")


def parse_simple_stmt(parser: 'Parser') -> Stmt:
    """
    Parse an expression statement, assignment or short variable declaration.

    Syntax:
        <expr> { "," <expr> } [ ( "=" | ":=" ) <expr> { "," <expr> } ]

    Args:
        parser: The parser instance.

    Returns:
        Stmt: ``AssignStmt`` or ``ExprStmt``.
    """
    lhs = parser.expr_list()

    if parser.tok in (TokenType.ASSIGN, TokenType.DEFINE):
        pos, tok = parser.pos, parser.tok
        parser.next()
        rhs = parser.expr_list()
        stmt = AssignStmt(lhs, pos, tok, rhs)
        if tok == TokenType.DEFINE:
            short_var_decl(parser, stmt)
        else:
            for x in lhs:
                if not isinstance(x, Ident):
                    parser.error_expected(x.pos(), "identifier on left side of =")
        return stmt

    if len(lhs) > 1:
        parser.error_expected(lhs[0].pos(), "1 expression")
    return ExprStmt(lhs[0])


def parse_var(parser: 'Parser') -> VarStmt:
    """
    Parse a variable declaration.

    Syntax:
        var <ident> { "," <ident> } [ <type> ] [ "=" <expr> { "," <expr> } ]

    Args:
        parser: The parser instance.

    Returns:
        VarStmt: The declaration node.
    """
    var_pos = parser.expect(TokenType.VAR)
    names = parser.ident_list()
    type_ = None
    # a type name must follow on the same line, otherwise it starts the next statement
    if parser.tok == TokenType.IDENT and parser.on_line_of(names[-1].pos()):
        type_ = parser.ident()
    values = []
    if parser.tok == TokenType.ASSIGN:
        parser.next()
        values = parser.expr_list()
    stmt = VarStmt(var_pos, names, type_, values)
    parser.declare(stmt, ObjKind.VAR, parser.top_scope, names)
    return stmt


def parse_parameters(parser: 'Parser', context: str) -> FieldList:
    """
    Parse a parenthesized list of parameter groups.

    Syntax:
        "(" [ <ident> { "," <ident> } [ <type> ] { "," ... } [ "," ] ] ")"

    A group ends at the identifier that follows a name without a comma,
    which is taken as the group's type: ``a, b int, c string``.
    """
    if parser.tok != TokenType.LPAREN:
        parser.error_expected(parser.pos, "'('")
        return FieldList(NO_POS, [], NO_POS)
    lparen = parser.pos
    parser.next()
    fields = []
    pending: list[Ident] = []
    while parser.tok not in (TokenType.RPAREN, TokenType.EOF):
        pending.append(parser.ident())
        if parser.tok == TokenType.IDENT:
            fields.append(Field(pending, parser.ident()))
            pending = []
        if not parser.at_comma(context, TokenType.RPAREN):
            break
        parser.next()
    if pending:
        fields.append(Field(pending, None))
    rparen = parser.expect_closing(TokenType.RPAREN)
    return FieldList(lparen, fields, rparen)


def parse_results(parser: 'Parser') -> FieldList | None:
    """
    Parse an optional result list: a single type or a parenthesized list.
    In ``(int, string)`` every name is a type.
    """
    if parser.tok == TokenType.IDENT:
        return FieldList(NO_POS, [Field([], parser.ident())], NO_POS)
    if parser.tok != TokenType.LPAREN:
        return None
    results = parse_parameters(parser, "result list")
    if all(f.type_ is None for f in results.fields):
        results.fields = [Field([], name) for f in results.fields for name in f.names]
    return results


def parse_func(parser: 'Parser') -> FuncStmt:
    """
    Parse a function declaration. The name is declared in the enclosing
    scope; parameters and named results share one scope with the body.

    Syntax:
        func <name>(<params>) [ <results> ] { <block> }

    Args:
        parser: The parser instance.

    Returns:
        FuncStmt: The declaration node.
    """
    func_pos = parser.expect(TokenType.FUNC)
    name = parser.ident()
    outer = parser.top_scope

    parser.open_scope()
    params = parse_parameters(parser, "parameter list")
    results = parse_results(parser)
    field_lists = [params] + ([results] if results is not None else [])
    for field_list in field_lists:
        for f in field_list.fields:
            parser.declare(f, ObjKind.VAR, parser.top_scope, f.names)
    body = parser.block(new_scope=False)
    parser.close_scope()

    stmt = FuncStmt(func_pos, name, params, results, body)
    parser.declare(stmt, ObjKind.FUN, outer, [name])
    return stmt


def _if_header(parser: 'Parser'):
    if parser.tok == TokenType.LBRACE:
        parser.error(parser.pos, "missing condition in if statement")
        return None, BadExpr(parser.pos, parser.pos)

    init = None
    if parser.tok != TokenType.SEMICOLON:
        init = parser.simple_stmt()

    if parser.tok == TokenType.SEMICOLON:
        parser.next()
        if parser.tok == TokenType.LBRACE:
            parser.error(parser.pos, "missing condition in if statement")
            return init, BadExpr(parser.pos, parser.pos)
        return init, parser.expr()

    if isinstance(init, ExprStmt):
        return None, init.x
    parser.error(init.pos(), "missing condition in if statement")
    return None, BadExpr(init.pos(), init.end())


def parse_if(parser: 'Parser') -> IfStmt:
    """
    Parse a conditional 'if' statement with an optional init statement and
    an optional else branch.

    Syntax:
        if [ <simple> ";" ] <condition> { <block> } [ else ( <if> | { <block> } ) ]

    Args:
        parser: The parser instance.

    Returns:
        IfStmt: The statement node.
    """
    if_pos = parser.expect(TokenType.IF)
    parser.open_scope()
    init, cond = _if_header(parser)
    body = parser.block()

    else_ = None
    if parser.tok == TokenType.ELSE:
        parser.next()
        if parser.tok == TokenType.IF:
            else_ = parser.parse_if()
        elif parser.tok == TokenType.LBRACE:
            else_ = parser.block()
        else:
            pos = parser.pos
            parser.error_expected(pos, "if statement or block")
            else_ = BadStmt(pos, pos)
    parser.close_scope()
    return IfStmt(if_pos, init, cond, body, else_)


def parse_for(parser: 'Parser') -> ForStmt:
    """
    Parse a 'for' loop.

    Syntax:
        for [ <condition> | [ <simple> ] ";" [ <condition> ] ";" [ <simple> ] ] { <block> }

    Args:
        parser: The parser instance.

    Returns:
        ForStmt: The statement node.
    """
    for_pos = parser.expect(TokenType.FOR)
    parser.open_scope()
    init = cond = post = None

    if parser.tok != TokenType.LBRACE:
        first = None
        if parser.tok != TokenType.SEMICOLON:
            first = parser.simple_stmt()
        if parser.tok == TokenType.SEMICOLON:
            parser.next()
            init = first
            if parser.tok != TokenType.SEMICOLON:
                cond = parser.expr()
            if parser.tok == TokenType.SEMICOLON:
                parser.next()
            else:
                parser.error_expected(parser.pos, "';'")
            if parser.tok != TokenType.LBRACE:
                post = parser.simple_stmt()
                if isinstance(post, AssignStmt) and post.tok == TokenType.DEFINE:
                    parser.error(post.pos(), "cannot declare in post statement of for loop")
        elif isinstance(first, ExprStmt):
            cond = first.x
        else:
            parser.error_expected(first.pos(), "for loop condition")

    body = parser.block()
    parser.close_scope()
    return ForStmt(for_pos, init, cond, post, body)


def parse_return(parser: 'Parser') -> ReturnStmt:
    """
    Parse a 'return' statement.

    Syntax:
        return [ <expr> { "," <expr> } ]

    Args:
        parser: The parser instance.

    Returns:
        ReturnStmt: The statement node.
    """
    pos = parser.expect(TokenType.RETURN)
    results = []
    if at_operand(parser) and parser.on_line_of(pos):
        results = parser.expr_list()
    return ReturnStmt(pos, results)
