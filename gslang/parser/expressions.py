"""
Expression parsing utilities for the GS language.

These functions operate on a `gslang.parser.parser.Parser` instance and
implement precedence climbing over the binary operator table in
`gslang.tokens`. All binary operators are left associative:

    Expression  = BinaryExpr(1) .
    BinaryExpr(p) = UnaryExpr { binary_op(prec >= p) BinaryExpr(prec + 1) } .
    UnaryExpr   = ( "+" | "-" | "!" ) UnaryExpr | PrimaryExpr .
    PrimaryExpr = Literal | "(" Expression ")" | identifier [ Call ] .

Unary operators nest, so ``5 -- 5`` is ``5 - (-5)``.


File: expressions.py
Version: 0.1.0
License: MIT
"""

from typing import TYPE_CHECKING

from gslang.ast import BadExpr, BasicLit, BinaryExpr, CallExpr, Expr, Ident, UnaryExpr
from gslang.tokens import LOWEST_PREC, TokenType

if TYPE_CHECKING:
    from gslang.parser import Parser


_UNARY_OPS = (TokenType.ADD, TokenType.SUB, TokenType.NOT)

_OPERAND_START = (TokenType.IDENT, TokenType.LPAREN) + _UNARY_OPS

# Tokens that close an enclosing construct; a failed operand leaves them in
# place for the construct to consume.
_CLOSERS = (
    TokenType.RPAREN,
    TokenType.RBRACK,
    TokenType.RBRACE,
    TokenType.SEMICOLON,
    TokenType.EOF,
)


def at_operand(parser: 'Parser') -> bool:
    """Return ``True`` if the current token can start an operand."""
    return parser.tok.is_literal() or parser.tok in _OPERAND_START


def _bad_operand(parser: 'Parser') -> BadExpr:
    pos = parser.pos
    if parser.tok not in _CLOSERS:
        parser.next()
    return BadExpr(pos, parser.pos if parser.pos > pos else pos)


# ---- Leaves ----

def parse_ident(parser: 'Parser') -> Ident:
    """Parse an identifier; on error the blank identifier stands in."""
    pos = parser.pos
    name = "_"
    if parser.tok == TokenType.IDENT:
        name = parser.lit
        parser.next()
    else:
        parser.expect(TokenType.IDENT)
        return Ident(pos, name, missing=True)
    return Ident(pos, name)


def parse_ident_list(parser: 'Parser') -> list[Ident]:
    """Parse ``ident { "," ident }``."""
    idents = [parser.ident()]
    while parser.tok == TokenType.COMMA:
        parser.next()
        idents.append(parser.ident())
    return idents


def parse_basic_lit(parser: 'Parser') -> BasicLit:
    """Parse the literal under the cursor."""
    lit = BasicLit(parser.pos, parser.tok, parser.lit)
    parser.next()
    return lit


# ---- Highest precedence ----

def parse_call(parser: 'Parser', fun: Expr) -> CallExpr:
    """Parse ``"(" [ Expression { "," Expression } [ "," ] ] ")"`` after ``fun``."""
    lparen = parser.expect(TokenType.LPAREN)
    args = []
    while parser.tok not in (TokenType.RPAREN, TokenType.EOF):
        args.append(parser.expr())
        if not parser.at_comma("argument list", TokenType.RPAREN):
            break
        parser.next()
    rparen = parser.expect_closing(TokenType.RPAREN)
    return CallExpr(fun, lparen, args, rparen)


def parse_primary_expr(parser: 'Parser') -> Expr:
    """Parse a literal, identifier, call or parenthesized expression."""
    if parser.tok.is_literal():
        return parse_basic_lit(parser)

    if parser.tok == TokenType.LPAREN:
        parser.next()
        x = parser.expr()
        parser.expect_closing(TokenType.RPAREN)
        return x

    if parser.tok == TokenType.IDENT:
        ident = parser.ident()
        parser.resolve(ident)
        # a '(' on a later line starts a new statement
        if parser.tok == TokenType.LPAREN and parser.on_line_of(ident.pos()):
            return parse_call(parser, ident)
        return ident

    parser.error_expected(parser.pos, "operand")
    return _bad_operand(parser)


def parse_unary_expr(parser: 'Parser') -> Expr:
    """Parse ``( "+" | "-" | "!" ) UnaryExpr`` or a primary expression."""
    if parser.tok in _UNARY_OPS:
        op, op_pos = parser.tok, parser.pos
        parser.next()
        if not at_operand(parser):
            parser.error(op_pos, f"expected operand after '{op}', found {parser.found()}")
            return UnaryExpr(op_pos, op, _bad_operand(parser))
        return UnaryExpr(op_pos, op, parser.unary_expr())
    return parser.primary_expr()


# ---- Binary operators ----

def parse_binary_expr(parser: 'Parser', prec1: int) -> Expr:
    """
    Parse a sequence of binary operators of precedence ``prec1`` or higher,
    folding each one into the tree built so far.
    """
    x = parser.unary_expr()
    while True:
        op = parser.tok
        oprec = op.precedence()
        if oprec < prec1:
            return x
        op_pos = parser.pos
        parser.next()
        y = parser.binary_expr(oprec + 1)
        x = BinaryExpr(x, op_pos, op, y)


# ---- Entry points ----

def parse_expr(parser: 'Parser') -> Expr:
    """Parse an expression starting from the lowest-precedence operator."""
    return parser.binary_expr(LOWEST_PREC + 1)


def parse_expr_list(parser: 'Parser') -> list[Expr]:
    """Parse ``Expression { "," Expression }``."""
    exprs = [parser.expr()]
    while parser.tok == TokenType.COMMA:
        parser.next()
        exprs.append(parser.expr())
    return exprs
