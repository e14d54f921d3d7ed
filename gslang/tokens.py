"""Token kinds for the GS language.

The token set is closed and split in three partitions: control tokens
(``EOF``, ``ILLEGAL``, ``COMMENT``), literal kinds and operator/keyword kinds.
Operators and keywords use their spelling as the enum value so that
``str(TokenType.ADD) == "+"`` reads naturally in diagnostics.


File: tokens.py
Version: 0.1.0
License: MIT
"""

from enum import Enum


class TokenType(str, Enum):
    """
    Enumeration of token kinds produced by the scanner.
    """

    # Control
    EOF = "EOF"
    ILLEGAL = "ILLEGAL"
    COMMENT = "COMMENT"

    # Literals
    INT = "INT"        # 12
    FLOAT = "FLOAT"    # 1.2
    CHAR = "CHAR"      # 'a'
    STRING = "STRING"  # "abc"

    # Operators and delimiters
    IDENT = "IDENT"

    ADD = "+"
    SUB = "-"
    MUL = "*"
    QUO = "/"
    REM = "%"

    LAND = "&&"
    LOR = "||"

    LPAREN = "("
    RPAREN = ")"
    LBRACK = "["
    RBRACK = "]"
    LBRACE = "{"
    RBRACE = "}"

    COMMA = ","
    SEMICOLON = ";"

    EQL = "=="
    LSS = "<"
    GTR = ">"
    NOT = "!"

    NEQ = "!="
    LEQ = "<="
    GEQ = ">="

    ASSIGN = "="
    DEFINE = ":="

    # Keywords
    IF = "if"
    ELSE = "else"
    FOR = "for"
    FUNC = "func"
    RETURN = "return"
    VAR = "var"

    def __str__(self) -> str:
        return self.value

    def is_literal(self) -> bool:
        """Literal kinds: INT, FLOAT, CHAR, STRING."""
        return self in _LITERALS

    def is_operator(self) -> bool:
        """Operators, delimiters and the identifier kind."""
        return self in _OPERATORS

    def is_keyword(self) -> bool:
        """Reserved words."""
        return self in _KEYWORDS

    def precedence(self) -> int:
        """
        Binary precedence of the token, ``LOWEST_PREC`` for tokens that are
        not binary operators.
        """
        return _PRECEDENCE.get(self, LOWEST_PREC)


_LITERALS = frozenset({TokenType.INT, TokenType.FLOAT, TokenType.CHAR, TokenType.STRING})

_KEYWORDS = frozenset({
    TokenType.IF,
    TokenType.ELSE,
    TokenType.FOR,
    TokenType.FUNC,
    TokenType.RETURN,
    TokenType.VAR,
})

_OPERATORS = frozenset(
    t for t in TokenType
    if t not in _LITERALS
    and t not in _KEYWORDS
    and t not in (TokenType.EOF, TokenType.ILLEGAL, TokenType.COMMENT)
)

LOWEST_PREC = 0   # non-operators
UNARY_PREC = 6
HIGHEST_PREC = 7

_PRECEDENCE = {
    TokenType.LOR: 1,
    TokenType.LAND: 2,
    TokenType.EQL: 3,
    TokenType.NEQ: 3,
    TokenType.LSS: 3,
    TokenType.LEQ: 3,
    TokenType.GTR: 3,
    TokenType.GEQ: 3,
    TokenType.ADD: 4,
    TokenType.SUB: 4,
    TokenType.MUL: 5,
    TokenType.QUO: 5,
    TokenType.REM: 5,
}

KEYWORDS = {t.value: t for t in _KEYWORDS}


def lookup(ident: str) -> TokenType:
    """
    Map an identifier-shaped lexeme to its keyword token, or ``IDENT``.
    """
    return KEYWORDS.get(ident, TokenType.IDENT)


__all__ = ["TokenType", "lookup", "KEYWORDS", "LOWEST_PREC", "UNARY_PREC", "HIGHEST_PREC"]
