"""Lexer for the GS language.

The :class:`Scanner` walks the source one character at a time holding an
explicit cursor (current character, its offset and the read offset of the
next character). Each call to :meth:`Scanner.scan` returns a
``(literal, token, pos)`` triple; once the buffer is exhausted it keeps
returning ``EOF``.

Whitespace is skipped between tokens and every newline the cursor moves past
is recorded as a line start in the :class:`gslang.position.SourceFile`, so
positions can later be turned into ``line:column`` pairs.

``;`` is the statement terminator. Sources written for the older expression
language use ``;`` to start a line comment instead; pass
``semicolon_comments=True`` to scan them. A scanner applies one of the two
policies for its whole lifetime.

Characters that do not start any token are returned as ``ILLEGAL``; turning
them into diagnostics is the parser's job.


File: lexer.py
Version: 0.1.0
License: MIT
"""

from gslang.position import Pos, SourceFile
from gslang.tokens import TokenType, lookup

EOF_CH = ""

_WHITESPACE = (" ", "\t", "\n", "\r")

_SIMPLE_ESCAPES = frozenset('abfnrtv\\"')

# escape letter: (digits, base, largest value)
_NUMERIC_ESCAPES = {
    "x": (2, 16, 0xFF),
    "u": (4, 16, 0x10FFFF),
    "U": (8, 16, 0x10FFFF),
}


def _is_letter(ch: str) -> bool:
    return ch == "_" or ch.isalpha()


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9" and ch != EOF_CH


def _digit_val(ch: str) -> int:
    if "0" <= ch <= "9" and ch != EOF_CH:
        return ord(ch) - ord("0")
    if "a" <= ch.lower() <= "f" and ch != EOF_CH:
        return ord(ch.lower()) - ord("a") + 10
    return 16  # larger than any legal digit


class Token:
    """
    Represents a lexical token with a type, literal text and position.
    """
    def __init__(self, type_: TokenType, value: str, pos: Pos, line: int = 0):
        """
        Initialize a new token.

        Parameters:
            type_ (TokenType): The token type.
            value (str): The literal text of the token.
            pos (Pos): Position of the first character.
            line (int): Line number of the first character.
        """
        self.type = type_
        self.value = value
        self.pos = pos
        self.line = line

    def __iter__(self):
        return iter((self.value, self.type, self.pos))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return (self.type, self.value, self.pos) == (other.type, other.value, other.pos)

    def __repr__(self) -> str:
        """
        Return a string representation of the token.
        """
        return f"Token({self.type.name}, {self.value!r}, pos={self.pos}, line={self.line})"


class Scanner:
    """
    Single pass, character at a time scanner.
    """
    def __init__(self, file: SourceFile, src: str | None = None, semicolon_comments: bool = False):
        """
        Initialize the scanner and read the first character.

        Parameters:
            file (SourceFile): Receives line starts and converts offsets.
            src (str): Source text; defaults to ``file.src``.
            semicolon_comments (bool): Treat ``;`` as a line comment.
        """
        self.file = file
        self.src = file.src if src is None else src
        self.semicolon_comments = semicolon_comments
        self.ch = EOF_CH     # current character
        self.offset = 0      # offset of the current character
        self.rd_offset = 0   # offset of the next character
        self._next()

    def _next(self) -> None:
        """Advance the cursor by one character."""
        if self.rd_offset < len(self.src):
            self.offset = self.rd_offset
            if self.ch == "\n":
                self.file.add_line(self.offset)
            self.ch = self.src[self.rd_offset]
            self.rd_offset += 1
        else:
            self.offset = len(self.src)
            self.ch = EOF_CH

    def _skip_whitespace(self) -> None:
        while self.ch in _WHITESPACE:
            self._next()

    def _skip_comment(self) -> None:
        # the leading ';' has already been consumed
        while self.ch not in ("\n", EOF_CH):
            self._next()

    def _scan_identifier(self) -> str:
        start = self.offset
        while _is_letter(self.ch) or _is_digit(self.ch):
            self._next()
        return self.src[start:self.offset]

    def _scan_number(self) -> str:
        start = self.offset
        while _is_digit(self.ch):
            self._next()
        return self.src[start:self.offset]

    def _scan_escape(self) -> bool:
        """
        Consume an escape sequence after its backslash and report whether it
        is valid. Scanning stops at the first character that does not fit.
        """
        ch = self.ch
        if ch in _SIMPLE_ESCAPES:
            self._next()
            return True
        if ch in _NUMERIC_ESCAPES:
            n, base, limit = _NUMERIC_ESCAPES[ch]
            self._next()
        elif _digit_val(ch) < 8:
            n, base, limit = 3, 8, 0xFF
        else:
            return False

        value = 0
        for _ in range(n):
            d = _digit_val(self.ch)
            if d >= base:
                return False
            value = value * base + d
            self._next()
        # surrogate halves are not characters
        return value <= limit and not 0xD800 <= value < 0xE000

    def _scan_string(self, start: int) -> tuple[str, TokenType]:
        # the opening quote has already been consumed
        valid = True
        while True:
            ch = self.ch
            if ch in ("\n", EOF_CH):
                return self.src[start:self.offset], TokenType.ILLEGAL
            self._next()
            if ch == '"':
                return self.src[start:self.offset], TokenType.STRING if valid else TokenType.ILLEGAL
            if ch == "\\" and not self._scan_escape():
                valid = False

    def _switch2(self, tok0: TokenType, tok1: TokenType) -> TokenType:
        """Return ``tok1`` if the current character is ``=``, else ``tok0``."""
        if self.ch == "=":
            self._next()
            return tok1
        return tok0

    def scan(self) -> tuple[str, TokenType, Pos]:
        """
        Scan the next token.

        Returns:
            tuple: ``(literal, token_type, pos)``.
        """
        while True:
            self._skip_whitespace()

            pos = self.file.pos(self.offset)
            ch = self.ch

            if _is_letter(ch):
                lit = self._scan_identifier()
                return lit, lookup(lit), pos
            if _is_digit(ch):
                return self._scan_number(), TokenType.INT, pos
            if ch == EOF_CH:
                return "", TokenType.EOF, pos

            start = self.offset
            self._next()

            if ch == ";" and self.semicolon_comments:
                self._skip_comment()
                continue

            match ch:
                case '"':
                    lit, tok = self._scan_string(start)
                    return lit, tok, pos
                case ":":
                    if self.ch == "=":
                        self._next()
                        return ":=", TokenType.DEFINE, pos
                    return ch, TokenType.ILLEGAL, pos
                case "=":
                    tok = self._switch2(TokenType.ASSIGN, TokenType.EQL)
                case "<":
                    tok = self._switch2(TokenType.LSS, TokenType.LEQ)
                case ">":
                    tok = self._switch2(TokenType.GTR, TokenType.GEQ)
                case "!":
                    tok = self._switch2(TokenType.NOT, TokenType.NEQ)
                case "&" | "|":
                    if self.ch == ch:
                        self._next()
                        return ch * 2, TokenType.LAND if ch == "&" else TokenType.LOR, pos
                    return ch, TokenType.ILLEGAL, pos
                case "+" | "-" | "*" | "/" | "%" | "(" | ")" | "[" | "]" | "{" | "}" | "," | ";":
                    tok = TokenType(ch)
                case _:
                    tok = TokenType.ILLEGAL
            return self.src[start:self.offset], tok, pos


def tokenize(code: str, filename: str = "", semicolon_comments: bool = False) -> list[Token]:
    """
    Convert a string of source code into a list of tokens.

    Parameters:
        code (str): The source code to tokenize.
        filename (str): Name used for positions.
        semicolon_comments (bool): Treat ``;`` as a line comment.

    Returns:
        list[Token]: The tokens, always terminated by an ``EOF`` token.
    """
    file = SourceFile(filename, code)
    scanner = Scanner(file, code, semicolon_comments=semicolon_comments)
    tokens = []
    while True:
        lit, tok, pos = scanner.scan()
        tokens.append(Token(tok, lit, pos, file.line(pos)))
        if tok == TokenType.EOF:
            return tokens
