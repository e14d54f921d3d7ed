"""
Tests for the GS scanner.
"""
from gslang.lexer import Scanner, Token, tokenize
from gslang.position import SourceFile
from gslang.tokens import TokenType as T


def kinds(source: str, **kwargs):
    """
    Return the token types of ``source``, excluding EOF.
    """
    return [t.type for t in tokenize(source, **kwargs)][:-1]


def test_token_positions():
    """
    Positions count characters from 1 across lines.
    """
    tokens = tokenize("var a = 1\ncefA := 2")
    assert [(t.type, t.value, t.pos) for t in tokens] == [
        (T.VAR, "var", 1),
        (T.IDENT, "a", 5),
        (T.ASSIGN, "=", 7),
        (T.INT, "1", 9),
        (T.IDENT, "cefA", 11),
        (T.DEFINE, ":=", 16),
        (T.INT, "2", 19),
        (T.EOF, "", 20),
    ]
    assert [t.line for t in tokens] == [1, 1, 1, 1, 2, 2, 2, 2]


def test_operators():
    assert kinds("a<=b != c && !d || e >= f == g < h > i") == [
        T.IDENT, T.LEQ, T.IDENT, T.NEQ, T.IDENT, T.LAND, T.NOT, T.IDENT,
        T.LOR, T.IDENT, T.GEQ, T.IDENT, T.EQL, T.IDENT, T.LSS, T.IDENT,
        T.GTR, T.IDENT,
    ]
    assert kinds("+-*/%(){}[],;=") == [
        T.ADD, T.SUB, T.MUL, T.QUO, T.REM, T.LPAREN, T.RPAREN, T.LBRACE,
        T.RBRACE, T.LBRACK, T.RBRACK, T.COMMA, T.SEMICOLON, T.ASSIGN,
    ]


def test_double_minus_is_two_tokens():
    assert kinds("5 -- 5") == [T.INT, T.SUB, T.SUB, T.INT]


def test_keywords():
    assert kinds("if else for func return var iffy") == [
        T.IF, T.ELSE, T.FOR, T.FUNC, T.RETURN, T.VAR, T.IDENT,
    ]


def test_strings():
    """
    String literals keep their quotes; unterminated strings are illegal.
    """
    tokens = tokenize('"hi\\n" "a\\"b"')
    assert [(t.type, t.value) for t in tokens[:2]] == [
        (T.STRING, '"hi\\n"'),
        (T.STRING, '"a\\"b"'),
    ]
    tokens = tokenize('"abc\nx')
    assert (tokens[0].type, tokens[0].value) == (T.ILLEGAL, '"abc')
    assert tokens[1].type == T.IDENT


def test_illegal_characters():
    assert kinds(": & | $") == [T.ILLEGAL, T.ILLEGAL, T.ILLEGAL, T.ILLEGAL]


def test_semicolon_terminator_and_legacy_comments():
    """
    ';' is a token unless legacy comment mode is enabled.
    """
    source = "1 + 2 ; the sum\n3"
    assert kinds(source) == [T.INT, T.ADD, T.INT, T.SEMICOLON, T.IDENT, T.IDENT, T.INT]
    assert kinds(source, semicolon_comments=True) == [T.INT, T.ADD, T.INT, T.INT]
    assert kinds("; only a comment", semicolon_comments=True) == []


def test_scanner_keeps_returning_eof():
    f = SourceFile("", "x")
    scanner = Scanner(f)
    assert scanner.scan() == ("x", T.IDENT, 1)
    assert scanner.scan() == ("", T.EOF, 2)
    assert scanner.scan() == ("", T.EOF, 2)


def test_token_unpacks_as_triple():
    lit, tok, pos = Token(T.INT, "7", 3)
    assert (lit, tok, pos) == ("7", T.INT, 3)
    assert Token(T.INT, "7", 3) == Token(T.INT, "7", 3, line=1)


def test_string_escapes():
    """
    Valid escapes keep a string a STRING token.
    """
    source = r'"\x41é\101\n\U0001F600\\"'
    tokens = tokenize(source)
    assert (tokens[0].type, tokens[0].value) == (T.STRING, source)


def test_invalid_escapes_are_illegal():
    """
    A malformed escape makes the whole literal ILLEGAL but the scanner
    still stops at the closing quote.
    """
    for lit in (r'"\x"', r'"\x4"', r'"\u12"', r'"\N"', r'"\ud800"', r'"\400"', r'"\U00110000"'):
        tokens = tokenize(lit + " y")
        assert (tokens[0].type, tokens[0].value) == (T.ILLEGAL, lit)
        assert tokens[1].type == T.IDENT
