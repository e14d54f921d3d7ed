"""
Tests for expression formatting and tree dumps.
"""
import io

from gslang.printer import dump, format_expr

from gslang.tests.utils import parse_source


def test_format_expr_shows_grouping():
    f = parse_source("-x\n1 + 2 * 3\n(1 + 2) * 3\nprint(a, b - 1)")
    assert [format_expr(s.x) for s in f.stmts] == [
        "-x",
        "1 + (2 * 3)",
        "(1 + 2) * 3",
        "print(a, b - 1)",
    ]


def test_dump():
    """
    Each node is printed on its own line, indented by depth, with its span.
    """
    out = io.StringIO()
    dump(parse_source("x := 1"), out)
    assert out.getvalue().splitlines() == [
        "File: <test> [1-7]",
        ".  AssignStmt: := [1-7]",
        ".  .  Ident: x -> VAR [1-2]",
        ".  .  BasicLit: INT 1 [6-7]",
    ]
