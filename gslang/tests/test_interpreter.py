"""
Tests for evaluating GS programs.
"""
import io

import pytest

from gslang.exceptions import (
    DivisionByZeroException,
    GSRuntimeError,
    LengthMismatchException,
    ParseError,
    RecursionDepthException,
    TypeMismatchException,
    UndefinedVariableException,
    UnsupportedCallException,
)
from gslang.ast import UnaryExpr
from gslang.interpreter import Interpreter, run_source as run_program
from gslang.tokens import TokenType as T

from gslang.tests.utils import parse_source, run_source


def output(capsys):
    return capsys.readouterr().out.strip().splitlines()


@pytest.mark.parametrize("source, expected", [
    ("42", 42),
    ("-5 + 3", -2),
    ("8 - (2+3) * 2", -2),
    ("1+2*3", 7),
    ("2*3+4", 10),
    ("5 -- 5", 10),
    ("-5 -- 5", 0),
    ("(1+2*3)", 7),
    ("((8 - (2+3) * 2))", -2),
    ("10 - 4 - 3", 3),
    ("7 / 2", 3),
    ("-7 / 2", -3),
    ("-7 % 2", -1),
    ("7 % -2", 1),
])
def test_single_expressions(source, expected):
    """
    A lone expression evaluates to its value.
    """
    assert run_source(source) == expected


def test_comparisons_and_logic():
    assert run_source("1 < 2") is True
    assert run_source("1 < 2 && 2 < 1") is False
    assert run_source("1 > 2 || 2 >= 2") is True
    assert run_source("!(3 != 3)") is True
    assert run_source('"a" < "b"') is True


def test_reassignment(capsys):
    run_source("var a = 10\na = a + 2 + a * 3\nprint(a)")
    assert output(capsys) == ["42"]


def test_block_shadowing(capsys):
    """
    A short declaration in a block shadows the outer binding only there.
    """
    run_source("var a = 10\n{\na := 20\nprint(a)\n}\nprint(a)")
    assert output(capsys) == ["20", "10"]


def test_assignment_updates_outer_binding(capsys):
    run_source("var a = 1\n{\na = 2\n}\nprint(a)")
    assert output(capsys) == ["2"]


def test_assignment_creates_missing_binding(capsys):
    run_source("z = 5\nprint(z)")
    assert output(capsys) == ["5"]


def test_parallel_assignment(capsys):
    """
    All right-hand sides are evaluated before anything is bound.
    """
    run_source("a, b := 1, 2\na, b = b, a\nprint(a, b)")
    assert output(capsys) == ["2", "1"]


def test_var_without_values_is_zero(capsys):
    run_source("var a, b int\nprint(a + b)")
    assert output(capsys) == ["0"]


def test_print_values(capsys):
    run_source('print(1, "two", 1 == 1, 1 != 1)\nprint("a" + "b", "x\\ty")')
    assert output(capsys) == ["1", "two", "true", "false", "ab", "x\ty"]


def test_if_else(capsys):
    source = (
        "x := 3\n"
        "if x > 2 {\n"
        "print(\"big\")\n"
        "} else {\n"
        "print(\"small\")\n"
        "}\n"
        "if x > 5 {\n"
        "print(1)\n"
        "} else if x == 3 {\n"
        "print(2)\n"
        "}\n"
    )
    run_source(source)
    assert output(capsys) == ["big", "2"]


def test_if_init_is_scoped(capsys):
    run_source("if y := 5; y % 2 == 1 {\nprint(y)\n}")
    assert output(capsys) == ["5"]
    with pytest.raises(UndefinedVariableException):
        run_source("if y := 5; y > 1 {\n}\nprint(y)")


def test_for_loops(capsys):
    source = (
        "sum := 0\n"
        "for i := 1; i <= 4; i = i + 1 {\n"
        "sum = sum + i\n"
        "}\n"
        "print(sum)\n"
        "n := 3\n"
        "for n > 0 {\n"
        "print(n)\n"
        "n = n - 1\n"
        "}\n"
    )
    run_source(source)
    assert output(capsys) == ["10", "3", "2", "1"]


def test_loop_body_gets_fresh_scope(capsys):
    source = (
        "for i := 0; i < 2; i = i + 1 {\n"
        "x := i * 10\n"
        "print(x)\n"
        "}\n"
    )
    run_source(source)
    assert output(capsys) == ["0", "10"]


def test_short_circuit(capsys):
    run_source("print(1 > 2 && missing, 1 < 2 || missing)")
    assert output(capsys) == ["false", "true"]


def test_statement_program_has_no_value():
    assert run_source("x := 1") is None
    assert run_source("print(1)") is None


def test_interpreter_keeps_bindings_between_runs():
    interpreter = Interpreter("<test>")
    interpreter.execute(parse_source("x := 40"))
    assert interpreter.execute(parse_source("x + 2")) == 42


def test_output_stream():
    out = io.StringIO()
    run_program("<test>", "print(7)", out=out)
    assert out.getvalue() == "7\n"


def test_legacy_comment_mode():
    assert run_program("<test>", "; header\n1 + 2 ; three\n", semicolon_comments=True) == 3


def test_division_by_zero():
    with pytest.raises(DivisionByZeroException) as excinfo:
        run_source("x := 1\nx / 0")
    assert str(excinfo.value) == "<test>:2:1: Division by zero in 'x / 0'"

    with pytest.raises(DivisionByZeroException):
        run_source("5 % (2 - 2)")


def test_undefined_variable():
    with pytest.raises(UndefinedVariableException) as excinfo:
        run_source("print(y)")
    assert str(excinfo.value) == "<test>:1:7: Undefined variable 'y'"


def test_length_mismatch():
    """
    Name and value counts must agree.
    """
    with pytest.raises(LengthMismatchException) as excinfo:
        run_source("var a, b = 1")
    assert str(excinfo.value) == "<test>:1:1: Assignment mismatch: 2 variables but 1 value"

    with pytest.raises(LengthMismatchException):
        run_source("a, b := 1, 2, 3")


def test_errors_stop_execution(capsys):
    with pytest.raises(UndefinedVariableException):
        run_source("print(1)\nprint(nope)\nprint(3)")
    assert output(capsys) == ["1"]


def test_type_mismatch():
    with pytest.raises(TypeMismatchException):
        run_source('1 + "a"')
    with pytest.raises(TypeMismatchException):
        run_source("if 1 {\n}")
    with pytest.raises(TypeMismatchException):
        run_source("-(1 < 2)")
    with pytest.raises(TypeMismatchException):
        run_source("1 == (1 < 2)")


def test_only_builtins_are_callable():
    with pytest.raises(UnsupportedCallException) as excinfo:
        run_source("func f() {\n}\nf()")
    assert "Cannot call 'f'" in str(excinfo.value)


def test_return_at_top_level():
    with pytest.raises(GSRuntimeError) as excinfo:
        run_source("return 1")
    assert str(excinfo.value) == "<test>:1:1: Return outside of a function"


def test_syntax_errors_prevent_execution(capsys):
    with pytest.raises(ParseError):
        run_program("<test>", "print(1)\n+")
    assert output(capsys) == []


def test_string_escapes(capsys):
    run_source('print("\\x41\\u00e9\\101", "tab\\there", "\\U0001F600")')
    assert output(capsys) == ["AéA", "tab\there", "\U0001F600"]


def test_invalid_escape_is_a_syntax_error():
    for source in ('print("\\x")', 'print("\\u12")', 'print("\\N")'):
        with pytest.raises(ParseError) as excinfo:
            run_source(source)
        assert "expected operand" in str(excinfo.value)


def test_print_result_has_no_value():
    with pytest.raises(TypeMismatchException) as excinfo:
        run_source("x := print(1)\nprint(x)")
    assert str(excinfo.value) == "<test>:1:6: 'print(1)' has no value"


def test_function_is_not_a_value(capsys):
    with pytest.raises(TypeMismatchException) as excinfo:
        run_source("func f() {\n}\nprint(f)")
    assert str(excinfo.value) == "<test>:3:7: 'f' is a function, not a value"
    assert output(capsys) == []

    with pytest.raises(TypeMismatchException):
        run_source("func f() {\n}\nf + 1")
    with pytest.raises(TypeMismatchException) as excinfo:
        run_source("func f() {\n}\nf = 1")
    assert str(excinfo.value) == "<test>:3:1: Cannot assign to function 'f'"


def test_deep_expression_is_a_runtime_error():
    """
    A tree nested beyond the interpreter's depth fails at its statement.
    """
    program = parse_source("x := 1\n-x")
    stmt = program.stmts[1]
    node = stmt.x
    for _ in range(5000):
        node = UnaryExpr(stmt.x.pos(), T.SUB, node)
    stmt.x = node

    interpreter = Interpreter("<test>")
    with pytest.raises(RecursionDepthException) as excinfo:
        interpreter.execute(program)
    assert str(excinfo.value) == "<test>:2:1: Expression nested too deeply to evaluate"
    assert interpreter.execute(parse_source("x + 1")) == 2


def test_deep_source_is_a_syntax_error(capsys):
    with pytest.raises(ParseError) as excinfo:
        run_program("<test>", "print(" + "-" * 3000 + "1)")
    assert excinfo.value.bailout
    assert output(capsys) == []
