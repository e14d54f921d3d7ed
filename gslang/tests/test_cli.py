"""
Tests for the gs command line entry point.
"""
import builtins

import gs


def write_script(tmp_path, source, name="prog.gs"):
    path = tmp_path / name
    path.write_text(source, encoding="utf-8")
    return str(path)


def test_run_script(tmp_path, capsys):
    script = write_script(tmp_path, "var a = 10\na = a + 2 + a * 3\nprint(a)\n")
    assert gs.main(["gs", script]) == 0
    assert capsys.readouterr().out.strip().splitlines() == ["42"]


def test_rejects_other_extensions(tmp_path, capsys):
    script = write_script(tmp_path, "print(1)", name="prog.txt")
    assert gs.main(["gs", script]) == 1
    assert "expected a '.gs' file" in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    assert gs.main(["gs", str(tmp_path / "nope.gs")]) == 1
    assert "cannot read" in capsys.readouterr().err


def test_syntax_errors_are_reported(tmp_path, capsys):
    """
    Every diagnostic is printed and nothing runs.
    """
    script = write_script(tmp_path, "print(1)\n+\n}\n")
    assert gs.main(["gs", script]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    lines = captured.err.strip().splitlines()
    assert len(lines) == 2
    assert lines[0] == f"{script}:2:1: expected operand after '+', found '}}'"
    assert lines[1] == f"{script}:3:1: expected statement, found '}}'"


def test_runtime_errors_are_reported(tmp_path, capsys):
    script = write_script(tmp_path, "print(1)\nprint(1 / 0)\n")
    assert gs.main(["gs", script]) == 1
    captured = capsys.readouterr()
    assert captured.out.strip() == "1"
    assert captured.err.startswith("DivisionByZeroException: ")
    assert f"{script}:2:7: Division by zero in '1 / 0'" in captured.err


def test_legacy_comments(tmp_path, capsys):
    script = write_script(tmp_path, "; comment\nprint(1) ; trailing\n")
    assert gs.main(["gs", "--legacy-comments", script]) == 0
    assert capsys.readouterr().out.strip() == "1"


def test_debug_dump(tmp_path, capsys, monkeypatch):
    monkeypatch.setenv("GSDEBUG", "1")
    script = write_script(tmp_path, "print(2)")
    assert gs.main(["gs", script]) == 0
    out = capsys.readouterr().out
    assert "Tokens:" in out
    assert "AST:" in out
    assert "CallExpr: 1 args" in out
    assert out.strip().endswith("2")


def test_help_and_version(capsys):
    assert gs.main(["gs", "--help"]) == 0
    assert "Usage:" in capsys.readouterr().out
    assert gs.main(["gs", "-v"]) == 0
    assert capsys.readouterr().out.strip() == "gs 0.1.0"
    assert gs.main(["gs", "a.gs", "b.gs"]) == 1


def test_repl(capsys, monkeypatch):
    """
    Incomplete input is buffered until it parses; expression values are echoed.
    """
    lines = iter([
        "x := 2",
        "if x > 1 {",
        "print(x)",
        "}",
        "x * 21",
        "print(y)",
        "exit",
    ])
    monkeypatch.setattr(builtins, "input", lambda prompt="": next(lines))
    assert gs.main(["gs"]) == 0
    out = capsys.readouterr().out.strip().splitlines()
    assert out[2:] == [
        "2",
        "42",
        "UndefinedVariableException: <stdin>:1:7: Undefined variable 'y'",
    ]


def test_repl_ends_on_eof(capsys, monkeypatch):
    def raise_eof(prompt=""):
        raise EOFError

    monkeypatch.setattr(builtins, "input", raise_eof)
    assert gs.main(["gs"]) == 0


def test_repl_reports_dangling_operator(capsys, monkeypatch):
    """
    Only an unclosed paren or brace keeps buffering; other errors at the
    end of input are reported at once.
    """
    lines = iter([
        "+",
        "x := (1 +",
        "2)",
        "x",
        "func f()",
        "exit",
    ])
    monkeypatch.setattr(builtins, "input", lambda prompt="": next(lines))
    assert gs.main(["gs"]) == 0
    out = capsys.readouterr().out.strip().splitlines()
    assert out[2:] == [
        "<stdin>:1:1: expected operand after '+', found 'EOF'",
        "3",
        "<stdin>:1:9: expected '{', found 'EOF'",
    ]
