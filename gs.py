"""
GS Language Interpreter

This is the main entry point for the GS language interpreter.

Workflow:
1. The source script is read from the file specified on the command line.
2. The Scanner tokenizes the source code, recording line starts.
3. The Parser builds a syntax tree, collecting every syntax error it finds.
4. If there were syntax errors, they are printed and nothing runs.
5. The Interpreter walks the tree, executing statements in order.
"""
import os
import sys

from gslang import __version__
from gslang.exceptions import GSRuntimeError, ParseError
from gslang.interpreter import Interpreter, format_value
from gslang.lexer import tokenize
from gslang.parser import parse_file
from gslang.printer import dump

SOURCE_EXT = ".gs"

_UNCLOSED = ("expected ')', found 'EOF'", "expected '}', found 'EOF'")


def print_usage():
    """
    Print usage.
    """
    print()
    print("GS Language Interpreter")
    print()
    print("Usage:")
    print("    gs [--legacy-comments] <script.gs>")
    print()
    print("Arguments:")
    print("    <script.gs>")
    print("        Path to a GS language source file to execute.")
    print()
    print("Example:")
    print("    gs hello.gs")
    print()
    print("Or run with no arguments to enter interactive mode (REPL).")
    print()
    print("Options:")
    print("    -h, --help")
    print("        Show this help message and exit.")
    print("    -v, --version")
    print("        Show the interpreter version and exit.")
    print("    --legacy-comments")
    print("        Treat ';' as the start of a line comment instead of a")
    print("        statement terminator.")


def debug_print_tokens_ast(code, filename, ast, semicolon_comments=False):
    """
    Print tokenized source and AST
    """
    print("\nTokens:\n")
    for token in tokenize(code, filename, semicolon_comments=semicolon_comments):
        print(token)
    print("\nAST:\n")
    dump(ast)
    print(" ")


def run_script(script_name: str, semicolon_comments: bool = False) -> int:
    """
    Run a GS script.

    Returns:
        int: The process exit status.
    """
    if not script_name.endswith(SOURCE_EXT):
        print(f"Error: expected a '{SOURCE_EXT}' file, got '{script_name}'", file=sys.stderr)
        return 1
    try:
        with open(script_name, "r", encoding="utf-8") as f:
            code = f.read()
    except OSError as e:
        print(f"Error: cannot read '{script_name}': {e.strerror}", file=sys.stderr)
        return 1

    try:
        ast = parse_file(script_name, code, semicolon_comments=semicolon_comments)

        if os.environ.get('GSDEBUG'):
            debug_print_tokens_ast(code, script_name, ast, semicolon_comments)

        interpreter = Interpreter(script_name)
        interpreter.execute(ast)
    except ParseError as e:
        e.errors.print()
        return 1
    except GSRuntimeError as e:
        print(f"{type(e).__name__}: {e}", file=sys.stderr)
        return 1
    return 0


def _incomplete(err: ParseError, source: str) -> bool:
    """
    Return ``True`` if the input stops inside an unclosed ``(`` or ``{``,
    meaning more lines may complete the statement. Every diagnostic must sit
    at the end of input.
    """
    if not all(e.pos.offset == len(source) for e in err.errors):
        return False
    return any(e.msg in _UNCLOSED for e in err.errors)


def run_repl(semicolon_comments: bool = False):
    """
    Run the interactive REPL
    """
    print("GS Language Interpreter - REPL")
    print("Type `exit` or `quit` to leave.")
    interpreter = Interpreter("<stdin>")
    buffer: list[str] = []
    while True:
        try:
            prompt = ">>> " if not buffer else "... "
            line = input(prompt)
            if not buffer and line.strip() in {"exit", "quit"}:
                break
            buffer.append(line)
            source = "\n".join(buffer)
            try:
                ast = parse_file("<stdin>", source, semicolon_comments=semicolon_comments)
                result = interpreter.execute(ast)
                if result is not None:
                    print(format_value(result))
                buffer.clear()
            except ParseError as e:
                # An unclosed paren or brace at EOF waits for more input
                if _incomplete(e, source):
                    continue
                e.errors.print(file=sys.stdout)
                buffer.clear()
            except GSRuntimeError as e:
                print(f"{type(e).__name__}: {e}")
                buffer.clear()
        except KeyboardInterrupt:
            print("\nInterrupted.")
            break
        except EOFError:
            print()
            break


def main(argv: list[str]) -> int:
    """
    Entry point for the CLI.

    Behaviour:
    - No arguments: enter the REPL.
    - ``-h``/``--help``: print usage and exit.
    - ``-v``/``--version``: print the version and exit.
    - One argument that is not an option: treat it as the path to a script and run it.
    - ``--legacy-comments`` may precede the script, or stand alone for the REPL.
    - Any other pattern: print usage and return a non-zero exit code.
    """
    args = argv[1:]
    semicolon_comments = False
    if args and args[0] == '--legacy-comments':
        semicolon_comments = True
        args = args[1:]

    if not args:
        run_repl(semicolon_comments)
        return 0
    if len(args) == 1 and args[0] in ('-h', '--help'):
        print_usage()
        return 0
    if len(args) == 1 and args[0] in ('-v', '--version'):
        print(f"gs {__version__}")
        return 0
    if len(args) == 1 and not args[0].startswith('-'):
        return run_script(args[0], semicolon_comments)
    print_usage()
    return 1


def entry() -> None:
    """Console script entry point."""
    sys.exit(main(sys.argv))


if __name__ == "__main__":
    entry()
