"""
Utility functions shared across GS Language tests.
"""
from pathlib import Path
import sys

import pytest

from gslang.exceptions import ParseError
from gslang.interpreter import Interpreter
from gslang.parser import parse_file

# Ensure the project root is on the Python path
PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.append(str(PROJECT_ROOT))


def parse_source(source: str):
    """
    Parse source code and return the File node.
    """
    return parse_file("<test>", source)


def parse_errors(source: str) -> ParseError:
    """
    Parse source code that is expected to fail and return the error.
    """
    with pytest.raises(ParseError) as excinfo:
        parse_file("<test>", source)
    return excinfo.value


def run_source(source: str):
    """
    Parse and execute source code, returning the interpreter's result.
    """
    interpreter = Interpreter("<test>")
    return interpreter.execute(parse_source(source))


def run_file(path: Path) -> Interpreter:
    """
    Run a file and return the interpreter instance after execution.
    """
    code = path.read_text()
    interpreter = Interpreter(str(path))
    interpreter.execute(parse_file(str(path), code))
    return interpreter
