"""Errors.

Syntax errors are collected by the parser and raised together as one
:class:`ParseError`. Runtime errors are fatal: the interpreter raises the
first one it meets and stops.


File: exceptions.py
Version: 0.1.0
License: MIT
"""

from gslang.errors import ErrorList


class ParseError(SyntaxError):
    """
    Raised when parsing produced at least one diagnostic.
    """
    def __init__(self, errors: ErrorList, bailout: bool = False):
        self.errors = errors
        self.bailout = bailout
        super().__init__(str(errors))


class GSRuntimeError(RuntimeError):
    """
    Base class for errors raised while executing a program.
    """
    def __init__(self, message, pos=None):
        self.pos = pos
        if pos is not None:
            message = f"{pos}: {message}"
        super().__init__(message)


class UndefinedVariableException(GSRuntimeError):
    """
    Error for undefined variables.
    """
    def __init__(self, varname, pos=None):
        self.varname = varname
        super().__init__(f"Undefined variable '{varname}'", pos)


class DivisionByZeroException(GSRuntimeError):
    """
    Error for integer division or remainder by zero.
    """
    def __init__(self, expr, pos=None):
        self.expr = expr
        super().__init__(f"Division by zero in '{expr}'", pos)


class TypeMismatchException(GSRuntimeError):
    """
    Error for operands of the wrong type.
    """


class LengthMismatchException(GSRuntimeError):
    """
    Error for name and value lists of different lengths.
    """
    def __init__(self, names, values, pos=None):
        self.names = names
        self.values = values
        super().__init__(
            f"Assignment mismatch: {names} variable{'s' if names != 1 else ''} "
            f"but {values} value{'s' if values != 1 else ''}",
            pos,
        )


class UnsupportedCallException(GSRuntimeError):
    """
    Error for calls to anything other than a built-in function.
    """
    def __init__(self, name, pos=None):
        self.name = name
        super().__init__(f"Cannot call '{name}': only built-in functions can be called", pos)


class RecursionDepthException(GSRuntimeError):
    """
    Error for programs nested too deeply to evaluate.
    """
    def __init__(self, pos=None):
        super().__init__("Expression nested too deeply to evaluate", pos)
