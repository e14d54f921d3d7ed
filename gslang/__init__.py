"""GS language front end and tree-walk interpreter.

The pipeline is scanner -> parser -> interpreter:

- :mod:`gslang.lexer` turns source text into ``(literal, token, pos)`` triples.
- :mod:`gslang.parser` builds a :class:`gslang.ast.File` while resolving
  declarations against a chain of :class:`gslang.scope.Scope` frames.
- :mod:`gslang.interpreter` walks the tree and executes it.


File: __init__.py
Version: 0.1.0
License: MIT
"""

__version__ = "0.1.0"
