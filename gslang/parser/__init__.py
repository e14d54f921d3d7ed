"""Parser package for the GS language.

This package splits the parser functionality into multiple modules to
keep the code organized. The :class:`Parser` class and the
:func:`parse_file` entry point are exposed at the package level for
convenience.


File: __init__.py
Version: 0.1.0
License: MIT
"""

from .parser import Parser, parse_file

__all__ = ["Parser", "parse_file"]
