"""Parser diagnostics.

A diagnostic is a :class:`gslang.position.Position` plus a message. The
parser collects them in an :class:`ErrorList` instead of stopping at the
first problem, up to :data:`MAX_ERRORS` entries.


File: errors.py
Version: 0.1.0
License: MIT
"""

import sys
from dataclasses import dataclass
from typing import Iterator

from gslang.position import Position

MAX_ERRORS = 10


@dataclass(frozen=True)
class Error:
    """
    A single positioned diagnostic.
    """
    pos: Position
    msg: str

    def __str__(self) -> str:
        if self.pos.filename or self.pos.is_valid():
            return f"{self.pos}: {self.msg}"
        return self.msg


class ErrorList:
    """
    Ordered collection of diagnostics.
    """
    def __init__(self):
        self._errors: list[Error] = []

    def add(self, pos: Position, msg: str) -> None:
        """Append a diagnostic."""
        self._errors.append(Error(pos, msg))

    def reset(self) -> None:
        """Drop all diagnostics."""
        self._errors.clear()

    def sort(self) -> None:
        """Sort by file, line and column; the sort is stable."""
        self._errors.sort(key=lambda e: (e.pos.filename, e.pos.line, e.pos.column))

    def __len__(self) -> int:
        return len(self._errors)

    def __iter__(self) -> Iterator[Error]:
        return iter(self._errors)

    def __getitem__(self, index: int) -> Error:
        return self._errors[index]

    def __str__(self) -> str:
        match len(self._errors):
            case 0:
                return "no errors"
            case 1:
                return str(self._errors[0])
            case n:
                return f"{self._errors[0]} (and {n - 1} more errors)"

    def print(self, file=None) -> None:
        """Print one diagnostic per line, to stderr by default."""
        out = file if file is not None else sys.stderr
        for err in self._errors:
            print(err, file=out)
