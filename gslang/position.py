"""Source positions.

A ``Pos`` is a compact integer: the byte offset of a character plus the base
of the file it belongs to. With a base of 1 the first character of a file has
``Pos`` 1, which leaves 0 free to mean "no position" (``NO_POS``).

Positions are only translated into human readable line and column numbers
when a diagnostic is reported. :class:`SourceFile` keeps the offsets at which
each line starts so that translation is a binary search.


File: position.py
Version: 0.1.0
License: MIT
"""

from bisect import bisect_right
from dataclasses import dataclass

Pos = int

NO_POS: Pos = 0


def is_valid(pos: Pos) -> bool:
    """Return ``True`` unless ``pos`` is ``NO_POS``."""
    return pos != NO_POS


@dataclass(frozen=True)
class Position:
    """
    Human readable source location.
    """
    filename: str = ""
    offset: int = 0  # starting at 0
    line: int = 0    # starting at 1
    column: int = 0  # starting at 1 (character count)

    def is_valid(self) -> bool:
        """A position is valid once it has a line number."""
        return self.line > 0

    def __str__(self) -> str:
        s = self.filename
        if self.is_valid():
            if s:
                s += ":"
            s += f"{self.line}:{self.column}"
        return s or "-"


class SourceFile:
    """
    A single source buffer with its name and line table.
    """
    def __init__(self, name: str, src: str, base: int = 1):
        """
        Initialize the file.

        Parameters:
            name (str): The file name, may be empty.
            src (str): The full source text.
            base (int): The ``Pos`` of the first character.
        """
        self.name = name
        self.src = src
        self.base = base
        self.size = len(src)
        # lines[i] is the offset of the first character of line i + 1
        self.lines: list[int] = [0] if self.size > 0 else []

    def add_line(self, offset: int) -> None:
        """
        Record the start of a new line.

        Raises:
            ValueError: If ``offset`` does not follow the previous line start
                or lies outside the buffer.
        """
        if (not self.lines or self.lines[-1] < offset) and offset < self.size:
            self.lines.append(offset)
            return
        raise ValueError(f"Invalid line offset {offset} in {self.name or '<source>'}")

    def line_count(self) -> int:
        """Number of lines seen so far."""
        return len(self.lines)

    def pos(self, offset: int) -> Pos:
        """
        Convert a file offset into a ``Pos``; ``offset`` may equal the size.
        """
        if offset < 0 or offset > self.size:
            raise ValueError(f"Illegal file offset {offset}")
        return self.base + offset

    def offset(self, pos: Pos) -> int:
        """
        Convert a ``Pos`` belonging to this file back into an offset.
        """
        if pos < self.base or pos > self.base + self.size:
            raise ValueError(f"Illegal Pos value {pos}")
        return pos - self.base

    def position(self, pos: Pos) -> Position:
        """
        Translate ``pos`` into a :class:`Position`. ``NO_POS`` yields a
        position that only carries the file name.
        """
        if not is_valid(pos):
            return Position(filename=self.name)
        offset = self.offset(pos)
        i = bisect_right(self.lines, offset) - 1
        if i < 0:
            return Position(filename=self.name, offset=offset, line=1, column=offset + 1)
        return Position(
            filename=self.name,
            offset=offset,
            line=i + 1,
            column=offset - self.lines[i] + 1,
        )

    def line(self, pos: Pos) -> int:
        """Return the line number of ``pos``."""
        return self.position(pos).line

    def __repr__(self) -> str:
        return f"SourceFile({self.name!r}, size={self.size}, lines={len(self.lines)})"
