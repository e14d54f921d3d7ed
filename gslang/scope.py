"""Lexical scopes and resolved bindings.

The same two classes serve the parser and the interpreter. The parser uses
them to decide whether a declaration is legal and to link identifiers to the
:class:`Object` they denote; the interpreter builds its own chain and stores
runtime values in :attr:`Object.data`.

A :class:`Scope` owns its objects. Identifiers only refer to them.


File: scope.py
Version: 0.1.0
License: MIT
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class ObjKind(str, Enum):
    """
    Kinds of named language entities.
    """
    VAR = "var"
    FUN = "func"

    def __str__(self) -> str:
        return self.value


class Object:
    """
    A named entity: a variable or a function.

    ``decl`` is the declaring node (``VarStmt``, ``AssignStmt``, ``FuncStmt``
    or parameter ``Field``); ``data`` holds the runtime value.
    """
    def __init__(self, kind: ObjKind, name: str, decl=None, data: Any = None):
        self.kind = kind
        self.name = name
        self.decl = decl
        self.data = data

    def __repr__(self) -> str:
        return f"Object({self.kind.name}, {self.name!r}, data={self.data!r})"


class Scope:
    """
    A mapping from names to objects with a link to the enclosing scope.
    """
    def __init__(self, outer: Optional[Scope] = None):
        self.outer = outer
        self.objects: dict[str, Object] = {}

    def lookup_local(self, name: str) -> Optional[Object]:
        """Return the object bound to ``name`` in this scope only."""
        return self.objects.get(name)

    def lookup(self, name: str) -> Optional[Object]:
        """
        Return the object bound to ``name`` in this scope or the nearest
        enclosing one, or ``None``.
        """
        scope = self
        while scope is not None:
            obj = scope.objects.get(name)
            if obj is not None:
                return obj
            scope = scope.outer
        return None

    def insert(self, obj: Object) -> Optional[Object]:
        """
        Bind ``obj`` unless its name is already bound in this scope.

        Returns:
            The existing object (left unchanged) if there was one, else ``None``.
        """
        alt = self.objects.get(obj.name)
        if alt is None:
            self.objects[obj.name] = obj
        return alt

    def depth(self) -> int:
        """Number of enclosing scopes."""
        n = 0
        scope = self.outer
        while scope is not None:
            n += 1
            scope = scope.outer
        return n

    def __contains__(self, name: str) -> bool:
        return name in self.objects

    def __repr__(self) -> str:
        names = ", ".join(sorted(self.objects))
        return f"Scope(depth={self.depth()}, names=[{names}])"
