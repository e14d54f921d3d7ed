"""
Tests for scopes and diagnostic lists.
"""
import io

from gslang.errors import ErrorList
from gslang.position import Position
from gslang.scope import Object, ObjKind, Scope


def test_scope_chain_lookup():
    outer = Scope()
    inner = Scope(outer)
    a = Object(ObjKind.VAR, "a")
    assert outer.insert(a) is None
    assert inner.lookup("a") is a
    assert inner.lookup_local("a") is None
    assert "a" in outer and "a" not in inner


def test_insert_returns_existing_object():
    scope = Scope()
    first = Object(ObjKind.VAR, "a")
    scope.insert(first)
    assert scope.insert(Object(ObjKind.FUN, "a")) is first
    assert scope.lookup("a") is first


def test_error_list_formatting():
    errors = ErrorList()
    assert str(errors) == "no errors"
    errors.add(Position("f.gs", 10, 2, 3), "second")
    assert str(errors) == "f.gs:2:3: second"
    errors.add(Position("f.gs", 0, 1, 1), "first")
    assert str(errors) == "f.gs:2:3: second (and 1 more errors)"
    errors.sort()
    assert [e.msg for e in errors] == ["first", "second"]

    out = io.StringIO()
    errors.print(out)
    assert out.getvalue() == "f.gs:1:1: first\nf.gs:2:3: second\n"

    errors.reset()
    assert len(errors) == 0
