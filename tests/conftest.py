"""Pytest fixtures for scriptguard tests."""

import pytest

from scriptguard.models.types import TypeInfo
from scriptguard.typesystem.registry import TypeRegistry


@pytest.fixture
def types() -> TypeRegistry:
    """A small JVM-like type graph.

    java.lang.String extends java.lang.Object and implements
    java.lang.CharSequence and java.lang.Comparable; test.B extends test.A.
    """
    reg = TypeRegistry()
    int_ = reg.resolve("int")

    obj = reg.define("java.lang.Object")
    obj.declare_constructor()
    obj.declare_method("toString")
    obj.declare_method("hashCode")
    obj.declare_method("equals", obj)

    char_sequence = reg.define("java.lang.CharSequence")
    char_sequence.declare_method("length")
    char_sequence.declare_method("charAt", int_)

    comparable = reg.define("java.lang.Comparable")
    comparable.declare_method("compareTo", obj)

    string = reg.define("java.lang.String", "java.lang.Object", ("java.lang.CharSequence", "java.lang.Comparable"))
    string.declare_constructor()
    string.declare_constructor(string)
    string.declare_constructor(reg.resolve("char[]"))
    string.declare_method("substring", int_)
    string.declare_method("substring", int_, int_)
    string.declare_method("length")
    string.declare_method("trim")
    string.declare_method("toString")
    string.declare_method("split", string)
    string.declare_method("valueOf", int_, static=True)
    string.declare_method("valueOf", obj, static=True)
    string.declare_method("join", char_sequence, reg.resolve("java.lang.CharSequence[]"), static=True)
    string.declare_field("CASE_INSENSITIVE_ORDER", static=True)
    string.declare_field("value", public=False)

    integer = reg.define("java.lang.Integer", "java.lang.Object")
    integer.declare_constructor(int_)
    integer.declare_method("intValue")
    integer.declare_method("parseInt", string, static=True)
    integer.declare_field("MAX_VALUE", static=True)

    a = reg.define("test.A", "java.lang.Object")
    a.declare_constructor()
    a.declare_method("m")
    a.declare_method("s", static=True)
    a.declare_field("x")
    a.declare_field("CONST", static=True)

    b = reg.define("test.B", "test.A")
    b.declare_method("own")

    reg.bind(object, "java.lang.Object")
    reg.bind(str, "java.lang.String")
    reg.bind(int, "java.lang.Integer")
    return reg


@pytest.fixture
def string_type(types: TypeRegistry) -> TypeInfo:
    """The java.lang.String type."""
    return types.resolve("java.lang.String")
