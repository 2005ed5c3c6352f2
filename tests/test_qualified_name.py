"""Tests for qualified name helpers."""

from doclet.qualified_name import (
    member_qualified_name,
    parameter_types_match,
    simple_name,
    split_member_reference,
    type_qualified_name,
)


def test_qualified_names() -> None:
    """Verify name construction for types, fields and overloads."""
    assert type_qualified_name("com.example", "Foo") == "com.example.Foo"
    assert member_qualified_name("com.example.Foo", "bar") == "com.example.Foo#bar"
    assert member_qualified_name("a.Foo", "bar", ()) == "a.Foo#bar()"
    assert (
        member_qualified_name("a.Foo", "put", ("Map<K, V>", "int"))
        == "a.Foo#put(Map<K,V>,int)"
    )


def test_simple_name() -> None:
    """Verify the last segment is returned without generics."""
    assert simple_name("java.util.List<String>") == "List"
    assert simple_name("Foo") == "Foo"


def test_split_member_reference() -> None:
    """Verify reference texts are split into type, member and parameters."""
    assert split_member_reference("Foo#bar(int, String)") == (
        "Foo",
        "bar",
        ("int", "String"),
    )
    assert split_member_reference("#bar()") == ("", "bar", ())
    assert split_member_reference("bar") == ("", "bar", None)
    assert split_member_reference("a.b.Foo#bar") == ("a.b.Foo", "bar", None)
    assert split_member_reference("#put(Map<K, V> m, int n)") == (
        "",
        "put",
        ("Map<K,V>", "int"),
    )


def test_parameter_types_match() -> None:
    """Verify parameter lists compare by simple type name."""
    assert parameter_types_match(("java.lang.String",), ("String",))
    assert parameter_types_match((), ())
    assert not parameter_types_match(("int",), ())
    assert not parameter_types_match(("int[]",), ("int",))
    assert not parameter_types_match(("long",), ("int",))
