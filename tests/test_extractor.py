"""Tests for extracting the document model from an API model."""

import pytest

from doclet.api_model import ApiModel
from doclet.doc_entity import TypeEntity
from doclet.doc_kind import DocKind
from doclet.document_model import DocumentModel, merge_partitions
from doclet.errors import DuplicateDeclaration, MalformedDeclaration
from doclet.extractor import extract
from doclet.run_context import RunContext
from tests.conftest import make_model


def test_extract_entities(shapes_model: ApiModel) -> None:
    """Verify every declaration becomes exactly one entity."""
    model = extract(shapes_model)
    assert len(model) == len(shapes_model.declarations)
    assert list(model.entities) == [
        "com.example",
        "com.example.Shape",
        "com.example.Circle",
        "com.example.Drawable",
        "com.example.Shape#area()",
        "com.example.Shape#scale(double)",
        "com.example.Shape#name",
        "com.example.Circle#area()",
        "com.example.Circle#Circle(double)",
        "com.example.Circle#radius",
        "com.example.Circle#scale(double)",
        "com.example.Drawable#draw()",
    ]


def test_extract_type_relations(shapes_model: ApiModel) -> None:
    """Verify supertypes are qualified and members are held by name."""
    model = extract(shapes_model)
    circle = model.get_type("com.example.Circle")
    assert isinstance(circle, TypeEntity)
    assert circle.supertype == "com.example.Shape"
    assert circle.interfaces == ("com.example.Drawable",)
    assert circle.package == "com.example"
    assert circle.members == (
        "com.example.Circle#area()",
        "com.example.Circle#Circle(double)",
        "com.example.Circle#radius",
        "com.example.Circle#scale(double)",
    )
    assert model.ancestors_of("com.example.Circle") == (
        "com.example.Shape",
        "com.example.Drawable",
    )


def test_extract_doc_fields(shapes_model: ApiModel) -> None:
    """Verify comments are split and tags carry references."""
    model = extract(shapes_model)
    area = model.get("com.example.Shape#area()")
    assert area is not None
    assert area.summary == "Computes the area."
    assert area.body == "Uses {@link #scale(double)} internally."
    assert [r.text for r in area.links] == ["#scale(double)"]
    assert area.kind is DocKind.METHOD

    ctor = model.get("com.example.Circle#Circle(double)")
    assert ctor is not None
    assert ctor.kind is DocKind.CONSTRUCTOR
    throws = ctor.tags_of("throws")[0]
    assert throws.name == "IllegalArgumentException"
    assert throws.text == "if negative"
    assert throws.reference is not None

    draw = model.get("com.example.Drawable#draw()")
    assert draw is not None
    assert draw.deprecated


def test_entity_without_comment_is_kept(shapes_model: ApiModel) -> None:
    """Verify undocumented declarations still produce empty entities."""
    model = extract(shapes_model)
    area = model.get("com.example.Circle#area()")
    assert area is not None
    assert area.summary == ""
    assert area.body == ""
    assert not area.has_documentation


def test_declared_order_index(shapes_model: ApiModel) -> None:
    """Verify members are numbered in source order within their type."""
    model = extract(shapes_model)
    indexes = [m.declared_index for m in model.members_of("com.example.Circle")]
    assert indexes == [0, 1, 2, 3]


def test_nested_types() -> None:
    """Verify nested types get dotted names and the outer type's package."""
    model = extract(
        make_model(
            {"kind": "package", "name": "p"},
            {"kind": "class", "name": "Outer", "scope": "p"},
            {"kind": "class", "name": "Inner", "scope": "p.Outer"},
            {"kind": "field", "name": "x", "scope": "p.Outer.Inner", "type": "int"},
        )
    )
    inner = model.get_type("p.Outer.Inner")
    assert inner is not None
    assert inner.package == "p"
    assert inner.members == ("p.Outer.Inner#x",)


def test_duplicate_declaration() -> None:
    """Verify two declarations with the same qualified name abort extraction."""
    api = make_model(
        {"kind": "package", "name": "com.example"},
        {"kind": "class", "name": "Foo", "scope": "com.example"},
        {"kind": "method", "name": "bar", "scope": "com.example.Foo"},
        {"kind": "method", "name": "bar", "scope": "com.example.Foo"},
    )
    with pytest.raises(DuplicateDeclaration) as exc:
        extract(api)
    assert exc.value.qualified_name == "com.example.Foo#bar()"


def test_duplicate_type() -> None:
    """Verify a type declared twice is rejected."""
    api = make_model(
        {"kind": "package", "name": "p"},
        {"kind": "class", "name": "Foo", "scope": "p"},
        {"kind": "interface", "name": "Foo", "scope": "p"},
    )
    with pytest.raises(DuplicateDeclaration):
        extract(api)


def test_orphan_member_is_malformed() -> None:
    """Verify a member without an identifiable enclosing type is fatal."""
    api = make_model(
        {"kind": "package", "name": "p"},
        {"kind": "method", "name": "run", "scope": "p.Missing"},
    )
    with pytest.raises(MalformedDeclaration) as exc:
        extract(api)
    assert "p.Missing" in str(exc.value)


def test_type_outside_known_package_is_malformed() -> None:
    """Verify a type whose scope is unknown is fatal."""
    api = make_model({"kind": "class", "name": "Foo", "scope": "nowhere"})
    with pytest.raises(MalformedDeclaration):
        extract(api)


def test_unknown_kind_is_malformed() -> None:
    """Verify unknown declaration kinds are rejected."""
    with pytest.raises(MalformedDeclaration):
        extract(make_model({"kind": "module", "name": "m"}))


def test_visibility_filter() -> None:
    """Verify declarations below the configured visibility are skipped."""
    api = make_model(
        {"kind": "package", "name": "p"},
        {"kind": "class", "name": "Api", "scope": "p", "modifiers": ["public"]},
        {"kind": "method", "name": "a", "scope": "p.Api", "modifiers": ["public"]},
        {"kind": "method", "name": "b", "scope": "p.Api", "modifiers": ["private"]},
        {"kind": "class", "name": "Impl", "scope": "p"},
        {"kind": "method", "name": "c", "scope": "p.Impl", "modifiers": ["public"]},
    )
    ctx = RunContext()
    ctx.config["visibility"] = "protected"
    model = extract(api, ctx)
    assert list(model.entities) == ["p", "p.Api", "p.Api#a()"]
    assert len(extract(api)) == 6


def test_merge_partitions_collision() -> None:
    """Verify merging partitions refuses a name present in two of them."""
    first = extract(make_model({"kind": "package", "name": "p"}))
    second = extract(make_model({"kind": "package", "name": "p"}))
    with pytest.raises(DuplicateDeclaration):
        merge_partitions([first, second])
    merged = merge_partitions([first, DocumentModel()])
    assert list(merged.entities) == ["p"]


def test_package_types_are_indexed() -> None:
    """Verify each package's types are precomputed in lexical order."""
    api = make_model(
        {"kind": "package", "name": "p"},
        {"kind": "class", "name": "Zed", "scope": "p"},
        {"kind": "class", "name": "Alpha", "scope": "p"},
        {"kind": "class", "name": "Inner", "scope": "p.Zed"},
    )
    model = extract(api)
    assert model.package_types == {"p": ("p.Alpha", "p.Zed", "p.Zed.Inner")}
    assert [t.name for t in model.types_in_package("p")] == ["Alpha", "Zed", "Inner"]
    assert model.types_in_package("q") == []
