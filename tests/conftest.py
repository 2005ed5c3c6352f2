"""Shared fixtures: small API models built from plain declaration mappings."""

from typing import Any

import pytest

from doclet.api_model import ApiModel, api_model_from_dicts

SHAPES: list[dict[str, Any]] = [
    {
        "kind": "package",
        "name": "com.example",
        "comment": "Shape types. See {@link Circle} for the round one.",
    },
    {
        "kind": "class",
        "name": "Shape",
        "scope": "com.example",
        "modifiers": ["public"],
        "signature": "public abstract class Shape",
        "comment": "Base shape.",
    },
    {
        "kind": "method",
        "name": "area",
        "scope": "com.example.Shape",
        "returns": "double",
        "comment": "Computes the area. Uses {@link #scale(double)} internally.",
        "tags": [{"kind": "return", "text": "the area"}],
    },
    {
        "kind": "method",
        "name": "scale",
        "scope": "com.example.Shape",
        "parameters": [{"name": "factor", "type": "double"}],
        "returns": "void",
        "comment": "Scales the shape.",
        "tags": [{"kind": "param", "name": "factor", "text": "the multiplier"}],
    },
    {
        "kind": "field",
        "name": "name",
        "scope": "com.example.Shape",
        "type": "String",
        "comment": "Display name.",
    },
    {
        "kind": "class",
        "name": "Circle",
        "scope": "com.example",
        "superclass": "Shape",
        "interfaces": ["Drawable"],
        "comment": "A circle.",
        "tags": [
            {"kind": "see", "text": "java.util.Collections"},
            {"kind": "see", "text": "Shape#area()"},
            {"kind": "since", "text": "1.2"},
        ],
    },
    {
        "kind": "method",
        "name": "area",
        "scope": "com.example.Circle",
        "returns": "double",
        "comment": "",
    },
    {
        "kind": "constructor",
        "scope": "com.example.Circle",
        "parameters": [{"name": "radius", "type": "double"}],
        "comment": "Creates a circle.",
        "tags": [{"kind": "throws", "text": "IllegalArgumentException if negative"}],
    },
    {
        "kind": "field",
        "name": "radius",
        "scope": "com.example.Circle",
        "type": "double",
        "comment": "The radius.",
    },
    {
        "kind": "method",
        "name": "scale",
        "scope": "com.example.Circle",
        "parameters": [{"name": "s", "type": "double"}],
        "returns": "void",
        "comment": "{@inheritDoc} Circles stay round.",
    },
    {
        "kind": "interface",
        "name": "Drawable",
        "scope": "com.example",
        "comment": "Something drawable.",
    },
    {
        "kind": "method",
        "name": "draw",
        "scope": "com.example.Drawable",
        "returns": "void",
        "comment": "Draws it.",
        "tags": [{"kind": "deprecated", "text": "use {@link Shape} instead"}],
    },
]


@pytest.fixture
def shapes_model() -> ApiModel:
    """A model with a base class, a subclass and an interface."""
    return api_model_from_dicts(SHAPES)


def make_model(*decls: dict[str, Any]) -> ApiModel:
    """Build an API model from declaration mappings."""
    return api_model_from_dicts(decls)
