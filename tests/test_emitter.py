"""Tests for rendering the aggregated model."""

import json
from pathlib import Path

from doclet.aggregator import aggregate
from doclet.api_model import ApiModel
from doclet.emitter import emit, write_documents
from doclet.extractor import extract
from doclet.link_target import build_link_targets, output_file_for_page
from doclet.markdown import dot_safe, header_slug, md_codeblock, md_table
from doclet.resolver import resolve_references
from doclet.run_context import RunContext
from tests.conftest import make_model


def _emit(shapes_model: ApiModel, **config: object) -> dict[str, str]:
    ctx = RunContext()
    ctx.config.update(config)
    model = extract(shapes_model, ctx)
    resolve_references(model, ctx)
    return emit(model, aggregate(model, ctx), ctx)


def test_markdown_helpers() -> None:
    """Verify the small Markdown utilities."""
    assert header_slug("area(double)") == "area-double"
    assert header_slug("  Trim Me  ") == "trim-me"
    assert dot_safe("Outer$Inner") == "Outer-Inner"
    assert md_codeblock("java", "int x;\n") == "```java\nint x;\n```"
    assert md_table([], []) == ""
    assert md_table(["A"], [["x|y"]]) == "| A |\n| --- |\n| x\\|y |"
    assert output_file_for_page("/api/com/example/Foo#bar") == "api/com/example/Foo.md"


def test_link_targets(shapes_model: ApiModel) -> None:
    """Verify pages and member anchors."""
    model = extract(shapes_model)
    view = aggregate(model)
    targets = build_link_targets(model, view, RunContext().config)
    assert targets["com.example"].page_path == "/api/com/example"
    assert targets["com.example.Shape"].page_path == "/api/com/example/Shape"
    area = targets["com.example.Shape#area()"]
    assert area.page_path == "/api/com/example/Shape#area"
    assert area.title == "Shape.area()"
    assert (
        targets["com.example.Shape#scale(double)"].page_path
        == "/api/com/example/Shape#scale-double"
    )


def test_type_pages(shapes_model: ApiModel) -> None:
    """Verify one page per type plus package landing pages."""
    docs = _emit(shapes_model)
    assert sorted(docs) == [
        "api/com/example.md",
        "api/com/example/Circle.md",
        "api/com/example/Drawable.md",
        "api/com/example/Shape.md",
    ]
    page = docs["api/com/example/Circle.md"]
    assert page.startswith("---\nqualified_name: com.example.Circle\n")
    assert "# Class Circle" in page
    assert page.index("## Constructors") < page.index("## Fields")
    assert page.index("## Fields") < page.index("## Methods")
    assert "[Shape](/api/com/example/Shape) → Circle" in page
    assert "- `java.util.Collections`" in page
    assert "- [Shape.area()](/api/com/example/Shape#area)" in page
    assert "**Since:** 1.2" in page


def test_inherited_member_rendering(shapes_model: ApiModel) -> None:
    """Verify inherited docs and their links render on the subtype page."""
    page = _emit(shapes_model)["api/com/example/Circle.md"]
    copied = "*Description copied from [Shape.area()](/api/com/example/Shape#area).*"
    assert copied in page
    assert (
        "Uses [Shape.scale(double)](/api/com/example/Shape#scale-double) internally."
        in page
    )
    assert "| `s` | `double` | the multiplier |" in page
    assert "- `IllegalArgumentException` — if negative" in page


def test_deprecated_rendering(shapes_model: ApiModel) -> None:
    """Verify deprecation notes render with resolved links."""
    page = _emit(shapes_model)["api/com/example/Drawable.md"]
    assert "> **Deprecated.** use [Shape](/api/com/example/Shape) instead" in page


def test_package_page(shapes_model: ApiModel) -> None:
    """Verify the landing page groups types by flavor."""
    page = _emit(shapes_model)["api/com/example.md"]
    assert page.startswith("# Package com.example")
    assert "See [Circle](/api/com/example/Circle) for the round one." in page
    assert page.index("## Interfaces") < page.index("## Classes")
    assert "### [Circle](/api/com/example/Circle)\nA circle." in page


def test_collapsed_package_layout(shapes_model: ApiModel) -> None:
    """Verify the package layout emits a single page with type anchors."""
    docs = _emit(shapes_model, layout="package", include_home_page=True)
    assert sorted(docs) == ["api/com/example.md", "home.md"]
    page = docs["api/com/example.md"]
    assert "## Class Circle" in page
    assert "### Constructors" in page
    assert "[Shape](/api/com/example#class-shape)" in page
    assert "- [com.example](/api/com/example)" in docs["home.md"]


def test_json_format(shapes_model: ApiModel) -> None:
    """Verify the JSON document carries the ordered, resolved model."""
    docs = _emit(shapes_model, format="json")
    data = json.loads(docs["api.json"])
    pkg = data["packages"][0]
    assert pkg["qualified_name"] == "com.example"
    assert [t["name"] for t in pkg["types"]] == ["Circle", "Drawable", "Shape"]
    circle = pkg["types"][0]
    assert circle["supertype"] == "com.example.Shape"
    members = [m["qualified_name"] for m in circle["members"]]
    assert members[0] == "com.example.Circle#Circle(double)"
    see = circle["tags"][0]["reference"]
    assert see == {"text": "java.util.Collections", "label": "", "target": None}
    area = circle["members"][2]
    assert area["inherited_from"] == "com.example.Shape#area()"


def test_emit_is_pure(shapes_model: ApiModel) -> None:
    """Verify emitting twice gives the same documents."""
    ctx = RunContext()
    model = extract(shapes_model, ctx)
    resolve_references(model, ctx)
    view = aggregate(model, ctx)
    assert emit(model, view, ctx) == emit(model, view, ctx)


def test_write_documents(tmp_path: Path) -> None:
    """Verify documents are written below the output root."""
    written = write_documents(tmp_path, {"api/a/B.md": "# B\n", "home.md": "# Home\n"})
    assert written == 2
    assert (tmp_path / "api" / "a" / "B.md").read_text(encoding="utf-8") == "# B\n"


def test_nested_type_inheritance_chain() -> None:
    """Verify a nested type ends its inheritance chain with its outer name."""
    api = make_model(
        {"kind": "package", "name": "p"},
        {"kind": "class", "name": "Base", "scope": "p"},
        {"kind": "class", "name": "Outer", "scope": "p"},
        {"kind": "class", "name": "Inner", "scope": "p.Outer", "superclass": "Base"},
    )
    ctx = RunContext()
    model = extract(api, ctx)
    resolve_references(model, ctx)
    page = emit(model, aggregate(model, ctx), ctx)["api/p/Outer/Inner.md"]
    assert "# Class Outer.Inner" in page
    assert "[Base](/api/p/Base) → Outer.Inner" in page
