"""Mapping of qualified names to pages and anchors in the rendered output."""

from dataclasses import dataclass
from typing import Any

from doclet.aggregator import AggregateView
from doclet.doc_entity import DocEntity, TypeEntity
from doclet.doc_kind import DocKind
from doclet.document_model import DocumentModel
from doclet.markdown import dot_safe, header_slug
from doclet.qualified_name import simple_name


@dataclass(frozen=True)
class LinkTarget:
    """Represents where a qualified name is rendered."""

    title: str
    page_path: str  # e.g. /api/com/example/Circle or .../Circle#area-double


def page_path_for_name(api_root: str, qualified_name: str) -> str:
    """Page path of a package or type (``a.b.Foo`` -> ``/api/a/b/Foo``)."""
    parts = [dot_safe(p) for p in qualified_name.split(".")]
    return f"{api_root.rstrip('/')}/{'/'.join(parts)}"


def output_file_for_page(page_path: str) -> str:
    """Relative output file for a page path: ``/api/Foo`` -> ``api/Foo.md``."""
    return page_path.split("#", 1)[0].lstrip("/") + ".md"


def type_title(t: TypeEntity) -> str:
    """Type name relative to its package (``Outer.Inner`` for nested types)."""
    if t.package and t.qualified_name.startswith(t.package + "."):
        return t.qualified_name[len(t.package) + 1 :]
    return t.name


def member_heading(m: DocEntity) -> str:
    """Heading text of a member: ``radius`` or ``area(double)``."""
    if m.kind is DocKind.FIELD:
        return m.name
    return f"{m.name}({', '.join(simple_name(p) for p in m.parameter_types)})"


def type_heading(t: TypeEntity) -> str:
    """Heading text of a type: ``Class Circle``."""
    return f"{t.type_flavor.capitalize()} {type_title(t)}"


class _PageAnchors:
    """Hands out unique anchors per page the way Markdown renderers dedupe them."""

    def __init__(self) -> None:
        self.used: dict[str, dict[str, int]] = {}

    def anchor(self, page: str, text: str) -> str:
        slug = header_slug(text)
        seen = self.used.setdefault(page, {})
        n = seen.get(slug, 0)
        seen[slug] = n + 1
        return slug if n == 0 else f"{slug}-{n}"


def build_link_targets(
    model: DocumentModel,
    view: AggregateView,
    config: dict[str, Any],
) -> dict[str, LinkTarget]:
    """Build a map of qualified names to link targets, in emission order."""
    api_root = str(config.get("api_root") or "/api")
    by_package = config.get("layout") == "package"
    anchors = _PageAnchors()
    targets: dict[str, LinkTarget] = {}
    for pkg in view.packages:
        pkg_page = page_path_for_name(api_root, pkg)
        targets[pkg] = LinkTarget(title=pkg, page_path=pkg_page)
        for type_name in view.types_by_package.get(pkg, []):
            t = model.get_type(type_name)
            if t is None:
                continue
            if by_package:
                page = pkg_page
                type_path = f"{page}#{anchors.anchor(page, type_heading(t))}"
            else:
                page = page_path_for_name(api_root, type_name)
                anchors.anchor(page, type_heading(t))
                type_path = page
            targets[type_name] = LinkTarget(title=type_title(t), page_path=type_path)
            for member_name in view.members_by_type.get(type_name, []):
                m = model.get(member_name)
                if m is None:
                    continue
                anchor = anchors.anchor(page, member_heading(m))
                targets[member_name] = LinkTarget(
                    title=f"{type_title(t)}.{member_heading(m)}",
                    page_path=f"{page}#{anchor}",
                )
    return targets
