"""Logic for rendering package pages."""

from doclet.aggregator import AggregateView, split_links
from doclet.document_model import DocumentModel
from doclet.link_target import LinkTarget, type_title
from doclet.render_type_page import render_type_section
from doclet.rewrite_links import rewrite_links

# Type flavors in the order their groups appear on a package page.
FLAVOR_TITLES = {
    "interface": "Interfaces",
    "class": "Classes",
    "enum": "Enums",
    "record": "Records",
    "annotation": "Annotation Types",
}


def _render_package_text(
    package: str,
    view: AggregateView,
    targets: dict[str, LinkTarget],
) -> list[str]:
    doc = view.doc(package)
    summary_links, body_links = split_links(doc.summary, doc.links)
    parts = []
    for text, links in ((doc.summary, summary_links), (doc.body, body_links)):
        rendered = rewrite_links(text, links, targets)
        if rendered:
            parts += [rendered, ""]
    return parts


def render_package_page(
    package: str,
    model: DocumentModel,
    view: AggregateView,
    targets: dict[str, LinkTarget],
) -> str:
    """Render a package landing page listing its types by flavor."""
    parts: list[str] = [f"# Package {package}", ""]
    parts.extend(_render_package_text(package, view, targets))

    types = [model.get_type(n) for n in view.types_by_package.get(package, [])]
    for flavor, title in FLAVOR_TITLES.items():
        matches = [t for t in types if t is not None and t.type_flavor == flavor]
        if not matches:
            continue
        parts += [f"## {title}", ""]
        for t in matches:
            target = targets.get(t.qualified_name)
            name = type_title(t)
            link = f"[{name}]({target.page_path})" if target else name
            parts.append(f"### {link}")
            doc = view.doc(t.qualified_name)
            summary_links, _ = split_links(doc.summary, doc.links)
            summ = rewrite_links(doc.summary, summary_links, targets)
            if summ:
                parts.append(summ.replace("\n", " "))
            parts.append("")

    return "\n".join(parts).rstrip() + "\n"


def render_collapsed_package_page(
    package: str,
    model: DocumentModel,
    view: AggregateView,
    targets: dict[str, LinkTarget],
    *,
    code_language: str = "java",
) -> str:
    """Render one page holding a package and every type in it."""
    target = targets.get(package)
    parts = ["---", f"qualified_name: {package}"]
    if target:
        parts.append(f"canonical_path: {target.page_path}")
    parts += ["---", "", f"# Package {package}", ""]
    parts.extend(_render_package_text(package, view, targets))
    for type_name in view.types_by_package.get(package, []):
        t = model.get_type(type_name)
        if t is not None:
            parts.extend(
                render_type_section(
                    t, model, view, targets, level=2, code_language=code_language
                )
            )
    return "\n".join(parts).rstrip() + "\n"
