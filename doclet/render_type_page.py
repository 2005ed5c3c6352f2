"""Logic for rendering type documentation in Markdown."""

from doclet.aggregator import AggregateView, split_links
from doclet.doc_entity import DocEntity, Tag, TypeEntity
from doclet.doc_kind import MEMBER_GROUPS, DocKind
from doclet.document_model import DocumentModel
from doclet.link_target import LinkTarget, member_heading, type_heading, type_title
from doclet.markdown import heading, md_codeblock, md_table
from doclet.merged_doc import MergedDoc
from doclet.rewrite_links import render_reference, rewrite_links

GROUP_TITLES = {
    DocKind.CONSTRUCTOR: "Constructors",
    DocKind.FIELD: "Fields",
    DocKind.METHOD: "Methods",
}

# Block tags rendered as "**Label:** text" lines.
LABELLED_TAGS = {"since": "Since", "version": "Version", "author": "Author"}


def render_type_page(
    t: TypeEntity,
    model: DocumentModel,
    view: AggregateView,
    targets: dict[str, LinkTarget],
    *,
    code_language: str = "java",
) -> str:
    """Render a standalone type page with front matter."""
    target = targets.get(t.qualified_name)
    parts = ["---", f"qualified_name: {t.qualified_name}"]
    if target:
        parts.append(f"canonical_path: {target.page_path}")
    parts += ["---", ""]
    parts += render_type_section(
        t, model, view, targets, level=1, code_language=code_language
    )
    return "\n".join(parts).rstrip() + "\n"


def render_type_section(
    t: TypeEntity,
    model: DocumentModel,
    view: AggregateView,
    targets: dict[str, LinkTarget],
    *,
    level: int,
    code_language: str = "java",
) -> list[str]:
    """Render a type and its members with the title at heading ``level``."""
    doc = view.doc(t.qualified_name)
    parts = [heading(level, type_heading(t)), ""]

    pkg = targets.get(t.package)
    pkg_link = f"[{t.package}]({pkg.page_path})" if pkg else f"`{t.package}`"
    parts += [f"**Package:** {pkg_link}", ""]

    parts.extend(_render_deprecated(doc, targets))
    parts.extend(_render_text(doc, targets))

    if t.signature:
        parts += [md_codeblock(code_language, t.signature), ""]

    parts.extend(_render_inheritance(t, model, targets, level + 1))
    parts.extend(_render_implements(t, targets, level + 1))
    parts.extend(_render_labelled_tags(doc, targets))

    members = [model.get(m) for m in view.members_by_type.get(t.qualified_name, [])]
    for kind in MEMBER_GROUPS:
        group = [m for m in members if m is not None and m.kind is kind]
        if not group:
            continue
        parts += [heading(level + 1, GROUP_TITLES[kind]), ""]
        for m in group:
            parts.extend(_render_member(m, view, targets, level + 2, code_language))

    parts.extend(_render_seealso(doc, targets, level + 1))
    return parts


def _render_text(doc: MergedDoc, targets: dict[str, LinkTarget]) -> list[str]:
    """Render summary and body paragraphs."""
    summary_links, body_links = split_links(doc.summary, doc.links)
    parts = []
    summary = rewrite_links(doc.summary, summary_links, targets)
    if summary:
        parts += [summary, ""]
    body = rewrite_links(doc.body, body_links, targets)
    if body:
        parts += [body, ""]
    return parts


def _render_deprecated(doc: MergedDoc, targets: dict[str, LinkTarget]) -> list[str]:
    tags = doc.tags_of("deprecated")
    if not tags:
        return []
    text = rewrite_links(tags[0].text, tags[0].links, targets)
    return [f"> **Deprecated.** {text}".rstrip(), ""]


def _render_inheritance(
    t: TypeEntity,
    model: DocumentModel,
    targets: dict[str, LinkTarget],
    level: int,
) -> list[str]:
    """Render the superclass chain, root first."""
    chain: list[str] = []
    seen = {t.qualified_name}
    current = t.supertype
    while current and current not in seen:
        seen.add(current)
        target = targets.get(current)
        chain.append(
            f"[{target.title}]({target.page_path})" if target else f"`{current}`"
        )
        parent = model.get_type(current)
        current = parent.supertype if parent else None
    if not chain:
        return []
    chain.reverse()
    chain.append(type_title(t))
    return [heading(level, "Inheritance"), " → ".join(chain), ""]


def _render_implements(
    t: TypeEntity,
    targets: dict[str, LinkTarget],
    level: int,
) -> list[str]:
    if not t.interfaces:
        return []
    links = []
    for name in t.interfaces:
        target = targets.get(name)
        links.append(
            f"[{target.title}]({target.page_path})" if target else f"`{name}`"
        )
    title = "Extends" if t.type_flavor == "interface" else "Implements"
    return [heading(level, title), ", ".join(links), ""]


def _render_labelled_tags(doc: MergedDoc, targets: dict[str, LinkTarget]) -> list[str]:
    parts = []
    for kind, label in LABELLED_TAGS.items():
        for tag in doc.tags_of(kind):
            parts.append(f"**{label}:** {rewrite_links(tag.text, tag.links, targets)}")
    if parts:
        parts.append("")
    return parts


def _render_member(
    m: DocEntity,
    view: AggregateView,
    targets: dict[str, LinkTarget],
    level: int,
    code_language: str,
) -> list[str]:
    """Render a single member section."""
    doc = view.doc(m.qualified_name)
    parts = [heading(level, member_heading(m)), ""]
    if m.signature:
        parts += [md_codeblock(code_language, m.signature), ""]

    parts.extend(_render_deprecated(doc, targets))
    parts.extend(_render_text(doc, targets))
    if doc.inherited_from:
        source = targets.get(doc.inherited_from)
        label = (
            f"[{source.title}]({source.page_path})" if source else doc.inherited_from
        )
        parts += [f"*Description copied from {label}.*", ""]

    parts.extend(_render_params(m, doc, targets, level + 1))
    parts.extend(_render_returns(m, doc, targets, level + 1))
    parts.extend(_render_throws(doc, targets, level + 1))
    parts.extend(_render_labelled_tags(doc, targets))
    parts.extend(_render_seealso(doc, targets, level + 1))
    return parts


def _render_params(
    m: DocEntity,
    doc: MergedDoc,
    targets: dict[str, LinkTarget],
    level: int,
) -> list[str]:
    if m.kind is DocKind.FIELD or not m.parameter_types:
        return []
    rows: list[list[str]] = []
    for pname, ptype in zip(m.parameter_names, m.parameter_types, strict=True):
        tag = doc.param_tag(pname)
        desc = rewrite_links(tag.text, tag.links, targets) if tag else ""
        rows.append([f"`{pname}`" if pname else "", f"`{ptype}`", desc])
    return [
        heading(level, "Parameters"),
        "",
        md_table(["Name", "Type", "Description"], rows),
        "",
    ]


def _render_returns(
    m: DocEntity,
    doc: MergedDoc,
    targets: dict[str, LinkTarget],
    level: int,
) -> list[str]:
    if m.kind is DocKind.CONSTRUCTOR:
        return []
    rtype = m.return_type if m.return_type != "void" else ""
    tags = doc.tags_of("return")
    rdesc = rewrite_links(tags[0].text, tags[0].links, targets) if tags else ""
    if not rtype and not rdesc:
        return []
    label = "Field Value" if m.kind is DocKind.FIELD else "Returns"
    parts = [heading(level, label), ""]
    if rtype:
        parts += [f"**Type:** `{rtype}`", ""]
    if rdesc:
        parts += [rdesc, ""]
    return parts


def _render_throws(
    doc: MergedDoc,
    targets: dict[str, LinkTarget],
    level: int,
) -> list[str]:
    tags = doc.tags_of("throws")
    if not tags:
        return []
    parts = [heading(level, "Throws"), ""]
    for tag in tags:
        et = (
            render_reference(tag.reference, targets)
            if tag.reference
            else f"`{tag.name}`"
        )
        ed = rewrite_links(tag.text, tag.links, targets)
        parts.append(f"- {et} — {ed}" if ed else f"- {et}")
    parts.append("")
    return parts


def _render_seealso(
    doc: MergedDoc,
    targets: dict[str, LinkTarget],
    level: int,
) -> list[str]:
    tags: list[Tag] = doc.tags_of("see")
    if not tags:
        return []
    parts = [heading(level, "See also")]
    for tag in tags:
        if tag.reference is not None:
            parts.append(f"- {render_reference(tag.reference, targets)}")
        else:
            parts.append(f"- {rewrite_links(tag.text, tag.links, targets)}")
    parts.append("")
    return parts
