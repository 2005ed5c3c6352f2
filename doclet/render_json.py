"""Serialization of the ordered, resolved model as a single JSON document."""

import json
from typing import Any

from doclet.aggregator import AggregateView
from doclet.doc_entity import DocEntity, Tag, TypeEntity
from doclet.document_model import DocumentModel
from doclet.link_target import LinkTarget
from doclet.reference import Reference, ResolvedLink

SCHEMA_VERSION = 1


def _reference(ref: Reference, targets: dict[str, LinkTarget]) -> dict[str, Any]:
    out: dict[str, Any] = {"text": ref.text, "label": ref.label}
    if isinstance(ref.resolution, ResolvedLink):
        out["target"] = ref.resolution.target
        t = targets.get(ref.resolution.target)
        out["href"] = t.page_path if t else None
    else:
        out["target"] = None
    return out


def _tag(tag: Tag, targets: dict[str, LinkTarget]) -> dict[str, Any]:
    out: dict[str, Any] = {"kind": tag.kind, "name": tag.name, "text": tag.text}
    if tag.reference is not None:
        out["reference"] = _reference(tag.reference, targets)
    if tag.links:
        out["links"] = [_reference(r, targets) for r in tag.links]
    return out


def _entity(
    e: DocEntity,
    view: AggregateView,
    targets: dict[str, LinkTarget],
) -> dict[str, Any]:
    doc = view.doc(e.qualified_name)
    t = targets.get(e.qualified_name)
    out: dict[str, Any] = {
        "qualified_name": e.qualified_name,
        "kind": e.kind.value,
        "name": e.name,
        "href": t.page_path if t else None,
        "summary": doc.summary,
        "body": doc.body,
        "links": [_reference(r, targets) for r in doc.links],
        "tags": [_tag(tag, targets) for tag in doc.tags],
        "deprecated": e.deprecated,
    }
    if doc.inherited_from:
        out["inherited_from"] = doc.inherited_from
    if e.signature:
        out["signature"] = e.signature
    if e.parameter_types:
        out["parameters"] = [
            {"name": n, "type": p}
            for n, p in zip(e.parameter_names, e.parameter_types, strict=True)
        ]
    if e.return_type:
        out["type"] = e.return_type
    if isinstance(e, TypeEntity):
        out["flavor"] = e.type_flavor
        out["supertype"] = e.supertype
        out["interfaces"] = list(e.interfaces)
    return out


def render_json(
    model: DocumentModel,
    view: AggregateView,
    targets: dict[str, LinkTarget],
) -> str:
    """Render the whole model as indented JSON, in emission order."""
    packages = []
    for pkg_name in view.packages:
        pkg = model.get(pkg_name)
        if pkg is None:
            continue
        pkg_out = _entity(pkg, view, targets)
        pkg_out["types"] = []
        for type_name in view.types_by_package.get(pkg_name, []):
            t = model.get(type_name)
            if t is None:
                continue
            type_out = _entity(t, view, targets)
            type_out["members"] = [
                _entity(m, view, targets)
                for m in (model.get(n) for n in view.members_by_type.get(type_name, []))
                if m is not None
            ]
            pkg_out["types"].append(type_out)
        packages.append(pkg_out)
    doc = {"schema_version": SCHEMA_VERSION, "packages": packages}
    return json.dumps(doc, indent=2, ensure_ascii=False) + "\n"
