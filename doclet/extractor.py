"""Walk the API model once and build the document model."""

import logging
from collections import defaultdict

from doclet.ancestry import build_ancestors
from doclet.api_model import ApiDeclaration, ApiModel, ApiTag
from doclet.comment_text import parse_links, parse_see_target, split_first_sentence
from doclet.doc_entity import DocEntity, Tag, TypeEntity
from doclet.doc_kind import DocKind, doc_kind_for
from doclet.document_model import DocumentModel, merge_partitions
from doclet.errors import DuplicateDeclaration, MalformedDeclaration
from doclet.qualified_name import (
    member_qualified_name,
    simple_name,
    type_qualified_name,
)
from doclet.reference import Reference
from doclet.run_context import RunContext

logger = logging.getLogger(__name__)

TAG_ALIASES = {"exception": "throws", "returns": "return"}

VISIBILITY_RANK = {"public": 0, "protected": 1, "package": 2, "private": 3}


def extract(api_model: ApiModel, ctx: RunContext | None = None) -> DocumentModel:
    """Build a DocumentModel with one entity per declaration in ``api_model``.

    Each package is extracted into its own partition; partitions are merged
    with a collision check, then type ancestry is precomputed.
    """
    ctx = ctx or RunContext()
    packages, types, members = _split_by_kind(api_model)
    types, members = _apply_visibility(
        types, members, ctx.config.get("visibility", "private")
    )

    package_names = [p.name for p in packages]
    type_names = _type_names(types)
    type_packages = _type_packages(types, type_names, set(package_names))

    member_names: dict[str, list[str]] = defaultdict(list)
    member_entities: list[DocEntity] = []
    order = _DeclaredOrder()
    for decl, qn in zip(types, type_names, strict=True):
        order.next(decl.scope, qn)
    for decl in members:
        if decl.scope not in type_packages:
            raise MalformedDeclaration(
                decl.name or decl.scope,
                f"enclosing type {decl.scope!r} cannot be identified",
            )
        ent = _member_entity(decl, order.next(decl.scope))
        member_names[decl.scope].append(ent.qualified_name)
        member_entities.append(ent)

    partitions: dict[str, DocumentModel] = {
        name: DocumentModel() for name in package_names
    }
    for i, decl in enumerate(packages):
        partitions[decl.name].add(_package_entity(decl, i))
    for decl, qn in zip(types, type_names, strict=True):
        ent = _type_entity(
            decl,
            qn,
            package=type_packages[qn],
            members=tuple(member_names.get(qn, ())),
            known_types=type_packages,
            declared_index=order.index_of(decl.scope, qn),
        )
        partitions[ent.package].add(ent)
    for ent in member_entities:
        partitions[type_packages[ent.scope]].add(ent)

    model = merge_partitions(partitions[name] for name in package_names)
    model.ancestors = build_ancestors({t.qualified_name: t for t in model.types()})
    model.index_packages()
    logger.info(
        "Extracted %d entities from %d packages and %d types",
        len(model),
        len(packages),
        len(types),
    )
    return model


class _DeclaredOrder:
    """Counts declarations per enclosing scope to assign declared-order indexes."""

    def __init__(self) -> None:
        self.counters: dict[str, int] = defaultdict(int)
        self.assigned: dict[tuple[str, str], int] = {}

    def next(self, scope: str, key: str | None = None) -> int:
        i = self.counters[scope]
        self.counters[scope] += 1
        if key is not None:
            self.assigned[(scope, key)] = i
        return i

    def index_of(self, scope: str, key: str) -> int:
        return self.assigned.get((scope, key), 0)


def _split_by_kind(
    api_model: ApiModel,
) -> tuple[list[ApiDeclaration], list[ApiDeclaration], list[ApiDeclaration]]:
    """Partition declarations into packages, types and members (input order)."""
    packages: list[ApiDeclaration] = []
    types: list[ApiDeclaration] = []
    members: list[ApiDeclaration] = []
    buckets = {
        DocKind.PACKAGE: packages,
        DocKind.TYPE: types,
        DocKind.FIELD: members,
        DocKind.CONSTRUCTOR: members,
        DocKind.METHOD: members,
    }
    for decl in api_model:
        kind = doc_kind_for(decl.kind)
        if kind is None:
            raise MalformedDeclaration(decl.name, f"unknown kind {decl.kind!r}")
        if not decl.name and kind is not DocKind.CONSTRUCTOR:
            raise MalformedDeclaration(decl.scope, f"{decl.kind} without a name")
        buckets[kind].append(decl)
    return packages, types, members


def _visibility(decl: ApiDeclaration) -> str:
    for m in decl.modifiers:
        if m in VISIBILITY_RANK:
            return m
    return "package"


def _apply_visibility(
    types: list[ApiDeclaration],
    members: list[ApiDeclaration],
    level: str,
) -> tuple[list[ApiDeclaration], list[ApiDeclaration]]:
    """Drop declarations less visible than ``level``, with everything inside them."""
    limit = VISIBILITY_RANK.get(level, VISIBILITY_RANK["private"])
    hidden = {
        type_qualified_name(d.scope, d.name)
        for d in types
        if VISIBILITY_RANK[_visibility(d)] > limit
    }
    grew = bool(hidden)
    while grew:
        nested = {
            type_qualified_name(d.scope, d.name) for d in types if d.scope in hidden
        }
        grew = not nested <= hidden
        hidden |= nested
    kept_types = [
        d for d in types if type_qualified_name(d.scope, d.name) not in hidden
    ]
    kept_members = [
        d
        for d in members
        if d.scope not in hidden and VISIBILITY_RANK[_visibility(d)] <= limit
    ]
    return kept_types, kept_members


def _type_names(types: list[ApiDeclaration]) -> list[str]:
    """Qualified names of every type declaration, refusing duplicates early."""
    names: list[str] = []
    seen: set[str] = set()
    for decl in types:
        qn = type_qualified_name(decl.scope, decl.name)
        if qn in seen:
            raise DuplicateDeclaration(qn)
        seen.add(qn)
        names.append(qn)
    return names


def _type_packages(
    types: list[ApiDeclaration],
    type_names: list[str],
    packages: set[str],
) -> dict[str, str]:
    """Map each type to its package, following nested-type scopes outward."""
    scope_of = {qn: decl.scope for decl, qn in zip(types, type_names, strict=True)}
    resolved: dict[str, str] = {}
    for qn in type_names:
        chain: list[str] = []
        current = qn
        while current not in resolved:
            if current in chain:
                raise MalformedDeclaration(qn, "cyclic nesting of enclosing types")
            chain.append(current)
            scope = scope_of[current]
            if scope in packages:
                resolved[current] = scope
            elif scope in scope_of:
                current = scope
            else:
                raise MalformedDeclaration(
                    current,
                    f"enclosing scope {scope!r} is neither a package nor a type",
                )
        for name in chain:
            resolved[name] = resolved[current]
    return resolved


def _qualify_type(
    name: str | None,
    package: str,
    known_types: dict[str, str],
) -> str | None:
    """Qualify a supertype name against the model; external names pass through."""
    if not name:
        return None
    if name in known_types:
        return name
    candidate = type_qualified_name(package, name)
    if candidate in known_types:
        return candidate
    return name


def _doc_fields(comment: str) -> tuple[str, str, tuple[Reference, ...]]:
    """Summary, body and their inline links, summary links first."""
    summary, body = split_first_sentence(comment)
    return summary, body, parse_links(summary) + parse_links(body)


def _tag(raw: ApiTag) -> Tag:
    """Convert a raw block tag, attaching a reference where the tag names one."""
    kind = TAG_ALIASES.get(raw.kind, raw.kind)
    name, text = raw.name, raw.text
    if kind in {"param", "throws"} and not name and text:
        first, _, rest = text.partition(" ")
        name, text = first, rest.strip()
    reference: Reference | None = None
    if kind == "see":
        reference = parse_see_target(text)
    elif kind == "throws" and name:
        reference = Reference(text=name)
    return Tag(
        kind=kind,
        name=name,
        text=text,
        reference=reference,
        links=parse_links(text),
    )


def _package_entity(decl: ApiDeclaration, index: int) -> DocEntity:
    summary, body, links = _doc_fields(decl.comment)
    return DocEntity(
        qualified_name=decl.name,
        kind=DocKind.PACKAGE,
        name=decl.name,
        scope="",
        summary=summary,
        body=body,
        tags=tuple(_tag(t) for t in decl.tags),
        links=links,
        declared_index=index,
    )


def _type_entity(
    decl: ApiDeclaration,
    qualified_name: str,
    *,
    package: str,
    members: tuple[str, ...],
    known_types: dict[str, str],
    declared_index: int,
) -> TypeEntity:
    summary, body, links = _doc_fields(decl.comment)
    return TypeEntity(
        qualified_name=qualified_name,
        kind=DocKind.TYPE,
        name=decl.name,
        scope=decl.scope,
        summary=summary,
        body=body,
        tags=tuple(_tag(t) for t in decl.tags),
        links=links,
        declared_index=declared_index,
        signature=decl.signature,
        modifiers=decl.modifiers,
        type_flavor=decl.kind.lower(),
        members=members,
        supertype=_qualify_type(decl.superclass, package, known_types),
        interfaces=tuple(
            _qualify_type(i, package, known_types) or i for i in decl.interfaces
        ),
        package=package,
    )


def _member_entity(decl: ApiDeclaration, declared_index: int) -> DocEntity:
    kind = doc_kind_for(decl.kind) or DocKind.FIELD
    params = decl.parameters or ()
    name = decl.name or simple_name(decl.scope)
    if kind is DocKind.FIELD:
        qn = member_qualified_name(decl.scope, name)
    else:
        qn = member_qualified_name(decl.scope, name, tuple(p.type for p in params))
    summary, body, links = _doc_fields(decl.comment)
    return DocEntity(
        qualified_name=qn,
        kind=kind,
        name=name,
        scope=decl.scope,
        summary=summary,
        body=body,
        tags=tuple(_tag(t) for t in decl.tags),
        links=links,
        declared_index=declared_index,
        parameter_types=tuple(p.type for p in params),
        parameter_names=tuple(p.name for p in params),
        return_type=decl.returns or decl.type,
        signature=decl.signature,
        modifiers=decl.modifiers,
    )
