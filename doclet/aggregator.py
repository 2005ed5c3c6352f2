"""Ordering of entities for emission and inheritance-based doc merging."""

import logging
from dataclasses import dataclass, field

from doclet.comment_text import INHERIT_DOC, INLINE_LINK_RE
from doclet.doc_entity import DocEntity, Tag, TypeEntity
from doclet.doc_kind import MEMBER_GROUPS, DocKind
from doclet.document_model import DocumentModel
from doclet.merged_doc import MergedDoc
from doclet.qualified_name import parameter_types_match
from doclet.reference import Reference
from doclet.run_context import RunContext

logger = logging.getLogger(__name__)

_GROUP_RANK = {kind: i for i, kind in enumerate(MEMBER_GROUPS)}


@dataclass
class AggregateView:
    """Ordered, merged view of a DocumentModel used by the emitter."""

    packages: list[str] = field(default_factory=list)
    types_by_package: dict[str, list[str]] = field(default_factory=dict)
    members_by_type: dict[str, list[str]] = field(default_factory=dict)
    docs: dict[str, MergedDoc] = field(default_factory=dict)

    def sequence(self) -> list[str]:
        """Every qualified name in emission order."""
        out: list[str] = []
        for pkg in self.packages:
            out.append(pkg)
            for t in self.types_by_package.get(pkg, []):
                out.append(t)
                out.extend(self.members_by_type.get(t, []))
        return out

    def doc(self, qualified_name: str) -> MergedDoc:
        """Merged documentation for an entity (empty for unknown names)."""
        return self.docs.get(qualified_name, MergedDoc())


def aggregate(model: DocumentModel, ctx: RunContext | None = None) -> AggregateView:
    """Order the model for emission and merge inherited documentation.

    Never mutates the model, so repeated calls return equal views.
    """
    ctx = ctx or RunContext()
    inherit = bool(ctx.config.get("inherit_docs", True))
    view = AggregateView()
    view.packages = sorted(e.qualified_name for e in model.of_kind(DocKind.PACKAGE))
    for pkg in view.packages:
        view.types_by_package[pkg] = [
            t.qualified_name for t in model.types_in_package(pkg)
        ]
    for t in model.types():
        view.members_by_type[t.qualified_name] = [
            m.qualified_name for m in order_members(model.members_of(t.qualified_name))
        ]

    inherited = 0
    cache: dict[str, MergedDoc] = {}
    for entity in model:
        merged = merged_doc(model, entity, cache) if inherit else MergedDoc.of(entity)
        if merged.inherited_from:
            inherited += 1
        view.docs[entity.qualified_name] = merged
    logger.info("Merged inherited documentation into %d members", inherited)
    return view


def order_members(members: list[DocEntity]) -> list[DocEntity]:
    """Constructors, then fields, then methods; each group in declared order."""
    return sorted(members, key=lambda m: (_GROUP_RANK[m.kind], m.declared_index))


def merged_doc(
    model: DocumentModel,
    entity: DocEntity,
    cache: dict[str, MergedDoc] | None = None,
) -> MergedDoc:
    """Documentation to emit for ``entity``, filled from its nearest ancestor.

    Overridden members are merged first, so a chain of ``{@inheritDoc}``
    markers ends in the text of the member at its root. ``cache`` holds the
    docs merged so far and is shared across one ``aggregate`` call.
    """
    if cache is None:
        cache = {}
    qn = entity.qualified_name
    if qn in cache:
        return cache[qn]
    # Placeholder while ancestors merge; supertype cycles stop here.
    cache[qn] = MergedDoc.of(entity)
    cache[qn] = _merge(model, entity, cache)
    return cache[qn]


def _merge(
    model: DocumentModel,
    entity: DocEntity,
    cache: dict[str, MergedDoc],
) -> MergedDoc:
    own = MergedDoc.of(entity)
    if entity.kind not in {DocKind.FIELD, DocKind.METHOD}:
        return own
    overridden = [(m, merged_doc(model, m, cache)) for m in _overridden(model, entity)]
    if not overridden:
        return own

    needs_text = not entity.has_documentation
    has_marker = INHERIT_DOC in entity.summary or INHERIT_DOC in entity.body
    donor = next(((m, d) for m, d in overridden if d.summary or d.body), None)

    summary, body, links = own.summary, own.body, own.links
    inherited_from = None
    if donor is not None and needs_text:
        source, doc = donor
        summary, body, links = doc.summary, doc.body, doc.links
        inherited_from = source.qualified_name
    elif has_marker:
        source_doc = donor[1] if donor else MergedDoc()
        own_summary_links, own_body_links = split_links(entity.summary, entity.links)
        donor_summary_links, donor_body_links = split_links(
            source_doc.summary, source_doc.links
        )
        summary, summary_links = _substitute(
            entity.summary, own_summary_links, source_doc.summary, donor_summary_links
        )
        body, body_links = _substitute(
            entity.body, own_body_links, source_doc.body, donor_body_links
        )
        links = summary_links + body_links
        inherited_from = donor[0].qualified_name if donor else None

    tags = own.tags
    if entity.kind is DocKind.METHOD:
        tags = tags + _inherited_tags(entity, overridden)

    return MergedDoc(
        summary=summary,
        body=body,
        links=links,
        tags=tags,
        inherited_from=inherited_from,
    )


def split_links(
    summary: str,
    links: tuple[Reference, ...],
) -> tuple[tuple[Reference, ...], tuple[Reference, ...]]:
    """Split an entity's inline links into those of its summary and its body."""
    n = len(INLINE_LINK_RE.findall(summary))
    return links[:n], links[n:]


def _substitute(
    text: str,
    links: tuple[Reference, ...],
    donor_text: str,
    donor_links: tuple[Reference, ...],
) -> tuple[str, tuple[Reference, ...]]:
    """Replace each ``{@inheritDoc}`` with the donor text, keeping link order."""
    segments = text.split(INHERIT_DOC)
    merged: list[Reference] = []
    pos = 0
    for i, segment in enumerate(segments):
        n = len(INLINE_LINK_RE.findall(segment))
        merged.extend(links[pos : pos + n])
        pos += n
        if i < len(segments) - 1:
            merged.extend(donor_links)
    return donor_text.join(segments).strip(), tuple(merged)


def _overridden(model: DocumentModel, entity: DocEntity) -> list[DocEntity]:
    """Ancestor members with the same signature, nearest ancestor first."""
    declaring = model.get_type(entity.scope)
    if declaring is None:
        return []
    out: list[DocEntity] = []
    for ancestor in model.ancestors_of(declaring.qualified_name):
        match = _same_signature(model.get_type(ancestor), entity, model)
        if match is not None:
            out.append(match)
    return out


def _same_signature(
    ancestor: TypeEntity | None,
    entity: DocEntity,
    model: DocumentModel,
) -> DocEntity | None:
    if ancestor is None:
        return None
    for m in model.members_of(ancestor.qualified_name):
        if m.kind is not entity.kind or m.name != entity.name:
            continue
        if entity.kind is DocKind.FIELD or parameter_types_match(
            m.parameter_types, entity.parameter_types
        ):
            return m
    return None


def _inherited_tags(
    entity: DocEntity,
    overridden: list[tuple[DocEntity, MergedDoc]],
) -> tuple[Tag, ...]:
    """``@param``/``@return``/``@throws`` tags missing here but documented above."""
    out: list[Tag] = []
    documented = {t.name for t in entity.tags_of("param")}
    for i, pname in enumerate(entity.parameter_names):
        if not pname or pname in documented:
            continue
        for anc, doc in overridden:
            if i >= len(anc.parameter_names):
                continue
            tag = doc.param_tag(anc.parameter_names[i])
            if tag is not None:
                out.append(
                    Tag(
                        kind="param",
                        name=pname,
                        text=tag.text,
                        reference=tag.reference,
                        links=tag.links,
                    )
                )
                break
    if not entity.tags_of("return") and entity.return_type != "void":
        tag = next((t for _, doc in overridden for t in doc.tags_of("return")), None)
        if tag is not None:
            out.append(tag)
    if not entity.tags_of("throws"):
        donor = next((doc for _, doc in overridden if doc.tags_of("throws")), None)
        if donor is not None:
            out.extend(donor.tags_of("throws"))
    return tuple(out)
