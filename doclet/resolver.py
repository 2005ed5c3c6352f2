"""Cross-reference resolution against the extracted document model."""

import logging

from doclet.doc_entity import DocEntity, TypeEntity
from doclet.doc_kind import DocKind
from doclet.document_model import DocumentModel
from doclet.qualified_name import (
    parameter_types_match,
    split_member_reference,
)
from doclet.reference import Reference, ResolvedLink, Resolution, Unresolved
from doclet.run_context import RunContext

logger = logging.getLogger(__name__)

# Fields win over constructors and methods when a bare name matches several.
_MEMBER_PREFERENCE = {DocKind.FIELD: 0, DocKind.CONSTRUCTOR: 1, DocKind.METHOD: 1}


class Resolver:
    """Turns every Reference in a DocumentModel into a link or literal text.

    Lookup order for a name seen from an entity: exact qualified name, then the
    enclosing type's own members, then its ancestors (nearest first), then the
    types of the enclosing package in lexical order.
    """

    def __init__(self, model: DocumentModel, ctx: RunContext | None = None) -> None:
        """Bind the resolver to a model and the run context."""
        self.model = model
        self.ctx = ctx or RunContext()

    def resolve_all(self) -> None:
        """Resolve every reference in the model; never raises for misses."""
        self.ctx.report.clear()
        for owner, ref in self.model.references():
            outcome = self.resolve(ref.text, owner)
            ref.resolution = outcome
            self.ctx.report.add(owner.qualified_name, ref.text, outcome)
            if isinstance(outcome, Unresolved):
                level = (
                    logging.DEBUG if self.ctx.is_external(ref.text) else logging.INFO
                )
                logger.log(
                    level,
                    "Unresolved reference %r in %s",
                    ref.text,
                    owner.qualified_name,
                )
        logger.info(
            "Resolved %d of %d references",
            len(self.ctx.report.resolved),
            self.ctx.report.total,
        )

    def resolve(self, text: str, owner: DocEntity) -> Resolution:
        """Resolve one reference text as seen from ``owner``."""
        text = text.strip()
        if text in self.model:
            return ResolvedLink(text)

        type_part, member, params = split_member_reference(text)
        enclosing = self._enclosing_type(owner)
        package = self._enclosing_package(owner, enclosing)

        if type_part:
            target_type = self._lookup_type(type_part, enclosing, package)
            found = (
                self._lookup_member(target_type, member, params)
                if target_type is not None
                else None
            )
        elif text.startswith("#") or params is not None:
            found = self._lookup_member(enclosing, member, params)
        else:
            found = self._lookup_member(enclosing, member, None)
            if found is None:
                t = self._lookup_type(member, enclosing, package)
                found = t.qualified_name if t is not None else None
        return ResolvedLink(found) if found else Unresolved(text)

    def _enclosing_type(self, owner: DocEntity) -> TypeEntity | None:
        if isinstance(owner, TypeEntity):
            return owner
        return self.model.get_type(owner.scope)

    def _enclosing_package(
        self,
        owner: DocEntity,
        enclosing: TypeEntity | None,
    ) -> str:
        if enclosing is not None:
            return enclosing.package
        return owner.qualified_name if owner.kind is DocKind.PACKAGE else ""

    def _lookup_type(
        self,
        name: str,
        enclosing: TypeEntity | None,
        package: str,
    ) -> TypeEntity | None:
        """Find a type by qualified or simple name from the given scope."""
        exact = self.model.get_type(name)
        if exact is not None:
            return exact
        if enclosing is not None:
            # Nested types of the enclosing type and of its ancestors
            for scope in (enclosing.qualified_name, *self._ancestors(enclosing)):
                nested = self.model.get_type(f"{scope}.{name}")
                if nested is not None:
                    return nested
        for t in self.model.types_in_package(package):
            if t.name == name or t.qualified_name.endswith("." + name):
                return t
        return None

    def _ancestors(self, t: TypeEntity) -> tuple[str, ...]:
        return self.model.ancestors_of(t.qualified_name)

    def _lookup_member(
        self,
        start: TypeEntity | None,
        name: str,
        params: tuple[str, ...] | None,
    ) -> str | None:
        """Search ``start`` then its ancestors; the first scope with a match wins."""
        if start is None or not name:
            return None
        for scope in (start.qualified_name, *self._ancestors(start)):
            found = self._match_in(scope, name, params)
            if found is not None:
                return found
        return None

    def _match_in(
        self,
        type_name: str,
        name: str,
        params: tuple[str, ...] | None,
    ) -> str | None:
        candidates = [m for m in self.model.members_of(type_name) if m.name == name]
        if params is not None:
            candidates = [
                m
                for m in candidates
                if m.kind is not DocKind.FIELD
                and parameter_types_match(m.parameter_types, params)
            ]
        if not candidates:
            return None
        best = min(
            candidates,
            key=lambda m: (_MEMBER_PREFERENCE[m.kind], m.declared_index),
        )
        return best.qualified_name


def resolve_references(model: DocumentModel, ctx: RunContext | None = None) -> None:
    """Resolve every reference in ``model`` in place."""
    Resolver(model, ctx).resolve_all()


def unresolved_references(model: DocumentModel) -> list[Reference]:
    """References that ended up as literal text."""
    return [
        ref for _, ref in model.references() if isinstance(ref.resolution, Unresolved)
    ]
