"""Derived, emission-only documentation of an entity."""

from dataclasses import dataclass

from doclet.doc_entity import DocEntity, Tag
from doclet.reference import Reference


@dataclass(frozen=True)
class MergedDoc:
    """Documentation to emit for one entity, possibly taken from an ancestor."""

    summary: str = ""
    body: str = ""
    links: tuple[Reference, ...] = ()
    tags: tuple[Tag, ...] = ()
    inherited_from: str | None = None  # ancestor member that supplied the text

    @classmethod
    def of(cls, entity: DocEntity) -> "MergedDoc":
        """The entity's own documentation, unchanged."""
        return cls(
            summary=entity.summary,
            body=entity.body,
            links=entity.links,
            tags=entity.tags,
        )

    def tags_of(self, kind: str) -> list[Tag]:
        """All tags of one kind, in order."""
        return [t for t in self.tags if t.kind == kind]

    def param_tag(self, name: str) -> Tag | None:
        """The ``@param`` tag for a parameter name, if documented."""
        return next((t for t in self.tags_of("param") if t.name == name), None)
