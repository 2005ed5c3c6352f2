"""Intermediate representation of documentable entities."""

from dataclasses import dataclass, field

from doclet.doc_kind import DocKind
from doclet.reference import Reference


@dataclass(frozen=True)
class Tag:
    """A Javadoc block tag such as ``@param``, ``@return`` or ``@see``."""

    kind: str  # param/return/see/throws/deprecated/since/author/...
    name: str = ""  # parameter name or thrown type
    text: str = ""
    reference: Reference | None = None
    links: tuple[Reference, ...] = ()  # inline {@link} targets inside text


@dataclass(frozen=True)
class DocEntity:
    """A package, type, field, constructor or method with its raw docs."""

    qualified_name: str
    kind: DocKind
    name: str
    scope: str  # qualified name of the enclosing package or type
    summary: str = ""
    body: str = ""
    tags: tuple[Tag, ...] = ()
    links: tuple[Reference, ...] = ()  # inline {@link} targets in summary+body
    declared_index: int = 0
    parameter_types: tuple[str, ...] = ()
    parameter_names: tuple[str, ...] = ()
    return_type: str = ""
    signature: str = ""
    modifiers: tuple[str, ...] = ()

    @property
    def deprecated(self) -> bool:
        """True when the entity carries a ``@deprecated`` tag."""
        return any(t.kind == "deprecated" for t in self.tags)

    @property
    def has_documentation(self) -> bool:
        """True when either the summary or the body is non-empty."""
        return bool(self.summary or self.body)

    def tags_of(self, kind: str) -> list[Tag]:
        """All tags of one kind, in declaration order."""
        return [t for t in self.tags if t.kind == kind]

    def references(self) -> list[Reference]:
        """Every reference owned by this entity, in a stable order."""
        refs = list(self.links)
        for t in self.tags:
            if t.reference is not None:
                refs.append(t.reference)
            refs.extend(t.links)
        return refs


@dataclass(frozen=True)
class TypeEntity(DocEntity):
    """A class or interface; members are held by qualified name only."""

    type_flavor: str = "class"  # class/interface/enum/annotation/record
    members: tuple[str, ...] = ()
    supertype: str | None = None
    interfaces: tuple[str, ...] = field(default_factory=tuple)
    package: str = ""
