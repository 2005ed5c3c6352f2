"""The closed set of documentable entity kinds."""

from enum import Enum


class DocKind(str, Enum):
    """Kind tag of a documentable entity."""

    PACKAGE = "package"
    TYPE = "type"
    FIELD = "field"
    CONSTRUCTOR = "constructor"
    METHOD = "method"


# Declaration kinds as the reflection front end names them.
TYPE_FLAVORS = {"class", "interface", "enum", "annotation", "record"}

DECLARATION_KINDS: dict[str, DocKind] = {
    "package": DocKind.PACKAGE,
    **{flavor: DocKind.TYPE for flavor in TYPE_FLAVORS},
    "field": DocKind.FIELD,
    "enumconstant": DocKind.FIELD,
    "constructor": DocKind.CONSTRUCTOR,
    "method": DocKind.METHOD,
}

# Emission order of member groups within a type.
MEMBER_GROUPS: tuple[DocKind, ...] = (
    DocKind.CONSTRUCTOR,
    DocKind.FIELD,
    DocKind.METHOD,
)


def doc_kind_for(declaration_kind: str) -> DocKind | None:
    """Map a declaration kind string (case-insensitive) to its DocKind."""
    k = declaration_kind.strip().lower().replace("_", "").replace(" ", "")
    return DECLARATION_KINDS.get(k)


def is_type_kind(kind: DocKind) -> bool:
    """Check if the kind represents a type (class, interface, etc.)."""
    return kind is DocKind.TYPE


def is_member_kind(kind: DocKind) -> bool:
    """Check if the kind represents a member (field, constructor, method)."""
    return kind in MEMBER_GROUPS
