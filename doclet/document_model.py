"""The top-level aggregate: qualified name to entity, in extraction order."""

from collections import defaultdict
from collections.abc import Iterable, Iterator

from doclet.doc_entity import DocEntity, TypeEntity
from doclet.doc_kind import DocKind
from doclet.errors import DuplicateDeclaration
from doclet.reference import Reference


class DocumentModel:
    """Owns every extracted entity, keyed by qualified name."""

    def __init__(self) -> None:
        """Create an empty model."""
        self.entities: dict[str, DocEntity] = {}
        # type qualified name -> ancestor names, nearest first
        self.ancestors: dict[str, tuple[str, ...]] = {}
        # package name -> its type names, sorted by qualified name
        self.package_types: dict[str, tuple[str, ...]] = {}

    def add(self, entity: DocEntity) -> None:
        """Insert an entity, refusing to overwrite an existing name."""
        if entity.qualified_name in self.entities:
            raise DuplicateDeclaration(entity.qualified_name)
        self.entities[entity.qualified_name] = entity

    def get(self, qualified_name: str) -> DocEntity | None:
        """Look up an entity by qualified name."""
        return self.entities.get(qualified_name)

    def get_type(self, qualified_name: str | None) -> TypeEntity | None:
        """Look up a type entity; ``None`` for unknown or non-type names."""
        if not qualified_name:
            return None
        ent = self.entities.get(qualified_name)
        return ent if isinstance(ent, TypeEntity) else None

    def __contains__(self, qualified_name: object) -> bool:
        return qualified_name in self.entities

    def __iter__(self) -> Iterator[DocEntity]:
        return iter(self.entities.values())

    def __len__(self) -> int:
        return len(self.entities)

    def of_kind(self, kind: DocKind) -> list[DocEntity]:
        """Entities of one kind, in extraction order."""
        return [e for e in self.entities.values() if e.kind is kind]

    def types(self) -> list[TypeEntity]:
        """All type entities, in extraction order."""
        return [e for e in self.entities.values() if isinstance(e, TypeEntity)]

    def members_of(self, type_name: str) -> list[DocEntity]:
        """Member entities of a type, in declared order."""
        t = self.get_type(type_name)
        if t is None:
            return []
        return [self.entities[m] for m in t.members if m in self.entities]

    def index_packages(self) -> None:
        """Precompute the sorted type list of every package."""
        by_package: dict[str, list[str]] = defaultdict(list)
        for t in self.types():
            by_package[t.package].append(t.qualified_name)
        self.package_types = {
            pkg: tuple(sorted(names)) for pkg, names in by_package.items()
        }

    def types_in_package(self, package: str) -> list[TypeEntity]:
        """Types whose package is ``package``, sorted by qualified name.

        Served from the index built by ``index_packages``.
        """
        return [
            t
            for t in (self.get_type(n) for n in self.package_types.get(package, ()))
            if t is not None
        ]

    def ancestors_of(self, type_name: str) -> tuple[str, ...]:
        """Precomputed ancestors of a type, nearest first."""
        return self.ancestors.get(type_name, ())

    def references(self) -> list[tuple[DocEntity, Reference]]:
        """Every (owner, reference) pair, in entity then tag order."""
        return [(e, r) for e in self.entities.values() for r in e.references()]


def merge_partitions(partitions: Iterable[DocumentModel]) -> DocumentModel:
    """Merge independently extracted partitions into one model.

    Partitions are merged in the order given. Any qualified name that appears
    in more than one partition raises ``DuplicateDeclaration``.
    """
    merged = DocumentModel()
    for part in partitions:
        for entity in part:
            merged.add(entity)
        merged.ancestors.update(part.ancestors)
        merged.package_types.update(part.package_types)
    return merged
