"""Precomputed supertype chains for every extracted type."""

from collections import deque

from doclet.doc_entity import TypeEntity


def build_ancestors(types: dict[str, TypeEntity]) -> dict[str, tuple[str, ...]]:
    """Return, for each type, its known ancestors nearest first.

    Breadth-first over the supertype graph: at every node the superclass comes
    before the implemented interfaces, in declaration order. Only names present
    in ``types`` are walked, so external supertypes end their branch. Each
    ancestor appears once and cycles are ignored.
    """
    return {name: _ancestors_of(name, types) for name in types}


def _direct_supertypes(t: TypeEntity) -> list[str]:
    parents = [t.supertype] if t.supertype else []
    parents.extend(t.interfaces)
    return parents


def _ancestors_of(name: str, types: dict[str, TypeEntity]) -> tuple[str, ...]:
    seen = {name}
    out: list[str] = []
    queue = deque(_direct_supertypes(types[name]))
    while queue:
        parent = queue.popleft()
        if parent in seen or parent not in types:
            continue
        seen.add(parent)
        out.append(parent)
        queue.extend(_direct_supertypes(types[parent]))
    return tuple(out)
