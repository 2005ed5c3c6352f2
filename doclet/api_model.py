"""Read-only reflective API model consumed by the extractor.

The model is a flat list of declarations. Each declaration names its
enclosing scope (a package for top-level types, a type for nested types and
members), mirroring the ``parent`` links of a reflection front end.
"""

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

YAML_MIME_PREFIX = "### YamlMime:"


@dataclass(frozen=True)
class ApiTag:
    """A raw block tag as reported by the reflection front end."""

    kind: str
    text: str = ""
    name: str = ""


@dataclass(frozen=True)
class ApiParameter:
    """A declared parameter of a constructor or method."""

    name: str
    type: str


@dataclass(frozen=True)
class ApiDeclaration:
    """One declared package, type or member."""

    kind: str
    name: str
    scope: str = ""
    comment: str = ""
    tags: tuple[ApiTag, ...] = ()
    superclass: str | None = None
    interfaces: tuple[str, ...] = ()
    parameters: tuple[ApiParameter, ...] | None = None
    returns: str = ""
    type: str = ""  # field type
    modifiers: tuple[str, ...] = ()
    signature: str = ""


@dataclass(frozen=True)
class ApiModel:
    """The root of the reflected API: every declaration, in source order."""

    declarations: tuple[ApiDeclaration, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[ApiDeclaration]:
        return iter(self.declarations)


def strip_yaml_mime_header(text: str) -> str:
    """Remove a ``### YamlMime:`` header line from the content."""
    lines = text.splitlines()
    if lines and lines[0].startswith(YAML_MIME_PREFIX):
        return "\n".join(lines[1:]).lstrip("\n")
    return text


_COMMENT_MARGIN_RE = re.compile(r"^\s*\*(?!/) ?", re.MULTILINE)


def as_text(v: object) -> str:
    """Convert a comment value to text, handling lists, None and ``*`` margins."""
    if v is None:
        return ""
    if isinstance(v, list):
        return "\n".join(as_text(x) for x in v if as_text(x))
    text = str(v)
    if text.lstrip().startswith("*"):
        text = _COMMENT_MARGIN_RE.sub("", text)
    return text.strip()


def _parameter(raw: object) -> ApiParameter:
    if isinstance(raw, dict):
        return ApiParameter(
            name=str(raw.get("name") or ""),
            type=str(raw.get("type") or ""),
        )
    # "double scale" or just "double"
    words = str(raw).rsplit(None, 1)
    if len(words) == 2:
        return ApiParameter(name=words[1], type=words[0])
    return ApiParameter(name="", type=str(raw).strip())


def _tag(raw: object) -> ApiTag:
    if isinstance(raw, dict):
        return ApiTag(
            kind=str(raw.get("kind") or "").lstrip("@").lower(),
            text=as_text(raw.get("text")),
            name=str(raw.get("name") or ""),
        )
    # "@param x the value" shorthand
    kind, _, rest = str(raw).strip().lstrip("@").partition(" ")
    return ApiTag(kind=kind.lower(), text=rest.strip())


def declaration_from_dict(it: dict[str, Any]) -> ApiDeclaration:
    """Build a declaration from one parsed mapping."""
    params = it.get("parameters")
    return ApiDeclaration(
        kind=str(it.get("kind") or "").strip(),
        name=str(it.get("name") or "").strip(),
        scope=str(it.get("scope") or "").strip(),
        comment=as_text(it.get("comment")),
        tags=tuple(_tag(t) for t in (it.get("tags") or [])),
        superclass=str(it["superclass"]) if it.get("superclass") else None,
        interfaces=tuple(str(i) for i in (it.get("interfaces") or [])),
        parameters=None if params is None else tuple(_parameter(p) for p in params),
        returns=str(it.get("returns") or ""),
        type=str(it.get("type") or ""),
        modifiers=tuple(str(m) for m in (it.get("modifiers") or [])),
        signature=as_text(it.get("signature")),
    )


def api_model_from_dicts(items: Iterable[dict[str, Any]]) -> ApiModel:
    """Build a model from already parsed declaration mappings."""
    return ApiModel(
        tuple(declaration_from_dict(it) for it in items if isinstance(it, dict)),
    )


def load_api_model(path: Path) -> ApiModel:
    """Load and parse an API model YAML (or JSON) file."""
    raw = strip_yaml_mime_header(path.read_text(encoding="utf-8"))
    doc = yaml.safe_load(raw) or {}
    return api_model_from_dicts(doc.get("declarations") or [])
