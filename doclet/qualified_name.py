"""Builders and parsers for qualified entity names.

Packages and types use dotted names (``com.example.Circle``). Members append
``#`` and their simple name; constructors and methods also carry their
parameter type list so overloads stay distinct
(``com.example.Circle#area(double)``).
"""

MEMBER_SEPARATOR = "#"


def type_qualified_name(scope: str, name: str) -> str:
    """Qualified name of a type declared in a package or enclosing type."""
    return f"{scope}.{name}" if scope else name


def member_qualified_name(
    type_name: str,
    name: str,
    parameter_types: tuple[str, ...] | None = None,
) -> str:
    """Qualified name of a field (no parameters) or a constructor/method."""
    qn = f"{type_name}{MEMBER_SEPARATOR}{name}"
    if parameter_types is None:
        return qn
    return f"{qn}({','.join(normalize_type(t) for t in parameter_types)})"


def normalize_type(type_name: str) -> str:
    """Drop whitespace from a parameter type (``Map<K, V>`` -> ``Map<K,V>``)."""
    return "".join(type_name.split())


def simple_name(name: str) -> str:
    """Last dotted segment of a package or type name, without generics."""
    base = name.split("<", 1)[0]
    return base.rsplit(".", 1)[-1]


def split_member_reference(text: str) -> tuple[str, str, tuple[str, ...] | None]:
    """Split ``Type#name(params)`` into its type part, member name and params.

    Returns ``("", text, None)`` for plain names. The parameter tuple is
    ``None`` when the reference has no parentheses.
    """
    type_part, sep, member = text.partition(MEMBER_SEPARATOR)
    if not sep:
        type_part, member = "", text
    params: tuple[str, ...] | None = None
    if "(" in member and member.endswith(")"):
        member, _, raw = member[:-1].partition("(")
        params = tuple(_parameter_type(p) for p in _split_params(raw))
    return type_part.strip(), member.strip(), params


def _split_params(raw: str) -> list[str]:
    """Split a parameter list on top-level commas only."""
    out: list[str] = []
    depth = 0
    current = ""
    for ch in raw:
        if ch == "<":
            depth += 1
        elif ch == ">":
            depth -= 1
        if ch == "," and depth == 0:
            out.append(current)
            current = ""
        else:
            current += ch
    if current.strip():
        out.append(current)
    return [p.strip() for p in out if p.strip()]


def _parameter_type(param: str) -> str:
    """Strip an optional parameter name (``double scale`` -> ``double``)."""
    words = param.split()
    if len(words) > 1 and not words[-1].endswith((">", "]", "...")):
        return normalize_type(" ".join(words[:-1]))
    return normalize_type(param)


def parameter_types_match(
    declared: tuple[str, ...],
    referenced: tuple[str, ...],
) -> bool:
    """Compare parameter lists by simple type name, so ``String`` matches
    ``java.lang.String``.
    """
    if len(declared) != len(referenced):
        return False
    return all(
        simple_name(normalize_type(d)) == simple_name(normalize_type(r))
        and _suffix(d) == _suffix(r)
        for d, r in zip(declared, referenced, strict=True)
    )


def _suffix(type_name: str) -> str:
    """Array and varargs markers of a type, which must agree exactly."""
    t = normalize_type(type_name).split(">")[-1]
    return t[len(t.rstrip("[].")) :]
