"""Small Markdown building blocks shared by the page renderers."""

import re

# Conservative: keep letters, digits, underscore, dash.
DOT_SAFE_RE = re.compile(r"[^A-Za-z0-9_-]+")


def dot_safe(name: str) -> str:
    """Make a stable path segment out of a package or type name segment."""
    name = name.replace("$", "-")  # binary nested names Outer$Inner
    name = DOT_SAFE_RE.sub("-", name).strip("-")
    return name or "Unknown"


def header_slug(s: str) -> str:
    """Generate a GitHub-ish anchor slug: lower, hyphenate non-alnum."""
    s = s.strip().lower()
    s = re.sub(r"[^a-z0-9]+", "-", s)
    s = re.sub(r"-{2,}", "-", s).strip("-")
    return s or "section"


def md_codeblock(lang: str, code: str) -> str:
    """Generate a fenced Markdown code block."""
    return f"```{lang}\n{code.rstrip()}\n```"


def md_cell(text: str) -> str:
    """Make text safe for a single table cell."""
    return " ".join(text.replace("|", "\\|").split())


def md_table(headers: list[str], rows: list[list[str]]) -> str:
    """Generate a Markdown table."""
    if not rows:
        return ""
    out = [
        "| " + " | ".join(headers) + " |",
        "| " + " | ".join(["---"] * len(headers)) + " |",
    ]
    out.extend("| " + " | ".join(md_cell(c) for c in r) + " |" for r in rows)
    return "\n".join(out)


def heading(level: int, text: str) -> str:
    """A Markdown ATX heading, clamped to the six levels Markdown has."""
    return f"{'#' * max(1, min(level, 6))} {text}"
