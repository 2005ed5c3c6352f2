"""Logic for rendering Javadoc inline tags and references as Markdown."""

import re
from collections.abc import Iterable

from doclet.comment_text import INLINE_LINK_RE, INLINE_TAG_RE
from doclet.link_target import LinkTarget
from doclet.reference import Reference, ResolvedLink


def render_reference(ref: Reference, targets: dict[str, LinkTarget]) -> str:
    """``[label](page)`` for a resolved reference, backticked text otherwise."""
    if isinstance(ref.resolution, ResolvedLink):
        t = targets.get(ref.resolution.target)
        if t is not None:
            return f"[{ref.label or t.title}]({t.page_path})"
    return f"`{ref.display}`"


def rewrite_links(
    text: str,
    links: Iterable[Reference],
    targets: dict[str, LinkTarget],
) -> str:
    """Rewrite inline tags in ``text``; ``links`` line up with its ``{@link}`` tags."""
    if not text:
        return ""
    pending = iter(links)

    def repl_link(m: re.Match) -> str:
        ref = next(pending, None)
        if ref is None:
            return f"`{m.group(2)}`"
        return render_reference(ref, targets)

    text = INLINE_LINK_RE.sub(repl_link, text)

    def repl_tag(m: re.Match) -> str:
        name, content = m.group(1), (m.group(2) or "").strip()
        if name == "code":
            return f"`{content}`"
        if name == "inheritDoc":
            return ""
        return content

    return INLINE_TAG_RE.sub(repl_tag, text).strip()
