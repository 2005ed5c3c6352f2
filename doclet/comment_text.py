"""Parsing helpers for raw Javadoc comment text."""

import re

from doclet.reference import Reference

INLINE_TAG_RE = re.compile(r"\{@(\w+)(?:\s+([^{}]*))?\}")
INLINE_LINK_RE = re.compile(
    r"\{@(link|linkplain)\s+([^\s{}(]+(?:\([^)]*\))?)\s*([^{}]*)\}",
)
INHERIT_DOC = "{@inheritDoc}"

# Sentence end: a period followed by whitespace or the end of the text.
_SENTENCE_END_RE = re.compile(r"\.(?=\s|$)")
_BLOCK_HTML_RE = re.compile(r"<(?:p|pre|h[1-6]|ul|ol|dl|table|hr|blockquote)\b", re.I)


def _mask_inline_tags(text: str) -> str:
    """Blank out inline tags so their periods never end a sentence."""
    return INLINE_TAG_RE.sub(lambda m: "x" * len(m.group(0)), text)


def split_first_sentence(comment: str) -> tuple[str, str]:
    """Split a comment into its summary (first sentence) and remaining body."""
    text = comment.strip()
    if not text:
        return "", ""
    masked = _mask_inline_tags(text)
    cut = len(text)
    end = _SENTENCE_END_RE.search(masked)
    if end:
        cut = end.end()
    block = _BLOCK_HTML_RE.search(masked)
    if block and block.start() < cut:
        cut = block.start()
    if cut == 0:
        # Comment opens with a block tag; there is no summary sentence.
        return "", text
    return text[:cut].strip(), text[cut:].strip()


def parse_links(text: str) -> tuple[Reference, ...]:
    """Create one reference per inline ``{@link}`` / ``{@linkplain}`` in text."""
    return tuple(
        Reference(text=m.group(2).strip(), label=m.group(3).strip())
        for m in INLINE_LINK_RE.finditer(text)
    )


def parse_see_target(text: str) -> Reference | None:
    """Reference for a ``@see`` tag, or ``None`` for quoted text and HTML links."""
    text = text.strip()
    if not text or text.startswith(('"', "<")):
        return None
    m = re.match(r"([^\s(]+(?:\([^)]*\))?)\s*(.*)", text, re.S)
    if m is None:
        return None
    return Reference(text=m.group(1), label=m.group(2).strip())
