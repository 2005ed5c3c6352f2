"""Turns the aggregated model into output documents and writes them."""

import logging
from pathlib import Path

from doclet.aggregator import AggregateView
from doclet.document_model import DocumentModel
from doclet.link_target import LinkTarget, build_link_targets, output_file_for_page
from doclet.render_json import render_json
from doclet.render_package_page import (
    render_collapsed_package_page,
    render_package_page,
)
from doclet.render_type_page import render_type_page
from doclet.run_context import RunContext

logger = logging.getLogger(__name__)


def emit(
    model: DocumentModel,
    view: AggregateView,
    ctx: RunContext | None = None,
) -> dict[str, str]:
    """Render every output document; maps relative file paths to contents.

    Reads the model and view only; nothing is written here.
    """
    ctx = ctx or RunContext()
    config = ctx.config
    targets = build_link_targets(model, view, config)
    lang = str(config.get("code_language") or "java")
    documents: dict[str, str] = {}

    if config.get("format") == "json":
        documents["api.json"] = render_json(model, view, targets)
        return documents

    for pkg in view.packages:
        page = output_file_for_page(targets[pkg].page_path)
        if config.get("layout") == "package":
            documents[page] = render_collapsed_package_page(
                pkg, model, view, targets, code_language=lang
            )
            continue
        if config.get("include_package_pages", True):
            documents[page] = render_package_page(pkg, model, view, targets)
        for type_name in view.types_by_package.get(pkg, []):
            t = model.get_type(type_name)
            if t is None:
                continue
            documents[output_file_for_page(targets[type_name].page_path)] = (
                render_type_page(t, model, view, targets, code_language=lang)
            )

    if config.get("include_home_page"):
        documents["home.md"] = render_home_page(view, targets)
    return documents


def render_home_page(view: AggregateView, targets: dict[str, LinkTarget]) -> str:
    """Generate a simple home page listing every package."""
    home = ["# API Reference", ""]
    for pkg in view.packages:
        t = targets.get(pkg)
        home.append(f"- [{pkg}]({t.page_path})" if t else f"- {pkg}")
    return "\n".join(home) + "\n"


def write_documents(out_root: Path, documents: dict[str, str]) -> int:
    """Write rendered documents below ``out_root``; returns the file count."""
    written = 0
    total = len(documents)
    print(f"Writing {total} pages...")
    for rel, text in documents.items():
        out_file = out_root / rel
        out_file.parent.mkdir(parents=True, exist_ok=True)
        out_file.write_text(text, encoding="utf-8")
        written += 1
        if written % 50 == 0:
            print(f"  ... wrote {written}/{total} pages")
    logger.info("Wrote %d documents into %s", written, out_root)
    return written
