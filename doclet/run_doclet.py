"""Orchestration of one documentation run: extract, resolve, aggregate, emit."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from doclet.aggregator import AggregateView, aggregate
from doclet.api_model import ApiModel
from doclet.document_model import DocumentModel
from doclet.emitter import emit, write_documents
from doclet.extractor import extract
from doclet.load_config import merge_config
from doclet.resolver import resolve_references
from doclet.run_context import RunContext

logger = logging.getLogger(__name__)


@dataclass
class DocletResult:
    """Everything a run produced, before anything is written."""

    model: DocumentModel
    view: AggregateView
    documents: dict[str, str] = field(default_factory=dict)


def build_documents(api_model: ApiModel, ctx: RunContext) -> DocletResult:
    """Run the whole pipeline in memory.

    ``MalformedDeclaration`` and ``DuplicateDeclaration`` propagate; no
    document is produced when either is raised.
    """
    model = extract(api_model, ctx)
    resolve_references(model, ctx)
    view = aggregate(model, ctx)
    documents = emit(model, view, ctx)
    return DocletResult(model=model, view=view, documents=documents)


def run_doclet(
    api_model: ApiModel,
    out_dir: Path,
    config: dict[str, Any] | None = None,
    *,
    dry_run: bool = False,
) -> bool:
    """Generate documentation for ``api_model`` into ``out_dir``.

    ``config`` is merged onto the defaults, so a partial mapping is enough.
    Returns ``True`` on success. Unresolved references do not fail the run.
    """
    ctx = RunContext(config=merge_config(config))
    result = build_documents(api_model, ctx)

    out_root = out_dir.resolve()
    out_root.mkdir(parents=True, exist_ok=True)
    if dry_run:
        report_path = out_root / str(ctx.config["report"]["path"])
        ctx.report.generate_report(report_path)
        print(f"Dry run complete. Report generated at {report_path}")
        return True

    written = write_documents(out_root, result.documents)
    stats = ctx.report.summary()
    print(
        f"Generated {written} pages into: {out_root} "
        f"({stats['resolved']} links resolved, {stats['unresolved']} unresolved)"
    )
    return True
