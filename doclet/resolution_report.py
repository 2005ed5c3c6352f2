"""Collects and summarizes cross-reference resolution outcomes."""

import json
import time
from pathlib import Path
from typing import Any

from doclet.reference import ResolvedLink, Unresolved


class ResolutionReport:
    """Per-run record of resolved and unresolved references."""

    def __init__(self) -> None:
        """Start an empty report."""
        self.resolved: list[tuple[str, str, str]] = []  # owner, text, target
        self.unresolved: list[tuple[str, str]] = []  # owner, text
        self.start_time = time.time()

    def clear(self) -> None:
        """Forget earlier outcomes so a re-run does not double count."""
        self.resolved.clear()
        self.unresolved.clear()

    def add(self, owner: str, text: str, outcome: ResolvedLink | Unresolved) -> None:
        """Record the outcome for one reference owned by ``owner``."""
        if isinstance(outcome, ResolvedLink):
            self.resolved.append((owner, text, outcome.target))
        else:
            self.unresolved.append((owner, outcome.text))

    @property
    def total(self) -> int:
        """Number of references seen."""
        return len(self.resolved) + len(self.unresolved)

    def summary(self) -> dict[str, Any]:
        """Counts and the unresolved list, as plain data."""
        external: dict[str, int] = {}
        for _, text in self.unresolved:
            key = text.split("#", 1)[0] or "#"
            external[key] = external.get(key, 0) + 1
        return {
            "total": self.total,
            "resolved": len(self.resolved),
            "unresolved": len(self.unresolved),
            "unresolved_targets": dict(sorted(external.items())),
        }

    def generate_report(self, path: Path) -> None:
        """Write the report to a JSON file."""
        report = {
            "meta": {
                "timestamp": time.time(),
                "duration": time.time() - self.start_time,
            },
            "stats": self.summary(),
            "unresolved": [
                {"owner": owner, "text": text} for owner, text in self.unresolved
            ],
        }
        path.write_text(json.dumps(report, indent=2), encoding="utf-8")
