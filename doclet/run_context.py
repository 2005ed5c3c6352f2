"""Explicit per-run state threaded through every pipeline stage."""

from dataclasses import dataclass, field
from typing import Any

from doclet.load_config import load_config
from doclet.resolution_report import ResolutionReport


@dataclass
class RunContext:
    """Configuration and bookkeeping for one documentation run."""

    config: dict[str, Any] = field(default_factory=load_config)
    report: ResolutionReport = field(default_factory=ResolutionReport)

    def is_external(self, reference_text: str) -> bool:
        """True when the reference names a configured external package."""
        return any(
            reference_text == prefix or reference_text.startswith(prefix + ".")
            for prefix in self.config.get("external_packages") or []
        )
