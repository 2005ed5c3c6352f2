"""Logic for loading and merging configuration files."""

import copy
from pathlib import Path
from typing import Any

import yaml

from doclet.deep_merge import deep_merge

FORMATS = ("markdown", "json")
LAYOUTS = ("type", "package")

DEFAULT_CONFIG: dict[str, Any] = {
    "api_root": "/api",
    "format": "markdown",
    "layout": "type",
    "visibility": "private",
    "inherit_docs": True,
    "include_package_pages": True,
    "include_home_page": False,
    "code_language": "java",
    "external_packages": [],
    "report": {
        "path": "resolution_report.json",
    },
}


def load_config(path: str | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults."""
    user_config: dict[str, Any] = {}
    if path:
        p = Path(path)
        if p.exists():
            user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    return merge_config(user_config)


def merge_config(overrides: dict[str, Any] | None = None) -> dict[str, Any]:
    """Merge ``overrides`` onto a fresh copy of the defaults and validate it."""
    config = deep_merge(copy.deepcopy(DEFAULT_CONFIG), overrides or {})
    validate_config(config)
    return config


def validate_config(config: dict[str, Any]) -> None:
    """Reject unknown output format and layout names."""
    if config.get("format") not in FORMATS:
        msg = f"Unknown format {config.get('format')!r}; expected one of {FORMATS}"
        raise ValueError(msg)
    if config.get("layout") not in LAYOUTS:
        msg = f"Unknown layout {config.get('layout')!r}; expected one of {LAYOUTS}"
        raise ValueError(msg)
