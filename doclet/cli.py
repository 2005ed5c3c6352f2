"""Command line entry point: API model file in, documentation tree out."""

import argparse
import logging
from pathlib import Path

from doclet.api_model import load_api_model
from doclet.errors import DocletError
from doclet.load_config import FORMATS, LAYOUTS, load_config
from doclet.run_doclet import run_doclet


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    ap = argparse.ArgumentParser(
        description="Generate cross-referenced API documentation from a Javadoc model.",
    )
    ap.add_argument(
        "model",
        type=Path,
        help="API model file (YAML or JSON) produced by the reflection front end",
    )
    ap.add_argument("out_dir", type=Path, help="Output directory")
    ap.add_argument("--config", help="Path to configuration file")
    ap.add_argument(
        "--format",
        choices=FORMATS,
        help="Output format (default: markdown)",
    )
    ap.add_argument(
        "--layout",
        choices=LAYOUTS,
        help="One page per type, or one page per package (default: type)",
    )
    ap.add_argument("--api-root", help="Page path root (default: /api)")
    ap.add_argument(
        "--home-page",
        action="store_true",
        help="Generate a simple Home page (home.md)",
    )
    ap.add_argument(
        "--dry-run",
        action="store_true",
        help="Run the pipeline and write only the resolution report",
    )
    ap.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log unresolved references and stage statistics",
    )
    return ap.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the documentation generator."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if not args.model.exists():
        msg = f"API model not found: {args.model}"
        raise SystemExit(msg)

    try:
        config = load_config(args.config)
    except ValueError as e:
        print(f"Error: {e}")
        return 1
    if args.format:
        config["format"] = args.format
    if args.layout:
        config["layout"] = args.layout
    if args.api_root:
        config["api_root"] = args.api_root
    if args.home_page:
        config["include_home_page"] = True

    try:
        ok = run_doclet(
            load_api_model(args.model),
            args.out_dir,
            config,
            dry_run=args.dry_run,
        )
    except DocletError as e:
        print(f"Error: {e}")
        return 1
    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
