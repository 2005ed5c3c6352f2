"""Main orchestration script for generating the API documentation tree."""

import argparse
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path


def run_command(cmd_list: Sequence[str | Path], cwd: Path | str | None = None) -> None:
    """Run a command and exit if it fails."""
    cmd_str = " ".join(str(x) for x in cmd_list)
    print(f"Running: {cmd_str}")
    try:
        subprocess.run(cmd_list, check=True, cwd=cwd)
    except subprocess.CalledProcessError as e:
        print(f"Error executing command: {cmd_str}")
        sys.exit(e.returncode)


def main() -> None:
    """Run the documentation pipeline over the project's API model."""
    parser = argparse.ArgumentParser(
        description="Generate Markdown API documentation from a Javadoc model."
    )
    parser.add_argument(
        "--model",
        default="api_model.yml",
        help="API model file exported by the reflection front end",
    )
    parser.add_argument(
        "--out",
        default="docs_out",
        help="Output directory for the generated pages",
    )
    parser.add_argument(
        "--dev",
        action="store_true",
        help="Run development checks (linting, tests) before generating documentation",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Resolve references and write only the resolution report",
    )
    parser.add_argument(
        "--format",
        choices=("markdown", "json"),
        help="Output format",
    )
    parser.add_argument(
        "--config",
        help="Path to configuration file",
    )
    args = parser.parse_args()

    root_dir = Path(__file__).parent

    if args.dev:
        print("--- Running Development Checks ---")
        run_command([sys.executable, str(root_dir / "dev.py"), "--ci"])
        print("\nDevelopment checks passed. Generating documentation.\n")

    print("--- Generating API documentation ---")
    out_dir = root_dir / args.out
    cmd = [
        sys.executable,
        "-m",
        "doclet.cli",
        str(root_dir / args.model),
        str(out_dir),
        "--home-page",
    ]
    if args.dry_run:
        cmd.append("--dry-run")
    if args.format:
        cmd.extend(["--format", args.format])
    if args.config:
        cmd.extend(["--config", args.config])

    run_command(cmd, cwd=root_dir)

    print(f"\nSUCCESS: Documentation generated in {out_dir}")


if __name__ == "__main__":
    main()
