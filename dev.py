"""Development script: lint, type-check and test doclet, then build the sample docs."""

import argparse
import json
import subprocess
import sys
from pathlib import Path

PACKAGE = "doclet"
ROOT = Path(__file__).parent
SAMPLE_OUT = ROOT / "docs_out"
REPORT = SAMPLE_OUT / "resolution_report.json"


def run_command(command: list[str], step_name: str) -> None:
    """Run a shell command as a step in the development process."""
    print(f"\n--- {step_name} ---")
    print(f"$ {' '.join(command)}")
    try:
        subprocess.run(command, check=True, cwd=ROOT)
    except subprocess.CalledProcessError:
        print(f"\nFailed: {step_name}")
        sys.exit(1)


def run_checks() -> None:
    """Lint, type-check and test without modifying any file."""
    run_command(["ruff", "format", "--check", PACKAGE, "tests"], "Format check")
    run_command(["ruff", "check", PACKAGE, "tests"], "Lint")
    run_command(["mypy", PACKAGE], "Type check")
    run_command([sys.executable, "-m", "pytest", "-q"], "Tests")


def print_report_summary() -> None:
    """Print the link statistics of the sample dry run."""
    stats = json.loads(REPORT.read_text(encoding="utf-8"))["stats"]
    print(
        f"Sample model: {stats['resolved']} links resolved, "
        f"{stats['unresolved']} unresolved"
    )
    for target, count in stats.get("unresolved_targets", {}).items():
        print(f"  unresolved: {target} ({count}x)")


def main() -> None:
    """Run the development checks, then the sample documentation build."""
    parser = argparse.ArgumentParser(
        description="Run doclet development checks and the sample build."
    )
    parser.add_argument(
        "--ci",
        action="store_true",
        help="Run checks and tests only, skipping the sample build",
    )
    args = parser.parse_args()

    if args.ci:
        run_checks()
        print("\nCI checks passed.")
        return

    run_command(["ruff", "format", PACKAGE, "tests"], "Format")
    run_command(["ruff", "check", "--fix", PACKAGE, "tests"], "Lint and fix")
    run_checks()

    run_command(
        [sys.executable, "main.py", "--out", SAMPLE_OUT.name, "--dry-run"],
        "Sample dry run",
    )
    print_report_summary()
    run_command([sys.executable, "main.py", "--out", SAMPLE_OUT.name], "Sample build")

    print(f"\nAll checks passed; sample docs are in {SAMPLE_OUT}")


if __name__ == "__main__":
    main()
