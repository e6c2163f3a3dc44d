"""Main orchestration script for associating corpus documentation with bindings."""

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
    """Run the documentation association pipeline."""
    parser = argparse.ArgumentParser(
        description="Attach corpus documentation to generated declarations."
    )
    parser.add_argument("ast_file", help="AST description produced by the parser")
    parser.add_argument("docs_root", help="Directory of per-module documentation")
    parser.add_argument(
        "--module",
        action="append",
        default=[],
        help="Documentation module to load (repeatable)",
    )
    parser.add_argument(
        "--dev",
        action="store_true",
        help="Run the test suite before associating documentation",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Associate and report without writing comments",
    )
    parser.add_argument(
        "--config",
        help="Path to configuration file",
    )
    args = parser.parse_args()

    root_dir = Path(__file__).parent
    python_exe = sys.executable

    if args.dev:
        print("--- Running Development Checks ---")
        run_command([python_exe, "-m", "pytest", "-q"], cwd=root_dir)
        print("\nDevelopment checks passed. Proceeding with association.\n")

    print("--- Associating documentation ---")
    cmd = [
        python_exe,
        "-m",
        "apidocs.associate_docs",
        args.ast_file,
        args.docs_root,
        "--report",
        "association_report.json",
    ]
    for module in args.module:
        cmd.extend(["--module", module])
    if args.dry_run:
        cmd.append("--dry-run")
    if args.config:
        cmd.extend(["--config", args.config])

    run_command(cmd)


if __name__ == "__main__":
    main()
