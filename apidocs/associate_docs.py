"""Attach documentation from an external corpus to a parsed API surface.

This module reads an AST description of generated bindings and a directory of
per-module documentation files, associates the documentation with every
generated declaration and writes the resulting comments as YAML.
"""

import argparse
from pathlib import Path

from apidocs.run_association import run_association


def main() -> int:
    """Run the association process."""
    ap = argparse.ArgumentParser(
        description="Associate corpus documentation with generated declarations.",
    )
    ap.add_argument(
        "ast_file",
        type=Path,
        help="YAML/JSON description of the parsed translation units",
    )
    ap.add_argument(
        "docs_root",
        type=Path,
        help="Directory holding one documentation file per module",
    )
    ap.add_argument(
        "--module",
        action="append",
        help="Documentation module to load (repeatable)",
    )
    ap.add_argument(
        "--lib-file",
        action="append",
        help="Library file whose module documentation should be loaded (repeatable)",
    )
    ap.add_argument(
        "--config",
        help="Path to configuration file",
    )
    ap.add_argument(
        "--clear-parser-comments",
        action="store_true",
        help="Drop comments extracted from headers before associating",
    )
    ap.add_argument(
        "--report",
        help="Write a JSON association report to this path",
    )
    ap.add_argument(
        "--out",
        type=Path,
        help="Output YAML file (default: <ast_file>.comments.yml)",
    )
    ap.add_argument(
        "--dry-run",
        action="store_true",
        help="Associate and report without writing the output file",
    )
    ap.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    args = ap.parse_args()
    return run_association(args)


if __name__ == "__main__":
    raise SystemExit(main())
