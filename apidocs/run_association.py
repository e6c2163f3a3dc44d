"""Orchestration logic for attaching corpus documentation to an AST."""

import argparse
import logging
from typing import Any

import yaml

from apidocs.association_pass import DocumentationAssociationPass
from apidocs.association_report import AssociationReport
from apidocs.association_session import AssociationSession
from apidocs.clear_comments_pass import ClearCommentsPass
from apidocs.compute_config_hash import compute_config_hash
from apidocs.documentation_index import DocumentationIndex
from apidocs.errors import ApiDocsError
from apidocs.load_ast import load_ast
from apidocs.load_config import load_config
from apidocs.module_name_from_lib_file import module_name_from_lib_file
from apidocs.translation_unit import AstContext

logger = logging.getLogger(__name__)


def run_association(args: argparse.Namespace) -> int:
    """Execute the full association pipeline."""
    if not args.ast_file.is_file():
        msg = f"AST description not found: {args.ast_file}"
        raise SystemExit(msg)

    config = _init_config(args)
    modules = _resolve_modules(config, args)
    try:
        context = load_ast(args.ast_file)
        index = DocumentationIndex(
            args.docs_root, modules, config["docs"]["file_pattern"]
        )
    except ApiDocsError as exc:
        raise SystemExit(str(exc)) from exc

    session = AssociationSession()
    if config["passes"]["clear_parser_comments"]:
        ClearCommentsPass().run(context)

    report = AssociationReport(compute_config_hash(config))
    doc_pass = DocumentationAssociationPass(index, session, report)
    if not doc_pass.run(context):
        print(f"No documentation found under {args.docs_root}; nothing associated.")
        return 0

    report_path = args.report or config["report"]["path"]
    if report_path:
        report.generate_report(report_path, doc_pass.index_queries)
        logger.info("Association report written to %s", report_path)

    documented = _collect_comments(context)
    if args.dry_run:
        print(f"Dry run: {len(documented)} declarations would be documented.")
        return 0

    out_file = args.out or args.ast_file.with_suffix(".comments.yml")
    out_file.write_text(
        yaml.safe_dump(documented, sort_keys=True, allow_unicode=True),
        encoding="utf-8",
    )
    print(f"Documented {len(documented)} declarations into: {out_file}")
    return 0


def _init_config(args: argparse.Namespace) -> dict[str, Any]:
    """Load configuration and apply command line overrides."""
    config = load_config(args.config)
    if args.clear_parser_comments:
        config["passes"]["clear_parser_comments"] = True

    level = "DEBUG" if args.verbose else str(config["logging"]["level"]).upper()
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    return config


def _resolve_modules(config: dict[str, Any], args: argparse.Namespace) -> list[str]:
    """Combine configured modules, --module values and --lib-file names."""
    modules = [
        *config["docs"]["modules"],
        *(args.module or []),
        *(module_name_from_lib_file(f) for f in args.lib_file or []),
    ]
    modules = list(dict.fromkeys(modules))
    if not modules:
        logger.warning("No documentation modules given")
    return modules


def _collect_comments(context: AstContext) -> dict[str, str]:
    """Map declaration ids to their comments, skipping undocumented ones."""
    return {
        decl.id: decl.comment
        for decl in context.iter_declarations()
        if decl.comment is not None
    }
