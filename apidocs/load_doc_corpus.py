"""Logic for loading one module of the documentation corpus."""

from pathlib import Path
from typing import Any

import yaml

from apidocs.doc_index_node import FullNameDocIndexNode, FunctionDocIndexNode
from apidocs.errors import CorpusFormatError

SECTIONS = ("types", "enums", "functions", "properties", "variables")


def normalize_type(type_name: str) -> str:
    """Collapse whitespace so signatures compare independently of spacing."""
    return " ".join(type_name.split())


def _as_text(v: object) -> str:
    if v is None:
        return ""
    if isinstance(v, list):
        return "\n".join(t for t in (_as_text(x) for x in v) if t)
    return str(v).strip()


def _build_node(
    section: str, entry: dict[str, Any], location: str
) -> FullNameDocIndexNode:
    full_name = entry.get("full_name")
    if not full_name:
        msg = f"{location}: entry in '{section}' has no full_name"
        raise CorpusFormatError(msg)
    text = _as_text(entry.get("text"))
    if section != "functions":
        return FullNameDocIndexNode(str(full_name), text, location)
    return FunctionDocIndexNode(
        str(full_name),
        text,
        location,
        access=str(entry.get("access") or "public").lower(),
        parameter_types=[
            normalize_type(str(t)) for t in entry.get("parameters") or []
        ],
    )


def load_doc_corpus(path: Path) -> dict[str, list[FullNameDocIndexNode]]:
    """Parse a module documentation file into index nodes grouped by section."""
    try:
        doc = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        msg = f"{path}: invalid YAML ({exc})"
        raise CorpusFormatError(msg) from exc
    if not isinstance(doc, dict):
        msg = f"{path}: expected a mapping of sections"
        raise CorpusFormatError(msg)

    nodes: dict[str, list[FullNameDocIndexNode]] = {s: [] for s in SECTIONS}
    for section in SECTIONS:
        for entry in doc.get(section) or []:
            if not isinstance(entry, dict):
                msg = f"{path}: entries of '{section}' must be mappings"
                raise CorpusFormatError(msg)
            nodes[section].append(_build_node(section, entry, str(path)))
    return nodes
