"""Data models for the result of associating documentation with a declaration."""

from dataclasses import dataclass

from apidocs.doc_state import DocState


@dataclass
class AssociationOutcome:
    """Represents how one declaration ended up documented."""

    decl_id: str
    kind: str
    qualified_name: str
    state: DocState
    source: str  # index/cache/origin/pattern/mirror/existing/none
