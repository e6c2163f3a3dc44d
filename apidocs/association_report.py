"""Logic for generating reports on documentation association."""

import json
import time
from collections import Counter
from pathlib import Path
from typing import Any

from apidocs.association_outcome import AssociationOutcome
from apidocs.declarations import Declaration
from apidocs.doc_state import DocState


class AssociationReport:
    """Collects and summarizes the outcome of the association pass."""

    def __init__(self, config_hash: str) -> None:
        """Initialize the report with metadata."""
        self.config_hash = config_hash
        self.outcomes: list[AssociationOutcome] = []
        self.start_time = time.time()

    def add_outcome(self, decl: Declaration, state: DocState, source: str) -> None:
        """Add the outcome of a single declaration to the report."""
        self.outcomes.append(
            AssociationOutcome(
                decl_id=decl.id,
                kind=decl.kind,
                qualified_name=decl.qualified_name,
                state=state,
                source=source,
            )
        )

    def generate_report(self, path: str | Path, index_queries: int = 0) -> None:
        """Write the summary report to a JSON file."""
        report = {
            "meta": {
                "timestamp": time.time(),
                "duration": time.time() - self.start_time,
                "config_hash": self.config_hash,
                "total_items": len(self.outcomes),
            },
            "results": [
                {
                    "id": o.decl_id,
                    "kind": o.kind,
                    "qualified_name": o.qualified_name,
                    "state": o.state.value,
                    "source": o.source,
                }
                for o in self.outcomes
            ],
            "stats": self._compute_stats(index_queries),
        }

        Path(path).write_text(json.dumps(report, indent=2), encoding="utf-8")

    def _compute_stats(self, index_queries: int) -> dict[str, Any]:
        state_counts = Counter(o.state.value for o in self.outcomes)
        source_counts = Counter(o.source for o in self.outcomes)
        kind_counts = Counter(o.kind for o in self.outcomes)

        total = len(self.outcomes)
        resolved = state_counts.get(DocState.RESOLVED.value, 0)
        return {
            "state_counts": dict(state_counts),
            "source_counts": dict(source_counts),
            "kind_counts": dict(kind_counts),
            "metrics": {
                "index_queries": index_queries,
                "coverage": (resolved / total) if total > 0 else 0,
            },
        }
