"""Per-declaration association states."""

from enum import Enum


class DocState(Enum):
    """Where a declaration stands in the association pass.

    Transitions are one-shot: UNVISITED becomes SKIPPED when the declaration
    is ineligible, or RESOLVED / RESOLVED_EMPTY after its kind's rule ran.
    """

    UNVISITED = "unvisited"
    SKIPPED = "skipped"
    RESOLVED = "resolved"
    RESOLVED_EMPTY = "resolved_empty"
