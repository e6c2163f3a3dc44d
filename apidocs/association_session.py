"""Logic for the state shared by the passes of one generation run."""

from apidocs.comment_cache import CommentCache
from apidocs.declarations import Declaration
from apidocs.doc_state import DocState


class AssociationSession:
    """Comment cache and per-declaration states of one generation run.

    A session must be reset (or replaced) between independent runs; later
    passes of the same run may read the cache.
    """

    def __init__(self) -> None:
        """Initialize an empty session."""
        self.cache = CommentCache()
        self.states: dict[str, DocState] = {}

    def state_of(self, decl: Declaration) -> DocState:
        """Return the association state of a declaration."""
        return self.states.get(decl.id, DocState.UNVISITED)

    def mark(self, decl: Declaration, state: DocState) -> None:
        """Record the association state of a declaration."""
        self.states[decl.id] = state

    def reset(self) -> None:
        """Clear the cache and every recorded state."""
        self.cache.reset()
        self.states.clear()
