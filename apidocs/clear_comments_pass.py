"""Logic for dropping comments the header parser attached to declarations."""

import logging

from apidocs.association_session import AssociationSession
from apidocs.eligibility import is_unit_eligible
from apidocs.translation_unit import AstContext, walk_declarations

logger = logging.getLogger(__name__)


class ClearCommentsPass:
    """Clears the comments of generated declarations in generated units.

    Declarations whose identifier already has a cached comment in the given
    session are left alone, so the pass may also run after association.
    """

    def __init__(self, session: AssociationSession | None = None) -> None:
        """Initialize the pass with an optional session to protect."""
        self.session = session

    def run(self, context: AstContext) -> int:
        """Execute the pass and return how many comments were cleared."""
        cleared = 0
        for unit in context.units:
            if not is_unit_eligible(unit):
                continue
            for decl in walk_declarations(unit.declarations):
                if decl.comment is None or not decl.generated:
                    continue
                if self.session is not None and decl.usr in self.session.cache:
                    continue
                decl.comment = None
                cleared += 1
        logger.debug("Cleared %d parser comments", cleared)
        return cleared
