"""Logic for the documentation association pass over a parsed API surface."""

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from apidocs.association_session import AssociationSession
from apidocs.declarations import (
    Class,
    Declaration,
    Enumeration,
    Event,
    Function,
    Instantiation,
    InterfaceMirror,
    Namespace,
    ParameterKind,
    Property,
    Synthesized,
    SynthKind,
    Variable,
)
from apidocs.doc_state import DocState
from apidocs.eligibility import is_eligible, is_unit_eligible

if TYPE_CHECKING:
    from apidocs.association_report import AssociationReport
    from apidocs.documentation_index import DocumentationIndex
    from apidocs.translation_unit import AstContext, TranslationUnit

logger = logging.getLogger(__name__)


class DocumentationAssociationPass:
    """Sets the comment of every eligible declaration from a documentation index.

    Declarations are resolved either by querying the index or by borrowing
    the comment of a related declaration (origin of a synthesized overload,
    template pattern, concrete counterpart of an interface mirror). Resolved
    texts are cached in the session under the declaration's unique
    identifier so that declarations sharing it reuse the text.
    """

    def __init__(
        self,
        index: "DocumentationIndex",
        session: AssociationSession | None = None,
        report: "AssociationReport | None" = None,
    ) -> None:
        """Initialize the pass with its index and session."""
        self.index = index
        self.session = session if session is not None else AssociationSession()
        self.report = report
        self.index_queries = 0

        self.context: AstContext | None = None
        self._in_progress: set[str] = set()

    def run(self, context: "AstContext") -> bool:
        """Execute the pass; return False when the corpus is unavailable."""
        if not self.index.exists:
            logger.info("Documentation corpus unavailable, skipping association")
            return False

        self.context = context
        for unit in context.units:
            self.visit_translation_unit(unit)
        logger.debug("Association issued %d index queries", self.index_queries)
        return True

    def visit_translation_unit(self, unit: "TranslationUnit") -> None:
        """Visit the declarations of a generated, non-system unit."""
        if not is_unit_eligible(unit):
            logger.debug("Skipping translation unit %s", unit.file)
            return
        for decl in unit.declarations:
            self.visit(decl)

    def visit(self, decl: Declaration) -> None:
        """Apply the rule of the declaration's kind, then descend into it."""
        if self.session.state_of(decl) is not DocState.UNVISITED:
            return
        if not is_eligible(decl):
            self.session.mark(decl, DocState.SKIPPED)
            return

        match decl:
            case Namespace():
                self._visit_children(decl)
            case InterfaceMirror():
                self._document_mirror(decl)
                self._visit_children(decl)
            case Class():
                self._document_by_name(decl, self.index.lookup_type)
                self._visit_children(decl)
            case Enumeration():
                self._document_by_name(decl, self.index.lookup_enum)
            case Function():
                self._visit_function(decl)
            case Property():
                self._document_property(decl)
            case Variable():
                # Only the variable itself; its type is never walked.
                self._document_by_name(decl, self.index.lookup_variable)
            case Event():
                self._document_event(decl)
            case _:
                logger.debug("No documentation rule for %s", decl.qualified_name)

    def _visit_children(self, decl: Declaration) -> None:
        for child in decl.children():
            self.visit(child)

    def _query(self, lookup: Callable[..., str | None], *args: object) -> str | None:
        self.index_queries += 1
        return lookup(*args)

    def _document_by_name(
        self, decl: Declaration, lookup: Callable[[str], str | None]
    ) -> None:
        """Query the index by qualified name and set the comment on a hit."""
        text = self._query(lookup, decl.qualified_name)
        if text is not None:
            decl.comment = text
        self._finish(decl, "index")

    def _finish(self, decl: Declaration, source: str) -> None:
        """Record the final state of a declaration, once."""
        if self.session.state_of(decl) is not DocState.UNVISITED:
            return
        resolved = decl.comment is not None
        state = DocState.RESOLVED if resolved else DocState.RESOLVED_EMPTY
        self.session.mark(decl, state)
        if self.report is not None:
            self.report.add_outcome(decl, state, source if resolved else "none")

    def _lookup(self, decl_id: str) -> Declaration:
        if self.context is None:
            msg = "association pass is not running"
            raise RuntimeError(msg)
        return self.context.get(decl_id)

    def _function(self, decl_id: str) -> Function:
        decl = self._lookup(decl_id)
        if not isinstance(decl, Function):
            msg = f"{decl_id} is a {decl.kind}, expected a function"
            raise TypeError(msg)
        return decl

    def _owned_by_mirror(self, decl: Function | Property) -> bool:
        if decl.owner is None or self.context is None:
            return False
        owner = self.context.declarations.get(decl.owner)
        return isinstance(owner, InterfaceMirror)

    def _document_mirror(self, mirror: InterfaceMirror) -> None:
        """Copy documentation from the concrete class and its members."""
        concrete = self._lookup(mirror.concrete)
        if not isinstance(concrete, Class):
            logger.warning(
                "Interface %s mirrors %s which is not a class",
                mirror.qualified_name,
                mirror.concrete,
            )
            self._finish(mirror, "none")
            return
        if mirror.id in self._in_progress:
            logger.warning(
                "Cyclic mirror chain through %s, leaving it undocumented",
                mirror.qualified_name,
            )
            self._finish(mirror, "none")
            return

        # The concrete class may appear later in tree order.
        self._in_progress.add(mirror.id)
        try:
            self.visit(concrete)
        finally:
            self._in_progress.discard(mirror.id)

        if not self._is_resolved(concrete):
            logger.debug(
                "Concrete class %s of %s was skipped, nothing to copy",
                concrete.qualified_name,
                mirror.qualified_name,
            )
            self._finish(mirror, "existing")
            return

        mirror.comment = concrete.comment
        by_counterpart = {m.counterpart: m for m in mirror.methods if m.counterpart}
        for method in concrete.methods:
            mirrored = by_counterpart.get(method.id)
            if mirrored is not None and self._is_resolved(method):
                mirrored.comment = method.comment
        by_name = {p.name: p for p in mirror.properties}
        for prop in concrete.properties:
            mirrored_prop = by_name.get(prop.name)
            if mirrored_prop is not None and self._is_resolved(prop):
                mirrored_prop.comment = prop.comment
        self._finish(mirror, "mirror")

    def _is_resolved(self, decl: Declaration) -> bool:
        state = self.session.state_of(decl)
        return state in (DocState.RESOLVED, DocState.RESOLVED_EMPTY)

    def _visit_function(self, function: Function) -> None:
        if not self._owned_by_mirror(function):
            self._document_function(function)
            return

        # Mirror methods never query the index: they reuse what the concrete
        # counterpart stored under the shared identifier.
        text = self.session.cache.get(function.usr)
        if text is not None:
            function.comment = text
            self._finish(function, "cache")
        else:
            self._finish(function, "mirror")

    def _document_function(self, function: Function) -> None:
        """Resolve a function, recursing into its origin or template pattern."""
        if self.session.state_of(function) is not DocState.UNVISITED:
            return
        if function.comment is not None:
            self._finish(function, "existing")
            return
        if function.id in self._in_progress:
            logger.warning(
                "Cyclic origin chain through %s, leaving it undocumented",
                function.qualified_name,
            )
            self._finish(function, "none")
            return

        self._in_progress.add(function.id)
        try:
            source = self._resolve_function(function)
        finally:
            self._in_progress.discard(function.id)

        if function.comment is not None:
            self.session.cache.store(function.usr, function.comment)
        self._finish(function, source)

    def _document_dependency(self, function: Function) -> None:
        """Resolve an origin or pattern function, whatever its own eligibility.

        A dependency skipped earlier in tree order is resolved now, so the
        outcome of its dependents does not depend on where it was declared.
        """
        if self.session.state_of(function) is DocState.SKIPPED:
            self.session.mark(function, DocState.UNVISITED)
        self._document_function(function)

    def _resolve_function(self, function: Function) -> str:
        """Set the comment of an unresolved function; return where it came from."""
        match function.synthesis:
            case Synthesized(kind=SynthKind.DEFAULT_VALUE_OVERLOAD, origin=origin_id):
                origin = self._function(origin_id)
                self._document_dependency(origin)
                function.comment = origin.comment
                return "origin"
            case Synthesized():
                return "none"
            case Instantiation(pattern=pattern_id):
                pattern = self._function(pattern_id)
                self._document_dependency(pattern)
                function.comment = pattern.comment
                self._rename_parameters(function, pattern)
                return "pattern"
            case _:
                function.comment = self._query(
                    self.index.lookup_function,
                    function.qualified_name,
                    function.parameter_types,
                    function.access.value,
                )
                return "index"

    @staticmethod
    def _rename_parameters(function: Function, pattern: Function) -> None:
        """Give an instantiation the parameter names of its pattern, by position."""
        regular = [
            p for p in function.parameters if p.kind is not ParameterKind.EXTENSION
        ]
        original = [
            p for p in pattern.parameters if p.kind is not ParameterKind.EXTENSION
        ]
        if len(regular) != len(original):
            logger.warning(
                "%s has %d parameters but its pattern %s has %d",
                function.qualified_name,
                len(regular),
                pattern.qualified_name,
                len(original),
            )
        for param, named in zip(regular, original, strict=False):
            param.name = named.name

    def _document_property(self, prop: Property) -> None:
        if prop.synthesized:
            self._finish(prop, "existing")
            return

        accessors = [
            self._function(a) for a in (prop.getter, prop.setter) if a is not None
        ]
        mirrored = self._owned_by_mirror(prop)

        # Getter first: its identifier is also the key written back below.
        text = None
        source = "cache"
        for accessor in accessors:
            text = self.session.cache.get(accessor.usr)
            if text is not None:
                break
        if text is None and not mirrored:
            text = self._query(self.index.lookup_property, prop.qualified_name)
            source = "index"

        if text is not None:
            prop.comment = text
        elif prop.comment is not None:
            source = "mirror" if mirrored else "existing"

        if prop.comment is not None and accessors:
            self.session.cache.store(accessors[0].usr, prop.comment)
        self._finish(prop, source)

    def _document_event(self, event: Event) -> None:
        """Document the function an event wraps, when that function is generated."""
        function = self._lookup(event.function) if event.function else None
        if not isinstance(function, Function) or not function.generated:
            self.session.mark(event, DocState.SKIPPED)
            return

        if self.session.state_of(function) is DocState.UNVISITED:
            self._visit_function(function)
        # The event keeps its own comment; its state follows the function.
        if function.comment is not None:
            self.session.mark(event, DocState.RESOLVED)
        else:
            self.session.mark(event, DocState.RESOLVED_EMPTY)
