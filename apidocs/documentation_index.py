"""Logic for looking up declaration documentation mined from an external corpus."""

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from apidocs.doc_index_node import FullNameDocIndexNode, FunctionDocIndexNode
from apidocs.load_doc_corpus import load_doc_corpus, normalize_type

logger = logging.getLogger(__name__)

DEFAULT_FILE_PATTERN = "{module}.yml"


class DocumentationIndex:
    """Answers documentation lookups by qualified name or function signature.

    The index is built from a documentation root holding one corpus file per
    module. A miss returns None; only an unavailable corpus (see ``exists``)
    is treated as a failure, by the caller.
    """

    def __init__(
        self,
        docs_path: str | Path,
        modules: Iterable[str],
        file_pattern: str = DEFAULT_FILE_PATTERN,
    ) -> None:
        """Load the corpus files of the given modules."""
        self.docs_path = Path(docs_path)
        self.modules = list(modules)
        self.file_pattern = file_pattern

        self.types: dict[str, str] = {}
        self.enums: dict[str, str] = {}
        self.properties: dict[str, str] = {}
        self.variables: dict[str, str] = {}
        self.functions: dict[str, list[FunctionDocIndexNode]] = {}

        self.exists = self._load()

    def _load(self) -> bool:
        """Read every module file; return whether any corpus was found."""
        if not self.docs_path.is_dir():
            logger.info("Documentation root not found: %s", self.docs_path)
            return False

        loaded = 0
        for module in self.modules:
            path = self.docs_path / self.file_pattern.format(module=module)
            if not path.is_file():
                logger.warning("No documentation for module %s at %s", module, path)
                continue
            nodes = load_doc_corpus(path)
            self._add_named(self.types, nodes["types"])
            self._add_named(self.enums, nodes["enums"])
            self._add_named(self.properties, nodes["properties"])
            self._add_named(self.variables, nodes["variables"])
            for node in nodes["functions"]:
                if node.text and isinstance(node, FunctionDocIndexNode):
                    self.functions.setdefault(node.full_name, []).append(node)
            loaded += 1

        logger.debug(
            "Loaded documentation for %d of %d modules", loaded, len(self.modules)
        )
        return loaded > 0

    @staticmethod
    def _add_named(table: dict[str, str], nodes: list[FullNameDocIndexNode]) -> None:
        for node in nodes:
            if not node.text:
                continue
            if node.full_name in table:
                logger.debug(
                    "Duplicate entry for %s in %s", node.full_name, node.location
                )
                continue
            table[node.full_name] = node.text

    def lookup_type(self, qualified_name: str) -> str | None:
        """Return the documentation of a class or struct."""
        return self.types.get(qualified_name)

    def lookup_enum(self, qualified_name: str) -> str | None:
        """Return the documentation of an enum."""
        return self.enums.get(qualified_name)

    def lookup_function(
        self, qualified_name: str, parameter_types: Sequence[str], access: str
    ) -> str | None:
        """Return the documentation of the overload with this exact signature.

        The corpus indexes overloads by signature rather than by any internal
        identifier, so the parameter types and access level must all match.
        """
        wanted = [normalize_type(t) for t in parameter_types]
        for node in self.functions.get(qualified_name, []):
            if node.access == access and node.parameter_types == wanted:
                return node.text
        return None

    def lookup_property(self, qualified_name: str) -> str | None:
        """Return the documentation of a property."""
        return self.properties.get(qualified_name)

    def lookup_variable(self, qualified_name: str) -> str | None:
        """Return the documentation of a variable."""
        return self.variables.get(qualified_name)
