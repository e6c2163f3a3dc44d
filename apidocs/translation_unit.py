"""Data models for translation units and the AST that owns them."""

from collections.abc import Iterator
from dataclasses import dataclass, field

from apidocs.declarations import Declaration


@dataclass
class TranslationUnit:
    """A parsed header and its top-level declarations."""

    file: str
    generated: bool = True
    system_header: bool = False
    declarations: list[Declaration] = field(default_factory=list)


def walk_declarations(decls: list[Declaration]) -> Iterator[Declaration]:
    """Yield declarations depth-first, parents before their children."""
    for decl in decls:
        yield decl
        yield from walk_declarations(decl.children())


@dataclass
class AstContext:
    """All translation units plus the id lookup table for declarations."""

    units: list[TranslationUnit] = field(default_factory=list)
    declarations: dict[str, Declaration] = field(default_factory=dict)

    def register(self, decl: Declaration) -> None:
        """Add a declaration to the lookup table."""
        self.declarations[decl.id] = decl

    def get(self, decl_id: str) -> Declaration:
        """Return the declaration with the given id."""
        return self.declarations[decl_id]

    def iter_declarations(self) -> Iterator[Declaration]:
        """Yield every declaration of every unit in tree order."""
        for unit in self.units:
            yield from walk_declarations(unit.declarations)
