"""Data models for the declarations of a parsed API surface.

Relations between declarations (origin function, instantiation pattern,
concrete class of an interface mirror, property accessors) are stored as
declaration ids and resolved through the lookup table of the owning
``AstContext``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar


class AccessLevel(Enum):
    """Access specifier of a member function."""

    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"
    INTERNAL = "internal"


class ParameterKind(Enum):
    """Role of a parameter in a generated signature."""

    REGULAR = "regular"
    EXTENSION = "extension"  # receiver of an extension method


class SynthKind(Enum):
    """How the binder produced a synthesized function."""

    DEFAULT_VALUE_OVERLOAD = "default_value_overload"
    COMPLEMENT_OPERATOR = "complement_operator"
    ABSTRACT_IMPL_CALL = "abstract_impl_call"


@dataclass
class Parameter:
    """A single function parameter."""

    name: str
    type: str
    kind: ParameterKind = ParameterKind.REGULAR


@dataclass(frozen=True)
class Synthesized:
    """Marks a function generated from another function."""

    kind: SynthKind
    origin: str  # id of the function it was generated from


@dataclass(frozen=True)
class Instantiation:
    """Marks a function instantiated from a template pattern."""

    pattern: str  # id of the pattern function


@dataclass(kw_only=True)
class Declaration:
    """Attributes shared by every declaration of the AST."""

    kind: ClassVar[str] = "declaration"

    id: str
    name: str
    qualified_name: str = ""
    usr: str = ""  # unique per-overload identifier
    generated: bool = True
    system_header: bool = False
    comment: str | None = None

    def __post_init__(self) -> None:
        """Default the qualified name and identifier from the simpler fields."""
        if not self.qualified_name:
            self.qualified_name = self.name
        if not self.usr:
            self.usr = self.id

    def children(self) -> list["Declaration"]:
        """Return nested declarations in traversal order."""
        return []


@dataclass(kw_only=True)
class Enumeration(Declaration):
    """An enum type."""

    kind: ClassVar[str] = "enum"

    items: list[str] = field(default_factory=list)


@dataclass(kw_only=True)
class Function(Declaration):
    """A free function or method."""

    kind: ClassVar[str] = "function"

    parameters: list[Parameter] = field(default_factory=list)
    access: AccessLevel = AccessLevel.PUBLIC
    owner: str | None = None  # id of the class declaring this method
    synthesis: Synthesized | Instantiation | None = None
    counterpart: str | None = None  # concrete method mirrored by this one
    implicit: bool = False

    @property
    def parameter_types(self) -> list[str]:
        """Types of all parameters, in declaration order."""
        return [p.type for p in self.parameters]


@dataclass(kw_only=True)
class Property(Declaration):
    """A property backed by getter and/or setter functions."""

    kind: ClassVar[str] = "property"

    getter: str | None = None
    setter: str | None = None
    owner: str | None = None
    synthesized: bool = False


@dataclass(kw_only=True)
class Variable(Declaration):
    """A global or static member variable."""

    kind: ClassVar[str] = "variable"

    type: str = ""
    owner: str | None = None


@dataclass(kw_only=True)
class Event(Declaration):
    """An event generated around an original function (e.g. a signal)."""

    kind: ClassVar[str] = "event"

    function: str | None = None
    owner: str | None = None


@dataclass(kw_only=True)
class Class(Declaration):
    """A class, struct or union."""

    kind: ClassVar[str] = "class"

    classes: list["Class"] = field(default_factory=list)
    enums: list[Enumeration] = field(default_factory=list)
    fields: list[Variable] = field(default_factory=list)
    methods: list[Function] = field(default_factory=list)
    properties: list[Property] = field(default_factory=list)
    events: list[Event] = field(default_factory=list)
    incomplete: bool = False  # forward declaration only

    def children(self) -> list[Declaration]:
        """Return members so that accessors resolve before their properties."""
        return [
            *self.classes,
            *self.enums,
            *self.fields,
            *self.methods,
            *self.properties,
            *self.events,
        ]


@dataclass(kw_only=True)
class InterfaceMirror(Class):
    """A pure-virtual interface generated as the shadow of a concrete class."""

    kind: ClassVar[str] = "interface"

    concrete: str  # id of the concrete class


@dataclass(kw_only=True)
class Namespace(Declaration):
    """A namespace grouping other declarations."""

    kind: ClassVar[str] = "namespace"

    declarations: list[Declaration] = field(default_factory=list)

    def children(self) -> list[Declaration]:
        """Return the declarations of the namespace."""
        return list(self.declarations)
