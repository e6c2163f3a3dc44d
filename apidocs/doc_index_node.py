"""Data models for entries of the documentation index."""

from dataclasses import dataclass, field


@dataclass
class FullNameDocIndexNode:
    """Documentation for a declaration identified by its qualified name."""

    full_name: str
    text: str
    location: str = ""  # corpus file the entry was read from


@dataclass
class FunctionDocIndexNode(FullNameDocIndexNode):
    """Documentation for one function overload."""

    access: str = "public"
    parameter_types: list[str] = field(default_factory=list)
