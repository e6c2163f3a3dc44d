"""Logic for loading the AST description produced by the header parser.

The description is a YAML (or JSON) document::

    translation_units:
      - file: qpoint.h
        generated: true
        system_header: false
        declarations:
          - kind: class
            name: Point
            methods:
              - name: setX
                parameters: [{name: x, type: int}]

Namespaces nest further declarations under ``declarations``; classes nest
``classes``, ``enums``, ``fields``, ``methods``, ``properties`` and
``events``, whose entries default to the matching kind. Relations between
declarations are given as declaration ids and checked once everything is
loaded.
"""

from enum import Enum
from pathlib import Path
from typing import Any, TypeVar

import yaml

from apidocs.declarations import (
    AccessLevel,
    Class,
    Declaration,
    Enumeration,
    Event,
    Function,
    Instantiation,
    InterfaceMirror,
    Namespace,
    Parameter,
    ParameterKind,
    Property,
    Synthesized,
    SynthKind,
    Variable,
)
from apidocs.errors import AstFormatError
from apidocs.translation_unit import AstContext, TranslationUnit

SCOPE_SEPARATOR = "::"

CLASS_MEMBERS = {
    "classes": "class",
    "enums": "enum",
    "fields": "variable",
    "methods": "function",
    "properties": "property",
    "events": "event",
}

E = TypeVar("E", bound=Enum)


def load_ast(path: Path) -> AstContext:
    """Load and parse an AST description file."""
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        msg = f"{path}: invalid YAML ({exc})"
        raise AstFormatError(msg) from exc
    return build_ast(raw)


def build_ast(raw: Any) -> AstContext:
    """Build an AST context from an already parsed description."""
    if not isinstance(raw, dict):
        msg = "AST description must be a mapping with 'translation_units'"
        raise AstFormatError(msg)
    return _AstBuilder().build(raw)


def _to_enum(enum_cls: type[E], value: object, where: str) -> E:
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        msg = f"{where}: unknown {enum_cls.__name__} '{value}' (expected {allowed})"
        raise AstFormatError(msg) from None


def _parameters(raw: list[Any], where: str) -> list[Parameter]:
    params = []
    for p in raw:
        if isinstance(p, str):
            params.append(Parameter(name="", type=p))
        elif isinstance(p, dict):
            params.append(
                Parameter(
                    name=str(p.get("name") or ""),
                    type=str(p.get("type") or ""),
                    kind=_to_enum(ParameterKind, p.get("kind", "regular"), where),
                )
            )
        else:
            msg = f"{where}: parameters must be strings or mappings"
            raise AstFormatError(msg)
    return params


def _synthesis(entry: dict[str, Any], where: str) -> Synthesized | Instantiation | None:
    synthesized = entry.get("synthesized")
    pattern = entry.get("instantiated_from")
    if synthesized and pattern:
        msg = f"{where}: a function cannot be both synthesized and instantiated"
        raise AstFormatError(msg)
    if pattern:
        return Instantiation(pattern=str(pattern))
    if not synthesized:
        return None
    if not isinstance(synthesized, dict) or not synthesized.get("origin"):
        msg = f"{where}: 'synthesized' needs an 'origin'"
        raise AstFormatError(msg)
    return Synthesized(
        kind=_to_enum(
            SynthKind, synthesized.get("kind", "default_value_overload"), where
        ),
        origin=str(synthesized["origin"]),
    )


class _AstBuilder:
    """Turns parsed mappings into declarations registered in one context."""

    def __init__(self) -> None:
        self.context = AstContext()
        self.explicit_usr: set[str] = set()

    def build(self, raw: dict[str, Any]) -> AstContext:
        for entry in raw.get("translation_units") or []:
            unit = TranslationUnit(
                file=str(entry.get("file") or ""),
                generated=bool(entry.get("generated", True)),
                system_header=bool(entry.get("system_header", False)),
            )
            unit.declarations = [
                self._declaration(d, unit, [], None)
                for d in entry.get("declarations") or []
            ]
            self.context.units.append(unit)
        self._link()
        return self.context

    def _declaration(
        self,
        entry: dict[str, Any],
        unit: TranslationUnit,
        scope: list[str],
        owner: str | None,
    ) -> Declaration:
        if not isinstance(entry, dict) or not entry.get("name"):
            msg = f"{unit.file}: every declaration needs a name"
            raise AstFormatError(msg)

        kind = str(entry.get("kind") or "")
        name = str(entry["name"])
        qualified = str(
            entry.get("qualified_name") or SCOPE_SEPARATOR.join([*scope, name])
        )
        where = f"{unit.file}: {qualified}"
        common: dict[str, Any] = {
            "name": name,
            "qualified_name": qualified,
            "usr": str(entry.get("usr") or ""),
            "generated": bool(entry.get("generated", True)),
            "system_header": bool(entry.get("system_header", unit.system_header)),
            "comment": entry.get("comment"),
        }
        decl_id = str(entry.get("id") or qualified)

        match kind:
            case "namespace":
                decl: Declaration = Namespace(
                    id=decl_id,
                    **common,
                    declarations=[
                        self._declaration(d, unit, [*scope, name], None)
                        for d in entry.get("declarations") or []
                    ],
                )
            case "class" | "interface":
                decl = self._class(entry, kind, decl_id, common, unit, [*scope, name])
            case "enum":
                decl = Enumeration(
                    id=decl_id,
                    **common,
                    items=[str(i) for i in entry.get("items") or []],
                )
            case "function":
                params = _parameters(entry.get("parameters") or [], where)
                if not entry.get("id"):
                    decl_id = f"{qualified}({', '.join(p.type for p in params)})"
                decl = Function(
                    id=decl_id,
                    **common,
                    parameters=params,
                    access=_to_enum(AccessLevel, entry.get("access", "public"), where),
                    owner=owner,
                    synthesis=_synthesis(entry, where),
                    counterpart=entry.get("counterpart"),
                    implicit=bool(entry.get("implicit", False)),
                )
            case "property":
                decl = Property(
                    id=decl_id,
                    **common,
                    getter=entry.get("getter"),
                    setter=entry.get("setter"),
                    owner=owner,
                    synthesized=bool(entry.get("synthesized", False)),
                )
            case "variable":
                decl = Variable(
                    id=decl_id, **common, type=str(entry.get("type") or ""), owner=owner
                )
            case "event":
                decl = Event(
                    id=decl_id, **common, function=entry.get("function"), owner=owner
                )
            case _:
                msg = f"{where}: unknown declaration kind '{kind}'"
                raise AstFormatError(msg)

        if decl.id in self.context.declarations:
            msg = f"{where}: duplicate declaration id '{decl.id}'"
            raise AstFormatError(msg)
        if common["usr"]:
            self.explicit_usr.add(decl.id)
        self.context.register(decl)
        return decl

    def _class(
        self,
        entry: dict[str, Any],
        kind: str,
        decl_id: str,
        common: dict[str, Any],
        unit: TranslationUnit,
        scope: list[str],
    ) -> Class:
        members: dict[str, list[Any]] = {}
        for key, member_kind in CLASS_MEMBERS.items():
            members[key] = [
                self._declaration(
                    {"kind": member_kind, **m} if isinstance(m, dict) else m,
                    unit,
                    scope,
                    decl_id,
                )
                for m in entry.get(key) or []
            ]
        incomplete = bool(entry.get("incomplete", False))
        if kind == "class":
            return Class(id=decl_id, **common, **members, incomplete=incomplete)
        if not entry.get("concrete"):
            msg = f"{unit.file}: interface {common['qualified_name']} needs 'concrete'"
            raise AstFormatError(msg)
        return InterfaceMirror(
            id=decl_id,
            **common,
            **members,
            incomplete=incomplete,
            concrete=str(entry["concrete"]),
        )

    def _expect(
        self, decl_id: str | None, cls: type[Declaration], where: str
    ) -> None:
        if decl_id is None:
            return
        target = self.context.declarations.get(decl_id)
        if not isinstance(target, cls):
            msg = f"{where}: '{decl_id}' does not name a {cls.kind}"
            raise AstFormatError(msg)

    def _link(self) -> None:
        """Check id references and share identifiers along mirror relations."""
        for decl in self.context.declarations.values():
            where = decl.qualified_name
            match decl:
                case Function():
                    match decl.synthesis:
                        case Synthesized(origin=origin):
                            self._expect(origin, Function, where)
                        case Instantiation(pattern=pattern):
                            self._expect(pattern, Function, where)
                    self._expect(decl.counterpart, Function, where)
                case InterfaceMirror():
                    self._expect(decl.concrete, Class, where)
                case Property():
                    self._expect(decl.getter, Function, where)
                    self._expect(decl.setter, Function, where)
                case Event():
                    self._expect(decl.function, Function, where)

        # A mirror method stands for the same native function as its
        # counterpart, so both share the counterpart's identifier.
        for decl in self.context.declarations.values():
            if (
                isinstance(decl, Function)
                and decl.counterpart
                and decl.id not in self.explicit_usr
            ):
                decl.usr = self.context.get(decl.counterpart).usr
