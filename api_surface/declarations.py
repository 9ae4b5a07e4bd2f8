"""Declaration snapshot consumed by the signature engine.

Each declaration kind is an immutable dataclass; together they form the
``Declaration`` union. Nodes are produced by a provider (see
``api_surface.typescript``) and only read afterwards: operations such as
removing a function body return new strings and never touch the node.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import ClassVar, Literal


class DeclarationKind(StrEnum):
    """Syntactic category of an exported declaration.

    Values double as the ``kind`` string of emitted API records.
    """

    FUNCTION = "FunctionDeclaration"
    CLASS = "ClassDeclaration"
    VARIABLE = "VariableDeclaration"
    INTERFACE = "InterfaceDeclaration"
    TYPE_ALIAS = "TypeAliasDeclaration"
    ENUM = "EnumDeclaration"
    OTHER = "Other"


Visibility = Literal["public", "protected", "private"]
TextRange = tuple[int, int]


def remove_range(text: str, text_range: TextRange | None) -> str:
    """Return ``text`` without the characters in ``text_range``."""
    if text_range is None:
        return text
    start, end = text_range
    return text[:start].rstrip() + text[end:]


@dataclass(frozen=True)
class FunctionDeclaration:
    """Function implementation or overload signature."""

    kind: ClassVar[DeclarationKind] = DeclarationKind.FUNCTION

    name: str
    text: str
    body_range: TextRange | None = None
    documentation: tuple[str, ...] = ()

    @property
    def kind_name(self) -> str:
        return self.kind.value

    def text_without_body(self) -> str:
        return remove_range(self.text, self.body_range)


@dataclass(frozen=True)
class ClassMember:
    """Property or method inside a class body."""

    member_kind: Literal["property", "method"]
    name: str
    text: str
    visibility: Visibility | None = None
    body_range: TextRange | None = None

    @property
    def is_public(self) -> bool:
        # No explicit modifier means public
        return self.visibility in (None, "public")

    def text_without_body(self) -> str:
        return remove_range(self.text, self.body_range)


@dataclass(frozen=True)
class ClassDeclaration:
    """Class with its heritage clauses and members in source order."""

    kind: ClassVar[DeclarationKind] = DeclarationKind.CLASS

    name: str
    text: str
    type_parameters: tuple[str, ...] = ()
    extends: str | None = None
    implements: tuple[str, ...] = ()
    members: tuple[ClassMember, ...] = ()
    documentation: tuple[str, ...] = ()

    @property
    def kind_name(self) -> str:
        return self.kind.value


@dataclass(frozen=True)
class VariableDeclaration:
    """Single binding of a ``const``/``let``/``var`` statement."""

    kind: ClassVar[DeclarationKind] = DeclarationKind.VARIABLE

    name: str
    text: str
    type_text: str
    documentation: tuple[str, ...] = ()

    @property
    def kind_name(self) -> str:
        return self.kind.value


@dataclass(frozen=True)
class BaseReference:
    """An ``extends`` entry of an interface and what it resolved to, if anything."""

    text: str
    resolved: "Declaration | None" = None


@dataclass(frozen=True)
class InterfaceDeclaration:
    """Interface with its own property declarations and direct bases."""

    kind: ClassVar[DeclarationKind] = DeclarationKind.INTERFACE

    name: str
    text: str
    type_parameters: tuple[str, ...] = ()
    properties: tuple[str, ...] = ()
    bases: tuple[BaseReference, ...] = ()
    documentation: tuple[str, ...] = ()

    @property
    def kind_name(self) -> str:
        return self.kind.value


@dataclass(frozen=True)
class TypeAliasDeclaration:
    kind: ClassVar[DeclarationKind] = DeclarationKind.TYPE_ALIAS

    name: str
    text: str
    documentation: tuple[str, ...] = ()

    @property
    def kind_name(self) -> str:
        return self.kind.value


@dataclass(frozen=True)
class EnumDeclaration:
    kind: ClassVar[DeclarationKind] = DeclarationKind.ENUM

    name: str
    text: str
    documentation: tuple[str, ...] = ()

    @property
    def kind_name(self) -> str:
        return self.kind.value


@dataclass(frozen=True)
class OtherDeclaration:
    """Any declaration without a dedicated formatter (namespaces, re-exported modules)."""

    kind: ClassVar[DeclarationKind] = DeclarationKind.OTHER

    name: str
    text: str
    kind_name: str = "Other"
    documentation: tuple[str, ...] = ()


Declaration = (
    FunctionDeclaration
    | ClassDeclaration
    | VariableDeclaration
    | InterfaceDeclaration
    | TypeAliasDeclaration
    | EnumDeclaration
    | OtherDeclaration
)


@dataclass(frozen=True)
class ExportedSymbol:
    """Exported name bound to its declarations (several only for overloads)."""

    name: str
    declarations: tuple[Declaration, ...]

    def __post_init__(self) -> None:
        if not self.declarations:
            raise ValueError(f"Exported symbol '{self.name}' has no declarations")


@dataclass(frozen=True)
class ModuleExports:
    """Entry-point module and its exported symbols in provider order."""

    name: str
    symbols: tuple[ExportedSymbol, ...] = field(default_factory=tuple)
