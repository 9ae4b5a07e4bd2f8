"""Signature synthesis for exported declarations.

One formatter per declaration kind turns a node into its canonical,
body-free signature text. ``format_signature`` is the classifier that picks
the formatter for a node; declarations without a dedicated formatter fall
back to their sanitized source text.

Formatters only build new strings. Removing a body slices the node's text,
so formatting one overload never affects another.
"""

import re
from typing import TypeVar, assert_never

from api_surface.declarations import (
    ClassDeclaration,
    ClassMember,
    Declaration,
    DeclarationKind,
    EnumDeclaration,
    FunctionDeclaration,
    InterfaceDeclaration,
    TypeAliasDeclaration,
    VariableDeclaration,
)
from api_surface.exceptions import DeclarationKindMismatch
from api_surface.sanitizer import normalize_line_endings, sanitize

_MODIFIERS = re.compile(r"^\s*(?:(?:export|default|declare)\s+)+")
_TYPE_ALIAS_MODIFIERS = re.compile(r"^\s*(?:(?:export|declare)\s+)+")

EMPTY_CLASS_BODY = " { }"
EMPTY_INTERFACE_BODY = " {}"
INHERITED_MARKER = "// inherited from {name}"

_D = TypeVar("_D", FunctionDeclaration, ClassDeclaration, VariableDeclaration, InterfaceDeclaration, TypeAliasDeclaration, EnumDeclaration)


def _expect(declaration: Declaration, expected: type[_D]) -> _D:
    """Fail fast when a formatter is handed a node of another kind."""
    if not isinstance(declaration, expected):
        raise DeclarationKindMismatch(expected.kind.value, declaration.kind_name)
    return declaration


def _one_line(text: str | None) -> str:
    return sanitize(text).replace("\n", " ").strip()


def _terminated(text: str) -> str:
    """Member text ending in exactly one ``;``."""
    return text.rstrip(";,").rstrip() + ";"


def _type_parameters(parameters: tuple[str, ...]) -> str:
    joined = ", ".join(_one_line(p) for p in parameters)
    return f"<{joined}>" if joined else ""


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------


def format_function(declaration: Declaration) -> str:
    """Render ``function name(...): ReturnType`` without body or export modifiers."""
    function = _expect(declaration, FunctionDeclaration)
    signature = _one_line(function.text_without_body())
    signature = _MODIFIERS.sub("", signature)
    return signature.rstrip(";").strip()


def _format_member(member: ClassMember) -> str:
    if member.member_kind == "method":
        return _terminated(_one_line(member.text_without_body()))
    return _terminated(_one_line(member.text))


def format_class(declaration: Declaration) -> str:
    """Render the class header and its public members.

    Properties come first, then methods with their bodies removed. Members
    marked ``private`` or ``protected`` leave no trace in the output.
    """
    cls = _expect(declaration, ClassDeclaration)

    signature = f"class {cls.name}{_type_parameters(cls.type_parameters)}"

    extends_text = _one_line(cls.extends)
    if extends_text:
        signature += f" extends {extends_text}"

    implements_text = ", ".join(_one_line(i) for i in cls.implements)
    if implements_text:
        signature += f" implements {implements_text}"

    public = [m for m in cls.members if m.is_public]
    properties = "\n".join(_format_member(m) for m in public if m.member_kind == "property")
    methods = "\n".join(_format_member(m) for m in public if m.member_kind == "method")
    blocks = [block for block in (properties, methods) if block]

    if not blocks:
        return signature + EMPTY_CLASS_BODY
    body = "\n\n".join(blocks)
    return f"{signature} {{\n{body}\n}}"


def format_variable(declaration: Declaration) -> str:
    """Render ``const name: Type`` using the provider's type text as is."""
    variable = _expect(declaration, VariableDeclaration)
    return f"const {variable.name}: {normalize_line_endings(variable.type_text)}"


def format_interface(declaration: Declaration) -> str:
    """Render an interface with its own properties and those of its direct bases.

    Bases are flattened one level only: a base's own bases are not visited,
    and bases that did not resolve to an interface add nothing.
    """
    interface = _expect(declaration, InterfaceDeclaration)

    lines = [_terminated(_one_line(p)) for p in interface.properties]
    for base in interface.bases:
        if not isinstance(base.resolved, InterfaceDeclaration):
            continue
        lines.append("")
        lines.append(INHERITED_MARKER.format(name=base.resolved.name))
        lines.extend(_terminated(_one_line(p)) for p in base.resolved.properties)

    signature = f"interface {interface.name}{_type_parameters(interface.type_parameters)}"
    if not lines:
        return signature + EMPTY_INTERFACE_BODY
    body = "\n".join(lines)
    return f"{signature} {{\n{body}\n}}"


def format_type_alias(declaration: Declaration) -> str:
    alias = _expect(declaration, TypeAliasDeclaration)
    return _TYPE_ALIAS_MODIFIERS.sub("", sanitize(alias.text)).strip()


def format_enum(declaration: Declaration) -> str:
    # Member comments are the only place enum values get documented, keep them
    enum = _expect(declaration, EnumDeclaration)
    return normalize_line_endings(enum.text)


def format_raw(declaration: Declaration) -> str:
    """Fallback for kinds without a dedicated formatter."""
    return sanitize(declaration.text).strip()


def format_signature(declaration: Declaration) -> str:
    """Classify a declaration by kind and render its signature."""
    kind = declaration.kind
    match kind:
        case DeclarationKind.FUNCTION:
            return format_function(declaration)
        case DeclarationKind.CLASS:
            return format_class(declaration)
        case DeclarationKind.VARIABLE:
            return format_variable(declaration)
        case DeclarationKind.INTERFACE:
            return format_interface(declaration)
        case DeclarationKind.TYPE_ALIAS:
            return format_type_alias(declaration)
        case DeclarationKind.ENUM:
            return format_enum(declaration)
        case DeclarationKind.OTHER:
            return format_raw(declaration)
        case _:
            assert_never(kind)
