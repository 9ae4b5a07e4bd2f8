"""Tree-sitter view of a single TypeScript source file.

Parses the file once and converts top-level declarations into the
immutable nodes of ``api_surface.declarations``. Cross-file concerns
(imports, re-exports) are left to ``TypeScriptProject``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from api_surface.declarations import (
    BaseReference,
    ClassDeclaration,
    ClassMember,
    Declaration,
    EnumDeclaration,
    FunctionDeclaration,
    InterfaceDeclaration,
    OtherDeclaration,
    TextRange,
    TypeAliasDeclaration,
    VariableDeclaration,
)
from api_surface.exceptions import SourceParseError
from api_surface.logging import get_surface_logger

logger = get_surface_logger(__name__)

TYPESCRIPT = Language(tree_sitter_typescript.language_typescript())
TSX = Language(tree_sitter_typescript.language_tsx())

FUNCTION_TYPES = frozenset({"function_declaration", "generator_function_declaration", "function_signature"})
CLASS_TYPES = frozenset({"class_declaration", "abstract_class_declaration"})
VARIABLE_TYPES = frozenset({"lexical_declaration", "variable_declaration"})
NAMESPACE_TYPES = frozenset({"internal_module", "module"})
NAMED_TYPES = FUNCTION_TYPES | CLASS_TYPES | NAMESPACE_TYPES | {"interface_declaration", "type_alias_declaration", "enum_declaration"}

METHOD_MEMBER_TYPES = frozenset({"method_definition", "method_signature", "abstract_method_signature"})
ACCESSOR_KEYWORDS = frozenset({"get", "set"})

# Initializer node type -> widened primitive type
LITERAL_TYPES = {"string": "string", "number": "number", "true": "boolean", "false": "boolean"}

DOC_COMMENT_PREFIX = "/**"

BaseResolver = Callable[[str], Declaration | None]


@dataclass(frozen=True)
class LocalEntry:
    """A top-level declaration node and the statement that holds it."""

    name: str
    node: Node
    statement: Node

    @property
    def key(self) -> tuple[int, int, str]:
        return (self.node.start_byte, self.node.end_byte, self.node.type)


@dataclass(frozen=True)
class ImportBinding:
    """Local name introduced by an import statement."""

    specifier: str
    imported: str  # "default", "*" for namespace imports, or the exported name


def parse_source(source: bytes, tsx: bool = False) -> Node:
    """Parse TypeScript source and return the root node."""
    parser = Parser(TSX if tsx else TYPESCRIPT)
    return parser.parse(source).root_node


def string_value(node: Node | None, source: bytes) -> str:
    """Contents of a string literal node without its quotes."""
    if node is None:
        return ""
    return source[node.start_byte : node.end_byte].decode("utf-8")[1:-1]


class SourceFile:
    """Parsed TypeScript file with its local declarations and imports."""

    def __init__(self, path: Path, source: bytes) -> None:
        self.path = path
        self.source = source
        self.root = parse_source(source, tsx=path.suffix == ".tsx")
        if self.root.has_error:
            logger.warning("Syntax errors in %s, extraction continues on the recovered tree", path)
        self.locals: dict[str, list[LocalEntry]] = {}
        self.imports: dict[str, ImportBinding] = {}
        self._collect()

    @classmethod
    def read(cls, path: Path) -> SourceFile:
        try:
            return cls(path, path.read_bytes())
        except OSError as e:
            raise SourceParseError(f"Cannot read {path}: {e}") from e

    # ------------------------------------------------------------------
    # Text helpers
    # ------------------------------------------------------------------

    def text(self, node: Node | None) -> str:
        if node is None:
            return ""
        return self.source[node.start_byte : node.end_byte].decode("utf-8")

    def relative_range(self, outer: Node, inner: Node | None) -> TextRange | None:
        """Character span of ``inner`` within the text of ``outer``."""
        if inner is None:
            return None
        start = len(self.source[outer.start_byte : inner.start_byte].decode("utf-8"))
        return (start, start + len(self.text(inner)))

    def documentation(self, statement: Node) -> tuple[str, ...]:
        """``/** */`` comments directly preceding ``statement``, in source order."""
        blocks: list[str] = []
        sibling = statement.prev_sibling
        while sibling is not None and sibling.type == "comment":
            comment = self.text(sibling)
            if comment.startswith(DOC_COMMENT_PREFIX):
                blocks.append(comment)
            sibling = sibling.prev_sibling
        return tuple(reversed(blocks))

    def name_of(self, node: Node) -> str:
        return self.text(node.child_by_field_name("name"))

    # ------------------------------------------------------------------
    # Collection
    # ------------------------------------------------------------------

    def _collect(self) -> None:
        for statement in self.root.named_children:
            if statement.type == "export_statement":
                declaration = statement.child_by_field_name("declaration")
                if declaration is not None:
                    self._add(declaration, statement)
            elif statement.type == "import_statement":
                self._add_import(statement)
            elif statement.type == "expression_statement":
                inner = statement.named_children[0] if statement.named_children else None
                if inner is not None and inner.type in NAMESPACE_TYPES:
                    self._add(inner, statement)
            else:
                self._add(statement, statement)

    def _add(self, node: Node, statement: Node) -> None:
        if node.type == "ambient_declaration":
            inner = next((c for c in node.named_children if c.type in NAMED_TYPES | VARIABLE_TYPES), None)
            if inner is not None:
                self._add(inner, statement)
            return
        if node.type in VARIABLE_TYPES:
            for declarator in node.named_children:
                if declarator.type != "variable_declarator":
                    continue
                name_node = declarator.child_by_field_name("name")
                # Destructuring patterns bind no single name
                if name_node is not None and name_node.type == "identifier":
                    self._append(LocalEntry(self.text(name_node), declarator, statement))
            return
        if node.type in NAMED_TYPES:
            name_node = node.child_by_field_name("name")
            if name_node is not None and name_node.type != "string":
                self._append(LocalEntry(self.text(name_node), node, statement))

    def _append(self, entry: LocalEntry) -> None:
        self.locals.setdefault(entry.name, []).append(entry)

    def _add_import(self, statement: Node) -> None:
        specifier = string_value(statement.child_by_field_name("source"), self.source)
        clause = next((c for c in statement.named_children if c.type == "import_clause"), None)
        if clause is None:
            return
        for child in clause.named_children:
            if child.type == "identifier":
                self.imports[self.text(child)] = ImportBinding(specifier, "default")
            elif child.type == "namespace_import":
                for identifier in child.named_children:
                    self.imports[self.text(identifier)] = ImportBinding(specifier, "*")
            elif child.type == "named_imports":
                for spec in child.named_children:
                    if spec.type != "import_specifier":
                        continue
                    name = self.text(spec.child_by_field_name("name"))
                    alias = self.text(spec.child_by_field_name("alias"))
                    self.imports[alias or name] = ImportBinding(specifier, name)

    def local_entries(self, name: str) -> list[LocalEntry]:
        """Declarations bound to ``name``; function overloads hide their implementation."""
        entries = self.locals.get(name, [])
        signatures = [e for e in entries if e.node.type == "function_signature"]
        return signatures or entries

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def build(
        self,
        entry: LocalEntry,
        resolve_base: BaseResolver,
        unresolved_type_text: str,
    ) -> Declaration:
        """Convert a local entry into its declaration node."""
        node, statement = entry.node, entry.statement
        documentation = self.documentation(statement)

        if node.type in FUNCTION_TYPES:
            return self.function(node, statement, entry.name, documentation)
        if node.type in CLASS_TYPES:
            return self.class_declaration(node, entry.name, documentation)
        if node.type == "variable_declarator":
            return VariableDeclaration(
                name=entry.name,
                text=self.text(node),
                type_text=self.variable_type(node, unresolved_type_text),
                documentation=documentation,
            )
        if node.type == "interface_declaration":
            return self.interface(node, entry.name, documentation, resolve_base)
        if node.type == "type_alias_declaration":
            return TypeAliasDeclaration(name=entry.name, text=self.text(statement), documentation=documentation)
        if node.type == "enum_declaration":
            return EnumDeclaration(name=entry.name, text=self.text(statement), documentation=documentation)
        return OtherDeclaration(name=entry.name, text=self.text(statement), kind_name="ModuleDeclaration", documentation=documentation)

    def variable_type(self, declarator: Node, unresolved_type_text: str) -> str:
        """Annotated type, else the type of a literal initializer, else ``unresolved_type_text``.

        ``const`` keeps the literal itself (``const A = 1`` has type ``1``),
        ``let`` and ``var`` widen it to its primitive type.
        """
        type_node = declarator.child_by_field_name("type")
        if type_node is not None:
            return self.text(type_node).removeprefix(":").strip()

        value = declarator.child_by_field_name("value")
        if value is None or value.type not in LITERAL_TYPES:
            return unresolved_type_text
        declaration = declarator.parent
        if declaration is not None and declaration.children and declaration.children[0].type == "const":
            return self.text(value)
        return LITERAL_TYPES[value.type]

    def function(self, node: Node, statement: Node, name: str, documentation: tuple[str, ...] = ()) -> FunctionDeclaration:
        return FunctionDeclaration(
            name=name,
            text=self.text(statement),
            body_range=self.relative_range(statement, node.child_by_field_name("body")),
            documentation=documentation,
        )

    def class_declaration(self, node: Node, name: str, documentation: tuple[str, ...] = ()) -> ClassDeclaration:
        extends: str | None = None
        implements: tuple[str, ...] = ()
        heritage = next((c for c in node.named_children if c.type == "class_heritage"), None)
        if heritage is not None:
            for clause in heritage.named_children:
                if clause.type == "extends_clause":
                    extends = self.text(clause).removeprefix("extends").strip()
                elif clause.type == "implements_clause":
                    implements = tuple(self.text(t) for t in clause.named_children if t.type != "comment")

        body = node.child_by_field_name("body")
        members: list[ClassMember] = []
        overloaded: set[str] = set()
        for child in body.named_children if body else []:
            member = self._member(child)
            if member is None:
                continue
            if child.type == "method_signature":
                overloaded.add(member.name)
            elif child.type == "method_definition" and member.name in overloaded:
                # Overload signatures hide the implementation
                continue
            members.append(member)

        return ClassDeclaration(
            name=self.name_of(node) or name,
            text=self.text(node),
            type_parameters=self._type_parameters(node),
            extends=extends,
            implements=implements,
            members=tuple(members),
            documentation=documentation,
        )

    def _member(self, node: Node) -> ClassMember | None:
        if node.type in METHOD_MEMBER_TYPES:
            member_kind = "method"
        elif node.type == "public_field_definition":
            member_kind = "property"
        else:
            return None

        name_node = node.child_by_field_name("name")
        name = self.text(name_node)
        if member_kind == "method" and (name == "constructor" or any(c.type in ACCESSOR_KEYWORDS for c in node.children)):
            return None

        visibility = None
        for child in node.children:
            if child.type == "accessibility_modifier":
                visibility = self.text(child)
        if name_node is not None and name_node.type == "private_property_identifier":
            visibility = "private"

        return ClassMember(
            member_kind=member_kind,
            name=name,
            text=self.text(node),
            visibility=visibility,
            body_range=self.relative_range(node, node.child_by_field_name("body")),
        )

    def interface(
        self,
        node: Node,
        name: str,
        documentation: tuple[str, ...],
        resolve_base: BaseResolver,
    ) -> InterfaceDeclaration:
        body = node.child_by_field_name("body")
        properties = tuple(self.text(m) for m in (body.named_children if body else []) if m.type == "property_signature")

        bases: list[BaseReference] = []
        for clause in node.named_children:
            if clause.type != "extends_type_clause":
                continue
            base_nodes = clause.children_by_field_name("type") or [c for c in clause.named_children if c.type != "comment"]
            for base in base_nodes:
                base_name = self._base_name(base)
                bases.append(BaseReference(text=self.text(base), resolved=resolve_base(base_name) if base_name else None))

        return InterfaceDeclaration(
            name=self.name_of(node) or name,
            text=self.text(node),
            type_parameters=self._type_parameters(node),
            properties=properties,
            bases=tuple(bases),
            documentation=documentation,
        )

    def _base_name(self, node: Node) -> str | None:
        """Plain identifier of an extends entry; qualified names are not resolved."""
        if node.type == "generic_type":
            name_node = node.child_by_field_name("name")
            if name_node is None:
                return None
            node = name_node
        if node.type == "type_identifier":
            return self.text(node)
        return None

    def _type_parameters(self, node: Node) -> tuple[str, ...]:
        parameters = node.child_by_field_name("type_parameters")
        if parameters is None:
            return ()
        return tuple(self.text(p) for p in parameters.named_children if p.type == "type_parameter")
