"""Export enumeration for TypeScript entry-point modules.

Follows ``export ... from`` re-exports and imported bindings across relative
module specifiers, so a barrel file (``modules/<name>/index.ts``) yields the
declarations it exposes wherever they are defined. Package imports are not
followed: a re-exported binding that cannot be resolved is logged and kept
as an ``ImportSpecifier`` record carrying its import statement.
"""

from pathlib import Path

from tree_sitter import Node

from api_surface.declarations import (
    Declaration,
    ExportedSymbol,
    ModuleExports,
    OtherDeclaration,
)
from api_surface.logging import get_surface_logger
from api_surface.settings import settings
from api_surface.typescript.source import ImportBinding, LocalEntry, SourceFile, string_value

logger = get_surface_logger(__name__)

SOURCE_SUFFIXES: tuple[str, ...] = (".ts", ".tsx", ".d.ts")
DEFAULT_EXPORT = "default"

# What an exported or imported name points to: a local declaration of some
# file, or a declaration synthesized directly from an export statement.
Target = tuple[SourceFile, LocalEntry] | Declaration


def discover_entry_points(root: Path, pattern: str | None = None) -> list[Path]:
    """Entry-point files under ``root`` matching ``pattern``, in sorted path order."""
    pattern = pattern or settings.entry_pattern
    return sorted(p for p in root.glob(pattern) if p.is_file())


class TypeScriptProject:
    """Lazily parsed set of TypeScript files rooted at one directory.

    Example:
        >>> project = TypeScriptProject(Path("."))
        >>> module = project.module_exports(Path("modules/forms/index.ts"))
        >>> [symbol.name for symbol in module.symbols]
        ['FormControl', 'Validators']
    """

    def __init__(self, root: Path, unresolved_type_text: str | None = None) -> None:
        self.root = root
        self.unresolved_type_text = unresolved_type_text if unresolved_type_text is not None else settings.unresolved_type_text
        self._files: dict[Path, SourceFile] = {}
        self._built: dict[tuple[Path, tuple[int, int, str], bool], Declaration] = {}

    def source_file(self, path: Path) -> SourceFile:
        path = path.resolve()
        if path not in self._files:
            logger.debug("Parsing %s", path)
            self._files[path] = SourceFile.read(path)
        return self._files[path]

    def resolve_module(self, origin: SourceFile, specifier: str) -> Path | None:
        """File behind a relative module specifier, or None for packages and missing files."""
        if not specifier.startswith("."):
            return None
        base = origin.path.parent / specifier
        # "./foo.js" refers to foo.ts when compiling with ES module resolution
        if base.suffix == ".js":
            base = base.with_suffix("")
        candidates = [base] if base.suffix in (".ts", ".tsx") else []
        candidates += [base.with_name(base.name + suffix) for suffix in SOURCE_SUFFIXES]
        candidates += [base / f"index{suffix}" for suffix in SOURCE_SUFFIXES]
        return next((c for c in candidates if c.is_file()), None)

    # ------------------------------------------------------------------
    # Modules
    # ------------------------------------------------------------------

    def module_exports(self, entry_point: Path) -> ModuleExports:
        """Exported symbols of an entry point; the module is named after its directory."""
        source = self.source_file(entry_point)
        symbols = tuple(
            ExportedSymbol(name=name, declarations=tuple(self._declaration(t) for t in targets))
            for name, targets in self._exports(source, frozenset()).items()
            if targets
        )
        return ModuleExports(name=entry_point.parent.name, symbols=symbols)

    def load_modules(self, pattern: str | None = None) -> list[ModuleExports]:
        entry_points = discover_entry_points(self.root, pattern)
        logger.info("Found %d entry points under %s", len(entry_points), self.root)
        return [self.module_exports(path) for path in entry_points]

    # ------------------------------------------------------------------
    # Export resolution
    # ------------------------------------------------------------------

    def _exports(self, source: SourceFile, visiting: frozenset[Path]) -> dict[str, list[Target]]:
        """Exported names of ``source`` in statement order, ``export *`` expanded in place."""
        if source.path in visiting:
            logger.debug("Export cycle through %s", source.path)
            return {}
        visiting = visiting | {source.path}

        exports: dict[str, list[Target]] = {}

        def bind(name: str, targets: list[Target] | None) -> None:
            if targets and name not in exports:
                exports[name] = targets

        for statement in source.root.named_children:
            if statement.type != "export_statement":
                continue
            is_default = any(c.type == DEFAULT_EXPORT for c in statement.children)
            declaration = statement.child_by_field_name("declaration")
            value = statement.child_by_field_name("value")
            module = statement.child_by_field_name("source")
            clause = next((c for c in statement.named_children if c.type == "export_clause"), None)
            namespace = next((c for c in statement.named_children if c.type == "namespace_export"), None)

            if declaration is not None:
                entries = _entries_of(source, declaration)
                if is_default:
                    # export default function foo() {} exports "default" only
                    bind(DEFAULT_EXPORT, [(source, e) for e in entries])
                    continue
                for name in (e.name for e in entries):
                    bind(name, [(source, e) for e in source.local_entries(name)])
            elif value is not None:
                bind(DEFAULT_EXPORT, self._default_value(source, statement, value, visiting))
            elif namespace is not None:
                alias = source.text(namespace.named_children[-1]) if namespace.named_children else ""
                bind(alias, [OtherDeclaration(name=alias, text=source.text(statement), kind_name="NamespaceExport")])
            elif clause is not None:
                target_exports = self._target_exports(source, module, visiting) if module is not None else None
                for specifier in clause.named_children:
                    if specifier.type != "export_specifier":
                        continue
                    name = source.text(specifier.child_by_field_name("name"))
                    alias = source.text(specifier.child_by_field_name("alias")) or name
                    if module is None:
                        bind(alias, self._resolve_name(source, name, visiting))
                    elif target_exports is not None:
                        bind(alias, target_exports.get(name))
            elif module is not None:
                # export * from "./x" re-exports everything but the default export
                for name, targets in (self._target_exports(source, module, visiting) or {}).items():
                    if name != DEFAULT_EXPORT:
                        bind(name, targets)

        return exports

    def _target_exports(self, source: SourceFile, module: Node, visiting: frozenset[Path]) -> dict[str, list[Target]] | None:
        specifier = string_value(module, source.source)
        path = self.resolve_module(source, specifier)
        if path is None:
            logger.warning("Cannot resolve re-export '%s' in %s", specifier, source.path)
            return None
        return self._exports(self.source_file(path), visiting)

    def _resolve_name(self, source: SourceFile, name: str, visiting: frozenset[Path]) -> list[Target] | None:
        """Declarations a name refers to inside ``source``: local first, then imports."""
        entries = source.local_entries(name)
        if entries:
            return [(source, e) for e in entries]

        binding = source.imports.get(name)
        if binding is None:
            return None
        if binding.imported == "*":
            return [OtherDeclaration(name=name, text=f'import * as {name} from "{binding.specifier}"', kind_name="NamespaceImport")]

        path = self.resolve_module(source, binding.specifier)
        targets = self._exports(self.source_file(path), visiting).get(binding.imported) if path is not None else None
        if targets:
            return targets
        logger.warning("Cannot resolve import '%s' from '%s' in %s", binding.imported, binding.specifier, source.path)
        return [OtherDeclaration(name=name, text=_import_text(name, binding), kind_name="ImportSpecifier")]

    def _default_value(self, source: SourceFile, statement: Node, value: Node, visiting: frozenset[Path]) -> list[Target] | None:
        if value.type == "identifier":
            return self._resolve_name(source, source.text(value), visiting)
        documentation = source.documentation(statement)
        if value.type in ("function_expression", "function", "generator_function"):
            return [source.function(value, statement, DEFAULT_EXPORT, documentation)]
        if value.type == "class":
            return [source.class_declaration(value, DEFAULT_EXPORT, documentation)]
        # Arrow functions have no "function name(...)" shape, keep the statement text
        kind_name = "ArrowFunction" if value.type == "arrow_function" else "ExportAssignment"
        return [OtherDeclaration(name=DEFAULT_EXPORT, text=source.text(statement), kind_name=kind_name, documentation=documentation)]

    # ------------------------------------------------------------------
    # Declaration building
    # ------------------------------------------------------------------

    def _declaration(self, target: Target, resolve_bases: bool = True) -> Declaration:
        if not isinstance(target, tuple):
            return target
        source, entry = target
        key = (source.path, entry.key, resolve_bases)
        if key not in self._built:

            def resolve_base(name: str) -> Declaration | None:
                # Bases are built without their own bases: flattening is one level deep
                if not resolve_bases:
                    return None
                targets = self._resolve_name(source, name, frozenset())
                if not targets:
                    return None
                return self._declaration(targets[0], resolve_bases=False)

            self._built[key] = source.build(entry, resolve_base, self.unresolved_type_text)
        return self._built[key]


def _entries_of(source: SourceFile, declaration: Node) -> list[LocalEntry]:
    """Local entries created for the declaration node of an export statement."""
    entries = [e for entries in source.locals.values() for e in entries if _within(e.node, declaration)]
    return sorted(entries, key=lambda e: e.node.start_byte)


def _import_text(name: str, binding: ImportBinding) -> str:
    """Import statement that introduces ``name``, rebuilt from its binding."""
    if binding.imported == DEFAULT_EXPORT:
        return f'import {name} from "{binding.specifier}"'
    specifier = binding.imported if binding.imported == name else f"{binding.imported} as {name}"
    return f'import {{ {specifier} }} from "{binding.specifier}"'


def _within(node: Node, container: Node) -> bool:
    return container.start_byte <= node.start_byte and node.end_byte <= container.end_byte


def load_modules(root: Path, pattern: str | None = None, unresolved_type_text: str | None = None) -> list[ModuleExports]:
    """Parse every entry point under ``root`` and enumerate its exports.

    @public
    """
    return TypeScriptProject(root, unresolved_type_text).load_modules(pattern)

