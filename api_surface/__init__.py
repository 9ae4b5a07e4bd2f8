"""API Surface - public API descriptions for TypeScript codebases.

@public

API Surface walks the entry-point (barrel) files of a TypeScript project,
enumerates what each one exports and produces one record per exported
symbol: a body-free signature per declaration (several for overloads) and
the parsed ``/** */`` documentation tags of the first declaration.

Quick Start:
    >>> from pathlib import Path
    >>> from api_surface import build_api, emit_api, load_modules
    >>>
    >>> modules = load_modules(Path("."), "modules/*/index.ts")
    >>> records = build_api(modules)
    >>> Path("output.json").write_text(emit_api(records))

Environment Variables:
    - API_SURFACE_ENTRY_PATTERN: Entry-point glob
    - API_SURFACE_FORMATTER: ``none`` or ``prettier``
    - API_SURFACE_LOG_LEVEL: Log level of the ``api_surface`` logger
"""

from .aggregator import build_api, build_module_records, build_symbol_record
from .declarations import (
    BaseReference,
    ClassDeclaration,
    ClassMember,
    Declaration,
    DeclarationKind,
    EnumDeclaration,
    ExportedSymbol,
    FunctionDeclaration,
    InterfaceDeclaration,
    ModuleExports,
    OtherDeclaration,
    TypeAliasDeclaration,
    VariableDeclaration,
)
from .emitter import OutputFormatter, PassthroughFormatter, PrettierFormatter, emit_api, get_formatter
from .exceptions import ApiSurfaceError, DeclarationKindMismatch, OutputFormatError, SourceParseError
from .logging import get_surface_logger, setup_logging
from .records import APIRecord
from .sanitizer import sanitize
from .settings import Settings, settings
from .signatures import format_signature
from .tags import DocumentationTagEntry, parse_documentation
from .typescript import TypeScriptProject, load_modules

__version__ = "0.3.0"

__all__ = [
    "APIRecord",
    "ApiSurfaceError",
    "BaseReference",
    "ClassDeclaration",
    "ClassMember",
    "Declaration",
    "DeclarationKind",
    "DeclarationKindMismatch",
    "DocumentationTagEntry",
    "EnumDeclaration",
    "ExportedSymbol",
    "FunctionDeclaration",
    "InterfaceDeclaration",
    "ModuleExports",
    "OtherDeclaration",
    "OutputFormatError",
    "OutputFormatter",
    "PassthroughFormatter",
    "PrettierFormatter",
    "Settings",
    "SourceParseError",
    "TypeAliasDeclaration",
    "TypeScriptProject",
    "VariableDeclaration",
    "build_api",
    "build_module_records",
    "build_symbol_record",
    "emit_api",
    "format_signature",
    "get_formatter",
    "get_surface_logger",
    "load_modules",
    "parse_documentation",
    "sanitize",
    "settings",
    "setup_logging",
]
