"""TypeScript declaration provider built on tree-sitter.

Parses entry-point (barrel) files and the modules they re-export from, and
produces the ``ModuleExports`` snapshot consumed by ``api_surface.aggregator``.
"""

from api_surface.typescript.project import TypeScriptProject, discover_entry_points, load_modules
from api_surface.typescript.source import SourceFile, parse_source

__all__ = [
    "SourceFile",
    "TypeScriptProject",
    "discover_entry_points",
    "load_modules",
    "parse_source",
]
