"""Build API records for entry-point modules."""

from collections.abc import Iterable

from api_surface.declarations import ExportedSymbol, ModuleExports
from api_surface.logging import get_surface_logger
from api_surface.records import APIRecord
from api_surface.signatures import format_signature
from api_surface.tags import parse_declaration_documentation

logger = get_surface_logger(__name__)


def build_symbol_record(module_name: str, symbol: ExportedSymbol) -> APIRecord:
    """Describe one exported symbol.

    Every bound declaration (overload) contributes a signature, while kind
    and documentation come from the first declaration only.
    """
    first = symbol.declarations[0]
    return APIRecord(
        module=module_name,
        api=symbol.name,
        kind=first.kind_name,
        signatures=tuple(format_signature(d) for d in symbol.declarations),
        information=tuple(parse_declaration_documentation(first)),
    )


def build_module_records(module: ModuleExports) -> list[APIRecord]:
    """Return one record per exported symbol, in the provider's enumeration order."""
    records = [build_symbol_record(module.name, symbol) for symbol in module.symbols]
    logger.debug("Module %s: %d exported symbols", module.name, len(records))
    return records


def build_api(modules: Iterable[ModuleExports]) -> list[APIRecord]:
    """Concatenate the records of all modules in entry-point order."""
    records: list[APIRecord] = []
    for module in modules:
        records.extend(build_module_records(module))
    return records
