"""Serialization of API records, with an optional external code formatter.

Signatures are assembled text, not parsed code. When ``prettier`` is the
configured formatter it reformats every signature and the final JSON
payload, and a malformed signature surfaces as ``OutputFormatError``
instead of being written out.
"""

import shutil
import subprocess
from collections.abc import Sequence
from typing import Protocol

from pydantic import TypeAdapter

from api_surface.exceptions import OutputFormatError
from api_surface.logging import get_surface_logger
from api_surface.records import APIRecord
from api_surface.settings import settings

logger = get_surface_logger(__name__)

_RECORDS_ADAPTER = TypeAdapter(list[APIRecord])


class OutputFormatter(Protocol):
    """Pretty-printer for synthesized code and the serialized payload."""

    def format_code(self, code: str) -> str: ...

    def format_json(self, payload: str) -> str: ...


class PassthroughFormatter:
    """Formatter that returns its input unchanged."""

    def format_code(self, code: str) -> str:
        return code

    def format_json(self, payload: str) -> str:
        return payload


class PrettierFormatter:
    """Runs text through the ``prettier`` CLI.

    The parser is chosen by prettier from ``--stdin-filepath``: TypeScript
    for signatures, JSON for the payload.
    """

    CODE_FILEPATH = "api.ts"
    JSON_FILEPATH = "output.json"

    def __init__(self, command: str | None = None) -> None:
        self.command = command or settings.prettier_command

    def format_code(self, code: str) -> str:
        return self._run(code, self.CODE_FILEPATH)

    def format_json(self, payload: str) -> str:
        return self._run(payload, self.JSON_FILEPATH)

    def _run(self, text: str, filepath: str) -> str:
        executable = shutil.which(self.command)
        if executable is None:
            raise OutputFormatError(f"Formatter executable '{self.command}' not found on PATH")
        result = subprocess.run(
            [executable, "--stdin-filepath", filepath],
            input=text,
            capture_output=True,
            text=True,
            encoding="utf-8",
            check=False,
        )
        if result.returncode != 0:
            raise OutputFormatError(f"prettier failed on {filepath}: {result.stderr.strip()}\n--- input ---\n{text}")
        return result.stdout


def get_formatter(name: str | None = None) -> OutputFormatter:
    """Return the formatter registered under ``name`` (defaults to settings)."""
    name = name or settings.formatter
    if name == "prettier":
        return PrettierFormatter()
    if name == "none":
        return PassthroughFormatter()
    raise ValueError(f"Unknown formatter '{name}', expected 'none' or 'prettier'")


def emit_api(
    records: Sequence[APIRecord],
    formatter: OutputFormatter | None = None,
    indent: int | None = None,
) -> str:
    """Format every signature, serialize the records and format the payload.

    Any formatter failure propagates; no partial payload is returned.
    """
    formatter = formatter or PassthroughFormatter()
    formatted = [
        record.model_copy(update={"signatures": tuple(formatter.format_code(s) for s in record.signatures)})
        for record in records
    ]
    payload = _RECORDS_ADAPTER.dump_json(formatted, indent=settings.json_indent if indent is None else indent)
    logger.info("Serialized %d API records", len(formatted))
    return formatter.format_json(payload.decode("utf-8"))
