"""Configuration settings for API extraction runs.

@public

Settings are loaded from environment variables with .env file support via
pydantic-settings. Every variable uses the ``API_SURFACE_`` prefix.

Environment variables:
    API_SURFACE_ENTRY_PATTERN: Glob of entry-point files, relative to the project root
    API_SURFACE_OUTPUT_FILE: Path of the generated API description
    API_SURFACE_FORMATTER: ``none`` or ``prettier``
    API_SURFACE_PRETTIER_COMMAND: Executable used when formatter is ``prettier``
    API_SURFACE_JSON_INDENT: Indentation of the JSON payload
    API_SURFACE_UNRESOLVED_TYPE_TEXT: Type text for variables without annotation

Configuration precedence:
    1. Command line flags (see ``api_surface.cli``)
    2. Environment variables
    3. .env file in current directory
    4. Default values

Example:
    >>> from api_surface.settings import settings
    >>> print(settings.entry_pattern)
    modules/*/index.ts
"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration for an extraction run.

    @public

    Attributes:
        entry_pattern: Glob matching entry-point (barrel) files. The parent
                       directory name of each match is the module name.

        output_file: Where ``generate`` writes the payload and ``check``
                     reads it back.

        formatter: External formatter applied to signatures and the JSON
                   payload. ``prettier`` doubles as a syntax check of the
                   synthesized signatures.

        prettier_command: Executable name or path of prettier.

        json_indent: Indentation used when serializing the payload.

        unresolved_type_text: Placeholder type for variables whose type is
                              not written in the source.
    """

    model_config = SettingsConfigDict(
        env_prefix="API_SURFACE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    entry_pattern: str = "modules/*/index.ts"
    output_file: str = "output.json"

    formatter: Literal["none", "prettier"] = "none"
    prettier_command: str = "prettier"
    json_indent: int = 2

    unresolved_type_text: str = "unknown"


settings = Settings()
