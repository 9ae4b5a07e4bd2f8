"""CLI for API description generation and validation."""

import argparse
import sys
from pathlib import Path

from api_surface.aggregator import build_api
from api_surface.emitter import emit_api, get_formatter
from api_surface.exceptions import ApiSurfaceError
from api_surface.logging import setup_logging
from api_surface.settings import settings
from api_surface.typescript import TypeScriptProject


def _normalize_payload(content: str) -> str:
    """Ensure exactly one final newline."""
    return content.rstrip("\n") + "\n"


def main(argv: list[str] | None = None) -> int:
    """Entry point for the API surface CLI with generate/check subcommands."""
    parser = argparse.ArgumentParser(description="TypeScript public API extractor")
    parser.add_argument("--root", type=Path, default=Path("."), help="Project root directory")
    parser.add_argument("--pattern", help=f"Entry-point glob (default: {settings.entry_pattern})")
    parser.add_argument("--output", type=Path, help=f"Output file (default: {settings.output_file})")
    parser.add_argument("--formatter", choices=["none", "prettier"], help="External formatter for signatures and payload")
    parser.add_argument("--log-level", help="Override the log level (DEBUG, INFO, ...)")
    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("generate", help="Write the API description")
    subparsers.add_parser("check", help="Validate the API description is up-to-date")

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 1

    setup_logging(level=args.log_level)
    root, output = _resolve_paths(args)

    try:
        content = _render(root, args.pattern, args.formatter)
    except ApiSurfaceError as e:
        print(f"FAIL: {e}", file=sys.stderr)
        return 1

    if args.command == "generate":
        return _run_generate(content, output)
    return _run_check(content, output)


def _resolve_paths(args: argparse.Namespace) -> tuple[Path, Path]:
    """Resolve project root and output file; a relative output lives under the root."""
    root = args.root.resolve()
    output = args.output or Path(settings.output_file)
    if not output.is_absolute():
        output = root / output
    return root, output


def _render(root: Path, pattern: str | None, formatter_name: str | None) -> str:
    """Run the whole pipeline in memory; nothing is written if any step fails."""
    modules = TypeScriptProject(root).load_modules(pattern)
    records = build_api(modules)
    return _normalize_payload(emit_api(records, get_formatter(formatter_name)))


def _run_generate(content: str, output: Path) -> int:
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(content, encoding="utf-8")
    print(f"  wrote {output} ({len(content.encode('utf-8')):,} bytes)")
    return 0


def _run_check(content: str, output: Path) -> int:
    if not output.is_file():
        print(f"FAIL: {output} does not exist. Run 'generate' first.", file=sys.stderr)
        return 1
    if output.read_text(encoding="utf-8") != content:
        print(f"FAIL: {output} is stale. Run 'generate' to update it.", file=sys.stderr)
        return 1
    print(f"OK: {output} is up-to-date")
    return 0


if __name__ == "__main__":
    sys.exit(main())
