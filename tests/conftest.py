"""Common fixtures for API surface tests."""

import textwrap
from pathlib import Path

import pytest


@pytest.fixture
def write_ts(tmp_path: Path):
    """Write a dedented TypeScript file under ``tmp_path`` and return its path."""

    def write(relative: str, content: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
        return path

    return write
