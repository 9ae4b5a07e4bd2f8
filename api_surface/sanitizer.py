"""Text normalization applied to every synthesized signature fragment."""

import re

LINE_COMMENT = "//"

_WHITESPACE_RUN = re.compile(r"\s\s+")
_HORIZONTAL_RUN = re.compile(r"[^\S\n][^\S\n]+")


def normalize_line_endings(text: str) -> str:
    """Convert CRLF and lone CR line endings to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def strip_line_comments(text: str) -> str:
    """Remove ``//`` comments.

    Lines that start with a comment marker are dropped; on other lines
    everything from the marker to the end of the line is removed.
    """
    kept: list[str] = []
    for line in normalize_line_endings(text).split("\n"):
        if line.lstrip().startswith(LINE_COMMENT):
            continue
        marker = line.find(LINE_COMMENT)
        kept.append(line if marker == -1 else line[:marker])
    return "\n".join(kept)


def collapse_whitespace(text: str, replacer: str = " ", *, keep_line_breaks: bool = False) -> str:
    """Replace runs of two or more whitespace characters with ``replacer``.

    With ``keep_line_breaks`` only runs of spaces and tabs are collapsed.
    """
    pattern = _HORIZONTAL_RUN if keep_line_breaks else _WHITESPACE_RUN
    return pattern.sub(replacer, text)


def sanitize(text: str | None, replacer: str = " ", *, keep_line_breaks: bool = False) -> str:
    """Normalize line endings, strip line comments and collapse whitespace runs.

    ``None`` (a missing node) sanitizes to an empty string. Applying the
    function to its own output returns it unchanged.
    """
    if not text:
        return ""
    stripped = strip_line_comments(text)
    return collapse_whitespace(stripped, replacer, keep_line_breaks=keep_line_breaks)
