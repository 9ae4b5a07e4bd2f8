"""Parser for ``/** ... */`` documentation comments.

Turns the flat line stream of a documentation block into ordered tag
entries. Text before the first ``@tag`` becomes a synthetic ``info`` entry,
lines after a tag continue it until the next tag starts::

    /**
     * Does something.
     * @param x the input
     * more about x
     * @returns a result
     */

parses to ``info: ["Does something."]``, ``param: ["x the input", "more
about x"]`` and ``returns: ["a result"]``.

The parser is permissive: it never raises on malformed comment text.
"""

from dataclasses import dataclass

from api_surface.declarations import Declaration, DeclarationKind

INFO_TAG = "info"
TAG_MARKER = "@"

_OPENING = "/**"
_CLOSING = "*/"
_LINE_MARKER = "*"

DOCUMENTED_KINDS: frozenset[DeclarationKind] = frozenset({
    DeclarationKind.FUNCTION,
    DeclarationKind.CLASS,
    DeclarationKind.INTERFACE,
    DeclarationKind.TYPE_ALIAS,
    DeclarationKind.ENUM,
})


@dataclass(frozen=True)
class DocumentationTagEntry:
    """One tag of a documentation comment and its body lines."""

    tag: str
    lines: tuple[str, ...] = ()

    def as_list(self) -> list[str]:
        return [self.tag, *self.lines]


def comment_lines(block: str) -> list[str]:
    """Split a raw comment block into content lines without delimiters or ``*`` markers."""
    raw = block.replace("\r\n", "\n").split("\n")
    first = raw[0].strip()
    if first.startswith(_OPENING):
        first = first[len(_OPENING) :]
    # Keep text sharing the line with the opening delimiter (one-line blocks)
    raw = raw[1:] if not first.strip() or first.strip() == _CLOSING else [first, *raw[1:]]

    lines: list[str] = []
    for line in raw:
        line = line.strip()
        if line.endswith(_CLOSING):
            line = line[: -len(_CLOSING)].rstrip()
        if line.startswith(_LINE_MARKER):
            line = line[len(_LINE_MARKER) :]
            if line.startswith(" "):
                line = line[1:]
        lines.append(line.rstrip())
    return lines


def _parse_block(lines: list[str]) -> list[list[str]]:
    """Fold lines into entries; ``open_index`` is None until an entry exists."""
    entries: list[list[str]] = []
    open_index: int | None = None

    for line in lines:
        if line.startswith(TAG_MARKER):
            parts = line[len(TAG_MARKER) :].split(None, 1)
            entry = [parts[0] if parts else ""]
            if len(parts) > 1:
                entry.append(parts[1])
            entries.append(entry)
            open_index = len(entries) - 1
        elif open_index is not None:
            entries[open_index].append(line)
        else:
            entries.append([INFO_TAG, line])
            open_index = len(entries) - 1

    return entries


def _trim_trailing_blanks(lines: list[str]) -> tuple[str, ...]:
    end = len(lines)
    while end > 0 and lines[end - 1] == "":
        end -= 1
    return tuple(lines[:end])


def parse_comment_lines(lines: list[str]) -> list[DocumentationTagEntry]:
    """Parse the content lines of a single block into tag entries."""
    return [DocumentationTagEntry(tag=tag, lines=_trim_trailing_blanks(body)) for tag, *body in _parse_block(lines)]


def parse_documentation(blocks: list[str] | tuple[str, ...]) -> list[DocumentationTagEntry]:
    """Parse documentation blocks in source order into a flat list of tag entries.

    Each block is parsed on its own; entries are concatenated and never
    merged across blocks, even when they share a tag name.
    """
    information: list[DocumentationTagEntry] = []
    for block in blocks:
        information.extend(parse_comment_lines(comment_lines(block)))
    return information


def parse_declaration_documentation(declaration: Declaration) -> list[DocumentationTagEntry]:
    """Return the tag entries of a declaration; variables and other kinds carry none."""
    if declaration.kind not in DOCUMENTED_KINDS:
        return []
    return parse_documentation(declaration.documentation)
