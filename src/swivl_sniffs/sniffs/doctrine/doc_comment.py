"""Scanners for doc-comment text: tags, type tokens and suppression directives."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field

IGNORE_DIRECTIVE = "@codingStandardsIgnoreError"

_LINE_TRIM = "/* \t\r\n"
_CODE_CHARS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_.")


def _is_tag_name_char(char: str) -> bool:
    return char.isascii() and (char.isalnum() or char in "_\\") or ord(char) >= 0x7F


@dataclass(frozen=True)
class DocTag:
    """An ``@name(args)`` occurrence; *offset* points at the ``@`` in the raw text."""

    name: str
    arguments: str | None
    offset: int


@dataclass
class FlatComment:
    """Comment body with markers stripped, lines joined by single spaces.

    ``segments`` maps offsets in :attr:`text` back to offsets in the raw
    comment as ``(flat_start, raw_start)`` pairs, one per line.
    """

    text: str = ""
    lines: list[str] = field(default_factory=list)
    segments: list[tuple[int, int]] = field(default_factory=list)

    def raw_offset(self, flat_offset: int) -> int:
        index = bisect_right([start for start, _ in self.segments], flat_offset) - 1
        flat_start, raw_start = self.segments[max(index, 0)]
        return raw_start + flat_offset - flat_start


def flatten(raw: str) -> FlatComment:
    """Strip comment markers from every line and join the lines."""
    flat = FlatComment()
    parts: list[str] = []
    length = 0
    raw_pos = 0
    for raw_line in raw.split("\n"):
        line = raw_line.strip(_LINE_TRIM)
        lead = len(raw_line) - len(raw_line.lstrip(_LINE_TRIM))
        # The joining space comes first: the line starts one character later.
        flat.segments.append((length + 1, raw_pos + lead))
        parts.append(" " + line)
        flat.lines.append(line)
        length += len(line) + 1
        raw_pos += len(raw_line) + 1
    flat.text = "".join(parts)
    return flat


def scan_tags(comment: str) -> list[DocTag]:
    """Find `` @Name`` and `` @Name(args)`` in a flattened comment.

    The argument text runs to the first ``)``; an unclosed parenthesis leaves
    the tag without arguments.
    """
    tags: list[DocTag] = []
    length = len(comment)
    pos = 0
    while True:
        pos = comment.find(" @", pos)
        if pos == -1:
            break
        start = pos + 1
        end = start + 1
        while end < length and _is_tag_name_char(comment[end]):
            end += 1
        name = comment[start + 1 : end]
        if not name:
            pos = start
            continue

        arguments: str | None = None
        if comment[end : end + 1] == "(":
            close = comment.find(")", end)
            if close != -1:
                arguments = comment[end : close + 1].strip("()")
                end = close + 1
        tags.append(DocTag(name, arguments, start))
        pos = end
    return tags


def var_type(lines: list[str]) -> str | None:
    """Type of the last ``@var`` line, cut at the first ``|``."""
    found: str | None = None
    for line in lines:
        if not line.startswith("@var "):
            continue
        definition = line.split()
        if len(definition) > 1:
            parts = [part for part in definition[1].split("|") if part]
            found = parts[0] if parts else None
    return found


def ignored_codes(comment: str, sniff_code: str) -> list[str]:
    """Codes named by ``@codingStandardsIgnoreError <code>`` directives.

    A fully-qualified code loses its sniff prefix:
    ``Swivl.Commenting.DoctrineEntity.ColumnUnderscored`` -> ``ColumnUnderscored``.
    """
    codes: list[str] = []
    pos = 0
    while True:
        pos = comment.find(IGNORE_DIRECTIVE, pos)
        if pos == -1:
            break
        pos += len(IGNORE_DIRECTIVE)
        start = pos
        while pos < len(comment) and comment[pos].isspace():
            pos += 1
        if pos == start:
            continue
        code_start = pos
        while pos < len(comment) and comment[pos] in _CODE_CHARS:
            pos += 1
        code = comment[code_start:pos]
        if not code:
            continue
        if code.startswith(sniff_code):
            code = code[len(sniff_code) + 1 :]
        codes.append(code)
    return codes


def tag_type(raw: str, tag: str, *, generic: bool = False) -> str | None:
    """Type token following the first ``@tag`` that is followed by whitespace.

    With *generic*, the token stops at ``<`` and a ``<...>`` part up to the
    last ``>`` on the same line is appended (``Collection<int, Foo>``).
    """
    length = len(raw)
    pos = 0
    while True:
        pos = raw.find(tag, pos)
        if pos == -1:
            return None
        pos += len(tag)
        start = pos
        while pos < length and raw[pos].isspace():
            pos += 1
        if pos == start:
            continue

        token_start = pos
        while pos < length and not raw[pos].isspace() and not (generic and raw[pos] == "<"):
            pos += 1
        if pos == token_start:
            continue

        token = raw[token_start:pos]
        if generic and raw[pos : pos + 1] == "<":
            line_end = raw.find("\n", pos)
            line = raw[pos : line_end if line_end != -1 else length]
            close = line.rfind(">")
            if close != -1:
                token += line[: close + 1]
        return token
