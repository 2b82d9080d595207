"""Attribute-list parser for ORM annotations and native attributes.

Two dialects share one scanner:

* comment-style: ``name="value", flag=true, options={"default"=0}``
* native-style:  ``name: 'value', flag: true, options: ['default' => 0]``

Bracketed literals are not decomposed: the value is the raw text from the
open bracket up to the *first* close bracket, so nested brackets of the same
kind end the literal early.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from swivl_sniffs.sniffs.report import Finding

AttributeValue = str | int | bool

_NUMERIC_RE = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\s*$")


class RawLiteral(str):
    """Verbatim text of a bracketed array/object literal."""

    __slots__ = ()


@dataclass(frozen=True)
class Dialect:
    """Delimiters of one attribute syntax."""

    name: str
    delimiter: str
    quote: str
    open_bracket: str
    close_bracket: str
    space_after_delimiter: bool  # native attributes want "name: value"


COMMENT_DIALECT = Dialect(
    name="comment",
    delimiter="=",
    quote='"',
    open_bracket="{",
    close_bracket="}",
    space_after_delimiter=False,
)
NATIVE_DIALECT = Dialect(
    name="native",
    delimiter=":",
    quote="'",
    open_bracket="[",
    close_bracket="]",
    space_after_delimiter=True,
)


@dataclass
class ParseResult:
    """Parsed attributes in encounter order plus the issues found.

    Issue codes: ``ExtraSpace``, ``NeedSpace``, ``UnexpectedEnd``.
    """

    attributes: dict[str, AttributeValue] = field(default_factory=dict)
    issues: list[Finding] = field(default_factory=list)


def _coerce_scalar(value: str) -> AttributeValue:
    lowered = value.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    if _NUMERIC_RE.match(value):
        try:
            return int(value)
        except ValueError:
            pass
        try:
            return int(float(value))
        except OverflowError:
            return value
    return value


def _char(text: str, pos: int) -> str:
    return text[pos : pos + 1]


def parse_attribute_text(text: str, dialect: Dialect = COMMENT_DIALECT) -> ParseResult:
    """Parse the text between an annotation's parentheses.

    Repeated names keep their first position and the last value.  The scan
    always consumes at least one character per step, so it terminates on any
    input.
    """
    result = ParseResult()
    text = text.strip()

    while text:
        if text.startswith(dialect.open_bracket):
            end = text.find(dialect.close_bracket)
            if end > 0:
                text = text[end + 1 :]
                continue

        delimiter_pos = text.find(dialect.delimiter)
        if delimiter_pos == -1:
            name = ""
            value_pos = 0
        else:
            name = text[:delimiter_pos]
            value_pos = delimiter_pos + 1

        if dialect.space_after_delimiter:
            if " " in name and "\n" not in name:
                name = name.strip()
                result.issues.append(
                    Finding("ExtraSpace", 'Found extra space before attribute "%s" name', (name,))
                )
            name = name.strip(" \r\n")
        elif " " in name:
            name = name.strip()
            result.issues.append(
                Finding("ExtraSpace", 'Found extra space before attribute "%s" name', (name,))
            )

        if delimiter_pos != -1:
            if dialect.space_after_delimiter and _char(text, value_pos) != " ":
                result.issues.append(
                    Finding("NeedSpace", 'Need space before attribute "%s" value', (name,))
                )
            elif not dialect.space_after_delimiter and _char(text, value_pos) == " ":
                result.issues.append(
                    Finding("ExtraSpace", 'Found extra space before attribute "%s" value', (name,))
                )
            while _char(text, value_pos) == " ":
                value_pos += 1

        value: AttributeValue
        first = _char(text, value_pos)
        if first == dialect.quote:
            value_end = text.find(dialect.quote, value_pos + 1)
            if value_end == -1:
                result.issues.append(Finding("UnexpectedEnd", "Unexpected end of string"))
                value_end = len(text) - 1
            value = text[value_pos + 1 : value_end]
        elif first == dialect.open_bracket:
            value_end = text.find(dialect.close_bracket, value_pos + 1)
            if value_end == -1:
                result.issues.append(Finding("UnexpectedEnd", "Unexpected end of array"))
                value_end = len(text) - 1
            value = RawLiteral(text[value_pos : value_end + 1])
        else:
            comma_pos = text.find(",", value_pos)
            value_end = comma_pos - 1 if comma_pos != -1 else len(text) - 1
            value = _coerce_scalar(text[value_pos : value_end + 1])

        result.attributes[name] = value

        if value_end < len(text) - 1:
            delimiter_pos = value_end + 1
            if _char(text, delimiter_pos) == " ":
                result.issues.append(
                    Finding("ExtraSpace", 'Extra space after attribute "%s" value', (name,))
                )
                while _char(text, delimiter_pos) == " ":
                    delimiter_pos += 1
            if _char(text, delimiter_pos) == "," and _char(text, delimiter_pos + 1) == " ":
                delimiter_pos += 1
            value_end = delimiter_pos

        text = text[max(value_end + 1, 1) :]

    return result
