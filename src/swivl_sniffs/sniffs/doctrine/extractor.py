"""Collect ORM annotations attached to a property.

Doc-comment tags come first, in comment order, followed by native attributes
in source order.  ``JoinTable`` is skipped in both forms because its value is
a nested annotation list.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from swivl_sniffs.sniffs.doctrine import doc_comment
from swivl_sniffs.sniffs.doctrine.attribute_parser import (
    COMMENT_DIALECT,
    NATIVE_DIALECT,
    parse_attribute_text,
)
from swivl_sniffs.sniffs.doctrine.schema import ORM_PREFIX, AnnotationKind

if TYPE_CHECKING:
    from swivl_sniffs.sniffs.doctrine.attribute_parser import AttributeValue, Dialect
    from swivl_sniffs.sniffs.report import Finding
    from swivl_sniffs.source.model import PropertyDeclaration, Token

SKIPPED_TAGS: frozenset[str] = frozenset({ORM_PREFIX + "JoinTable"})


@dataclass(frozen=True)
class AnnotationTag:
    """One ORM annotation occurrence on a property."""

    name: str  # as written, e.g. "ORM\\Column"
    kind: AnnotationKind | None  # None for annotations the sniff does not know
    token: Token
    attributes: dict[str, AttributeValue] = field(default_factory=dict)

    @property
    def short_name(self) -> str:
        return self.name[len(ORM_PREFIX) :] if self.name.startswith(ORM_PREFIX) else self.name


@dataclass
class Extraction:
    """Everything read from a property's doc-comment and attributes."""

    tags: list[AnnotationTag] = field(default_factory=list)
    var_type: str | None = None  # first type of the ``@var`` tag
    ignored_codes: list[str] = field(default_factory=list)
    issues: list[tuple[Finding, Token]] = field(default_factory=list)

    @property
    def names(self) -> list[str]:
        return [tag.name for tag in self.tags]

    def has(self, short_name: str) -> bool:
        return ORM_PREFIX + short_name in self.names

    def attributes_of(self, short_name: str) -> dict[str, AttributeValue]:
        """Attributes of the first ``ORM\\<short_name>`` tag, empty if absent."""
        for tag in self.tags:
            if tag.name == ORM_PREFIX + short_name:
                return tag.attributes
        return {}


def _is_orm_tag(name: str) -> bool:
    return name.startswith(ORM_PREFIX) and name not in SKIPPED_TAGS


def _add_tag(
    extraction: Extraction, name: str, arguments: str | None, token: Token, dialect: Dialect
) -> None:
    parsed = parse_attribute_text(arguments or "", dialect)
    extraction.issues.extend((issue, token) for issue in parsed.issues)
    extraction.tags.append(
        AnnotationTag(
            name=name,
            kind=AnnotationKind.from_tag(name),
            token=token,
            attributes=parsed.attributes,
        )
    )


def extract_annotations(prop: PropertyDeclaration, sniff_code: str) -> Extraction:
    """Read the ORM annotations, ``@var`` type and ignore directives of *prop*."""
    extraction = Extraction()

    comment = prop.doc_comment
    if comment is not None:
        flat = doc_comment.flatten(comment.text)
        extraction.var_type = doc_comment.var_type(flat.lines)
        tags = doc_comment.scan_tags(flat.text)
        if tags:
            extraction.ignored_codes = doc_comment.ignored_codes(flat.text, sniff_code)
        for tag in tags:
            if not _is_orm_tag(tag.name):
                continue
            token = comment.position_of(flat.raw_offset(tag.offset))
            _add_tag(extraction, tag.name, tag.arguments, token, COMMENT_DIALECT)

    for block in prop.attributes:
        if not _is_orm_tag(block.name):
            continue
        _add_tag(extraction, block.name, block.arguments, block.token, NATIVE_DIALECT)

    return extraction
