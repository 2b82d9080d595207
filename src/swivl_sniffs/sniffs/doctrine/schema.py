"""Doctrine annotation reference: supported kinds, attribute schema and mapping types."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from swivl_sniffs.sniffs.doctrine.naming import is_class_reference
from swivl_sniffs.sniffs.report import Finding

if TYPE_CHECKING:
    from collections.abc import Collection, Mapping

    from swivl_sniffs.sniffs.doctrine.attribute_parser import AttributeValue

ORM_PREFIX = "ORM\\"

# An attribute type is a primitive tag or a tuple of allowed literal values.
AttributeType = str | tuple[str, ...]

# ---------------------------------------------------------------------------
# Annotation kinds
# ---------------------------------------------------------------------------


class AnnotationKind(enum.Enum):
    """ORM annotations the sniff knows about."""

    CACHE = "Cache"
    COLUMN = "Column"
    GENERATED_VALUE = "GeneratedValue"
    ID = "Id"
    JOIN_COLUMN = "JoinColumn"
    JOIN_TABLE = "JoinTable"
    MANY_TO_MANY = "ManyToMany"
    MANY_TO_ONE = "ManyToOne"
    ONE_TO_MANY = "OneToMany"
    ONE_TO_ONE = "OneToOne"
    ORDER_BY = "OrderBy"
    SEQUENCE_GENERATOR = "SequenceGenerator"

    @classmethod
    def from_tag(cls, name: str) -> AnnotationKind | None:
        """Return the kind for ``Column`` or ``ORM\\Column``; ``None`` if unsupported."""
        try:
            return cls(strip_orm_prefix(name))
        except ValueError:
            return None


RELATION_TO_ONE: frozenset[AnnotationKind] = frozenset(
    {AnnotationKind.MANY_TO_ONE, AnnotationKind.ONE_TO_ONE}
)
RELATION_TO_MANY: frozenset[AnnotationKind] = frozenset(
    {AnnotationKind.MANY_TO_MANY, AnnotationKind.ONE_TO_MANY}
)


def strip_orm_prefix(name: str) -> str:
    return name[len(ORM_PREFIX) :] if name.startswith(ORM_PREFIX) else name


# ---------------------------------------------------------------------------
# Reference rules
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ReferenceRule:
    """Schema of one annotation.

    ``requires`` lists sibling annotations that must be present; each entry
    is a tuple of alternatives, any one of which satisfies it.  When
    ``attributes`` is ``None`` the attribute list is not checked at all.
    """

    required: tuple[str, ...] = ()
    attributes: Mapping[str, AttributeType] | None = None
    requires: tuple[tuple[str, ...], ...] = ()


def _attrs(**types: AttributeType) -> Mapping[str, AttributeType]:
    return MappingProxyType(dict(types))


_FETCH = ("LAZY", "EAGER")
_FETCH_EXTRA = ("LAZY", "EXTRA_LAZY", "EAGER")

REFERENCE: Mapping[AnnotationKind, ReferenceRule] = MappingProxyType(
    {
        AnnotationKind.COLUMN: ReferenceRule(
            required=("type",),
            attributes=_attrs(
                name="string",
                type="string",
                length="integer",
                precision="integer",
                scale="integer",
                unique="boolean",
                nullable="boolean",
                enumType="class",
                options="array",
                columnDefinition="string",
            ),
        ),
        AnnotationKind.CACHE: ReferenceRule(
            attributes=_attrs(
                usage=("READ_ONLY", "READ_WRITE", "NONSTRICT_READ_WRITE"),
                region="string",
            ),
        ),
        AnnotationKind.GENERATED_VALUE: ReferenceRule(
            requires=(("Id",),),
            attributes=_attrs(
                strategy=("AUTO", "SEQUENCE", "TABLE", "IDENTITY", "UUID", "CUSTOM", "NONE"),
            ),
        ),
        AnnotationKind.ID: ReferenceRule(),
        AnnotationKind.JOIN_COLUMN: ReferenceRule(
            requires=(("ManyToOne", "OneToOne"),),
            attributes=_attrs(
                name="string",
                referencedColumnName="string",
                unique="boolean",
                nullable="boolean",
                onDelete=("SET NULL", "CASCADE"),
                columnDefinition="string",
            ),
        ),
        AnnotationKind.JOIN_TABLE: ReferenceRule(
            requires=(("OneToMany", "ManyToMany"),),
            attributes=_attrs(
                name="string",
                joinColumns="array",
                inverseJoinColumns="array",
            ),
        ),
        AnnotationKind.MANY_TO_ONE: ReferenceRule(
            required=("targetEntity",),
            attributes=_attrs(
                targetEntity="class",
                cascade="string",
                fetch=_FETCH,
                inversedBy="string",
            ),
        ),
        AnnotationKind.MANY_TO_MANY: ReferenceRule(
            required=("targetEntity",),
            attributes=_attrs(
                targetEntity="class",
                mappedBy="string",
                inversedBy="string",
                cascade="string",
                fetch=_FETCH_EXTRA,
                indexBy="string",
            ),
        ),
        AnnotationKind.ONE_TO_ONE: ReferenceRule(
            required=("targetEntity",),
            attributes=_attrs(
                targetEntity="class",
                cascade="string",
                fetch=_FETCH,
                orphanRemoval="boolean",
                mappedBy="string",
                inversedBy="string",
            ),
        ),
        AnnotationKind.ONE_TO_MANY: ReferenceRule(
            required=("targetEntity",),
            attributes=_attrs(
                targetEntity="class",
                cascade="string",
                orphanRemoval="boolean",
                mappedBy="string",
                fetch=_FETCH_EXTRA,
                indexBy="string",
            ),
        ),
        AnnotationKind.ORDER_BY: ReferenceRule(
            requires=(("ManyToMany", "OneToMany"),),
        ),
        AnnotationKind.SEQUENCE_GENERATOR: ReferenceRule(
            requires=(("GeneratedValue",),),
            required=("sequenceName",),
            attributes=_attrs(
                sequenceName="string",
                allocationSize="integer",
                initialValue="integer",
            ),
        ),
    }
)

# Doctrine mapping type -> PHP type ("" means: no expectation).
MAPPING_TYPES: Mapping[str, str] = MappingProxyType(
    {
        "string": "string",
        "ascii_string": "string",
        "integer": "integer",
        "smallint": "integer",
        "tinyint": "integer",
        "bigint": "integer",
        "boolean": "boolean",
        "decimal": "float",
        "date": "DateTime",
        "time": "DateTime",
        "datetime": "DateTime",
        "datetimetz": "DateTime",
        "date_immutable": "DateTimeImmutable",
        "time_immutable": "DateTimeImmutable",
        "datetime_immutable": "DateTimeImmutable",
        "datetimetz_immutable": "DateTimeImmutable",
        "dateinterval": "DateInterval",
        "text": "string",
        "object": "",
        "array": "array",
        "simple_array": "array",
        "json_array": "array",
        "json": "array",
        "float": "float",
        "guid": "string",
    }
)

_INTEGER_TYPES = frozenset({"integer", "tinyint", "smallint", "bigint"})


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def _check_type(
    name: str, attr_name: str, attr_type: AttributeType, value: AttributeValue
) -> list[Finding]:
    if isinstance(attr_type, tuple):
        valid = isinstance(value, str) and value in attr_type
        expected = '["{}"]'.format('", "'.join(attr_type))
    else:
        expected = attr_type
        if attr_type == "string":
            valid = isinstance(value, str) and value != ""
        elif attr_type in _INTEGER_TYPES:
            valid = isinstance(value, int) and not isinstance(value, bool)
        elif attr_type == "boolean":
            valid = isinstance(value, bool)
        elif attr_type == "array":
            valid = isinstance(value, str) and value[:1] in ("{", "[")
        elif attr_type == "class":
            valid = is_class_reference(value)
        else:
            return [
                Finding(
                    "AttributeUnknownType",
                    "Annotation %s has attribute %s with unknown type %s",
                    (name, attr_name, expected),
                )
            ]

    if valid:
        return []
    return [
        Finding(
            "AttributeInvalidType",
            "Annotation %s has attribute %s with invalid type; expected %s",
            (name, attr_name, expected),
        )
    ]


def validate_annotation(
    name: str,
    attributes: Mapping[str, AttributeValue],
    siblings: Collection[str],
) -> list[Finding]:
    """Check one annotation against its reference rule.

    *name* is the annotation name without the ``ORM\\`` prefix and *siblings*
    the names of all ORM annotations on the same property.  Unsupported
    annotations produce no findings.
    """
    kind = AnnotationKind.from_tag(name)
    if kind is None:
        return []

    rule = REFERENCE[kind]
    findings: list[Finding] = []

    for alternatives in rule.requires:
        if not any(alternative in siblings for alternative in alternatives):
            findings.append(
                Finding(
                    "AnnotationRequired",
                    "Annotation %s requires %s which is not found",
                    (name, " or ".join(alternatives)),
                )
            )

    if rule.attributes is None:
        return findings

    missing = [attr for attr in rule.required if attr not in attributes]
    if missing:
        findings.append(
            Finding(
                "AttributeRequired",
                "Annotation %s must have the following attributes: %s",
                (name, ", ".join(missing)),
            )
        )

    unknown = [attr for attr in attributes if attr not in rule.attributes]
    if unknown:
        findings.append(
            Finding(
                "AttributeUnknown",
                "Annotation %s has unknown attributes: %s",
                (name, ", ".join(unknown)),
            )
        )

    for attr_name, attr_type in rule.attributes.items():
        if attr_name in attributes:
            findings.extend(_check_type(name, attr_name, attr_type, attributes[attr_name]))

    return findings
