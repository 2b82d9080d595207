"""Defaults Doctrine derives from native property types.

Since ORM 2.9 a typed property may omit ``type`` on ``Column`` and
``targetEntity`` on to-one relations; the metadata builder fills them in from
the declared type.  Validation runs against the completed mapping.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from swivl_sniffs.sniffs.doctrine.naming import CLASS_SUFFIX, sounds_like_class
from swivl_sniffs.sniffs.doctrine.schema import RELATION_TO_ONE, AnnotationKind

if TYPE_CHECKING:
    from collections.abc import Mapping

    from swivl_sniffs.sniffs.doctrine.attribute_parser import AttributeValue

# Declared PHP type -> column type keyword.
TYPED_COLUMN_DEFAULTS: Mapping[str, str] = MappingProxyType(
    {
        "DateInterval": "dateinterval",
        "DateTime": "datetime",
        "DateTimeImmutable": "datetime_immutable",
        "array": "json",
        "bool": "boolean",
        "float": "float",
        "int": "integer",
        "string": "string",
    }
)


def infer_defaults(
    kind: AnnotationKind | None,
    attributes: Mapping[str, AttributeValue],
    declared_type: str,
) -> dict[str, AttributeValue]:
    """Return a copy of *attributes* completed from *declared_type*."""
    completed = dict(attributes)
    php_type = declared_type.lstrip("?\\")

    if kind is AnnotationKind.COLUMN and "type" not in completed:
        column_type = TYPED_COLUMN_DEFAULTS.get(php_type)
        if column_type is not None:
            completed["type"] = column_type
        elif sounds_like_class(php_type):
            # Backed enum.
            completed["type"] = "string"
            completed["enumType"] = php_type + CLASS_SUFFIX
    elif kind in RELATION_TO_ONE and "targetEntity" not in completed:
        completed["targetEntity"] = php_type + CLASS_SUFFIX

    return completed
