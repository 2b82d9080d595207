"""Type-equivalence relation between expected and declared PHP types."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

SCALAR_TYPES: Mapping[str, str] = MappingProxyType({"bool": "boolean", "int": "integer"})

# A bare DateTime expectation is met by any of these.
_DATETIME_FAMILY = ("DateTime", "DateTimeInterface", "DateTimeImmutable")


def normalize_type(mixed_type: str) -> str:
    """``?Foo`` -> ``Foo|null``."""
    if mixed_type.startswith("?"):
        return mixed_type[1:] + "|null"
    return mixed_type


def is_nullable_type(mixed_type: str) -> bool:
    return "null" in (member.lower() for member in normalize_type(mixed_type).split("|"))


def _members(type_text: str) -> list[str]:
    return [member.lstrip("\\") for member in normalize_type(type_text).split("|")]


def _long_type(short_type: str) -> str:
    return SCALAR_TYPES.get(short_type, short_type)


def is_same_type(expected: str, actual: str) -> bool:
    """True when *actual* satisfies *expected*.

    Both sides may be unions; they match when they share at least one member
    after ``int``/``bool`` are widened to ``integer``/``boolean``.  ``array``
    is met by any ``Foo[]`` member.
    """
    expected_members = [member.lstrip("\\") for member in expected.split("|")]
    actual_members = _members(actual)

    if expected_members == actual_members:
        return True
    if expected_members == ["array"] and any(m.endswith("[]") for m in actual_members):
        return True
    if expected_members == ["DateTime"]:
        expected_members = list(_DATETIME_FAMILY)

    expected_set = {_long_type(member) for member in expected_members}
    return any(_long_type(member) in expected_set for member in actual_members)
