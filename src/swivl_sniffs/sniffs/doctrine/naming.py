"""String helpers for property, column and class names."""

from __future__ import annotations

import re

CLASS_SUFFIX = "::class"

_WORD_BOUNDARY_RE = re.compile(r"([a-z0-9])([A-Z])")


def ucfirst(value: str) -> str:
    return value[:1].upper() + value[1:]


def lcfirst(value: str) -> str:
    return value[:1].lower() + value[1:]


def camel_case(value: str) -> str:
    """``created_at`` -> ``createdAt``; characters other than the word starts are kept."""
    words = value.replace("_", " ").strip().split(" ")
    return lcfirst("".join(ucfirst(word) for word in words))


def underscore(value: str) -> str:
    """``createdAt`` -> ``created_at``."""
    return _WORD_BOUNDARY_RE.sub(r"\1_\2", value).lower()


def singularize(name: str) -> tuple[str, bool]:
    """Return ``(singular, was_plural)`` for a collection property name.

    Only a trailing ``s`` marks a plural.  ``categories`` becomes ``category``
    and ``addresses`` becomes ``address``; a name without the trailing ``s``
    is returned unchanged.
    """
    if not name.endswith("s"):
        return name, False

    singular = name[:-1]
    if singular.endswith("ie"):
        singular = singular[:-2] + "y"
    elif singular.endswith("se"):
        singular = singular[:-1]
    return singular, True


def sounds_like_class(value: object) -> bool:
    """True when *value* is a string that does not start with a lowercase ASCII letter."""
    if not isinstance(value, str):
        return False
    return not ("a" <= value[:1] <= "z")


def is_class_reference(value: object) -> bool:
    """True for ``Foo\\Bar``, ``Bar::class`` and ``self::class``."""
    if not isinstance(value, str):
        return False
    if not (sounds_like_class(value) or value == "self::class"):
        return False
    return "\\" in value or (value.endswith(CLASS_SUFFIX) and value != CLASS_SUFFIX)


def short_class_name(class_name: str, self_class: str = "") -> str:
    """``App\\Entity\\User::class`` -> ``User``; ``self::class`` -> *self_class*."""
    if "\\" in class_name:
        class_name = class_name.rsplit("\\", 1)[1]

    if len(class_name) > len(CLASS_SUFFIX) and class_name.endswith(CLASS_SUFFIX):
        class_name = class_name[: -len(CLASS_SUFFIX)]

    if class_name == "self":
        class_name = self_class

    return class_name
