"""Tests for swivl_sniffs.sniffs.doctrine.type_match — type equivalence."""

from __future__ import annotations

import pytest

from swivl_sniffs.sniffs.doctrine.type_match import is_nullable_type, is_same_type, normalize_type


class TestIsSameType:
    @pytest.mark.parametrize(
        ("expected", "actual"),
        [
            ("string", "string"),
            ("integer", "int"),
            ("boolean", "bool"),
            ("int", "integer"),
            ("\\App\\User", "App\\User"),
            ("User", "?User"),
            ("User", "User|null"),
            ("array", "string[]"),
            ("array", "int[]|null"),
            ("DateTime", "\\DateTimeInterface"),
            ("DateTime", "DateTimeImmutable"),
            ("Post|self|static", "self"),
            ("Comment[]|Collection|ArrayCollection", "Collection"),
            ("Comment[]|Collection|Collection<int, Comment>", "Collection<int, Comment>"),
        ],
    )
    def test_equivalent(self, expected: str, actual: str) -> None:
        assert is_same_type(expected, actual)

    @pytest.mark.parametrize(
        ("expected", "actual"),
        [
            ("string", "int"),
            ("integer", "bool"),
            ("array", "string"),
            ("DateTimeImmutable", "DateTime"),
            ("User", "Admin"),
            ("Post|self|static", "void"),
        ],
    )
    def test_not_equivalent(self, expected: str, actual: str) -> None:
        assert not is_same_type(expected, actual)


class TestNullability:
    def test_normalize(self) -> None:
        assert normalize_type("?int") == "int|null"
        assert normalize_type("int") == "int"

    def test_is_nullable(self) -> None:
        assert is_nullable_type("?User")
        assert is_nullable_type("User|NULL")
        assert not is_nullable_type("User")
