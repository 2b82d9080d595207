"""Tests for swivl_sniffs.sniffs.doctrine.naming — name conversions and class references."""

from __future__ import annotations

import pytest

from swivl_sniffs.sniffs.doctrine.naming import (
    camel_case,
    is_class_reference,
    short_class_name,
    singularize,
    sounds_like_class,
    underscore,
)


class TestCaseConversion:
    def test_underscore(self) -> None:
        assert underscore("createdAt") == "created_at"
        assert underscore("userId2Fa") == "user_id2_fa"
        assert underscore("name") == "name"

    def test_camel_case(self) -> None:
        assert camel_case("created_at") == "createdAt"
        assert camel_case("name") == "name"
        assert camel_case("_id") == "id"

    @pytest.mark.parametrize("value", ["createdAt", "authorId", "firstLoginDate", "title"])
    def test_camel_case_round_trip(self, value: str) -> None:
        assert camel_case(underscore(value)) == value

    @pytest.mark.parametrize("value", ["created_at", "createdAt", "last_Login"])
    def test_underscore_of_camel_case_is_stable(self, value: str) -> None:
        assert underscore(camel_case(value)) == underscore(value)


class TestSingularize:
    def test_plain_plural(self) -> None:
        assert singularize("comments") == ("comment", True)

    def test_ies_plural(self) -> None:
        assert singularize("categories") == ("category", True)

    def test_ses_plural(self) -> None:
        assert singularize("addresses") == ("address", True)

    def test_singular_unchanged(self) -> None:
        assert singularize("comment") == ("comment", False)


class TestClassNames:
    def test_sounds_like_class(self) -> None:
        assert sounds_like_class("User")
        assert sounds_like_class("\\App\\User")
        assert not sounds_like_class("string")
        assert not sounds_like_class(42)

    def test_is_class_reference(self) -> None:
        assert is_class_reference("App\\Entity\\User")
        assert is_class_reference("User::class")
        assert is_class_reference("self::class")
        assert not is_class_reference("User")
        assert not is_class_reference("user::class")
        assert not is_class_reference("::class")
        assert not is_class_reference(True)

    def test_short_class_name(self) -> None:
        assert short_class_name("App\\Entity\\User") == "User"
        assert short_class_name("App\\Entity\\User::class") == "User"
        assert short_class_name("User::class") == "User"
        assert short_class_name("self::class", "Post") == "Post"
        assert short_class_name("::class") == "::class"
