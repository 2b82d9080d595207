"""Tests for swivl_sniffs.sniffs.doctrine.attribute_parser — both attribute dialects."""

from __future__ import annotations

from swivl_sniffs.sniffs.doctrine.attribute_parser import (
    NATIVE_DIALECT,
    RawLiteral,
    parse_attribute_text,
)


def _codes(text: str, native: bool = False) -> list[str]:
    result = parse_attribute_text(text, NATIVE_DIALECT) if native else parse_attribute_text(text)
    return [issue.code for issue in result.issues]


# ---------------------------------------------------------------------------
# Comment dialect: name="value"
# ---------------------------------------------------------------------------


class TestCommentDialect:
    def test_scalars_are_coerced(self) -> None:
        result = parse_attribute_text('type="integer", nullable=true, length=255, unique=FALSE')
        assert result.attributes == {
            "type": "integer",
            "nullable": True,
            "length": 255,
            "unique": False,
        }
        assert result.issues == []

    def test_quoted_values_stay_strings(self) -> None:
        result = parse_attribute_text('name="true", length="12"')
        assert result.attributes == {"name": "true", "length": "12"}

    def test_key_order_is_first_occurrence(self) -> None:
        result = parse_attribute_text('b="1", a="2", b="3"')
        assert list(result.attributes) == ["b", "a"]
        assert result.attributes["b"] == "3"

    def test_braced_literal_is_raw(self) -> None:
        result = parse_attribute_text('options={"default"=0}, type="integer"')
        assert result.attributes["options"] == '{"default"=0}'
        assert isinstance(result.attributes["options"], RawLiteral)
        assert result.attributes["type"] == "integer"

    def test_nested_braces_end_at_first_close(self) -> None:
        result = parse_attribute_text('options={"a"={"b"=1}}, type="string"')
        assert result.attributes["options"] == '{"a"={"b"=1}'

    def test_leading_literal_is_skipped(self) -> None:
        result = parse_attribute_text('{"x"}targetEntity="User"')
        assert result.attributes == {"targetEntity": "User"}

    def test_leading_literal_keeps_following_comma_in_name(self) -> None:
        result = parse_attribute_text('{"x"}, targetEntity="User"')
        assert result.attributes == {", targetEntity": "User"}
        assert [issue.code for issue in result.issues] == ["ExtraSpace"]

    def test_value_without_name(self) -> None:
        result = parse_attribute_text('"App\\User"')
        assert result.attributes == {"": "App\\User"}

    def test_empty_text(self) -> None:
        result = parse_attribute_text("   ")
        assert result.attributes == {}
        assert result.issues == []

    def test_extra_space_before_name(self) -> None:
        assert _codes('type="string",  length=10') == ["ExtraSpace"]

    def test_extra_space_before_value(self) -> None:
        assert _codes('type= "string"') == ["ExtraSpace"]

    def test_extra_space_after_value(self) -> None:
        result = parse_attribute_text('type="string" , length=10')
        assert [issue.code for issue in result.issues] == ["ExtraSpace"]
        assert result.attributes == {"type": "string", "length": 10}

    def test_unterminated_string(self) -> None:
        result = parse_attribute_text('type="string')
        assert [issue.code for issue in result.issues] == ["UnexpectedEnd"]
        assert result.issues[0].message == "Unexpected end of string"
        assert result.attributes == {"type": "strin"}

    def test_unterminated_array(self) -> None:
        result = parse_attribute_text('options={"default"=0')
        assert [issue.message for issue in result.issues] == ["Unexpected end of array"]
        assert result.attributes["options"] == '{"default"=0'


# ---------------------------------------------------------------------------
# Native dialect: name: 'value'
# ---------------------------------------------------------------------------


class TestNativeDialect:
    def test_basic(self) -> None:
        result = parse_attribute_text(
            "type: 'string', length: 64, nullable: true", NATIVE_DIALECT
        )
        assert result.attributes == {"type": "string", "length": 64, "nullable": True}
        assert result.issues == []

    def test_class_constant_value(self) -> None:
        result = parse_attribute_text("targetEntity: User::class", NATIVE_DIALECT)
        assert result.attributes == {"targetEntity": "User::class"}

    def test_bracket_literal(self) -> None:
        result = parse_attribute_text("options: ['default' => 0], type: 'integer'", NATIVE_DIALECT)
        assert result.attributes["options"] == "['default' => 0]"
        assert result.attributes["type"] == "integer"

    def test_need_space_after_delimiter(self) -> None:
        assert _codes("type:'string'", native=True) == ["NeedSpace"]

    def test_multiline_arguments_are_allowed(self) -> None:
        text = "\n    type: 'string',\n    length: 32\n"
        result = parse_attribute_text(text, NATIVE_DIALECT)
        assert result.attributes == {"type": "string", "length": 32}
        assert result.issues == []


class TestTermination:
    def test_garbage_input_terminates(self) -> None:
        for text in ['"', "{", "=", ",,,", '=="', "a=b=c", "{}{}{}", ' , = " { ']:
            parse_attribute_text(text)
            parse_attribute_text(text, NATIVE_DIALECT)
