"""Per-annotation checks run after schema validation."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Callable

from swivl_sniffs.sniffs.doctrine.contracts import RETURNS_THIS, MethodContract, MethodRole
from swivl_sniffs.sniffs.doctrine.naming import (
    camel_case,
    short_class_name,
    singularize,
    sounds_like_class,
    ucfirst,
    underscore,
)
from swivl_sniffs.sniffs.doctrine.schema import MAPPING_TYPES, AnnotationKind
from swivl_sniffs.sniffs.doctrine.type_match import is_same_type

if TYPE_CHECKING:
    from collections.abc import Mapping

    from swivl_sniffs.sniffs.doctrine.attribute_parser import AttributeValue
    from swivl_sniffs.sniffs.doctrine.contracts import MethodContractValidator
    from swivl_sniffs.sniffs.doctrine.extractor import AnnotationTag, Extraction
    from swivl_sniffs.sniffs.report import Reporter
    from swivl_sniffs.source.model import PropertyDeclaration

TYPES_CONSTANT_PREFIX = "Types::"
EXPECTED_COLLECTION_INIT = "new arraycollection()"


@dataclass
class MemberContext:
    """State shared by the handlers while one property is checked."""

    prop: PropertyDeclaration
    extraction: Extraction
    reporter: Reporter
    contracts: MethodContractValidator
    initialized_members: Callable[[], Mapping[str, str]]
    dynamic_enum_types: bool = False

    @property
    def name(self) -> str:
        return self.prop.name

    def class_name_of(self, value: AttributeValue) -> str:
        return short_class_name(str(value), self.prop.class_name)


def dynamic_enum_type(column_type: str, fallback: str = "string") -> str:
    """``user_enum_status`` -> ``UserStatus``."""
    if "_enum_" not in column_type:
        return fallback
    parts = column_type.split("_enum_")
    return ucfirst(camel_case("".join(ucfirst(part) for part in parts)))


def suggest_type(column_type: str, *, dynamic_enum_types: bool = False) -> str:
    """PHP type expected for a column type keyword; ``""`` means no expectation.

    ``Types::DATETIME_MUTABLE`` style constants are accepted.  A class-like
    value is an enum type and is returned as is.
    """
    if column_type.startswith(TYPES_CONSTANT_PREFIX):
        column_type = column_type[len(TYPES_CONSTANT_PREFIX) :].lower()
        column_type = column_type.removesuffix("_mutable")

    if column_type in MAPPING_TYPES:
        return MAPPING_TYPES[column_type]
    if sounds_like_class(column_type):
        return column_type
    if dynamic_enum_types:
        return dynamic_enum_type(column_type)
    return "string"


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def check_column(ctx: MemberContext, tag: AnnotationTag, attributes: Mapping[str, AttributeValue]) -> None:
    reporter = ctx.reporter
    var_type = ctx.extraction.var_type
    member_type = ctx.prop.type

    if "name" in attributes:
        column_name = str(attributes["name"]).strip("`")
        expected_name = underscore(ctx.name)
        if column_name != expected_name and ctx.name != camel_case(column_name):
            reporter.error(
                'Column name must be underscored variable name; expected "%s" but found "%s"',
                tag.token,
                "ColumnUnderscored",
                (expected_name, column_name),
            )

    expected_type: str | None = member_type
    if "type" in attributes:
        column_type = str(attributes["type"])
        if "enumType" in attributes:
            column_type = ctx.class_name_of(attributes["enumType"])

        expected_type = suggest_type(column_type, dynamic_enum_types=ctx.dynamic_enum_types)
        if expected_type:
            if not var_type and not member_type:
                reporter.error(
                    'Variable type required for column; expected "%s"',
                    tag.token,
                    "VariableTypeRequired",
                    (expected_type,),
                )
            if var_type and not is_same_type(expected_type, var_type):
                reporter.error(
                    'Variable type must match column type; expected "%s" but found "%s"',
                    tag.token,
                    "VariableTypeMismatch",
                    (expected_type, var_type),
                )
            if member_type and not is_same_type(expected_type, member_type.strip("?")):
                reporter.error(
                    'Property type must match column type; expected "%s" but found "%s"',
                    tag.token,
                    "PropertyTypeMismatch",
                    (expected_type, member_type),
                )
        else:
            expected_type = None

        if column_type == "varchar" and "length" not in attributes:
            reporter.error(
                "Column of type varchar must have specified length",
                tag.token,
                "ColumnAttributeRequired",
            )
        if column_type == "decimal" and not ("precision" in attributes and "scale" in attributes):
            reporter.error(
                "Column of type decimal must have specified precision and scale",
                tag.token,
                "ColumnAttributeRequired",
            )

    nullable = bool(attributes.get("nullable", False))
    owner = tag.short_name
    ctx.contracts.validate(
        MethodContract(
            owner,
            MethodRole.GETTER,
            "get" + ucfirst(ctx.name),
            return_type=expected_type,
        ),
        tag.token,
    )
    ctx.contracts.validate(
        MethodContract(
            owner,
            MethodRole.SETTER,
            "set" + ucfirst(ctx.name),
            required=not ctx.extraction.has("GeneratedValue"),
            return_type=RETURNS_THIS,
            argument_name=ctx.name,
            argument_type=expected_type,
            argument_nullable=nullable,
        ),
        tag.token,
    )


def check_join_column(
    ctx: MemberContext, tag: AnnotationTag, attributes: Mapping[str, AttributeValue]
) -> None:
    if "name" not in attributes:
        return
    column_name = attributes["name"]
    expected_name = underscore(ctx.name) + "_id"
    if column_name != expected_name:
        ctx.reporter.error(
            '%s name must be underscored variable name; expected "%s" but found "%s"',
            tag.token,
            "JoinColumnNameFormat",
            (tag.short_name, expected_name, column_name),
        )


def check_relation_to_one(
    ctx: MemberContext, tag: AnnotationTag, attributes: Mapping[str, AttributeValue]
) -> None:
    if "targetEntity" not in attributes:
        return
    target = ctx.class_name_of(attributes["targetEntity"])
    nullable = bool(ctx.extraction.attributes_of("JoinColumn").get("nullable", True))
    owner = tag.short_name

    ctx.contracts.validate(
        MethodContract(owner, MethodRole.GETTER, "get" + ucfirst(ctx.name), return_type=target),
        tag.token,
    )
    ctx.contracts.validate(
        MethodContract(
            owner,
            MethodRole.SETTER,
            "set" + ucfirst(ctx.name),
            return_type=RETURNS_THIS,
            argument_name=ctx.name,
            argument_type=target,
            argument_nullable=nullable,
        ),
        tag.token,
    )


def check_relation_to_many(
    ctx: MemberContext, tag: AnnotationTag, attributes: Mapping[str, AttributeValue]
) -> None:
    reporter = ctx.reporter
    owner = tag.short_name
    singular, plural = singularize(ctx.name)
    if not plural:
        reporter.error(
            'Variable "%s" name "%s" must be plural',
            ctx.prop.token,
            owner + "VariablePlural",
            (owner, ctx.name),
        )

    members = ctx.initialized_members()
    if ctx.name not in members:
        reporter.error(
            'Variable "%s" must be initialized in the class constructor',
            ctx.prop.token,
            owner + "VariableNotInitialized",
            (ctx.name,),
        )
    elif members[ctx.name].strip().lower() != EXPECTED_COLLECTION_INIT:
        reporter.error(
            'Variable "%s" must be initialized in the class constructor as ArrayCollection; found "%s"',
            ctx.prop.token,
            owner + "VariableCollection",
            (ctx.name, members[ctx.name]),
        )

    if "targetEntity" not in attributes:
        return
    target = ctx.class_name_of(attributes["targetEntity"])

    ctx.contracts.validate(
        MethodContract(
            owner,
            MethodRole.ADDER,
            "add" + ucfirst(singular),
            return_type=RETURNS_THIS,
            argument_name=singular,
            argument_type=target,
        ),
        tag.token,
    )
    ctx.contracts.validate(
        MethodContract(
            owner,
            MethodRole.REMOVER,
            "remove" + ucfirst(singular),
            argument_name=singular,
            argument_type=target,
        ),
        tag.token,
    )
    ctx.contracts.validate(
        MethodContract(
            owner,
            MethodRole.GETTER,
            "get" + ucfirst(ctx.name),
            return_type=(
                f"{target}[]|Collection|ArrayCollection|Collection<{target}>|Collection<int, {target}>"
            ),
        ),
        tag.token,
    )


Handler = Callable[[MemberContext, "AnnotationTag", "Mapping[str, AttributeValue]"], None]

HANDLERS: Mapping[AnnotationKind, Handler] = MappingProxyType(
    {
        AnnotationKind.COLUMN: check_column,
        AnnotationKind.JOIN_COLUMN: check_join_column,
        AnnotationKind.MANY_TO_ONE: check_relation_to_one,
        AnnotationKind.ONE_TO_ONE: check_relation_to_one,
        AnnotationKind.MANY_TO_MANY: check_relation_to_many,
        AnnotationKind.ONE_TO_MANY: check_relation_to_many,
    }
)
