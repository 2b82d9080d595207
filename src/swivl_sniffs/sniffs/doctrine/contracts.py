"""Accessor contract checks: getters, setters, adders and removers."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from swivl_sniffs.sniffs.doctrine import doc_comment
from swivl_sniffs.sniffs.doctrine.naming import lcfirst, short_class_name, ucfirst
from swivl_sniffs.sniffs.doctrine.type_match import is_nullable_type, is_same_type

if TYPE_CHECKING:
    from collections.abc import Mapping

    from swivl_sniffs.sniffs.report import Reporter
    from swivl_sniffs.source.model import MethodDeclaration, Token

logger = logging.getLogger(__name__)

# Expected return type placeholder: the enclosing class, "self" or "static".
RETURNS_THIS = "$this"


class MethodRole(enum.Enum):
    GETTER = "getter"
    SETTER = "setter"
    ADDER = "adder"
    REMOVER = "remover"


@dataclass(frozen=True)
class MethodContract:
    """What an annotation implies about one accessor method.

    ``return_type`` and ``argument_name`` of ``None`` disable the return and
    argument checks; ``argument_type`` of ``None`` disables type comparison
    of the argument only.
    """

    owner: str  # annotation short name, e.g. "Column"
    role: MethodRole
    method_name: str
    required: bool = True
    return_type: str | None = None
    argument_name: str | None = None
    argument_type: str | None = None
    argument_nullable: bool = False

    @property
    def code_prefix(self) -> str:
        return ucfirst(self.owner) + ucfirst(self.role.value)


def boolean_getter_name(method_name: str) -> str:
    """``getActive`` -> ``isActive``; ``getIsActive`` -> ``isActive``."""
    short_name = lcfirst(method_name[3:])
    if not short_name.startswith("is"):
        short_name = "is" + ucfirst(short_name)
    return short_name


class MethodContractValidator:
    """Checks accessor methods of one file against expected contracts.

    *methods* maps a method name to its first declaration in the file and
    *concrete_type_to_base_type_map* lets accessors type-hint a base class of
    the concrete type an association references.
    """

    def __init__(
        self,
        methods: Mapping[str, MethodDeclaration],
        reporter: Reporter,
        concrete_type_to_base_type_map: Mapping[str, str] | None = None,
    ) -> None:
        self.methods = methods
        self.reporter = reporter
        self.type_map: Mapping[str, str] = concrete_type_to_base_type_map or {}

    # -- lookup -----------------------------------------------------------

    def find(self, method_name: str) -> MethodDeclaration | None:
        method = self.methods.get(method_name)
        if method is None and method_name.startswith("get"):
            method = self.methods.get(boolean_getter_name(method_name))
        return method

    def _is_mapped_type(self, expected: str, type_hint: str | None) -> bool:
        return type_hint is not None and self.type_map.get(expected) == type_hint

    # -- validation -------------------------------------------------------

    def validate(self, contract: MethodContract, tag_token: Token) -> None:
        """Report every way the file's method deviates from *contract*."""
        method = self.find(contract.method_name)
        owner = ucfirst(contract.owner)
        role = contract.role.value

        if method is None:
            if contract.required:
                self.reporter.error(
                    '%s must have %s method named "%s"',
                    tag_token,
                    contract.code_prefix + "Required",
                    (owner, role, contract.method_name),
                )
            return

        logger.debug("Checking %s %s against %s", role, method.name, contract.owner)
        if contract.return_type is not None:
            self._check_return(contract, method, owner)
        if contract.argument_name is not None:
            self._check_argument(contract, method, owner)

    def _check_return(self, contract: MethodContract, method: MethodDeclaration, owner: str) -> None:
        expected = contract.return_type or ""
        if expected == RETURNS_THIS:
            expected = f"{short_class_name(method.class_name)}|self|static"

        prefix = contract.code_prefix
        data = (owner, contract.role.value, method.name, expected)
        declared = (method.return_type or "").lstrip("?")

        if not method.has_return and not declared:
            self.reporter.error(
                '%s %s "%s" must have return statement which returns %s',
                method.token,
                prefix + "ReturnRequired",
                data,
            )

        if method.doc_comment is not None:
            documented = doc_comment.tag_type(method.doc_comment.text, "@return", generic=True)
            if documented is None or not is_same_type(expected, documented):
                self.reporter.error(
                    '%s %s "%s" must have return type "%s" in doc-comment',
                    method.token,
                    prefix + "ReturnDocType",
                    data,
                )

        if declared and not is_same_type(expected, declared):
            self.reporter.error(
                '%s %s "%s" must have return type "%s"',
                method.token,
                prefix + "ReturnType",
                data,
            )

    def _check_argument(self, contract: MethodContract, method: MethodDeclaration, owner: str) -> None:
        prefix = contract.code_prefix
        role = contract.role.value
        expected = contract.argument_type

        if not method.parameters:
            self.reporter.error(
                '%s %s "%s" must have at least one argument',
                method.token,
                prefix + "ArgumentRequired",
                (owner, role, method.name),
            )
            return

        parameter = method.parameters[0]
        if parameter.name != contract.argument_name:
            self.reporter.error(
                '%s %s "%s" argument must have name "%s"',
                method.token,
                prefix + "ArgumentName",
                (owner, role, method.name, contract.argument_name),
            )

        type_hint = parameter.type_hint
        bare_hint = type_hint.lstrip("?") if type_hint is not None else None
        if type_hint is not None:
            if (
                expected is not None
                and not is_same_type(expected, type_hint)
                and not self._is_mapped_type(expected, bare_hint)
            ):
                self.reporter.error(
                    '%s %s "%s" argument must have typehint "%s", instead of typehint "%s"',
                    method.token,
                    prefix + "ArgumentType",
                    (owner, role, method.name, expected, bare_hint),
                )

            nullable = is_nullable_type(type_hint) or (
                parameter.default is not None and parameter.default.strip().lower() == "null"
            )
            if not nullable and contract.argument_nullable:
                self.reporter.error(
                    '%s %s "%s" argument must be nullable',
                    method.token,
                    prefix + "ArgumentNullable",
                    (owner, role, method.name),
                )
            elif nullable and not contract.argument_nullable:
                self.reporter.error(
                    '%s %s "%s" argument must be not-nullable',
                    method.token,
                    prefix + "ArgumentNotNullable",
                    (owner, role, method.name),
                )

        if method.doc_comment is not None and expected is not None:
            documented = doc_comment.tag_type(method.doc_comment.text, "@param")
            if documented is None or not (
                is_same_type(expected, documented)
                or self._is_mapped_type(expected, documented)
                or self._is_mapped_type(expected, bare_hint)
            ):
                self.reporter.error(
                    '%s %s "%s" must have param "%s" with type "%s" in doc-comment',
                    method.token,
                    prefix + "ArgumentDocType",
                    (owner, role, method.name, contract.argument_name, expected),
                )
