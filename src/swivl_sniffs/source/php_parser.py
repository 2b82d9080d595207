"""PHP source reader: tree-sitter parsing into class member declarations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tree_sitter import Language, Parser

from swivl_sniffs.source.model import (
    AttributeBlock,
    DocComment,
    MethodDeclaration,
    Parameter,
    PropertyDeclaration,
    SourceFile,
    Token,
)

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from tree_sitter import Node as TSNode

logger = logging.getLogger(__name__)

_CLASS_LIKE_TYPES: frozenset[str] = frozenset(
    {"class_declaration", "trait_declaration", "interface_declaration", "enum_declaration"}
)
_TYPE_NODE_TYPES: frozenset[str] = frozenset(
    {
        "named_type",
        "primitive_type",
        "optional_type",
        "union_type",
        "intersection_type",
        "disjunctive_normal_form_type",
    }
)
_PARAMETER_TYPES: frozenset[str] = frozenset(
    {"simple_parameter", "property_promotion_parameter", "variadic_parameter"}
)
# Bodies of nested functions and classes are not part of the enclosing method.
_NESTED_SCOPE_TYPES: frozenset[str] = frozenset(
    {"anonymous_function", "anonymous_function_creation_expression", "arrow_function"}
    | _CLASS_LIKE_TYPES
)


class SourceError(Exception):
    """Raised when a PHP file cannot be read or the grammar is unavailable."""


# ---------------------------------------------------------------------------
# Grammar loading (lazy, cached)
# ---------------------------------------------------------------------------

_LANG_CACHE: dict[str, Language | None] = {}


def _load_php() -> Language:
    import tree_sitter_php as tsphp

    return Language(tsphp.language_php())


def get_php_language() -> Language | None:
    """Return the PHP grammar, or ``None`` if ``tree-sitter-php`` is not installed."""
    if "php" in _LANG_CACHE:
        return _LANG_CACHE["php"]

    try:
        language: Language | None = _load_php()
    except ImportError:
        language = None

    _LANG_CACHE["php"] = language
    return language


def clear_cache() -> None:
    """Clear the grammar cache (useful for testing)."""
    _LANG_CACHE.clear()


# ---------------------------------------------------------------------------
# Node helpers
# ---------------------------------------------------------------------------


def _text(node: TSNode) -> str:
    return node.text.decode("utf-8") if node.text else ""


def _token(kind: str, node: TSNode, content: str | None = None) -> Token:
    # tree-sitter uses 0-based rows and columns.
    return Token(
        kind=kind,
        content=_text(node) if content is None else content,
        line=node.start_point.row + 1,
        column=node.start_point.column + 1,
    )


def _first_child(node: TSNode, types: frozenset[str] | set[str]) -> TSNode | None:
    for child in node.children:
        if child.type in types:
            return child
    return None


def _first_descendant(node: TSNode, node_type: str) -> TSNode | None:
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == node_type:
            return current
        stack.extend(reversed(current.children))
    return None


def _field_or_child(node: TSNode, field: str, types: frozenset[str] | set[str]) -> TSNode | None:
    found = node.child_by_field_name(field)
    if found is not None:
        return found
    return _first_child(node, types)


def _type_text(node: TSNode) -> str | None:
    type_node = _field_or_child(node, "type", _TYPE_NODE_TYPES)
    if type_node is None:
        return None
    return "".join(_text(type_node).split())


def _walk_body(node: TSNode) -> Iterator[TSNode]:
    """Yield descendants of a method body without entering nested scopes."""
    stack = list(reversed(node.children))
    while stack:
        current = stack.pop()
        yield current
        if current.type not in _NESTED_SCOPE_TYPES:
            stack.extend(reversed(current.children))


def _is_doc_comment(node: TSNode) -> bool:
    return node.type == "comment" and _text(node).startswith("/**")


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------


def _attribute_blocks(declaration: TSNode, source: bytes) -> tuple[AttributeBlock, ...]:
    attribute_list = _field_or_child(declaration, "attributes", {"attribute_list"})
    if attribute_list is None:
        return ()

    blocks: list[AttributeBlock] = []
    stack = [attribute_list]
    while stack:
        current = stack.pop()
        if current.type != "attribute":
            stack.extend(reversed(current.children))
            continue
        params = _field_or_child(current, "parameters", {"arguments"})
        name_end = params.start_byte if params is not None else current.end_byte
        name = source[current.start_byte : name_end].decode("utf-8").strip()
        arguments: str | None = None
        if params is not None:
            arguments = source[params.start_byte + 1 : params.end_byte - 1].decode("utf-8")
        blocks.append(AttributeBlock(name, arguments, _token("attribute", current, name)))
    return tuple(blocks)


def _default_value(parameter: TSNode) -> str | None:
    default = parameter.child_by_field_name("default_value")
    if default is not None:
        return _text(default)
    seen_equals = False
    for child in parameter.children:
        if seen_equals and child.is_named:
            return _text(child)
        if child.type == "=":
            seen_equals = True
    return None


def _parameters(method: TSNode) -> tuple[Parameter, ...]:
    params_node = _field_or_child(method, "parameters", {"formal_parameters"})
    if params_node is None:
        return ()

    parameters: list[Parameter] = []
    for child in params_node.named_children:
        if child.type not in _PARAMETER_TYPES:
            continue
        variable = _first_descendant(child, "variable_name")
        if variable is None:
            continue
        parameters.append(
            Parameter(
                name=_text(variable).lstrip("$"),
                type_hint=_type_text(child),
                default=_default_value(child),
                token=_token("variable", variable),
            )
        )
    return tuple(parameters)


def _this_assignments(body: TSNode) -> tuple[tuple[str, str], ...]:
    assignments: list[tuple[str, str]] = []
    for node in _walk_body(body):
        if node.type != "assignment_expression":
            continue
        left = node.child_by_field_name("left")
        right = node.child_by_field_name("right")
        if left is None or right is None or left.type != "member_access_expression":
            continue
        target = left.child_by_field_name("object")
        member = left.child_by_field_name("name")
        if target is None or member is None or _text(target) != "$this":
            continue
        assignments.append((_text(member), _text(right)))
    return tuple(assignments)


def _method(node: TSNode, class_name: str, doc_comment: DocComment | None) -> MethodDeclaration:
    name_node = node.child_by_field_name("name")
    return_node = node.child_by_field_name("return_type")
    body = _field_or_child(node, "body", {"compound_statement"})

    has_return = False
    assignments: tuple[tuple[str, str], ...] = ()
    if body is not None:
        has_return = any(n.type == "return_statement" for n in _walk_body(body))
        assignments = _this_assignments(body)

    name = _text(name_node) if name_node is not None else ""
    return MethodDeclaration(
        name=name,
        token=_token("function", name_node if name_node is not None else node, name),
        class_name=class_name,
        return_type="".join(_text(return_node).split()) if return_node is not None else None,
        parameters=_parameters(node),
        has_return=has_return,
        doc_comment=doc_comment,
        assignments=assignments,
    )


def _properties(
    node: TSNode, class_name: str, doc_comment: DocComment | None, source: bytes
) -> list[PropertyDeclaration]:
    # A doc-comment between the attributes and the modifiers belongs to the declaration.
    for child in node.children:
        if _is_doc_comment(child):
            doc_comment = DocComment(_text(child), _token("doc_comment", child))

    declared_type = _type_text(node)
    attributes = _attribute_blocks(node, source)

    properties: list[PropertyDeclaration] = []
    for element in node.named_children:
        if element.type != "property_element":
            continue
        variable = _first_descendant(element, "variable_name")
        if variable is None:
            continue
        # Only the first property of "private $a, $b;" owns the comment and attributes.
        first = not properties
        properties.append(
            PropertyDeclaration(
                name=_text(variable).lstrip("$"),
                token=_token("variable", variable),
                class_name=class_name,
                type=declared_type,
                doc_comment=doc_comment if first else None,
                attributes=attributes if first else (),
            )
        )
    return properties


def _class_likes(root: TSNode) -> Iterator[TSNode]:
    stack = [root]
    while stack:
        current = stack.pop()
        if current.type in _CLASS_LIKE_TYPES:
            yield current
        stack.extend(reversed(current.children))


def parse_php(text: str, path: str = "<string>") -> SourceFile:
    """Parse PHP *text* and return its property and method declarations.

    Raises
    ------
    SourceError
        When the ``tree-sitter-php`` grammar is not installed.
    """
    language = get_php_language()
    if language is None:
        msg = "tree-sitter-php is not installed"
        raise SourceError(msg)

    source = text.encode("utf-8")
    tree = Parser(language).parse(source)
    if tree.root_node.has_error:
        logger.debug("Syntax errors in %s, results may be incomplete", path)

    properties: list[PropertyDeclaration] = []
    methods: list[MethodDeclaration] = []

    for class_node in _class_likes(tree.root_node):
        name_node = class_node.child_by_field_name("name")
        class_name = _text(name_node) if name_node is not None else ""
        body = class_node.child_by_field_name("body")
        if body is None:
            continue

        pending_doc: DocComment | None = None
        for child in body.named_children:
            if child.type == "comment":
                if _is_doc_comment(child):
                    pending_doc = DocComment(_text(child), _token("doc_comment", child))
                continue
            if child.type == "property_declaration":
                properties.extend(_properties(child, class_name, pending_doc, source))
            elif child.type == "method_declaration":
                methods.append(_method(child, class_name, pending_doc))
            pending_doc = None

    return SourceFile(path=path, properties=tuple(properties), methods=tuple(methods))


def parse_php_file(file_path: Path) -> SourceFile:
    """Read and parse a PHP file.

    Raises
    ------
    SourceError
        When the file cannot be read or the grammar is unavailable.
    """
    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Cannot read {file_path}: {exc}"
        raise SourceError(msg) from exc

    return parse_php(content, str(file_path))
