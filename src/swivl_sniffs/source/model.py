"""Declarations read from a PHP source file: the surface the sniffs consume."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Token:
    """A positional unit of the source file (1-based line and column)."""

    kind: str  # "variable" | "function" | "doc_comment" | "attribute" | "tag"
    content: str
    line: int
    column: int


@dataclass(frozen=True)
class DocComment:
    """A ``/** ... */`` comment together with the token it starts at."""

    text: str
    token: Token

    def position_of(self, offset: int) -> Token:
        """Return a ``tag`` token for the character at *offset* in :attr:`text`."""
        head = self.text[:offset]
        newlines = head.count("\n")
        if newlines == 0:
            column = self.token.column + offset
        else:
            column = offset - head.rfind("\n")
        end = self.text.find("\n", offset)
        content = self.text[offset : end if end != -1 else len(self.text)].rstrip()
        return Token("tag", content, self.token.line + newlines, column)


@dataclass(frozen=True)
class AttributeBlock:
    """One native attribute, e.g. ``#[ORM\\Column(type: 'string')]``."""

    name: str  # text before the parenthesis, e.g. "ORM\\Column"
    arguments: str | None  # text between the parentheses, None without them
    token: Token


@dataclass(frozen=True)
class Parameter:
    """A formal parameter of a method."""

    name: str  # without the leading "$"
    type_hint: str | None  # raw text, may start with "?"
    default: str | None  # raw default expression text
    token: Token


@dataclass(frozen=True)
class MethodDeclaration:
    """A class method with the facts needed for accessor checks."""

    name: str
    token: Token
    class_name: str
    return_type: str | None = None
    parameters: tuple[Parameter, ...] = ()
    has_return: bool = False
    doc_comment: DocComment | None = None
    # ``$this->member = expression`` assignments, in body order.
    assignments: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True)
class PropertyDeclaration:
    """A class property (member variable)."""

    name: str  # without the leading "$"
    token: Token
    class_name: str
    type: str | None = None
    doc_comment: DocComment | None = None
    attributes: tuple[AttributeBlock, ...] = ()


@dataclass(frozen=True)
class SourceFile:
    """All declarations of one PHP file in document order."""

    path: str
    properties: tuple[PropertyDeclaration, ...] = field(default_factory=tuple)
    methods: tuple[MethodDeclaration, ...] = field(default_factory=tuple)
