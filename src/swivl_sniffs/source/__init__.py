"""Source domain: PHP parsing into class member declarations."""

from swivl_sniffs.source.model import (
    AttributeBlock,
    DocComment,
    MethodDeclaration,
    Parameter,
    PropertyDeclaration,
    SourceFile,
    Token,
)
from swivl_sniffs.source.php_parser import (
    SourceError,
    clear_cache,
    get_php_language,
    parse_php,
    parse_php_file,
)

__all__ = [
    "AttributeBlock",
    "DocComment",
    "MethodDeclaration",
    "Parameter",
    "PropertyDeclaration",
    "SourceError",
    "SourceFile",
    "Token",
    "clear_cache",
    "get_php_language",
    "parse_php",
    "parse_php_file",
]
