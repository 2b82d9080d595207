"""Doctrine entity sniff: annotation parsing, schema checks, accessor contracts."""

from swivl_sniffs.sniffs.doctrine.attribute_parser import (
    COMMENT_DIALECT,
    NATIVE_DIALECT,
    ParseResult,
    parse_attribute_text,
)
from swivl_sniffs.sniffs.doctrine.contracts import (
    MethodContract,
    MethodContractValidator,
    MethodRole,
)
from swivl_sniffs.sniffs.doctrine.extractor import (
    AnnotationTag,
    Extraction,
    extract_annotations,
)
from swivl_sniffs.sniffs.doctrine.schema import (
    MAPPING_TYPES,
    REFERENCE,
    AnnotationKind,
    validate_annotation,
)
from swivl_sniffs.sniffs.doctrine.sniff import DoctrineEntitySniff, FileCache

__all__ = [
    "COMMENT_DIALECT",
    "MAPPING_TYPES",
    "NATIVE_DIALECT",
    "REFERENCE",
    "AnnotationKind",
    "AnnotationTag",
    "DoctrineEntitySniff",
    "Extraction",
    "FileCache",
    "MethodContract",
    "MethodContractValidator",
    "MethodRole",
    "ParseResult",
    "extract_annotations",
    "parse_attribute_text",
    "validate_annotation",
]
