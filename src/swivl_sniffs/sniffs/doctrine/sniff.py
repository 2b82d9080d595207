"""Doctrine entity sniff: ORM mapping metadata vs. accessor declarations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from swivl_sniffs.config import SniffConfig
from swivl_sniffs.sniffs.doctrine.contracts import MethodContractValidator
from swivl_sniffs.sniffs.doctrine.extractor import extract_annotations
from swivl_sniffs.sniffs.doctrine.handlers import HANDLERS, MemberContext
from swivl_sniffs.sniffs.doctrine.inference import infer_defaults
from swivl_sniffs.sniffs.doctrine.schema import validate_annotation

if TYPE_CHECKING:
    from swivl_sniffs.sniffs.doctrine.extractor import AnnotationTag, Extraction
    from swivl_sniffs.sniffs.report import Reporter
    from swivl_sniffs.source.model import MethodDeclaration, PropertyDeclaration, SourceFile

logger = logging.getLogger(__name__)

CONSTRUCTOR = "__construct"


class FileCache:
    """Lazily computed facts about the classes of the file being checked.

    Methods and constructor assignments are keyed by the enclosing class, so
    a property is only matched against accessors of its own class.
    """

    def __init__(self, source: SourceFile) -> None:
        self.source = source
        self._methods: dict[str, dict[str, MethodDeclaration]] = {}
        self._initialized_members: dict[str, dict[str, str]] = {}

    @property
    def path(self) -> str:
        return self.source.path

    def methods_of(self, class_name: str) -> dict[str, MethodDeclaration]:
        """Method name -> first declaration with that name in *class_name*."""
        methods = self._methods.get(class_name)
        if methods is None:
            methods = {}
            for method in self.source.methods:
                if method.class_name == class_name:
                    methods.setdefault(method.name, method)
            self._methods[class_name] = methods
        return methods

    def initialized_members(self, reporter: Reporter, prop: PropertyDeclaration) -> dict[str, str]:
        """Members assigned in the constructor of *prop*'s class -> expression text.

        The first call for a class reports ``ConstructorRequired`` at *prop*
        when the class has no constructor; later calls return the cached
        empty result.
        """
        members = self._initialized_members.get(prop.class_name)
        if members is None:
            members = {}
            constructor = self.methods_of(prop.class_name).get(CONSTRUCTOR)
            if constructor is None:
                reporter.error(
                    "Class should have constructor with properties initialization.",
                    prop.token,
                    "ConstructorRequired",
                )
            else:
                # Later assignments to the same member win.
                members.update(constructor.assignments)
            self._initialized_members[prop.class_name] = members
        return members


class DoctrineEntitySniff:
    """Validates ORM annotations of class properties.

    Call :meth:`process_file` for a whole file, or :meth:`visit` per
    property.  Per-file caches are dropped when the file path changes.
    """

    def __init__(self, config: SniffConfig | None = None) -> None:
        self.config = config or SniffConfig()
        self._cache: FileCache | None = None

    @property
    def sniff_code(self) -> str:
        return self.config.sniff_code

    def _cache_for(self, source: SourceFile) -> FileCache:
        if self._cache is None or self._cache.path != source.path:
            logger.debug("New file cache for %s", source.path)
            self._cache = FileCache(source)
        return self._cache

    def process_file(self, source: SourceFile, reporter: Reporter) -> None:
        self._cache = None
        for prop in source.properties:
            self.visit(source, prop, reporter)

    def visit(self, source: SourceFile, prop: PropertyDeclaration, reporter: Reporter) -> None:
        """Check one property of *source*."""
        cache = self._cache_for(source)
        extraction = extract_annotations(prop, self.sniff_code)
        if not extraction.tags:
            return

        with reporter.suppressing(extraction.ignored_codes):
            for issue, token in extraction.issues:
                reporter.report(issue, token)

            ctx = MemberContext(
                prop=prop,
                extraction=extraction,
                reporter=reporter,
                contracts=MethodContractValidator(
                    cache.methods_of(prop.class_name),
                    reporter,
                    self.config.concrete_type_to_base_type_map,
                ),
                initialized_members=lambda: cache.initialized_members(reporter, prop),
                dynamic_enum_types=self.config.use_dynamical_calculation_for_enum_column_type,
            )
            for tag in extraction.tags:
                self._process_tag(ctx, tag, extraction)

    def _process_tag(self, ctx: MemberContext, tag: AnnotationTag, extraction: Extraction) -> None:
        attributes = tag.attributes
        if ctx.prop.type is not None:
            attributes = infer_defaults(tag.kind, attributes, ctx.prop.type)

        for finding in validate_annotation(tag.short_name, attributes, self._sibling_names(extraction)):
            ctx.reporter.report(finding, tag.token)

        if tag.kind is None:
            return
        handler = HANDLERS.get(tag.kind)
        if handler is not None:
            handler(ctx, tag, attributes)

    @staticmethod
    def _sibling_names(extraction: Extraction) -> list[str]:
        return [tag.short_name for tag in extraction.tags]
