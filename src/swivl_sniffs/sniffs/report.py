"""Diagnostic sink shared by the sniffs."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from swivl_sniffs.source.model import Token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Finding:
    """A problem detected by a pure check, not yet tied to a file position."""

    code: str  # short code, e.g. "AttributeRequired"
    message: str  # printf-style template, "%s" placeholders
    data: tuple[str, ...] = ()


@dataclass(frozen=True)
class Diagnostic:
    """A single reported violation."""

    file_path: str
    line: int
    column: int
    code: str  # full dotted code, e.g. "Swivl.Commenting.DoctrineEntity.ColumnUnderscored"
    message: str
    severity: str = "error"

    @property
    def short_code(self) -> str:
        return self.code.rsplit(".", 1)[-1]


class Reporter:
    """Collects diagnostics for one file.

    Codes listed in the active ignore set are dropped silently.
    """

    def __init__(self, file_path: str, sniff_code: str) -> None:
        self.file_path = file_path
        self.sniff_code = sniff_code
        self.diagnostics: list[Diagnostic] = []
        self._ignored: frozenset[str] = frozenset()

    def error(self, message: str, token: Token, code: str, data: Iterable[object] = ()) -> None:
        """Record an error at *token* unless *code* is suppressed."""
        if code in self._ignored:
            logger.debug("Suppressed %s at %s:%d", code, self.file_path, token.line)
            return

        args = tuple(data)
        self.diagnostics.append(
            Diagnostic(
                file_path=self.file_path,
                line=token.line,
                column=token.column,
                code=f"{self.sniff_code}.{code}",
                message=message % args if args else message,
            )
        )

    def report(self, finding: Finding, token: Token) -> None:
        self.error(finding.message, token, finding.code, finding.data)

    @contextmanager
    def suppressing(self, codes: Iterable[str]) -> Iterator[None]:
        """Drop the given short codes for the duration of the block."""
        previous = self._ignored
        self._ignored = frozenset(codes)
        try:
            yield
        finally:
            self._ignored = previous
