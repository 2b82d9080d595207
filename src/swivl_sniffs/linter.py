"""Linter orchestrator: load config, parse PHP files, run the sniff, format results."""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from swivl_sniffs.config import DEFAULT_CONFIG_NAME, load_config
from swivl_sniffs.sniffs.doctrine import DoctrineEntitySniff
from swivl_sniffs.sniffs.report import Reporter
from swivl_sniffs.source.php_parser import SourceError, get_php_language, parse_php_file

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from swivl_sniffs.config import SniffConfig
    from swivl_sniffs.sniffs.report import Diagnostic

logger = logging.getLogger(__name__)

PHP_SUFFIX = ".php"
_SKIP_DIRS: frozenset[str] = frozenset({".git", "vendor", "node_modules", "var"})


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class LintError(Exception):
    """Raised when lint encounters a configuration error."""


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass
class LintResult:
    """Result of a lint run."""

    diagnostics: list[Diagnostic] = field(default_factory=list)
    files_scanned: int = 0
    files_skipped: int = 0
    elapsed_ms: float = 0.0


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def iter_php_files(paths: Iterable[Path]) -> Iterator[Path]:
    """Yield ``.php`` files under *paths* in sorted order, skipping vendor dirs."""
    for path in paths:
        if path.is_file():
            yield path
            continue
        for candidate in sorted(path.rglob(f"*{PHP_SUFFIX}")):
            if not candidate.is_file():
                continue
            if any(part in _SKIP_DIRS for part in candidate.relative_to(path).parts):
                continue
            yield candidate


def resolve_config(config_path: Path | None) -> SniffConfig:
    """Load *config_path*, or ``.swivl-sniffs.yml`` in the current directory.

    Raises
    ------
    LintError
        When the configuration file is invalid.
    """
    if config_path is None:
        config_path = Path.cwd() / DEFAULT_CONFIG_NAME
    try:
        return load_config(config_path)
    except ValueError as exc:
        msg = f"Invalid configuration: {exc}"
        raise LintError(msg) from exc


def lint(paths: Iterable[Path], *, config: SniffConfig) -> LintResult:
    """Run the Doctrine entity sniff over every PHP file under *paths*.

    Unreadable files are logged and skipped.

    Raises
    ------
    LintError
        When the tree-sitter PHP grammar is not installed.
    """
    start = time.monotonic()

    if get_php_language() is None:
        msg = "tree-sitter-php is not installed; cannot parse PHP sources"
        raise LintError(msg)

    sniff = DoctrineEntitySniff(config)
    result = LintResult()

    for file_path in iter_php_files(paths):
        try:
            source = parse_php_file(file_path)
        except SourceError as exc:
            logger.warning("Skipping %s: %s", file_path, exc)
            result.files_skipped += 1
            continue

        reporter = Reporter(source.path, sniff.sniff_code)
        sniff.process_file(source, reporter)
        logger.debug("%s: %d diagnostics", file_path, len(reporter.diagnostics))
        result.diagnostics.extend(reporter.diagnostics)
        result.files_scanned += 1

    result.elapsed_ms = (time.monotonic() - start) * 1000
    return result


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------


def format_rich(result: LintResult) -> str:
    """Format a LintResult as human-readable text grouped by file.

    Example output::

        src/Entity/User.php
          12:5  ColumnUnderscored  Column name must be underscored variable name; ...

        1 violation found (3 files scanned, 0.1s)
    """
    lines: list[str] = []
    elapsed_str = f"{result.elapsed_ms / 1000:.1f}s"

    current_file: str | None = None
    for d in result.diagnostics:
        if d.file_path != current_file:
            if current_file is not None:
                lines.append("")
            lines.append(d.file_path)
            current_file = d.file_path
        lines.append(f"  {d.line}:{d.column}  {d.short_code}  {d.message}")

    if result.diagnostics:
        lines.append("")
        count = len(result.diagnostics)
        noun = "violation" if count == 1 else "violations"
        lines.append(
            f"✗ {count} {noun} found ({result.files_scanned} files scanned, {elapsed_str})"
        )
    else:
        lines.append(
            f"✓ No violations found ({result.files_scanned} files scanned, {elapsed_str})"
        )

    return "\n".join(lines)


def format_json(result: LintResult) -> str:
    """Format a LintResult as structured JSON.

    Returns a JSON string with ``diagnostics`` array and ``summary`` object.
    """
    diagnostics_list: list[dict[str, object]] = [
        {
            "file_path": d.file_path,
            "line": d.line,
            "column": d.column,
            "code": d.code,
            "severity": d.severity,
            "message": d.message,
        }
        for d in result.diagnostics
    ]

    output: dict[str, object] = {
        "diagnostics": diagnostics_list,
        "summary": {
            "violations_count": len(result.diagnostics),
            "files_scanned": result.files_scanned,
            "files_skipped": result.files_skipped,
            "elapsed_ms": result.elapsed_ms,
        },
    }

    return json.dumps(output, indent=2)


def format_porcelain(result: LintResult) -> str:
    """Format a LintResult as one line per diagnostic.

    Format: ``file_path:line:column:code:message``

    Returns empty string when there are no diagnostics.
    """
    return "\n".join(
        f"{d.file_path}:{d.line}:{d.column}:{d.code}:{d.message}" for d in result.diagnostics
    )
