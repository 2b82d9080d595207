"""swivl-sniffs CLI entry point."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from swivl_sniffs import __version__


@click.group()
@click.version_option(version=__version__, prog_name="swivl-sniffs")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Minimal output (errors only).")
@click.pass_context
def main(ctx: click.Context, *, verbose: bool, quiet: bool) -> None:
    """Swivl sniffs - Doctrine entity mapping checks for PHP sources."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet

    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@main.command()
@click.argument(
    "paths",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, path_type=Path),
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["rich", "json", "porcelain"]),
    default=None,
    help="Output format (default: rich if TTY, porcelain if piped).",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Exit 1 if violations found.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: .swivl-sniffs.yml in the current directory).",
)
@click.pass_context
def check(
    ctx: click.Context,
    paths: tuple[Path, ...],
    *,
    fmt: str | None,
    strict: bool,
    config_path: Path | None,
) -> None:
    """Check Doctrine entity mappings in PHP files.

    Exit codes: 0 = clean or violations without --strict,
    1 = violations with --strict, 2 = configuration error.
    """
    from swivl_sniffs.linter import (
        LintError,
        format_json,
        format_porcelain,
        format_rich,
        lint,
        resolve_config,
    )

    # Resolve output format: explicit flag > TTY detection.
    if fmt is None:
        fmt = "rich" if sys.stdout.isatty() else "porcelain"

    try:
        config = resolve_config(config_path)
        result = lint(paths, config=config)
    except LintError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    formatters = {
        "rich": format_rich,
        "json": format_json,
        "porcelain": format_porcelain,
    }
    output = formatters[fmt](result)
    if output and not (ctx.obj.get("quiet") and not result.diagnostics):
        click.echo(output)

    if strict and result.diagnostics:
        sys.exit(1)


@main.command()
@click.option("--json", "as_json", is_flag=True, help="JSON output.")
def rules(*, as_json: bool) -> None:
    """List the ORM annotations the Doctrine entity sniff checks."""
    from swivl_sniffs.sniffs.doctrine.schema import REFERENCE

    def _type_text(attr_type: str | tuple[str, ...]) -> str:
        return attr_type if isinstance(attr_type, str) else "|".join(attr_type)

    if as_json:
        data = {
            kind.value: {
                "required": list(rule.required),
                "attributes": (
                    None
                    if rule.attributes is None
                    else {name: _type_text(t) for name, t in rule.attributes.items()}
                ),
                "requires": [list(group) for group in rule.requires],
            }
            for kind, rule in REFERENCE.items()
        }
        click.echo(json.dumps(data, ensure_ascii=False, indent=2))
        return

    from rich.console import Console
    from rich.table import Table

    table = Table(title="ORM annotations")
    table.add_column("annotation", style="cyan")
    table.add_column("required")
    table.add_column("attributes")
    table.add_column("requires")
    for kind, rule in REFERENCE.items():
        attributes = (
            "-"
            if rule.attributes is None
            else ", ".join(f"{name}: {_type_text(t)}" for name, t in rule.attributes.items())
        )
        table.add_row(
            kind.value,
            ", ".join(rule.required) or "-",
            attributes or "-",
            "; ".join(" or ".join(group) for group in rule.requires) or "-",
        )
    Console().print(table)
