"""lint-conventions コマンドラインインターフェース。"""

import asyncio
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger
from pydantic import ValidationError
from rich.console import Console

from convention_checker.config import CheckerConfig
from convention_checker.log import configure_logging
from convention_checker.models.errors import CheckerError
from convention_checker.models.rule import RuleSet
from convention_checker.registry.rules import load_rules
from convention_checker.report.formatters import OUTPUT_FORMATS, format_report
from convention_checker.services.checker import ConventionChecker

EXIT_PASS = 0
EXIT_BLOCKED = 1
EXIT_INTERNAL_ERROR = 2

app = typer.Typer(
    name="lint-conventions",
    help="Check a Laravel/Filament project against its directory and architecture conventions.",
    add_completion=False,
    pretty_exceptions_enable=False,
)

err_console = Console(stderr=True, highlight=False)


def _apply_disabled(rules: RuleSet, disable: str) -> RuleSet:
    disabled_ids = {r.strip() for r in disable.split(",") if r.strip()}
    if not disabled_ids:
        return rules
    unknown = disabled_ids - set(rules.ids)
    if unknown:
        err_console.print(
            f"[yellow]Unknown rule ID(s): {', '.join(sorted(unknown))}[/yellow]  "
            f"Known: {', '.join(rules.ids)}",
            markup=True,
        )
    return rules.without(disabled_ids)


@app.command()
def lint(
    root_path: Annotated[Path, typer.Argument(help="Root directory of the Laravel project")],
    fail_fast: Annotated[
        bool,
        typer.Option("--fail-fast", help="Stop dispatching files after the first blocking violation"),
    ] = False,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format (text, json)"),
    ] = "text",
    rules_path: Annotated[
        Path | None,
        typer.Option("--rules", help="Rule definition file or directory (defaults to config/rules.yaml)"),
    ] = None,
    disable: Annotated[
        str,
        typer.Option("--disable", "-d", help="Comma-separated rule IDs to skip"),
    ] = "",
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Log level: debug|info|warning|error"),
    ] = None,
) -> None:
    """Lint ROOT_PATH and exit 0 on pass, 1 on blocking violations, 2 on internal errors.

    Examples
    --------
    lint-conventions ./my-app
    lint-conventions ./my-app --format json
    lint-conventions ./my-app --fail-fast --disable one-route-per-line
    """
    try:
        config = CheckerConfig()
        configure_logging(log_level or config.log_level)
    except (ValidationError, ValueError) as e:
        err_console.print(f"error: invalid configuration: {e}", markup=False)
        raise typer.Exit(EXIT_INTERNAL_ERROR) from e

    if output_format not in OUTPUT_FORMATS:
        err_console.print(f"Unknown format '{output_format}'. Choose from: {', '.join(OUTPUT_FORMATS)}", markup=False)
        raise typer.Exit(EXIT_INTERNAL_ERROR)

    try:
        rules = load_rules(rules_path or config.resolved_rules_path)
        rules = _apply_disabled(rules, disable)
        checker = ConventionChecker(rules, max_workers=config.max_workers)
        report = asyncio.run(checker.check(root_path, fail_fast=fail_fast))
    except CheckerError as e:
        logger.debug("Aborting: {}", e)
        err_console.print(f"error: {e}", markup=False)
        raise typer.Exit(EXIT_INTERNAL_ERROR) from e

    output = format_report(report, output_format)
    if output:
        typer.echo(output)

    if output_format == "text":
        _print_summary(report.passed, report.block_count, report.warn_count, report.files_checked)

    raise typer.Exit(EXIT_PASS if report.passed else EXIT_BLOCKED)


def _print_summary(passed: bool, block_count: int, warn_count: int, files_checked: int) -> None:
    status = "[green]PASS[/green]" if passed else "[red]FAIL[/red]"
    err_console.print(
        f"{status} {files_checked} files checked, {block_count} blocking, {warn_count} warnings",
        markup=True,
    )


def main() -> None:
    """lint-conventions エントリポイント。"""
    app()


if __name__ == "__main__":
    main()
