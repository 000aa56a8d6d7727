"""Lint command - check a screener definition before publishing."""

from pathlib import Path

import typer

from screener_engine.cli._app import app
from screener_engine.cli._common import load_definition_or_exit, setup_command
from screener_engine.cli._console import (
    output_result,
    print_err,
    print_ok,
    print_violation,
    print_warn,
)
from screener_engine.validation.definition_linter import lint_definition


@app.command("lint", help="Lint a screener definition.")
def lint_cmd(
    ctx: typer.Context,
    definition_path: Path = typer.Argument(..., help="Screener definition (.json/.yaml)"),
    allow_unknown_identifiers: bool = typer.Option(
        False,
        "--allow-unknown-identifiers",
        help="Report identifiers that are not question ids as warnings",
    ),
    fail_on_warning: bool = typer.Option(
        False, "--fail-on-warning", help="Exit non-zero on warnings too"
    ),
):
    """Report syntax, vocabulary and configuration problems; exit 1 on failure."""
    state = setup_command(ctx)
    settings = state.settings

    definition = load_definition_or_exit(definition_path)
    report = lint_definition(
        definition,
        allow_unknown_identifiers=allow_unknown_identifiers or settings.lint_allow_unknown_identifiers,
    )
    fail_on_warning = fail_on_warning or settings.lint_fail_on_warning
    failed = report.has_critical or (fail_on_warning and report.has_warnings)

    if ctx.obj["json"]:
        output_result(report.to_dict(), ctx=ctx)
    else:
        for violation in report.violations:
            print_violation(violation)
        summary = report.summary
        message = (
            f"{summary['total_rules']} rules, {summary['violations']} violations "
            f"({summary['critical_violations']} critical, {summary['warnings']} warnings)"
        )
        if failed:
            print_err(message)
        elif report.violations:
            print_warn(message)
        else:
            print_ok(message)

    if failed:
        raise SystemExit(1)
