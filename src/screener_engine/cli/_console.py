"""Rich consoles and screener-specific output helpers."""

import json as json_mod
from typing import Dict, List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from screener_engine.schemas.evaluation import EvaluationResult
from screener_engine.schemas.screener import Outcome
from screener_engine.validation.definition_linter import LintViolation, Severity

# Human-readable output goes to stderr; stdout carries --json data only
console = Console(stderr=True)
stdout_console = Console()

OUTCOME_STYLES = {
    Outcome.OK_TO_USE: "green",
    Outcome.ASK_A_DOCTOR: "yellow",
    Outcome.DO_NOT_USE: "red",
}


def print_ok(msg: str) -> None:
    console.print(f"[green]✓[/green] {escape(msg)}")


def print_err(msg: str) -> None:
    console.print(f"[red]✗[/red] {escape(msg)}")


def print_warn(msg: str) -> None:
    console.print(f"[yellow]![/yellow] {escape(msg)}")


def print_outcome(result: EvaluationResult) -> None:
    """Outcome line colored by severity; incomplete answers get a warning marker."""
    style = OUTCOME_STYLES.get(result.outcome, "white")
    outcome = f"[{style}]{result.outcome.value}[/{style}]"
    if result.is_final:
        console.print(f"[green]✓[/green] Outcome: {outcome}", highlight=False)
    else:
        console.print(
            f"[yellow]![/yellow] Outcome undetermined (answers incomplete): {outcome}",
            highlight=False,
        )


def print_answer_issues(
    missing_required: Optional[List[str]],
    validation_errors: Optional[Dict[str, str]],
) -> None:
    """List unanswered required questions, then malformed answers."""
    for question_id in missing_required or []:
        console.print(f"  [red]Missing:[/red] {escape(question_id)}", highlight=False)
    for question_id, error in (validation_errors or {}).items():
        console.print(f"  [red]Invalid:[/red] {escape(f'{question_id}: {error}')}", highlight=False)


def print_violation(violation: LintViolation) -> None:
    """One lint finding, prefixed with the rule or question it belongs to."""
    where = ""
    if violation.rule_index is not None:
        where = f"rule[{violation.rule_index}] "
    elif violation.question_id is not None:
        where = f"question[{violation.question_id}] "
    style = "red" if violation.severity == Severity.CRITICAL else "yellow"
    detail = escape(f"{where}{violation.type.value}: {violation.message}")
    console.print(f"  [{style}]{violation.severity.value}[/{style}] {detail}", highlight=False)


def output_result(data: dict, *, ctx: typer.Context, title: str = "") -> None:
    """Print a result document as JSON (stdout) or a Rich panel (stderr)."""
    if ctx.obj.get("json"):
        stdout_console.print_json(data=data)
        return
    formatted = json_mod.dumps(data, indent=2, ensure_ascii=False, default=str)
    if title:
        console.print(Panel(formatted, title=title, border_style="blue"))
    else:
        console.print(formatted)
