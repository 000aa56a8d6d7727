"""Evaluate and validate commands - run answers through a screener definition."""

from pathlib import Path

import typer
from rich.markup import escape

from screener_engine.cli._app import app
from screener_engine.cli._common import (
    load_answers_or_exit,
    load_definition_or_exit,
    setup_command,
)
from screener_engine.cli._console import (
    console,
    output_result,
    print_answer_issues,
    print_err,
    print_ok,
    print_outcome,
)
from screener_engine.runtime.engine import evaluate, validate_answers
from screener_engine.runtime.result_interpreter import get_outcome_summary


@app.command("evaluate", help="Evaluate an answer set against a screener definition.")
def evaluate_cmd(
    ctx: typer.Context,
    definition_path: Path = typer.Argument(..., help="Screener definition (.json/.yaml)"),
    answers_path: Path = typer.Argument(..., help="Answers file (.json/.yaml)"),
):
    """Print the evaluation result and its consumer-facing summary."""
    setup_command(ctx)

    definition = load_definition_or_exit(definition_path)
    answers = load_answers_or_exit(answers_path)

    result = evaluate(definition, answers)
    payload = {
        "result": result.to_dict(),
        "summary": get_outcome_summary(result),
        "final": result.is_final,
    }

    if ctx.obj["json"]:
        output_result(payload, ctx=ctx)
        return

    print_outcome(result)

    if not ctx.obj["quiet"]:
        if result.matched_rule is not None:
            console.print(f"  [dim]Matched rule:[/dim] {escape(result.matched_rule.condition)}")
            if result.matched_rule.message:
                console.print(f"  [dim]Message:[/dim] {escape(result.matched_rule.message)}")
        elif result.is_final:
            console.print("  [dim]No rule matched, default outcome applied[/dim]")
        print_answer_issues(result.missing_required, result.validation_errors)
        console.print(f"\n{payload['summary']}")


@app.command("validate", help="Check answers for completeness and format only.")
def validate_cmd(
    ctx: typer.Context,
    definition_path: Path = typer.Argument(..., help="Screener definition (.json/.yaml)"),
    answers_path: Path = typer.Argument(..., help="Answers file (.json/.yaml)"),
):
    """Run the answer validator; exit 1 when answers are incomplete or malformed."""
    setup_command(ctx)

    definition = load_definition_or_exit(definition_path)
    answers = load_answers_or_exit(answers_path)

    validation = validate_answers(definition, answers)

    if ctx.obj["json"]:
        output_result(
            validation.model_dump(mode="json", by_alias=True, exclude_none=True), ctx=ctx
        )
    elif validation.valid:
        print_ok("Answers are complete and valid")
    else:
        print_err("Answers are incomplete or invalid")
        print_answer_issues(validation.missing_required, validation.validation_errors)

    if not validation.valid:
        raise SystemExit(1)
