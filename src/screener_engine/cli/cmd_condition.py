"""Check-condition command - compile a single rule condition."""

from pathlib import Path
from typing import Optional

import typer

from screener_engine.cli._app import app
from screener_engine.cli._common import load_answers_or_exit, setup_command
from screener_engine.cli._console import output_result, print_err
from screener_engine.runtime.conditions import (
    ConditionError,
    compile_condition,
    interpret,
    operand_to_dict,
    referenced_identifiers,
)
from screener_engine.utils.json_logic_transpiler import to_standard_json_logic


@app.command("check-condition", help="Compile a condition and optionally evaluate it.")
def check_condition_cmd(
    ctx: typer.Context,
    condition: str = typer.Argument(..., help="Condition, e.g. \"q1 == 'yes' && ldl > 130\""),
    answers_path: Optional[Path] = typer.Option(
        None, "--answers", help="Answers file to evaluate the condition against"
    ),
):
    """Print the compiled {op, args} tree and its JSON Logic form; exit 1 if invalid."""
    setup_command(ctx)

    try:
        tree = compile_condition(condition)
    except ConditionError as e:
        print_err(f"Invalid condition: {e}")
        raise SystemExit(1)

    data = {
        "condition": condition,
        "tree": operand_to_dict(tree),
        "logic": to_standard_json_logic(tree),
        "identifiers": referenced_identifiers(tree),
    }

    if answers_path is not None:
        answers = load_answers_or_exit(answers_path)
        try:
            data["value"] = interpret(tree, answers)
        except ConditionError as e:
            # The engine treats this rule as not matching
            data["value"] = False
            data["error"] = str(e)

    output_result(data, ctx=ctx, title="Condition")
