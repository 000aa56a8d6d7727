"""Root Typer application for the ``screener`` command."""

import typer

from screener_engine import __version__

app = typer.Typer(
    name="screener",
    help="Run screener definitions against consumer answers.",
    epilog="Exit status is 1 when a definition cannot be loaded, answers fail "
    "validation, lint fails or a condition does not compile.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=False,
)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(f"screener-engine {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log rule matching at debug level"),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Print the outcome line only, log warnings and errors"
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Write results as JSON to stdout for piping"
    ),
    version: bool = typer.Option(
        False, "--version", callback=_show_version, is_eager=True, help="Show the engine version"
    ),
):
    """Evaluate answer sets, validate answers and lint screener definitions.

    Definitions and answers are read from .json, .yaml or .yml files.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["json"] = json_output
