"""Shared CLI utilities."""

import logging
from pathlib import Path
from typing import Any, Dict

from rich.logging import RichHandler

from screener_engine.runtime.definition_loader import (
    DefinitionLoadError,
    load_answers,
    load_definition,
)
from screener_engine.schemas.screener import ScreenerDefinition
from screener_engine.startup import StartupState
from screener_engine.startup import ensure_initialized as _ensure_initialized


logger = logging.getLogger(__name__)


def ensure_initialized() -> StartupState:
    """Initialize environment and settings."""
    try:
        return _ensure_initialized()
    except ValueError as e:
        from screener_engine.cli._console import print_err
        print_err(str(e))
        raise SystemExit(1)


def setup_logging(*, verbose: bool = False, quiet: bool = False, default_level: str = "INFO") -> None:
    """Configure logging with a Rich handler on stderr."""
    from screener_engine.cli._console import console

    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.getLevelName(default_level)

    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def setup_command(ctx) -> StartupState:
    """Common preamble: initialize, then configure logging from flags and settings."""
    state = ensure_initialized()
    # JSON output must stay parseable, keep routine logs out of the way
    quiet = ctx.obj["quiet"] or ctx.obj["json"]
    setup_logging(
        verbose=ctx.obj["verbose"],
        quiet=quiet,
        default_level=state.settings.log_level,
    )
    return state


def load_definition_or_exit(path: Path) -> ScreenerDefinition:
    """Load a definition file, exiting with status 1 on failure."""
    from screener_engine.cli._console import print_err

    try:
        return load_definition(path)
    except DefinitionLoadError as e:
        print_err(str(e))
        raise SystemExit(1)


def load_answers_or_exit(path: Path) -> Dict[str, Any]:
    """Load an answers file, exiting with status 1 on failure."""
    from screener_engine.cli._console import print_err

    try:
        return load_answers(path)
    except DefinitionLoadError as e:
        print_err(str(e))
        raise SystemExit(1)
