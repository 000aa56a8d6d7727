"""CLI package - Typer-based command-line interface.

Usage:
    screener --help
    python -m screener_engine.cli lint --help
"""

from screener_engine.cli._app import app

# Register command modules (side-effect imports)
import screener_engine.cli.cmd_evaluate  # noqa: F401
import screener_engine.cli.cmd_lint  # noqa: F401
import screener_engine.cli.cmd_condition  # noqa: F401

__all__ = ["app"]
