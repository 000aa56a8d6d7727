"""Publish-time checks for screener definitions."""

from screener_engine.validation.definition_linter import (
    LintReport,
    LintViolation,
    Severity,
    ViolationType,
    lint_definition,
)

__all__ = [
    "LintReport",
    "LintViolation",
    "Severity",
    "ViolationType",
    "lint_definition",
]
