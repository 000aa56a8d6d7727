"""
Screener Engine - rule evaluation for patient-assistance screeners.

This package evaluates consumer answers against a versioned screener
definition and produces a clinical-safety outcome: ok_to_use,
ask_a_doctor or do_not_use.
"""

__version__ = "0.1.0"

from screener_engine.runtime import (
    DefinitionLoadError,
    ScreenerEngine,
    evaluate,
    evaluate_condition,
    get_outcome_summary,
    load_answers,
    load_definition,
    validate_answers,
)
from screener_engine.schemas import EvaluationResult, Outcome, ScreenerDefinition
from screener_engine.validation import lint_definition

__all__ = [
    "DefinitionLoadError",
    "EvaluationResult",
    "Outcome",
    "ScreenerDefinition",
    "ScreenerEngine",
    "evaluate",
    "evaluate_condition",
    "get_outcome_summary",
    "lint_definition",
    "load_answers",
    "load_definition",
    "validate_answers",
]
