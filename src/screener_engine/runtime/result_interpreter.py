"""
Result Interpreter - translate evaluation results into consumer-facing text.

The engine decides what happened; the interpreter decides how to say it.
"""

from typing import Any, Mapping, Union

from screener_engine.schemas.evaluation import EvaluationResult
from screener_engine.schemas.screener import Outcome

SUMMARY_INCOMPLETE = "Please complete all required questions correctly."
SUMMARY_UNKNOWN = "Unable to determine outcome. Please consult with a healthcare provider."

OUTCOME_SUMMARIES = {
    Outcome.OK_TO_USE: (
        "Based on your answers, this medication may be appropriate for you. "
        "A verification code has been generated."
    ),
    Outcome.ASK_A_DOCTOR: (
        "Based on your answers, please consult with a healthcare provider "
        "before using this medication."
    ),
    Outcome.DO_NOT_USE: (
        "Based on your answers, this medication is not recommended for you. "
        "Please consult with a healthcare provider."
    ),
}


def _read(result: Union[EvaluationResult, Mapping[str, Any]], attr: str, key: str) -> Any:
    if isinstance(result, Mapping):
        return result.get(key, result.get(attr))
    return getattr(result, attr, None)


def get_outcome_summary(result: Union[EvaluationResult, Mapping[str, Any]]) -> str:
    """
    Map an evaluation result to one of the fixed summary strings.

    Accepts an EvaluationResult or its serialized dict form (camelCase or
    snake_case keys).
    """
    # Presence of either field marks a failed validation, even when empty
    if (
        _read(result, "missing_required", "missingRequired") is not None
        or _read(result, "validation_errors", "validationErrors") is not None
    ):
        return SUMMARY_INCOMPLETE

    try:
        outcome = Outcome(_read(result, "outcome", "outcome"))
    except (ValueError, TypeError):
        return SUMMARY_UNKNOWN

    return OUTCOME_SUMMARIES.get(outcome, SUMMARY_UNKNOWN)
