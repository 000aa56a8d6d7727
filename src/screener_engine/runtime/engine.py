"""
Engine Facade - composes validation, rule resolution and summaries.

Responsibility: the single entry point used by the consumer-session
workflow. ``evaluate`` is a pure function of its two inputs: no I/O, no
shared mutable state, safe to call concurrently.
"""

import logging
from typing import Any, Mapping, Union

from screener_engine.runtime import conditions
from screener_engine.runtime.answer_validator import validate_answers as _validate_answers
from screener_engine.runtime.outcome_resolver import resolve_outcome
from screener_engine.runtime.result_interpreter import get_outcome_summary
from screener_engine.schemas.evaluation import AnswerValidationResult, EvaluationResult
from screener_engine.schemas.screener import SAFE_DEFAULT_OUTCOME, ScreenerDefinition

logger = logging.getLogger(__name__)

DefinitionInput = Union[ScreenerDefinition, Mapping[str, Any]]


def validate_answers(
    definition: DefinitionInput, answers: Mapping[str, Any]
) -> AnswerValidationResult:
    """Run only the answer validator."""
    return _validate_answers(ScreenerDefinition.coerce(definition), answers)


def evaluate(definition: DefinitionInput, answers: Mapping[str, Any]) -> EvaluationResult:
    """
    Evaluate consumer answers against a screener definition.

    Incomplete or malformed answers short-circuit to ``ask_a_doctor`` with
    ``missing_required``/``validation_errors`` set; such a result is not a
    final clinical decision. Otherwise the first matching rule, or the
    default outcome, decides.

    Args:
        definition: ScreenerDefinition or raw ``screenerJson`` mapping
        answers: Question id -> answer value

    Returns:
        EvaluationResult

    Raises:
        pydantic.ValidationError: If a raw definition is structurally invalid
    """
    definition = ScreenerDefinition.coerce(definition)

    validation = _validate_answers(definition, answers)
    if not validation.valid:
        return EvaluationResult(
            outcome=SAFE_DEFAULT_OUTCOME,
            missing_required=validation.missing_required,
            validation_errors=validation.validation_errors,
        )

    return resolve_outcome(definition, answers)


class ScreenerEngine:
    """
    Object form of the engine, bound to one screener definition.

    Holds no state besides the definition snapshot, so one instance can
    serve any number of sessions.
    """

    def __init__(self, definition: DefinitionInput):
        self.definition = ScreenerDefinition.coerce(definition)

    def validate_answers(self, answers: Mapping[str, Any]) -> AnswerValidationResult:
        return _validate_answers(self.definition, answers)

    def evaluate(self, answers: Mapping[str, Any]) -> EvaluationResult:
        return evaluate(self.definition, answers)

    def evaluate_condition(self, condition: str, answers: Mapping[str, Any]) -> bool:
        return conditions.evaluate_condition(condition, answers)

    def summarize(self, answers: Mapping[str, Any]) -> str:
        """Evaluate and return the consumer-facing summary."""
        return get_outcome_summary(self.evaluate(answers))
