"""
Answer Validator - completeness and format checks for consumer answers.

Runs once per evaluation, before any rule is evaluated. Incomplete or
malformed answer sets never reach the outcome resolver.
"""

import logging
import re
from functools import lru_cache
from typing import Any, Dict, List, Mapping, Optional

from screener_engine.schemas.evaluation import AnswerValidationResult
from screener_engine.schemas.screener import Question, QuestionType, ScreenerDefinition
from screener_engine.utils.number_parsing import format_number, parse_number, stringify_answer

logger = logging.getLogger(__name__)

MSG_INVALID_NUMBER = "Must be a valid number"
MSG_INVALID_FORMAT = "Invalid format"
MSG_INVALID_OPTION = "Invalid option selected"


@lru_cache(maxsize=256)
def _compile_pattern(pattern: str) -> Optional["re.Pattern[str]"]:
    try:
        return re.compile(pattern)
    except re.error as e:
        logger.warning(f"Invalid answer pattern {pattern!r}: {e}")
        return None


def _is_blank(answer: Any) -> bool:
    """Absent, null, empty string, or an empty multi-select."""
    if answer is None or answer == "":
        return True
    return isinstance(answer, (list, tuple)) and len(answer) == 0


def _check_numeric(question: Question, answer: Any) -> Optional[str]:
    value = parse_number(answer)
    if value is None:
        return MSG_INVALID_NUMBER

    rules = question.validation
    if rules is None:
        return None

    # Both bounds are checked; with min > max the max message wins
    error = None
    if rules.min is not None and value < rules.min:
        error = f"Must be at least {format_number(rules.min)}"
    if rules.max is not None and value > rules.max:
        error = f"Must be at most {format_number(rules.max)}"
    return error


def _check_text(question: Question, answer: Any) -> Optional[str]:
    if question.validation is None or not question.validation.regex:
        return None
    pattern = _compile_pattern(question.validation.regex)
    if pattern is None or not pattern.search(stringify_answer(answer)):
        return MSG_INVALID_FORMAT
    return None


def _check_choice(question: Question, answer: Any) -> Optional[str]:
    options = question.options or []
    selected = answer if isinstance(answer, (list, tuple)) else [answer]
    if all(stringify_answer(item) in options for item in selected):
        return None
    return MSG_INVALID_OPTION


_TYPE_CHECKS = {
    QuestionType.NUMERIC: _check_numeric,
    QuestionType.TEXT: _check_text,
    QuestionType.MULTIPLE_CHOICE: _check_choice,
}


def validate_answers(
    definition: ScreenerDefinition, answers: Mapping[str, Any]
) -> AnswerValidationResult:
    """
    Check that every required question is answered and every answer is well formed.

    Questions are visited in document order. A missing required answer is
    recorded and no further checks run for that question. yes_no answers
    accept any representation.

    Args:
        definition: Screener definition
        answers: Question id -> answer value

    Returns:
        AnswerValidationResult; ``missing_required`` and ``validation_errors``
        are only set when non-empty
    """
    missing_required: List[str] = []
    validation_errors: Dict[str, str] = {}

    for question in definition.questions:
        answer = answers.get(question.id)

        if question.required and _is_blank(answer):
            if question.id not in missing_required:
                missing_required.append(question.id)
            continue

        if answer is None:
            continue

        check = _TYPE_CHECKS.get(question.type)
        if check is None:
            continue

        error = check(question, answer)
        if error:
            validation_errors[question.id] = error

    if missing_required or validation_errors:
        logger.debug(
            f"Answer validation failed: missing={missing_required} errors={validation_errors}"
        )

    return AnswerValidationResult(
        valid=not missing_required and not validation_errors,
        missing_required=missing_required or None,
        validation_errors=validation_errors or None,
    )
