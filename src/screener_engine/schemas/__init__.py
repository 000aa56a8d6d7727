"""Pydantic schemas for screener definitions and evaluation results."""

from screener_engine.schemas.evaluation import (
    AnswerValidationResult,
    EvaluationResult,
    MatchedRule,
)
from screener_engine.schemas.screener import (
    SAFE_DEFAULT_OUTCOME,
    Outcome,
    Question,
    QuestionType,
    QuestionValidation,
    Rule,
    ScreenerDefinition,
    ScreenerLogic,
)

__all__ = [
    "AnswerValidationResult",
    "EvaluationResult",
    "MatchedRule",
    "Outcome",
    "Question",
    "QuestionType",
    "QuestionValidation",
    "Rule",
    "SAFE_DEFAULT_OUTCOME",
    "ScreenerDefinition",
    "ScreenerLogic",
]
