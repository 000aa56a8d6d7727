"""Pydantic models for versioned screener definitions.

A screener definition is the ``screenerJson`` document persisted with every
screener version: an ordered list of questions plus the conditional logic
that maps answers to a clinical-safety outcome. The engine treats it as a
read-only snapshot, so all models here are frozen.
"""

from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# ── Enums ────────────────────────────────────────────────────────────


class Outcome(str, Enum):
    """Clinical-eligibility verdict produced by a screener."""

    OK_TO_USE = "ok_to_use"
    ASK_A_DOCTOR = "ask_a_doctor"
    DO_NOT_USE = "do_not_use"


# Returned whenever evaluation cannot complete.
SAFE_DEFAULT_OUTCOME = Outcome.ASK_A_DOCTOR


class QuestionType(str, Enum):
    """Answer type of a screener question."""

    YES_NO = "yes_no"
    MULTIPLE_CHOICE = "multiple_choice"
    NUMERIC = "numeric"
    TEXT = "text"


# ── Models ───────────────────────────────────────────────────────────


class QuestionValidation(BaseModel):
    """Numeric bounds or text pattern for a single question."""

    model_config = ConfigDict(frozen=True)

    min: Optional[Union[int, float]] = Field(
        default=None, description="Inclusive lower bound for numeric answers"
    )
    max: Optional[Union[int, float]] = Field(
        default=None, description="Inclusive upper bound for numeric answers"
    )
    regex: Optional[str] = Field(
        default=None, description="Pattern a text answer must match"
    )


class Question(BaseModel):
    """A single screener question."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Question id, referenced by rule conditions", min_length=1)
    type: QuestionType = Field(description="Answer type")
    text: str = Field(description="Question text shown to the consumer")
    required: bool = Field(default=True, description="Whether an answer is mandatory")
    options: Optional[List[str]] = Field(
        default=None, description="Allowed values for multiple_choice questions"
    )
    validation: Optional[QuestionValidation] = Field(
        default=None, description="Type-specific answer constraints"
    )


class Rule(BaseModel):
    """Condition → outcome mapping. Rules are evaluated in authored order."""

    model_config = ConfigDict(frozen=True)

    # Stored as authored; a condition that is not a string never matches
    condition: Any = Field(description="Boolean expression, e.g. \"q1 == 'yes' && q5_ldl > 130\"")
    outcome: Outcome = Field(description="Outcome when the condition holds")
    message: Optional[str] = Field(default=None, description="Human-readable explanation")


class ScreenerLogic(BaseModel):
    """Ordered rules plus the outcome used when none of them match."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    rules: List[Rule] = Field(default_factory=list)
    default_outcome: Outcome = Field(alias="defaultOutcome")


class ScreenerDefinition(BaseModel):
    """Complete ``screenerJson`` document for one screener version."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(min_length=1)
    description: Optional[str] = None
    questions: List[Question] = Field(default_factory=list)
    logic: ScreenerLogic
    disclaimers: Optional[List[str]] = Field(
        default=None, description="Display-only text, never evaluated"
    )

    @property
    def question_ids(self) -> List[str]:
        return [q.id for q in self.questions]

    def get_question(self, question_id: str) -> Optional[Question]:
        for question in self.questions:
            if question.id == question_id:
                return question
        return None

    @classmethod
    def coerce(cls, value: Any) -> "ScreenerDefinition":
        """Accept either a model instance or a raw ``screenerJson`` mapping."""
        if isinstance(value, cls):
            return value
        return cls.model_validate(value)

    def to_dict(self) -> dict:
        """Serialize back to the persisted ``screenerJson`` shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
