"""Pydantic models for engine output.

``EvaluationResult`` is transient: the consumer-session workflow persists it
and decides whether to issue a verification code. A result carrying
``missing_required`` or ``validation_errors`` is not a final clinical
decision, even though its outcome is ``ask_a_doctor``.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from screener_engine.schemas.screener import Outcome


class MatchedRule(BaseModel):
    """The rule that decided the outcome."""

    model_config = ConfigDict(frozen=True)

    condition: str
    message: Optional[str] = None


class AnswerValidationResult(BaseModel):
    """Completeness and format check of an answer set."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    valid: bool
    missing_required: Optional[List[str]] = Field(default=None, alias="missingRequired")
    validation_errors: Optional[Dict[str, str]] = Field(default=None, alias="validationErrors")


class EvaluationResult(BaseModel):
    """Outcome of evaluating one answer set against one screener definition."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    outcome: Outcome
    matched_rule: Optional[MatchedRule] = Field(default=None, alias="matchedRule")
    missing_required: Optional[List[str]] = Field(default=None, alias="missingRequired")
    validation_errors: Optional[Dict[str, str]] = Field(default=None, alias="validationErrors")

    @property
    def has_validation_failure(self) -> bool:
        return self.missing_required is not None or self.validation_errors is not None

    @property
    def is_final(self) -> bool:
        """False when the outcome only signals an incomplete answer set."""
        return not self.has_validation_failure

    def to_dict(self) -> dict:
        """Serialize with the camelCase keys callers persist."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
