"""
Outcome Resolver - first-match-wins rule iteration.

Rules are evaluated in authored order. The first rule whose condition holds
decides the outcome and no later rule is evaluated. When nothing matches,
the definition's default outcome applies.
"""

import logging
from typing import Any, Mapping

from screener_engine.runtime import conditions
from screener_engine.schemas.evaluation import EvaluationResult, MatchedRule
from screener_engine.schemas.screener import ScreenerDefinition

logger = logging.getLogger(__name__)


def resolve_outcome(
    definition: ScreenerDefinition, answers: Mapping[str, Any]
) -> EvaluationResult:
    """
    Resolve the outcome for an already validated answer set.

    A rule that fails to evaluate counts as not matching; evaluation
    continues with the next rule, so one malformed rule never hides the
    others or the default outcome.

    Args:
        definition: Screener definition
        answers: Validated answers

    Returns:
        EvaluationResult with ``matched_rule`` set only when a rule matched
    """
    rules = definition.logic.rules

    for index, rule in enumerate(rules):
        try:
            matches = conditions.evaluate_condition(rule.condition, answers)
        except Exception:
            logger.exception(f"Error evaluating rule {index} ({rule.condition!r}), skipping")
            continue

        if matches:
            logger.debug(f"Rule {index} matched: {rule.condition!r} -> {rule.outcome.value}")
            return EvaluationResult(
                outcome=rule.outcome,
                matched_rule=MatchedRule(condition=rule.condition, message=rule.message),
            )

    logger.debug(
        f"No rule matched ({len(rules)} evaluated), using default outcome "
        f"{definition.logic.default_outcome.value}"
    )
    return EvaluationResult(outcome=definition.logic.default_outcome)
