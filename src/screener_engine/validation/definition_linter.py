"""
Definition Linter - publish-time guardrail for screener definitions.

The engine never validates a definition's internal consistency at
evaluation time: a condition naming an unknown question simply never
matches. This linter reports such defects before a version is published.

Validates:
- Condition syntax (every rule must compile)
- Vocabulary (identifiers must be question ids)
- Option constraints (comparisons against multiple_choice options)
- Tautologies and rules made unreachable by an always-true rule
- Question configuration (options, bounds, patterns)
"""

import logging
import re
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from screener_engine.runtime.conditions import (
    EQUALITY_OPERATORS,
    RELATIONAL_OPERATORS,
    RESERVED_WORDS,
    ConditionError,
    LogicNode,
    compile_condition,
    is_truthy,
    is_var_node,
)
from screener_engine.schemas.screener import QuestionType, ScreenerDefinition

logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class ViolationType(str, Enum):
    """Types of lint violations."""
    SYNTAX_ERROR = "SYNTAX_ERROR"
    VOCAB_ERROR = "VOCAB_ERROR"
    ENUM_ERROR = "ENUM_ERROR"
    TAUTOLOGY = "TAUTOLOGY"
    UNREACHABLE_RULE = "UNREACHABLE_RULE"
    DEFINITION_ERROR = "DEFINITION_ERROR"


class Severity(str, Enum):
    """Violation severity levels."""
    CRITICAL = "CRITICAL"
    WARNING = "WARNING"


@dataclass
class LintViolation:
    """Structured lint finding."""
    type: ViolationType
    severity: Severity
    message: str
    rule_index: Optional[int] = None
    condition: Optional[Any] = None
    question_id: Optional[str] = None
    variable: Optional[str] = None
    invalid_value: Optional[Any] = None
    location: Optional[str] = None  # path in the compiled condition tree


@dataclass
class LintReport:
    """Complete lint report with summary and violations."""
    summary: Dict[str, int]
    violations: List[LintViolation] = field(default_factory=list)

    @property
    def has_critical(self) -> bool:
        return any(v.severity == Severity.CRITICAL for v in self.violations)

    @property
    def has_warnings(self) -> bool:
        return any(v.severity == Severity.WARNING for v in self.violations)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        violations = []
        for violation in self.violations:
            data = asdict(violation)
            data["type"] = violation.type.value
            data["severity"] = violation.severity.value
            violations.append({k: v for k, v in data.items() if v is not None})
        return {"summary": self.summary, "violations": violations}


def _lint_questions(definition: ScreenerDefinition) -> List[LintViolation]:
    violations = []
    seen_ids = set()

    for question in definition.questions:
        if question.id in seen_ids:
            violations.append(LintViolation(
                type=ViolationType.DEFINITION_ERROR,
                severity=Severity.CRITICAL,
                message=f"Duplicate question id '{question.id}'",
                question_id=question.id,
            ))
        seen_ids.add(question.id)

        if not _IDENTIFIER.match(question.id) or question.id in RESERVED_WORDS:
            violations.append(LintViolation(
                type=ViolationType.DEFINITION_ERROR,
                severity=Severity.WARNING,
                message=f"Question id '{question.id}' cannot be referenced in conditions",
                question_id=question.id,
            ))

        if question.type == QuestionType.MULTIPLE_CHOICE and not question.options:
            violations.append(LintViolation(
                type=ViolationType.DEFINITION_ERROR,
                severity=Severity.CRITICAL,
                message="multiple_choice question has no options; every answer will be rejected",
                question_id=question.id,
            ))

        rules = question.validation
        if rules is None:
            continue

        if rules.min is not None and rules.max is not None and rules.min > rules.max:
            violations.append(LintViolation(
                type=ViolationType.DEFINITION_ERROR,
                severity=Severity.CRITICAL,
                message=f"validation.min ({rules.min}) is greater than validation.max ({rules.max})",
                question_id=question.id,
            ))

        if rules.regex is not None:
            try:
                re.compile(rules.regex)
            except re.error as e:
                violations.append(LintViolation(
                    type=ViolationType.DEFINITION_ERROR,
                    severity=Severity.CRITICAL,
                    message=f"validation.regex does not compile: {e}",
                    question_id=question.id,
                    invalid_value=rules.regex,
                ))

    return violations


def _is_literal(operand: Any) -> bool:
    return not isinstance(operand, LogicNode)


def _lint_node(
    node: LogicNode,
    definition: ScreenerDefinition,
    rule_index: int,
    condition: str,
    allow_unknown_identifiers: bool,
    location: str,
) -> List[LintViolation]:
    """Validate one node of a compiled condition."""
    violations = []

    if is_var_node(node):
        name = node.args[0]
        if definition.get_question(name) is None:
            violations.append(LintViolation(
                type=ViolationType.VOCAB_ERROR,
                severity=Severity.WARNING if allow_unknown_identifiers else Severity.CRITICAL,
                message=f"Identifier '{name}' is not a question id; it will always be undefined",
                rule_index=rule_index,
                condition=condition,
                variable=name,
                location=location,
            ))
        return violations

    if node.op in EQUALITY_OPERATORS + RELATIONAL_OPERATORS:
        left, right = node.args
        if _is_literal(left) and _is_literal(right):
            violations.append(LintViolation(
                type=ViolationType.TAUTOLOGY,
                severity=Severity.WARNING,
                message="Comparison of two literals always evaluates to the same value",
                rule_index=rule_index,
                condition=condition,
                location=location,
            ))

    if node.op in EQUALITY_OPERATORS:
        left, right = node.args
        var_node, value = (left, right) if is_var_node(left) else (right, left)
        if is_var_node(var_node) and isinstance(value, str):
            question = definition.get_question(var_node.args[0])
            if (
                question is not None
                and question.type == QuestionType.MULTIPLE_CHOICE
                and question.options
                and value not in question.options
            ):
                violations.append(LintViolation(
                    type=ViolationType.ENUM_ERROR,
                    severity=Severity.WARNING,
                    message=(
                        f"Value '{value}' is not an option of {question.id}. "
                        f"Valid: {question.options}"
                    ),
                    rule_index=rule_index,
                    condition=condition,
                    variable=question.id,
                    invalid_value=value,
                    location=location,
                ))

    return violations


def _traverse_and_lint(
    operand: Any,
    definition: ScreenerDefinition,
    rule_index: int,
    condition: str,
    allow_unknown_identifiers: bool,
    location: str = "root",
) -> List[LintViolation]:
    """Recursively traverse a compiled condition and collect all violations."""
    if not isinstance(operand, LogicNode):
        return []

    violations = _lint_node(
        operand, definition, rule_index, condition, allow_unknown_identifiers, location
    )
    if operand.op != "var":
        for i, arg in enumerate(operand.args):
            violations.extend(_traverse_and_lint(
                arg, definition, rule_index, condition,
                allow_unknown_identifiers, f"{location}.args[{i}]",
            ))
    return violations


def lint_definition(
    definition: ScreenerDefinition,
    *,
    allow_unknown_identifiers: bool = False,
) -> LintReport:
    """
    Lint a screener definition (in-memory, exhaustive).

    Args:
        definition: Screener definition to check
        allow_unknown_identifiers: Report unknown identifiers as warnings
            instead of critical violations

    Returns:
        LintReport with summary and detailed violations

    Example:
        >>> report = lint_definition(definition)
        >>> if report.has_critical:
        ...     raise SystemExit("Refusing to publish")
    """
    definition = ScreenerDefinition.coerce(definition)
    rules = definition.logic.rules
    violations = _lint_questions(definition)

    if not rules:
        violations.append(LintViolation(
            type=ViolationType.DEFINITION_ERROR,
            severity=Severity.WARNING,
            message=(
                "No rules defined; every complete answer set gets the default "
                f"outcome '{definition.logic.default_outcome.value}'"
            ),
        ))

    always_true_index: Optional[int] = None

    for index, rule in enumerate(rules):
        if always_true_index is not None:
            violations.append(LintViolation(
                type=ViolationType.UNREACHABLE_RULE,
                severity=Severity.WARNING,
                message=f"Rule is unreachable: rule {always_true_index} always matches",
                rule_index=index,
                condition=rule.condition,
            ))

        try:
            tree = compile_condition(rule.condition)
        except ConditionError as e:
            violations.append(LintViolation(
                type=ViolationType.SYNTAX_ERROR,
                severity=Severity.CRITICAL,
                message=f"Condition does not compile: {e}",
                rule_index=index,
                condition=rule.condition,
            ))
            continue

        if _is_literal(tree):
            matches = is_truthy(tree)
            violations.append(LintViolation(
                type=ViolationType.TAUTOLOGY,
                severity=Severity.WARNING,
                message="Condition is a constant and always matches" if matches
                else "Condition is a constant and never matches",
                rule_index=index,
                condition=rule.condition,
            ))
            if matches and always_true_index is None:
                always_true_index = index
            continue

        violations.extend(_traverse_and_lint(
            tree, definition, index, rule.condition, allow_unknown_identifiers
        ))

    flagged_rules = {v.rule_index for v in violations if v.rule_index is not None}
    summary = {
        "total_questions": len(definition.questions),
        "total_rules": len(rules),
        "violations": len(violations),
        "clean_rules": len(rules) - len(flagged_rules),
        "critical_violations": sum(1 for v in violations if v.severity == Severity.CRITICAL),
        "warnings": sum(1 for v in violations if v.severity == Severity.WARNING),
    }

    logger.info(
        f"Lint complete: {summary['violations']} violations found "
        f"({summary['critical_violations']} critical, {summary['warnings']} warnings)"
    )

    return LintReport(summary=summary, violations=violations)
