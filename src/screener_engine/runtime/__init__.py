"""
Runtime components of the screener rule evaluation engine.

1. Condition Evaluator - conditions
2. Answer Validator - answer_validator
3. Outcome Resolver - outcome_resolver
4. Engine Facade - engine (summaries in result_interpreter)

Plus loading of definitions and answer sets from disk (definition_loader).
"""

from screener_engine.runtime.conditions import (
    UNDEFINED,
    ConditionError,
    ConditionSyntaxError,
    ConditionTypeError,
    LogicNode,
    compile_condition,
    evaluate_condition,
)
from screener_engine.runtime.definition_loader import (
    DefinitionLoadError,
    load_answers,
    load_definition,
)
from screener_engine.runtime.engine import ScreenerEngine, evaluate, validate_answers
from screener_engine.runtime.outcome_resolver import resolve_outcome
from screener_engine.runtime.result_interpreter import get_outcome_summary

__all__ = [
    "UNDEFINED",
    "ConditionError",
    "ConditionSyntaxError",
    "ConditionTypeError",
    "DefinitionLoadError",
    "LogicNode",
    "ScreenerEngine",
    "compile_condition",
    "evaluate",
    "evaluate_condition",
    "get_outcome_summary",
    "load_answers",
    "load_definition",
    "resolve_outcome",
    "validate_answers",
]
