"""
Condition Evaluator - compiles and interprets rule condition strings.

A condition is a boolean expression over question ids, e.g.::

    q1 == 'yes' && (q5_ldl > 130 || !q7)

Conditions are never handed to a host-language evaluator. They are tokenized,
parsed by a recursive-descent parser into a tree of ``LogicNode`` objects
(the normalized ``{"op": ..., "args": [...]}`` shape), transpiled to standard
JSON Logic and run by ``json_logic.jsonLogic`` against the answer mapping.

Grammar, lowest precedence first:

    or_expr    := and_expr (("||" | "or") and_expr)*
    and_expr   := equality (("&&" | "and") equality)*
    equality   := relational (("==" | "!=" | "===" | "!==") relational)*
    relational := unary (("<" | ">" | "<=" | ">=") unary)*
    unary      := ("!" | "not" | "-") unary | primary
    primary    := NUMBER | STRING | true | false | null | undefined
                | IDENTIFIER | "(" or_expr ")"

Failure policy: ``evaluate_condition`` never raises. Any compile or runtime
error is logged and the condition is reported as not matching.
"""

import logging
import math
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, List, Mapping, Optional, Tuple

from json_logic import jsonLogic

from screener_engine.utils.json_logic_transpiler import to_standard_json_logic

logger = logging.getLogger(__name__)


class ConditionError(Exception):
    """Base error for conditions that cannot be compiled or evaluated."""
    pass


class ConditionSyntaxError(ConditionError):
    """Raised when a condition string does not follow the grammar."""

    def __init__(self, message: str, position: Optional[int] = None):
        if position is not None:
            message = f"{message} at position {position}"
        super().__init__(message)
        self.position = position


class ConditionTypeError(ConditionError):
    """Raised when operand types cannot be compared."""
    pass


class _Undefined:
    """Value bound to identifiers that have no answer."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "undefined"

    def __bool__(self) -> bool:
        return False


UNDEFINED = _Undefined()

# Words that can never name a question
RESERVED_WORDS = frozenset({"true", "false", "null", "undefined", "and", "or", "not"})

_KEYWORD_LITERALS = {
    "true": True,
    "false": False,
    "null": None,
    "undefined": UNDEFINED,
}

_KEYWORD_OPERATORS = {
    "and": "&&",
    "or": "||",
    "not": "!",
}

EQUALITY_OPERATORS = ("==", "!=", "===", "!==")
RELATIONAL_OPERATORS = ("<", ">", "<=", ">=")

_TOKEN_PATTERN = re.compile(
    r"""
    (?P<ws>\s+)
  | (?P<number>(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)
  | (?P<string>'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*")
  | (?P<op>===|!==|==|!=|<=|>=|&&|\|\||<|>|!|-)
  | (?P<lparen>\()
  | (?P<rparen>\))
  | (?P<ident>[A-Za-z_][A-Za-z0-9_]*)
    """,
    re.VERBOSE | re.DOTALL,
)

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r"}


# ── Tree ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class LogicNode:
    """One operator application in a compiled condition.

    ``args`` holds child nodes or literal values (str, int, float, bool,
    None, UNDEFINED). Variables are ``LogicNode("var", ("q1",))``.
    """

    op: str
    args: Tuple[Any, ...]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the normalized ``{"op", "args"}`` JSON form."""
        return {"op": self.op, "args": [operand_to_dict(arg) for arg in self.args]}


def operand_to_dict(operand: Any) -> Any:
    if isinstance(operand, LogicNode):
        return operand.to_dict()
    if operand is UNDEFINED:
        return None
    return operand


def is_var_node(node: Any) -> bool:
    return isinstance(node, LogicNode) and node.op == "var"


def iter_nodes(operand: Any):
    """Yield every LogicNode in a compiled tree, depth first."""
    if isinstance(operand, LogicNode):
        yield operand
        for arg in operand.args:
            yield from iter_nodes(arg)


def referenced_identifiers(operand: Any) -> List[str]:
    """Question ids referenced by a compiled condition, in first-use order."""
    names: List[str] = []
    for node in iter_nodes(operand):
        if node.op == "var" and node.args[0] not in names:
            names.append(node.args[0])
    return names


# ── Tokenizer ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class _Token:
    kind: str
    value: Any
    position: int


def _decode_string(raw: str) -> str:
    body = raw[1:-1]
    return re.sub(r"\\(.)", lambda m: _ESCAPES.get(m.group(1), m.group(1)), body, flags=re.DOTALL)


def _tokenize(condition: str) -> List[_Token]:
    tokens: List[_Token] = []
    position = 0
    while position < len(condition):
        match = _TOKEN_PATTERN.match(condition, position)
        if match is None:
            raise ConditionSyntaxError(
                f"Unexpected character {condition[position]!r}", position
            )
        kind = match.lastgroup
        text = match.group()
        if kind == "number":
            value: Any = float(text) if any(c in text for c in ".eE") else int(text)
            tokens.append(_Token("number", value, position))
        elif kind == "string":
            tokens.append(_Token("string", _decode_string(text), position))
        elif kind == "ident":
            if text in _KEYWORD_OPERATORS:
                tokens.append(_Token("op", _KEYWORD_OPERATORS[text], position))
            elif text in _KEYWORD_LITERALS:
                tokens.append(_Token("literal", _KEYWORD_LITERALS[text], position))
            else:
                tokens.append(_Token("ident", text, position))
        elif kind != "ws":
            tokens.append(_Token(kind, text, position))
        position = match.end()
    tokens.append(_Token("eof", None, len(condition)))
    return tokens


# ── Parser ───────────────────────────────────────────────────────────


class _Parser:
    """Recursive-descent parser producing LogicNode trees."""

    def __init__(self, tokens: List[_Token]):
        self.tokens = tokens
        self.index = 0

    @property
    def current(self) -> _Token:
        return self.tokens[self.index]

    def _advance(self) -> _Token:
        token = self.tokens[self.index]
        self.index += 1
        return token

    def _at_op(self, *ops: str) -> bool:
        return self.current.kind == "op" and self.current.value in ops

    def parse(self) -> Any:
        if self.current.kind == "eof":
            raise ConditionSyntaxError("Empty condition")
        tree = self._parse_or()
        if self.current.kind != "eof":
            raise ConditionSyntaxError(
                f"Unexpected token {self.current.value!r}", self.current.position
            )
        return tree

    def _parse_or(self) -> Any:
        operands = [self._parse_and()]
        while self._at_op("||"):
            self._advance()
            operands.append(self._parse_and())
        return operands[0] if len(operands) == 1 else LogicNode("or", tuple(operands))

    def _parse_and(self) -> Any:
        operands = [self._parse_equality()]
        while self._at_op("&&"):
            self._advance()
            operands.append(self._parse_equality())
        return operands[0] if len(operands) == 1 else LogicNode("and", tuple(operands))

    def _parse_equality(self) -> Any:
        left = self._parse_relational()
        while self._at_op(*EQUALITY_OPERATORS):
            op = self._advance().value
            left = LogicNode(op, (left, self._parse_relational()))
        return left

    def _parse_relational(self) -> Any:
        left = self._parse_unary()
        while self._at_op(*RELATIONAL_OPERATORS):
            op = self._advance().value
            left = LogicNode(op, (left, self._parse_unary()))
        return left

    def _parse_unary(self) -> Any:
        if self._at_op("!", "-"):
            op = self._advance().value
            return LogicNode(op, (self._parse_unary(),))
        return self._parse_primary()

    def _parse_primary(self) -> Any:
        token = self.current
        if token.kind in ("number", "string", "literal"):
            self._advance()
            return token.value
        if token.kind == "ident":
            self._advance()
            return LogicNode("var", (token.value,))
        if token.kind == "lparen":
            self._advance()
            inner = self._parse_or()
            if self.current.kind != "rparen":
                raise ConditionSyntaxError("Expected ')'", self.current.position)
            self._advance()
            return inner
        if token.kind == "eof":
            raise ConditionSyntaxError("Unexpected end of condition", token.position)
        raise ConditionSyntaxError(f"Unexpected token {token.value!r}", token.position)


@lru_cache(maxsize=1024)
def _compile_cached(condition: str) -> Any:
    return _Parser(_tokenize(condition)).parse()


def compile_condition(condition: str) -> Any:
    """
    Compile a condition string into a LogicNode tree (or a bare literal).

    Compiled trees are immutable and cached per condition string.

    Raises:
        ConditionSyntaxError: If the condition does not follow the grammar
    """
    if not isinstance(condition, str):
        raise ConditionSyntaxError(
            f"Condition must be a string, got {type(condition).__name__}"
        )
    return _compile_cached(condition)


# ── Interpreter ──────────────────────────────────────────────────────


def _is_nullish(value: Any) -> bool:
    return value is None or value is UNDEFINED


def is_truthy(value: Any) -> bool:
    """Truthiness of a condition value: '', 0, NaN, null, undefined and false are falsy."""
    if _is_nullish(value):
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0 and not math.isnan(value)
    if isinstance(value, str):
        return value != ""
    # Lists, including empty ones, are truthy
    return True


def _operand_value(operand: Any, answers: Mapping[str, Any]) -> Any:
    if is_var_node(operand):
        return answers.get(operand.args[0], UNDEFINED)
    if isinstance(operand, LogicNode):
        return None
    return operand


def _check_operands(tree: Any, answers: Mapping[str, Any]) -> None:
    """Reject comparisons JSON Logic would coerce silently.

    A multi-select answer (list) can only be compared for equality with
    another list or with null.
    """
    for node in iter_nodes(tree):
        if node.op == "var" and node.args[0] not in answers:
            logger.debug(f"Unbound identifier in condition: {node.args[0]}")
            continue
        if node.op not in EQUALITY_OPERATORS + RELATIONAL_OPERATORS:
            continue

        left, right = (_operand_value(arg, answers) for arg in node.args)
        left_is_list = isinstance(left, (list, tuple))
        right_is_list = isinstance(right, (list, tuple))
        if not (left_is_list or right_is_list):
            continue
        if node.op in RELATIONAL_OPERATORS:
            raise ConditionTypeError(f"Operator '{node.op}' cannot be applied to a list answer")
        if left_is_list and right_is_list:
            continue
        other = right if left_is_list else left
        if not _is_nullish(other):
            raise ConditionTypeError(f"Cannot compare list answer with {other!r}")


def interpret(tree: Any, answers: Mapping[str, Any]) -> bool:
    """
    Evaluate a compiled condition against answers.

    The tree is transpiled to standard JSON Logic and executed by
    ``json_logic.jsonLogic``. Identifiers without an answer read as null.

    Raises:
        ConditionError: If operands cannot be compared
    """
    _check_operands(tree, answers)
    logic = to_standard_json_logic(tree)
    try:
        value = jsonLogic(logic, dict(answers))
    except (TypeError, ValueError, ArithmeticError) as e:
        raise ConditionTypeError(f"Cannot evaluate {logic}: {e}") from e
    return is_truthy(value)


def evaluate_condition(condition: str, answers: Mapping[str, Any]) -> bool:
    """
    Evaluate a rule condition against answers, failing closed.

    Only identifiers that appear in the condition are read from ``answers``;
    the mapping is never modified or retained. Any compile or evaluation
    error is logged and reported as ``False``.

    Args:
        condition: Boolean expression referencing question ids
        answers: Question id -> answer value

    Returns:
        True only when the condition compiled, evaluated, and held
    """
    try:
        return interpret(compile_condition(condition), answers)
    except ConditionError as e:
        logger.warning(f"Condition evaluation failed for {condition!r}: {e}")
        return False
    except Exception:
        logger.exception(f"Unexpected error evaluating condition {condition!r}")
        return False
