"""
Utility to transpile compiled conditions to standard JSON Logic format.

Conditions compile to the normalized format with 'op' and 'args' fields:
    {"op": "==", "args": [{"op": "var", "args": ["q1"]}, "yes"]}

Standard JSON Logic is what the evaluator executes:
    {"==": [{"var": "q1"}, "yes"]}
"""

import logging
from typing import Any, Dict, Union

logger = logging.getLogger(__name__)

# Operator names of the normalized form that differ in JSON Logic
_OPERATOR_NAMES = {
    "&&": "and",
    "||": "or",
}


def to_standard_json_logic(node: Any) -> Union[Dict[str, Any], Any]:
    """
    Convert a compiled condition to standard JSON Logic format.

    Args:
        node: A LogicNode, a normalized ``{"op", "args"}`` dict, or a
              primitive value (str, int, float, bool, None, undefined)

    Returns:
        Standard JSON Logic object or primitive value

    Example:
        >>> to_standard_json_logic(compile_condition("ldl > 130"))
        {">": [{"var": "ldl"}, 130]}
    """
    # Imported here: conditions depends on this module
    from screener_engine.runtime.conditions import UNDEFINED, LogicNode

    if isinstance(node, LogicNode):
        op, args = node.op, list(node.args)
    elif isinstance(node, dict):
        if "op" not in node or "args" not in node:
            logger.warning(f"Unexpected node structure (missing op/args): {node}")
            return node
        op, args = node["op"], list(node["args"])
    else:
        # undefined has no JSON form; JSON Logic reads missing vars as null
        return None if node is UNDEFINED else node

    if op == "var":
        return {"var": args[0]}

    # Negative number literals
    if op == "-" and len(args) == 1 and _is_plain_number(args[0]):
        return -args[0]

    converted_args = [to_standard_json_logic(arg) for arg in args]
    return {_OPERATOR_NAMES.get(op, op): converted_args}


def _is_plain_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
