"""Number parsing utilities for consumer answers."""

import math
from typing import Any, Optional


def parse_number(value: Any) -> Optional[float]:
    """Parse a numeric answer.

    Handles:
    - Native numbers: 145 -> 145.0, 6.5 -> 6.5
    - Numeric strings, surrounding whitespace ignored: " 145 " -> 145.0

    Booleans, empty strings, non-finite values and anything else return None.

    Args:
        value: The value to parse

    Returns:
        Parsed float or None if the value is not a number
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None

    if math.isnan(number) or math.isinf(number):
        return None
    return number


def format_number(value: float) -> str:
    """Render a number the way it was authored: 0 -> "0", 2.5 -> "2.5"."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def stringify_answer(value: Any) -> str:
    """Text form of an answer for option and pattern matching."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return format_number(value)
    return str(value)
