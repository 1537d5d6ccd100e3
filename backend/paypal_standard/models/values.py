"""
Field Value Helpers

Emptiness, numeric checks and stringification shared by the order models
and the encoder. Values are never reformatted: a value that survives these
checks is emitted exactly as the caller supplied it.
"""
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Union
import math

# Numbers or numeric-looking text, kept in the caller's original form
FieldNumber = Union[int, float, Decimal, str]


def is_empty(value: Any) -> bool:
    """
    Return True when a value should be left out of the form.

    None, False, "", "0" and any number equal to zero count as empty.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == "" or value == "0"
    if isinstance(value, (int, float, Decimal)):
        return value == 0
    return False


def is_numeric(value: Any) -> bool:
    """
    Check whether a value is a finite number or a string holding one.

    Strings may carry surrounding whitespace, a sign, a fraction and an
    exponent ("  -1.5e3 "). Booleans, NaN and infinities are rejected.
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, Decimal):
        return value.is_finite()
    if isinstance(value, str):
        text = value.strip()
        if not text or "_" in text:
            return False
        try:
            return Decimal(text).is_finite()
        except InvalidOperation:
            return False
    return False


def coerce_numeric(value: Any) -> Optional[Any]:
    """Return the value unchanged if numeric, otherwise None (absent)."""
    return value if is_numeric(value) else None


def to_field_value(value: Any) -> str:
    """Render a stored value as form field text."""
    if value is True:
        return "1"
    return str(value)
