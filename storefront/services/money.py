"""
Money Utilities - Safe Decimal operations for monetary values.

Avoids float precision issues by using Decimal throughout.
"""
import math
import re
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

Number = Union[str, int, float, Decimal]

# Default precision for money operations (2 decimal places)
MONEY_PRECISION = Decimal("0.01")

# Precision for integer currencies (JPY, KRW, etc.)
INTEGER_PRECISION = Decimal("1")

_NUMBER_TOKEN = re.compile(r"-?\d+(\.\d+)?")


def to_decimal(value: Union[Number, None]) -> Decimal:
    """
    Convert any value to Decimal safely.

    Args:
        value: Value to convert (str, int, float, Decimal, or None)

    Returns:
        Decimal representation of the value, or Decimal("0") if None/invalid
    """
    if value is None:
        return Decimal("0")

    if isinstance(value, Decimal):
        return value if value.is_finite() else Decimal("0")

    try:
        # Convert via string to avoid float precision issues
        if isinstance(value, float):
            if not math.isfinite(value):
                return Decimal("0")
            return Decimal(str(value))
        result = Decimal(value)
        return result if result.is_finite() else Decimal("0")
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")


def parse_number(value: object, fallback: Union[Decimal, None] = None) -> Union[Decimal, None]:
    """
    Leniently parse a number coming from user input or a catalog feed.

    Numbers pass through; strings are trimmed, a comma decimal separator is
    accepted and the first numeric token is used (" 3 pcs" -> 3,
    "12,50" -> 12.5).

    Args:
        value: Raw value
        fallback: Returned for None, booleans, NaN/infinity and unparseable input

    Returns:
        Parsed Decimal or the fallback
    """
    if value is None or isinstance(value, bool):
        return fallback

    if isinstance(value, Decimal):
        return value if value.is_finite() else fallback

    if isinstance(value, int):
        return Decimal(value)

    if isinstance(value, float):
        return Decimal(str(value)) if math.isfinite(value) else fallback

    if not isinstance(value, str):
        return fallback

    normalized = value.strip().replace(",", ".", 1)
    match = _NUMBER_TOKEN.search(normalized)
    if not match:
        return fallback
    return Decimal(match.group(0))


def round_money(value: Number, to_int: bool = False) -> Decimal:
    """
    Round monetary value to appropriate precision.

    Args:
        value: Value to round
        to_int: If True, round to integer (for JPY, KRW, etc.)

    Returns:
        Rounded Decimal value
    """
    decimal_value = to_decimal(value)
    precision = INTEGER_PRECISION if to_int else MONEY_PRECISION
    return decimal_value.quantize(precision, rounding=ROUND_HALF_UP)


def to_float(value: Number) -> float:
    """
    Convert Decimal to float for JSON serialization or external APIs.

    Use only at presentation boundaries, not for internal calculations.
    """
    return float(to_decimal(value))


def add(a: Number, b: Number) -> Decimal:
    """Safe addition of monetary values."""
    return to_decimal(a) + to_decimal(b)


def multiply(value: Number, factor: Number) -> Decimal:
    """Safe multiplication of monetary value by a factor."""
    return to_decimal(value) * to_decimal(factor)
