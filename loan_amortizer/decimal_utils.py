"""
Decimal Helpers

Conversion and rounding helpers for monetary values. NEVER uses float for
monetary values: floats are converted through their string representation.
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation, getcontext
from typing import Type

# Set global decimal context for financial precision
getcontext().prec = 28

ZERO = Decimal('0')
HUNDRED = Decimal('100')

# Largest accepted input magnitude; keeps products and powers inside the context range
MAX_MAGNITUDE = Decimal('1e15')


def to_decimal(value, field_name: str = "value", error_cls: Type[ValueError] = ValueError) -> Decimal:
    """Convert int/str/float/Decimal to Decimal, raising error_cls on garbage input"""
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        raise error_cls(f"{field_name} must be a number, got {value!r}")
    else:
        try:
            result = Decimal(str(value))
        except (InvalidOperation, TypeError, ValueError):
            raise error_cls(f"{field_name} must be a number, got {value!r}")

    if not result.is_finite():
        raise error_cls(f"{field_name} must be finite, got {value!r}")
    if abs(result) > MAX_MAGNITUDE:
        raise error_cls(f"{field_name} must not exceed {MAX_MAGNITUDE:,f} in magnitude, got {value!r}")
    return result


def quantize_amount(value: Decimal, places: int = 2) -> Decimal:
    """Round to a fixed number of decimal places (ROUND_HALF_UP)"""
    return value.quantize(Decimal('0.1') ** places, rounding=ROUND_HALF_UP)
