from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation

from ..core.constants import RATE_DECIMAL_PLACES
from ..core.exceptions import InvalidValueError, ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_non_negative_number(value: object, field_name: str) -> Decimal:
    """Coerce a rate-like value to Decimal, rejecting negatives and non-numbers.

    Booleans are rejected even though they are ints in Python.
    """
    if value is None or isinstance(value, bool):
        raise InvalidValueError(f"{field_name} must be a number")
    if isinstance(value, float) and not math.isfinite(value):
        raise InvalidValueError(f"{field_name} must be a finite number")
    if not isinstance(value, (int, float, Decimal, str)):
        raise InvalidValueError(f"{field_name} must be a number")

    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        raise InvalidValueError(f"{field_name} must be a number")

    if not number.is_finite():
        raise InvalidValueError(f"{field_name} must be a finite number")
    if number < 0:
        raise InvalidValueError(f"{field_name} must not be negative")
    return number


def require_non_negative_int(value: object, field_name: str) -> int:
    if value is None or isinstance(value, bool):
        raise InvalidValueError(f"{field_name} must be an integer")
    number = require_non_negative_number(value, field_name)
    if number != number.to_integral_value():
        raise InvalidValueError(f"{field_name} must be an integer")
    return int(number)


def require_rate(value: object, field_name: str) -> Decimal:
    """A non-negative rate with no more fractional digits than the rate column stores."""
    number = require_non_negative_number(value, field_name)
    if number.normalize().as_tuple().exponent < -RATE_DECIMAL_PLACES:
        raise InvalidValueError(f"{field_name} must have at most {RATE_DECIMAL_PLACES} decimal places")
    return number
