"""Numeric helpers for money rounding and loosely-typed row values."""

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any


def round_half_up(value: float, places: int = 2) -> float:
    """Round half away from zero at ``places`` decimals.

    Goes through ``repr`` so that 99.995 rounds to 100.0 rather than being
    pulled down by its binary representation.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def coerce_number(value: Any, default: float = 0.0) -> float:
    """Convert a DB or payload value to float, falling back to ``default``."""
    if value is None or value == "":
        return default
    try:
        number = float(Decimal(str(value).strip()))
    except (InvalidOperation, ValueError):
        return default
    if math.isnan(number) or math.isinf(number):
        return default
    return number


def coerce_int(value: Any, default: int | None = None) -> int | None:
    """Convert a DB or payload value to int, truncating decimals."""
    if value is None or value == "":
        return default
    number = coerce_number(value, default=math.nan)
    if math.isnan(number):
        return default
    return int(number)


def optional_rate(value: Any) -> float | None:
    """Return a rate as float, or None when it is missing or not a number."""
    number = coerce_number(value, default=math.nan)
    if math.isnan(number):
        return None
    return number


def is_positive(value: float | None) -> bool:
    return value is not None and value > 0
