"""
Immutable value handling.

Values listed here are passed through the engine untouched: their
identity carries no meaning, so they are never memoized.
"""

from datetime import time, timedelta
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any, Optional, Tuple
from uuid import UUID


IMMUTABLE_TYPES: Tuple[type, ...] = (
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    Decimal,
    Fraction,
    UUID,
    Enum,
    time,
    timedelta,
)


def is_immutable_value(value: Any) -> bool:
    return value is None or isinstance(value, IMMUTABLE_TYPES)


# ----------------------------------------------------------------------
# Null-safe numeric helpers (for composite field maps)
# ----------------------------------------------------------------------

def null_safe_int(value: Optional[int]) -> int:
    """Return ``value`` as an int, or 0 when it is None."""
    if value is None:
        return 0
    return int(value)


def null_safe_float(value: Optional[float]) -> float:
    """Return ``value`` as a float, or 0.0 when it is None."""
    if value is None:
        return 0.0
    return float(value)


# Long and double collapse onto Python's int and float.
null_safe_long = null_safe_int
null_safe_double = null_safe_float
