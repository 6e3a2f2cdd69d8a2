from .memo import IdentityMemo
from .session import MappingSession
from .temporal import TemporalNormalizer, event_to_timestamp
from .values import (
    is_immutable_value,
    null_safe_double,
    null_safe_float,
    null_safe_int,
    null_safe_long,
)

__all__ = [
    "IdentityMemo",
    "MappingSession",
    "TemporalNormalizer",
    "event_to_timestamp",
    "is_immutable_value",
    "null_safe_int",
    "null_safe_long",
    "null_safe_float",
    "null_safe_double",
]
