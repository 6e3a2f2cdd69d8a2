"""
graphmapper: identity-preserving conversion between object graphs.

Converts a domain graph into a transfer graph (and back) without
duplicating shared nodes and without recursing forever on cycles.
"""

from .app import GraphMapper
from .config import MapperConfig
from .converters import (
    CompositeConverter,
    Converter,
    ConverterRegistry,
    Convertible,
    FrozenSequenceConverter,
    KeyedConverter,
    SequenceConverter,
    TemporalConverter,
    ValueConverter,
    default_registry,
    register_builtin_converters,
)
from .errors import (
    ConcurrentSessionUseError,
    ConfigError,
    CyclicValueError,
    MalformedNodeError,
    MappingConstructionError,
    MappingError,
    SessionAbortedError,
    SessionClosedError,
    UnmappableNodeError,
    UsageError,
)
from .mapping import MappingSession, event_to_timestamp

__all__ = [
    "GraphMapper",
    "MapperConfig",
    "MappingSession",
    "Converter",
    "Convertible",
    "ConverterRegistry",
    "CompositeConverter",
    "SequenceConverter",
    "KeyedConverter",
    "FrozenSequenceConverter",
    "ValueConverter",
    "TemporalConverter",
    "default_registry",
    "register_builtin_converters",
    "event_to_timestamp",
    "MappingError",
    "UsageError",
    "UnmappableNodeError",
    "MalformedNodeError",
    "CyclicValueError",
    "SessionClosedError",
    "SessionAbortedError",
    "ConcurrentSessionUseError",
    "MappingConstructionError",
    "ConfigError",
]
