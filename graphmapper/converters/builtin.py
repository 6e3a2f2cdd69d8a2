"""
Built-in converter registration helper.

This module installs converters for the standard library's temporal
types and aggregates:
- date / datetime (temporal, normalized by value)
- list / deque / set (sequence, memoized)
- dict and its subclasses (keyed, memoized)
- tuple / frozenset (immutable aggregates)

Immutable scalars (numbers, strings, None, ...) need no entry: the
session passes them through before consulting the registry.

Usage
-----
from graphmapper.converters.builtin import register_builtin_converters

register_builtin_converters(registry)
"""

from collections import deque
from datetime import date, datetime

from .collections import FrozenSequenceConverter, KeyedConverter, SequenceConverter
from .registry import ConverterRegistry
from .values import TemporalConverter


def register_builtin_converters(registry: ConverterRegistry) -> None:
    """
    Register the standard converters.

    Parameters
    ----------
    registry : ConverterRegistry
        The registry to populate. Must not already hold any of the
        built-in types.
    """

    # -------------------------
    # Temporal
    # -------------------------

    registry.register_many([
        TemporalConverter(datetime),
        TemporalConverter(date),
    ])

    # -------------------------
    # Aggregates
    # -------------------------

    registry.register_many([
        SequenceConverter(list),
        SequenceConverter(deque),
        SequenceConverter(set),
        KeyedConverter(dict),
        FrozenSequenceConverter(tuple),
        FrozenSequenceConverter(frozenset),
    ])


def default_registry() -> ConverterRegistry:
    """Return a new registry holding only the built-in converters."""
    registry = ConverterRegistry()
    register_builtin_converters(registry)
    return registry
