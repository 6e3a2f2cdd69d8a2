from .base import Converter, Convertible
from .builtin import default_registry, register_builtin_converters
from .collections import FrozenSequenceConverter, KeyedConverter, SequenceConverter
from .composite import CompositeConverter
from .registry import ConverterRegistry
from .values import TemporalConverter, ValueConverter

__all__ = [
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
]
