"""
Exception taxonomy for graph mapping.

Usage errors mean the caller handed the engine something it cannot map
(an unregistered type, a malformed aggregate, a spent session).
Construction errors mean a target could not be built from a valid source.

Neither kind is retried: mapping is a pure function of its input graph.
"""


class MappingError(Exception):
    """Base class for every error raised by the mapping engine."""
    pass


class UsageError(MappingError):
    """Raised when the engine is called with input it cannot accept."""
    pass


class UnmappableNodeError(UsageError, TypeError):
    """Raised when no converter exists for a non-null source node."""

    def __init__(self, source) -> None:
        self.source_type = type(source)
        super().__init__(
            f"No converter registered for type "
            f"'{self.source_type.__qualname__}' (value: {source!r:.80})"
        )


class MalformedNodeError(UsageError):
    """Raised when a node's state contradicts its declared kind."""
    pass


class CyclicValueError(MalformedNodeError):
    """Raised when a cycle re-enters an immutable aggregate under construction."""
    pass


class SessionClosedError(UsageError):
    """Raised when a closed mapping session is used again."""
    pass


class SessionAbortedError(UsageError):
    """Raised when a session is used after a mapping call failed inside it."""
    pass


class ConcurrentSessionUseError(UsageError):
    """Raised when a session is entered from a thread other than its owner."""
    pass


class MappingConstructionError(MappingError):
    """
    Raised when a target node cannot be instantiated or populated.

    The underlying exception is always chained as ``__cause__``.
    """

    def __init__(self, target_type, source, reason: str = "") -> None:
        self.target_type = target_type
        self.source_type = type(source)
        name = getattr(target_type, "__qualname__", None) or "counterpart"
        message = (
            f"Internal error: could not build object of type {name} "
            f"while trying to map {self.source_type.__qualname__}"
        )
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ConfigError(ValueError):
    """Raised when MapperConfig receives an unsupported option."""
    pass
