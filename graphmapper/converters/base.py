from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Optional

from ..models import NodeKind

if TYPE_CHECKING:
    from ..mapping.session import MappingSession


class Converter(ABC):
    """
    Per-type conversion contract between the two graphs.

    A converter is responsible for turning one source node into its
    counterpart, delegating every child reference back to the session:

        MappingSession → Converter → session.map(child) → ...

    Architectural Role
    -------------------
    MappingSession enforces *identity* (memo lookup, registration order).
    Converter performs the *actual construction*.

    Two-phase converters (composite, sequence, keyed) must:
        • Allocate the target in ``create`` without touching children
        • Fill fields in ``populate``, mapping children via the session
        • Tolerate receiving a still-unpopulated target for a child
          that closes a cycle

    One-step converters (value, temporal, immutable aggregates)
    implement ``convert`` instead.
    """

    kind: NodeKind = "composite"

    two_phase: bool = True
    """False when the target can only be built once its elements exist."""

    def __init__(self, source_type: type) -> None:
        if not isinstance(source_type, type):
            raise TypeError("source_type must be a class.")
        self._source_type = source_type

    @property
    def source_type(self) -> type:
        return self._source_type

    @property
    def target_type(self) -> Optional[type]:
        """Declared target class, when known ahead of construction."""
        return None

    # ------------------------------------------------------------------
    # Two-Phase Contract
    # ------------------------------------------------------------------

    def create(self, source: Any, session: "MappingSession") -> Any:
        """
        Allocate the target counterpart of ``source``.

        The engine registers the result in the memo before calling
        ``populate``. Children MUST NOT be mapped here.
        """
        raise NotImplementedError(f"{type(self).__name__} has no create phase")

    def populate(self, source: Any, target: Any, session: "MappingSession") -> None:
        """Copy fields from ``source`` into ``target``, mapping children."""
        pass

    # ------------------------------------------------------------------
    # One-Step Contract
    # ------------------------------------------------------------------

    def convert(self, source: Any, session: "MappingSession") -> Any:
        raise NotImplementedError(f"{type(self).__name__} has no convert step")

    # ------------------------------------------------------------------
    # Direction
    # ------------------------------------------------------------------

    def reversed(self) -> Optional["Converter"]:
        """
        Converter for the opposite direction, or None if this one
        cannot be inverted mechanically.
        """
        return None

    def __repr__(self) -> str:
        target = self.target_type.__name__ if self.target_type else "?"
        return f"{type(self).__name__}({self._source_type.__name__} -> {target}, kind={self.kind})"


class Convertible(ABC):
    """
    Capability for domain classes that convert themselves.

    Implementers produce their counterpart in two steps, mirroring the
    two-phase converter contract. No registry entry is needed.
    """

    @abstractmethod
    def create_counterpart(self) -> Any:
        """Return a new, empty counterpart. Must not map children."""
        raise NotImplementedError

    @abstractmethod
    def populate_counterpart(self, target: Any, session: "MappingSession") -> None:
        """Fill ``target``, routing every reference through ``session.map``."""
        raise NotImplementedError
