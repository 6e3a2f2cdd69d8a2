"""
Aggregate converters.

Sequence and keyed aggregates are ordinary reference nodes: they are
memoized by identity, so one list shared by two parents maps to one
target list. Membership is positional; only node identity is
deduplicated.
"""

from __future__ import annotations

from collections import defaultdict, deque
from typing import TYPE_CHECKING, Any, Callable, Iterable, Iterator, Optional, Tuple

from ..errors import MalformedNodeError
from .base import Converter

if TYPE_CHECKING:
    from ..mapping.session import MappingSession


def empty_like(source: Any) -> Any:
    """Return an empty aggregate of the same kind as ``source``."""
    if isinstance(source, defaultdict):
        return type(source)(source.default_factory)
    if isinstance(source, deque):
        return type(source)(maxlen=source.maxlen)
    return type(source)()


def _iterate(source: Any, elements: Optional[Callable[[Any], Iterable[Any]]]) -> Iterator[Any]:
    state = elements(source) if elements else source
    try:
        return iter(state)
    except TypeError:
        raise MalformedNodeError(
            f"{type(source).__name__} declared as an aggregate "
            f"but yielded non-iterable {type(state).__name__}"
        ) from None


class SequenceConverter(Converter):
    """
    Ordered or unordered aggregate of nodes.

    The target is an empty aggregate of ``target_type`` (or of the
    source's own class) filled with ``append`` when it has one, else
    ``add``. Element order follows the source's iteration order.
    """

    kind = "sequence"

    def __init__(
        self,
        source_type: type,
        target_type: Optional[type] = None,
        elements: Optional[Callable[[Any], Iterable[Any]]] = None,
    ) -> None:
        super().__init__(source_type)
        self._target_type = target_type
        self._elements = elements

    @property
    def target_type(self) -> Optional[type]:
        return self._target_type

    def create(self, source: Any, session: "MappingSession") -> Any:
        if self._target_type is None:
            return empty_like(source)
        return self._target_type()

    def populate(self, source: Any, target: Any, session: "MappingSession") -> None:
        add = getattr(target, "append", None) or getattr(target, "add", None)
        if add is None:
            raise TypeError(f"{type(target).__name__} supports neither append nor add")

        for element in _iterate(source, self._elements):
            add(session.map(element))

    def reversed(self) -> Optional[Converter]:
        if self._target_type is None and self._elements is None:
            return self
        return None


class KeyedConverter(Converter):
    """
    Key/value aggregate. Keys and values are mapped independently;
    scalar keys pass through, node keys become their counterparts.
    """

    kind = "keyed"

    def __init__(
        self,
        source_type: type,
        target_type: Optional[type] = None,
        items: Optional[Callable[[Any], Iterable[Tuple[Any, Any]]]] = None,
    ) -> None:
        super().__init__(source_type)
        self._target_type = target_type
        self._items = items

    @property
    def target_type(self) -> Optional[type]:
        return self._target_type

    def create(self, source: Any, session: "MappingSession") -> Any:
        if self._target_type is None:
            return empty_like(source)
        return self._target_type()

    def populate(self, source: Any, target: Any, session: "MappingSession") -> None:
        if self._items is not None:
            pairs = _iterate(source, self._items)
        elif callable(getattr(source, "items", None)):
            pairs = iter(source.items())
        else:
            raise MalformedNodeError(
                f"{type(source).__name__} declared as keyed but has no items()"
            )

        for pair in pairs:
            try:
                key, value = pair
            except (TypeError, ValueError):
                raise MalformedNodeError(
                    f"{type(source).__name__} yielded {pair!r:.60} instead of a key/value pair"
                ) from None

            mapped_key = session.map(key)
            target[mapped_key] = session.map(value)

    def reversed(self) -> Optional[Converter]:
        if self._target_type is None and self._items is None:
            return self
        return None


class FrozenSequenceConverter(Converter):
    """
    Immutable aggregates (tuple, namedtuple, frozenset).

    These cannot exist before their elements, so they are built in a
    single step and memoized afterwards. Nodes reached from the
    elements are populated in place while the aggregate is built.

    A cycle that loops back into one of these while it is being built
    (tuple → list → same tuple) is the only cycle shape the session
    rejects, with CyclicValueError. Every other cycle closes on its
    registered target. A cycle that first enters the aggregate through
    an already-registered mutable node is fine.
    """

    kind = "sequence"
    two_phase = False

    def convert(self, source: Any, session: "MappingSession") -> Any:
        mapped = [session.map(element) for element in _iterate(source, None)]

        # namedtuple constructors take positional fields
        make = getattr(type(source), "_make", None)
        if make is not None:
            return make(mapped)
        return type(source)(mapped)

    def reversed(self) -> Optional[Converter]:
        return self
