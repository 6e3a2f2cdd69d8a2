from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional

from .base import Converter

if TYPE_CHECKING:
    from ..mapping.session import MappingSession


class ValueConverter(Converter):
    """
    Copies a value node by value.

    Without ``convert`` the source itself is returned, which is correct
    for any immutable type. Value nodes are never memoized.
    """

    kind = "value"
    two_phase = False

    def __init__(
        self,
        source_type: type,
        convert: Optional[Callable[[Any], Any]] = None,
    ) -> None:
        super().__init__(source_type)
        self._convert = convert

    def convert(self, source: Any, session: "MappingSession") -> Any:
        if self._convert is None:
            return source
        return self._convert(source)

    def reversed(self) -> Optional[Converter]:
        return self if self._convert is None else None


class TemporalConverter(Converter):
    """
    Normalizes a temporal node by value on every visit.

    ``extract`` pulls the raw timestamp out of an event-like node; the
    session's TemporalNormalizer then produces the target value.
    """

    kind = "temporal"
    two_phase = False

    def __init__(
        self,
        source_type: type,
        extract: Optional[Callable[[Any], Any]] = None,
    ) -> None:
        super().__init__(source_type)
        self._extract = extract

    def convert(self, source: Any, session: "MappingSession") -> Any:
        value = self._extract(source) if self._extract else source
        return session.normalizer.normalize(value)

    def reversed(self) -> Optional[Converter]:
        return self if self._extract is None else None
