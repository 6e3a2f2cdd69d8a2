from __future__ import annotations

from typing import Any, Dict, Iterable, List
from threading import RLock
import logging

from ..errors import UnmappableNodeError
from .base import Converter

logger = logging.getLogger(__name__)


class ConverterRegistry:
    """
    Authoritative type → converter table for one mapping direction.

    This forms the mapping boundary: if a source type (or one of its
    bases) is not registered here, nodes of that type are unmappable.

    Registries are shared between sessions and guarded by a lock;
    sessions themselves are not.
    """

    def __init__(self) -> None:
        self._converters: Dict[type, Converter] = {}
        self._lock = RLock()
        logger.info("[CONVERTER REGISTRY] Initialized (empty)")

    # ------------------------------------------------------------------
    # Strict Registration
    # ------------------------------------------------------------------

    def register(self, converter: Converter) -> None:
        self._validate(converter)

        with self._lock:
            if converter.source_type in self._converters:
                raise ValueError(
                    f"Converter for '{converter.source_type.__name__}' is already registered."
                )

            self._converters[converter.source_type] = converter

            logger.info(
                "[CONVERTER REGISTRY] Registered %r | total=%d",
                converter,
                len(self._converters),
            )

    # ------------------------------------------------------------------
    # Idempotent Registration
    # ------------------------------------------------------------------

    def register_or_update(self, converter: Converter) -> str:
        """
        - If no converter exists for the type → register
        - Otherwise → replace

        Returns:
            "registered" | "updated"
        """
        self._validate(converter)

        with self._lock:
            existed = converter.source_type in self._converters
            self._converters[converter.source_type] = converter

            if existed:
                logger.info("[CONVERTER REGISTRY] Updated %r", converter)
                return "updated"

            logger.info(
                "[CONVERTER REGISTRY] Registered %r | total=%d",
                converter,
                len(self._converters),
            )
            return "registered"

    # ------------------------------------------------------------------
    # Bulk Registration (Strict)
    # ------------------------------------------------------------------

    def register_many(self, converters: Iterable[Converter]) -> None:
        converters = list(converters)

        with self._lock:
            seen = set()
            for converter in converters:
                self._validate(converter)
                if converter.source_type in self._converters or converter.source_type in seen:
                    raise ValueError(
                        f"Converter for '{converter.source_type.__name__}' is already registered."
                    )
                seen.add(converter.source_type)

            for converter in converters:
                self._converters[converter.source_type] = converter
                logger.debug("[CONVERTER REGISTRY] Bulk registered: %r", converter)

            logger.info(
                "[CONVERTER REGISTRY] Bulk registration complete | total=%d",
                len(self._converters),
            )

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, source_type: type) -> Converter:
        """Exact-type lookup."""
        with self._lock:
            try:
                return self._converters[source_type]
            except KeyError:
                raise KeyError(
                    f"No converter registered for '{source_type.__name__}'."
                ) from None

    def resolve(self, source: Any) -> Converter:
        """
        Find the converter for a source node, walking its MRO so that
        subclasses inherit their base's converter.
        """
        with self._lock:
            for klass in type(source).__mro__:
                converter = self._converters.get(klass)
                if converter is not None:
                    return converter

            logger.error(
                "[CONVERTER REGISTRY] Lookup FAILED: %s | registered=%d",
                type(source).__qualname__,
                len(self._converters),
            )
            raise UnmappableNodeError(source)

    def has_converter(self, source_type: type) -> bool:
        with self._lock:
            return source_type in self._converters

    def list_types(self) -> List[type]:
        with self._lock:
            return sorted(self._converters, key=lambda t: t.__qualname__)

    def __len__(self) -> int:
        with self._lock:
            return len(self._converters)

    # ------------------------------------------------------------------
    # Direction
    # ------------------------------------------------------------------

    def reverse(self) -> "ConverterRegistry":
        """
        Build the registry for the opposite direction.

        Converters that cannot be inverted are skipped. Two converters
        inverting onto the same type is ambiguous and raises ValueError.
        """
        reverse = ConverterRegistry()

        with self._lock:
            converters = list(self._converters.values())

        skipped = 0
        for converter in converters:
            inverted = converter.reversed()
            if inverted is None:
                skipped += 1
                continue
            reverse.register(inverted)

        logger.info(
            "[CONVERTER REGISTRY] Reverse registry built | total=%d | skipped=%d",
            len(reverse),
            skipped,
        )
        return reverse

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def _validate(self, converter: Converter) -> None:
        if not isinstance(converter, Converter):
            raise TypeError("Converter must implement Converter.")
