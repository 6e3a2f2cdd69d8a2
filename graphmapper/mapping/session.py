from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Iterable, List, Optional, Tuple

from ..config import MapperConfig
from ..converters.base import Converter, Convertible
from ..converters.builtin import default_registry
from ..converters.composite import CONVERTIBLE
from ..converters.registry import ConverterRegistry
from ..errors import (
    ConcurrentSessionUseError,
    CyclicValueError,
    MalformedNodeError,
    MappingConstructionError,
    MappingError,
    SessionAbortedError,
    SessionClosedError,
)
from ..models import MEMOIZED_KINDS, NodeState
from .memo import IdentityMemo
from .temporal import TemporalNormalizer
from .values import is_immutable_value

logger = logging.getLogger(__name__)


class MappingSession:
    """
    Single-use context for one top-level graph conversion.

    The session owns the identity memo. Every node reached from the
    root (directly or through converters re-entering ``map``) is
    looked up there first, so:

    • a node reached twice yields the identical target instance
    • a cycle closes on the already-registered target instead of
      recursing forever
    • each target is populated exactly once

    Lifecycle
    ---------
    open → (map ...)* → closed
    An exception escaping ``map`` aborts the session: targets that were
    registered but never populated must not be observed as final.

    Traversal
    ---------
    Targets are registered on first sight and their population is
    queued. The outermost ``map`` call drains the queue in a loop, so
    the Python stack stays flat however long a chain of distinct nodes
    is. Nodes reached while an immutable aggregate is being built are
    populated in place, because the aggregate needs its elements
    settled before it can exist.

    Sessions are not thread-safe and refuse calls from any thread other
    than the one that created them.
    """

    def __init__(
        self,
        registry: Optional[ConverterRegistry] = None,
        config: Optional[MapperConfig] = None,
    ) -> None:
        self._registry = registry if registry is not None else default_registry()
        self._config = config or MapperConfig()
        self._normalizer = TemporalNormalizer(self._config)
        self._memo = IdentityMemo()
        self._owner = threading.get_ident()
        self._depth = 0
        self._pending: List[Tuple[Converter, Any, Any]] = []
        self._closed = False
        self._aborted = False

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def config(self) -> MapperConfig:
        return self._config

    @property
    def normalizer(self) -> TemporalNormalizer:
        return self._normalizer

    @property
    def registry(self) -> ConverterRegistry:
        return self._registry

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def aborted(self) -> bool:
        return self._aborted

    def state_of(self, source: Any) -> NodeState:
        return self._memo.state_of(source)

    def __len__(self) -> int:
        return len(self._memo)

    # ------------------------------------------------------------------
    # Engine
    # ------------------------------------------------------------------

    def map(self, source: Any) -> Any:
        """
        Return the counterpart of ``source`` in the other graph.

        None and immutable values come back unchanged. Any other node
        is looked up in the memo, and produced through its converter
        on first sight.
        """
        self._check_usable()

        if is_immutable_value(source):
            return source

        entry = self._memo.get(source)
        if entry is not None:
            return entry.target

        outermost = self._depth == 0
        self._depth += 1
        try:
            target = self._produce(source)
            if outermost:
                self._drain()
            return target
        except BaseException:
            self._aborted = True
            raise
        finally:
            self._depth -= 1

    def map_all(self, sources: Iterable[Any]) -> List[Any]:
        """Map several roots inside this session, sharing identity."""
        try:
            iterator = iter(sources)
        except TypeError:
            raise MalformedNodeError(
                f"map_all expects an iterable, got {type(sources).__name__}"
            ) from None
        return [self.map(source) for source in iterator]

    def _produce(self, source: Any) -> Any:
        converter = self._resolve(source)

        if not self._is_memoized(converter):
            return self._guarded(converter, source, lambda: converter.convert(source, self))

        if not converter.two_phase:
            return self._build_immutable(converter, source)

        # unseen → registered → populated
        target = self._guarded(converter, source, lambda: converter.create(source, self))
        self._memo.register(source, target)
        self._trace(source, target)

        if self._memo.building:
            self._populate(converter, source, target)
        else:
            self._pending.append((converter, source, target))

        return target

    def _drain(self) -> None:
        while self._pending:
            converter, source, target = self._pending.pop()
            self._populate(converter, source, target)

    def _populate(self, converter: Converter, source: Any, target: Any) -> None:
        self._guarded(converter, source, lambda: converter.populate(source, target, self))
        self._memo.mark_populated(source)

    def _build_immutable(self, converter: Converter, source: Any) -> Any:
        if not self._memo.begin_build(source):
            raise CyclicValueError(
                f"Cycle re-enters immutable {type(source).__name__} while it is being built"
            )

        try:
            target = self._guarded(converter, source, lambda: converter.convert(source, self))
        finally:
            self._memo.end_build(source)

        self._memo.register(source, target)
        self._memo.mark_populated(source)
        self._trace(source, target)

        return target

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _resolve(self, source: Any) -> Converter:
        if isinstance(source, Convertible):
            return CONVERTIBLE
        return self._registry.resolve(source)

    def _is_memoized(self, converter: Converter) -> bool:
        if converter.kind in MEMOIZED_KINDS:
            return True
        return converter.kind == "temporal" and self._config.memoize_temporal

    def _guarded(self, converter: Converter, source: Any, step: Callable[[], Any]) -> Any:
        try:
            return step()
        except MappingError:
            raise
        except Exception as e:
            raise MappingConstructionError(
                converter.target_type, source, f"{type(e).__name__}: {e}"
            ) from e

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _check_usable(self) -> None:
        if threading.get_ident() != self._owner:
            raise ConcurrentSessionUseError(
                "MappingSession used from a thread other than its owner."
            )
        if self._closed:
            raise SessionClosedError("MappingSession is closed.")
        if self._aborted:
            raise SessionAbortedError(
                "MappingSession aborted by an earlier failure; discard it."
            )

    def close(self) -> None:
        if self._closed:
            return

        logger.info(
            "[MAPPING SESSION] Closed | entries=%d | aborted=%s",
            len(self._memo),
            self._aborted,
        )
        self._pending.clear()
        self._memo.clear()
        self._closed = True

    def __enter__(self) -> "MappingSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Observability
    # ------------------------------------------------------------------

    def _trace(self, source: Any, target: Any) -> None:
        if self._config.log_traversal:
            logger.debug(
                "[MAPPING SESSION] %s -> %s | depth=%d | entries=%d",
                type(source).__name__,
                type(target).__name__,
                self._depth,
                len(self._memo),
            )
