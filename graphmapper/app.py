from typing import Any, Iterable, List, Optional

from .config import MapperConfig
from .converters.base import Converter
from .converters.builtin import default_registry
from .converters.registry import ConverterRegistry
from .mapping.session import MappingSession


class GraphMapper:
    """
    Top-level facade for converting one object graph into another.

    This class is the **official public entry point** of the package.
    It owns a converter registry and a configuration, and opens a
    fresh MappingSession for every top-level call, so:

        • identity is shared inside one call (cycles, shared nodes)
        • nothing is shared between calls (no memo leaks)

    Callers who need several related roots to share identity use
    ``map_all`` or open a session explicitly with ``session()``.
    """

    def __init__(
        self,
        registry: Optional[ConverterRegistry] = None,
        config: Optional[MapperConfig] = None,
    ) -> None:
        self._registry = registry if registry is not None else default_registry()
        self._config = config or MapperConfig()

    @staticmethod
    def create(
        *,
        converters: Iterable[Converter] = (),
        timezone: str = "UTC",
        memoize_temporal: bool = False,
    ) -> "GraphMapper":
        """
        Construct a mapper over the built-in converters plus ``converters``.

        Parameters
        ----------
        converters : Iterable[Converter]
            Consumer-provided converters for domain types.

        timezone : str
            IANA zone that temporal values are normalized into.

        memoize_temporal : bool
            Memoize temporal nodes by identity like any other node.

        Returns
        -------
        GraphMapper
            A mapper ready for ``map()``.
        """
        registry = default_registry()
        registry.register_many(converters)

        config = MapperConfig(
            timezone=timezone,
            memoize_temporal=memoize_temporal,
        )

        return GraphMapper(registry, config)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def registry(self) -> ConverterRegistry:
        return self._registry

    @property
    def config(self) -> MapperConfig:
        return self._config

    # ------------------------------------------------------------------
    # Mapping
    # ------------------------------------------------------------------

    def session(self) -> MappingSession:
        return MappingSession(self._registry, self._config)

    def map(self, root: Any) -> Any:
        with self.session() as session:
            return session.map(root)

    def map_all(self, roots: Iterable[Any]) -> List[Any]:
        with self.session() as session:
            return session.map_all(roots)

    # ------------------------------------------------------------------
    # Direction
    # ------------------------------------------------------------------

    def reverse(self) -> "GraphMapper":
        """Mapper for the opposite direction (target graph → source graph)."""
        return GraphMapper(self._registry.reverse(), self._config)
