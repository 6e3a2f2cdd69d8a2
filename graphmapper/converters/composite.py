from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel

from .base import Converter, Convertible

if TYPE_CHECKING:
    from ..mapping.session import MappingSession

logger = logging.getLogger(__name__)

FieldSource = Union[str, Callable[[Any], Any]]


class CompositeConverter(Converter):
    """
    Maps a node with reference-typed fields onto a target class.

    Allocation
    ----------
    • factory given          → ``factory(source)``
    • pydantic target model  → ``target_type.model_construct()``
    • dataclass with required fields
                             → ``target_type.__new__(target_type)``, then
                               defaults of the fields not mapped here
    • anything else          → ``target_type()``

    Allocation never needs a child reference, so the empty target can
    be registered before its children are mapped. A dataclass allocated
    without ``__init__`` does not run ``__post_init__``. Frozen dataclass
    targets are filled through ``object.__setattr__``.

    Fields
    ------
    ``fields`` maps target attribute → source attribute name, or
    target attribute → callable taking the source. Every raw value is
    routed through ``session.map``: scalars pass straight through,
    references come back as their (possibly shared) counterparts.

    When ``fields`` is omitted it is inferred from the target's
    dataclass fields or pydantic model fields, name for name.
    """

    kind = "composite"

    def __init__(
        self,
        source_type: type,
        target_type: type,
        fields: Optional[Mapping[str, FieldSource]] = None,
        factory: Optional[Callable[[Any], Any]] = None,
    ) -> None:
        super().__init__(source_type)

        if not isinstance(target_type, type):
            raise TypeError("target_type must be a class.")

        self._target_type = target_type
        self._factory = factory
        self._fields: Dict[str, FieldSource] = (
            dict(fields) if fields is not None else _infer_fields(target_type, source_type)
        )

        for name, accessor in self._fields.items():
            if not isinstance(name, str) or not (isinstance(accessor, str) or callable(accessor)):
                raise TypeError(
                    f"Field '{name}' must map to a source attribute name or a callable."
                )

        self._bare = _has_required_fields(target_type)
        self._defaults = _unmapped_defaults(target_type, self._fields) if self._bare else []
        self._frozen = dataclasses.is_dataclass(target_type) and target_type.__dataclass_params__.frozen

    @property
    def target_type(self) -> type:
        return self._target_type

    @property
    def fields(self) -> Dict[str, FieldSource]:
        return dict(self._fields)

    # ------------------------------------------------------------------
    # Two-Phase Contract
    # ------------------------------------------------------------------

    def create(self, source: Any, session: "MappingSession") -> Any:
        if self._factory is not None:
            return self._factory(source)

        if issubclass(self._target_type, BaseModel):
            return self._target_type.model_construct()

        if self._bare:
            target = self._target_type.__new__(self._target_type)
            for f in self._defaults:
                value = f.default if f.default_factory is dataclasses.MISSING else f.default_factory()
                object.__setattr__(target, f.name, value)
            return target

        return self._target_type()

    def populate(self, source: Any, target: Any, session: "MappingSession") -> None:
        assign = object.__setattr__ if self._frozen else setattr
        for name, accessor in self._fields.items():
            raw = accessor(source) if callable(accessor) else getattr(source, accessor)
            assign(target, name, session.map(raw))

    # ------------------------------------------------------------------
    # Direction
    # ------------------------------------------------------------------

    def reversed(self) -> Optional[Converter]:
        if self._factory is not None:
            return None

        if not all(isinstance(a, str) for a in self._fields.values()):
            return None

        inverted = {accessor: name for name, accessor in self._fields.items()}
        return CompositeConverter(self._target_type, self._source_type, fields=inverted)


class ConvertibleConverter(Converter):
    """Adapter that lets Convertible nodes drive their own conversion."""

    kind = "composite"

    def __init__(self) -> None:
        super().__init__(Convertible)

    def create(self, source: Any, session: "MappingSession") -> Any:
        return source.create_counterpart()

    def populate(self, source: Any, target: Any, session: "MappingSession") -> None:
        source.populate_counterpart(target, session)


CONVERTIBLE = ConvertibleConverter()


# ----------------------------------------------------------------------
# Field Inference
# ----------------------------------------------------------------------

def _infer_fields(target_type: type, source_type: type) -> Dict[str, FieldSource]:
    if dataclasses.is_dataclass(target_type):
        names = [f.name for f in dataclasses.fields(target_type)]
    elif issubclass(target_type, BaseModel):
        names = list(target_type.model_fields)
    elif dataclasses.is_dataclass(source_type):
        names = [f.name for f in dataclasses.fields(source_type)]
    else:
        raise TypeError(
            f"Cannot infer fields for {source_type.__name__} -> {target_type.__name__}; "
            f"pass fields= explicitly."
        )

    logger.debug(
        "[COMPOSITE] Inferred fields %s -> %s: %s",
        source_type.__name__,
        target_type.__name__,
        names,
    )
    return {name: name for name in names}


# ----------------------------------------------------------------------
# Dataclass Allocation
# ----------------------------------------------------------------------

def _has_required_fields(target_type: type) -> bool:
    if not dataclasses.is_dataclass(target_type):
        return False
    return any(
        f.init
        and f.default is dataclasses.MISSING
        and f.default_factory is dataclasses.MISSING
        for f in dataclasses.fields(target_type)
    )


def _unmapped_defaults(target_type: type, mapped: Mapping[str, Any]) -> List[dataclasses.Field]:
    """Fields with a default that ``populate`` will not assign."""
    return [
        f for f in dataclasses.fields(target_type)
        if f.name not in mapped
        and (f.default is not dataclasses.MISSING or f.default_factory is not dataclasses.MISSING)
    ]
