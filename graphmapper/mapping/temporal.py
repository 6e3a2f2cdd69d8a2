from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from ..config import MapperConfig
from ..errors import MalformedNodeError


class TemporalNormalizer:
    """
    Normalizes dates and datetimes into timezone-aware datetimes.

    Normalization Rules
    -------------------
    • aware datetime → converted into the configured zone
    • naive datetime → read as wall time in the configured zone
                       (or rejected when naive_datetimes="reject")
    • date           → midnight of that day in the configured zone

    Each call produces its result from the value alone. Two equal
    inputs give equal outputs; identity is never consulted.
    """

    def __init__(self, config: Optional[MapperConfig] = None) -> None:
        self._config = config or MapperConfig()

    def normalize(self, value: Any) -> Optional[datetime]:
        if value is None:
            return None

        tz = self._config.tzinfo

        if isinstance(value, datetime):
            if value.tzinfo is None or value.utcoffset() is None:
                if self._config.naive_datetimes == "reject":
                    raise MalformedNodeError(
                        f"Naive datetime {value.isoformat()} rejected by configuration"
                    )
                return value.replace(tzinfo=tz)
            return value.astimezone(tz)

        if isinstance(value, date):
            return datetime(value.year, value.month, value.day, tzinfo=tz)

        raise MalformedNodeError(
            f"Temporal node produced a non-temporal value: {type(value).__name__}"
        )


def event_to_timestamp(event: Any, attribute: str = "time") -> Any:
    """
    Pull the timestamp out of an event node.

    A missing event, or an event that never recorded a time, maps to None.
    """
    if event is None:
        return None
    return getattr(event, attribute, None)
