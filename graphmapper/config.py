from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import ConfigError


class MapperConfig:
    """
    Central configuration object for mapping behavior.
    Controls temporal normalization and traversal logging.
    """

    def __init__(
        self,
        timezone: str = "UTC",
        memoize_temporal: bool = False,
        naive_datetimes: str = "assume",   # "assume" or "reject"
        log_traversal: bool = False,
    ):
        self.timezone = timezone
        self.memoize_temporal = memoize_temporal
        self.naive_datetimes = naive_datetimes
        self.log_traversal = log_traversal

        self._validate()

    def _validate(self):
        if not self.timezone or not isinstance(self.timezone, str):
            raise ConfigError("timezone must be a non-empty IANA zone name")

        try:
            self.tzinfo = ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            raise ConfigError(f"Unknown timezone: {self.timezone}") from None

        if self.naive_datetimes not in {"assume", "reject"}:
            raise ConfigError(f"Unsupported naive_datetimes: {self.naive_datetimes}")

        if not isinstance(self.memoize_temporal, bool):
            raise ConfigError("memoize_temporal must be a bool")

        if not isinstance(self.log_traversal, bool):
            raise ConfigError("log_traversal must be a bool")

    def __repr__(self) -> str:
        return (
            f"MapperConfig(timezone={self.timezone!r}, "
            f"memoize_temporal={self.memoize_temporal}, "
            f"naive_datetimes={self.naive_datetimes!r}, "
            f"log_traversal={self.log_traversal})"
        )
