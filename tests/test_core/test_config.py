"""Tests for MapperConfig."""

import pytest

from graphmapper import ConfigError, MapperConfig


class TestMapperConfig:
    """Tests for option validation."""

    def test_defaults(self):
        config = MapperConfig()
        assert config.timezone == "UTC"
        assert config.memoize_temporal is False
        assert config.naive_datetimes == "assume"
        assert config.log_traversal is False
        assert config.tzinfo is not None

    def test_unknown_timezone(self):
        with pytest.raises(ConfigError):
            MapperConfig(timezone="Mars/Olympus_Mons")

    def test_empty_timezone(self):
        with pytest.raises(ConfigError):
            MapperConfig(timezone="")

    def test_unsupported_naive_policy(self):
        with pytest.raises(ConfigError):
            MapperConfig(naive_datetimes="guess")

    def test_memoize_temporal_must_be_bool(self):
        with pytest.raises(ConfigError):
            MapperConfig(memoize_temporal="yes")

    def test_log_traversal_must_be_bool(self):
        with pytest.raises(ConfigError):
            MapperConfig(log_traversal="verbose")

    def test_repr_lists_every_option(self):
        text = repr(MapperConfig(timezone="Europe/Berlin", log_traversal=True))
        assert "timezone='Europe/Berlin'" in text
        assert "naive_datetimes='assume'" in text
        assert "log_traversal=True" in text

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            MapperConfig(naive_datetimes="guess")
