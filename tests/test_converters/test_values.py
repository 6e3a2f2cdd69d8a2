"""Tests for value converters and null-safe helpers."""

from pathlib import PurePosixPath

from graphmapper import MappingSession, ValueConverter
from graphmapper.mapping import (
    is_immutable_value,
    null_safe_double,
    null_safe_float,
    null_safe_int,
    null_safe_long,
)


class TestValueConverter:
    """Tests for user-registered value types."""

    def test_copied_by_value_and_not_memoized(self, registry):
        registry.register(ValueConverter(PurePosixPath, convert=str))
        session = MappingSession(registry)
        path = PurePosixPath("/data/raw")

        first, second = session.map([path, path])

        assert first == second == "/data/raw"
        assert session.state_of(path) == "unseen"

    def test_identity_value(self, registry):
        registry.register(ValueConverter(PurePosixPath))
        path = PurePosixPath("/tmp")

        assert MappingSession(registry).map(path) is path


class TestNullSafe:
    """Tests for null-safe numeric helpers."""

    def test_int(self):
        assert null_safe_int(None) == 0
        assert null_safe_int(7) == 7
        assert null_safe_long(None) == 0

    def test_float(self):
        assert null_safe_float(None) == 0.0
        assert null_safe_float(2) == 2.0
        assert null_safe_double(None) == 0.0


class TestImmutableDetection:
    def test_values(self):
        assert is_immutable_value(None)
        assert is_immutable_value("x")
        assert not is_immutable_value([])
        assert not is_immutable_value(object())
