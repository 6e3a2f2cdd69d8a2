"""Tests for the identity memo table."""

import pytest

from graphmapper.mapping import IdentityMemo


class TestIdentityMemo:
    """Tests for IdentityMemo."""

    def test_keyed_by_identity_not_equality(self):
        """Equal lists occupy separate rows."""
        memo = IdentityMemo()
        a, b = [1], [1]

        memo.register(a, "A")

        assert a in memo
        assert b not in memo
        assert memo.get(b) is None

    def test_state_progression(self):
        """Rows move from registered to populated."""
        memo = IdentityMemo()
        node = object()

        assert memo.state_of(node) == "unseen"
        memo.register(node, "target")
        assert memo.state_of(node) == "registered"
        memo.mark_populated(node)
        assert memo.state_of(node) == "populated"

    def test_double_registration_rejected(self):
        """An identity can only be registered once."""
        memo = IdentityMemo()
        node = object()
        memo.register(node, 1)

        with pytest.raises(RuntimeError):
            memo.register(node, 2)

    def test_entry_keeps_source_alive(self):
        """Rows hold their source so the identity key cannot be reused."""
        memo = IdentityMemo()
        entry = memo.register(object(), "target")
        assert entry.source is not None
        assert len(memo) == 1

    def test_build_guard(self):
        """A second begin_build on the same object reports re-entry."""
        memo = IdentityMemo()
        value = (1, 2)

        assert memo.begin_build(value)
        assert not memo.begin_build(value)
        memo.end_build(value)
        assert memo.begin_build(value)

    def test_building_flag(self):
        """building is set only while some aggregate is under construction."""
        memo = IdentityMemo()
        value = (1, 2)

        assert not memo.building
        memo.begin_build(value)
        assert memo.building
        memo.end_build(value)
        assert not memo.building

    def test_clear(self):
        memo = IdentityMemo()
        memo.register(object(), 1)
        memo.clear()
        assert len(memo) == 0
