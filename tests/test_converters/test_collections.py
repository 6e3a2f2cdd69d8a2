"""Tests for aggregate converters."""

from collections import OrderedDict, defaultdict, deque, namedtuple

import pytest

from graphmapper import (
    KeyedConverter,
    MalformedNodeError,
    MappingSession,
    SequenceConverter,
)

from tests.domain import Person, PersonView


Pair = namedtuple("Pair", ["left", "right"])


class TestSequences:
    """Tests for sequence aggregates."""

    def test_list_mapped_to_new_list(self, session):
        people = [Person("a"), Person("b")]

        mapped = session.map(people)

        assert isinstance(mapped, list)
        assert mapped is not people
        assert all(isinstance(v, PersonView) for v in mapped)

    def test_shared_list_shared_target(self, session):
        """One list instance reached twice maps to one target list."""
        crew = [Person("a")]

        first, second = session.map([crew, crew])

        assert first is second

    def test_set_of_scalars(self, session):
        assert session.map({1, 2, 3}) == {1, 2, 3}

    def test_deque_keeps_kind_and_maxlen(self, session):
        source = deque([Person("a"), Person("b")], maxlen=5)

        mapped = session.map(source)

        assert isinstance(mapped, deque)
        assert mapped.maxlen == 5
        assert [v.name for v in mapped] == ["a", "b"]

    def test_tuple_rebuilt(self, session):
        ann = Person("Ann")

        mapped = session.map((ann, "x", ann))

        assert isinstance(mapped, tuple)
        assert mapped[0] is mapped[2]
        assert mapped[1] == "x"

    def test_namedtuple_rebuilt(self, session):
        mapped = session.map(Pair(Person("l"), Person("r")))

        assert isinstance(mapped, Pair)
        assert (mapped.left.name, mapped.right.name) == ("l", "r")

    def test_frozenset(self, session):
        assert session.map(frozenset({"a", "b"})) == frozenset({"a", "b"})

    def test_custom_aggregate(self, registry):
        """Domain aggregates declare how to iterate their members."""

        class Team:
            def __init__(self, *members):
                self.members = list(members)

        registry.register(SequenceConverter(Team, list, elements=lambda t: t.members))

        mapped = MappingSession(registry).map(Team(Person("a"), Person("b")))

        assert [v.name for v in mapped] == ["a", "b"]

    def test_non_iterable_state_is_malformed(self, registry):
        """An aggregate yielding non-iterable state is a usage error."""

        class Broken:
            members = 42

        registry.register(SequenceConverter(Broken, list, elements=lambda b: b.members))

        with pytest.raises(MalformedNodeError):
            MappingSession(registry).map(Broken())


class TestKeyed:
    """Tests for keyed aggregates."""

    def test_values_mapped(self, session):
        ann = Person("Ann")

        mapped = session.map({"owner": ann, "backup": ann})

        assert mapped["owner"] is mapped["backup"]
        assert mapped["owner"].name == "Ann"

    def test_node_keys_mapped(self, session):
        """Keys that are nodes are mapped too; scalar keys pass through."""
        ann = Person("Ann")

        mapped = session.map({ann: "lead", "plain": 1})

        ann_view = session.map(ann)
        assert mapped[ann_view] == "lead"
        assert mapped["plain"] == 1
        assert ann not in mapped

    def test_ordered_dict_kind_preserved(self, session):
        mapped = session.map(OrderedDict([("b", 1), ("a", 2)]))

        assert isinstance(mapped, OrderedDict)
        assert list(mapped) == ["b", "a"]

    def test_defaultdict_factory_preserved(self, session):
        source = defaultdict(list, {"k": [Person("a")]})

        mapped = session.map(source)

        assert isinstance(mapped, defaultdict)
        assert mapped.default_factory is list
        assert mapped["k"][0].name == "a"

    def test_self_containing_dict(self, session):
        registry_like = {}
        registry_like["self"] = registry_like

        mapped = session.map(registry_like)

        assert mapped["self"] is mapped

    def test_bad_pairs_are_malformed(self, registry):
        class Ledger:
            def __init__(self):
                self.rows = [("a", 1), "oops"]

        registry.register(KeyedConverter(Ledger, dict, items=lambda l: l.rows))

        with pytest.raises(MalformedNodeError):
            MappingSession(registry).map(Ledger())
