"""Pytest configuration and shared fixtures."""

import pytest

from graphmapper import (
    CompositeConverter,
    ConverterRegistry,
    GraphMapper,
    MapperConfig,
    MappingSession,
    TemporalConverter,
    default_registry,
    event_to_timestamp,
)

from tests.domain import (
    Event,
    Experiment,
    ExperimentView,
    Folder,
    FolderView,
    Person,
    PersonView,
)


@pytest.fixture(autouse=True)
def reset_instance_counter():
    """Start every test with a zeroed PersonView instantiation counter."""
    PersonView.instances = 0
    yield


@pytest.fixture
def registry() -> ConverterRegistry:
    """Built-in converters plus the sample domain."""
    registry = default_registry()
    registry.register_many([
        CompositeConverter(Person, PersonView),
        CompositeConverter(Folder, FolderView),
        CompositeConverter(
            Experiment,
            ExperimentView,
            fields={"name": "name", "started": "started", "labels": "labels"},
        ),
        TemporalConverter(Event, extract=event_to_timestamp),
    ])
    return registry


@pytest.fixture
def config() -> MapperConfig:
    return MapperConfig()


@pytest.fixture
def session(registry, config):
    """Fresh mapping session, closed after the test."""
    with MappingSession(registry, config) as session:
        yield session


@pytest.fixture
def mapper(registry, config) -> GraphMapper:
    return GraphMapper(registry, config)


@pytest.fixture
def ann_and_bob():
    """Ann and Bob are each other's friend."""
    ann = Person("Ann")
    bob = Person("Bob", friend=ann)
    ann.friend = bob
    return ann, bob
