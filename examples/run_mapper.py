from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from graphmapper import (
    CompositeConverter,
    GraphMapper,
    TemporalConverter,
    event_to_timestamp,
)

import logging

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)

# --------------------------------
# Domain graph (source)
# --------------------------------

class Event:
    def __init__(self, time):
        self.time = time


class Dataset:
    def __init__(self, name="", created=None, project=None):
        self.name = name
        self.created = created
        self.project = project


class Project:
    def __init__(self, name=""):
        self.name = name
        self.datasets = []


# --------------------------------
# Transfer graph (target)
# --------------------------------

@dataclass(eq=False)
class DatasetView:
    name: str = ""
    created: Optional[datetime] = None
    project: Optional["ProjectView"] = None


@dataclass(eq=False)
class ProjectView:
    name: str = ""
    datasets: List[DatasetView] = field(default_factory=list)


# --------------------------------
# Mapper
# --------------------------------

mapper = GraphMapper.create(
    converters=[
        CompositeConverter(Project, ProjectView),
        CompositeConverter(Dataset, DatasetView),
        TemporalConverter(Event, extract=event_to_timestamp),
    ],
    timezone="UTC",
)

project = Project("imaging")
for name in ("raw", "processed"):
    project.datasets.append(
        Dataset(name, Event(datetime(2024, 1, 15, 8, 30)), project=project)
    )

view = mapper.map(project)

print(view.name, [d.name for d in view.datasets])
print("back-reference closed:", all(d.project is view for d in view.datasets))
print("created:", view.datasets[0].created.isoformat())

# --------------------------------
# And back again
# --------------------------------

restored = mapper.reverse().map(view)
print(type(restored).__name__, restored.datasets[1].project is restored)
