from dataclasses import dataclass
from typing import Any

from .kinds import NodeState


@dataclass
class MemoEntry:
    """
    One row of the identity memo.

    The source reference is held on purpose: as long as the entry
    exists, the source object stays alive and its ``id()`` cannot be
    handed to a different object.
    """

    source: Any
    target: Any
    state: NodeState = "registered"

    def __repr__(self) -> str:
        return (
            f"MemoEntry(source={type(self.source).__name__}, "
            f"target={type(self.target).__name__}, state={self.state})"
        )
