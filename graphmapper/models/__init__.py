"""
Core data records for the mapping engine.

These types describe what the engine knows about a node while a
session is running: which variant of converter handles it and how far
its counterpart has progressed.
"""

from .kinds import NodeKind, NodeState, MEMOIZED_KINDS
from .memo_entry import MemoEntry

__all__ = ["NodeKind", "NodeState", "MEMOIZED_KINDS", "MemoEntry"]
