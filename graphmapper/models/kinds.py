from typing import FrozenSet, Literal


NodeKind = Literal["value", "composite", "sequence", "keyed", "temporal"]
"""
Closed set of node variants a converter can declare.

value     → copied by value, never memoized
composite → target allocated, registered, then fields filled
sequence  → ordered or unordered aggregate of nodes
keyed     → key/value aggregate; keys and values both mapped
temporal  → normalized by value on every visit
"""

NodeState = Literal["unseen", "registered", "populated"]
"""
Per-identity progress inside one session.

unseen     → identity not in the memo
registered → target allocated, fields not yet filled
populated  → fields filled; target is final
"""

MEMOIZED_KINDS: FrozenSet[str] = frozenset({"composite", "sequence", "keyed"})
