from typing import Any, Dict, Optional, Set

from ..models import MemoEntry, NodeState


class IdentityMemo:
    """
    Identity-keyed table from source nodes to their targets.

    This class is a *data structure only*. It does not decide when a
    node is mapped. That belongs to MappingSession.

    Keys are synthetic identity tags (``id(source)``), never equality.
    Two equal but distinct sources occupy two rows; one source object
    reached along many paths occupies exactly one.
    """

    def __init__(self) -> None:
        self._entries: Dict[int, MemoEntry] = {}
        self._building: Set[int] = set()

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, source: Any) -> Optional[MemoEntry]:
        return self._entries.get(id(source))

    def __contains__(self, source: Any) -> bool:
        return id(source) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def state_of(self, source: Any) -> NodeState:
        entry = self._entries.get(id(source))
        return entry.state if entry else "unseen"

    # ------------------------------------------------------------------
    # State Transitions
    # ------------------------------------------------------------------

    def register(self, source: Any, target: Any) -> MemoEntry:
        """
        Insert a freshly allocated target (unseen → registered).

        Must happen before any child of ``source`` is mapped, so that a
        cycle back to ``source`` finds this row instead of recursing.
        """
        key = id(source)
        if key in self._entries:
            raise RuntimeError(
                f"Identity already registered for {type(source).__name__}"
            )

        entry = MemoEntry(source=source, target=target)
        self._entries[key] = entry
        return entry

    def mark_populated(self, source: Any) -> None:
        """registered → populated."""
        self._entries[id(source)].state = "populated"

    # ------------------------------------------------------------------
    # Immutable Aggregates Under Construction
    # ------------------------------------------------------------------

    @property
    def building(self) -> bool:
        """True while any immutable aggregate is under construction."""
        return bool(self._building)

    def begin_build(self, source: Any) -> bool:
        """
        Flag an immutable aggregate as being built.

        Returns False when it is already being built, which means the
        graph loops back into a value that cannot exist yet.
        """
        key = id(source)
        if key in self._building:
            return False
        self._building.add(key)
        return True

    def end_build(self, source: Any) -> None:
        self._building.discard(id(source))

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    def clear(self) -> None:
        """Drop every row. Only called when the owning session closes."""
        self._entries.clear()
        self._building.clear()
