"""
Delta records describing what changed among one folder's children.

The mutation engine collects deltas while it changes the tree and delivers
them once the structural change is complete, each folder's deltas inside a
single begin/end bracket.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from requesttree.core.types import IndexSet

if TYPE_CHECKING:
    from requesttree.core.node import RequestNode
    from requesttree.observer.protocol import NodeObserver


class DeltaKind(Enum):
    """Kinds of child-level change a folder can report."""

    REMOVED = "removed"
    INSERTED = "inserted"
    UPDATED = "updated"
    MOVED = "moved"


@dataclass(frozen=True)
class ChildDelta:
    """One change to a folder's children."""

    kind: DeltaKind
    indexes: IndexSet = ()
    from_index: int | None = None
    to_index: int | None = None

    @classmethod
    def removed(cls, *indexes: int) -> ChildDelta:
        return cls(DeltaKind.REMOVED, tuple(sorted(indexes)))

    @classmethod
    def inserted(cls, *indexes: int) -> ChildDelta:
        return cls(DeltaKind.INSERTED, tuple(sorted(indexes)))

    @classmethod
    def updated(cls, *indexes: int) -> ChildDelta:
        return cls(DeltaKind.UPDATED, tuple(sorted(indexes)))

    @classmethod
    def moved(cls, from_index: int, to_index: int) -> ChildDelta:
        return cls(DeltaKind.MOVED, from_index=from_index, to_index=to_index)

    def deliver(self, observer: NodeObserver, node: RequestNode) -> None:
        """Invoke the matching observer hook for this delta."""
        if self.kind is DeltaKind.REMOVED:
            observer.children_removed(node, self.indexes)
        elif self.kind is DeltaKind.INSERTED:
            observer.children_inserted(node, self.indexes)
        elif self.kind is DeltaKind.UPDATED:
            observer.children_updated(node, self.indexes)
        else:
            observer.child_moved(node, self.from_index, self.to_index)
