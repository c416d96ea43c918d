"""
Change observer protocol for requesttree folders.

Presentation layers subclass ``NodeObserver`` and attach an instance to the
folder they display. The mutation engine brackets every batch of deltas on a
folder's children with ``begin_updates``/``end_updates``; all hooks default to
no-ops so observers override only what they render.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from requesttree.core.types import IndexSet

if TYPE_CHECKING:
    from requesttree.core.node import RequestNode


class NodeObserver:
    """Receives change notifications about one folder's children."""

    def begin_updates(self, node: RequestNode) -> None:
        pass

    def children_removed(self, node: RequestNode, indexes: IndexSet) -> None:
        pass

    def children_inserted(self, node: RequestNode, indexes: IndexSet) -> None:
        pass

    def children_updated(self, node: RequestNode, indexes: IndexSet) -> None:
        """Content changed (rename, URL edit) without reordering."""
        pass

    def child_moved(self, node: RequestNode, from_index: int, to_index: int) -> None:
        pass

    def end_updates(self, node: RequestNode) -> None:
        pass


class ObserverBroadcaster(NodeObserver):
    """
    Fans every notification out to several observers.

    A node holds at most one observer; attaching a broadcaster lets more than
    one presentation layer follow the same folder. Observers are notified in
    the order they were added.
    """

    def __init__(self, observers: Iterable[NodeObserver] = ()):
        self.observers: list[NodeObserver] = list(observers)

    def add(self, observer: NodeObserver) -> None:
        self.observers.append(observer)

    def remove(self, observer: NodeObserver) -> None:
        """
        Stop forwarding to ``observer``.

        Raises:
            ValueError: If the observer was never added
        """
        self.observers.remove(observer)

    def begin_updates(self, node: RequestNode) -> None:
        for observer in list(self.observers):
            observer.begin_updates(node)

    def children_removed(self, node: RequestNode, indexes: IndexSet) -> None:
        for observer in list(self.observers):
            observer.children_removed(node, indexes)

    def children_inserted(self, node: RequestNode, indexes: IndexSet) -> None:
        for observer in list(self.observers):
            observer.children_inserted(node, indexes)

    def children_updated(self, node: RequestNode, indexes: IndexSet) -> None:
        for observer in list(self.observers):
            observer.children_updated(node, indexes)

    def child_moved(self, node: RequestNode, from_index: int, to_index: int) -> None:
        for observer in list(self.observers):
            observer.child_moved(node, from_index, to_index)

    def end_updates(self, node: RequestNode) -> None:
        for observer in list(self.observers):
            observer.end_updates(node)
