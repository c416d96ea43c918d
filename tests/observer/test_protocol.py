"""
Tests for the observer protocol, deltas and the broadcaster.
"""

import pytest

from conftest import RecordingObserver
from requesttree import NodeKind, NodeObserver, ObserverBroadcaster, RequestNode
from requesttree.observer import ChildDelta, DeltaKind


@pytest.fixture
def folder():
    return RequestNode(NodeKind.FOLDER, "Folder")


class TestNodeObserver:
    def test_hooks_are_noops(self, folder):
        observer = NodeObserver()
        observer.begin_updates(folder)
        observer.children_removed(folder, (0,))
        observer.children_inserted(folder, (0,))
        observer.children_updated(folder, (0,))
        observer.child_moved(folder, 0, 1)
        observer.end_updates(folder)

    def test_partial_override(self, populated):
        """Observers override only the hooks they care about."""

        class InsertCounter(NodeObserver):
            def __init__(self):
                self.count = 0

            def children_inserted(self, node, indexes):
                self.count += len(indexes)

        counter = InsertCounter()
        populated.attach(counter, populated.root_folder)
        populated.create_child(NodeKind.REQUEST)
        populated.remove(populated.find_node("health"))
        assert counter.count == 1


class TestChildDelta:
    """Delta construction and delivery."""

    def test_indexes_sorted(self):
        assert ChildDelta.removed(3, 1).indexes == (1, 3)

    def test_moved_fields(self):
        delta = ChildDelta.moved(0, 2)
        assert delta.kind is DeltaKind.MOVED
        assert (delta.from_index, delta.to_index) == (0, 2)

    @pytest.mark.parametrize(
        "delta, expected",
        [
            (ChildDelta.removed(1), ("removed", "Folder", (1,))),
            (ChildDelta.inserted(2), ("inserted", "Folder", (2,))),
            (ChildDelta.updated(0), ("updated", "Folder", (0,))),
            (ChildDelta.moved(0, 3), ("moved", "Folder", 0, 3)),
        ],
    )
    def test_deliver(self, folder, delta, expected):
        observer = RecordingObserver()
        delta.deliver(observer, folder)
        assert observer.events == [expected]


class TestObserverBroadcaster:
    """Fan-out to several observers through a node's single observer slot."""

    def test_fans_out_in_order(self, populated):
        first, second = RecordingObserver(), RecordingObserver()
        populated.attach(ObserverBroadcaster([first, second]), populated.root_folder)
        populated.rename(populated.find_node("health"), "Status")
        expected = [("begin", "Requests"), ("updated", "Requests", (1,)), ("end", "Requests")]
        assert first.events == expected
        assert second.events == expected

    def test_every_hook_forwarded(self, folder):
        recorder = RecordingObserver()
        broadcaster = ObserverBroadcaster()
        broadcaster.add(recorder)
        broadcaster.begin_updates(folder)
        broadcaster.children_removed(folder, (0,))
        broadcaster.children_inserted(folder, (1,))
        broadcaster.children_updated(folder, (2,))
        broadcaster.child_moved(folder, 0, 1)
        broadcaster.end_updates(folder)
        assert [event[0] for event in recorder.events] == [
            "begin",
            "removed",
            "inserted",
            "updated",
            "moved",
            "end",
        ]

    def test_remove(self, folder):
        recorder = RecordingObserver()
        broadcaster = ObserverBroadcaster([recorder])
        broadcaster.remove(recorder)
        broadcaster.begin_updates(folder)
        assert recorder.events == []
        with pytest.raises(ValueError):
            broadcaster.remove(recorder)
