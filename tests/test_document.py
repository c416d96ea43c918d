"""
Tests for the DocumentCore façade.

Focus Areas:
1. Construction and root handling
2. Undo availability
3. Change tracking and listeners
4. Observer attachment
"""

import pytest

from conftest import RecordingObserver, names
from requesttree import DocumentCore, NodeKind, RequestNode
from requesttree.config import DocumentSettings
from requesttree.exceptions import EmptyNameError, InvalidRootError, UndoUnavailableError
from requesttree.identifiers import SequentialIds, new_node_id
from requesttree.undo import UndoManager


class TestConstruction:
    def test_fresh_document(self, document):
        root = document.root_folder
        assert root.kind is NodeKind.FOLDER
        assert root.name == "Requests"
        assert root.id == "node-1"
        assert root.children == ()
        assert root.document is document
        assert root.parent is None
        assert document.undo_manager is not None
        assert not document.has_unsaved_changes

    def test_existing_root_validated_and_linked(self):
        leaf = RequestNode(NodeKind.REQUEST, "Leaf")
        root = RequestNode(NodeKind.FOLDER, "Mine", children=[RequestNode(NodeKind.FOLDER, "Inner", children=[leaf])])
        document = DocumentCore(root_folder=root)
        assert leaf.document is document
        assert leaf.parent.parent is root

    def test_invalid_root_rejected(self):
        with pytest.raises(InvalidRootError):
            DocumentCore(root_folder=RequestNode(NodeKind.REQUEST, "Not a folder"))

    def test_invalid_tree_rejected(self):
        root = RequestNode(NodeKind.FOLDER, "Root", children=[RequestNode(NodeKind.REQUEST, "")])
        with pytest.raises(EmptyNameError):
            DocumentCore(root_folder=root)

    def test_undo_levels_from_settings(self):
        document = DocumentCore(settings=DocumentSettings(undo_levels=3))
        assert document.undo_manager.levels == 3

    def test_find_node(self, populated):
        assert populated.find_node("node-1") is populated.root_folder
        assert populated.find_node("admins").name == "Admins"
        assert populated.find_node("nope") is None

    def test_repr(self, document):
        assert repr(document) == "DocumentCore(root_folder='Requests')"


class TestIdentifiers:
    def test_sequential(self):
        ids = SequentialIds("req")
        assert [ids(), ids(), ids()] == ["req-1", "req-2", "req-3"]

    def test_uuid_ids(self):
        node_id = new_node_id()
        assert node_id == node_id.upper()
        assert len(node_id) == 36

    def test_created_nodes_use_factory(self, document):
        document.create_child(NodeKind.REQUEST)
        document.create_child(NodeKind.FOLDER)
        assert [child.id for child in document.root_folder.children] == ["node-2", "node-3"]


class TestUndoAvailability:
    """Documents without an undo manager mutate but keep no history."""

    def test_undo_without_manager(self, populated):
        populated.undo_manager = None
        with pytest.raises(UndoUnavailableError):
            populated.undo()
        with pytest.raises(UndoUnavailableError) as exc_info:
            populated.redo()
        assert exc_info.value.operation == "redo"

    def test_mutations_still_work_without_manager(self, populated, observer):
        populated.undo_manager = None
        populated.attach(observer, populated.root_folder)
        populated.create_child(NodeKind.REQUEST)
        assert names(populated.root_folder)[-1] == "New Request"
        assert observer.events[1] == ("inserted", "Requests", (3,))
        assert not populated.can_undo
        assert populated.undo_menu_title == "Undo"
        assert populated.redo_menu_title == "Redo"

    def test_assigned_manager_bound_to_engine(self, populated):
        manager = UndoManager()
        populated.undo_manager = manager
        populated.remove(populated.find_node("health"))
        assert populated.can_undo
        populated.undo()
        assert names(populated.root_folder) == ["Users", "Health", "Archive"]
        assert populated.can_redo

    def test_shared_manager_across_documents(self, settings):
        manager = UndoManager()
        first = DocumentCore(settings=settings, undo_manager=manager)
        second = DocumentCore(settings=settings, undo_manager=manager)
        first.create_child(NodeKind.REQUEST, name="One")
        second.create_child(NodeKind.REQUEST, name="Two")
        assert manager.undo_count == 2
        first.undo()
        assert names(second.root_folder) == []
        assert names(first.root_folder) == ["One"]


class TestChangeTracking:
    def test_each_operation_counts_once(self, populated):
        populated.create_child(NodeKind.FOLDER)
        populated.insert(populated.find_node("list"), populated.find_node("archive"))
        populated.rename(populated.find_node("health"), "Status")
        assert populated.change_count == 3
        assert populated.has_unsaved_changes

    def test_undo_and_redo_count(self, populated):
        populated.create_child(NodeKind.FOLDER)
        populated.undo()
        populated.redo()
        assert populated.change_count == 3

    def test_noop_does_not_count(self, populated):
        populated.rename(populated.find_node("health"), "Health")
        populated.insert(populated.find_node("health"), populated.root_folder, 1)
        assert populated.change_count == 0

    def test_rejected_operation_does_not_count(self, populated):
        with pytest.raises(EmptyNameError):
            populated.rename(populated.find_node("health"), "")
        assert not populated.has_unsaved_changes

    def test_root_rename_counts(self, populated):
        populated.rename(populated.root_folder, "Collection")
        assert populated.change_count == 1

    def test_mark_saved(self, populated):
        populated.create_child(NodeKind.FOLDER)
        populated.mark_saved()
        assert not populated.has_unsaved_changes

    def test_listener_called_after_observers(self, populated):
        order = []

        class Tracker(RecordingObserver):
            def end_updates(self, node):
                order.append("observer")

        populated.attach(Tracker(), populated.root_folder)
        listener = lambda document: order.append("document")
        populated.add_change_listener(listener)
        populated.create_child(NodeKind.REQUEST)
        assert order == ["observer", "document"]

        populated.remove_change_listener(listener)
        populated.create_child(NodeKind.REQUEST)
        assert order == ["observer", "document", "observer"]


class TestObserverAttachment:
    def test_attach_replaces_previous(self, populated):
        first, second = RecordingObserver(), RecordingObserver()
        root = populated.root_folder
        populated.attach(first, root)
        populated.attach(second, root)
        populated.create_child(NodeKind.REQUEST)
        assert first.events == []
        assert len(second.events) == 3

    def test_detach(self, populated, observer):
        root = populated.root_folder
        populated.attach(observer, root)
        populated.detach(root)
        populated.create_child(NodeKind.REQUEST)
        assert observer.events == []
