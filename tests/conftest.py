"""
Shared test fixtures and utilities for the requesttree test suite.
"""

import os

import pytest

from requesttree import DocumentCore, NodeKind, NodeObserver, RequestNode
from requesttree.config import ENV_PREFIX, DocumentSettings, reset_settings
from requesttree.identifiers import SequentialIds


class RecordingObserver(NodeObserver):
    """Observer that keeps every notification as a tuple, for asserting on."""

    def __init__(self):
        self.events: list[tuple] = []

    def begin_updates(self, node):
        self.events.append(("begin", node.name))

    def children_removed(self, node, indexes):
        self.events.append(("removed", node.name, indexes))

    def children_inserted(self, node, indexes):
        self.events.append(("inserted", node.name, indexes))

    def children_updated(self, node, indexes):
        self.events.append(("updated", node.name, indexes))

    def child_moved(self, node, from_index, to_index):
        self.events.append(("moved", node.name, from_index, to_index))

    def end_updates(self, node):
        self.events.append(("end", node.name))

    def clear(self):
        self.events.clear()


def names(folder: RequestNode) -> list[str]:
    """Names of a folder's children, in order."""
    return [child.name for child in folder.children]


def assert_back_references(document: DocumentCore) -> None:
    """Every descendant's parent/document agrees with the containment edges."""
    root = document.root_folder
    assert root.parent is None
    assert root.document is document
    for node in root.depth_first():
        for child in node.children:
            assert child.parent is node
            assert child.document is document


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate tests from REQUESTTREE_* variables and the cached settings."""
    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def settings():
    return DocumentSettings()


@pytest.fixture
def document(settings):
    """Empty document with deterministic ids."""
    return DocumentCore(settings=settings, id_factory=SequentialIds())


@pytest.fixture
def observer():
    return RecordingObserver()


@pytest.fixture
def populated(document):
    """
    Document shaped like:

        Requests
          Users (folder)
            List users (request, /users)
            Get user (request, /users/1)
            Admins (folder)
          Health (request, /health)
          Archive (folder)
    """
    root = document.root_folder
    users = RequestNode(NodeKind.FOLDER, "Users", node_id="users")
    document.insert(users, root)
    document.insert(RequestNode(NodeKind.REQUEST, "List users", url="/users", node_id="list"), users)
    document.insert(RequestNode(NodeKind.REQUEST, "Get user", url="/users/1", node_id="get"), users)
    document.insert(RequestNode(NodeKind.FOLDER, "Admins", node_id="admins"), users)
    document.insert(RequestNode(NodeKind.REQUEST, "Health", url="/health", node_id="health"), root)
    document.insert(RequestNode(NodeKind.FOLDER, "Archive", node_id="archive"), root)
    document.undo_manager.remove_all_actions()
    document.mark_saved()
    return document
