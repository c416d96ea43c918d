"""
Mutation engine: the only sanctioned way to change a requesttree.

Every operation checks all of its preconditions before touching anything, so a
rejected call leaves the tree, the observers and the undo history exactly as
they were. Accepted calls run inside one ``mutation_batch``: the structural
change, back-reference updates, observer deltas and the inverse action for
undo happen as one unit.
"""

import logging

from requesttree.config import DefaultNames
from requesttree.core.node import RequestNode
from requesttree.core.types import IdFactory, NameProvider, NodeKind
from requesttree.core.validation import validate
from requesttree.exceptions import (
    CycleError,
    EmptyNameError,
    FolderHasUrlError,
    InvalidIndexError,
    NoParentError,
    RequestHasChildrenError,
    RootNodeError,
)
from requesttree.identifiers import new_node_id
from requesttree.mutation.batch import MutationBatch, mutation_batch
from requesttree.observer.deltas import ChildDelta
from requesttree.undo.actions import InsertAt, InverseAction, RemoveAt, RenameTo, SetUrlTo
from requesttree.undo.manager import UndoManager

logger = logging.getLogger(__name__)


def _undo_manager_for(*nodes: RequestNode | None) -> UndoManager | None:
    """Undo manager of the first node that belongs to a document that has one."""
    for node in nodes:
        if node is not None and node.document is not None and node.document.undo_manager is not None:
            return node.document.undo_manager
    return None


def _check_detached(child: RequestNode, into_parent: RequestNode) -> None:
    """
    Walk a parentless subtree without touching it.

    Back-references of a hand-built subtree are not set yet, so the ancestor
    check in ``insert`` cannot see the destination inside it.

    Raises:
        CycleError: If the subtree contains ``into_parent``, reaches a node
            twice, or holds a node that already belongs to another tree
    """
    seen = {id(child)}
    pending = [child]
    while pending:
        folder = pending.pop()
        if folder is into_parent:
            raise CycleError(child, "cannot be moved into itself or its own descendant")
        for node in folder._children or ():
            if id(node) in seen:
                raise CycleError(node)
            if node.document is not None or (node.parent is not None and node.parent is not folder):
                raise CycleError(node, "already belongs to another tree")
            seen.add(id(node))
            pending.append(node)


class MutationEngine:
    """
    Applies insert, remove, rename, URL edits and node creation to a tree.

    The engine holds no tree state of its own: undo managers are reached
    through each node's ``document`` back-reference, so nodes that belong to
    no document can be mutated freely without recording history.

    Params:
        default_names: Name provider for ``create_child``, keyed by kind
        id_factory: Identifier generator for created nodes
    """

    def __init__(self, default_names: NameProvider | None = None, id_factory: IdFactory | None = None):
        self.default_names = default_names or DefaultNames()
        self.id_factory = id_factory or new_node_id

    def insert(self, child: RequestNode, into_parent: RequestNode, at_index: int | None = None) -> int:
        """
        Insert ``child`` into a folder, reparenting it if it already has a parent.

        ``at_index`` addresses the child's final position, counted after the
        child has been detached from its current parent.

        Params:
            child: Node to insert or move
            into_parent: Destination folder
            at_index: Final position, defaults to the end

        Returns:
            The index the child ends up at

        Raises:
            RequestHasChildrenError: If ``into_parent`` is a request
            CycleError: If ``into_parent`` is ``child`` or one of its descendants, or
                a detached ``child`` subtree shares a node with another tree
            RootNodeError: If ``child`` is a document root folder
            InvalidIndexError: If ``at_index`` is out of range
            StructuralError: If a detached ``child`` subtree is itself invalid
        """
        if into_parent.kind is not NodeKind.FOLDER:
            raise RequestHasChildrenError(into_parent)
        if into_parent is child or into_parent.is_descendant_of(child):
            raise CycleError(child, "cannot be moved into itself or its own descendant")
        if child.is_root:
            raise RootNodeError(child)
        if child.parent is None:
            _check_detached(child, into_parent)

        old_parent = child.parent
        upper_bound = len(into_parent.children) - (1 if old_parent is into_parent else 0)
        index = upper_bound if at_index is None else at_index
        if not 0 <= index <= upper_bound:
            raise InvalidIndexError(index, upper_bound, into_parent)

        if old_parent is None:
            validate(child)
            return self._insert_detached(child, into_parent, index)
        old_index = old_parent.index_of(child)
        if old_parent is into_parent:
            if old_index == index:
                return index
            return self._move_within(child, into_parent, old_index, index)
        return self._reparent(child, old_parent, old_index, into_parent, index)

    def _insert_detached(self, child: RequestNode, into_parent: RequestNode, index: int) -> int:
        manager = _undo_manager_for(into_parent)
        with mutation_batch(manager, f"Create {child.kind.title}") as batch:
            into_parent._children.insert(index, child)
            child._parent = into_parent
            child._adopt_document(into_parent.document)
            batch.add(into_parent, ChildDelta.inserted(index))
            batch.record(RemoveAt(into_parent, index))
        logger.debug("Inserted %r into %r at %d", child, into_parent, index)
        return index

    def _move_within(self, child: RequestNode, folder: RequestNode, old_index: int, index: int) -> int:
        manager = _undo_manager_for(folder)
        with mutation_batch(manager, f"Move {child.kind.title}") as batch:
            folder._children.pop(old_index)
            folder._children.insert(index, child)
            batch.add(folder, ChildDelta.moved(old_index, index))
            batch.record(InsertAt(folder, old_index, child))
        logger.debug("Moved %r within %r from %d to %d", child, folder, old_index, index)
        return index

    def _reparent(
        self,
        child: RequestNode,
        old_parent: RequestNode,
        old_index: int,
        into_parent: RequestNode,
        index: int,
    ) -> int:
        manager = _undo_manager_for(into_parent, old_parent)
        with mutation_batch(manager, f"Move {child.kind.title}") as batch:
            batch.touch(old_parent.document)
            old_parent._children.pop(old_index)
            batch.add(old_parent, ChildDelta.removed(old_index))
            into_parent._children.insert(index, child)
            child._parent = into_parent
            child._adopt_document(into_parent.document)
            batch.add(into_parent, ChildDelta.inserted(index))
            batch.record(InsertAt(old_parent, old_index, child))
        logger.debug("Moved %r from %r[%d] to %r[%d]", child, old_parent, old_index, into_parent, index)
        return index

    def remove(self, node: RequestNode) -> int:
        """
        Detach ``node`` from its parent. The node stays alive for undo.

        Params:
            node: Node to remove

        Returns:
            The index the node was removed from

        Raises:
            NoParentError: If ``node`` has no parent (e.g. the root folder)
        """
        parent = node.parent
        if parent is None:
            raise NoParentError(node)
        index = parent.index_of(node)

        manager = _undo_manager_for(parent)
        with mutation_batch(manager, f"Delete {node.kind.title}") as batch:
            parent._children.pop(index)
            node._parent = None
            node._adopt_document(None)
            batch.add(parent, ChildDelta.removed(index))
            batch.record(InsertAt(parent, index, node))
        logger.debug("Removed %r from %r at %d", node, parent, index)
        return index

    def rename(self, node: RequestNode, new_name: str) -> None:
        """
        Change a node's name.

        Raises:
            EmptyNameError: If ``new_name`` is empty; nothing changes
        """
        if not isinstance(new_name, str) or not new_name:
            raise EmptyNameError(node)
        old_name = node.name
        if new_name == old_name:
            return

        manager = _undo_manager_for(node)
        with mutation_batch(manager, f"Rename {node.kind.title}") as batch:
            node._name = new_name
            self._add_update(batch, node)
            batch.record(RenameTo(node, old_name))
        logger.debug("Renamed %r (was %r)", node, old_name)

    def set_url(self, node: RequestNode, url: str | None) -> None:
        """
        Set or clear a request's URL.

        Raises:
            FolderHasUrlError: If ``node`` is a folder and ``url`` is not None
        """
        if node.kind is NodeKind.FOLDER and url is not None:
            raise FolderHasUrlError(node)
        old_url = node.url
        if url == old_url:
            return

        manager = _undo_manager_for(node)
        with mutation_batch(manager, "Edit URL") as batch:
            node._url = url
            self._add_update(batch, node)
            batch.record(SetUrlTo(node, old_url))
        logger.debug("Set URL of %r to %r", node, url)

    @staticmethod
    def _add_update(batch: MutationBatch, node: RequestNode) -> None:
        # A root has no position to report; only its document hears about it
        if node.parent is not None:
            batch.add(node.parent, ChildDelta.updated(node.parent.index_of(node)))
        else:
            batch.touch(node.document)

    def create_child(self, kind: NodeKind, into_parent: RequestNode, name: str | None = None) -> int:
        """
        Create a node with a default name and append it to a folder.

        Params:
            kind: Kind of the new node
            into_parent: Destination folder
            name: Explicit name, defaults to the provider's name for ``kind``

        Returns:
            Index of the new node, e.g. to start an inline rename

        Raises:
            RequestHasChildrenError: If ``into_parent`` is a request
            EmptyNameError: If an explicit empty name is given
        """
        kind = NodeKind(kind)
        if into_parent.kind is not NodeKind.FOLDER:
            raise RequestHasChildrenError(into_parent)
        node_name = self.default_names(kind) if name is None else name
        node = RequestNode(kind, name=node_name, node_id=self.id_factory())
        return self.insert(node, into_parent)

    def replay(self, action: InverseAction) -> None:
        """
        Apply a recorded inverse action through the regular operations.

        Raises:
            InvalidIndexError: If a ``RemoveAt`` index no longer exists
            TypeError: For objects that are not inverse actions
        """
        if isinstance(action, InsertAt):
            self.insert(action.node, action.parent, action.index)
        elif isinstance(action, RemoveAt):
            children = action.parent.children
            if not 0 <= action.index < len(children):
                raise InvalidIndexError(action.index, len(children) - 1, action.parent)
            self.remove(children[action.index])
        elif isinstance(action, RenameTo):
            self.rename(action.node, action.name)
        elif isinstance(action, SetUrlTo):
            self.set_url(action.node, action.url)
        else:
            raise TypeError(f"Cannot replay {action!r}")
