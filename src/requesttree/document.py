"""
Document façade for requesttree.

``DocumentCore`` owns the root folder and the shared undo manager, and is the
unit of serialization. It is the surface a presentation layer talks to:
navigation starts at ``root_folder``, changes go through the mutation methods,
and observers are attached to the folders being displayed.
"""

from __future__ import annotations

from collections.abc import Callable

from requesttree.config import DefaultNames, DocumentSettings, get_settings
from requesttree.core.node import RequestNode
from requesttree.core.types import IdFactory, NodeKind
from requesttree.core.validation import validate
from requesttree.exceptions import InvalidRootError, UndoUnavailableError
from requesttree.identifiers import new_node_id
from requesttree.mutation.engine import MutationEngine
from requesttree.observer.protocol import NodeObserver
from requesttree.serialization.codec import decode_document, encode_document
from requesttree.undo.manager import UndoManager

ChangeListener = Callable[["DocumentCore"], None]


class DocumentCore:
    """
    A request collection: one root folder plus its undo history.

    Params:
        settings: Document defaults, the process-wide settings when omitted
        root_folder: Existing root (e.g. from a decoder); a new empty folder
            named ``settings.root_folder_name`` when omitted
        undo_manager: Shared undo manager, a fresh one when omitted. Assign
            ``None`` to ``undo_manager`` later to stop recording history.
        id_factory: Identifier generator for nodes created through this document
    """

    def __init__(
        self,
        settings: DocumentSettings | None = None,
        root_folder: RequestNode | None = None,
        undo_manager: UndoManager | None = None,
        id_factory: IdFactory | None = None,
    ):
        self.settings = settings or get_settings()
        id_factory = id_factory or new_node_id
        self.engine = MutationEngine(default_names=DefaultNames(self.settings), id_factory=id_factory)
        if root_folder is None:
            root_folder = RequestNode(NodeKind.FOLDER, name=self.settings.root_folder_name, node_id=id_factory())
        if root_folder.kind is not NodeKind.FOLDER:
            raise InvalidRootError(root_folder.kind.value)
        self._root_folder = root_folder
        self._undo_manager: UndoManager | None = None
        self.undo_manager = undo_manager or UndoManager(levels=self.settings.undo_levels)
        self._change_count = 0
        self._listeners: list[ChangeListener] = []
        self.validate()

    @property
    def root_folder(self) -> RequestNode:
        return self._root_folder

    @property
    def undo_manager(self) -> UndoManager | None:
        return self._undo_manager

    @undo_manager.setter
    def undo_manager(self, manager: UndoManager | None) -> None:
        if manager is not None and manager.replay is None:
            manager.replay = self.engine.replay
        self._undo_manager = manager

    def validate(self) -> None:
        """
        Re-establish the root's document link and validate the whole tree.

        Raises:
            StructuralError: On the first invariant violation found
        """
        self._root_folder._parent = None
        self._root_folder._document = self
        validate(self._root_folder)

    def encode(self) -> bytes:
        """Validate, then serialize to canonical JSON bytes."""
        return encode_document(self)

    @classmethod
    def decode(cls, data: bytes | str, settings: DocumentSettings | None = None) -> DocumentCore:
        """Deserialize and validate a document. See ``decode_document``."""
        return decode_document(data, settings=settings)

    def find_node(self, node_id: str) -> RequestNode | None:
        return self._root_folder.find(node_id)

    # Observers

    def attach(self, observer: NodeObserver | None, node: RequestNode) -> None:
        """Make ``observer`` the one observer of ``node``, replacing any previous one."""
        node.observer = observer

    def detach(self, node: RequestNode) -> None:
        node.observer = None

    # Mutations

    def create_child(self, kind: NodeKind, into_parent: RequestNode | None = None, name: str | None = None) -> int:
        """Create a default-named node at the end of ``into_parent`` (the root by default)."""
        return self.engine.create_child(kind, into_parent or self._root_folder, name=name)

    def insert(self, child: RequestNode, into_parent: RequestNode, at_index: int | None = None) -> int:
        return self.engine.insert(child, into_parent, at_index)

    def remove(self, node: RequestNode) -> int:
        return self.engine.remove(node)

    def rename(self, node: RequestNode, new_name: str) -> None:
        self.engine.rename(node, new_name)

    def set_url(self, node: RequestNode, url: str | None) -> None:
        self.engine.set_url(node, url)

    # Undo

    def undo(self) -> bool:
        """
        Undo the last step.

        Raises:
            UndoUnavailableError: If the document has no undo manager
        """
        if self._undo_manager is None:
            raise UndoUnavailableError("undo")
        return self._undo_manager.undo()

    def redo(self) -> bool:
        if self._undo_manager is None:
            raise UndoUnavailableError("redo")
        return self._undo_manager.redo()

    @property
    def can_undo(self) -> bool:
        return self._undo_manager is not None and self._undo_manager.can_undo

    @property
    def can_redo(self) -> bool:
        return self._undo_manager is not None and self._undo_manager.can_redo

    @property
    def undo_menu_title(self) -> str:
        return self._undo_manager.undo_menu_title if self._undo_manager else "Undo"

    @property
    def redo_menu_title(self) -> str:
        return self._undo_manager.redo_menu_title if self._undo_manager else "Redo"

    # Change tracking

    @property
    def change_count(self) -> int:
        """Completed mutations (including undo/redo replays) since creation or the last save."""
        return self._change_count

    @property
    def has_unsaved_changes(self) -> bool:
        return self._change_count != 0

    def mark_saved(self) -> None:
        self._change_count = 0

    def add_change_listener(self, listener: ChangeListener) -> None:
        """Call ``listener(document)`` after every completed mutation."""
        self._listeners.append(listener)

    def remove_change_listener(self, listener: ChangeListener) -> None:
        self._listeners.remove(listener)

    def note_change(self) -> None:
        """Called by the mutation engine once per touched document per operation."""
        self._change_count += 1
        for listener in list(self._listeners):
            listener(self)

    def __repr__(self) -> str:
        return f"DocumentCore(root_folder={self._root_folder.name!r})"
