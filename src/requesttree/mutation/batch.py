"""
Batched-mutation envelope shared by every mutation engine operation.

A batch opens one undo group, collects the deltas each touched folder should
report, and once the structural change is complete delivers them: one
begin/end bracket per folder, in the order the folders were first touched,
followed by one change notification per touched document.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from requesttree.observer.deltas import ChildDelta

if TYPE_CHECKING:
    from requesttree.core.node import RequestNode
    from requesttree.document import DocumentCore
    from requesttree.undo.actions import InverseAction
    from requesttree.undo.manager import UndoManager


class MutationBatch:
    """Deltas, documents and inverse actions produced by one logical operation."""

    def __init__(self, undo_manager: UndoManager | None, action_name: str):
        self.undo_manager = undo_manager
        self.action_name = action_name
        self._folders: list[RequestNode] = []
        self._deltas: dict[int, list[ChildDelta]] = {}
        self._documents: list[DocumentCore] = []

    def add(self, folder: RequestNode, delta: ChildDelta) -> None:
        key = id(folder)
        if key not in self._deltas:
            self._folders.append(folder)
            self._deltas[key] = []
        self._deltas[key].append(delta)
        self.touch(folder.document)

    def touch(self, document: DocumentCore | None) -> None:
        if document is not None and all(document is not seen for seen in self._documents):
            self._documents.append(document)

    def record(self, action: InverseAction) -> None:
        if self.undo_manager is not None:
            self.undo_manager.record_inverse(action, self.action_name)

    @property
    def folders(self) -> tuple[RequestNode, ...]:
        return tuple(self._folders)

    def deltas_for(self, folder: RequestNode) -> tuple[ChildDelta, ...]:
        return tuple(self._deltas.get(id(folder), ()))

    def flush(self) -> None:
        for folder in self._folders:
            observer = folder.observer
            if observer is None:
                continue
            observer.begin_updates(folder)
            for delta in self._deltas[id(folder)]:
                delta.deliver(observer, folder)
            observer.end_updates(folder)
        for document in self._documents:
            document.note_change()


@contextmanager
def mutation_batch(undo_manager: UndoManager | None, action_name: str) -> Iterator[MutationBatch]:
    """
    Run one logical mutation as a single observable and undoable unit.

    Params:
        undo_manager: Manager receiving the inverse actions, None to skip recording
        action_name: User-facing name of the undo step

    Yields:
        The batch to which the operation adds deltas and inverse actions
    """
    batch = MutationBatch(undo_manager, action_name)
    if undo_manager is not None:
        undo_manager.begin_grouping(action_name)
    completed = False
    try:
        yield batch
        completed = True
    finally:
        # Observers still get their bracket if an undo listener raises
        try:
            if undo_manager is not None:
                undo_manager.end_grouping()
        finally:
            if completed:
                batch.flush()
