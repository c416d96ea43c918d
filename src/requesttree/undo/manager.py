"""
Undo/redo manager for requesttree documents.

The manager keeps two stacks of ``UndoGroup`` entries. Mutations record inverse
actions; ``undo`` replays the top group through the bound ``replay`` function
(the mutation engine) while capturing whatever the replay records as the
matching redo entry. Recording is routed away from the stack being replayed, so
a replay can never corrupt its own history.
"""

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum

from requesttree.exceptions import UndoError, UndoGroupingError
from requesttree.undo.actions import InverseAction

logger = logging.getLogger(__name__)

ReplayFunction = Callable[[InverseAction], None]
CheckpointListener = Callable[["UndoManager"], None]


class ManagerState(Enum):
    """What the manager is doing right now."""

    IDLE = "idle"
    UNDOING = "undoing"
    REDOING = "redoing"


@dataclass
class UndoGroup:
    """One user-visible undo step: a named list of inverse actions in recording order."""

    name: str = ""
    actions: list[InverseAction] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.actions)


class UndoManager:
    """
    Two-stack undo/redo state machine with nestable grouping.

    Params:
        replay: Interpreter for inverse actions, normally ``MutationEngine.replay``.
            May be bound later by the owning document.
        levels: Maximum number of undo groups kept, 0 for unlimited
    """

    def __init__(self, replay: ReplayFunction | None = None, levels: int = 0):
        self.replay = replay
        self.levels = levels
        self._undo_stack: list[UndoGroup] = []
        self._redo_stack: list[UndoGroup] = []
        self._open_groups: list[UndoGroup] = []
        self._state = ManagerState.IDLE
        self._listeners: list[CheckpointListener] = []

    # Recording

    def record_inverse(self, action: InverseAction, name: str | None = None) -> None:
        """
        Record the action that reverts a mutation that just happened.

        Outside any group the action becomes its own undo step. Recording while
        idle discards the redo history.

        Params:
            action: Inverse action to store
            name: User-facing action name, e.g. "Create Request"
        """
        if self._open_groups:
            group = self._open_groups[-1]
            group.actions.append(action)
            if name and self._state is ManagerState.IDLE:
                group.name = name
        else:
            self._commit(UndoGroup(name or "", [action]))
            self._notify()

    def set_action_name(self, name: str) -> None:
        """Name the innermost open group, or the top undo step when none is open."""
        if self._open_groups:
            self._open_groups[-1].name = name
        elif self._undo_stack:
            self._undo_stack[-1].name = name
            self._notify()

    def begin_grouping(self, name: str | None = None) -> None:
        """Open a (possibly nested) group; everything recorded until the
        matching ``end_grouping`` undoes as one step."""
        self._open_groups.append(UndoGroup(name or ""))

    def end_grouping(self) -> None:
        """
        Close the innermost group.

        Nested groups fold into their enclosing group; closing the outermost
        group commits it as one undo step (empty groups are dropped).

        Raises:
            UndoGroupingError: If no group is open
        """
        if not self._open_groups:
            raise UndoGroupingError("end_grouping called without a matching begin_grouping")
        group = self._open_groups.pop()
        if self._open_groups:
            outer = self._open_groups[-1]
            outer.actions.extend(group.actions)
            if group.name and self._state is ManagerState.IDLE:
                outer.name = group.name
        else:
            self._commit(group)
            self._notify()

    @contextmanager
    def grouping(self, name: str | None = None) -> Iterator[None]:
        """Context manager form of ``begin_grouping``/``end_grouping``."""
        self.begin_grouping(name)
        try:
            yield
        finally:
            self.end_grouping()

    @property
    def grouping_level(self) -> int:
        return len(self._open_groups)

    # Replay

    def undo(self) -> bool:
        """
        Revert the most recent undo step.

        Returns:
            False when there was nothing to undo

        Raises:
            UndoGroupingError: If a group is still open
            UndoError: If no replay function is bound
        """
        self._check_can_replay("undo")
        if not self._undo_stack:
            return False
        group = self._undo_stack.pop()
        logger.debug("Undoing %r (%d actions)", group.name, len(group))
        self._replay_group(group, ManagerState.UNDOING)
        return True

    def redo(self) -> bool:
        """
        Re-apply the most recently undone step.

        Returns:
            False when there was nothing to redo

        Raises:
            UndoGroupingError: If a group is still open
            UndoError: If no replay function is bound
        """
        self._check_can_replay("redo")
        if not self._redo_stack:
            return False
        group = self._redo_stack.pop()
        logger.debug("Redoing %r (%d actions)", group.name, len(group))
        self._replay_group(group, ManagerState.REDOING)
        return True

    def _check_can_replay(self, operation: str) -> None:
        if self._open_groups:
            raise UndoGroupingError(f"Cannot {operation} while an undo group is open")
        if self.replay is None:
            raise UndoError(f"Cannot {operation}: no replay function is bound")

    def _replay_group(self, group: UndoGroup, state: ManagerState) -> None:
        # The capture group collects what the replay records; it keeps the
        # original name so menus keep saying "Redo Create Request".
        capture = UndoGroup(group.name)
        self._state = state
        self._open_groups.append(capture)
        completed = False
        try:
            for action in reversed(group.actions):
                self.replay(action)
            completed = True
        finally:
            self._open_groups.pop()
            if completed:
                self._commit(capture)
            else:
                logger.warning("Replay of %r failed; the step was dropped from history", group.name)
            self._state = ManagerState.IDLE
            self._notify()

    def _commit(self, group: UndoGroup) -> None:
        if not group.actions:
            return
        if self._state is ManagerState.UNDOING:
            self._redo_stack.append(group)
        elif self._state is ManagerState.REDOING:
            self._undo_stack.append(group)
        else:
            self._undo_stack.append(group)
            self._redo_stack.clear()
        self._trim()

    def _trim(self) -> None:
        if self.levels and len(self._undo_stack) > self.levels:
            dropped = len(self._undo_stack) - self.levels
            del self._undo_stack[:dropped]
            logger.debug("Trimmed %d undo steps beyond the %d-level limit", dropped, self.levels)

    def remove_all_actions(self) -> None:
        """Forget both stacks. Removed nodes held only by history become garbage."""
        if self._state is not ManagerState.IDLE:
            raise UndoError("Cannot clear undo history during a replay")
        self._undo_stack.clear()
        self._redo_stack.clear()
        self._notify()

    # State

    @property
    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    @property
    def is_undoing(self) -> bool:
        return self._state is ManagerState.UNDOING

    @property
    def is_redoing(self) -> bool:
        return self._state is ManagerState.REDOING

    @property
    def undo_count(self) -> int:
        return len(self._undo_stack)

    @property
    def redo_count(self) -> int:
        return len(self._redo_stack)

    @property
    def undo_stack(self) -> tuple[UndoGroup, ...]:
        """Undo steps, oldest first."""
        return tuple(self._undo_stack)

    @property
    def redo_stack(self) -> tuple[UndoGroup, ...]:
        return tuple(self._redo_stack)

    @property
    def undo_action_name(self) -> str:
        return self._undo_stack[-1].name if self._undo_stack else ""

    @property
    def redo_action_name(self) -> str:
        return self._redo_stack[-1].name if self._redo_stack else ""

    @property
    def undo_menu_title(self) -> str:
        """Menu label such as "Undo Create Request", or plain "Undo"."""
        return _menu_title("Undo", self.undo_action_name)

    @property
    def redo_menu_title(self) -> str:
        return _menu_title("Redo", self.redo_action_name)

    # Checkpoint listeners

    def add_listener(self, listener: CheckpointListener) -> None:
        """Call ``listener(manager)`` whenever the stacks change."""
        self._listeners.append(listener)

    def remove_listener(self, listener: CheckpointListener) -> None:
        self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)


def _menu_title(verb: str, action_name: str) -> str:
    return f"{verb} {action_name}" if action_name else verb
