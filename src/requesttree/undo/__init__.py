"""
Undo/redo support: inverse action records and the two-stack manager.
"""

from requesttree.undo.actions import InsertAt, InverseAction, RemoveAt, RenameTo, SetUrlTo
from requesttree.undo.manager import ManagerState, UndoGroup, UndoManager

__all__ = [
    "InsertAt",
    "RemoveAt",
    "RenameTo",
    "SetUrlTo",
    "InverseAction",
    "UndoGroup",
    "UndoManager",
    "ManagerState",
]
