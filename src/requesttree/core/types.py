"""
Core type definitions for requesttree.

This module contains the node kind enumeration and the type aliases shared by
the node model, the mutation engine and the observer protocol.
"""

from collections.abc import Callable
from enum import Enum


class NodeKind(Enum):
    """Kind of a tree node. Values double as the serialized form."""

    FOLDER = "folder"
    REQUEST = "request"

    @property
    def title(self) -> str:
        """Capitalized kind name used in undo action names."""
        return self.value.capitalize()


IndexSet = tuple[int, ...]

IdFactory = Callable[[], str]

NameProvider = Callable[[NodeKind], str]
