"""
Exception classes for the requesttree document model.

This module defines the error kinds raised by node validation, the mutation
engine, the undo manager and the document codec. None of them are transient:
each one points at a caller bug or at a corrupted persisted document.
"""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from requesttree.core.node import RequestNode


def _describe(node: "RequestNode") -> str:
    return f"{node.kind.value} '{node.name}' ({node.id})"


class RequestTreeError(Exception):
    """Base exception for all requesttree errors."""

    pass


class StructuralError(RequestTreeError):
    """Raised when a tree violates one of the structural invariants."""

    def __init__(self, node: "RequestNode | None", message: str):
        """
        Initialize the exception.

        Params:
            node: The offending node, when one can be named
            message: Description of the violated invariant
        """
        self.node = node
        super().__init__(message)


class EmptyNameError(StructuralError):
    """Raised when a node has, or would be given, an empty name."""

    def __init__(self, node: "RequestNode"):
        super().__init__(node, f"Node {node.id} must have a non-empty name")


class RequestHasChildrenError(StructuralError):
    """Raised when a request node owns, or would gain, children."""

    def __init__(self, node: "RequestNode"):
        super().__init__(node, f"Request {_describe(node)} cannot have children")


class FolderHasUrlError(StructuralError):
    """Raised when a folder node carries, or would be given, a URL."""

    def __init__(self, node: "RequestNode"):
        super().__init__(node, f"Folder {_describe(node)} cannot have a URL")


class CycleError(StructuralError):
    """Raised when a node would become (or already is) its own ancestor."""

    def __init__(self, node: "RequestNode", reason: str = "appears twice in the tree"):
        """
        Initialize the exception.

        Params:
            node: The node reached a second time or being moved under itself
            reason: Why the structure stopped being a tree
        """
        self.reason = reason
        super().__init__(node, f"Node {_describe(node)} {reason}")


class DuplicateNodeIdError(StructuralError):
    """Raised when a decoded document uses the same node id twice."""

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(None, f"Node id '{node_id}' is used by more than one node")


class InvalidRootError(StructuralError):
    """Raised when a document root is not a folder."""

    def __init__(self, kind: Any):
        self.kind = kind
        super().__init__(None, f"Document root must be a folder, got '{kind}'")


class InvalidIndexError(RequestTreeError):
    """Raised when an insert or remove targets an out-of-range child index."""

    def __init__(self, index: int, upper_bound: int, parent: "RequestNode"):
        """
        Initialize the exception.

        Params:
            index: The requested index
            upper_bound: Largest valid index for the operation
            parent: Folder whose children were addressed
        """
        self.index = index
        self.upper_bound = upper_bound
        self.parent = parent
        super().__init__(
            f"Index {index} is out of range 0...{upper_bound} in {_describe(parent)}"
        )


class NoParentError(RequestTreeError):
    """Raised when removing or moving a node that has no parent."""

    def __init__(self, node: "RequestNode", message: str = "has no parent"):
        self.node = node
        super().__init__(f"Node {_describe(node)} {message}")


class RootNodeError(NoParentError):
    """Raised when a document root folder would be moved into another folder."""

    def __init__(self, node: "RequestNode"):
        super().__init__(node, "is a document root and cannot be moved")


class UndoError(RequestTreeError):
    """Base exception for undo/redo manager misuse."""

    pass


class UndoGroupingError(UndoError):
    """Raised on unbalanced grouping or when replaying inside an open group."""

    pass


class UndoUnavailableError(UndoError):
    """Raised when undo or redo is requested on a document without an undo manager."""

    def __init__(self, operation: str = "undo"):
        self.operation = operation
        super().__init__(f"Cannot {operation}: the document has no undo manager")


class DocumentFormatError(RequestTreeError):
    """Raised when serialized bytes are not a syntactically valid document."""

    def __init__(self, reason: str):
        """
        Initialize the exception.

        Params:
            reason: The parser or schema error that rejected the input
        """
        self.reason = reason
        super().__init__(f"Malformed document: {reason}")
