"""
requesttree exception classes.

This package provides all exception types used throughout requesttree for
consistent error handling and reporting.
"""

from requesttree.exceptions.core import (
    CycleError,
    DocumentFormatError,
    DuplicateNodeIdError,
    EmptyNameError,
    FolderHasUrlError,
    InvalidIndexError,
    InvalidRootError,
    NoParentError,
    RequestHasChildrenError,
    RequestTreeError,
    RootNodeError,
    StructuralError,
    UndoError,
    UndoGroupingError,
    UndoUnavailableError,
)

__all__ = [
    "RequestTreeError",
    "StructuralError",
    "EmptyNameError",
    "RequestHasChildrenError",
    "FolderHasUrlError",
    "CycleError",
    "DuplicateNodeIdError",
    "InvalidRootError",
    "InvalidIndexError",
    "NoParentError",
    "RootNodeError",
    "UndoError",
    "UndoGroupingError",
    "UndoUnavailableError",
    "DocumentFormatError",
]
