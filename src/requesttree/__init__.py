"""
requesttree - a hierarchical document model for organizing REST requests

requesttree keeps a tree of folders and requests, mutates it through a single
engine that notifies observers and records undo history, and serializes it to
canonical JSON.
"""

import logging
from importlib.metadata import version

from requesttree.core import NodeKind, RequestNode, validate
from requesttree.document import DocumentCore
from requesttree.mutation import MutationEngine
from requesttree.observer import NodeObserver, ObserverBroadcaster
from requesttree.undo import UndoManager

__version__ = version("requesttree")

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "NodeKind",
    "RequestNode",
    "DocumentCore",
    "MutationEngine",
    "NodeObserver",
    "ObserverBroadcaster",
    "UndoManager",
    "validate",
]
