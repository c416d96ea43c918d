"""
Observer protocol keeping presentation layers in sync with the document.
"""

from requesttree.observer.deltas import ChildDelta, DeltaKind
from requesttree.observer.protocol import NodeObserver, ObserverBroadcaster

__all__ = [
    "NodeObserver",
    "ObserverBroadcaster",
    "ChildDelta",
    "DeltaKind",
]
