"""
Core requesttree components.

This package provides the node model, its kind enumeration and type aliases,
and the structural validator.
"""

from requesttree.core.types import IdFactory, IndexSet, NameProvider, NodeKind
from requesttree.core.node import RequestNode
from requesttree.core.validation import validate

__all__ = [
    "NodeKind",
    "RequestNode",
    "IndexSet",
    "IdFactory",
    "NameProvider",
    "validate",
]
