"""
Structural validation for requesttree subtrees.

``validate`` walks a subtree pre-order, stops at the first violation, and
rewrites every child's ``parent``/``document`` back-references from the
authoritative ``children`` sequences on the way down. It must run once before
a freshly decoded tree is used and once before every encode.
"""

import logging

from requesttree.core.node import RequestNode
from requesttree.core.types import NodeKind
from requesttree.exceptions import (
    CycleError,
    EmptyNameError,
    FolderHasUrlError,
    RequestHasChildrenError,
)

logger = logging.getLogger(__name__)


def validate(node: RequestNode) -> None:
    """
    Check invariants on ``node`` and its descendants, repairing back-references.

    Params:
        node: Subtree root; its own ``parent``/``document`` are left untouched

    Raises:
        EmptyNameError: A node has an empty name
        RequestHasChildrenError: A request owns a children collection
        FolderHasUrlError: A folder carries a URL
        CycleError: The same node is reachable twice (cycle or shared child)
    """
    _validate_node(node, set())
    logger.debug("Validated subtree rooted at %r", node)


def _validate_node(node: RequestNode, visited: set[int]) -> None:
    if id(node) in visited:
        raise CycleError(node)
    visited.add(id(node))

    if not isinstance(node.name, str) or not node.name:
        raise EmptyNameError(node)

    if node.kind is NodeKind.REQUEST:
        _validate_request(node)
    else:
        _validate_folder(node, visited)


def _validate_request(node: RequestNode) -> None:
    if node._children is not None:
        raise RequestHasChildrenError(node)


def _validate_folder(node: RequestNode, visited: set[int]) -> None:
    if node.url is not None:
        raise FolderHasUrlError(node)
    for child in node._children or ():
        child._parent = node
        child._document = node._document
        _validate_node(child, visited)
