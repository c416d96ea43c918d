"""
Node model for the requesttree document.

A ``RequestNode`` is either a folder (an ordered container) or a request (a
leaf carrying a URL). Children are owned by their folder; ``parent`` and
``document`` are derived back-references that only the validator and the
mutation engine rewrite.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from requesttree import config
from requesttree.core.types import NodeKind
from requesttree.identifiers import new_node_id

if TYPE_CHECKING:
    from requesttree.document import DocumentCore
    from requesttree.observer.protocol import NodeObserver


class RequestNode:
    """
    A folder or request in the document tree.

    The constructor performs no validation so that decoded (or hand-built)
    trees can be checked in one place by ``requesttree.core.validation``.
    A new node is detached: it has neither parent nor document until the
    mutation engine inserts it somewhere.

    Params:
        kind: NodeKind or its serialized value
        name: Display name, defaults to the configured default for the kind
        url: Request URL payload
        children: Initial children (forward edges only)
        node_id: Identifier, a fresh one is generated when omitted
    """

    def __init__(
        self,
        kind: NodeKind | str,
        name: str | None = None,
        url: str | None = None,
        children: Iterable[RequestNode] | None = None,
        node_id: str | None = None,
    ):
        self._id = node_id if node_id is not None else new_node_id()
        self._kind = NodeKind(kind)
        self._name = name if name is not None else config.get_settings().default_name(self._kind)
        self._url = url
        if self._kind is NodeKind.FOLDER:
            self._children: list[RequestNode] | None = list(children or ())
        else:
            # Requests keep "no collection" distinct from any collection at all
            self._children = None if children is None else list(children)
        self._parent: RequestNode | None = None
        self._document: DocumentCore | None = None
        self.observer: NodeObserver | None = None

    @property
    def id(self) -> str:
        return self._id

    @property
    def kind(self) -> NodeKind:
        return self._kind

    @property
    def name(self) -> str:
        return self._name

    @property
    def url(self) -> str | None:
        return self._url

    @property
    def children(self) -> tuple[RequestNode, ...]:
        """Read-only view of the ordered children. Empty for requests."""
        if self._kind is NodeKind.REQUEST or not self._children:
            return ()
        return tuple(self._children)

    @property
    def parent(self) -> RequestNode | None:
        return self._parent

    @property
    def document(self) -> DocumentCore | None:
        return self._document

    @property
    def is_folder(self) -> bool:
        return self._kind is NodeKind.FOLDER

    @property
    def is_request(self) -> bool:
        return self._kind is NodeKind.REQUEST

    @property
    def is_root(self) -> bool:
        """True for the root folder of the document this node belongs to."""
        return self._document is not None and self._document.root_folder is self

    @property
    def index_in_parent(self) -> int | None:
        """Position among the parent's children, ``None`` without a parent."""
        if self._parent is None:
            return None
        return self._parent.index_of(self)

    def index_of(self, child: RequestNode) -> int:
        """
        Locate a direct child by identity.

        Params:
            child: Node expected among this folder's children

        Returns:
            The child's index

        Raises:
            ValueError: If ``child`` is not a direct child of this node
        """
        for index, candidate in enumerate(self._children or ()):
            if candidate is child:
                return index
        raise ValueError(f"{child!r} is not a child of {self!r}")

    def child_at(self, index: int) -> RequestNode:
        return self.children[index]

    def depth_first(self) -> Iterator[RequestNode]:
        """Traverse the subtree pre-order, yielding self then descendants."""
        yield self
        for child in self.children:
            yield from child.depth_first()

    def ancestors(self) -> Iterator[RequestNode]:
        """Yield parent, grandparent, ... up to the root."""
        node = self._parent
        while node is not None:
            yield node
            node = node._parent

    def is_descendant_of(self, other: RequestNode) -> bool:
        return any(ancestor is other for ancestor in self.ancestors())

    def find(self, node_id: str) -> RequestNode | None:
        """Find a node by id within this subtree."""
        for node in self.depth_first():
            if node.id == node_id:
                return node
        return None

    def path(self) -> list[str]:
        """Names from the root down to this node."""
        names = [ancestor.name for ancestor in self.ancestors()]
        names.reverse()
        names.append(self._name)
        return names

    def _adopt_document(self, document: DocumentCore | None) -> None:
        """Propagate the document back-reference through the subtree and
        recompute descendant parent edges from the children sequences."""
        for node in self.depth_first():
            node._document = document
            for child in node.children:
                child._parent = node

    def __repr__(self) -> str:
        return f"RequestNode(kind={self._kind.value!r}, name={self._name!r}, id={self._id!r})"
