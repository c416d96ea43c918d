"""
Canonical JSON codec for requesttree documents and subtrees.

Encoding validates first and writes sorted keys with a fixed indentation, so
the same tree always produces the same bytes. Decoding parses against the
wire schema, rebuilds the forward edges, then runs the validator, which
rebuilds every back-reference. A document that fails any step is rejected as a
whole.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from requesttree.config import DocumentSettings, get_settings
from requesttree.core.node import RequestNode
from requesttree.core.types import NodeKind
from requesttree.core.validation import validate
from requesttree.exceptions import (
    DocumentFormatError,
    DuplicateNodeIdError,
    InvalidRootError,
    StructuralError,
)
from requesttree.serialization.schema import DocumentRecord, NodeRecord

if TYPE_CHECKING:
    from requesttree.document import DocumentCore
    from requesttree.undo.manager import UndoManager

logger = logging.getLogger(__name__)


def node_to_record(node: RequestNode) -> NodeRecord:
    """Convert a live subtree to its wire record. Empty child lists are omitted."""
    children = None
    if node.kind is NodeKind.FOLDER and node.children:
        children = [node_to_record(child) for child in node.children]
    url = node.url if node.kind is NodeKind.REQUEST else None
    return NodeRecord(id=node.id, kind=node.kind, name=node.name, children=children, url=url)


def record_to_node(record: NodeRecord) -> RequestNode:
    """Build a detached subtree with forward edges only; back-references come from ``validate``."""
    children = None
    if record.children is not None:
        children = [record_to_node(child) for child in record.children]
    return RequestNode(
        record.kind,
        name=record.name,
        url=record.url,
        children=children,
        node_id=record.id,
    )


def _dumps(payload: dict, indent: int) -> bytes:
    return json.dumps(payload, sort_keys=True, indent=indent or None, ensure_ascii=False).encode("utf-8")


def _check_unique_ids(record: NodeRecord) -> None:
    seen: set[str] = set()
    for item in record.walk():
        if item.id in seen:
            raise DuplicateNodeIdError(item.id)
        seen.add(item.id)


def encode_node(node: RequestNode, indent: int | None = None) -> bytes:
    """
    Encode a single subtree.

    Params:
        node: Subtree root, validated before encoding
        indent: JSON indentation, defaults to the configured ``json_indent``

    Returns:
        UTF-8 encoded canonical JSON
    """
    validate(node)
    indent = get_settings().json_indent if indent is None else indent
    payload = node_to_record(node).model_dump(mode="json", exclude_none=True)
    return _dumps(payload, indent)


def decode_node(data: bytes | str) -> RequestNode:
    """
    Decode and validate a single detached subtree.

    Raises:
        DocumentFormatError: If the bytes are not a syntactically valid node
        StructuralError: If the subtree violates a structural invariant
    """
    try:
        record = NodeRecord.model_validate_json(data)
    except ValidationError as exc:
        raise DocumentFormatError(str(exc)) from exc
    _check_unique_ids(record)
    node = record_to_node(record)
    validate(node)
    return node


def encode_document(document: DocumentCore) -> bytes:
    """
    Validate and encode a whole document.

    Raises:
        StructuralError: If the tree violates a structural invariant
    """
    document.validate()
    record = DocumentRecord(root_folder=node_to_record(document.root_folder))
    payload = record.model_dump(mode="json", by_alias=True, exclude_none=True)
    data = _dumps(payload, document.settings.json_indent)
    logger.debug("Encoded document %r (%d bytes)", document.root_folder.name, len(data))
    return data


def decode_document(
    data: bytes | str,
    settings: DocumentSettings | None = None,
    undo_manager: UndoManager | None = None,
) -> DocumentCore:
    """
    Decode bytes into a validated, ready-to-use document.

    Params:
        data: Serialized document
        settings: Settings for the new document, defaults to the process-wide ones
        undo_manager: Undo manager to attach, a fresh one when omitted

    Returns:
        The decoded DocumentCore

    Raises:
        DocumentFormatError: If the input is not valid JSON or does not match the schema
        DuplicateNodeIdError: If two nodes share an id
        InvalidRootError: If the root is not a folder
        StructuralError: For any other invariant violation found by the validator
    """
    from requesttree.document import DocumentCore

    try:
        record = DocumentRecord.model_validate_json(data)
    except ValidationError as exc:
        logger.warning("Rejected malformed document: %d schema errors", exc.error_count())
        raise DocumentFormatError(str(exc)) from exc

    try:
        if record.root_folder.kind is not NodeKind.FOLDER:
            raise InvalidRootError(record.root_folder.kind.value)
        _check_unique_ids(record.root_folder)
        root = record_to_node(record.root_folder)
        # The constructor validates the tree and rebuilds every back-reference
        document = DocumentCore(settings=settings, root_folder=root, undo_manager=undo_manager)
    except StructuralError as exc:
        logger.warning("Rejected structurally invalid document: %s", exc)
        raise
    logger.debug("Decoded document %r", root.name)
    return document
