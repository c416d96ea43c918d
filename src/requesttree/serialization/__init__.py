"""
Deterministic encode/decode of requesttree documents and subtrees.
"""

from requesttree.serialization.codec import (
    decode_document,
    decode_node,
    encode_document,
    encode_node,
    node_to_record,
    record_to_node,
)
from requesttree.serialization.schema import DocumentRecord, NodeRecord

__all__ = [
    "NodeRecord",
    "DocumentRecord",
    "encode_document",
    "decode_document",
    "encode_node",
    "decode_node",
    "node_to_record",
    "record_to_node",
]
