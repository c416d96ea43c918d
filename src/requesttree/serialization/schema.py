"""
Wire schema for serialized requesttree documents.

These pydantic models only describe the shape of the JSON. Structural rules
(non-empty names, requests without children, folders without URLs) are left
to the validator so that a well-formed but invalid document fails with a
structural error rather than a parse error.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from requesttree.core.types import NodeKind


class NodeRecord(BaseModel):
    """Serialized form of one node and its subtree."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(min_length=1)
    kind: NodeKind
    name: str
    children: list[NodeRecord] | None = None
    url: str | None = None

    def walk(self):
        """Yield this record and all nested records pre-order."""
        yield self
        for child in self.children or ():
            yield from child.walk()


class DocumentRecord(BaseModel):
    """Serialized form of a whole document."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    root_folder: NodeRecord = Field(alias="rootFolder")
