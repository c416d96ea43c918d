"""
Inverse actions recorded by the mutation engine.

Each action is an immutable description of the structural operation that
reverts a mutation, rather than a closure over live state. The mutation
engine's ``replay`` is the single interpreter for them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from attrs import field, frozen

if TYPE_CHECKING:
    from requesttree.core.node import RequestNode


@frozen
class InsertAt:
    """Insert (or move back) ``node`` into ``parent`` at ``index``."""

    parent: RequestNode = field(repr=lambda node: node.name)
    index: int
    node: RequestNode = field(repr=lambda node: node.name)


@frozen
class RemoveAt:
    """Remove whichever child of ``parent`` sits at ``index``."""

    parent: RequestNode = field(repr=lambda node: node.name)
    index: int


@frozen
class RenameTo:
    node: RequestNode = field(repr=lambda node: node.name)
    name: str


@frozen
class SetUrlTo:
    node: RequestNode = field(repr=lambda node: node.name)
    url: str | None


InverseAction = InsertAt | RemoveAt | RenameTo | SetUrlTo
