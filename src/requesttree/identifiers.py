"""
Node identifier generation.

Identifiers are opaque text. The default generator hands out random UUIDs, so
an identifier is never reused within (or across) processes. Hosts may inject
their own generator wherever an ``id_factory`` is accepted.
"""

from uuid import uuid4


def new_node_id() -> str:
    """Return a fresh, never reused node identifier."""
    return str(uuid4()).upper()


class SequentialIds:
    """Deterministic id generator for fixtures and reproducible documents.

    Produces ``"<prefix>-1"``, ``"<prefix>-2"``, ... Unique only within the
    lifetime of one instance.
    """

    def __init__(self, prefix: str = "node"):
        self.prefix = prefix
        self._counter = 0

    def __call__(self) -> str:
        self._counter += 1
        return f"{self.prefix}-{self._counter}"
