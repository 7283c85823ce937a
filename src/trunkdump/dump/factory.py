"""Construction strategy for revisions and nodes.

Parsers never instantiate model classes directly; they hand the parsed
fields to a factory. Converters that need richer objects pass their own
factory (a subclass, or any object with the same two methods) to
``parse_dump``.
"""

from __future__ import annotations

from typing import Any

from trunkdump.dump.models import NodeEntry, Revision


class ModelFactory:
    """Builds plain ``Revision`` and ``NodeEntry`` objects."""

    revision_class = Revision
    node_class = NodeEntry

    def make_node(self, **fields: Any) -> NodeEntry:
        return self.node_class(**fields)

    def make_revision(self, **fields: Any) -> Revision:
        return self.revision_class(**fields)


DEFAULT_FACTORY = ModelFactory()
