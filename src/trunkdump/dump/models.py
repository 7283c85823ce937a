"""Data models for parsed dump revisions, nodes and filter elements."""

from __future__ import annotations

import dataclasses
import sys
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


class NodeKind(str, Enum):
    DIR = "dir"
    FILE = "file"
    UNKNOWN = "unknown"

    @property
    def label(self) -> str:
        """Human-readable element type ('element' when unknown)."""
        return "element" if self is NodeKind.UNKNOWN else self.value


class NodeAction(str, Enum):
    CHANGE = "change"
    ADD = "add"
    DELETE = "delete"
    UNKNOWN = "unknown"
    MOVE = "move"
    # Add with a copy source, resolved to ADD or MOVE before a Revision is built.
    COPY_OR_MOVE = "copy_or_move"


@dataclass(frozen=True)
class NodeEntry:
    """One file or directory record of a revision.

    ``relative_path`` is ``path`` with the root prefix stripped, or ``None``
    when the node lives outside the root. ``content`` is set iff
    ``text_length > 0``.
    """

    path: str
    relative_path: Optional[str] = None
    kind: NodeKind = NodeKind.UNKNOWN
    action: NodeAction = NodeAction.CHANGE
    text_length: int = 0
    prop_length: int = 0
    content: Optional[bytes] = field(default=None, repr=False)
    copyfrom_path: Optional[str] = None
    copyfrom_relative_path: Optional[str] = None
    ignored: bool = True

    def with_action(self, action: NodeAction) -> "NodeEntry":
        return dataclasses.replace(self, action=action)

    @property
    def has_content(self) -> bool:
        return self.content is not None

    def __str__(self) -> str:
        return f"NodeEntry [{self.relative_path}]"


@dataclass(frozen=True)
class Revision:
    """A retained revision with its metadata and nodes in dump order."""

    number: int
    author: str = ""
    date: str = ""
    timestamp: Optional[datetime] = None
    log: str = ""
    nodes: Tuple[NodeEntry, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def contains_changed_data_for(self, name: str) -> bool:
        """Return True if the first node named *name* adds, changes or moves content."""
        for node in self.nodes:
            if node.relative_path == name:
                return (
                    node.action in (NodeAction.ADD, NodeAction.CHANGE, NodeAction.MOVE)
                    and not node.ignored
                    and node.content is not None
                )
        return False

    def __str__(self) -> str:
        return f"Revision [{self.number}, {len(self.nodes)} file(s)]"


UNBOUNDED_ABOVE = -sys.maxsize - 1
UNBOUNDED_BELOW = sys.maxsize


@dataclass(frozen=True)
class FilterElement:
    """An inclusion/exclusion rule: exact name or prefix, optionally revision-bounded.

    A revision is covered when ``above < revision < below``.
    """

    name: str
    prefix: bool = False
    above: int = UNBOUNDED_ABOVE
    below: int = UNBOUNDED_BELOW

    def matches_name(self, path: str) -> bool:
        if self.prefix:
            return path.startswith(self.name)
        return path == self.name

    def covers(self, revision: int) -> bool:
        return self.above < revision < self.below
