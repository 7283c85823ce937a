"""JSON export of parsed revisions."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Sequence

from trunkdump.dump.models import NodeEntry, Revision


def node_to_dict(node: NodeEntry) -> Dict[str, Any]:
    return {
        "path": node.path,
        "name": node.relative_path,
        "kind": node.kind.value,
        "action": node.action.value,
        "text_length": node.text_length,
        "prop_length": node.prop_length,
        "has_content": node.has_content,
        **({"copyfrom": node.copyfrom_path} if node.copyfrom_path else {}),
        **({"copyfrom_name": node.copyfrom_relative_path} if node.copyfrom_path else {}),
    }


def revision_to_dict(revision: Revision) -> Dict[str, Any]:
    return {
        "revision": revision.number,
        "author": revision.author,
        "date": revision.date,
        "timestamp": revision.timestamp.isoformat() if revision.timestamp else None,
        "log": revision.log,
        "nodes": [node_to_dict(n) for n in revision.nodes],
    }


def to_dict(revisions: Sequence[Revision], *, root: str) -> Dict[str, Any]:
    """Convert parsed revisions to a JSON-serialisable dict."""
    items: List[Dict[str, Any]] = [revision_to_dict(r) for r in revisions]
    return {
        "version": "1.0",
        "root": root,
        "total_revisions": len(items),
        "total_nodes": sum(len(r.nodes) for r in revisions),
        "revisions": items,
    }


def render(revisions: Sequence[Revision], *, root: str) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(revisions, root=root), indent=2)
