"""Node record parser: headers, then property and text bytes."""

from __future__ import annotations

import posixpath
from typing import Optional, Tuple

from trunkdump.dump.context import ParseContext
from trunkdump.dump.errors import DumpIOError, MalformedHeaderError
from trunkdump.dump.models import NodeAction, NodeEntry, NodeKind
from trunkdump.dump.reader import DumpStream

_KINDS = {"dir": NodeKind.DIR, "file": NodeKind.FILE}


def split_header(line: str) -> Tuple[str, str]:
    """Split ``Name: value`` into its parts. The value keeps inner spaces."""
    name, _, value = line.partition(":")
    if value.startswith(" "):
        value = value[1:]
    return name, value


def parse_length(name: str, value: str) -> int:
    try:
        length = int(value)
    except ValueError:
        raise MalformedHeaderError(f"'{name}: {value}', expected a decimal number") from None
    if length < 0:
        raise MalformedHeaderError(f"'{name}: {value}', length cannot be negative")
    return length


def parse_node(
    stream: DumpStream, path: str, ctx: ParseContext, revision: int
) -> NodeEntry:
    """Parse the node whose ``Node-path:`` line has just been read.

    Returns a NodeEntry built by ``ctx.factory``. Nodes outside the root,
    the root itself, and adds that cannot be placed are returned with
    ``ignored=True``; the caller decides what to retain.

    Adds directly inside the root (``trunk/a.txt``) are kept unless
    ``ctx.drop_top_level_adds`` is set. The classic svndump rule ignores an
    add whose relative path has no parent directory, which also drops the
    first add of every top-level file; set the flag to get that behaviour
    back.
    """
    relative: Optional[str] = ctx.relative(path)
    ignored = not relative
    kind = NodeKind.UNKNOWN
    action = NodeAction.CHANGE
    copyfrom_path: Optional[str] = None
    copyfrom_relative: Optional[str] = None
    text_length = 0
    prop_length = 0

    line = stream.read_line()
    while line:
        name, value = split_header(line)
        if name == "Node-kind":
            kind = _KINDS.get(value.lower(), NodeKind.UNKNOWN)
        elif name == "Node-action":
            verb = value.lower()
            if verb == "delete":
                action = NodeAction.DELETE
            elif verb == "add":
                if not ignored and not (
                    ctx.drop_top_level_adds and not posixpath.dirname(relative)
                ):
                    action = NodeAction.ADD
                else:
                    ignored = True
            elif verb == "change":
                action = NodeAction.CHANGE
            else:
                action = NodeAction.UNKNOWN
        elif name == "Node-copyfrom-path":
            source_relative = ctx.relative(value)
            if source_relative is not None:
                copyfrom_path = value
                copyfrom_relative = source_relative
            else:
                copyfrom_path = copyfrom_relative = None
        elif name == "Text-content-length":
            text_length = parse_length(name, value)
        elif name == "Prop-content-length":
            prop_length = parse_length(name, value)
        line = stream.read_line()

    if copyfrom_path is not None and action is NodeAction.ADD:
        action = NodeAction.COPY_OR_MOVE

    content: Optional[bytes] = None
    try:
        if prop_length > 0:
            stream.skip_bytes(prop_length)
        if text_length > 0:
            content = stream.read_bytes(text_length)
    except DumpIOError as exc:
        if ctx.on_io_error != "drop":
            raise
        ctx.reporter.warning(
            f"r{revision} {path}: dropping node after read failure ({exc.message})"
        )
        ignored = True
        content = None

    following = stream.read_line()
    if following:
        stream.push_back(following)

    return ctx.factory.make_node(
        path=path,
        relative_path=relative,
        kind=kind,
        action=action,
        text_length=text_length,
        prop_length=prop_length,
        content=content,
        copyfrom_path=copyfrom_path,
        copyfrom_relative_path=copyfrom_relative,
        ignored=ignored,
    )
