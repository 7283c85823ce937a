"""Revision record parser: properties, log trailer, node list, copy/move resolution."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Sequence, Set, Tuple

from trunkdump.dump.context import ParseContext
from trunkdump.dump.errors import DumpError, MalformedHeaderError
from trunkdump.dump.models import NodeAction, NodeEntry, Revision
from trunkdump.dump.node_parser import parse_length, parse_node, split_header
from trunkdump.dump.reader import DumpStream, decode_line

REVISION_MARKER = "Revision-number:"
NODE_MARKER = "Node-path:"
PROPS_END = "PROPS-END"

SVN_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


@dataclass
class RevisionProps:
    author: str = ""
    date: str = ""
    timestamp: Optional[datetime] = None
    log: str = ""


def parse_svn_date(raw: str, tz_offset: timedelta) -> Optional[datetime]:
    """Parse the first 19 characters of an svn:date value and add *tz_offset*.

    svn:date is UTC, yet the value is read as a local wall-clock time and
    shifted by the local zone offset. The result is naive. Returns None if
    the value does not parse.
    """
    try:
        parsed = datetime.strptime(raw[:19], SVN_DATE_FORMAT)
    except ValueError:
        return None
    return parsed + tz_offset


def augment_log(log: str, number: int, author: str, date: str) -> str:
    """Append the ``[svn:<rev>:<author>,<date>]`` trailer to a log message."""
    newline = "\r\n" if "\r" in log else "\n"
    return f"{log}{newline}[svn:{number}:{author},{date}]"


def _read_record(stream: DumpStream, line: str) -> str:
    """Read the ``<len>`` bytes announced by a K/V/D line and the LF after them."""
    name, _, value = line.partition(" ")
    data = stream.read_bytes(parse_length(name, value.strip()))
    stream.read_line()
    return decode_line(data)


def read_properties(stream: DumpStream, number: int, ctx: ParseContext) -> RevisionProps:
    """Parse the revision property block up to a blank line or PROPS-END."""
    props = RevisionProps()
    key = ""
    line = stream.read_line()
    while line and line.upper() != PROPS_END:
        if line.startswith("K "):
            key = _read_record(stream, line)
        elif line.startswith("V "):
            value = _read_record(stream, line)
            lowered = key.lower()
            if lowered.endswith(":log"):
                props.log = value
            elif lowered.endswith(":author"):
                props.author = value
            elif lowered.endswith(":date"):
                props.date = value
                props.timestamp = parse_svn_date(value, ctx.tz_offset)
                if props.timestamp is None:
                    ctx.reporter.warning(f"r{number}: unparsable svn:date {value!r}")
            key = ""
        elif line.startswith("D "):
            # property deletion (dump format 3)
            _read_record(stream, line)
            key = ""
        elif line.startswith((NODE_MARKER, REVISION_MARKER)):
            stream.push_back(line)
            break
        else:
            raise MalformedHeaderError(
                f"unexpected line {line!r} in property block, K/V <length> expected"
            )
        line = stream.read_line()
    return props


def _next_non_blank(stream: DumpStream) -> str:
    line = stream.read_line()
    while not line and not stream.eof:
        line = stream.read_line()
    return line


def resolve_copies(nodes: Sequence[NodeEntry]) -> Tuple[NodeEntry, ...]:
    """Turn every COPY_OR_MOVE node into ADD or MOVE.

    A tentative node becomes MOVE when a later, not yet claimed DELETE node
    has the copy source as its path; that delete node is dropped. Otherwise
    it becomes ADD. Surviving nodes keep their order.
    """
    resolved: Dict[int, NodeAction] = {}
    claimed: Set[int] = set()
    for i, node in enumerate(nodes):
        if node.action is not NodeAction.COPY_OR_MOVE:
            continue
        match = next(
            (
                j
                for j in range(i + 1, len(nodes))
                if j not in claimed
                and nodes[j].action is NodeAction.DELETE
                and nodes[j].path == node.copyfrom_path
            ),
            None,
        )
        if match is None:
            resolved[i] = NodeAction.ADD
        else:
            resolved[i] = NodeAction.MOVE
            claimed.add(match)

    return tuple(
        node.with_action(resolved[i]) if i in resolved else node
        for i, node in enumerate(nodes)
        if i not in claimed
    )


def parse_revision(stream: DumpStream, number: int, ctx: ParseContext) -> Revision:
    """Parse one revision whose ``Revision-number:`` line has just been read.

    The next ``Revision-number:`` line, if any, is left in the stream's
    pushback slot.
    """
    try:
        # rest of the revision header block
        while stream.read_line():
            pass
        props = read_properties(stream, number, ctx)
    except DumpError as exc:
        raise exc.with_context(revision=number)

    log = augment_log(props.log, number, props.author, props.date)

    retained: List[NodeEntry] = []
    line = _next_non_blank(stream)
    while line and not line.startswith(REVISION_MARKER):
        if line.startswith(NODE_MARKER):
            _, path = split_header(line)
            try:
                node = parse_node(stream, path, ctx, number)
            except DumpError as exc:
                raise exc.with_context(revision=number, path=path)
            if not node.ignored and ctx.path_filter.accepts(node.relative_path, number):
                retained.append(node)
                ctx.reporter.node_imported(number, node)
            else:
                ctx.reporter.node_excluded(number, node)
        line = _next_non_blank(stream)
    if line:
        stream.push_back(line)

    return ctx.factory.make_revision(
        number=number,
        author=props.author,
        date=props.date,
        timestamp=props.timestamp,
        log=log,
        nodes=resolve_copies(retained),
    )
