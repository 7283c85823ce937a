"""Shared test fixtures: sample dumps and a dump builder."""

from __future__ import annotations

import io
import textwrap
from pathlib import Path
from typing import Dict, List, Optional

import pytest


def _props_block(props: Dict[str, str]) -> bytes:
    out = b""
    for key, value in props.items():
        kb, vb = key.encode(), value.encode()
        out += b"K %d\n%s\nV %d\n%s\n" % (len(kb), kb, len(vb), vb)
    return out + b"PROPS-END\n"


def make_node(
    path: str,
    action: str,
    kind: Optional[str] = "file",
    text: Optional[bytes] = None,
    copyfrom: Optional[str] = None,
    props: Optional[Dict[str, str]] = None,
) -> bytes:
    """Build one node record the way svnadmin lays it out."""
    lines = [f"Node-path: {path}"]
    if kind:
        lines.append(f"Node-kind: {kind}")
    lines.append(f"Node-action: {action}")
    if copyfrom:
        lines.append("Node-copyfrom-rev: 1")
        lines.append(f"Node-copyfrom-path: {copyfrom}")
    prop_bytes = _props_block(props) if props is not None else b""
    if props is not None:
        lines.append(f"Prop-content-length: {len(prop_bytes)}")
    if text is not None:
        lines.append(f"Text-content-length: {len(text)}")
    if props is not None or text is not None:
        lines.append(f"Content-length: {len(prop_bytes) + len(text or b'')}")
    record = ("\n".join(lines) + "\n\n").encode()
    if props is not None or text is not None:
        record += prop_bytes + (text or b"") + b"\n\n"
    else:
        record += b"\n"
    return record


def make_revision(
    number: int,
    nodes: List[bytes] = (),
    author: str = "alice",
    date: str = "2005-11-03T10:15:30.000000Z",
    log: str = "commit",
) -> bytes:
    props = _props_block({"svn:author": author, "svn:date": date, "svn:log": log})
    header = (
        f"Revision-number: {number}\n"
        f"Prop-content-length: {len(props)}\n"
        f"Content-length: {len(props)}\n\n"
    ).encode()
    return header + props + b"\n" + b"".join(nodes)


def make_dump(*revisions: bytes) -> bytes:
    return (
        b"SVN-fs-dump-format-version: 2\n\n"
        b"UUID: 0327ee65-5647-43ce-affc-0d4a17cd70ef\n\n"
        + b"".join(revisions)
    )


@pytest.fixture
def node():
    return make_node


@pytest.fixture
def revision():
    return make_revision


@pytest.fixture
def dump():
    return make_dump


@pytest.fixture
def sample_dump_basic() -> bytes:
    """Revision 0 (props only), r1 adds trunk/a.txt and trunk/, r2 deletes a.txt."""
    return textwrap.dedent("""\
        SVN-fs-dump-format-version: 2

        UUID: 0327ee65-5647-43ce-affc-0d4a17cd70ef

        Revision-number: 0
        Prop-content-length: 56
        Content-length: 56

        K 8
        svn:date
        V 27
        2005-11-03T10:00:00.000000Z
        PROPS-END

        Revision-number: 1
        Prop-content-length: 114
        Content-length: 114

        K 10
        svn:author
        V 5
        alice
        K 8
        svn:date
        V 27
        2005-11-03T10:15:30.000000Z
        K 7
        svn:log
        V 8
        Add file
        PROPS-END

        Node-path: trunk/a.txt
        Node-kind: file
        Node-action: add
        Prop-content-length: 10
        Text-content-length: 5
        Content-length: 15

        PROPS-END
        hello

        Node-path: trunk/
        Node-kind: dir
        Node-action: add
        Prop-content-length: 10
        Content-length: 10

        PROPS-END


        Revision-number: 2
        Prop-content-length: 117
        Content-length: 117

        K 10
        svn:author
        V 3
        bob
        K 8
        svn:date
        V 27
        2005-11-04T08:00:00.000000Z
        K 7
        svn:log
        V 11
        Remove file
        PROPS-END

        Node-path: trunk/a.txt
        Node-action: delete


    """).encode()


@pytest.fixture
def sample_dump_move(node, revision, dump) -> bytes:
    """r1 adds trunk/src/old.c, r2 renames it to trunk/src/new.c."""
    return dump(
        revision(1, [
            node("trunk/src", "add", kind="dir", props={}),
            node("trunk/src/old.c", "add", text=b"int x;\n"),
        ]),
        revision(2, [
            node("trunk/src/new.c", "add", copyfrom="trunk/src/old.c", text=b"int x;\n"),
            node("trunk/src/old.c", "delete", kind=None),
        ], log="rename"),
    )


@pytest.fixture
def as_stream():
    """Wrap bytes in a binary file object."""
    return io.BytesIO


@pytest.fixture
def dump_file(tmp_path: Path, sample_dump_basic: bytes) -> Path:
    path = tmp_path / "repo.dump"
    path.write_bytes(sample_dump_basic)
    return path
