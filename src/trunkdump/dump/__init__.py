"""Dump parsing layer: reader, models, node/revision/dump parsers."""

from trunkdump.dump.models import (
    FilterElement,
    NodeAction,
    NodeEntry,
    NodeKind,
    Revision,
)
from trunkdump.dump.errors import (
    DumpError,
    DumpIOError,
    MalformedHeaderError,
    ParseCancelled,
    TruncatedInputError,
)
from trunkdump.dump.factory import DEFAULT_FACTORY, ModelFactory
from trunkdump.dump.reader import DumpStream
from trunkdump.dump.context import ParseContext, local_utc_offset, normalize_root
from trunkdump.dump.parser import DumpParser, iter_revisions, parse_dump

__all__ = [
    "DEFAULT_FACTORY",
    "DumpError",
    "DumpIOError",
    "DumpParser",
    "DumpStream",
    "FilterElement",
    "MalformedHeaderError",
    "ModelFactory",
    "NodeAction",
    "NodeEntry",
    "NodeKind",
    "ParseCancelled",
    "ParseContext",
    "Revision",
    "TruncatedInputError",
    "iter_revisions",
    "local_utc_offset",
    "normalize_root",
    "parse_dump",
]
