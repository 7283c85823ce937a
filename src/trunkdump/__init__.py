"""trunkdump: parse Subversion dumps into a revision model for conversion."""

__version__ = "0.92.0"

from trunkdump.dump import (  # noqa: E402
    DumpError,
    FilterElement,
    ModelFactory,
    NodeAction,
    NodeEntry,
    NodeKind,
    Revision,
    iter_revisions,
    parse_dump,
)
from trunkdump.filters import PathFilter, parse_filter_token  # noqa: E402

__all__ = [
    "DumpError",
    "FilterElement",
    "ModelFactory",
    "NodeAction",
    "NodeEntry",
    "NodeKind",
    "PathFilter",
    "Revision",
    "__version__",
    "iter_revisions",
    "parse_dump",
    "parse_filter_token",
]
