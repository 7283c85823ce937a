"""Per-run settings shared by the revision and node parsers."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Optional

from trunkdump.dump.factory import DEFAULT_FACTORY, ModelFactory
from trunkdump.filters.path_filter import PathFilter

DEFAULT_ROOT = "trunk/"

IO_ERROR_POLICIES = ("raise", "drop")


def normalize_root(root: Optional[str]) -> str:
    """Default to ``trunk/`` and make sure the prefix ends with a separator."""
    if not root:
        root = DEFAULT_ROOT
    if not root.endswith("/"):
        root += "/"
    return root


def local_utc_offset() -> timedelta:
    """Offset of the local zone from UTC right now, DST included."""
    return timedelta(seconds=time.localtime().tm_gmtoff)


@dataclass
class ParseContext:
    root: str = DEFAULT_ROOT
    path_filter: PathFilter = field(default_factory=PathFilter)
    factory: ModelFactory = DEFAULT_FACTORY
    reporter: Any = None
    tz_offset: timedelta = field(default_factory=local_utc_offset)
    on_io_error: str = "raise"
    drop_top_level_adds: bool = False
    cancel_event: Optional[threading.Event] = None

    def __post_init__(self) -> None:
        self.root = normalize_root(self.root)
        if self.on_io_error not in IO_ERROR_POLICIES:
            raise ValueError(
                f"on_io_error must be one of {', '.join(IO_ERROR_POLICIES)}, "
                f"not {self.on_io_error!r}"
            )
        if self.reporter is None:
            from trunkdump.output.progress import SilentReporter

            self.reporter = SilentReporter()

    def relative(self, path: str) -> Optional[str]:
        """Strip the root prefix, or return None if *path* is outside the root."""
        if path.startswith(self.root):
            return path[len(self.root):]
        return None
