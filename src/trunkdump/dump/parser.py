"""Top-level dump parser: yields retained revisions in dump order.

Usage::

    parser = DumpParser(ParseContext(root="trunk"))
    with open("repo.dump", "rb") as fd:
        for revision in parser.parse(fd):
            ...

or simply ``parse_dump("repo.dump", "trunk")``.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from datetime import timedelta
from pathlib import Path
from typing import BinaryIO, Generator, Iterable, Iterator, List, Optional, Union

from trunkdump.dump.context import ParseContext, local_utc_offset
from trunkdump.dump.errors import MalformedHeaderError, ParseCancelled
from trunkdump.dump.factory import DEFAULT_FACTORY, ModelFactory
from trunkdump.dump.models import Revision
from trunkdump.dump.reader import DumpStream
from trunkdump.dump.revision_parser import REVISION_MARKER, parse_revision
from trunkdump.filters.path_filter import FilterSpec, PathFilter

Source = Union[str, Path, BinaryIO]


def revision_number(line: str) -> int:
    """Extract the integer from a ``Revision-number:`` line."""
    value = line[len(REVISION_MARKER):].strip()
    try:
        return int(value)
    except ValueError:
        raise MalformedHeaderError(
            f"'{REVISION_MARKER} {value}', expected a decimal revision number"
        ) from None


@contextmanager
def _open_source(source: Source) -> Iterator[BinaryIO]:
    """Open paths in binary mode; pass file objects through unclosed."""
    if isinstance(source, (str, Path)):
        with open(source, "rb") as fd:
            yield fd
    else:
        yield source


class DumpParser:
    """Parse a dump stream into Revision objects."""

    def __init__(self, context: Optional[ParseContext] = None) -> None:
        self.context = context or ParseContext()

    def parse(self, source: Source) -> Generator[Revision, None, None]:
        """Yield every non-empty revision of *source* in dump order."""
        with _open_source(source) as fd:
            yield from self.parse_stream(DumpStream(fd))

    def parse_stream(self, stream: DumpStream) -> Generator[Revision, None, None]:
        ctx = self.context

        # Anything before the first revision (format version, UUID) is skipped.
        line = stream.read_line()
        while not line.startswith(REVISION_MARKER):
            if stream.eof:
                return
            line = stream.read_line()

        while line.startswith(REVISION_MARKER):
            number = revision_number(line)
            if ctx.cancel_event is not None and ctx.cancel_event.is_set():
                raise ParseCancelled("parse cancelled", revision=number)
            revision = parse_revision(stream, number, ctx)
            if revision.is_empty:
                ctx.reporter.revision_excluded(revision)
            else:
                ctx.reporter.revision_imported(revision)
                yield revision

            line = stream.read_line()
            while not line and not stream.eof:
                line = stream.read_line()


def _build_context(
    root: Optional[str],
    exclude: Optional[Iterable[FilterSpec]],
    include: Optional[Iterable[FilterSpec]],
    verbosity: int,
    factory: Optional[ModelFactory],
    reporter,
    tz_offset: Optional[timedelta],
    cancel_event: Optional[threading.Event],
    on_io_error: str,
    drop_top_level_adds: bool,
) -> ParseContext:
    if reporter is None and verbosity > 0:
        from trunkdump.output.progress import ConsoleReporter

        reporter = ConsoleReporter(verbosity)
    return ParseContext(
        root=root,
        path_filter=PathFilter(exclude=exclude, include=include),
        factory=factory or DEFAULT_FACTORY,
        reporter=reporter,
        tz_offset=local_utc_offset() if tz_offset is None else tz_offset,
        on_io_error=on_io_error,
        drop_top_level_adds=drop_top_level_adds,
        cancel_event=cancel_event,
    )


def iter_revisions(
    source: Source,
    root: Optional[str] = "trunk/",
    exclude: Optional[Iterable[FilterSpec]] = None,
    include: Optional[Iterable[FilterSpec]] = None,
    *,
    verbosity: int = 0,
    factory: Optional[ModelFactory] = None,
    reporter=None,
    tz_offset: Optional[timedelta] = None,
    cancel_event: Optional[threading.Event] = None,
    on_io_error: str = "raise",
    drop_top_level_adds: bool = False,
) -> Generator[Revision, None, None]:
    """Yield retained revisions one at a time. See ``parse_dump`` for arguments."""
    ctx = _build_context(
        root, exclude, include, verbosity, factory, reporter,
        tz_offset, cancel_event, on_io_error, drop_top_level_adds,
    )
    yield from DumpParser(ctx).parse(source)


def parse_dump(
    source: Source,
    root: Optional[str] = "trunk/",
    exclude: Optional[Iterable[FilterSpec]] = None,
    include: Optional[Iterable[FilterSpec]] = None,
    *,
    verbosity: int = 0,
    factory: Optional[ModelFactory] = None,
    reporter=None,
    tz_offset: Optional[timedelta] = None,
    cancel_event: Optional[threading.Event] = None,
    on_io_error: str = "raise",
    drop_top_level_adds: bool = False,
) -> List[Revision]:
    """Parse a whole dump and return its non-empty revisions in order.

    *source* is a path or a binary file object. *root* defaults to
    ``trunk/`` and always ends with ``/``. *exclude* / *include* hold filter
    tokens or FilterElement objects; empty lists count as absent.
    *tz_offset* is added to every svn:date (default: the local offset, taken
    once per call). *on_io_error* is ``"raise"`` or ``"drop"`` (skip the node
    being read and keep going). Raises DumpError subclasses on malformed or
    truncated input.
    """
    return list(
        iter_revisions(
            source,
            root,
            exclude,
            include,
            verbosity=verbosity,
            factory=factory,
            reporter=reporter,
            tz_offset=tz_offset,
            cancel_event=cancel_event,
            on_io_error=on_io_error,
            drop_top_level_adds=drop_top_level_adds,
        )
    )
