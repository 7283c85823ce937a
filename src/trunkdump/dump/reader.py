"""Sequential line and byte access over a dump stream, with one-line pushback."""

from __future__ import annotations

from typing import BinaryIO, Optional

from trunkdump.dump.errors import DumpIOError, TruncatedInputError

_SKIP_CHUNK = 64 * 1024


def decode_line(raw: bytes) -> str:
    """Decode *raw* as UTF-8, replacing undecodable bytes instead of failing."""
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return raw.decode("utf-8", errors="replace")


class DumpStream:
    """Cursor over a binary source.

    Holds an end-of-stream flag that is never cleared once set, and a single
    pushback slot. Pushing back a second line before reading overwrites the
    first one.
    """

    def __init__(self, source: BinaryIO) -> None:
        self._source = source
        self._pushed: Optional[str] = None
        self._eof = False
        self.line_number = 0

    @property
    def eof(self) -> bool:
        return self._eof

    def _read(self, size: int) -> bytes:
        try:
            return self._source.read(size)
        except OSError as exc:
            raise DumpIOError(f"read failed at line {self.line_number}: {exc}") from exc

    def read_line(self) -> str:
        """Return the next line without its LF terminator.

        Returns '' and sets the EOF flag when the source is exhausted before
        any byte is read.
        """
        if self._pushed is not None:
            line, self._pushed = self._pushed, None
            return line

        try:
            raw = self._source.readline()
        except OSError as exc:
            raise DumpIOError(f"read failed at line {self.line_number}: {exc}") from exc
        if not raw:
            self._eof = True
            return ""
        self.line_number += 1
        if raw.endswith(b"\n"):
            raw = raw[:-1]
        return decode_line(raw)

    def push_back(self, line: str) -> None:
        self._pushed = line

    def read_bytes(self, n: int) -> bytes:
        """Return exactly *n* bytes. Raises TruncatedInputError on a short read."""
        data = b""
        while len(data) < n:
            chunk = self._read(n - len(data))
            if not chunk:
                break
            data += chunk
        if len(data) != n:
            self._eof = True
            raise TruncatedInputError(
                f"expected {n} bytes after line {self.line_number}, got {len(data)}"
            )
        self.line_number += data.count(b"\n")
        return data

    def skip_bytes(self, n: int) -> None:
        """Discard exactly *n* bytes without decoding them."""
        remaining = n
        while remaining > 0:
            chunk = self._read(min(remaining, _SKIP_CHUNK))
            if not chunk:
                self._eof = True
                raise TruncatedInputError(
                    f"expected to skip {n} bytes after line {self.line_number}, "
                    f"only {n - remaining} available"
                )
            self.line_number += chunk.count(b"\n")
            remaining -= len(chunk)
