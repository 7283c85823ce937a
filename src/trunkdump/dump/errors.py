"""Dump parsing errors.

Header and length problems and truncated input abort the whole parse.
Invalid UTF-8 is never an error: lines are decoded lossily.
"""

from __future__ import annotations

from typing import Optional


class DumpError(Exception):
    """Parent class for dump parsing errors, with revision/node context."""

    def __init__(
        self,
        message: str,
        *,
        revision: Optional[int] = None,
        path: Optional[str] = None,
    ) -> None:
        self.message = message
        self.revision = revision
        self.path = path
        super().__init__(self._format())

    def _format(self) -> str:
        prefix = ""
        if self.revision is not None:
            prefix += f"REVISION {self.revision}: "
        if self.path is not None:
            prefix += f"NODE {self.path}: "
        return prefix + self.message

    def with_context(
        self, *, revision: Optional[int] = None, path: Optional[str] = None
    ) -> "DumpError":
        """Fill in missing context and return self for re-raising."""
        if self.revision is None and revision is not None:
            self.revision = revision
        if self.path is None and path is not None:
            self.path = path
        self.args = (self._format(),)
        return self

    def __str__(self) -> str:
        return self._format()


class MalformedHeaderError(DumpError):
    """An expected header line is missing or an integer field does not parse."""


class TruncatedInputError(DumpError):
    """The stream ended before a declared property/content length was read."""


class DumpIOError(DumpError):
    """The underlying byte source failed."""


class ParseCancelled(DumpError):
    """The caller requested cancellation between revisions."""
