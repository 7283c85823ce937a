"""Verbosity-gated progress and warning output on stderr."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.markup import escape

from trunkdump.dump.models import NodeEntry, Revision


class SilentReporter:
    """Reporter that discards every notification."""

    verbosity = 0

    def revision_imported(self, revision: Revision) -> None:
        pass

    def revision_excluded(self, revision: Revision) -> None:
        pass

    def node_imported(self, revision: int, node: NodeEntry) -> None:
        pass

    def node_excluded(self, revision: int, node: NodeEntry) -> None:
        pass

    def warning(self, message: str) -> None:
        pass


class ConsoleReporter(SilentReporter):
    """Print progress with Rich.

    0: warnings only; 1: one line per revision; 2: also one line per node.
    """

    def __init__(self, verbosity: int = 1, console: Optional[Console] = None) -> None:
        self.verbosity = verbosity
        self.console = console or Console(stderr=True)

    def revision_imported(self, revision: Revision) -> None:
        if self.verbosity >= 1:
            self.console.print(f"[green]Imported[/green] {escape(str(revision))}")

    def revision_excluded(self, revision: Revision) -> None:
        if self.verbosity >= 1:
            self.console.print(f"[dim]Excluded empty {escape(str(revision))}[/dim]")

    def node_imported(self, revision: int, node: NodeEntry) -> None:
        if self.verbosity >= 2:
            self.console.print(f"  [green]Imported[/green] {escape(str(node))}")

    def node_excluded(self, revision: int, node: NodeEntry) -> None:
        if self.verbosity >= 2:
            self.console.print(f'  [dim]Excluded non-relevant "{escape(node.path)}"[/dim]')

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]Warning:[/yellow] {escape(message)}")
